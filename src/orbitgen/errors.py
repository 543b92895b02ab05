"""Exception types raised by orbitgen."""


class OrbitgenError(Exception):
    """Base class for all orbitgen errors."""


class MeshError(OrbitgenError, ValueError):
    """A mesh violates its shape or index-bound invariants."""


class ConfigError(OrbitgenError, ValueError):
    """A scene configuration document is malformed."""
