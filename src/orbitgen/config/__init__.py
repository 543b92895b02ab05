"""Scene configuration loading."""

from .loader import PlanetConfig, SceneConfigLoader

__all__ = ["PlanetConfig", "SceneConfigLoader"]
