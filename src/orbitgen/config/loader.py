"""YAML loader for orbital scene definitions."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from ..errors import ConfigError
from ..physics.orbit import DIRECTIONS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlanetConfig:
    """Declarative description of one orbiting body.

    Attributes:
        name: Display name
        orbital_period: Length of the body's year, in Earth days
        orbital_radius: Distance from the origin, in astronomical units
        radius: Body radius relative to Earth
        texture: Path to the surface texture image
        direction: Orbit direction, ``"cw"`` or ``"ccw"``
        day_length: Length of the body's day, in Earth days
        is_giant: Giants are drawn with a compressed (square-root) size
    """

    name: str
    orbital_period: float
    orbital_radius: float
    radius: float
    texture: Path | None = None
    direction: str = "cw"
    day_length: float = 1.0
    is_giant: bool = False


_NUMBER = (int, float)

# YAML key -> (PlanetConfig field, expected type, required)
_FIELDS = {
    "name": ("name", str, True),
    "year_dur_re": ("orbital_period", _NUMBER, True),
    "R_au": ("orbital_radius", _NUMBER, True),
    "radius_re": ("radius", _NUMBER, True),
    "texture_path": ("texture", str, False),
    "move_direction": ("direction", str, False),
    "day_dur_re": ("day_length", _NUMBER, False),
    "is_giant": ("is_giant", bool, False),
}


class SceneConfigLoader:
    """Loads planet lists from YAML (or JSON) files.

    YAML format:
    ```yaml
    planets:
      - name: Earth
        year_dur_re: 365
        R_au: 1.0
        radius_re: 1.0
        texture_path: textures/earth.jpg
        move_direction: cw
        day_dur_re: 1.0
        is_giant: false
    ```

    Relative texture paths are resolved against the config file's directory.
    Any malformed entry aborts loading with a ConfigError.
    """

    def load(self, path: Path | str) -> list[PlanetConfig]:
        """Load and validate a scene configuration file.

        Args:
            path: Path to the YAML or JSON document

        Returns:
            One PlanetConfig per entry, in file order

        Raises:
            ConfigError: If the file is missing, unparsable or invalid
        """
        path = Path(path)
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except OSError as exc:
            raise ConfigError(f"Cannot read scene config {path}: {exc}") from exc
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

        planets = self.parse(data, base_dir=path.parent)
        logger.info("Loaded %d planets from %s", len(planets), path)
        return planets

    def parse(
        self, data: Any, base_dir: Path | None = None
    ) -> list[PlanetConfig]:
        """Validate an already-parsed document.

        Args:
            data: Mapping with a ``planets`` list
            base_dir: Directory that relative texture paths are resolved against

        Raises:
            ConfigError: On the first invalid entry
        """
        if not isinstance(data, dict) or "planets" not in data:
            raise ConfigError("Scene config must be a mapping with a 'planets' list")

        entries = data["planets"]
        if not isinstance(entries, list) or not entries:
            raise ConfigError("'planets' must be a non-empty list")

        return [
            self._parse_planet(entry, index, base_dir)
            for index, entry in enumerate(entries)
        ]

    def _parse_planet(
        self, entry: Any, index: int, base_dir: Path | None
    ) -> PlanetConfig:
        """Parse one planet entry."""
        if not isinstance(entry, dict):
            raise ConfigError(f"Planet #{index} must be a mapping, got {type(entry).__name__}")

        label = f"Planet #{index} ({entry.get('name', 'unnamed')})"

        unknown = set(entry) - set(_FIELDS)
        if unknown:
            raise ConfigError(f"{label}: unknown fields {sorted(unknown)}")

        values: dict[str, Any] = {}
        for key, (field_name, expected, required) in _FIELDS.items():
            if key not in entry:
                if required:
                    raise ConfigError(f"{label}: missing required field '{key}'")
                continue
            value = entry[key]
            # bool is an int subclass; reject it for numeric fields
            if not isinstance(value, expected) or (
                expected is not bool and isinstance(value, bool)
            ):
                raise ConfigError(
                    f"{label}: field '{key}' has invalid value {value!r}"
                )
            if expected is _NUMBER and not math.isfinite(value):
                raise ConfigError(
                    f"{label}: field '{key}' must be finite, got {value!r}"
                )
            values[field_name] = value

        for field_name, key in (
            ("orbital_period", "year_dur_re"),
            ("radius", "radius_re"),
        ):
            if not values[field_name] > 0:
                raise ConfigError(f"{label}: '{key}' must be positive")
        if values["orbital_radius"] < 0:
            raise ConfigError(f"{label}: 'R_au' must not be negative")
        if "day_length" in values and not values["day_length"] > 0:
            raise ConfigError(f"{label}: 'day_dur_re' must be positive")

        direction = values.get("direction", "cw")
        if direction not in DIRECTIONS:
            raise ConfigError(
                f"{label}: 'move_direction' must be one of {list(DIRECTIONS)}, "
                f"got {direction!r}"
            )

        if "texture" in values:
            texture = Path(values["texture"])
            if base_dir is not None and not texture.is_absolute():
                texture = base_dir / texture
            values["texture"] = texture

        return PlanetConfig(**values)
