"""Solar system scene."""

from pathlib import Path

from ..config import SceneConfigLoader
from ..materials import TextureLoader
from .planets import PlanetScene, create_planets

ASSETS_DIR = Path(__file__).parent.parent / "assets"


def create_solar_system_scene(config_path: Path | None = None) -> PlanetScene:
    """Create the orbital scene described by a planet config file.

    Args:
        config_path: YAML/JSON scene config. Defaults to the bundled
            assets/planets.yaml.

    Returns:
        A PlanetScene at tick 0.
    """
    path = config_path or ASSETS_DIR / "planets.yaml"
    configs = SceneConfigLoader().load(path)
    return PlanetScene(create_planets(configs, TextureLoader()))
