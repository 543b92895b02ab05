"""Load planet surface textures from image files."""

from __future__ import annotations

import logging
from pathlib import Path

from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

# Magenta makes a missing texture obvious on screen
FALLBACK_COLOR = (255, 0, 255, 255)


def fallback_texture() -> Image.Image:
    """A 1x1 magenta RGBA image used when a texture cannot be loaded."""
    return Image.new("RGBA", (1, 1), FALLBACK_COLOR)


class TextureLoader:
    """Loads RGBA textures, caching them by resolved path.

    A texture that is missing or cannot be decoded is replaced by
    fallback_texture() and a warning is logged; load() never raises for
    unreadable images.
    """

    def __init__(self) -> None:
        self._cache: dict[Path, Image.Image] = {}

    def load(self, path: Path | str | None) -> Image.Image:
        """Load a texture by path.

        Args:
            path: Image file path, or None for no texture

        Returns:
            RGBA PIL Image
        """
        if path is None:
            return fallback_texture()

        path = Path(path)
        key = path.resolve()
        if key in self._cache:
            return self._cache[key]

        try:
            with Image.open(path) as img:
                texture = img.convert("RGBA")
        except (OSError, UnidentifiedImageError) as exc:
            logger.warning("Failed to load texture %s: %s", path, exc)
            texture = fallback_texture()
        else:
            logger.debug("Loaded texture %s (%dx%d)", path, *texture.size)

        self._cache[key] = texture
        return texture

    def clear_cache(self) -> None:
        """Clear the texture cache."""
        self._cache.clear()
