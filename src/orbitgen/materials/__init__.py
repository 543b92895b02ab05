"""Texture loading for planet surfaces."""

from .loader import TextureLoader, fallback_texture

__all__ = ["TextureLoader", "fallback_texture"]
