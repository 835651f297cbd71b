"""Headless core of a small 2D graphics library: images, instances, render queue batching, XPM42 textures and font glyph lookup."""

__version__ = "0.1.0"

__all__ = ["context", "errors", "font", "images", "keys", "renderer", "textures", "utils", "xpm42"]