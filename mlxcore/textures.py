"""In-memory RGBA textures."""

from __future__ import annotations

from dataclasses import dataclass

from mlxcore.utils import BYTES_PER_PIXEL


@dataclass
class Texture:
    """A block of RGBA pixel data, four bytes per pixel, row by row."""

    width: int
    height: int
    pixels: bytearray
    bytes_per_pixel: int = BYTES_PER_PIXEL

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("texture dimensions must not be negative")
        self.pixels = bytearray(self.pixels)
        expected = self.width * self.height * self.bytes_per_pixel
        if len(self.pixels) != expected:
            raise ValueError(
                f"pixel buffer holds {len(self.pixels)} bytes, expected {expected}"
            )

    def pixel(self, x: int, y: int) -> int:
        """Return the colour at ``(x, y)`` as a 0xRRGGBBAA integer."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError("pixel is out of bounds")
        start = (y * self.width + x) * self.bytes_per_pixel
        return int.from_bytes(self.pixels[start:start + self.bytes_per_pixel], "big")