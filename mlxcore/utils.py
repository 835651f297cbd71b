"""Hashing, colour conversion and pixel writing helpers."""

from __future__ import annotations

import struct

BYTES_PER_PIXEL = 4

_FNV_PRIME = 0x100000001B3
_FNV_OFFSET = 0xCBF29CE484222325
_MASK64 = (1 << 64) - 1


def fnv_hash(data: str | bytes) -> int:
    """Return the 64-bit FNV-1a hash of ``data``.

    Bytes are treated as signed characters, so values of 0x80 and above
    are sign-extended before being mixed in.
    """
    if isinstance(data, str):
        data = data.encode("latin-1")
    result = _FNV_OFFSET
    for byte in data:
        signed = byte - 256 if byte >= 0x80 else byte
        result ^= signed & _MASK64
        result = (result * _FNV_PRIME) & _MASK64
    return result


def _f32(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


_WEIGHT_R = _f32(0.299)
_WEIGHT_G = _f32(0.587)
_WEIGHT_B = _f32(0.114)


def rgba_to_mono(color: int) -> int:
    """Convert an RGBA colour to grey, keeping its alpha channel."""
    color &= 0xFFFFFFFF
    r = int(_f32(_WEIGHT_R * ((color >> 24) & 0xFF))) & 0xFF
    g = int(_f32(_WEIGHT_G * ((color >> 16) & 0xFF))) & 0xFF
    b = int(_f32(_WEIGHT_B * ((color >> 8) & 0xFF))) & 0xFF
    y = (r + g + b) & 0xFF
    return (y << 24) | (y << 16) | (y << 8) | (color & 0xFF)


def draw_pixel(buffer: bytearray, offset: int, color: int) -> None:
    """Write ``color`` as R, G, B, A bytes into ``buffer`` at ``offset``."""
    if offset < 0 or offset + BYTES_PER_PIXEL > len(buffer):
        raise IndexError("pixel is out of bounds")
    buffer[offset:offset + BYTES_PER_PIXEL] = (color & 0xFFFFFFFF).to_bytes(
        BYTES_PER_PIXEL, "big"
    )