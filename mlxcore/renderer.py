"""Vertex batching of image instances and the screen projection."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from mlxcore.images import Image, Instance

BATCH_SIZE = 12000
TEXTURE_SLOTS = 16


def _f32(value: float) -> float:
    if math.isnan(value) or math.isinf(value):
        return value
    return struct.unpack("f", struct.pack("f", value))[0]


def _div(a: float, b: float) -> float:
    """Floating point division with IEEE results for a zero divisor."""
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return _f32(a / b)


@dataclass(frozen=True)
class Vertex:
    """A vertex laid out as the shader expects: position, UV and texture slot."""

    x: float
    y: float
    z: float
    u: float
    v: float
    tex: int


class Batch:
    """Collects instance quads and hands them on in flushes.

    Up to sixteen textures are bound at once; binding another one forces
    a flush. ``on_flush`` receives the vertices and the bound texture
    handles of every flush.
    """

    def __init__(
        self,
        capacity: int = BATCH_SIZE,
        on_flush: Optional[Callable[[Sequence[Vertex], Sequence[int]], None]] = None,
    ) -> None:
        if capacity <= 0:
            raise ValueError("batch capacity must be positive")
        self.capacity = capacity
        self.on_flush = on_flush
        self.vertices: list[Vertex] = []
        self.bound_textures: list[int] = [0] * TEXTURE_SLOTS

    @property
    def size(self) -> int:
        """Number of vertices waiting to be drawn."""
        return len(self.vertices)

    def bind_texture(self, handle: int) -> int:
        """Return the slot holding ``handle``, binding it to a free slot if needed."""
        for slot, bound in enumerate(self.bound_textures):
            if bound == handle:
                return slot
            if bound == 0:
                self.bound_textures[slot] = handle
                return slot
        self.flush()
        self.bound_textures[0] = handle
        return 0

    def draw_instance(self, image: Image, instance: Instance, handle: int) -> None:
        """Queue the two triangles covering one instance of ``image``."""
        w = _f32(image.width)
        h = _f32(image.height)
        x = _f32(instance.x)
        y = _f32(instance.y)
        z = _f32(instance.z)
        tex = self.bind_texture(handle)
        right = _f32(x + w)
        bottom = _f32(y + h)
        self.vertices.extend(
            (
                Vertex(x, y, z, 0.0, 0.0, tex),
                Vertex(right, bottom, z, 1.0, 1.0, tex),
                Vertex(right, y, z, 1.0, 0.0, tex),
                Vertex(x, y, z, 0.0, 0.0, tex),
                Vertex(x, bottom, z, 0.0, 1.0, tex),
                Vertex(right, bottom, z, 1.0, 1.0, tex),
            )
        )
        if self.size >= self.capacity:
            self.flush()

    def flush(self) -> list[Vertex]:
        """Emit the pending vertices, release every texture slot and return them."""
        if not self.vertices:
            return []
        drawn = self.vertices
        bound = list(self.bound_textures)
        self.vertices = []
        self.bound_textures = [0] * TEXTURE_SLOTS
        if self.on_flush is not None:
            self.on_flush(drawn, bound)
        return drawn


def projection_matrix(width: float, height: float, depth: float) -> tuple[float, ...]:
    """Return the column-major orthographic projection used for images."""
    width = _f32(width)
    height = _f32(height)
    depth = _f32(depth)
    span = _f32(depth - -depth)
    return (
        _div(2.0, width), 0.0, 0.0, 0.0,
        0.0, _div(2.0, -height), 0.0, 0.0,
        0.0, 0.0, _div(-2.0, span), 0.0,
        -1.0, -_div(height, -height), -_div(_f32(depth + -depth), span), 1.0,
    )