"""Images, their on-screen instances and the render queue ordering."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import Iterable

from mlxcore.errors import ErrorCode, MlxError
from mlxcore.textures import Texture
from mlxcore.utils import BYTES_PER_PIXEL, draw_pixel

_MAX_DIMENSION = 0x7FFF


def _f32(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


def _check_dimensions(width: int, height: int) -> None:
    if not 0 < width <= _MAX_DIMENSION or not 0 < height <= _MAX_DIMENSION:
        raise MlxError(ErrorCode.INVDIM)


@dataclass
class Instance:
    """One placement of an image on screen: position, depth and visibility."""

    x: int
    y: int
    z: int = 0
    enabled: bool = True


@dataclass(eq=False)
class Image:
    """An RGBA pixel buffer that can be drawn at one or more positions.

    Images compare by identity, so two images with equal pixels are still
    distinct entries in a render queue.
    """

    width: int
    height: int
    pixels: bytearray | None = None
    instances: list[Instance] = field(default_factory=list)
    enabled: bool = True

    def __post_init__(self) -> None:
        _check_dimensions(self.width, self.height)
        size = self.width * self.height * BYTES_PER_PIXEL
        if self.pixels is None:
            self.pixels = bytearray(size)
        else:
            self.pixels = bytearray(self.pixels)
            if len(self.pixels) != size:
                raise ValueError(
                    f"pixel buffer holds {len(self.pixels)} bytes, expected {size}"
                )

    @property
    def count(self) -> int:
        """Number of instances of this image."""
        return len(self.instances)

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Set the pixel at ``(x, y)`` to the 0xRRGGBBAA ``color``."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError("pixel is out of bounds")
        draw_pixel(self.pixels, (y * self.width + x) * BYTES_PER_PIXEL, color)

    def pixel(self, x: int, y: int) -> int:
        """Return the colour at ``(x, y)`` as a 0xRRGGBBAA integer."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError("pixel is out of bounds")
        start = (y * self.width + x) * BYTES_PER_PIXEL
        return int.from_bytes(self.pixels[start:start + BYTES_PER_PIXEL], "big")

    def resize(self, nwidth: int, nheight: int) -> None:
        """Scale the pixel buffer to a new size using nearest-neighbour sampling.

        Raises MlxError with code INVDIM for a zero or too large dimension.
        """
        _check_dimensions(nwidth, nheight)
        if nwidth == self.width and nheight == self.height:
            return
        wstep = _f32(_f32(self.width) / nwidth)
        hstep = _f32(_f32(self.height) / nheight)
        source = self.pixels
        columns = [int(_f32(i * wstep)) for i in range(nwidth)]
        result = bytearray(nwidth * nheight * BYTES_PER_PIXEL)
        for j in range(nheight):
            row = int(_f32(j * hstep)) * self.width
            out = j * nwidth * BYTES_PER_PIXEL
            for column in columns:
                start = (row + column) * BYTES_PER_PIXEL
                result[out:out + BYTES_PER_PIXEL] = source[start:start + BYTES_PER_PIXEL]
                out += BYTES_PER_PIXEL
        self.pixels = result
        self.width = nwidth
        self.height = nheight


@dataclass
class DrawCall:
    """A render queue entry: an image and the index of one of its instances."""

    image: Image
    instance_id: int

    @property
    def instance(self) -> Instance:
        """The instance this draw call refers to."""
        return self.image.instances[self.instance_id]

    def z(self) -> int:
        """Current depth of the referenced instance."""
        return self.instance.z


def texture_to_image(texture: Texture) -> Image:
    """Create a new image holding a copy of the texture's pixels."""
    image = Image(texture.width, texture.height)
    row_bytes = texture.width * texture.bytes_per_pixel
    for row in range(texture.height):
        src = row * texture.width * texture.bytes_per_pixel
        dst = row * image.width * texture.bytes_per_pixel
        image.pixels[dst:dst + row_bytes] = texture.pixels[src:src + row_bytes]
    return image


def sort_render_queue(queue: Iterable[DrawCall]) -> list[DrawCall]:
    """Return the draw calls ordered by ascending depth.

    Calls of equal depth end up in the reverse of their original order,
    so a later entry is drawn before an earlier one at the same depth.
    """
    return sorted(reversed(list(queue)), key=DrawCall.z)