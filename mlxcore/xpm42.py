"""Reader for the XPM42 text image format."""

from __future__ import annotations

import re
import string
from dataclasses import dataclass
from typing import IO

from mlxcore.errors import ErrorCode, MlxError
from mlxcore.textures import Texture
from mlxcore.utils import BYTES_PER_PIXEL, draw_pixel, fnv_hash, rgba_to_mono

_MAGIC = "!XPM42\n"
_FGETS_LIMIT = 63
_TABLE_SIZE = 0xFFFF
_MAX_DIMENSION = 0x7FFF
_MAX_CPP = 10
_C_SPACE = " \t\n\v\f\r"
_HEX = "0123456789abcdefABCDEF"
_ALNUM = set(string.ascii_letters + string.digits)

_INT = re.compile(r"[ \t\n\v\f\r]*([+-]?)(0[xX][0-9a-fA-F]+|0[0-7]*|[1-9][0-9]*)")
_CHAR = re.compile(r"[ \t\n\v\f\r]*(.)", re.S)


@dataclass
class Xpm:
    """A decoded XPM42 image together with its header information."""

    texture: Texture
    color_count: int
    cpp: int
    mode: str


class _LineReader:
    """Reads lines from a text or binary stream, optionally in bounded chunks."""

    def __init__(self, stream: IO) -> None:
        self._stream = stream
        self._pending = ""

    def read(self, limit: int | None = None) -> str:
        if self._pending:
            line, self._pending = self._pending, ""
        else:
            line = self._stream.readline()
            if isinstance(line, bytes):
                line = line.decode("latin-1")
        if limit is not None and len(line) > limit:
            self._pending = line[limit:]
            line = line[:limit]
        return line


def _invalid() -> MlxError:
    return MlxError(ErrorCode.INVXPM)


def _parse_header(line: str) -> tuple[int, int, int, int, str]:
    values: list[int] = []
    pos = 0
    for _ in range(4):
        match = _INT.match(line, pos)
        if match is None:
            raise _invalid()
        sign, digits = match.groups()
        value = int(digits, 0) if digits.lower().startswith("0x") else int(digits, 8 if digits.startswith("0") else 10)
        values.append(-value if sign == "-" else value)
        pos = match.end()
    mode_match = _CHAR.match(line, pos)
    mode = mode_match.group(1) if mode_match else ""
    width, height, color_count, cpp = values
    if not 0 <= width <= _MAX_DIMENSION or not 0 <= height <= _MAX_DIMENSION:
        raise _invalid()
    if mode not in ("c", "m") or not 0 <= cpp <= _MAX_CPP:
        raise _invalid()
    return width, height, color_count, cpp, mode


def _hex_channel(pair: str) -> int:
    """Parse a two-character hex channel the way strtol does, stopping early."""
    text = pair
    while text and text[0] in _C_SPACE:
        text = text[1:]
    negative = False
    if text[:1] in ("+", "-"):
        negative = text[0] == "-"
        text = text[1:]
    if text[:2].lower() == "0x" and text[2:3] and text[2] in _HEX:
        text = text[2:]
    digits = ""
    for ch in text:
        if ch not in _HEX:
            break
        digits += ch
    value = int(digits, 16) if digits else 0
    return (-value if negative else value) & 0xFF


def _parse_entry(line: str, cpp: int, mode: str, table: dict[int, int]) -> None:
    if line.rfind(" ") != cpp:
        raise _invalid()
    if len(line) < cpp + 3 or line[cpp + 1] != "#" or line[cpp + 2] not in _ALNUM:
        raise _invalid()
    hexpart = line[cpp + 2:cpp + 10].ljust(8, "\0")
    color = 0
    for shift, start in zip((24, 16, 8, 0), (0, 2, 4, 6)):
        color |= _hex_channel(hexpart[start:start + 2]) << shift
    table[fnv_hash(line[:cpp]) % _TABLE_SIZE] = rgba_to_mono(color) if mode == "m" else color


def read_xpm42(stream: IO) -> Xpm:
    """Decode an XPM42 image from an open text or binary stream.

    Raises MlxError with code INVXPM when the content is malformed.
    """
    reader = _LineReader(stream)
    if reader.read(_FGETS_LIMIT) != _MAGIC:
        raise _invalid()
    header = reader.read(_FGETS_LIMIT)
    if not header:
        raise _invalid()
    width, height, color_count, cpp, mode = _parse_header(header)

    table: dict[int, int] = {}
    for _ in range(color_count):
        line = reader.read()
        if not line:
            raise _invalid()
        _parse_entry(line, cpp, mode, table)

    pixels = bytearray(width * height * BYTES_PER_PIXEL)
    cache: dict[str, int] = {}
    for y in range(height):
        line = reader.read()
        if not line:
            raise _invalid()
        if line.endswith("\n"):
            line = line[:-1]
        if len(line) != width * cpp:
            raise _invalid()
        for x in range(width):
            code = line[x * cpp:(x + 1) * cpp]
            if code not in cache:
                cache[code] = table.get(fnv_hash(code) % _TABLE_SIZE, 0)
            draw_pixel(pixels, (y * width + x) * BYTES_PER_PIXEL, cache[code])

    texture = Texture(width, height, pixels, BYTES_PER_PIXEL)
    return Xpm(texture=texture, color_count=color_count, cpp=cpp, mode=mode)


def load_xpm42(path: str) -> Xpm:
    """Load an XPM42 image from a file whose name contains ``.xpm42``."""
    path = str(path)
    if ".xpm42" not in path:
        raise MlxError(ErrorCode.INVEXT)
    try:
        handle = open(path, "r", encoding="latin-1", newline="")
    except OSError:
        raise MlxError(ErrorCode.INVFILE) from None
    with handle:
        return read_xpm42(handle)