"""Glyph lookup in the built-in font atlas."""

from __future__ import annotations

FONT_WIDTH = 10
FONT_HEIGHT = 20
MAX_STRING = 512

# Glyphs in the atlas are separated by a two pixel wide line.
_GLYPH_STRIDE = FONT_WIDTH + 2
_FIRST_PRINTABLE = 32
_LAST_PRINTABLE = 126


def get_texoffset(c: str | int) -> int:
    """Return the X offset of a character's glyph in the font atlas.

    ``c`` is a single character or its code. Characters that are not
    printable ASCII have no glyph and give -1.
    """
    if isinstance(c, str):
        if len(c) != 1:
            raise ValueError(f"expected a single character, got {c!r}")
        code = ord(c)
    else:
        code = int(c)
    if not _FIRST_PRINTABLE <= code <= _LAST_PRINTABLE:
        return -1
    return _GLYPH_STRIDE * (code - _FIRST_PRINTABLE)