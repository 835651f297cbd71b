import pytest

from mlxcore.font import FONT_HEIGHT, FONT_WIDTH, get_texoffset


def test_space_is_first_glyph():
    assert get_texoffset(" ") == 0


@pytest.mark.parametrize("ch", ["\n", "\t", "\0", "\x7f", "\x80", "é"])
def test_non_printable_has_no_glyph(ch):
    assert get_texoffset(ch) == -1


def test_consecutive_glyphs_are_one_stride_apart():
    for code in range(32, 126):
        step = get_texoffset(chr(code + 1)) - get_texoffset(chr(code))
        assert step == FONT_WIDTH + 2


def test_integer_code_matches_character():
    for ch in "AZaz09~!":
        assert get_texoffset(ord(ch)) == get_texoffset(ch)


def test_offsets_are_non_negative_for_printables():
    offsets = [get_texoffset(chr(code)) for code in range(32, 127)]
    assert all(offset >= 0 for offset in offsets)
    assert offsets == sorted(offsets)
    assert len(set(offsets)) == len(offsets)


def test_documented_glyph_size():
    assert (FONT_WIDTH, FONT_HEIGHT) == (10, 20)
    assert get_texoffset("!") == 12
    assert get_texoffset("A") == 396


def test_multiple_characters_rejected():
    with pytest.raises(ValueError):
        get_texoffset("ab")
    with pytest.raises(ValueError):
        get_texoffset("")