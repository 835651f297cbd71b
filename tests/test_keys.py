import pytest

from mlxcore.keys import Action, Cursor, Key, KeyData, ModifierKey, MouseMode


def test_keydata_converts_raw_codes():
    data = KeyData(256, 1, 9, 3)
    assert data.key is Key.ESCAPE
    assert data.action is Action.PRESS
    assert data.os_key == 9
    assert data.modifier == ModifierKey.SHIFT | ModifierKey.CONTROL


def test_keydata_default_modifier_is_empty():
    data = KeyData(Key.A, Action.RELEASE, 0)
    assert data.modifier == ModifierKey.NONE
    assert not data.modifier


def test_keydata_rejects_unknown_key():
    with pytest.raises(ValueError):
        KeyData(1, Action.PRESS, 0)


def test_keydata_rejects_unknown_action():
    with pytest.raises(ValueError):
        KeyData(Key.A, 7, 0)


def test_modifier_flags_combine_and_test():
    data = KeyData(Key.A, Action.PRESS, 0, 0x04 | 0x20)
    assert ModifierKey.ALT in data.modifier
    assert ModifierKey.NUMLOCK in data.modifier
    assert ModifierKey.SHIFT not in data.modifier


def test_letter_keys_follow_ascii():
    assert Key.A == ord("A")
    assert Key.Z == ord("Z")
    assert Key(ord("Q")) is Key.Q


def test_cursor_and_mouse_mode_lookup():
    assert Cursor(0x00036004) is Cursor.HAND
    assert MouseMode(0x00034003) is MouseMode.DISABLED


def test_keydata_is_immutable():
    data = KeyData(Key.SPACE, Action.REPEAT, 1)
    with pytest.raises(AttributeError):
        data.key = Key.A
    assert data.key is Key.SPACE