"""Input codes, cursor shapes and global setting identifiers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, IntFlag


class Action(IntEnum):
    """What happened to a key or mouse button."""

    RELEASE = 0
    PRESS = 1
    REPEAT = 2


class ModifierKey(IntFlag):
    """Modifier keys; combine them with ``|``."""

    NONE = 0
    SHIFT = 0x0001
    CONTROL = 0x0002
    ALT = 0x0004
    SUPERKEY = 0x0008
    CAPSLOCK = 0x0010
    NUMLOCK = 0x0020


class MouseKey(IntEnum):
    """Mouse buttons."""

    LEFT = 0
    RIGHT = 1
    MIDDLE = 2


class MouseMode(IntEnum):
    """Cursor visibility and behaviour states."""

    NORMAL = 0x00034001
    HIDDEN = 0x00034002
    DISABLED = 0x00034003


class Cursor(IntEnum):
    """Standard system cursor shapes."""

    ARROW = 0x00036001
    IBEAM = 0x00036002
    CROSSHAIR = 0x00036003
    HAND = 0x00036004
    HRESIZE = 0x00036005
    VRESIZE = 0x00036006


class Key(IntEnum):
    """Keyboard key codes."""

    SPACE = 32
    APOSTROPHE = 39
    COMMA = 44
    MINUS = 45
    PERIOD = 46
    SLASH = 47
    NUM_0 = 48
    NUM_1 = 49
    NUM_2 = 50
    NUM_3 = 51
    NUM_4 = 52
    NUM_5 = 53
    NUM_6 = 54
    NUM_7 = 55
    NUM_8 = 56
    NUM_9 = 57
    SEMICOLON = 59
    EQUAL = 61
    A = 65
    B = 66
    C = 67
    D = 68
    E = 69
    F = 70
    G = 71
    H = 72
    I = 73  # noqa: E741
    J = 74
    K = 75
    L = 76
    M = 77
    N = 78
    O = 79  # noqa: E741
    P = 80
    Q = 81
    R = 82
    S = 83
    T = 84
    U = 85
    V = 86
    W = 87
    X = 88
    Y = 89
    Z = 90
    LEFT_BRACKET = 91
    BACKSLASH = 92
    RIGHT_BRACKET = 93
    GRAVE_ACCENT = 96
    ESCAPE = 256
    ENTER = 257
    TAB = 258
    BACKSPACE = 259
    INSERT = 260
    DELETE = 261
    RIGHT = 262
    LEFT = 263
    DOWN = 264
    UP = 265
    PAGE_UP = 266
    PAGE_DOWN = 267
    HOME = 268
    END = 269
    CAPS_LOCK = 280
    SCROLL_LOCK = 281
    NUM_LOCK = 282
    PRINT_SCREEN = 283
    PAUSE = 284
    F1 = 290
    F2 = 291
    F3 = 292
    F4 = 293
    F5 = 294
    F6 = 295
    F7 = 296
    F8 = 297
    F9 = 298
    F10 = 299
    F11 = 300
    F12 = 301
    F13 = 302
    F14 = 303
    F15 = 304
    F16 = 305
    F17 = 306
    F18 = 307
    F19 = 308
    F20 = 309
    F21 = 310
    F22 = 311
    F23 = 312
    F24 = 313
    F25 = 314
    KP_0 = 320
    KP_1 = 321
    KP_2 = 322
    KP_3 = 323
    KP_4 = 324
    KP_5 = 325
    KP_6 = 326
    KP_7 = 327
    KP_8 = 328
    KP_9 = 329
    KP_DECIMAL = 330
    KP_DIVIDE = 331
    KP_MULTIPLY = 332
    KP_SUBTRACT = 333
    KP_ADD = 334
    KP_ENTER = 335
    KP_EQUAL = 336
    LEFT_SHIFT = 340
    LEFT_CONTROL = 341
    LEFT_ALT = 342
    LEFT_SUPER = 343
    RIGHT_SHIFT = 344
    RIGHT_CONTROL = 345
    RIGHT_ALT = 346
    RIGHT_SUPER = 347
    MENU = 348


class Setting(IntEnum):
    """Global settings that shape how a context is created."""

    STRETCH_IMAGE = 0
    FULLSCREEN = 1
    MAXIMIZED = 2
    DECORATED = 3
    HEADLESS = 4


@dataclass(frozen=True)
class KeyData:
    """Data handed to a key callback."""

    key: Key
    action: Action
    os_key: int
    modifier: ModifierKey = ModifierKey.NONE

    def __post_init__(self) -> None:
        object.__setattr__(self, "key", Key(self.key))
        object.__setattr__(self, "action", Action(self.action))
        object.__setattr__(self, "os_key", int(self.os_key))
        object.__setattr__(self, "modifier", ModifierKey(self.modifier))