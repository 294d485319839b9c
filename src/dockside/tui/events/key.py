"""Terminal key model.

Keys are decoded once, at the edge of the application, from whatever the
terminal host reports. Everything past the event loop only ever sees `Key`.

Usage:
    from dockside.tui.events.key import Key

    if key == Key.char("q"):
        ...
    if key == Key.ctrl("d"):
        ...
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar


class KeyCode(Enum):
    """Kinds of key the dashboard distinguishes."""

    CHAR = "char"
    BACKSPACE = "backspace"
    ENTER = "enter"
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    HOME = "home"
    END = "end"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    TAB = "tab"
    BACK_TAB = "back_tab"
    DELETE = "delete"
    INSERT = "insert"
    F = "f"
    ESC = "esc"
    NULL = "null"


# Display names used in help legends
_DISPLAY_NAMES: dict[KeyCode, str] = {
    KeyCode.BACKSPACE: "Backspace",
    KeyCode.ENTER: "Enter",
    KeyCode.LEFT: "Left",
    KeyCode.RIGHT: "Right",
    KeyCode.UP: "Up",
    KeyCode.DOWN: "Down",
    KeyCode.HOME: "Home",
    KeyCode.END: "End",
    KeyCode.PAGE_UP: "PgUp",
    KeyCode.PAGE_DOWN: "PgDn",
    KeyCode.TAB: "Tab",
    KeyCode.BACK_TAB: "BackTab",
    KeyCode.DELETE: "Del",
    KeyCode.INSERT: "Ins",
    KeyCode.ESC: "Esc",
    KeyCode.NULL: "",
}

# Textual key names that map directly onto a key code
_TEXTUAL_KEYS: dict[str, KeyCode] = {
    "backspace": KeyCode.BACKSPACE,
    "enter": KeyCode.ENTER,
    "left": KeyCode.LEFT,
    "right": KeyCode.RIGHT,
    "up": KeyCode.UP,
    "down": KeyCode.DOWN,
    "home": KeyCode.HOME,
    "end": KeyCode.END,
    "pageup": KeyCode.PAGE_UP,
    "pagedown": KeyCode.PAGE_DOWN,
    "tab": KeyCode.TAB,
    "shift+tab": KeyCode.BACK_TAB,
    "delete": KeyCode.DELETE,
    "insert": KeyCode.INSERT,
    "escape": KeyCode.ESC,
}


@dataclass(frozen=True)
class Key:
    """A single decoded key press.

    Attributes:
        code: The kind of key.
        symbol: The character for CHAR keys, the number for F keys.
        with_ctrl: Whether Ctrl was held.
        with_alt: Whether Alt was held.
    """

    code: KeyCode
    symbol: str | None = None
    with_ctrl: bool = False
    with_alt: bool = False

    NULL: ClassVar[Key]
    ESC: ClassVar[Key]
    ENTER: ClassVar[Key]
    BACKSPACE: ClassVar[Key]
    TAB: ClassVar[Key]
    BACK_TAB: ClassVar[Key]
    UP: ClassVar[Key]
    DOWN: ClassVar[Key]
    LEFT: ClassVar[Key]
    RIGHT: ClassVar[Key]
    HOME: ClassVar[Key]
    END: ClassVar[Key]
    PAGE_UP: ClassVar[Key]
    PAGE_DOWN: ClassVar[Key]
    DELETE: ClassVar[Key]

    @classmethod
    def char(cls, c: str) -> Key:
        """Create a plain character key."""
        return cls(KeyCode.CHAR, c)

    @classmethod
    def ctrl(cls, c: str) -> Key:
        """Create a Ctrl+<c> key."""
        return cls(KeyCode.CHAR, c, with_ctrl=True)

    @classmethod
    def alt(cls, c: str) -> Key:
        """Create an Alt+<c> key."""
        return cls(KeyCode.CHAR, c, with_alt=True)

    @classmethod
    def f(cls, n: int) -> Key:
        """Create a function key."""
        return cls(KeyCode.F, str(n))

    @classmethod
    def from_textual(cls, key: str, character: str | None = None) -> Key:
        """Decode a textual key event.

        Args:
            key: Textual key name, e.g. "j", "ctrl+d", "pagedown".
            character: Printable character for the event, if any.

        Returns:
            The decoded key, or `Key.NULL` for keys the dashboard ignores.
        """
        if key in _TEXTUAL_KEYS:
            return cls(_TEXTUAL_KEYS[key])
        if key == "space":
            return cls.char(" ")

        modifiers, _, name = key.rpartition("+")
        mods = set(modifiers.split("+")) if modifiers else set()

        if not mods and len(name) > 1 and name[0] == "f" and name[1:].isdigit():
            return cls.f(int(name[1:]))
        if len(name) == 1 and ("ctrl" in mods or "alt" in mods):
            if "shift" in mods:
                name = name.upper()
            return cls(KeyCode.CHAR, name, with_ctrl="ctrl" in mods, with_alt="alt" in mods)
        if character and character.isprintable():
            return cls.char(character)
        return cls.NULL

    @property
    def is_char(self) -> bool:
        """True for an unmodified printable character."""
        return self.code is KeyCode.CHAR and not (self.with_ctrl or self.with_alt)

    def __str__(self) -> str:
        if self.code is KeyCode.CHAR:
            c = "Space" if self.symbol == " " else (self.symbol or "")
            if self.with_ctrl:
                return f"Ctrl+{c}"
            if self.with_alt:
                return f"Alt+{c}"
            return c
        if self.code is KeyCode.F:
            return f"F{self.symbol}"
        return _DISPLAY_NAMES[self.code]


Key.NULL = Key(KeyCode.NULL)
Key.ESC = Key(KeyCode.ESC)
Key.ENTER = Key(KeyCode.ENTER)
Key.BACKSPACE = Key(KeyCode.BACKSPACE)
Key.TAB = Key(KeyCode.TAB)
Key.BACK_TAB = Key(KeyCode.BACK_TAB)
Key.UP = Key(KeyCode.UP)
Key.DOWN = Key(KeyCode.DOWN)
Key.LEFT = Key(KeyCode.LEFT)
Key.RIGHT = Key(KeyCode.RIGHT)
Key.HOME = Key(KeyCode.HOME)
Key.END = Key(KeyCode.END)
Key.PAGE_UP = Key(KeyCode.PAGE_UP)
Key.PAGE_DOWN = Key(KeyCode.PAGE_DOWN)
Key.DELETE = Key(KeyCode.DELETE)
