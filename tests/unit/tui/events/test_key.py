"""Unit tests for the key model."""

from __future__ import annotations

import pytest

from dockside.tui.events import Key, KeyCode


@pytest.mark.unit
class TestKeyConstruction:
    """Tests for Key constructors and constants."""

    def test_char_key(self) -> None:
        key = Key.char("j")
        assert key.code is KeyCode.CHAR
        assert key.symbol == "j"
        assert key.is_char

    def test_ctrl_key_is_not_plain_char(self) -> None:
        key = Key.ctrl("d")
        assert key.with_ctrl
        assert not key.is_char
        assert key != Key.char("d")

    def test_alt_key(self) -> None:
        assert Key.alt("d").with_alt
        assert Key.alt("d") != Key.ctrl("d")

    def test_keys_are_hashable_values(self) -> None:
        assert Key.char("q") == Key.char("q")
        assert len({Key.char("q"), Key.char("q"), Key.ESC}) == 2

    def test_constants(self) -> None:
        assert Key.NULL.code is KeyCode.NULL
        assert Key.ESC.code is KeyCode.ESC
        assert Key.PAGE_DOWN.code is KeyCode.PAGE_DOWN


@pytest.mark.unit
class TestKeyDisplay:
    """Tests for help-legend rendering of keys."""

    @pytest.mark.parametrize(
        ("key", "expected"),
        [
            (Key.char("j"), "j"),
            (Key.ctrl("d"), "Ctrl+d"),
            (Key.alt("d"), "Alt+d"),
            (Key.char(" "), "Space"),
            (Key.UP, "Up"),
            (Key.ESC, "Esc"),
            (Key.ENTER, "Enter"),
            (Key.PAGE_UP, "PgUp"),
            (Key.f(1), "F1"),
        ],
    )
    def test_str(self, key: Key, expected: str) -> None:
        assert str(key) == expected


@pytest.mark.unit
class TestFromTextual:
    """Tests for decoding textual key events."""

    def test_printable_character(self) -> None:
        assert Key.from_textual("j", "j") == Key.char("j")

    def test_shifted_character_uses_character(self) -> None:
        assert Key.from_textual("G", "G") == Key.char("G")

    def test_colon(self) -> None:
        assert Key.from_textual("colon", ":") == Key.char(":")

    def test_space(self) -> None:
        assert Key.from_textual("space", " ") == Key.char(" ")

    def test_named_keys(self) -> None:
        assert Key.from_textual("escape") == Key.ESC
        assert Key.from_textual("enter") == Key.ENTER
        assert Key.from_textual("pagedown") == Key.PAGE_DOWN
        assert Key.from_textual("shift+tab") == Key.BACK_TAB

    def test_ctrl_combination(self) -> None:
        assert Key.from_textual("ctrl+d") == Key.ctrl("d")
        assert Key.from_textual("ctrl+c") == Key.ctrl("c")

    def test_alt_combination(self) -> None:
        assert Key.from_textual("alt+d") == Key.alt("d")

    def test_function_key(self) -> None:
        assert Key.from_textual("f5") == Key.f(5)

    def test_unknown_key_is_null(self) -> None:
        assert Key.from_textual("ctrl+shift+f12") == Key.NULL
        assert Key.from_textual("unknown") == Key.NULL
