"""Single-line text input with optional autocomplete."""

from __future__ import annotations

from rich.text import Text

from dockside.tui.base import Component
from dockside.tui.events import Key, KeyCode, MessageResponse

AUTOCOMPLETE_MIN_LENGTH = 2


class Autocomplete:
    """Prefix completion over a fixed set of candidates.

    Single-letter inputs are never completed since one-letter commands
    exist and completing them would be confusing.
    """

    def __init__(self, candidates: list[str], min_length: int = AUTOCOMPLETE_MIN_LENGTH) -> None:
        self._candidates = sorted(candidates)
        self._min_length = min_length

    def get_completion(self, current: str) -> str | None:
        if len(current) < self._min_length:
            return None
        return next((c for c in self._candidates if c.startswith(current)), None)


class TextInput(Component):
    """Editable buffer: characters append, Backspace deletes, Tab or Right completes."""

    def __init__(self, prompt: str, autocomplete: Autocomplete | None = None) -> None:
        self.prompt = prompt
        self._autocomplete = autocomplete
        self._value = ""
        self._candidate: str | None = None

    @property
    def value(self) -> str:
        return self._value

    @property
    def candidate(self) -> str | None:
        return self._candidate

    def reset(self) -> None:
        self.set_value("")

    def set_value(self, value: str) -> None:
        self._value = value
        self._refresh_candidate()

    def update(self, key: Key) -> MessageResponse:
        if key.is_char:
            self.set_value(self._value + (key.symbol or ""))
        elif key.code is KeyCode.BACKSPACE:
            self.set_value(self._value[:-1])
        elif key.code in (KeyCode.TAB, KeyCode.RIGHT):
            if self._candidate is not None:
                self.set_value(self._candidate)
        else:
            return MessageResponse.NOT_CONSUMED
        return MessageResponse.CONSUMED

    def _refresh_candidate(self) -> None:
        self._candidate = (
            self._autocomplete.get_completion(self._value) if self._autocomplete else None
        )

    def draw(self) -> Text:
        text = Text(f"{self.prompt} ", style="bold")
        text.append(self._value)
        if self._candidate and self._candidate != self._value:
            text.append(self._candidate[len(self._value) :], style="dim")
        text.append("█", style="blink")
        return text
