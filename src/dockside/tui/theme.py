"""Theme styles for dashboard rendering.

Maps the configured `Theme` onto rich styles so every component renders
with the same palette.

Usage:
    from dockside.tui.theme import Styles

    styles = Styles(config.theme)
    title = Text("Containers", style=styles.title)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.style import Style

if TYPE_CHECKING:
    from dockside.core.config import Theme


class Colors:
    """Fixed colours that are not part of the configurable theme."""

    MUTED = "grey50"
    SELECTED = "reverse"
    MODAL_BORDER = "bright_white"


class Styles:
    """Rich styles derived from a configured theme.

    Args:
        theme: Colour theme; the default theme when omitted.
    """

    def __init__(self, theme: Theme | None = None) -> None:
        if theme is None:
            from dockside.core.config import Theme

            theme = Theme()
        self._theme = theme

    @property
    def title(self) -> Style:
        return Style(color=self._theme.title_colour(), bold=True)

    @property
    def help(self) -> Style:
        return Style(color=self._theme.help_colour())

    @property
    def footer(self) -> Style:
        return Style(color=self._theme.footer_colour())

    @property
    def success(self) -> Style:
        return Style(color=self._theme.success_colour())

    @property
    def error(self) -> Style:
        return Style(color=self._theme.error_colour(), bold=True)

    @property
    def positive_highlight(self) -> Style:
        return Style(color=self._theme.positive_highlight_colour())

    @property
    def negative_highlight(self) -> Style:
        return Style(color=self._theme.negative_highlight_colour(), reverse=True)

    @property
    def muted(self) -> Style:
        return Style(color=Colors.MUTED)

