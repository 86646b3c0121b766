"""Colored status lines for harness console output."""

from __future__ import annotations

from typing import IO

from rich.console import Console
from rich.markup import escape
from rich.theme import Theme

_THEME = Theme(
    {
        "success": "green",
        "error": "bold red",
        "warning": "yellow",
        "info": "cyan",
        "muted": "grey70",
        "title": "bold cyan",
    }
)


def make_console(use_color: bool = True, file: IO[str] | None = None) -> Console:
    """Create a Rich console with the harness theme and color policy."""
    return Console(
        file=file,
        theme=_THEME,
        no_color=not use_color,
        color_system="auto" if use_color else None,
        markup=True,
        emoji=False,
        highlight=False,
        soft_wrap=True,
    )


class StatusLogger:
    """Prints one styled status line per event."""

    _ICONS = {
        "success": "✓",
        "error": "✗",
        "warning": "!",
        "info": "•",
    }

    def __init__(self, console: Console | None = None):
        self.console = console or make_console()

    def _line(self, level: str, message: str) -> None:
        icon = self._ICONS[level]
        self.console.print(f"[{level}]{icon} {escape(message)}[/{level}]")

    def success(self, message: str) -> None:
        self._line("success", message)

    def error(self, message: str) -> None:
        self._line("error", message)

    def warning(self, message: str) -> None:
        self._line("warning", message)

    def info(self, message: str) -> None:
        self._line("info", message)

    def text(self, message: str = "", *, style: str | None = None) -> None:
        """Print an unadorned line, optionally styled."""
        self.console.print(escape(message), style=style)

    def heading(self, title: str) -> None:
        separator = "=" * max(len(title), 40)
        self.console.print(separator, style="muted")
        self.console.print(escape(title), style="title")
        self.console.print(separator, style="muted")


__all__ = ["StatusLogger", "make_console"]
