"""Shared utilities for error formatters."""

import io
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rich.style import Style
    from rich.text import Text

    from argspan.errors.level import ErrorLevel


def level_style(level: "ErrorLevel", *, emphasis: bool = False) -> "Style":
    from rich.style import Style

    if emphasis:
        return Style(color=level.color, reverse=True, bold=True)
    return Style(color=level.color)


def render(text: "Text", ansi: bool) -> str:
    """Render a :class:`~rich.text.Text` to a string, with or without ANSI sequences.

    The text is never wrapped by the console; wrapping is the formatter's job.
    """
    from rich.console import Console

    console = Console(
        file=io.StringIO(),
        force_terminal=ansi,
        color_system="standard" if ansi else None,
        highlight=False,
        markup=False,
        emoji=False,
        legacy_windows=False,
        width=max(len(line) for line in text.plain.splitlines() or [""]) + 1,
    )
    with console.capture() as capture:
        console.print(text, end="", soft_wrap=True)
    return capture.get()
