"""Single-line error formatter, suited for logs and non-interactive output."""

from typing import TYPE_CHECKING

from argspan.errors.formatters._shared import level_style, render
from argspan.utils import single_line

if TYPE_CHECKING:
    from argspan.errors.report import RenderOptions, Report


class SimpleFormatter:
    """Render an error as ``[LEVEL (token N to M)]: message``.

    Token positions are 0-based indices into the flat token list; a position equal to the
    number of tokens points past the last token. Lexical errors use character positions.
    """

    def __call__(self, report: "Report", options: "RenderOptions") -> str:
        from rich.text import Text

        text = Text.assemble(
            (f"[{report.level.name}{self._location(report)}]", level_style(report.level)),
            ": ",
            single_line(report.content),
        )
        return render(text, options.ansi)

    @staticmethod
    def _location(report: "Report") -> str:
        highlight = report.absolute_highlight
        if highlight is None:
            return ""

        if report.is_lexical:
            kind, upper = "char", len(report.context.input) - 1  # pyright: ignore[reportAttributeAccessIssue]
        else:
            kind, upper = "token", len(report.context.tokens) - 1  # pyright: ignore[reportAttributeAccessIssue]

        if highlight.is_point:
            return f" ({kind} {min(max(highlight.start, 0), upper + 1)})"

        start = min(max(highlight.start, 0), max(upper, 0))
        end = min(max(highlight.end, start), max(upper, 0))  # pyright: ignore[reportArgumentType]
        if start == end:
            return f" ({kind} {start})"
        return f" ({kind} {start} to {end})"
