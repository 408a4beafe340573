"""Boxed, multi-line error formatter."""

from typing import TYPE_CHECKING

from argspan.errors.formatters._shared import level_style, render
from argspan.token import TokenType
from argspan.utils import longest_line, wrap

if TYPE_CHECKING:
    from rich.text import Text

    from argspan.errors.context import Highlight, ParseErrorContext, TokenizeErrorContext
    from argspan.errors.report import RenderOptions, Report


class PrettyFormatter:
    """Render an error as a small box.

    .. code-block:: text

         ┌─ERROR
        Testing --what <-
         │ Incorrect number of values for argument 'what'.
         │ Expected from 1 to 3 values, but got 0.
         └──────────────────────────────────────────── ───── ── ─

    The second line shows the whole input with the offending part highlighted.
    Without ANSI support, highlighting is replaced by ``->`` and ``<-`` arrows.
    """

    def __call__(self, report: "Report", options: "RenderOptions") -> str:
        from rich.text import Text

        style = level_style(report.level)
        content = wrap(report.content, options.width)

        text = Text()
        text.append(f" ┌─{report.level.name}", style=style)

        if report.is_lexical:
            view = self._input_view(report, report.context, options)  # pyright: ignore[reportArgumentType]
        else:
            view = self._tokens_view(report, report.context, options)  # pyright: ignore[reportArgumentType]
        if view.plain:
            text.append("\n")
            text.append_text(view)

        for line in content.splitlines() or [""]:
            text.append("\n │ ", style=style)
            text.append(line)

        text.append("\n └" + "─" * max(len(longest_line(content)) - 5, 0) + " ───── ── ─", style=style)
        text.append("\n")
        return render(text, options.ansi)

    def _tokens_view(self, report: "Report", ctx: "ParseErrorContext", options: "RenderOptions") -> "Text":
        from rich.text import Text

        items = [Text(ctx.program, style=TokenType.SUBCOMMAND.color)]
        items.extend(Text(token.display(), style=token.type.color) for token in ctx.tokens)

        # Tokens of the commands that were already parsed before this one.
        for item in items[: ctx.offset]:
            item.stylize("dim")

        highlight = report.absolute_highlight
        if highlight is not None:
            # The program name takes the first slot.
            self._highlight_tokens(items, highlight.shifted(1), report, options)

        return Text(" ").join(items)

    def _highlight_tokens(self, items: list["Text"], highlight: "Highlight", report: "Report", options: "RenderOptions"):
        from rich.text import Text

        emphasis = level_style(report.level, emphasis=True)
        last = len(items) - 1

        if highlight.is_point:
            position = min(max(highlight.start, 1), len(items))
            items.insert(position, Text("<-", style=emphasis))
            return

        start = min(max(highlight.start, 1), last)
        end = min(max(highlight.end, start), last)  # pyright: ignore[reportArgumentType]

        if options.ansi and not highlight.arrows:
            for item in items[start : end + 1]:
                item.stylize(emphasis)
            return

        items.insert(end + 1, Text("<-", style=emphasis))
        if start != end:
            items.insert(start, Text("->", style=emphasis))

    def _input_view(self, report: "Report", ctx: "TokenizeErrorContext", options: "RenderOptions") -> "Text":
        from rich.text import Text

        emphasis = level_style(report.level, emphasis=True)
        prefix = len(ctx.program) + 1
        line = f"{ctx.program} {ctx.input}"

        highlight = report.absolute_highlight
        if highlight is None:
            return Text(line, style="bright_white")

        start = highlight.start + prefix
        if highlight.is_point or start >= len(line):
            position = min(start, len(line))
            return Text.assemble((line[:position], "bright_white"), ("<-", emphasis), (line[position:], "bright_white"))

        end = min(highlight.end + prefix, len(line) - 1)  # pyright: ignore[reportOptionalOperand]
        before, marked, after = line[:start], line[start : end + 1], line[end + 1 :]

        if options.ansi and not highlight.arrows:
            return Text.assemble((before, "bright_white"), (marked, emphasis), (after, "bright_white"))
        return Text.assemble(
            (before, "bright_white"),
            ("->", emphasis),
            (marked, emphasis if options.ansi else ""),
            ("<-", emphasis),
            (after, "bright_white"),
        )
