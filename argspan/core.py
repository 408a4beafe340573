import logging
import sys
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any, Literal, Optional

from attrs import define, field

from argspan.command import Command
from argspan.errors.handler import collect
from argspan.errors.report import RenderOptions
from argspan.parsing.parser import Parser
from argspan.parsing.tokenizer import QUOTES, Tokenizer
from argspan.result import ParsedArguments, ParseResult

if TYPE_CHECKING:
    from rich.console import Console

    from argspan.errors.protocols import ErrorFormatter

logger = logging.getLogger(__name__)


def formatter_converter(value: Literal["pretty", "simple"] | Any) -> "ErrorFormatter":
    """Convert string literals to error formatter instances.

    Lazily imports formatters to avoid importing Rich until an error is rendered.
    """
    if isinstance(value, str):
        if value == "pretty":
            from argspan.errors.formatters import PrettyFormatter

            return PrettyFormatter()
        elif value == "simple":
            from argspan.errors.formatters import SimpleFormatter

            return SimpleFormatter()
        else:
            raise ValueError(f"Unknown formatter: {value!r}. Must be 'pretty' or 'simple'")
    return value


def _quote(arg: str) -> str:
    escaped = arg.replace("\\", "\\\\")
    for quote in QUOTES:
        escaped = escaped.replace(quote, "\\" + quote)
    if not arg or any(char.isspace() for char in arg):
        return f'"{escaped}"'
    return escaped


def normalize_input(tokens: None | str | Iterable[str]) -> str:
    """Join an argument vector into the single string the tokenizer consumes.

    Elements containing whitespace are quoted so they stay a single value.
    """
    if tokens is None:
        tokens = sys.argv[1:]
    if isinstance(tokens, str):
        return tokens
    return " ".join(_quote(token) for token in tokens)


@define(eq=False)
class ArgumentParser(Command):
    """Root of a command tree. Tokenizes, parses, and reports errors.

    .. code-block:: python

        parser = ArgumentParser("my-program")
        parser.add_argument(Argument("count", type=Integer(), positional=True))
        result = parser.parse("5")
        result["count"]  # 5
    """

    formatter: "ErrorFormatter" = field(default="pretty", converter=formatter_converter, kw_only=True)
    """How errors are rendered: ``"pretty"``, ``"simple"``, or an :class:`~argspan.errors.ErrorFormatter`."""

    wrap_width: int = field(default=110, kw_only=True)
    """Error messages are wrapped at this many characters."""

    ansi: bool | None = field(default=None, kw_only=True)
    """
    Emit ANSI escape sequences in error messages.
    If :obj:`None`, enabled when :attr:`error_console` is a terminal that allows color.
    """

    error_console: Optional["Console"] = field(default=None, kw_only=True)
    """Console that :meth:`parse_args` prints errors to. Defaults to stderr."""

    def _error_console(self) -> "Console":
        if self.error_console is not None:
            return self.error_console

        from rich.console import Console

        return Console(stderr=True)

    def render_options(self) -> RenderOptions:
        ansi = self.ansi
        if ansi is None:
            console = self._error_console()
            ansi = console.is_terminal and not console.no_color
        return RenderOptions(ansi=ansi, width=self.wrap_width)

    def parse(self, tokens: None | str | Iterable[str] = None) -> ParseResult:
        """Parse ``tokens`` without printing anything or exiting.

        Parameters
        ----------
        tokens: None | str | Iterable[str]
            Either a string, or a list of strings.
            Defaults to ``sys.argv[1:]``.

        Returns
        -------
        ParseResult
            Resolved values, rendered errors and the exit code.
        """
        input = normalize_input(tokens)
        logger.debug("Parsing %r.", input)

        tokenizer = Tokenizer(self).tokenize(input)
        flat = tuple(tokenizer.all_tokens)
        root = Parser(tokenizer, flat).parse()
        levels = list(root.levels())

        handler = collect(input, flat, levels)
        reports = handler.reports
        errors = handler.render(self.formatter, self.render_options())

        parsed = None
        for level in reversed(levels):
            usages = {argument: state.usages for argument, state in level.states.items()}
            parsed = ParsedArguments(level.command, level.values, usages, parsed)
        assert parsed is not None

        forward_value = next(
            (level.forward_value for level in tokenizer.levels() if level.forward_value is not None), None
        )

        return ParseResult(
            parsed=parsed,
            tokens=flat,
            reports=tuple(reports),
            errors=tuple(errors),
            failed=handler.failed,
            error_code=handler.error_code,
            forward_value=forward_value,
        )

    def parse_args(
        self,
        tokens: None | str | Iterable[str] = None,
        *,
        error_console: Optional["Console"] = None,
        print_error: bool = True,
        exit_on_error: bool = True,
    ) -> ParseResult:
        """Parse ``tokens``, printing errors and exiting like a typical command-line program.

        Parameters
        ----------
        tokens: None | str | Iterable[str]
            Either a string, or a list of strings.
            Defaults to ``sys.argv[1:]``.
        error_console: ~rich.console.Console
            Console to print error messages.
            If not provided, uses :attr:`error_console`, defaulting to stderr.
        print_error: bool
            Print the rendered errors.
        exit_on_error: bool
            If the parse failed, invoke ``sys.exit`` with :attr:`ParseResult.error_code`.
        """
        result = self.parse(tokens)
        if print_error and result.errors:
            from rich.text import Text

            console = error_console or self._error_console()
            for error in result.errors:
                console.print(Text.from_ansi(error.rstrip("\n")), soft_wrap=True)
        if exit_on_error and result.failed:
            sys.exit(result.error_code)
        return result
