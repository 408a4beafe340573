import logging
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

from attrs import define, field

from argspan.errors.context import FormattingContext, ParseErrorContext, TokenizeErrorContext
from argspan.errors.messages import handle, supersedes
from argspan.errors.report import RenderOptions, Report

if TYPE_CHECKING:
    from argspan.command import Command
    from argspan.errors.protocols import ErrorFormatter
    from argspan.errors.thresholds import Thresholds
    from argspan.parsing.parser import Parser
    from argspan.token import Token

logger = logging.getLogger(__name__)


def _without_superseded(reports: list[Report]) -> list[Report]:
    return [
        report
        for report in reports
        if not any(other is not report and supersedes(other.error, report.error) for other in reports)
    ]


@define
class LevelReport:
    """All errors raised by one command level, after de-duplication."""

    command: "Command"
    thresholds: "Thresholds"
    reports: list[Report] = field(factory=list)

    @property
    def failed(self) -> bool:
        return any(report.level.is_in_minimum(self.thresholds.exit) for report in self.reports)  # pyright: ignore

    @property
    def displayed(self) -> list[Report]:
        return [report for report in self.reports if report.level.is_in_minimum(self.thresholds.display)]  # pyright: ignore


class ErrorHandler:
    """Collects the errors of every parsed command level and renders them.

    Parameters
    ----------
    input: str
        The whole input string.
    tokens: Sequence[Token]
        The flat token list of every command level.
    """

    def __init__(self, input: str, tokens: Sequence["Token"]):
        self.input = input
        self.tokens = tuple(tokens)
        self.levels: list[LevelReport] = []

    def add_level(self, parser: "Parser") -> LevelReport:
        """Describe the tokenize and parse errors of a single command level."""
        tokenizer = parser.tokenizer
        command = parser.command

        tokenize_ctx = TokenizeErrorContext(command=command, input=self.input, offset=tokenizer.char_offset)
        parse_ctx = ParseErrorContext(
            command=command, tokens=self.tokens, offset=tokenizer.token_offset, count=len(tokenizer.tokens)
        )

        reports = [self._describe(error, tokenize_ctx) for error in tokenizer.errors]
        reports.extend(self._describe(error, parse_ctx) for error in parser.errors)

        level = LevelReport(command, command.resolved_thresholds(), _without_superseded(reports))
        logger.debug("Command %r reported %d error(s).", command.name, len(level.reports))
        self.levels.append(level)
        return level

    @staticmethod
    def _describe(error, ctx) -> Report:
        fmt = handle(error, FormattingContext(), ctx)
        return Report(error=error, context=ctx, content=fmt.content, highlight=fmt.highlight_options)

    @property
    def reports(self) -> list[Report]:
        """Displayed errors of every level, ordered by their position in the input."""
        return sorted((report for level in self.levels for report in level.displayed), key=lambda r: r.sort_key)

    @property
    def failed(self) -> bool:
        return any(level.failed for level in self.levels)

    @property
    def error_code(self) -> int:
        """Bitwise OR of the error codes of every command level that failed."""
        code = 0
        for level in self.levels:
            if level.failed:
                code |= level.command.resolved_error_code()
        return code

    def render(self, formatter: "ErrorFormatter", options: RenderOptions) -> list[str]:
        return [formatter(report, options) for report in self.reports]


def collect(input: str, tokens: Iterable["Token"], parsers: Iterable["Parser"]) -> ErrorHandler:
    handler = ErrorHandler(input, tuple(tokens))
    for parser in parsers:
        handler.add_level(parser)
    return handler
