from typing import TYPE_CHECKING

from attrs import define, field

from argspan.utils import frozen

if TYPE_CHECKING:
    from argspan.command import Command
    from argspan.token import Token


@frozen
class Highlight:
    """What part of the input an error points at.

    Indices are relative to the command level of the error, and inclusive.
    """

    start: int
    end: int | None = None
    """Last highlighted index. :obj:`None` marks a zero-width point right before ``start``."""

    arrows: bool = False
    """Always draw arrows, even when styled output is available."""

    @property
    def is_point(self) -> bool:
        return self.end is None

    def shifted(self, amount: int) -> "Highlight":
        return Highlight(self.start + amount, None if self.end is None else self.end + amount, self.arrows)


@define
class FormattingContext:
    """Filled in by :func:`~argspan.errors.messages.handle` for a single error."""

    content: str = ""
    highlight_options: Highlight | None = None

    def with_content(self, content: str) -> "FormattingContext":
        self.content = content
        return self

    def highlight(self, start: int, offset: int = 0, *, arrows: bool = False) -> "FormattingContext":
        """Highlight ``offset + 1`` consecutive positions starting at ``start``."""
        self.highlight_options = Highlight(start, start + max(offset, 0), arrows)
        return self

    def point(self, index: int) -> "FormattingContext":
        """Place an arrow right before ``index``."""
        self.highlight_options = Highlight(index, None, True)
        return self


@frozen(kw_only=True)
class ParseErrorContext:
    """Translates token indices of one command level into the flat token list."""

    command: "Command"
    tokens: tuple["Token", ...] = field(hash=False)
    offset: int
    """Absolute index of the first token of this command level."""

    count: int
    """Number of tokens belonging to this command level."""

    @property
    def program(self) -> str:
        return self.command.root.name

    def absolute_index(self, index: int) -> int:
        return self.offset + index


@frozen(kw_only=True)
class TokenizeErrorContext:
    """Translates character indices of one command level into the whole input string."""

    command: "Command"
    input: str
    offset: int
    """Absolute index of the first character of this command level's input."""

    @property
    def program(self) -> str:
        return self.command.root.name

    def absolute_index(self, index: int) -> int:
        return self.offset + index


ErrorContext = ParseErrorContext | TokenizeErrorContext
