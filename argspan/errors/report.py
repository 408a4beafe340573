from argspan.errors.context import ErrorContext, Highlight, TokenizeErrorContext
from argspan.errors.level import ErrorLevel
from argspan.errors.parse import ParseError
from argspan.errors.tokenize import TokenizeError
from argspan.utils import frozen


@frozen(kw_only=True)
class RenderOptions:
    ansi: bool = False
    """Emit ANSI escape sequences for colors and highlighting."""

    width: int = 110
    """Wrap message lines at this many characters."""


@frozen(kw_only=True)
class Report:
    """An error paired with everything a formatter needs to render it."""

    error: ParseError | TokenizeError
    context: ErrorContext
    content: str
    highlight: Highlight | None = None

    @property
    def level(self) -> ErrorLevel:
        return self.error.level

    @property
    def is_lexical(self) -> bool:
        return isinstance(self.context, TokenizeErrorContext)

    @property
    def absolute_highlight(self) -> Highlight | None:
        """:attr:`highlight` translated to indices into the flat token list (or whole input)."""
        if self.highlight is None:
            return None
        return self.highlight.shifted(self.context.offset)

    @property
    def sort_key(self) -> tuple[int, int]:
        # Lexical errors come first; their indices are characters, not tokens.
        highlight = self.absolute_highlight
        position = self.context.offset if highlight is None else highlight.start
        return (0 if self.is_lexical else 1, position)
