from enum import Enum

from argspan.utils import escape_quotes, frozen


class TokenType(Enum):
    """Classification of a single lexical unit."""

    ARGUMENT_NAME = "argument_name"
    ARGUMENT_NAME_LIST = "argument_name_list"
    ARGUMENT_VALUE = "argument_value"
    TUPLE_START = "tuple_start"
    TUPLE_END = "tuple_end"
    SUBCOMMAND = "subcommand"
    FORWARD_VALUE = "forward_value"

    @property
    def color(self) -> str:
        return _COLORS[self]


@frozen
class Token:
    """One lexical unit produced by the :class:`~argspan.parsing.tokenizer.Tokenizer`."""

    type: TokenType
    contents: str

    def display(self) -> str:
        """Representation of the token as it should appear in an error report.

        Values that would not survive being re-split on whitespace are quoted.
        """
        if self.type is TokenType.ARGUMENT_VALUE and (not self.contents or " " in self.contents):
            return f'"{escape_quotes(self.contents)}"'
        return self.contents


_COLORS = {
    TokenType.ARGUMENT_NAME: "bright_green",
    TokenType.ARGUMENT_NAME_LIST: "bright_blue",
    TokenType.ARGUMENT_VALUE: "bright_yellow",
    TokenType.TUPLE_START: "bright_magenta",
    TokenType.TUPLE_END: "bright_magenta",
    TokenType.SUBCOMMAND: "bright_cyan",
    TokenType.FORWARD_VALUE: "bright_black",
}
