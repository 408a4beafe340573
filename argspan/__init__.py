# Keep in sync with pyproject.toml.
__version__ = "0.0.0"

__all__ = [
    "Argument",
    "ArgumentParser",
    "ArgspanError",
    "Command",
    "ErrorLevel",
    "Group",
    "ParseResult",
    "ParsedArguments",
    "Range",
    "Thresholds",
    "Token",
    "TokenType",
    "TupleChars",
    "UNSET",
    "argument_types",
    "errors",
]

from argspan import argument_types, errors
from argspan.argument import Argument
from argspan.command import Command
from argspan.core import ArgumentParser
from argspan.errors.level import ErrorLevel
from argspan.errors.thresholds import Thresholds
from argspan.exceptions import ArgspanError
from argspan.group import Group
from argspan.result import ParsedArguments, ParseResult
from argspan.token import Token, TokenType
from argspan.tuple_chars import TupleChars
from argspan.utils import UNSET
from argspan.value_count import Range
