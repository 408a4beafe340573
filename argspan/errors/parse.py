"""Structural and conversion errors raised while matching tokens against a :class:`.Command`.

Indices are token positions relative to the first token of the command level that raised them.
"""

from typing import TYPE_CHECKING

from attrs import field

from argspan.errors.level import ErrorLevel
from argspan.utils import frozen

if TYPE_CHECKING:
    from argspan.argument import Argument
    from argspan.group import Group

__all__ = [
    "ParseError",
    "IncorrectValueNumber",
    "IncorrectUsagesCount",
    "RequiredArgumentNotUsed",
    "UnmatchedToken",
    "UnmatchedInArgNameList",
    "MultipleArgsInRestrictedGroupUsed",
    "UniqueArgumentUsed",
    "SimilarArgument",
    "ArgumentTypeError",
]


@frozen(kw_only=True)
class ParseError:
    index: int
    level: ErrorLevel = ErrorLevel.ERROR


@frozen(kw_only=True)
class IncorrectValueNumber(ParseError):
    argument: "Argument"
    received: int
    """Number of values found, excluding tuple delimiters."""

    in_name_list: bool = False
    """Value was packed into a short-flag cluster; ``index`` is the cluster token."""

    in_tuple: bool = False
    """Values were given as a tuple; ``index`` is the opening delimiter."""


@frozen(kw_only=True)
class IncorrectUsagesCount(ParseError):
    argument: "Argument"
    usages: int


@frozen(kw_only=True)
class RequiredArgumentNotUsed(ParseError):
    argument: "Argument"


@frozen(kw_only=True)
class UnmatchedToken(ParseError):
    contents: str
    level: ErrorLevel = ErrorLevel.WARNING


@frozen(kw_only=True)
class UnmatchedInArgNameList(ParseError):
    argument: "Argument"
    """The last flag of the cluster that was recognized."""

    value: str
    """Remainder of the cluster that could not be matched."""

    level: ErrorLevel = ErrorLevel.WARNING


@frozen(kw_only=True)
class MultipleArgsInRestrictedGroupUsed(ParseError):
    group: "Group"
    end: int
    """Index of the token that broke the restriction. ``index`` is the first member used."""


@frozen(kw_only=True)
class UniqueArgumentUsed(ParseError):
    argument: "Argument"


@frozen(kw_only=True)
class SimilarArgument(ParseError):
    argument: "Argument"
    level: ErrorLevel = ErrorLevel.WARNING


@frozen(kw_only=True)
class ArgumentTypeError(ParseError):
    """Raised by an :class:`~argspan.argument_types.ArgumentType` while converting values."""

    argument: "Argument"
    message: str
    offset: int = field(default=0)
    """Number of additional tokens after ``index`` to highlight."""

    @offset.validator
    def _offset_validator(self, attribute, value):
        if value < 0:
            raise ValueError("offset must be non-negative.")
