"""Diagnostics for problems found in the user's input."""

__all__ = [
    "ArgumentTypeError",
    "ErrorFormatter",
    "ErrorHandler",
    "ErrorLevel",
    "FormattingContext",
    "Highlight",
    "IncorrectUsagesCount",
    "IncorrectValueNumber",
    "MultipleArgsInRestrictedGroupUsed",
    "ParseError",
    "ParseErrorContext",
    "PrettyFormatter",
    "RenderOptions",
    "Report",
    "RequiredArgumentNotUsed",
    "SimilarArgument",
    "SimpleFormatter",
    "SpaceRequired",
    "StringNotClosed",
    "Thresholds",
    "TokenizeError",
    "TokenizeErrorContext",
    "TupleAlreadyOpen",
    "TupleNotClosed",
    "UnexpectedTupleClose",
    "UniqueArgumentUsed",
    "UnmatchedInArgNameList",
    "UnmatchedToken",
    "handle",
    "supersedes",
]

from argspan.errors.context import FormattingContext, Highlight, ParseErrorContext, TokenizeErrorContext
from argspan.errors.formatters import PrettyFormatter, SimpleFormatter
from argspan.errors.handler import ErrorHandler
from argspan.errors.level import ErrorLevel
from argspan.errors.messages import handle, supersedes
from argspan.errors.parse import (
    ArgumentTypeError,
    IncorrectUsagesCount,
    IncorrectValueNumber,
    MultipleArgsInRestrictedGroupUsed,
    ParseError,
    RequiredArgumentNotUsed,
    SimilarArgument,
    UniqueArgumentUsed,
    UnmatchedInArgNameList,
    UnmatchedToken,
)
from argspan.errors.protocols import ErrorFormatter
from argspan.errors.report import RenderOptions, Report
from argspan.errors.thresholds import Thresholds
from argspan.errors.tokenize import (
    SpaceRequired,
    StringNotClosed,
    TokenizeError,
    TupleAlreadyOpen,
    TupleNotClosed,
    UnexpectedTupleClose,
)
