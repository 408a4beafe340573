"""Lexical errors raised while splitting the input into tokens.

Indices are character positions within the input of the command level that raised them.
"""

from argspan.errors.level import ErrorLevel
from argspan.utils import frozen

__all__ = [
    "TokenizeError",
    "TupleAlreadyOpen",
    "TupleNotClosed",
    "UnexpectedTupleClose",
    "StringNotClosed",
    "SpaceRequired",
]


@frozen(kw_only=True)
class TokenizeError:
    index: int
    level: ErrorLevel = ErrorLevel.ERROR


@frozen(kw_only=True)
class TupleAlreadyOpen(TokenizeError):
    """A tuple was opened while another one was still open."""


@frozen(kw_only=True)
class TupleNotClosed(TokenizeError):
    """The input ended inside a tuple. ``index`` is where that tuple was opened."""


@frozen(kw_only=True)
class UnexpectedTupleClose(TokenizeError):
    """A tuple was closed without being opened first."""


@frozen(kw_only=True)
class StringNotClosed(TokenizeError):
    """The input ended inside a quoted string. ``index`` is the opening quote."""


@frozen(kw_only=True)
class SpaceRequired(TokenizeError):
    """Two characters at ``index`` and ``index + 1`` must be separated by whitespace."""
