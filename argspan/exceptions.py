"""Exceptions raised for programming mistakes.

Problems with the *user's* input are never raised; they are collected as diagnostics
(see :mod:`argspan.errors`) and reported through :class:`~argspan.result.ParseResult`.
"""

from typing import TYPE_CHECKING, Any, Optional

from attrs import define

if TYPE_CHECKING:
    from argspan.argument import Argument
    from argspan.command import Command
    from argspan.group import Group

__all__ = [
    "ArgspanError",
    "ArgumentAlreadyExistsError",
    "ArgumentNotFoundError",
    "CommandAlreadyExistsError",
    "CommandNotFoundError",
    "ErrorLevelConfigError",
    "GroupAlreadyExistsError",
    "InvalidArgumentError",
    "ParserStateError",
]


@define
class ArgspanError(Exception):
    """Root exception for integration errors.

    These indicate a bug in the program declaring the schema, not bad command-line input.
    """

    msg: str | None = None
    """
    If set, override automatic message generation.
    """

    def __str__(self):
        return "" if self.msg is None else self.msg


@define(kw_only=True)
class InvalidArgumentError(ArgspanError):
    """An :class:`.Argument` was declared with an invalid configuration."""


@define(kw_only=True)
class _AlreadyExistsError(ArgspanError):
    kind: str = "object"
    name: str = ""
    container: Optional["Command | Group"] = None

    def __str__(self):
        if self.msg is not None:
            return self.msg
        where = f" in {type(self.container).__name__.lower()} {self.container.name!r}" if self.container else ""
        return f"{self.kind.capitalize()} {self.name!r} already exists{where}."


@define(kw_only=True)
class ArgumentAlreadyExistsError(_AlreadyExistsError):
    """An argument with the same name has already been added."""

    kind: str = "argument"
    argument: Optional["Argument"] = None


@define(kw_only=True)
class CommandAlreadyExistsError(_AlreadyExistsError):
    """A subcommand with the same name has already been added."""

    kind: str = "command"


@define(kw_only=True)
class GroupAlreadyExistsError(_AlreadyExistsError):
    """A group with the same name has already been added."""

    kind: str = "group"


@define(kw_only=True)
class ArgumentNotFoundError(ArgspanError):
    """Lookup of an argument that was never declared."""

    name: Any = None

    def __str__(self):
        return self.msg if self.msg is not None else f"Argument {self.name!r} not found."


@define(kw_only=True)
class CommandNotFoundError(ArgspanError):
    """Lookup of a subcommand that was never declared."""

    name: str = ""

    def __str__(self):
        return self.msg if self.msg is not None else f"Command {self.name!r} not found."


@define(kw_only=True)
class ErrorLevelConfigError(ArgspanError):
    """The exit threshold would let failing errors go unreported."""

    exit: Any = None
    display: Any = None

    def __str__(self):
        if self.msg is not None:
            return self.msg
        return (
            f"Exit threshold {self.exit.name} is less severe than display threshold {self.display.name}; "
            "errors that fail the parse would not be shown."
        )


@define(kw_only=True)
class ParserStateError(ArgspanError):
    """A one-shot tokenizer/parser was re-entered, or read before it finished."""
