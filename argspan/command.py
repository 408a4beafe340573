from collections.abc import Iterator
from typing import TYPE_CHECKING, Optional

from attrs import define, field

from argspan.argument import PREFIX_CHARS, Argument
from argspan.argument_types import Boolean
from argspan.errors.thresholds import Thresholds
from argspan.exceptions import (
    ArgumentAlreadyExistsError,
    ArgumentNotFoundError,
    CommandAlreadyExistsError,
    CommandNotFoundError,
    GroupAlreadyExistsError,
    InvalidArgumentError,
)
from argspan.tuple_chars import TupleChars
from argspan.utils import is_valid_name

if TYPE_CHECKING:
    from argspan.group import Group

DEFAULT_ERROR_CODE = 1


def _tuple_chars_converter(value: TupleChars | str | None) -> TupleChars | None:
    if value is None or isinstance(value, TupleChars):
        return value
    return TupleChars(value)


def _name_validator(instance, attribute, value: str):
    if not is_valid_name(value):
        raise InvalidArgumentError(msg=f"Invalid command name {value!r}.")


@define(eq=False)
class Command:
    """A level of the command tree: its arguments, groups and subcommands.

    ``error_code``, ``tuple_chars`` and ``thresholds`` are inherited from the parent
    command when left as :obj:`None`.
    """

    name: str = field(validator=_name_validator)

    description: str = ""

    _error_code: int | None = field(default=None, alias="error_code", kw_only=True)
    """Contributed to the exit code when this command fails. Defaults to ``1``."""

    _tuple_chars: TupleChars | None = field(
        default=None, alias="tuple_chars", converter=_tuple_chars_converter, kw_only=True
    )
    """Characters delimiting a tuple of values. Defaults to square brackets."""

    _thresholds: Thresholds | None = field(default=None, alias="thresholds", kw_only=True)

    add_help: bool = field(default=True, kw_only=True)
    """Add a unique ``--help``/``-h`` flag."""

    arguments: list[Argument] = field(factory=list, init=False)
    groups: list["Group"] = field(factory=list, init=False)
    subcommands: list["Command"] = field(factory=list, init=False)
    parent: Optional["Command"] = field(default=None, init=False, repr=False)

    def __attrs_post_init__(self):
        # Raises ErrorLevelConfigError for thresholds inconsistent with the defaults.
        self.resolved_thresholds()
        if self.add_help:
            self.add_argument(
                Argument(("help", "h"), type=Boolean(), unique=True, description="Show this help message and exit.")
            )

    ###################
    # Building        #
    ###################
    def add_argument(self, argument: Argument) -> Argument:
        if argument.command is self:
            return argument
        if argument.command is not None:
            raise ArgumentAlreadyExistsError(name=argument.name, container=argument.command, argument=argument)
        for existing in self.arguments:
            if any(existing.has_name(name) for name in argument.names):
                raise ArgumentAlreadyExistsError(name=argument.name, container=self, argument=argument)
        argument.command = self
        self.arguments.append(argument)
        return argument

    def add_group(self, group: "Group") -> "Group":
        if any(existing.name == group.name for existing in self.groups):
            raise GroupAlreadyExistsError(name=group.name, container=self)
        self.groups.append(group)
        self._attach_group(group)
        return group

    def _attach_group(self, group: "Group"):
        for sub in group.walk():
            sub.command = self
        for argument in group.all_arguments():
            self.add_argument(argument)

    def add_command(self, command: "Command") -> "Command":
        if command is self or command.parent is not None or self.find_command(command.name) is not None:
            raise CommandAlreadyExistsError(name=command.name, container=self)
        command.parent = self
        self.subcommands.append(command)
        # Inconsistent inherited thresholds are reported while building, not while parsing.
        for sub in command.walk():
            sub.resolved_thresholds()
        return command

    ###################
    # Queries         #
    ###################
    @property
    def root(self) -> "Command":
        command = self
        while command.parent is not None:
            command = command.parent
        return command

    @property
    def path(self) -> tuple["Command", ...]:
        """Commands from the root down to (and including) this one."""
        chain = []
        command: Command | None = self
        while command is not None:
            chain.append(command)
            command = command.parent
        return tuple(reversed(chain))

    @property
    def positional_arguments(self) -> list[Argument]:
        return [argument for argument in self.arguments if argument.positional]

    def walk(self) -> Iterator["Command"]:
        """Yield this command and all of its descendants, depth first."""
        yield self
        for command in self.subcommands:
            yield from command.walk()

    def find_command(self, name: str) -> Optional["Command"]:
        for command in self.subcommands:
            if command.name == name:
                return command
        return None

    def get_command(self, name: str) -> "Command":
        if (command := self.find_command(name)) is None:
            raise CommandNotFoundError(name=name)
        return command

    def find_argument(self, name: str) -> Argument | None:
        """Argument by any of its names, without prefix."""
        for argument in self.arguments:
            if argument.has_name(name):
                return argument
        return None

    def get_argument(self, name: str) -> Argument:
        if (argument := self.find_argument(name)) is None:
            raise ArgumentNotFoundError(name=name)
        return argument

    def match_argument(self, word: str) -> Argument | None:
        """Argument whose prefixed name is exactly ``word``."""
        if len(word) < 2:
            return None
        for argument in self.arguments:
            if argument.matches(word):
                return argument
        return None

    def argument_by_char(self, char: str, prefix: str) -> Argument | None:
        for argument in self.arguments:
            if argument.matches_char(char, prefix):
                return argument
        return None

    def similar_argument(self, word: str) -> Argument | None:
        """Argument named like ``word`` once its prefix is removed, if the prefix differs."""
        name = word.lstrip(PREFIX_CHARS)
        if not name or name == word:
            return None
        argument = self.find_argument(name)
        if argument is None or argument.matches(word):
            return None
        return argument

    def is_name_list(self, word: str) -> bool:
        """Whether ``word`` is a cluster of single-character names, e.g. ``-abc``.

        At least the first character after the prefix must be the name of an argument declared
        with that prefix; matching stops at the first character that is not.
        """
        if len(word) < 2 or not word[1].isalpha():
            return False
        return self.argument_by_char(word[1], word[0]) is not None

    def is_argument_specifier(self, word: str) -> bool:
        return self.match_argument(word) is not None or self.is_name_list(word)

    ###################
    # Inherited       #
    ###################
    def resolved_error_code(self) -> int:
        for command in reversed(self.path):
            if command._error_code is not None:
                return command._error_code
        return DEFAULT_ERROR_CODE

    def resolved_tuple_chars(self) -> TupleChars:
        for command in reversed(self.path):
            if command._tuple_chars is not None:
                return command._tuple_chars
        return TupleChars.SQUARE_BRACKETS

    def resolved_thresholds(self) -> Thresholds:
        """Thresholds of this command, with unset levels taken from its parents.

        Raises
        ------
        ErrorLevelConfigError
            The resolved exit threshold is less severe than the display threshold.
        """
        resolved = None
        for command in self.path:
            resolved = (command._thresholds or Thresholds()).resolve(resolved)
        assert resolved is not None
        return resolved
