from collections.abc import Iterator
from typing import TYPE_CHECKING, Any, Optional

from attrs import define, field

from argspan.utils import frozen

if TYPE_CHECKING:
    from argspan.argument import Argument
    from argspan.command import Command
    from argspan.errors.report import Report
    from argspan.token import Token

ROUTE_SEPARATOR = "."


@define(eq=False)
class ParsedArguments:
    """Resolved values of one invoked command level."""

    command: "Command"
    values: dict["Argument", Any]
    usages: dict["Argument", int] = field(factory=dict, repr=False)
    sub: Optional["ParsedArguments"] = None
    """The invoked subcommand, if any."""

    def _resolve(self, route: "str | Argument") -> tuple[Optional["ParsedArguments"], "Argument"]:
        if not isinstance(route, str):
            level: ParsedArguments | None = self
            while level is not None and level.command is not route.command:
                level = level.sub
            return level, route

        *commands, name = route.split(ROUTE_SEPARATOR)
        command = self.command
        level = self
        for command_name in commands:
            command = command.get_command(command_name)
            level = level.sub if level is not None and level.sub is not None and level.sub.command is command else None
        return level, command.get_argument(name)

    def get(self, route: "str | Argument", default: Any = None) -> Any:
        """Value of an argument, e.g. ``parsed.get("sub.another.number")``.

        Returns ``default`` if the argument resolved to :obj:`None`, or if any command along
        the route was not invoked.

        Raises
        ------
        CommandNotFoundError
            A command along the route does not exist.
        ArgumentNotFoundError
            The argument does not exist.
        """
        level, argument = self._resolve(route)
        if level is None:
            return default
        value = level.values.get(argument)
        return default if value is None else value

    def __getitem__(self, route: "str | Argument") -> Any:
        return self.get(route)

    def used(self, route: "str | Argument") -> bool:
        """Whether the argument was given on the command line."""
        level, argument = self._resolve(route)
        return level is not None and level.usages.get(argument, 0) > 0

    def __contains__(self, route: "str | Argument") -> bool:
        return self.used(route)

    def subcommand(self, name: str) -> Optional["ParsedArguments"]:
        """The parsed subcommand ``name``; :obj:`None` if it was not invoked."""
        command = self.command.get_command(name)
        if self.sub is not None and self.sub.command is command:
            return self.sub
        return None

    def __iter__(self) -> Iterator["ParsedArguments"]:
        level: ParsedArguments | None = self
        while level is not None:
            yield level
            level = level.sub

    @property
    def invoked(self) -> tuple["Command", ...]:
        """Invoked commands, root first."""
        return tuple(level.command for level in self)

    def as_dict(self) -> dict[str, Any]:
        """Values keyed by argument name, with subcommands nested under their name."""
        result: dict[str, Any] = {argument.name: value for argument, value in self.values.items()}
        if self.sub is not None:
            result[self.sub.command.name] = self.sub.as_dict()
        return result


@frozen(kw_only=True)
class ParseResult:
    """Everything produced by :meth:`.ArgumentParser.parse`."""

    parsed: ParsedArguments = field(hash=False)
    tokens: tuple["Token", ...]
    reports: tuple["Report", ...] = field(hash=False)
    """Displayed errors, in input order."""

    errors: tuple[str, ...]
    """Rendered :attr:`reports`."""

    failed: bool
    error_code: int
    """Bitwise OR of the error codes of every failed command; ``0`` on success."""

    forward_value: str | None = None
    """Everything after a ``--`` separator, verbatim."""

    def get(self, route: "str | Argument", default: Any = None) -> Any:
        return self.parsed.get(route, default)

    def __getitem__(self, route: "str | Argument") -> Any:
        return self.parsed[route]

    @property
    def invoked(self) -> tuple["Command", ...]:
        return self.parsed.invoked


