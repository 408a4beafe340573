from collections.abc import Iterator
from typing import TYPE_CHECKING, Optional

from attrs import define, field

from argspan.exceptions import ArgumentAlreadyExistsError, GroupAlreadyExistsError

if TYPE_CHECKING:
    from argspan.argument import Argument
    from argspan.command import Command


@define(eq=False)
class Group:
    """A named collection of arguments and sub-groups.

    Groups only affect parsing when :attr:`restricted`.
    """

    name: str

    restricted: bool = field(default=False, kw_only=True)
    """
    At most one member (argument or sub-group) may be used per parse.
    Using any argument of a sub-group counts as using that sub-group.
    """

    arguments: list["Argument"] = field(factory=list, init=False)
    groups: list["Group"] = field(factory=list, init=False)
    parent: Optional["Group"] = field(default=None, init=False, repr=False)
    command: Optional["Command"] = field(default=None, init=False, repr=False)

    def add_argument(self, argument: "Argument") -> "Argument":
        if argument.group is not None:
            raise ArgumentAlreadyExistsError(name=argument.name, container=argument.group, argument=argument)
        argument.group = self
        self.arguments.append(argument)
        if self.command is not None:
            self.command.add_argument(argument)
        return argument

    def add_group(self, group: "Group") -> "Group":
        if any(existing.name == group.name for existing in self.groups):
            raise GroupAlreadyExistsError(name=group.name, container=self)
        group.parent = self
        self.groups.append(group)
        if self.command is not None:
            self.command._attach_group(group)
        return group

    def walk(self) -> Iterator["Group"]:
        """Yield this group and all of its sub-groups, depth first."""
        yield self
        for group in self.groups:
            yield from group.walk()

    def all_arguments(self) -> Iterator["Argument"]:
        for group in self.walk():
            yield from group.arguments
