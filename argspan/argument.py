from typing import TYPE_CHECKING, Any, Optional

from attrs import define, field

from argspan.argument_types import ArgumentType, String
from argspan.exceptions import InvalidArgumentError
from argspan.utils import UNSET, is_valid_name, to_tuple_converter

if TYPE_CHECKING:
    from argspan.command import Command
    from argspan.group import Group

PREFIX_CHARS = "-+/@%^!~?=:"
"""Characters an argument name may be prefixed with."""


def _names_converter(value) -> tuple[str, ...]:
    # Preserve declaration order while removing duplicates.
    return tuple(dict.fromkeys(to_tuple_converter(value)))


def _names_validator(instance, attribute, value: tuple[str, ...]):
    if not value:
        raise InvalidArgumentError(msg="An argument needs at least one name.")
    for name in value:
        if not is_valid_name(name):
            raise InvalidArgumentError(msg=f"Invalid argument name {name!r}.")


def _prefix_validator(instance, attribute, value: str):
    if len(value) != 1 or value not in PREFIX_CHARS:
        raise InvalidArgumentError(msg=f"Invalid prefix {value!r}; must be one of {PREFIX_CHARS!r}.")


@define(eq=False)
class Argument:
    """A named (or positional) argument of a :class:`.Command`.

    Schema objects are only mutated while the command tree is being built; parsing
    never modifies them.
    """

    _names: tuple[str, ...] = field(alias="names", converter=_names_converter, validator=_names_validator)
    """
    Names the argument can be referred by, without prefix.
    Single-character names can be grouped into short-flag clusters (``-abc``).
    """

    type: ArgumentType = field(factory=String, kw_only=True)
    """Decides how many values the argument takes and how they are converted."""

    prefix: str = field(default="-", kw_only=True, validator=_prefix_validator)
    """
    Character in front of the argument's name.
    Both a single and a doubled prefix are accepted (``-name`` and ``--name``).
    """

    positional: bool = field(default=False, kw_only=True)
    """Also accept values by position, without the argument's name."""

    required: bool = field(default=False, kw_only=True)

    unique: bool = field(default=False, kw_only=True)
    """
    When used, required arguments of this command (and its parents) are no longer required,
    and no other argument of the command may be used.
    """

    default: Any = field(default=UNSET, kw_only=True)
    """Value when the argument is not used. Falls back to the type's ``initial_value``."""

    description: str = field(default="", kw_only=True)

    group: Optional["Group"] = field(default=None, init=False, repr=False)
    command: Optional["Command"] = field(default=None, init=False, repr=False)

    def __attrs_post_init__(self):
        if self.positional and self.type.value_count.is_zero:
            raise InvalidArgumentError(msg=f"Positional argument {self.name!r} must take at least one value.")

    @property
    def names(self) -> tuple[str, ...]:
        return self._names

    @property
    def name(self) -> str:
        """The longest name; used when referring to the argument in messages."""
        return max(self._names, key=len)

    def has_name(self, name: str) -> bool:
        return name in self._names

    def matches(self, word: str) -> bool:
        """Whether ``word`` is one of the names with a single or doubled prefix."""
        return any(word in (self.prefix + name, self.prefix * 2 + name) for name in self._names)

    def matches_char(self, char: str, prefix: str) -> bool:
        """Whether ``char`` is a single-character name and ``prefix`` is this argument's prefix."""
        return prefix == self.prefix and char in self._names

    def resolve_default(self) -> Any:
        return self.type.initial_value if self.default is UNSET else self.default
