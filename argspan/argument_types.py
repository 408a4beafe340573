"""Built-in argument types.

An argument type decides how many values an argument takes, how many times it may be used,
and how its raw strings become a Python value. Any object satisfying :class:`ArgumentType`
can be used; composite types (:class:`Multiple`, :class:`KeyValues`) wrap another type
instead of subclassing it.
"""

import enum
import pathlib
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from attrs import define, evolve, field

from argspan.errors.level import ErrorLevel
from argspan.errors.parse import ArgumentTypeError
from argspan.utils import UNSET, frozen
from argspan.value_count import ANY, AT_LEAST_ONE, NONE, ONE, Range

if TYPE_CHECKING:
    from argspan.argument import Argument

__all__ = [
    "ArgumentType",
    "Boolean",
    "Choice",
    "ConversionScope",
    "Counter",
    "Float",
    "IntRange",
    "Integer",
    "KeyValues",
    "Multiple",
    "Path",
    "String",
    "StringJoiner",
]


@define(kw_only=True)
class ConversionScope:
    """Handed to :meth:`ArgumentType.convert` to report problems with the values.

    Indices given to :meth:`error` are relative to the first value being converted.
    """

    argument: "Argument"

    previous: Any = None
    """Value of the argument after its previous usage, or the type's ``initial_value``."""

    index: int = 0
    """Token index (relative to the command level) of the first value."""

    pinned: bool = False
    """All values come from a single token, so every error points at :attr:`index`."""

    sink: Callable[[ArgumentTypeError], None]

    def error(self, message: str, index: int = 0, *, offset: int = 0, level: ErrorLevel = ErrorLevel.ERROR) -> None:
        """Report a problem with the value at ``index``, spanning ``offset`` additional values."""
        self.sink(
            ArgumentTypeError(
                index=self.index if self.pinned else self.index + index,
                argument=self.argument,
                message=message,
                offset=0 if self.pinned else offset,
                level=level,
            )
        )

    def child(self, index: int, previous: Any = None) -> "ConversionScope":
        """Scope for a wrapped type converting the values starting at ``index``."""
        return evolve(self, index=self.index if self.pinned else self.index + index, previous=previous)


@runtime_checkable
class ArgumentType(Protocol):
    value_count: Range
    """How many values a single usage takes."""

    usage_count: Range
    """How many times the argument may be used."""

    initial_value: Any
    """Value of an argument that was never used and has no default."""

    def convert(self, values: Sequence[str], scope: ConversionScope) -> Any:
        """Convert the raw ``values`` of one usage.

        Returns :obj:`~argspan.UNSET` if the values could not be converted; the reason
        must be reported through ``scope``.
        """
        ...


@frozen(kw_only=True)
class Boolean:
    """Flag taking no values. ``True`` when used."""

    value_count: Range = NONE
    usage_count: Range = ONE
    initial_value: Any = False

    def convert(self, values, scope):
        return True


@frozen(kw_only=True)
class Counter:
    """Flag that counts how many times it was used."""

    value_count: Range = NONE
    usage_count: Range = ANY
    initial_value: Any = 0

    def convert(self, values, scope):
        return (scope.previous or 0) + 1


@frozen(kw_only=True)
class String:
    value_count: Range = ONE
    usage_count: Range = ONE
    initial_value: Any = None

    def convert(self, values, scope):
        return values[0]


@frozen(kw_only=True)
class StringJoiner:
    """Join all values with a space."""

    value_count: Range = AT_LEAST_ONE
    usage_count: Range = ONE
    initial_value: Any = None

    def convert(self, values, scope):
        return " ".join(values)


def _numeric(kind: str, func: Callable[[str], Any], value: str, scope: ConversionScope):
    try:
        return func(value)
    except ValueError:
        scope.error(f"Invalid {kind} value: {value!r}.")
        return UNSET


@frozen(kw_only=True)
class Integer:
    value_count: Range = ONE
    usage_count: Range = ONE
    initial_value: Any = None

    def convert(self, values, scope):
        return _numeric("integer", int, values[0], scope)


@frozen(kw_only=True)
class Float:
    value_count: Range = ONE
    usage_count: Range = ONE
    initial_value: Any = None

    def convert(self, values, scope):
        return _numeric("float", float, values[0], scope)


@frozen
class IntRange:
    """Integer within ``[start, end]``."""

    start: int
    end: int
    value_count: Range = field(default=ONE, kw_only=True)
    usage_count: Range = field(default=ONE, kw_only=True)
    initial_value: Any = field(default=None, kw_only=True)

    def __attrs_post_init__(self):
        if self.start > self.end:
            raise ValueError(f"IntRange start ({self.start}) is greater than its end ({self.end}).")

    def convert(self, values, scope):
        value = _numeric("integer", int, values[0], scope)
        if value is UNSET:
            return UNSET
        if not self.start <= value <= self.end:
            scope.error(f"Value must be between {self.start} and {self.end}.")
            return UNSET
        return value


@frozen
class Choice:
    """Member of an :class:`~enum.Enum`, matched case-insensitively by name."""

    choices: type[enum.Enum]
    value_count: Range = field(default=ONE, kw_only=True)
    usage_count: Range = field(default=ONE, kw_only=True)
    initial_value: Any = field(default=None, kw_only=True)

    def convert(self, values, scope):
        value = values[0]
        for member in self.choices:
            if member.name.lower() == value.lower():
                return member
        scope.error(f"Invalid enum value: {value!r}.")
        return UNSET


@frozen(kw_only=True)
class Path:
    must_exist: bool = False
    value_count: Range = ONE
    usage_count: Range = ONE
    initial_value: Any = None

    def convert(self, values, scope):
        path = pathlib.Path(values[0])
        if self.must_exist and not path.exists():
            scope.error(f"File not found: {values[0]!r}.")
            return UNSET
        return path


@frozen
class Multiple:
    """Apply a single-value type to each of several values, producing a tuple."""

    inner: ArgumentType
    value_count: Range = field(default=AT_LEAST_ONE, kw_only=True)
    usage_count: Range = field(default=ONE, kw_only=True)
    initial_value: Any = field(default=None, kw_only=True)

    def convert(self, values, scope):
        converted = tuple(self.inner.convert([value], scope.child(i)) for i, value in enumerate(values))
        if any(value is UNSET for value in converted):
            return UNSET
        return converted


@frozen
class KeyValues:
    """``key=value`` pairs collected into a :class:`dict`. Values are converted with ``inner``."""

    inner: ArgumentType = field(factory=String)
    value_count: Range = field(default=AT_LEAST_ONE, kw_only=True)
    usage_count: Range = field(default=ONE, kw_only=True)
    initial_value: Any = field(default=None, kw_only=True)

    def convert(self, values, scope):
        result = {}
        failed = False
        for i, pair in enumerate(values):
            key, sep, raw = pair.partition("=")
            key = key.strip()
            if not sep:
                scope.error(f"Invalid key-value pair: {pair!r}.", i)
            elif not key:
                scope.error("Key cannot be empty.", i)
            elif key in result:
                scope.error(f"Duplicate key: {key!r}.", i)
            else:
                value = self.inner.convert([raw.strip()], scope.child(i))
                if value is not UNSET:
                    result[key] = value
                    continue
            failed = True
        return UNSET if failed else result
