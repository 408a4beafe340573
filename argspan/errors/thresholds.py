from typing import Optional

from attrs import field

from argspan.errors.level import ErrorLevel
from argspan.exceptions import ErrorLevelConfigError
from argspan.utils import frozen

DEFAULT_EXIT = ErrorLevel.ERROR
DEFAULT_DISPLAY = ErrorLevel.INFO


def _level_converter(value: ErrorLevel | str | None) -> ErrorLevel | None:
    if value is None or isinstance(value, ErrorLevel):
        return value
    return ErrorLevel[value.upper()]


def check_consistency(exit: ErrorLevel, display: ErrorLevel) -> None:
    if exit < display:
        raise ErrorLevelConfigError(exit=exit, display=display)


@frozen(kw_only=True)
class Thresholds:
    """Severity thresholds of a command.

    Unset (:obj:`None`) thresholds are inherited from the parent command, falling back to
    ``ERROR`` for ``exit`` and ``INFO`` for ``display``.
    """

    exit: ErrorLevel | None = field(default=None, converter=_level_converter)
    """Errors at or above this level make the parse fail."""

    display: ErrorLevel | None = field(default=None, converter=_level_converter)
    """Errors at or above this level are shown."""

    def __attrs_post_init__(self):
        if self.exit is not None and self.display is not None:
            check_consistency(self.exit, self.display)

    def resolve(self, parent: Optional["Thresholds"] = None) -> "Thresholds":
        """Fill unset levels from ``parent`` (or the defaults) and validate the result."""
        if parent is None:
            parent = Thresholds(exit=DEFAULT_EXIT, display=DEFAULT_DISPLAY)
        exit = parent.exit if self.exit is None else self.exit
        display = parent.display if self.display is None else self.display
        return Thresholds(exit=exit, display=display)
