from enum import IntEnum


class ErrorLevel(IntEnum):
    """Severity of a diagnostic. Higher values are more severe."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3

    @property
    def color(self) -> str:
        return _COLORS[self]

    def is_in_minimum(self, minimum: "ErrorLevel") -> bool:
        """Whether this level is at least as severe as ``minimum``."""
        return self >= minimum


_COLORS = {
    ErrorLevel.DEBUG: "green",
    ErrorLevel.INFO: "blue",
    ErrorLevel.WARNING: "yellow",
    ErrorLevel.ERROR: "red",
}
