import math

from attrs import field

from argspan.utils import frozen, plural


def _max_converter(value: int | float | None) -> int | float:
    return math.inf if value is None else value


@frozen
class Range:
    """Inclusive ``[min, max]`` bounds on how many values (or usages) are accepted.

    ``max`` may be :obj:`math.inf` (pass :obj:`None`) for "unbounded".
    """

    min: int = 0
    max: int | float = field(default=None, converter=_max_converter)

    def __attrs_post_init__(self):
        if self.min < 0:
            raise ValueError(f"Range minimum must be non-negative, got {self.min}.")
        if self.max < self.min:
            raise ValueError(f"Range maximum ({self.max}) is smaller than its minimum ({self.min}).")

    @classmethod
    def exactly(cls, count: int) -> "Range":
        return cls(count, count)

    @property
    def is_zero(self) -> bool:
        return self.max == 0

    @property
    def is_unbounded(self) -> bool:
        return math.isinf(self.max)

    def __contains__(self, count: int) -> bool:
        return self.min <= count <= self.max

    def message(self, kind: str) -> str:
        """Human readable description, e.g. ``"from 1 to 3 values"`` or ``"2 usages"``."""
        if self.min == self.max:
            return f"{self.min} {plural(kind, self.min)}"
        if self.is_unbounded:
            if self.min == 0:
                return f"any number of {plural(kind, 2)}"
            return f"at least {self.min} {plural(kind, self.min)}"
        return f"from {self.min} to {self.max} {plural(kind, 2)}"


NONE = Range(0, 0)
ONE = Range(1, 1)
ANY = Range(0, None)
AT_LEAST_ONE = Range(1, None)
