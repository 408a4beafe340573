from enum import Enum


class TupleChars(Enum):
    """Character pairs that may delimit a tuple of values."""

    SQUARE_BRACKETS = ("[", "]")
    PARENTHESES = ("(", ")")
    BRACES = ("{", "}")
    ANGLE_BRACKETS = ("<", ">")

    @property
    def open(self) -> str:
        return self.value[0]

    @property
    def close(self) -> str:
        return self.value[1]

    @classmethod
    def _missing_(cls, value):
        # Allow ``TupleChars("()")``.
        if isinstance(value, str):
            for member in cls:
                if "".join(member.value) == value:
                    return member
        return None
