"""To prevent circular dependencies, this module should never import anything else from argspan."""

import functools
import re
import textwrap
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any, Literal

# https://threeofwands.com/attra-iv-zero-overhead-frozen-attrs-classes/
if TYPE_CHECKING:
    from attrs import frozen
else:
    from attrs import define

    frozen = functools.partial(define, unsafe_hash=True)


class SentinelMeta(type):
    def __repr__(cls) -> str:
        return f"<{cls.__name__}>"

    def __bool__(cls) -> Literal[False]:
        return False


class Sentinel(metaclass=SentinelMeta):
    def __new__(cls):
        raise ValueError("Sentinel objects are not intended to be instantiated. Subclass instead.")


class UNSET(Sentinel):
    """Special sentinel value indicating that no data was provided. **Do not instantiate**."""


def is_iterable(obj) -> bool:
    if isinstance(obj, list | tuple | set | dict):  # Fast path for common types
        return True
    return not isinstance(obj, str) and isinstance(obj, Iterable)


def to_tuple_converter(value: None | Any | Iterable[Any]) -> tuple[Any, ...]:
    """Convert a single element or an iterable of elements into a tuple.

    Intended to be used in an ``attrs.Field``. If :obj:`None` is provided, returns an empty tuple.
    If a single element is provided, returns a tuple containing just that element.
    If an iterable is provided, converts it into a tuple.

    Parameters
    ----------
    value: Any | Iterable[Any] | None
        An element, an iterable of elements, or None.

    Returns
    -------
    tuple[Any, ...]: A tuple containing the elements.
    """
    if value is None:
        return ()
    elif is_iterable(value):
        return tuple(value)
    else:
        return (value,)


_NAME_RE = re.compile(r"^[\w-]+$")


def is_valid_name(name: str) -> bool:
    """Names may only contain word characters and dashes, and may not start with a dash."""
    return bool(_NAME_RE.match(name)) and not name.startswith("-")


def plural(word: str, count: int | float) -> str:
    return word if count == 1 else word + "s"


def escape_quotes(text: str, quote: str = '"') -> str:
    return text.replace(quote, "\\" + quote)


def longest_line(text: str) -> str:
    return max(text.splitlines() or [""], key=len)


def wrap(text: str, width: int) -> str:
    """Wrap every line of ``text`` to ``width``, keeping existing line breaks."""
    lines = []
    for line in text.splitlines():
        lines.extend(textwrap.wrap(line, width=width, break_long_words=False, break_on_hyphens=False) or [""])
    return "\n".join(lines)


def single_line(text: str) -> str:
    return " ".join(text.splitlines())
