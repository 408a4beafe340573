__all__ = [
    "PrettyFormatter",
    "SimpleFormatter",
]

from argspan.errors.formatters.pretty import PrettyFormatter
from argspan.errors.formatters.simple import SimpleFormatter
