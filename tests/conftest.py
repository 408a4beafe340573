import re

import pytest
from rich.console import Console

from argspan import Argument, ArgumentParser, Command, Range
from argspan.argument_types import Boolean, Counter, Float, Integer, Multiple, String, StringJoiner

_ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


@pytest.fixture
def console():
    return Console(width=70, force_terminal=True, highlight=False, color_system=None, legacy_windows=False)


@pytest.fixture
def parser():
    """Program ``Testing`` with a ``subcommand`` that has an ``another`` subcommand."""
    parser = ArgumentParser("Testing", ansi=False)
    parser.add_argument(
        Argument("what", type=StringJoiner(value_count=Range(1, 3)), positional=True, required=True)
    )
    parser.add_argument(Argument("a", type=Boolean()))
    parser.add_argument(Argument("double-adder", type=Float(usage_count=Range(2, 4))))

    subcommand = parser.add_command(Command("subcommand"))
    subcommand.add_argument(Argument("c", type=Counter()))
    subcommand.add_argument(Argument(("s", "more-strings"), type=Multiple(String())))

    another = subcommand.add_command(Command("another"))
    another.add_argument(Argument("ball", type=Boolean()))
    another.add_argument(Argument("number", type=Integer(), positional=True, required=True))
    return parser


@pytest.fixture
def strip_ansi():
    def inner(text: str) -> str:
        return _ANSI_RE.sub("", text)

    return inner


def _box(level: str, view: str, *lines: str) -> str:
    longest = max((len(line) for line in lines), default=0)
    body = "".join(f"\n │ {line}" for line in lines)
    return f" ┌─{level}\n{view}{body}\n └{'─' * max(longest - 5, 0)} ───── ── ─\n"


@pytest.fixture
def box():
    """Builds the expected output of the pretty formatter."""
    return _box
