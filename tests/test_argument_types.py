import enum

import pytest

from argspan import UNSET, Argument, ArgumentParser
from argspan.argument_types import (
    ArgumentType,
    Boolean,
    Choice,
    ConversionScope,
    Counter,
    Float,
    Integer,
    IntRange,
    KeyValues,
    Multiple,
    Path,
    String,
    StringJoiner,
)
from argspan.errors import ArgumentTypeError, ErrorLevel
from argspan.value_count import ONE


class Color(enum.Enum):
    RED = 1
    GREEN = 2


class Even:
    """Integer that warns when odd."""

    value_count = ONE
    usage_count = ONE
    initial_value = None

    def convert(self, values, scope):
        value = int(values[0])
        if value % 2:
            scope.error("Odd number given.", level=ErrorLevel.WARNING)
        return value


@pytest.fixture
def reported():
    return []


@pytest.fixture
def scope(reported):
    return ConversionScope(argument=Argument("value"), index=4, sink=reported.append)


def messages(reported):
    return [error.message for error in reported]


@pytest.mark.parametrize(
    "type_",
    [Boolean(), Counter(), String(), StringJoiner(), Integer(), Float(), IntRange(0, 1), Choice(Color), Path()],
)
def test_builtin_types_satisfy_protocol(type_):
    assert isinstance(type_, ArgumentType)


def test_boolean(scope):
    assert Boolean().initial_value is False
    assert Boolean().convert([], scope) is True


def test_counter(scope):
    assert Counter().convert([], scope) == 1
    scope.previous = 2
    assert Counter().convert([], scope) == 3


def test_string_joiner(scope):
    assert StringJoiner().convert(["a", "b", "c"], scope) == "a b c"


@pytest.mark.parametrize(
    "type_, value, expected",
    [
        (Integer(), "5", 5),
        (Integer(), "-12", -12),
        (Float(), "2.5", 2.5),
        (Float(), "1e3", 1000.0),
        (IntRange(0, 10), "10", 10),
    ],
)
def test_numeric(scope, reported, type_, value, expected):
    assert type_.convert([value], scope) == expected
    assert reported == []


@pytest.mark.parametrize(
    "type_, value, message",
    [
        (Integer(), "bar", "Invalid integer value: 'bar'."),
        (Integer(), "2.5", "Invalid integer value: '2.5'."),
        (Float(), "x", "Invalid float value: 'x'."),
        (IntRange(0, 10), "11", "Value must be between 0 and 10."),
        (IntRange(0, 10), "a", "Invalid integer value: 'a'."),
    ],
)
def test_numeric_invalid(scope, reported, type_, value, message):
    assert type_.convert([value], scope) is UNSET
    assert reported == [ArgumentTypeError(index=4, argument=scope.argument, message=message)]


def test_int_range_invalid_bounds():
    with pytest.raises(ValueError):
        IntRange(5, 1)


def test_choice(scope, reported):
    assert Choice(Color).convert(["green"], scope) is Color.GREEN
    assert Choice(Color).convert(["RED"], scope) is Color.RED
    assert Choice(Color).convert(["blue"], scope) is UNSET
    assert messages(reported) == ["Invalid enum value: 'blue'."]


def test_path(scope, reported, tmp_path):
    assert Path().convert([str(tmp_path / "missing")], scope) == tmp_path / "missing"
    assert Path(must_exist=True).convert([str(tmp_path)], scope) == tmp_path
    assert Path(must_exist=True).convert(["does-not-exist"], scope) is UNSET
    assert messages(reported) == ["File not found: 'does-not-exist'."]


def test_multiple(scope, reported):
    assert Multiple(Integer()).convert(["1", "2"], scope) == (1, 2)

    assert Multiple(Integer()).convert(["1", "x", "y"], scope) is UNSET
    assert [error.index for error in reported] == [5, 6]


def test_multiple_pinned(scope, reported):
    scope.pinned = True
    assert Multiple(Integer()).convert(["x"], scope) is UNSET
    assert [error.index for error in reported] == [4]


def test_key_values(scope, reported):
    assert KeyValues().convert(["a=1", " b = two "], scope) == {"a": "1", "b": "two"}
    assert KeyValues(Integer()).convert(["a=1", "b=2"], scope) == {"a": 1, "b": 2}
    assert reported == []


@pytest.mark.parametrize(
    "values, message, index",
    [
        (["a=1", "b"], "Invalid key-value pair: 'b'.", 5),
        (["=1"], "Key cannot be empty.", 4),
        (["a=1", "a=2"], "Duplicate key: 'a'.", 5),
    ],
)
def test_key_values_invalid(scope, reported, values, message, index):
    assert KeyValues().convert(values, scope) is UNSET
    assert reported == [ArgumentTypeError(index=index, argument=scope.argument, message=message)]


def test_key_values_inner_error(scope, reported):
    assert KeyValues(Integer()).convert(["a=1", "b=x"], scope) is UNSET
    assert reported == [ArgumentTypeError(index=5, argument=scope.argument, message="Invalid integer value: 'x'.")]


def test_scope_error_offset_and_level(scope, reported):
    scope.error("Careful.", 1, offset=2, level=ErrorLevel.WARNING)
    assert reported == [
        ArgumentTypeError(index=5, argument=scope.argument, message="Careful.", offset=2, level=ErrorLevel.WARNING)
    ]


def test_argument_type_error_negative_offset(scope):
    with pytest.raises(ValueError):
        ArgumentTypeError(index=0, argument=scope.argument, message="", offset=-1)


def test_custom_type_warning(box):
    parser = ArgumentParser("prog", ansi=False)
    parser.add_argument(Argument("n", type=Even(), positional=True))

    result = parser.parse("3")
    assert not result.failed
    assert result["n"] == 3
    assert result.errors == (box("WARNING", "prog 3 <-", "Odd number given."),)
