from textwrap import dedent

import pytest

from argspan import Argument, ArgumentParser, Command, Group
from argspan.argument_types import Boolean
from argspan.errors import (
    ErrorFormatter,
    FormattingContext,
    Highlight,
    ParseErrorContext,
    PrettyFormatter,
    RenderOptions,
    RequiredArgumentNotUsed,
    SimilarArgument,
    SimpleFormatter,
    UnmatchedToken,
    handle,
    supersedes,
)

WHAT_NO_VALUES = ("Incorrect number of values for argument 'what'.", "Expected from 1 to 3 values, but got 0.")


@pytest.fixture
def simple(parser):
    parser.formatter = SimpleFormatter()
    return parser


def test_pretty_required_argument(parser, box):
    result = parser.parse("subcommand")
    assert result.errors == (box("ERROR", "Testing <- subcommand", "Required argument 'what' not used."),)


def test_pretty_required_argument_subcommand(parser, box):
    result = parser.parse("foo subcommand another")
    assert result.errors == (
        box(
            "ERROR",
            "Testing foo subcommand another <-",
            "Required argument 'number' for command 'another' not used.",
        ),
    )


def test_pretty_missing_values(parser, box):
    assert parser.parse("--what").errors == (box("ERROR", "Testing --what <-", *WHAT_NO_VALUES),)


def test_pretty_missing_values_before_subcommand(parser, box):
    assert parser.parse("--what subcommand").errors == (box("ERROR", "Testing --what <- subcommand", *WHAT_NO_VALUES),)


def test_pretty_too_many_values_in_tuple(parser, box):
    result = parser.parse("--what [1 2 3 4 5 6 7 8 9 10]")
    assert result.errors == (
        box(
            "ERROR",
            "Testing --what -> [ 1 2 3 4 5 6 7 8 9 10 ] <-",
            "Incorrect number of values for argument 'what'.",
            "Expected from 1 to 3 values, but got 10.",
        ),
    )


def test_pretty_empty_tuple(parser, box):
    assert parser.parse("--what []").errors == (box("ERROR", "Testing --what -> [ ] <-", *WHAT_NO_VALUES),)


def test_pretty_type_error(parser, box):
    result = parser.parse("foo subcommand another bar")
    assert result.errors == (box("ERROR", "Testing foo subcommand another bar <-", "Invalid integer value: 'bar'."),)


def test_pretty_warning(parser, box):
    result = parser.parse("[foo] --unknown")
    assert result.errors == (
        box(
            "WARNING",
            "Testing [ foo ] --unknown <-",
            "Token '--unknown' does not correspond with a valid argument, argument list, value, or command.",
        ),
    )


def test_pretty_usages(parser, box):
    result = parser.parse("foo --double-adder 5.0")
    assert result.errors == (
        box(
            "ERROR",
            "Testing foo --double-adder <- 5.0",
            "Argument 'double-adder' was used an incorrect amount of times.",
            "Expected from 2 to 4 usages, but was used 1 time.",
        ),
    )


def test_pretty_restricted_group(box):
    parser = ArgumentParser("prog", ansi=False)
    mode = parser.add_group(Group("mode", restricted=True))
    mode.add_argument(Argument("x", type=Boolean()))
    mode.add_argument(Argument("y", type=Boolean()))

    assert parser.parse("-x -y").errors == (
        box("ERROR", "prog -> -x -y <-", "Multiple arguments in restricted group 'mode' used."),
    )


def test_pretty_quoted_value_display(parser, box):
    result = parser.parse('"a b" subcommand -c -c x')
    assert result.errors == (
        box(
            "WARNING",
            'Testing "a b" subcommand -c -c x <-',
            "Token 'x' does not correspond with a valid argument, argument list, value, or command.",
        ),
    )


def test_pretty_tuple_not_closed(parser, box):
    assert parser.parse("[a").errors == (box("ERROR", "Testing ->[a<-", "Tuple not closed."),)


def test_pretty_string_not_closed(parser, box):
    assert parser.parse("foo 'bar").errors == (box("ERROR", "Testing foo ->'bar<-", "String not closed."),)


def test_pretty_space_required(parser, box):
    assert parser.parse('"a"b').errors == (
        box("ERROR", 'Testing "a->"b<-', "A space is required between these characters."),
    )


def test_pretty_lexical_error_in_subcommand(parser, box):
    result = parser.parse("subcommand [")
    # Lexical errors come first.
    assert result.errors[0] == box("ERROR", "Testing subcommand ->[<-", "Tuple not closed.")


def test_pretty_wrap_width(parser, box):
    parser.wrap_width = 40
    assert parser.parse("--what").errors == (
        box(
            "ERROR",
            "Testing --what <-",
            "Incorrect number of values for argument",
            "'what'.",
            "Expected from 1 to 3 values, but got 0.",
        ),
    )


def test_pretty_ansi(parser, box, strip_ansi):
    parser.ansi = True
    error = parser.parse("--what [1 2 3 4]").errors[0]

    assert "\x1b[" in error
    # Styling replaces the arrows around ranges.
    assert strip_ansi(error) == box(
        "ERROR",
        "Testing --what [ 1 2 3 4 ]",
        "Incorrect number of values for argument 'what'.",
        "Expected from 1 to 3 values, but got 4.",
    )


def test_pretty_ansi_point_keeps_arrow(parser, box, strip_ansi):
    parser.ansi = True
    error = parser.parse("--what").errors[0]
    assert strip_ansi(error) == box("ERROR", "Testing --what <-", *WHAT_NO_VALUES)


def test_simple_missing_values(simple):
    assert simple.parse("--what").errors == (
        "[ERROR (token 1)]: Incorrect number of values for argument 'what'. Expected from 1 to 3 values, but got 0.",
    )


def test_simple_range(simple):
    assert simple.parse("--what [1 2 3 4 5 6 7 8 9 10]").errors == (
        "[ERROR (token 1 to 12)]: Incorrect number of values for argument 'what'. "
        "Expected from 1 to 3 values, but got 10.",
    )


def test_simple_warning(simple):
    assert simple.parse("[foo] --unknown").errors == (
        "[WARNING (token 3)]: Token '--unknown' does not correspond with a valid argument, argument list, value, "
        "or command.",
    )


def test_simple_required(simple):
    assert simple.parse("subcommand").errors == ("[ERROR (token 0)]: Required argument 'what' not used.",)


def test_simple_point_past_last_token(simple):
    assert simple.parse("foo subcommand another").errors == (
        "[ERROR (token 3)]: Required argument 'number' for command 'another' not used.",
    )


def test_simple_lexical(simple):
    assert simple.parse("[a").errors == ("[ERROR (char 0 to 1)]: Tuple not closed.",)
    assert simple.parse("subcommand [").errors[0] == "[ERROR (char 11)]: Tuple not closed."


@pytest.mark.parametrize(
    "input",
    [
        "--what",
        "subcommand",
        "foo subcommand another",
        "--what [1 2 3 4 5 6 7 8 9 10]",
        "[foo] --unknown extra",
        "foo -a -a subcommand -s",
    ],
)
def test_simple_token_index_in_bounds(simple, input):
    result = simple.parse(input)
    assert result.errors
    for error in result.errors:
        location = error[error.index("(token ") + len("(token ") : error.index(")")]
        for index in location.split(" to "):
            assert 0 <= int(index) <= len(result.tokens)


def test_simple_no_highlight():
    report = _report(FormattingContext("Something happened."))
    assert SimpleFormatter()(report, RenderOptions()) == "[ERROR]: Something happened."


def _report(fmt: FormattingContext):
    from argspan.errors import Report

    command = Command("prog")
    error = RequiredArgumentNotUsed(index=0, argument=command.get_argument("help"))
    ctx = ParseErrorContext(command=command, tokens=(), offset=0, count=0)
    return Report(error=error, context=ctx, content=fmt.content, highlight=fmt.highlight_options)


def test_pretty_no_tokens(box):
    report = _report(FormattingContext("Something happened.").point(0))
    assert PrettyFormatter()(report, RenderOptions()) == box("ERROR", "prog <-", "Something happened.")


def test_custom_formatter():
    parser = ArgumentParser("prog", formatter=lambda report, options: f"{report.level.name}: {report.content}")
    parser.add_argument(Argument("x", required=True))

    assert isinstance(parser.formatter, ErrorFormatter)
    assert parser.parse("").errors == ("ERROR: Required argument 'x' not used.",)


def test_formatter_string():
    assert isinstance(ArgumentParser("prog", formatter="simple").formatter, SimpleFormatter)
    assert isinstance(ArgumentParser("prog").formatter, PrettyFormatter)
    with pytest.raises(ValueError):
        ArgumentParser("prog", formatter="fancy")


def test_handle_unknown_error(parser):
    ctx = ParseErrorContext(command=parser, tokens=(), offset=0, count=0)
    with pytest.raises(TypeError):
        handle(object(), FormattingContext(), ctx)  # pyright: ignore[reportArgumentType]


def test_handle_highlight(parser):
    ctx = ParseErrorContext(command=parser, tokens=(), offset=0, count=0)
    fmt = handle(UnmatchedToken(index=2, contents="x"), FormattingContext(), ctx)
    assert fmt.highlight_options == Highlight(2, 2)

    what = parser.get_argument("what")
    fmt = handle(RequiredArgumentNotUsed(index=0, argument=what), FormattingContext(), ctx)
    assert fmt.highlight_options == Highlight(0, None, arrows=True)


def test_supersedes(parser):
    a = parser.get_argument("a")
    assert supersedes(SimilarArgument(index=1, argument=a), UnmatchedToken(index=1, contents="+a"))
    assert not supersedes(SimilarArgument(index=1, argument=a), UnmatchedToken(index=2, contents="+a"))
    assert not supersedes(UnmatchedToken(index=1, contents="+a"), SimilarArgument(index=1, argument=a))


def test_pretty_layout(parser):
    expected = dedent(
        """\
         ┌─ERROR
        Testing --what <-
         │ Incorrect number of values for argument 'what'.
         │ Expected from 1 to 3 values, but got 0.
         └────────────────────────────────────────── ───── ── ─
        """
    )
    assert parser.parse("--what").errors == (expected,)
