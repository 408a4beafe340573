import pytest

from argspan.exceptions import ArgumentNotFoundError, CommandNotFoundError


@pytest.fixture
def result(parser):
    return parser.parse("foo subcommand -c another 5")


def test_result_route(result):
    assert result["what"] == "foo"
    assert result.get("subcommand.c") == 1
    assert result.get("subcommand.another.number") == 5
    assert result.get("subcommand.s") is None
    assert result.get("subcommand.s", ()) == ()


def test_result_argument_object(parser, result):
    c = parser.get_command("subcommand").get_argument("c")
    assert result.get(c) == 1
    assert result[parser.get_argument("a")] is False


def test_result_route_not_invoked(parser):
    result = parser.parse("foo")
    assert result.get("subcommand.c", "missing") == "missing"
    assert result.get("subcommand.another.number") is None
    assert not result.parsed.used("subcommand.c")
    assert result.parsed.subcommand("subcommand") is None


@pytest.mark.parametrize(
    "route, exception",
    [
        ("missing", ArgumentNotFoundError),
        ("subcommand.missing", ArgumentNotFoundError),
        ("nope.c", CommandNotFoundError),
        ("another.number", CommandNotFoundError),
    ],
)
def test_result_route_invalid(result, route, exception):
    with pytest.raises(exception):
        result.get(route)


def test_result_used(result):
    assert result.parsed.used("what")
    assert result.parsed.used("subcommand.c")
    assert not result.parsed.used("a")
    assert not result.parsed.used("subcommand.another.ball")


def test_result_levels(parser, result):
    subcommand = result.parsed.subcommand("subcommand")
    assert subcommand is result.parsed.sub
    assert subcommand.command is parser.get_command("subcommand")
    assert subcommand.subcommand("another").get("number") == 5

    assert [level.command.name for level in result.parsed] == ["Testing", "subcommand", "another"]
    assert [command.name for command in result.invoked] == ["Testing", "subcommand", "another"]

    with pytest.raises(CommandNotFoundError):
        result.parsed.subcommand("another")


def test_result_as_dict(result):
    assert result.parsed.as_dict() == {
        "what": "foo",
        "help": False,
        "a": False,
        "double-adder": None,
        "subcommand": {
            "help": False,
            "c": 1,
            "more-strings": None,
            "another": {
                "help": False,
                "ball": False,
                "number": 5,
            },
        },
    }


def test_result_tokens(result):
    assert [token.contents for token in result.tokens] == ["foo", "subcommand", "-c", "another", "5"]
    assert result.forward_value is None
    assert not result.failed
    assert result.error_code == 0
    assert result.errors == ()
    assert result.reports == ()


def test_result_contains(result):
    assert "subcommand.c" in result.parsed
    assert "a" not in result.parsed
