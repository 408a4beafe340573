"""Turns error variants into user-facing text and highlight requests."""

from argspan.errors.context import ErrorContext, FormattingContext
from argspan.errors.parse import (
    ArgumentTypeError,
    IncorrectUsagesCount,
    IncorrectValueNumber,
    MultipleArgsInRestrictedGroupUsed,
    ParseError,
    RequiredArgumentNotUsed,
    SimilarArgument,
    UniqueArgumentUsed,
    UnmatchedInArgNameList,
    UnmatchedToken,
)
from argspan.errors.tokenize import (
    SpaceRequired,
    StringNotClosed,
    TokenizeError,
    TupleAlreadyOpen,
    TupleNotClosed,
    UnexpectedTupleClose,
)
from argspan.utils import plural


def handle(error: ParseError | TokenizeError, fmt: FormattingContext, ctx: ErrorContext) -> FormattingContext:
    """Describe ``error`` by filling ``fmt`` with its message and highlight.

    Parameters
    ----------
    error: ParseError | TokenizeError
        Error to describe.
    fmt: FormattingContext
        Context to fill in.
    ctx: ParseErrorContext | TokenizeErrorContext
        Context of the command level that raised ``error``.

    Returns
    -------
    FormattingContext
        ``fmt``, for chaining.
    """
    match error:
        # Tokenize errors
        case TupleAlreadyOpen(index=index):
            return fmt.with_content("Tuple already open.").highlight(index)
        case TupleNotClosed(index=index):
            remaining = len(ctx.input) - 1 - ctx.absolute_index(index)
            return fmt.with_content("Tuple not closed.").highlight(index, remaining)
        case UnexpectedTupleClose(index=index):
            return fmt.with_content("Unexpected tuple close.").highlight(index)
        case StringNotClosed(index=index):
            remaining = len(ctx.input) - 1 - ctx.absolute_index(index)
            return fmt.with_content("String not closed.").highlight(index, remaining)
        case SpaceRequired(index=index):
            return fmt.with_content("A space is required between these characters.").highlight(index, 1)

        # Parse errors
        case IncorrectValueNumber(index=index, argument=argument, received=received):
            fmt.with_content(
                f"Incorrect number of values for argument {argument.name!r}.\n"
                f"Expected {argument.type.value_count.message('value')}, but got {received}."
            )
            if error.in_name_list:
                return fmt.highlight(index)
            if error.in_tuple:
                # Includes both delimiters.
                return fmt.highlight(index, received + 1)
            if received == 0:
                return fmt.point(index)
            return fmt.highlight(index, received - 1)
        case IncorrectUsagesCount(index=index, argument=argument, usages=usages):
            return fmt.with_content(
                f"Argument {argument.name!r} was used an incorrect amount of times.\n"
                f"Expected {argument.type.usage_count.message('usage')}, "
                f"but was used {usages} {plural('time', usages)}."
            ).highlight(index)
        case RequiredArgumentNotUsed(index=index, argument=argument):
            command = argument.command
            if command is None or command.parent is None:
                fmt.with_content(f"Required argument {argument.name!r} not used.")
            else:
                fmt.with_content(f"Required argument {argument.name!r} for command {command.name!r} not used.")
            return fmt.point(index)
        case UnmatchedToken(index=index, contents=contents):
            return fmt.with_content(
                f"Token {contents!r} does not correspond with a valid argument, argument list, value, or command."
            ).highlight(index)
        case UnmatchedInArgNameList(index=index, argument=argument, value=value):
            return fmt.with_content(
                f"Argument {argument.name!r} does not take any values, but got {value!r}."
            ).highlight(index)
        case MultipleArgsInRestrictedGroupUsed(index=index, group=group, end=end):
            return fmt.with_content(f"Multiple arguments in restricted group {group.name!r} used.").highlight(
                index, end - index
            )
        case UniqueArgumentUsed(index=index, argument=argument):
            return fmt.with_content(
                f"Argument {argument.name!r} cannot be used together with other arguments."
            ).highlight(index)
        case SimilarArgument(index=index, argument=argument):
            return fmt.with_content(
                f"Found argument with name given, but with a different prefix ({argument.prefix})."
            ).highlight(index)
        case ArgumentTypeError(index=index, message=message, offset=offset):
            return fmt.with_content(message).highlight(index, offset)
        case _:
            raise TypeError(f"Unknown error type {type(error).__name__}.")


def supersedes(error: ParseError | TokenizeError, other: ParseError | TokenizeError) -> bool:
    """Whether ``other`` should not be reported because ``error`` describes the same problem better.

    Both errors must come from the same command level.
    """
    match error, other:
        case IncorrectValueNumber(argument=argument), RequiredArgumentNotUsed():
            return argument is other.argument
        case SimilarArgument(index=index), UnmatchedToken():
            return index == other.index
        case _:
            return False
