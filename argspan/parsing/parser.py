import logging
from collections.abc import Iterator, Sequence
from typing import TYPE_CHECKING, Any, Optional

from attrs import define

from argspan.argument_types import ConversionScope
from argspan.errors.parse import (
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
from argspan.parsing._state import OneShot
from argspan.token import Token, TokenType
from argspan.utils import UNSET

if TYPE_CHECKING:
    from argspan.argument import Argument
    from argspan.group import Group
    from argspan.parsing.tokenizer import Tokenizer

logger = logging.getLogger(__name__)


@define
class ArgumentState:
    """Per-parse bookkeeping of a single argument."""

    value: Any
    usages: int = 0
    first_index: int = -1
    last_index: int = -1


class Parser(OneShot):
    """Matches the tokens of a single command level against its :class:`.Command`.

    Parameters
    ----------
    tokenizer: Tokenizer
        Finished tokenizer of this level; supplies the command and the bounds of its tokens.
    tokens: Sequence[Token]
        The flat token list of every level. Indices into it are absolute.
    """

    def __init__(self, tokenizer: "Tokenizer", tokens: Sequence[Token]):
        tokenizer._require_finished()
        self.tokenizer = tokenizer
        self.command = tokenizer.command
        self.tokens = tokens
        self.start = tokenizer.token_offset
        self.end = tokenizer.token_offset + len(tokenizer.tokens)

        self.errors: list[ParseError] = []
        self.child: Optional["Parser"] = None
        self.states: dict["Argument", ArgumentState] = {
            argument: ArgumentState(argument.type.initial_value) for argument in self.command.arguments
        }
        self._values: dict["Argument", Any] = {}
        self._group_members: dict["Group", tuple[object, int]] = {}
        self._restricted_reported: set["Group"] = set()
        self._cursor = self.start

    ###################
    # Results         #
    ###################
    @property
    def values(self) -> dict["Argument", Any]:
        """Resolved value of every argument of this level; :obj:`None` when absent."""
        self._require_finished()
        return self._values

    def used(self, argument: "Argument") -> bool:
        return self.states[argument].usages > 0

    def levels(self) -> Iterator["Parser"]:
        parser: Parser | None = self
        while parser is not None:
            yield parser
            parser = parser.child

    def _local(self, index: int) -> int:
        return index - self.start

    def _error(self, error: ParseError):
        self.errors.append(error)

    ###################
    # Scanning        #
    ###################
    def parse(self) -> "Parser":
        """Scan this level's tokens, then parse the invoked subcommand. Can only be called once."""
        self._start()

        positionals = self.command.positional_arguments
        positional_index = 0
        named_found = False

        while self._cursor < self.end:
            token = self.tokens[self._cursor]

            if token.type is TokenType.ARGUMENT_NAME:
                argument = self.command.match_argument(token.contents)
                assert argument is not None
                name_index = self._cursor
                self._cursor += 1
                named_found = True
                self._extract(argument, name_index)
            elif token.type is TokenType.ARGUMENT_NAME_LIST:
                named_found = True
                self._parse_name_list(token)
            elif (
                token.type in (TokenType.ARGUMENT_VALUE, TokenType.TUPLE_START)
                and not named_found
                and positional_index < len(positionals)
            ):
                self._extract(positionals[positional_index], self._cursor)
                positional_index += 1
            elif token.type in (TokenType.SUBCOMMAND, TokenType.FORWARD_VALUE):
                # Handled by the child parser, or kept verbatim as the forwarded value.
                self._cursor += 1
            else:
                self._unmatched(token)
                self._cursor += 1

        if self.tokenizer.child is not None:
            self.child = Parser(self.tokenizer.child, self.tokens)
            self.child.parse()

        self._finish_arguments()
        self._finish()
        logger.debug("Parsed command %r with %d error(s).", self.command.name, len(self.errors))
        return self

    def _unmatched(self, token: Token):
        index = self._local(self._cursor)
        self._error(UnmatchedToken(index=index, contents=token.contents))
        if token.type is TokenType.ARGUMENT_VALUE and (similar := self.command.similar_argument(token.contents)):
            self._error(SimilarArgument(index=index, argument=similar))

    def _parse_name_list(self, token: Token):
        index = self._cursor
        self._cursor += 1
        chars = token.contents[1:]
        previous: Argument | None = None

        for i, char in enumerate(chars):
            argument = self.command.argument_by_char(char, token.contents[0])
            if argument is None:
                assert previous is not None
                self._error(UnmatchedInArgNameList(index=self._local(index), argument=previous, value=chars[i:]))
                return

            if argument.type.value_count.is_zero:
                self._use(argument, [], index, index)
            elif i == len(chars) - 1:
                self._extract(argument, index)
            else:
                self._extract_packed(argument, chars[i + 1 :], index)
                return
            previous = argument

    def _extract(self, argument: "Argument", name_index: int):
        """Read the values of ``argument`` starting at the cursor and apply them."""
        value_count = argument.type.value_count
        if value_count.is_zero:
            self._use(argument, [], name_index, name_index)
            return

        start = self._cursor
        in_tuple = start < self.end and self.tokens[start].type is TokenType.TUPLE_START
        values: list[Token] = []

        if in_tuple:
            i = start + 1
            while i < self.end and self.tokens[i].type not in (TokenType.TUPLE_END, TokenType.FORWARD_VALUE):
                values.append(self.tokens[i])
                i += 1
            # Skip the closing delimiter, if the tuple was closed.
            closed = i < self.end and self.tokens[i].type is TokenType.TUPLE_END
            self._cursor = i + 1 if closed else i
        else:
            i = start
            while i < self.end and len(values) < value_count.max and self.tokens[i].type is TokenType.ARGUMENT_VALUE:
                values.append(self.tokens[i])
                i += 1
            self._cursor = i

        if len(values) not in value_count:
            self._error(
                IncorrectValueNumber(
                    index=self._local(start), argument=argument, received=len(values), in_tuple=in_tuple
                )
            )
            return

        first_value = start + 1 if in_tuple else start
        self._use(argument, [token.contents for token in values], name_index, first_value)

    def _extract_packed(self, argument: "Argument", value: str, index: int):
        """Apply the tail of a short-flag cluster (``-sVALUE``) as the single value of ``argument``."""
        if 1 not in argument.type.value_count:
            self._error(IncorrectValueNumber(index=self._local(index), argument=argument, received=1, in_name_list=True))
            return
        self._use(argument, [value], index, index, pinned=True)

    def _use(self, argument: "Argument", values: list[str], name_index: int, value_index: int, pinned: bool = False):
        state = self.states[argument]
        state.usages += 1
        if state.usages > argument.type.usage_count.max:
            self._error(IncorrectUsagesCount(index=self._local(name_index), argument=argument, usages=state.usages))
            return

        if state.first_index < 0:
            state.first_index = name_index
        state.last_index = name_index
        self._mark_groups(argument, name_index)

        scope = ConversionScope(
            argument=argument,
            previous=state.value,
            index=self._local(value_index),
            pinned=pinned,
            sink=self._error,
        )
        value = argument.type.convert(values, scope)
        logger.debug("Argument %r received %r -> %r.", argument.name, values, value)
        state.value = value

    def _mark_groups(self, argument: "Argument", index: int):
        member: object = argument
        group = argument.group
        while group is not None:
            previous = self._group_members.get(group)
            if previous is None:
                self._group_members[group] = (member, index)
            elif previous[0] is not member and group.restricted and group not in self._restricted_reported:
                self._restricted_reported.add(group)
                self._error(
                    MultipleArgsInRestrictedGroupUsed(
                        index=self._local(previous[1]), group=group, end=self._local(index)
                    )
                )
            member = group
            group = group.parent

    ###################
    # Finishing       #
    ###################
    def _unique_used(self) -> bool:
        """Whether a unique argument was used on this level or any level below."""
        return any(
            parser.used(argument)
            for parser in self.levels()
            for argument in parser.command.arguments
            if argument.unique
        )

    def _finish_arguments(self):
        unique_used = self._unique_used()

        for argument in self.command.arguments:
            state = self.states[argument]
            if state.usages == 0:
                if argument.required and not unique_used:
                    self._error(RequiredArgumentNotUsed(index=0, argument=argument))
                self._values[argument] = argument.resolve_default()
                continue

            if state.usages < argument.type.usage_count.min:
                self._error(
                    IncorrectUsagesCount(index=self._local(state.last_index), argument=argument, usages=state.usages)
                )
            self._values[argument] = None if state.value is UNSET else state.value

        for argument in self.command.arguments:
            if argument.unique and self.used(argument):
                others = [other for other in self.command.arguments if other is not argument and self.used(other)]
                if others:
                    index = self._local(self.states[argument].first_index)
                    self._error(UniqueArgumentUsed(index=index, argument=argument))
