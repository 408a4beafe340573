import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING, Optional

from argspan.errors.tokenize import (
    SpaceRequired,
    StringNotClosed,
    TokenizeError,
    TupleAlreadyOpen,
    TupleNotClosed,
    UnexpectedTupleClose,
)
from argspan.parsing._state import OneShot
from argspan.token import Token, TokenType

if TYPE_CHECKING:
    from argspan.command import Command

logger = logging.getLogger(__name__)

QUOTES = "\"'"
ESCAPE = "\\"


class Tokenizer(OneShot):
    """Splits the input of a single command level into tokens.

    When a word names a subcommand, the rest of the input is handed to a new
    :class:`Tokenizer` for that subcommand (:attr:`child`) and this one stops.

    Parameters
    ----------
    command: Command
        Command whose arguments and subcommands are recognized.
    token_offset: int
        Number of tokens produced by the parent levels.
    char_offset: int
        Position of this level's input within the whole input.
    """

    def __init__(self, command: "Command", *, token_offset: int = 0, char_offset: int = 0):
        self.command = command
        self.tuple_chars = command.resolved_tuple_chars()
        self.token_offset = token_offset
        self.char_offset = char_offset

        self.input = ""
        self.tokens: list[Token] = []
        self.errors: list[TokenizeError] = []
        self.child: Optional["Tokenizer"] = None
        self.forward_value: str | None = None

        self._buffer: list[str] = []
        self._tuple_open = False
        self._string_char: str | None = None
        self._stopped = False

    def tokenize(self, input: str) -> "Tokenizer":
        """Tokenize ``input``, recursing into subcommands. Can only be called once."""
        self._start()
        self.input = input

        tuple_start = string_start = 0
        terminal = False
        length = len(input)
        i = 0
        while i < length and not self._stopped:
            char = input[i]

            if char == ESCAPE:
                i += 1
                self._buffer.append(input[i] if i < length else char)
            elif char in QUOTES and self._string_char in (None, char):
                if self._string_char is None:
                    if self._buffer:
                        self._error(SpaceRequired, i - 1)
                        self._flush(i)
                        if self._stopped:
                            break
                    self._string_char = char
                    string_start = i
                else:
                    self._emit(TokenType.ARGUMENT_VALUE, "".join(self._buffer))
                    self._buffer.clear()
                    self._string_char = None
                    self._require_space_after(i, allow=self.tuple_chars.close)
            elif self._string_char is not None:
                self._buffer.append(char)
            elif char == self.tuple_chars.open:
                if self._tuple_open:
                    self._error(TupleAlreadyOpen, i)
                    terminal = True
                    break
                self._flush(i)
                if self._stopped:
                    break
                self._emit(TokenType.TUPLE_START, char)
                self._tuple_open = True
                tuple_start = i
            elif char == self.tuple_chars.close:
                if not self._tuple_open:
                    self._error(UnexpectedTupleClose, i)
                    terminal = True
                    break
                self._flush(i)
                self._emit(TokenType.TUPLE_END, char)
                self._tuple_open = False
                self._require_space_after(i)
            elif char == "-" and not self._buffer and input[i + 1 : i + 2] == "-" and input[i + 2 : i + 3].isspace():
                if self._tuple_open:
                    self._error(TupleNotClosed, tuple_start)
                self.forward_value = input[i + 3 :]
                self._emit(TokenType.FORWARD_VALUE, self.forward_value)
                self._stopped = True
            elif char.isspace() or (
                char == "=" and not self._tuple_open and self.command.is_argument_specifier("".join(self._buffer))
            ):
                self._flush(i)
            else:
                self._buffer.append(char)
            i += 1

        if terminal:
            # Keep what was read so far, but do not descend into a subcommand after a malformed tuple.
            self._flush(i, recurse=False)
        elif not self._stopped:
            if self._tuple_open:
                self._error(TupleNotClosed, tuple_start)
            if self._string_char is not None:
                self._error(StringNotClosed, string_start)
            self._flush(length)

        self._finish()
        logger.debug("Tokenized command %r into %d token(s).", self.command.name, len(self.tokens))
        return self

    def _emit(self, type: TokenType, contents: str):
        self.tokens.append(Token(type, contents))

    def _error(self, cls: type[TokenizeError], index: int):
        self.errors.append(cls(index=index))

    def _require_space_after(self, index: int, allow: str = ""):
        following = self.input[index + 1 : index + 2]
        if following and not following.isspace() and following not in allow:
            self._error(SpaceRequired, index)

    def _classify(self, word: str, recurse: bool) -> TokenType:
        if self._tuple_open or self._string_char is not None:
            return TokenType.ARGUMENT_VALUE
        if self.command.match_argument(word) is not None:
            return TokenType.ARGUMENT_NAME
        if self.command.is_name_list(word):
            return TokenType.ARGUMENT_NAME_LIST
        if recurse and self.command.find_command(word) is not None:
            return TokenType.SUBCOMMAND
        return TokenType.ARGUMENT_VALUE

    def _flush(self, position: int, recurse: bool = True):
        """Emit the buffered word; ``position`` is the index right after it."""
        if not self._buffer:
            return

        word = "".join(self._buffer)
        self._buffer.clear()
        type = self._classify(word, recurse)
        self._emit(type, word)

        if type is TokenType.SUBCOMMAND:
            subcommand = self.command.get_command(word)
            logger.debug("Descending into subcommand %r.", subcommand.name)
            self.child = Tokenizer(
                subcommand,
                token_offset=self.token_offset + len(self.tokens),
                char_offset=self.char_offset + position,
            )
            self.child.tokenize(self.input[position:])
            self._stopped = True

    def levels(self) -> Iterator["Tokenizer"]:
        """This tokenizer followed by every nested subcommand tokenizer."""
        tokenizer: Tokenizer | None = self
        while tokenizer is not None:
            yield tokenizer
            tokenizer = tokenizer.child

    @property
    def all_tokens(self) -> list[Token]:
        """Tokens of this level and every nested level, in input order."""
        self._require_finished()
        return [token for level in self.levels() for token in level.tokens]
