"""Run-classifying lexer for EggsML.

Scans the source for maximal runs of identical special characters and
classifies each run: doubled characters decode to literals, a lone
backtick is dropped, a double quote starts a raw literal, and single or
tripled tag characters become TAG tokens for the parser to resolve.

Thread Safety:
Lexer instances are single-use. Create one per source string.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from collections.abc import Iterator

from eggsml.errors import InvalidTriplingError, MalformedRunError, UnterminatedQuoteError
from eggsml.lexer.charsets import ALWAYS_CLOSES, SPECIAL_CHARACTERS
from eggsml.tokens import Token, TokenType


class Lexer:
    """Single-pass lexer over EggsML source.

    Usage:
            >>> for token in Lexer("a *b*").tokenize():
            ...     print(token)
        Token(TEXT, 'a ', 0)
        Token(TAG, '*', 2)
        Token(TEXT, 'b', 3)
        Token(TAG, '*', 4)
        Token(EOF, '', 5)

    Thread Safety:
        Lexer instances are single-use. Create one per source string.

    """

    __slots__ = ("_source", "_source_len", "_pos")

    def __init__(self, source: str) -> None:
        self._source = source
        self._source_len = len(source)
        self._pos = 0

    def tokenize(self) -> Iterator[Token]:
        """Tokenize source into a token stream.

        Yields:
            Token objects one at a time, ending with exactly one EOF

        Raises:
            MalformedRunError: odd run of five or more identical characters
            InvalidTriplingError: three closing brackets or three backticks
            UnterminatedQuoteError: a quoted literal without its closing quote
        """
        source = self._source
        source_len = self._source_len

        while self._pos < source_len:
            start = self._pos
            special = self._find_special(start)

            if special > start:
                yield Token(TokenType.TEXT, source[start:special], start, special - start)
            if special == source_len:
                self._pos = special
                break

            yield from self._scan_run(special)

        yield Token(TokenType.EOF, "", source_len, 0)

    def _find_special(self, pos: int) -> int:
        """Return the index of the next special character, or the source length."""
        source = self._source
        source_len = self._source_len
        while pos < source_len and source[pos] not in SPECIAL_CHARACTERS:
            pos += 1
        return pos

    def _run_end(self, pos: int) -> int:
        source = self._source
        char = source[pos]
        end = pos + 1
        while end < self._source_len and source[end] == char:
            end += 1
        return end

    def _scan_run(self, pos: int) -> Iterator[Token]:
        """Classify the run of identical special characters starting at ``pos``."""
        char = self._source[pos]
        end = self._run_end(pos)
        run_length = end - pos

        # Doubling escapes: an even run is half as many literals
        if run_length % 2 == 0:
            self._pos = end
            yield Token(TokenType.TEXT, char * (run_length // 2), pos, run_length)
            return

        if run_length > 3 and char != '"':
            raise MalformedRunError(
                "Five or more consecutive same characters not allowed unless number is even.",
                pos,
                run_length,
            )
        if run_length == 3 and (char in ALWAYS_CLOSES or char == "`"):
            raise InvalidTriplingError(
                "Three consecutive same closing-tag characters or backticks not allowed.",
                pos,
                3,
            )

        if char == "`":
            # Separator only; produces nothing
            self._pos = pos + 1
            return

        if char == '"':
            yield self._scan_quoted(pos)
            return

        self._pos = pos + run_length
        yield Token(TokenType.TAG, char, pos, run_length)

    def _scan_quoted(self, pos: int) -> Token:
        """Scan a double-quoted literal starting at ``pos``.

        The literal ends at the first quote that is not part of a doubled
        pair. Doubled quotes inside it decode to a single quote; nothing
        else is interpreted.
        """
        source = self._source
        close = source.find('"', pos + 1)
        if close == -1:
            raise UnterminatedQuoteError("Closing ‘\"’ missing", pos, 1)
        while close < self._source_len - 1 and source[close + 1] == '"':
            close = source.find('"', close + 2)
            if close == -1:
                raise UnterminatedQuoteError("Closing ‘\"’ missing", pos, 1)

        self._pos = close + 1
        content = source[pos + 1 : close].replace('""', '"')
        return Token(TokenType.TEXT, content, pos, close + 1 - pos)
