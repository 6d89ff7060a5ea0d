"""Token and TokenType definitions for the EggsML lexer.

The lexer produces a stream of Token objects that the parser consumes.
Escapes and quoted literals are already decoded by the time a TEXT token
is produced; the parser never sees raw markup for literal text.

Thread Safety:
Token is frozen (immutable) and safe to share across threads.
TokenType is an enum (inherently immutable).

"""

from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    """Token types produced by the lexer."""

    TEXT = auto()  # Literal text, escapes decoded
    TAG = auto()  # A single or tripled tag character
    EOF = auto()


@dataclass(frozen=True, slots=True)
class Token:
    """A lexical token.

    Attributes:
        type: The token type
        value: Decoded text for TEXT, the tag character for TAG, "" for EOF
        index: Zero-based index of the token's first character in the source
        length: Number of source characters the token spans

    """

    type: TokenType
    value: str
    index: int
    length: int

    @property
    def is_tripled(self) -> bool:
        """True for a tripled tag character, which always opens a nested tag."""
        return self.type is TokenType.TAG and self.length == 3

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.index})"
