"""Exception classes for EggsML.

Parse errors carry the position in the original string where the problem
was detected. Word-wrap errors signal misuse of the wrap engine (bad
arguments or malformed parameter tags) and carry no position.
"""

from __future__ import annotations


class EggsMLError(Exception):
    """Base exception for all EggsML errors."""

    pass


class MarkupError(EggsMLError):
    """Error during EggsML parsing.

    Raised when the parser encounters invalid input. No partial tree is
    ever returned alongside it.
    """

    def __init__(
        self,
        message: str,
        index: int,
        length: int,
        first_index: int | None = None,
    ) -> None:
        """Initialize parse error with its position.

        Args:
            message: Error description
            index: Zero-based index into the input where the error was detected
            length: Number of characters affected (may be 0)
            first_index: Earlier index relevant to the error, e.g. where the
                unterminated tag was opened
        """
        self.message = message
        self.index = index
        self.length = length
        self.first_index = first_index

        location = f"index {index}: "
        opened = f" (opened at index {first_index})" if first_index is not None else ""
        super().__init__(f"{location}{message}{opened}")


class MalformedRunError(MarkupError):
    """An odd run of five or more identical special characters."""


class InvalidTriplingError(MarkupError):
    """Three closing-only brackets or three backticks in a row."""


class UnterminatedQuoteError(MarkupError):
    """A double-quoted literal without its closing quote."""


class UnexpectedCharacterError(MarkupError):
    """A tag character that neither opens a tag nor closes the current one."""


class UnterminatedTagError(MarkupError):
    """End of input reached while tags were still open."""


class WordWrapError(EggsMLError):
    """Error while word-wrapping a tree."""

    pass


class InvalidParameterUsageError(WordWrapError):
    """A ``<...>`` tag that is not immediately followed by another tag."""

    def __init__(self) -> None:
        super().__init__("An angle-bracket tag must be immediately followed by another tag.")


class InvalidWrapWidthError(WordWrapError, ValueError):
    """Wrap width was zero or negative."""

    def __init__(self, wrap_width: object) -> None:
        self.wrap_width = wrap_width
        super().__init__(f"Wrap width must be greater than zero (got {wrap_width!r}).")
