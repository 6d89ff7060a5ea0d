"""Tag matching: decide whether a tag character opens or closes.

The lexer cannot make this decision alone because it depends on the tag
that is currently open, which only the parser knows.
"""

from __future__ import annotations

from enum import Enum, auto

from eggsml.errors import UnexpectedCharacterError
from eggsml.lexer.charsets import ALWAYS_CLOSES, ALWAYS_OPENS, opposite


class TagAction(Enum):
    """What a tag character does to the open-tag stack."""

    OPEN = auto()
    CLOSE = auto()


def match_tag(
    char: str,
    tripled: bool,
    index: int,
    current_tag: str | None,
    current_index: int,
) -> TagAction:
    """Resolve a tag character against the currently open tag.

    A tripled character always opens a nested tag. A single character
    closes the current tag if it is that tag's opposite; otherwise it opens
    a new tag, unless it is a closing-only bracket.

    Args:
        char: The tag character
        tripled: Whether the character appeared three times in a row
        index: Position of the character in the source
        current_tag: Character of the innermost open tag (None at the root)
        current_index: Source index of the innermost open tag

    Returns:
        TagAction.OPEN or TagAction.CLOSE

    Raises:
        UnexpectedCharacterError: a closing bracket that closes nothing
    """
    closer = opposite(current_tag)

    if (tripled or char in ALWAYS_OPENS or char != closer) and char not in ALWAYS_CLOSES:
        return TagAction.OPEN
    if char == closer:
        return TagAction.CLOSE

    if current_tag is None:
        raise UnexpectedCharacterError(f"Tag ‘{char}’ unexpected.", index, 1)
    raise UnexpectedCharacterError(
        f"Tag ‘{char}’ unexpected; expected closing ‘{closer}’",
        index,
        1,
        current_index,
    )
