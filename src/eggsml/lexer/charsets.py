"""Character sets for O(1) classification.

All sets are frozensets for:
- O(1) membership testing (vs O(n) for strings)
- Immutability (thread-safe)
- Module-level caching (no per-call allocation)

Usage:
    from eggsml.lexer.charsets import SPECIAL_CHARACTERS

    if char in SPECIAL_CHARACTERS:
        ...
"""

# Order matches the documented list; escape() and the markup writer only
# need membership.
SPECIAL_CHARACTERS_ORDERED = "~@#$%^&*_=+/\\[]{}<>|`\""

SPECIAL_CHARACTERS: frozenset[str] = frozenset(SPECIAL_CHARACTERS_ORDERED)

# Brackets that always open a tag and are closed by their partner
ALWAYS_OPENS: frozenset[str] = frozenset("[{<")

# Brackets that can only ever close a tag
ALWAYS_CLOSES: frozenset[str] = frozenset("]}>")

_OPPOSITES: dict[str, str] = {"[": "]", "{": "}", "<": ">"}

# Characters that a tag may be opened with
TAG_CHARACTERS: frozenset[str] = SPECIAL_CHARACTERS - ALWAYS_CLOSES - frozenset("`\"")

# Whitespace that must never become a wrap point
NO_BREAK_SPACES: frozenset[str] = frozenset("\u00a0\u202f")

ZERO_WIDTH_SPACE = "\u200b"


def opposite(tag: str | None) -> str | None:
    """Return the character that closes a tag opened with ``tag``.

    ``[``, ``{`` and ``<`` close with their partner bracket; every other
    character closes with itself. ``None`` (the root) has no closer.
    """
    if tag is None:
        return None
    return _OPPOSITES.get(tag, tag)


def is_wrap_point(char: str) -> bool:
    """Check whether a line may be broken at ``char``.

    Whitespace is a wrap point except for the no-break spaces U+00A0 and
    U+202F. U+200B (zero width space) is a wrap point although it is not
    whitespace.
    """
    if char in NO_BREAK_SPACES:
        return False
    if char == ZERO_WIDTH_SPACE:
        return True
    return char.isspace()
