"""
EggsML: a minimalist inline mark-up language and word-wrapping engine.

In EggsML, the characters ``~ @ # $ % ^ & * _ = + / \\ | [ ] { } < > ` "``
are special and every other character is literal:

- Any special character is escaped by doubling it (``**`` is a literal ``*``).
- ``~ @ # $ % ^ & * _ = + / \\ |`` open a tag that the same character closes;
  ``[ { <`` open a tag closed by ``] } >``.
- Tags nest. To nest a tag inside one of the same character, triple it:
  ``*one ***two* three*``.
- A backtick separates characters that would otherwise form a run:
  ``*`*`` is an empty tag, ``**`` is a literal asterisk.
- Double quotes enclose raw text: ``"http://example.com/~user"``.

Quick Start:
    >>> from eggsml import parse, to_plain_text, to_console_lines
    >>> root = parse("Hello *World*")
    >>> to_plain_text(root)
    'Hello World'
    >>> [str(line) for line in to_console_lines(root, wrap_width=6)]
    ['Hello', 'World']

"""

from eggsml.cache import DictParseCache, ParseCache, hash_content
from eggsml.config import (
    WrapConfig,
    get_wrap_config,
    reset_wrap_config,
    set_wrap_config,
    wrap_config_context,
)
from eggsml.console import (
    ColoredLine,
    ColoredSpan,
    ConsoleColor,
    console_next_state,
    to_console_line,
    to_console_lines,
)
from eggsml.errors import (
    EggsMLError,
    InvalidParameterUsageError,
    InvalidTriplingError,
    InvalidWrapWidthError,
    MalformedRunError,
    MarkupError,
    UnexpectedCharacterError,
    UnterminatedQuoteError,
    UnterminatedTagError,
    WordWrapError,
)
from eggsml.lexer import Lexer
from eggsml.lexer.charsets import SPECIAL_CHARACTERS_ORDERED as SPECIAL_CHARACTERS
from eggsml.markup import escape, to_markup_text
from eggsml.nodes import Node, Tag, Text
from eggsml.parser import Parser
from eggsml.text import has_text, to_plain_text
from eggsml.tokens import Token, TokenType
from eggsml.visitor import BaseVisitor, active_tag_runs, walk
from eggsml.wrap import WrapStrategy, word_wrap, wrap_with

__version__ = "0.1.0"


def parse(source: str, *, cache: ParseCache | None = None) -> Tag:
    """Parse EggsML source into a tree.

    Args:
        source: EggsML text
        cache: Optional content-addressed parse cache

    Returns:
        Root Tag (its ``tag`` is None). All literal text is in Text nodes,
        and no Tag has two Text children in a row.

    Raises:
        TypeError: ``source`` is not a string
        MarkupError: the markup is malformed

    Example:
        >>> root = parse("*one ***two* three*")
        >>> [type(c).__name__ for c in root.children[0].children]
        ['Text', 'Tag', 'Text']
    """
    if not isinstance(source, str):
        raise TypeError(f"source must be str, not {type(source).__name__}")

    if cache is not None:
        content_hash = hash_content(source)
        cached = cache.get(content_hash)
        if cached is not None:
            return cached

    root = Parser(source).parse()

    if cache is not None:
        cache.put(content_hash, root)
    return root


__all__ = [  # noqa: RUF022 (grouped by category)
    # Version
    "__version__",
    # Core API
    "parse",
    "word_wrap",
    "wrap_with",
    "to_markup_text",
    "to_plain_text",
    "escape",
    "has_text",
    "SPECIAL_CHARACTERS",
    # Nodes
    "Node",
    "Tag",
    "Text",
    # Parser components
    "Lexer",
    "Parser",
    "Token",
    "TokenType",
    # Traversal
    "BaseVisitor",
    "walk",
    "active_tag_runs",
    # Wrapping
    "WrapStrategy",
    # Console binding
    "ConsoleColor",
    "ColoredLine",
    "ColoredSpan",
    "console_next_state",
    "to_console_line",
    "to_console_lines",
    # Configuration (ContextVar-based)
    "WrapConfig",
    "get_wrap_config",
    "set_wrap_config",
    "reset_wrap_config",
    "wrap_config_context",
    # Parse cache
    "DictParseCache",
    "ParseCache",
    "hash_content",
    # Errors
    "EggsMLError",
    "MarkupError",
    "MalformedRunError",
    "InvalidTriplingError",
    "UnterminatedQuoteError",
    "UnexpectedCharacterError",
    "UnterminatedTagError",
    "WordWrapError",
    "InvalidParameterUsageError",
    "InvalidWrapWidthError",
]
