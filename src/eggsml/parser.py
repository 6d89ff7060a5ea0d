"""Stack-based parser producing the EggsML tree.

Consumes the token stream from Lexer and builds immutable Tag/Text nodes.
Open tags are kept on an explicit stack of partially built frames, so
deeply nested input never hits the recursion limit.

Thread Safety:
- Parser instances are single-use; create one per parse
- The resulting tree is immutable and safe to share across threads

"""

from __future__ import annotations

from dataclasses import dataclass, field

from eggsml.errors import MarkupError, UnterminatedTagError
from eggsml.lexer import Lexer, TagAction, match_tag
from eggsml.lexer.charsets import opposite
from eggsml.nodes import Node, Tag, Text
from eggsml.tokens import Token, TokenType
from eggsml.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(slots=True)
class _OpenTag:
    """A tag whose closing character has not been seen yet."""

    tag: str | None
    index: int
    children: list[Node] = field(default_factory=list)

    def build(self) -> Tag:
        return Tag(source_index=self.index, tag=self.tag, children=tuple(self.children))


class Parser:
    """Builds a tree from EggsML source.

    Usage:
            >>> root = Parser("*one ***two* three*").parse()
            >>> root.children[0].tag
            '*'

    Thread Safety:
        Parser instances are single-use and not thread-safe.

    """

    __slots__ = ("_source", "_stack", "_current", "_pending", "_pending_index")

    def __init__(self, source: str) -> None:
        self._source = source
        self._stack: list[_OpenTag] = []
        self._current = _OpenTag(tag=None, index=0)
        self._pending: list[str] = []
        self._pending_index = 0

    def parse(self) -> Tag:
        """Parse the source into a root Tag.

        Returns:
            Root node (``tag`` is None)

        Raises:
            MarkupError: on any malformed input; no partial tree is returned
        """
        try:
            for token in Lexer(self._source).tokenize():
                self._consume(token)
        except MarkupError as e:
            logger.debug("EggsML parse failed: %s", e)
            raise

        root = self._current.build()
        logger.debug(
            "Parsed %d characters into %d top-level nodes",
            len(self._source),
            len(root.children),
        )
        return root

    def _consume(self, token: Token) -> None:
        match token.type:
            case TokenType.TEXT:
                self._pending.append(token.value)
            case TokenType.TAG:
                self._handle_tag(token)
            case TokenType.EOF:
                self._finish(token)

    def _handle_tag(self, token: Token) -> None:
        current = self._current
        action = match_tag(token.value, token.is_tripled, token.index, current.tag, current.index)

        self._flush_text()
        if action is TagAction.OPEN:
            self._stack.append(current)
            self._current = _OpenTag(tag=token.value, index=token.index)
            self._pending_index = token.index + token.length
        else:
            parent = self._stack.pop()
            parent.children.append(current.build())
            self._current = parent
            self._pending_index = token.index + 1

    def _finish(self, token: Token) -> None:
        if self._stack:
            current = self._current
            raise UnterminatedTagError(
                f"Closing ‘{opposite(current.tag)}’ missing",
                token.index,
                0,
                current.index,
            )
        self._flush_text()

    def _flush_text(self) -> None:
        """Append pending literal text to the current tag as one Text node."""
        if not self._pending:
            return
        text = "".join(self._pending)
        self._pending.clear()
        if text:
            self._current.children.append(Text(source_index=self._pending_index, text=text))
