"""Generic word-wrapping over an EggsML tree.

The engine knows nothing about fonts, colors or consoles. It threads an
arbitrary formatting state ``S`` down the tree and talks to the outside
world through four callbacks:

- ``measure(state, text) -> width``
- ``render(state, text, width)``
- ``advance_line(state, new_paragraph, indent) -> x`` (x of the new line)
- ``next_state(state, tag_char, parameter) -> (state, advance)``

Two tags are handled by the engine itself and never reach ``next_state``:

- ``+...+`` turns off wrapping inside it (one unbreakable "word")
- ``<...>`` captures its plain text as the parameter for the ``next_state``
  call of the tag that immediately follows it

A literal newline starts a new paragraph. Spaces at the start of a
paragraph set that paragraph's indentation for its continuation lines.

Example:
    >>> from eggsml import parse
    >>> lines = [""]
    >>> def advance(state, new_paragraph, indent):
    ...     lines.append("")
    ...     return 0
    >>> def render(state, text, width):
    ...     lines[-1] += text
    >>> word_wrap(parse("hello world"), None, 5, lambda s, t: len(t), render,
    ...           advance, lambda s, c, p: (s, 0))
    5
    >>> lines
    ['hello', 'world']

Thread Safety:
    Each call builds its own private wrapper; the tree is only read.

"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from eggsml.errors import InvalidParameterUsageError, InvalidWrapWidthError
from eggsml.lexer.charsets import is_wrap_point
from eggsml.nodes import Node, Tag, Text
from eggsml.text import to_plain_text
from eggsml.utils.logger import get_logger

logger = get_logger(__name__)

type Measure[S] = Callable[[S, str], int]
type Render[S] = Callable[[S, str, int], None]
type AdvanceLine[S] = Callable[[S, bool, int], int]
type NextState[S] = Callable[[S, str, str | None], tuple[S, int]]

NOWRAP_TAG = "+"
PARAMETER_TAG = "<"


class WrapStrategy[S](Protocol):
    """The four callbacks of ``word_wrap`` bundled as one object.

    Any object with these methods can drive ``wrap_with``.

    """

    def measure(self, state: S, text: str) -> int: ...

    def render(self, state: S, text: str, width: int) -> None: ...

    def advance_line(self, state: S, new_paragraph: bool, indent: int) -> int:
        """Start a new line and return its starting x.

        ``indent`` is the current paragraph's leading-space width when
        wrapping within a paragraph, and 0 when a new paragraph begins.
        """
        ...

    def next_state(self, state: S, tag: str, parameter: str | None) -> tuple[S, int]:
        """Return the state for a tag's contents and the x advance it causes."""
        ...


class _WordWrapper[S]:
    """Per-call wrapping state.

    Word pieces are buffered until a wrap point so that a word spanning
    several tags is placed as one unit but rendered piecewise, each piece
    in its own state.
    """

    __slots__ = (
        "_measure",
        "_render",
        "_advance_line",
        "_next_state",
        "_wrap_width",
        "_x",
        "_actual_width",
        "_at_start_of_line",
        "_paragraph_indent",
        "_parameter",
        "_pieces",
        "_pieces_width",
        "_spaces",
        "_space_state",
    )

    def __init__(
        self,
        wrap_width: int,
        measure: Measure[S],
        render: Render[S],
        advance_line: AdvanceLine[S],
        next_state: NextState[S],
        initial_state: S,
    ) -> None:
        self._measure = measure
        self._render = render
        self._advance_line = advance_line
        self._next_state = next_state
        self._wrap_width = wrap_width

        self._x = 0
        self._actual_width = 0
        self._at_start_of_line = True
        self._paragraph_indent = 0
        self._parameter: str | None = None

        # (text, state, width) for each buffered piece of the current word
        self._pieces: list[tuple[str, S, int]] = []
        self._pieces_width = 0

        # Most recent run of inter-word whitespace
        self._spaces = ""
        self._space_state: S = initial_state

    def run(self, node: Node, initial_state: S) -> int:
        self._walk(node, initial_state, False)
        if self._pieces:
            self._flush_pieces()
        return self._actual_width

    def _walk(self, node: Node, state: S, nowrap: bool) -> None:
        """Visit the tree in document order without recursing.

        A ``None`` frame marks the end of a tag's children.
        """
        stack: list[tuple[Node, S, bool] | None] = [(node, state, nowrap)]
        while stack:
            frame = stack.pop()
            if frame is None:
                # A parameter left over here was never followed by a tag
                if self._parameter is not None:
                    raise InvalidParameterUsageError()
                continue

            current, state, nowrap = frame
            match current:
                case Tag():
                    entered = self._enter_tag(current, state, nowrap)
                    if entered is None:
                        continue
                    new_state, nowrap = entered
                    stack.append(None)
                    stack.extend((child, new_state, nowrap) for child in reversed(current.children))
                case Text():
                    if self._parameter is not None:
                        raise InvalidParameterUsageError()
                    self._wrap_text(current.text, state, nowrap)
                case _:
                    raise TypeError(f"Expected Tag or Text, got {type(current).__name__}")

    def _enter_tag(self, node: Tag, state: S, nowrap: bool) -> tuple[S, bool] | None:
        """Return the state and nowrap flag for the tag's children.

        Returns None for a parameter tag, whose children are never wrapped.
        """
        if node.tag == NOWRAP_TAG:
            return state, True
        if node.tag == PARAMETER_TAG:
            if self._parameter is not None:
                raise InvalidParameterUsageError()
            self._parameter = to_plain_text(node)
            return None
        if node.tag is None:
            return state, nowrap

        new_state, advance = self._next_state(state, node.tag, self._parameter)
        self._parameter = None
        self._x += advance
        return new_state, nowrap

    def _wrap_text(self, text: str, state: S, nowrap: bool) -> None:
        i = 0
        length = len(text)
        while i < length:
            word_end = i
            while word_end < length and text[word_end] != "\n" and (nowrap or not is_wrap_point(text[word_end])):
                word_end += 1

            if word_end > i:
                i += self._place_word_piece(text, i, word_end - i, state)
                continue

            # At a wrap point, so everything buffered fits on this line
            if self._pieces:
                self._flush_pieces()
                self._at_start_of_line = False

            if text[i] == "\n":
                self._new_line(state, new_paragraph=True)
                i += 1
                continue

            spaces_end = i
            while spaces_end < length and text[spaces_end] != "\n" and is_wrap_point(text[spaces_end]):
                spaces_end += 1
            self._spaces = text[i:spaces_end]
            self._space_state = state
            i = spaces_end

            if self._at_start_of_line:
                # Leading spaces become the paragraph's indentation
                self._paragraph_indent += self._render_spaces(self._spaces, state)

    def _place_word_piece(self, text: str, start: int, length: int, state: S) -> int:
        """Buffer as much of ``text[start:start + length]`` as fits.

        Returns the number of characters consumed, which is always at least one.
        """
        fragment = text[start : start + length]
        width = self._measure(state, fragment)

        while True:
            if self._at_start_of_line and self._x + self._pieces_width + width > self._wrap_width:
                # Even a whole line is too short; find the longest prefix that fits
                if length > 1:
                    length //= 2
                    fragment = text[start : start + length]
                    width = self._measure(state, fragment)
                    continue
                # A single character overflows: break the word here
                if self._pieces:
                    self._flush_pieces()
                    self._new_line(state, new_paragraph=False)
            elif (
                not self._at_start_of_line
                and self._x + self._measure(self._space_state, self._spaces) + self._pieces_width + width
                > self._wrap_width
            ):
                self._new_line(state, new_paragraph=False)
                continue
            break

        self._pieces.append((fragment, state, width))
        self._pieces_width += width
        return length

    def _new_line(self, state: S, *, new_paragraph: bool) -> None:
        if new_paragraph:
            self._paragraph_indent = 0
        self._x = self._advance_line(state, new_paragraph, self._paragraph_indent)
        self._at_start_of_line = True

    def _render_spaces(self, spaces: str, state: S) -> int:
        width = self._measure(state, spaces)
        self._render(state, spaces, width)
        self._x += width
        self._actual_width = max(self._actual_width, self._x)
        return width

    def _flush_pieces(self) -> None:
        if not self._at_start_of_line:
            self._render_spaces(self._spaces, self._space_state)
        for fragment, piece_state, width in self._pieces:
            self._render(piece_state, fragment, width)
        self._x += self._pieces_width
        self._actual_width = max(self._actual_width, self._x)
        self._pieces.clear()
        self._pieces_width = 0


def word_wrap[S](
    node: Node,
    initial_state: S,
    wrap_width: int,
    measure: Measure[S],
    render: Render[S],
    advance_line: AdvanceLine[S],
    next_state: NextState[S],
) -> int:
    """Word-wrap an EggsML tree as linearly flowing text.

    Args:
        node: Root of the tree to wrap
        initial_state: State for text outside any tag
        wrap_width: Maximum line width, in the unit ``measure`` returns
        measure: Measures the width of a string in a given state
        render: Receives each piece of text, its state and measured width
        advance_line: Starts a new line; returns the x position on it
        next_state: Maps (state, tag character, parameter) to the state for
            the tag's contents and an x advance

    Returns:
        The widest x reached on any line

    Raises:
        InvalidWrapWidthError: ``wrap_width`` is zero or negative
        InvalidParameterUsageError: a ``<...>`` tag is not immediately
            followed by another tag
    """
    if wrap_width <= 0:
        raise InvalidWrapWidthError(wrap_width)

    wrapper = _WordWrapper(wrap_width, measure, render, advance_line, next_state, initial_state)
    actual_width = wrapper.run(node, initial_state)
    logger.debug("Wrapped tree at width %s; widest line %s", wrap_width, actual_width)
    return actual_width


def wrap_with[S](strategy: WrapStrategy[S], node: Node, initial_state: S, wrap_width: int) -> int:
    """Word-wrap ``node`` using the callbacks of ``strategy``."""
    return word_wrap(
        node,
        initial_state,
        wrap_width,
        strategy.measure,
        strategy.render,
        strategy.advance_line,
        strategy.next_state,
    )
