"""Console-colored word wrapping.

Binds the generic ``word_wrap`` engine to a 16-color console palette:
every tag character maps to a color, and ``*`` brightens whatever color is
active. The output is a list of ``ColoredLine`` values; writing them to an
actual terminal is left to the caller.

Tag colors:

    ====  ============  ==============
    tag   normal        inside ``*``
    ====  ============  ==============
    ~     black         dark gray
    /     dark blue     blue
    $     dark green    green
    &     dark cyan     cyan
    _     dark red      red
    %     dark magenta  magenta
    ^     dark yellow   yellow
    =     dark gray     dark gray
    ====  ============  ==============

Untagged text is gray, or white inside ``*``. ``+...+`` keeps its contents
on one line.

Example:
    >>> from eggsml import parse
    >>> [str(line) for line in to_console_lines(parse("one *two* three"), 9)]
    ['one two', 'three']
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from eggsml.config import get_wrap_config
from eggsml.nodes import Node, Tag, Text
from eggsml.wrap import word_wrap


class ConsoleColor(IntEnum):
    """The 16-color console palette; values 8-15 are the light variants."""

    BLACK = 0
    DARK_BLUE = 1
    DARK_GREEN = 2
    DARK_CYAN = 3
    DARK_RED = 4
    DARK_MAGENTA = 5
    DARK_YELLOW = 6
    GRAY = 7
    DARK_GRAY = 8
    BLUE = 9
    GREEN = 10
    CYAN = 11
    RED = 12
    MAGENTA = 13
    YELLOW = 14
    WHITE = 15

    @property
    def is_light(self) -> bool:
        return self >= ConsoleColor.DARK_GRAY

    def brighten(self) -> ConsoleColor:
        """Return the light variant (unchanged if already light)."""
        return self if self.is_light else ConsoleColor(self + 8)


# tag -> (color outside *, color inside *)
TAG_COLORS: dict[str, tuple[ConsoleColor, ConsoleColor]] = {
    "~": (ConsoleColor.BLACK, ConsoleColor.DARK_GRAY),
    "/": (ConsoleColor.DARK_BLUE, ConsoleColor.BLUE),
    "$": (ConsoleColor.DARK_GREEN, ConsoleColor.GREEN),
    "&": (ConsoleColor.DARK_CYAN, ConsoleColor.CYAN),
    "_": (ConsoleColor.DARK_RED, ConsoleColor.RED),
    "%": (ConsoleColor.DARK_MAGENTA, ConsoleColor.MAGENTA),
    "^": (ConsoleColor.DARK_YELLOW, ConsoleColor.YELLOW),
    "=": (ConsoleColor.DARK_GRAY, ConsoleColor.DARK_GRAY),
}

BRIGHTEN_TAG = "*"


@dataclass(frozen=True, slots=True)
class ColoredSpan:
    """A run of text in a single color."""

    text: str
    color: ConsoleColor


@dataclass(frozen=True, slots=True)
class ColoredLine:
    """One wrapped output line, as a sequence of colored spans."""

    spans: tuple[ColoredSpan, ...] = ()

    @property
    def text(self) -> str:
        return "".join(span.text for span in self.spans)

    def __len__(self) -> int:
        return sum(len(span.text) for span in self.spans)

    def __str__(self) -> str:
        return self.text

    def color_at(self, index: int) -> ConsoleColor:
        """Color of the character at ``index``."""
        if index < 0:
            index += len(self)
        for span in self.spans:
            if index < len(span.text):
                return span.color
            index -= len(span.text)
        raise IndexError("ColoredLine index out of range")


def console_next_state(
    color: ConsoleColor, tag: str, parameter: str | None
) -> tuple[ConsoleColor, int]:
    """Map a tag character to the color of its contents.

    Tags without a color keep the current one. Never advances the cursor.
    """
    if tag == BRIGHTEN_TAG:
        return color.brighten(), 0
    colors = TAG_COLORS.get(tag)
    if colors is None:
        return color, 0
    normal, light = colors
    return (light if color.is_light else normal), 0


class _LineCollector:
    """Accumulates rendered spans into lines."""

    __slots__ = ("_lines", "_hanging_indent")

    def __init__(self, hanging_indent: int) -> None:
        self._lines: list[list[ColoredSpan]] = [[]]
        self._hanging_indent = hanging_indent

    def measure(self, color: ConsoleColor, text: str) -> int:
        return len(text)

    def render(self, color: ConsoleColor, text: str, width: int) -> None:
        self._append(ColoredSpan(text, color))

    def advance_line(self, color: ConsoleColor, new_paragraph: bool, indent: int) -> int:
        x = 0 if new_paragraph else indent + self._hanging_indent
        self._lines.append([])
        if x:
            self._append(ColoredSpan(" " * x, color))
        return x

    def _append(self, span: ColoredSpan) -> None:
        if not span.text:
            return
        line = self._lines[-1]
        if line and line[-1].color == span.color:
            line[-1] = ColoredSpan(line[-1].text + span.text, span.color)
        else:
            line.append(span)

    def build(self) -> list[ColoredLine]:
        lines = [ColoredLine(tuple(spans)) for spans in self._lines]
        if not len(lines[-1]):
            lines.pop()
        return lines


def to_console_lines(
    node: Node,
    wrap_width: int | None = None,
    hanging_indent: int | None = None,
) -> list[ColoredLine]:
    """Word-wrap ``node`` into console-colored lines.

    Args:
        node: Root of the tree to wrap
        wrap_width: Line width in characters (default from WrapConfig)
        hanging_indent: Spaces added to every line of a paragraph except its
            first (default from WrapConfig)

    Returns:
        Wrapped lines; a trailing empty line is dropped

    Raises:
        InvalidWrapWidthError: ``wrap_width`` is zero or negative
        InvalidParameterUsageError: misplaced ``<...>`` tag
    """
    config = get_wrap_config()
    if wrap_width is None:
        wrap_width = config.wrap_width
    if hanging_indent is None:
        hanging_indent = config.hanging_indent

    collector = _LineCollector(hanging_indent)
    word_wrap(
        node,
        ConsoleColor(config.default_color),
        wrap_width,
        collector.measure,
        collector.render,
        collector.advance_line,
        console_next_state,
    )
    return collector.build()


def to_console_line(node: Node, default_color: ConsoleColor | None = None) -> ColoredLine:
    """Color ``node`` as a single line, without word wrapping.

    Every Text node is included as-is, newlines and ``<...>`` contents
    too; ``+`` and ``<`` leave the color unchanged. Suited to output that
    has no known width.

    Args:
        node: Root of the tree to convert
        default_color: Color of untagged text (default from WrapConfig)

    Example:
        >>> from eggsml import parse
        >>> to_console_line(parse("a *b*")).spans[1]
        ColoredSpan(text='b', color=<ConsoleColor.WHITE: 15>)
    """
    if default_color is None:
        default_color = ConsoleColor(get_wrap_config().default_color)

    collector = _LineCollector(0)
    stack: list[tuple[Node, ConsoleColor]] = [(node, default_color)]
    while stack:
        current, color = stack.pop()
        match current:
            case Text():
                collector.render(color, current.text, len(current.text))
            case Tag():
                if current.tag is not None:
                    color, _ = console_next_state(color, current.tag, None)
                stack.extend((child, color) for child in reversed(current.children))
    lines = collector.build()
    return lines[0] if lines else ColoredLine()
