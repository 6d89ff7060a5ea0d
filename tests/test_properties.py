"""Property-based tests for the parser, markup writer and wrap engine.

Uses Hypothesis to check tree-level properties over generated markup.
"""

from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st

from eggsml import escape, parse, to_markup_text, to_plain_text, wrap_with
from eggsml.errors import MarkupError
from eggsml.nodes import Node, Tag, Text
from eggsml.visitor import walk

SOUP = st.text(alphabet='ab *_+[]{}<>`"\n', max_size=60)

WORDS = st.lists(st.text(alphabet="abcdefghij", min_size=1, max_size=15), min_size=1, max_size=12)


def _shape(node: Node) -> object:
    """Tree structure without source positions."""
    if isinstance(node, Text):
        return node.text
    assert isinstance(node, Tag)
    return (node.tag, tuple(_shape(child) for child in node.children))


def _parse_or_none(source: str) -> Tag | None:
    try:
        return parse(source)
    except MarkupError:
        return None


class _LineRecorder:
    def __init__(self) -> None:
        self.lines = [""]

    def measure(self, state: None, text: str) -> int:
        return len(text)

    def render(self, state: None, text: str, width: int) -> None:
        self.lines[-1] += text

    def advance_line(self, state: None, new_paragraph: bool, indent: int) -> int:
        self.lines.append(" " * indent)
        return indent

    def next_state(self, state: None, tag: str, parameter: str | None) -> tuple[None, int]:
        return None, 0


class TestTreeShape:
    @given(SOUP)
    @settings(max_examples=300)
    def test_no_adjacent_text_children(self, source: str) -> None:
        root = _parse_or_none(source)
        if root is None:
            return
        for node in walk(root):
            if isinstance(node, Tag):
                kinds = [isinstance(child, Text) for child in node.children]
                assert not any(a and b for a, b in zip(kinds, kinds[1:]))

    @given(SOUP)
    @settings(max_examples=300)
    def test_source_indices_in_range(self, source: str) -> None:
        root = _parse_or_none(source)
        if root is None:
            return
        indices = [node.source_index for node in walk(root)]
        assert indices == sorted(indices)
        assert all(0 <= i <= len(source) for i in indices)

    @given(SOUP)
    @settings(max_examples=300)
    def test_no_empty_text(self, source: str) -> None:
        root = _parse_or_none(source)
        if root is None:
            return
        assert all(node.text for node in walk(root) if isinstance(node, Text))


class TestMarkupRoundTrip:
    @given(SOUP)
    @settings(max_examples=500)
    def test_markup_reparses_to_same_structure(self, source: str) -> None:
        root = _parse_or_none(source)
        if root is None:
            return
        again = parse(to_markup_text(root))
        assert _shape(again) == _shape(root)
        assert to_plain_text(again) == to_plain_text(root)

    @given(st.text(max_size=80))
    @settings(max_examples=300)
    def test_escape_preserves_text(self, text: str) -> None:
        assert to_plain_text(parse(escape(text))) == text

    @given(st.text(max_size=80))
    @settings(max_examples=200)
    def test_text_node_markup_preserves_text(self, text: str) -> None:
        if not text:
            return
        assert to_plain_text(parse(to_markup_text(Text(0, text)))) == text


class TestWrapProperties:
    @given(WORDS, st.integers(min_value=1, max_value=20))
    @settings(max_examples=300)
    def test_lines_fit_and_nothing_is_lost(self, words: list[str], width: int) -> None:
        recorder = _LineRecorder()
        actual = wrap_with(recorder, parse(" ".join(words)), None, width)

        assert all(len(line) <= width for line in recorder.lines)
        assert actual == max(len(line) for line in recorder.lines)
        assert "".join(recorder.lines).replace(" ", "") == "".join(words)

    @given(WORDS)
    @settings(max_examples=100)
    def test_wide_enough_is_one_line(self, words: list[str]) -> None:
        source = " ".join(words)
        recorder = _LineRecorder()
        wrap_with(recorder, parse(source), None, len(source))
        assert recorder.lines == [source]
