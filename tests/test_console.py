"""Tests for the console-color binding of the wrap engine."""

from __future__ import annotations

import pytest

from eggsml import parse
from eggsml.config import WrapConfig, wrap_config_context
from eggsml.console import (
    ColoredLine,
    ColoredSpan,
    ConsoleColor,
    console_next_state,
    to_console_line,
    to_console_lines,
)
from eggsml.errors import InvalidWrapWidthError

C = ConsoleColor


class TestColorTable:
    @pytest.mark.parametrize(
        ("tag", "normal", "light"),
        [
            ("~", C.BLACK, C.DARK_GRAY),
            ("/", C.DARK_BLUE, C.BLUE),
            ("$", C.DARK_GREEN, C.GREEN),
            ("&", C.DARK_CYAN, C.CYAN),
            ("_", C.DARK_RED, C.RED),
            ("%", C.DARK_MAGENTA, C.MAGENTA),
            ("^", C.DARK_YELLOW, C.YELLOW),
            ("=", C.DARK_GRAY, C.DARK_GRAY),
        ],
    )
    def test_tag_colors(self, tag: str, normal: ConsoleColor, light: ConsoleColor) -> None:
        assert console_next_state(C.GRAY, tag, None) == (normal, 0)
        assert console_next_state(C.WHITE, tag, None) == (light, 0)

    @pytest.mark.parametrize(
        ("before", "after"),
        [
            (C.GRAY, C.WHITE),
            (C.BLACK, C.DARK_GRAY),
            (C.DARK_RED, C.RED),
            (C.RED, C.RED),
            (C.WHITE, C.WHITE),
        ],
    )
    def test_asterisk_brightens(self, before: ConsoleColor, after: ConsoleColor) -> None:
        assert console_next_state(before, "*", None) == (after, 0)

    @pytest.mark.parametrize("tag", ["#", "@", "|", "[", "{", "\\"])
    def test_other_tags_keep_color(self, tag: str) -> None:
        assert console_next_state(C.DARK_CYAN, tag, None) == (C.DARK_CYAN, 0)

    def test_parameter_ignored(self) -> None:
        assert console_next_state(C.GRAY, "_", "anything") == (C.DARK_RED, 0)


class TestColoredLine:
    def test_text_and_length(self) -> None:
        line = ColoredLine((ColoredSpan("ab", C.GRAY), ColoredSpan("c", C.RED)))
        assert line.text == "abc"
        assert str(line) == "abc"
        assert len(line) == 3

    def test_color_at(self) -> None:
        line = ColoredLine((ColoredSpan("ab", C.GRAY), ColoredSpan("c", C.RED)))
        assert line.color_at(1) == C.GRAY
        assert line.color_at(2) == C.RED
        assert line.color_at(-1) == C.RED
        with pytest.raises(IndexError):
            line.color_at(3)


class TestToConsoleLines:
    def test_colored_spans(self) -> None:
        lines = to_console_lines(parse("a *b*"), 10)
        assert lines == [ColoredLine((ColoredSpan("a ", C.GRAY), ColoredSpan("b", C.WHITE)))]

    def test_nested_colors(self) -> None:
        (line,) = to_console_lines(parse("*_x_* _*y*_ =*z*="), 20)
        assert line.color_at(0) == C.RED
        assert line.color_at(2) == C.RED
        assert line.color_at(4) == C.DARK_GRAY

    def test_wrapping(self) -> None:
        lines = to_console_lines(parse("one *two* three"), 9)
        assert [str(line) for line in lines] == ["one two", "three"]

    def test_paragraph_and_hanging_indent(self) -> None:
        lines = to_console_lines(parse("  aaa bbb ccc"), 7, hanging_indent=2)
        assert [str(line) for line in lines] == ["  aaa", "    bbb", "    ccc"]
        for line in lines[1:]:
            assert str(line).startswith(" " * 4)

    def test_hanging_indent_without_leading_spaces(self) -> None:
        lines = to_console_lines(parse("aaa bbb ccc"), 7, hanging_indent=2)
        assert [str(line) for line in lines] == ["aaa bbb", "  ccc"]

    def test_new_paragraph_not_indented(self) -> None:
        lines = to_console_lines(parse("aaa bbb\nccc"), 5, hanging_indent=2)
        assert [str(line) for line in lines] == ["aaa", "  bbb", "ccc"]

    def test_trailing_empty_line_dropped(self) -> None:
        lines = to_console_lines(parse("ab\n"), 10)
        assert [str(line) for line in lines] == ["ab"]

    def test_blank_line_kept_in_middle(self) -> None:
        lines = to_console_lines(parse("ab\n\ncd"), 10)
        assert [str(line) for line in lines] == ["ab", "", "cd"]

    def test_empty_input(self) -> None:
        assert to_console_lines(parse(""), 10) == []

    def test_nowrap_span(self) -> None:
        lines = to_console_lines(parse("x +one two+"), 8)
        assert [str(line) for line in lines] == ["x", "one two"]

    def test_invalid_width(self) -> None:
        with pytest.raises(InvalidWrapWidthError):
            to_console_lines(parse("x"), 0)


class TestConfigDefaults:
    def test_width_from_config(self) -> None:
        with wrap_config_context(WrapConfig(wrap_width=5)):
            lines = to_console_lines(parse("hello world"))
        assert [str(line) for line in lines] == ["hello", "world"]

    def test_hanging_indent_from_config(self) -> None:
        with wrap_config_context(WrapConfig(wrap_width=5, hanging_indent=1)):
            lines = to_console_lines(parse("ab cd"))
        assert [str(line) for line in lines] == ["ab cd"]
        with wrap_config_context(WrapConfig(wrap_width=4, hanging_indent=1)):
            lines = to_console_lines(parse("ab cd"))
        assert [str(line) for line in lines] == ["ab", " cd"]

    def test_explicit_arguments_win(self) -> None:
        with wrap_config_context(WrapConfig(wrap_width=5)):
            lines = to_console_lines(parse("hello world"), 20)
        assert [str(line) for line in lines] == ["hello world"]

    def test_default_color_from_config(self) -> None:
        with wrap_config_context(WrapConfig(default_color=2)):
            (line,) = to_console_lines(parse("x *y*"))
        assert line.spans == (ColoredSpan("x ", C.DARK_GREEN), ColoredSpan("y", C.GREEN))


class TestToConsoleLine:
    def test_colored_spans(self) -> None:
        line = to_console_line(parse("a *b* _c_"))
        assert line.spans == (
            ColoredSpan("a ", C.GRAY),
            ColoredSpan("b", C.WHITE),
            ColoredSpan(" ", C.GRAY),
            ColoredSpan("c", C.DARK_RED),
        )

    def test_no_wrapping(self) -> None:
        with wrap_config_context(WrapConfig(wrap_width=3)):
            line = to_console_line(parse("one two\nthree"))
        assert str(line) == "one two\nthree"

    def test_all_text_included(self) -> None:
        assert str(to_console_line(parse("+a b+ <x>{y}"))) == "a b xy"

    def test_empty(self) -> None:
        assert to_console_line(parse("")) == ColoredLine()

    def test_explicit_default_color(self) -> None:
        line = to_console_line(parse("x*y*"), C.DARK_RED)
        assert line.spans == (ColoredSpan("x", C.DARK_RED), ColoredSpan("y", C.RED))

    def test_default_color_from_config(self) -> None:
        with wrap_config_context(WrapConfig(default_color=1)):
            line = to_console_line(parse("x"))
        assert line.spans == (ColoredSpan("x", C.DARK_BLUE),)

    def test_deep_nesting(self) -> None:
        depth = 3000
        line = to_console_line(parse("[y" * depth + "]`" * depth))
        assert len(line) == depth
