"""Tests for the high-level EggsML API."""

import pytest


class TestParseFunction:
    """Tests for the parse() function."""

    def test_doubling(self) -> None:
        from eggsml import Text, parse

        root = parse("**")
        assert len(root.children) == 1
        assert isinstance(root.children[0], Text)
        assert root.children[0].text == "*"

    def test_nesting_via_tripling(self) -> None:
        from eggsml import Tag, Text, parse

        (outer,) = parse("*one ***two* three*").children
        assert isinstance(outer, Tag)
        assert outer.tag == "*"
        first, inner, last = outer.children
        assert first == Text(1, "one ")
        assert isinstance(inner, Tag)
        assert inner.children == (Text(8, "two"),)
        assert last == Text(12, " three")

    def test_unterminated_tag(self) -> None:
        from eggsml import UnterminatedTagError, parse

        with pytest.raises(UnterminatedTagError) as exc_info:
            parse("*abc")
        assert exc_info.value.first_index == 0

    def test_quote_literal(self) -> None:
        from eggsml import parse

        assert parse('"a**b"""').children[0].text == 'a**b"'

    def test_plain_text(self) -> None:
        from eggsml import parse, to_plain_text

        assert to_plain_text(parse("Press _any_ key [now]")) == "Press any key now"


class TestWrapFunctions:
    def test_word_wrap_boundary(self) -> None:
        from eggsml import parse, to_console_lines

        assert [str(line) for line in to_console_lines(parse("hello"), 5)] == ["hello"]
        assert [str(line) for line in to_console_lines(parse("hello"), 4)] == ["hell", "o"]

    def test_non_breaking_span(self) -> None:
        from eggsml import parse, to_console_lines

        lines = [str(line) for line in to_console_lines(parse("a +one two+"), 8)]
        assert lines == ["a", "one two"]


class TestExports:
    def test_version(self) -> None:
        import eggsml

        assert eggsml.__version__ == "0.1.0"

    def test_all_names_importable(self) -> None:
        import eggsml

        for name in eggsml.__all__:
            assert hasattr(eggsml, name), name

    def test_special_characters(self) -> None:
        from eggsml import SPECIAL_CHARACTERS

        assert SPECIAL_CHARACTERS == '~@#$%^&*_=+/\\[]{}<>|`"'

    def test_error_hierarchy(self) -> None:
        from eggsml import EggsMLError, MarkupError, UnterminatedQuoteError, WordWrapError

        assert issubclass(UnterminatedQuoteError, MarkupError)
        assert issubclass(MarkupError, EggsMLError)
        assert issubclass(WordWrapError, EggsMLError)
