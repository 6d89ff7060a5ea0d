"""Tests for content-addressed parse cache."""

import pytest

from eggsml import DictParseCache, MarkupError, Tag, hash_content, parse


class TestDictParseCache:
    """Tests for DictParseCache."""

    def test_get_returns_none_when_empty(self) -> None:
        cache = DictParseCache()
        assert cache.get("abc123") is None
        assert len(cache) == 0

    def test_put_then_get_returns_root(self) -> None:
        cache = DictParseCache()
        root = Tag(0, None)
        cache.put("abc123", root)
        assert cache.get("abc123") is root
        assert len(cache) == 1

    def test_different_key_returns_none(self) -> None:
        cache = DictParseCache()
        cache.put("abc123", Tag(0, None))
        assert cache.get("xyz789") is None


class TestHashContent:
    def test_deterministic(self) -> None:
        assert hash_content("*Hello*") == hash_content("*Hello*")

    def test_different_for_different_input(self) -> None:
        assert hash_content("*Hello*") != hash_content("*World*")

    def test_sha256_hex(self) -> None:
        assert hash_content("hello").startswith("2cf24dba")
        assert len(hash_content("hello")) == 64

    def test_lone_surrogate(self) -> None:
        assert len(hash_content("\ud800")) == 64

    def test_truncate(self) -> None:
        assert hash_content("hello", truncate=16) == "2cf24dba5fb0a30e"
        assert hash_content("hello", truncate=0) == ""


class TestParseWithCache:
    """Tests for parse() with cache."""

    def test_first_call_parses_second_hits_cache(self) -> None:
        cache = DictParseCache()
        root1 = parse("*Hello*", cache=cache)
        root2 = parse("*Hello*", cache=cache)
        assert root1 is root2
        assert root1.children[0].tag == "*"
        assert len(cache) == 1

    def test_different_content_parses_both(self) -> None:
        cache = DictParseCache()
        root1 = parse("*Hello*", cache=cache)
        root2 = parse("_World_", cache=cache)
        assert root1 is not root2
        assert len(cache) == 2

    def test_failed_parse_not_cached(self) -> None:
        cache = DictParseCache()
        with pytest.raises(MarkupError):
            parse("*Hello", cache=cache)
        assert len(cache) == 0

    def test_without_cache_returns_fresh_trees(self) -> None:
        root1 = parse("*Hello*")
        root2 = parse("*Hello*")
        assert root1 is not root2
        assert root1 == root2
