"""Tests for glob-style path patterns."""

from __future__ import annotations

import pytest

from curi import MAX_PATTERN_LENGTH, PatternTooLongError, UrlPattern, url_is


class TestUrlPattern:
    def test_exact(self) -> None:
        assert UrlPattern("foo/bar").matches("foo/bar") is True

    def test_exact_no_match(self) -> None:
        assert UrlPattern("foo").matches("foo/bar") is False

    def test_trailing_slash_equivalence(self) -> None:
        assert UrlPattern("foo").matches("foo/") is True

    def test_only_one_trailing_slash(self) -> None:
        assert UrlPattern("foo").matches("foo//") is False

    def test_wildcard_prefix(self) -> None:
        m = UrlPattern("foo*")
        assert m.matches("foo/bar") is True
        assert m.matches("foo") is True
        assert m.matches("foobar") is True
        assert m.matches("bar/foo") is False

    def test_wildcard_after_slash(self) -> None:
        m = UrlPattern("admin/*")
        assert m.matches("admin/users") is True
        assert m.matches("administrator") is False

    def test_inner_star_is_literal(self) -> None:
        m = UrlPattern("foo*/bar")
        assert m.matches("foo*/bar") is True
        assert m.matches("foox/bar") is False

    def test_empty_path_never_matches_non_empty_pattern(self) -> None:
        assert UrlPattern("foo*").matches("") is False
        assert UrlPattern("*").matches("") is False
        assert UrlPattern("foo").matches("") is False

    def test_empty_pattern(self) -> None:
        assert UrlPattern("").matches("") is True
        assert UrlPattern("/").matches("") is True
        assert UrlPattern("").matches("foo") is False

    def test_lone_star(self) -> None:
        assert UrlPattern("*").matches("anything/at/all") is True

    def test_case_sensitive(self) -> None:
        assert UrlPattern("Foo").matches("foo") is False

    def test_pattern_slashes_ignored(self) -> None:
        assert UrlPattern("/foo/bar/").matches("foo/bar") is True

    def test_regex_metacharacters_are_literal(self) -> None:
        m = UrlPattern("a.b+(c)")
        assert m.matches("a.b+(c)") is True
        assert m.matches("axb+(c)") is False
        assert m.matches("abb(c)") is False

    def test_non_string_returns_false(self) -> None:
        assert UrlPattern("foo").matches(None) is False  # type: ignore[arg-type]

    def test_is_wildcard(self) -> None:
        assert UrlPattern("foo*").is_wildcard is True
        assert UrlPattern("foo").is_wildcard is False

    def test_too_long(self) -> None:
        with pytest.raises(PatternTooLongError) as exc_info:
            UrlPattern("a" * (MAX_PATTERN_LENGTH + 1))
        assert exc_info.value.max == MAX_PATTERN_LENGTH


class TestUrlIs:
    def test_accepts_string(self) -> None:
        assert url_is("foo*", "foo/bar") is True

    def test_accepts_compiled(self) -> None:
        assert url_is(UrlPattern("foo"), "foo/") is True
