"""Tests for the top-level toks API and the token/location value types."""

from dataclasses import FrozenInstanceError
from enum import Enum, auto

import pytest

import toks
from toks import (
    DEFAULT_KIND,
    FallbackMode,
    Keyword,
    PatternMatch,
    SourceLocation,
    Token,
    TokenizerError,
)


class Kind(Enum):
    LET = auto()
    EQ = auto()


class TestTokenizeFunction:
    def test_basic(self) -> None:
        rules = [Keyword("let", "LET"), Keyword("=", "EQ"), PatternMatch(r"^[0-9]+", "INT")]
        tokens = toks.tokenize("let x = 42", rules, default_kind="ID")
        assert [(t.kind, t.text, t.column) for t in tokens] == [
            ("LET", "let", 0),
            ("ID", "x", 4),
            ("EQ", "=", 6),
            ("INT", "42", 8),
        ]

    def test_fallback_mode_by_string(self) -> None:
        tokens = toks.tokenize("x=1", [Keyword("=", "EQ")], fallback_mode="match_seeking")
        assert [t.text for t in tokens] == ["x", "=", "1"]
        assert tokens[0].kind == DEFAULT_KIND

    def test_disallow_fallback(self) -> None:
        with pytest.raises(TokenizerError):
            toks.tokenize("x", [], allow_default_identifiers=False)

    def test_source_file(self) -> None:
        assert toks.tokenize("x", [], source_file="a.txt")[0].source_file == "a.txt"

    def test_accepts_generator_of_rules(self) -> None:
        rules = (Keyword(c, c.upper()) for c in "ab")
        assert [t.kind for t in toks.tokenize("a b", rules)] == ["A", "B"]


class TestToken:
    def test_equality_ignores_location_cache(self) -> None:
        a = Token("K", "x", 0, 0, 0, 1)
        b = Token("K", "x", 0, 0, 0, 1)
        _ = a.location
        assert a == b
        assert hash(a) == hash(b)

    def test_frozen(self) -> None:
        token = Token("K", "x", 0, 0)
        with pytest.raises(FrozenInstanceError):
            token.text = "y"  # type: ignore[misc]

    def test_kind_name_for_enum(self) -> None:
        assert Token(Kind.LET, "let", 0, 0).kind_name == "LET"

    def test_kind_name_for_other_hashables(self) -> None:
        assert Token("ID", "x", 0, 0).kind_name == "ID"
        assert Token(7, "x", 0, 0).kind_name == "7"

    def test_repr_truncates_long_text(self) -> None:
        token = Token("S", "a" * 30, 2, 5)
        assert repr(token) == f"Token(S, {'a' * 17 + '...'!r}, 2:5)"


class TestSourceLocation:
    def test_str_without_file(self) -> None:
        assert str(SourceLocation(3, 4)) == "3:4"

    def test_str_with_file(self) -> None:
        assert str(SourceLocation(0, 1, source_file="g.txt")) == "g.txt:0:1"

    def test_length(self) -> None:
        assert SourceLocation(0, 0, offset=3, end_offset=8).length == 5

    def test_span_to(self) -> None:
        start = SourceLocation(0, 2, offset=2, end_offset=4, end_line=0, end_column=4)
        end = SourceLocation(1, 0, offset=6, end_offset=9, end_line=1, end_column=3)
        span = start.span_to(end)
        assert (span.line, span.column, span.offset) == (0, 2, 2)
        assert (span.end_offset, span.end_line, span.end_column) == (9, 1, 3)

    def test_span_between_tokens(self) -> None:
        tokens = toks.tokenize("let\n  x", [Keyword("let", Kind.LET)])
        span = tokens[0].location.span_to(tokens[1].location)
        assert (span.end_line, span.end_column, span.length) == (1, 3, 7)


class TestFallbackModeEnum:
    def test_values(self) -> None:
        assert FallbackMode.WORD_SCAN.value == "word_scan"
        assert FallbackMode.MATCH_SEEKING.value == "match_seeking"

    def test_coerce_member(self) -> None:
        assert FallbackMode.coerce(FallbackMode.WORD_SCAN) is FallbackMode.WORD_SCAN
