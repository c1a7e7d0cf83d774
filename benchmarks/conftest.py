"""Benchmark fixtures and configuration."""

from __future__ import annotations

import pytest

from toks import Combinator, DelimitedRegion, Keyword, PatternMatch, Tokenizer


def build_rules() -> list:
    """A small C-like rule set."""
    return [
        DelimitedRegion("/*", "*/", "COMMENT"),
        DelimitedRegion('"', '"', "STRING"),
        Combinator([Keyword("0x", "PREFIX"), PatternMatch(r"^[0-9a-fA-F]+", "DIGITS")], "HEX"),
        Keyword("if", "IF"),
        Keyword("return", "RETURN"),
        Keyword("==", "EQEQ"),
        Keyword("=", "EQ"),
        Keyword("(", "LPAREN"),
        Keyword(")", "RPAREN"),
        Keyword(";", "SEMI"),
        PatternMatch(r"^[0-9]+", "INT"),
    ]


@pytest.fixture
def rules() -> list:
    return build_rules()


@pytest.fixture
def tokenizer() -> Tokenizer:
    return Tokenizer(build_rules())


@pytest.fixture
def large_source() -> str:
    """Generate a large source file (~100KB)."""
    lines = []
    for i in range(2000):
        lines.append(f'/* block {i} */ if (x{i} == 0x{i:X}) return "value {i}";')
    return "\n".join(lines)


@pytest.fixture
def unmatched_word() -> str:
    """One long word no rule recognizes (worst case for match seeking)."""
    return "a" * 2000
