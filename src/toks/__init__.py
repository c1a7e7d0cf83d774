"""
toks — Embeddable rule-driven tokenizer

Turns text into typed tokens using an ordered set of recognizer rules:
exact keywords, delimited regions, regex patterns, and AND-combinations
of sub-rules. The first rule that matches wins; input no rule recognizes
is handled by a configurable fallback policy. Zero runtime dependencies.

Quick Start:
    >>> from toks import Keyword, PatternMatch, tokenize
    >>> rules = [Keyword("let", "LET"), Keyword("=", "EQ"), PatternMatch(r"^[0-9]+", "INT")]
    >>> tokenize("let x = 42", rules, default_kind="ID")
    [Token(LET, 'let', 0:0), Token(ID, 'x', 0:4), Token(EQ, '=', 0:6), Token(INT, '42', 0:8)]

    >>> # Or build a reusable Tokenizer
    >>> from toks import Tokenizer, FallbackMode
    >>> tokenizer = Tokenizer(rules)
    >>> tokenizer.set_fallback_mode(FallbackMode.MATCH_SEEKING)
    >>> tokenizer.tokenize("x=1")

Custom Rule Types:
    >>> from toks import create_dispatch_table_with_defaults
    >>>
    >>> builder = create_dispatch_table_with_defaults()
    >>> builder.register(MyRule, match_my_rule)
    >>> tokenizer = Tokenizer(dispatch_table=builder.build())
"""

from collections.abc import Iterable

from toks.config import DEFAULT_CONFIG, TokenizerConfig
from toks.cursor import Cursor
from toks.dispatch import (
    DispatchTable,
    DispatchTableBuilder,
    Match,
    create_default_dispatch_table,
    create_dispatch_table_with_defaults,
)
from toks.errors import (
    CursorStateError,
    DispatchError,
    RuleError,
    TokenizerError,
    ToksError,
)
from toks.location import SourceLocation
from toks.modes import FallbackMode
from toks.profiling import TokenizeAccumulator, get_tokenize_accumulator, profiled_tokenize
from toks.protocols import Matcher, Rule
from toks.rules import Combinator, DelimitedRegion, Keyword, PatternMatch
from toks.tokenizer import TokenizeResult, Tokenizer
from toks.tokens import DEFAULT_KIND, Token, TokenKind

__version__ = "0.1.0"


def tokenize(
    text: str,
    rules: Iterable[Rule],
    *,
    default_kind: TokenKind = DEFAULT_KIND,
    fallback_mode: FallbackMode | str = FallbackMode.WORD_SCAN,
    allow_default_identifiers: bool = True,
    source_file: str | None = None,
) -> list[Token]:
    """Tokenize text with a one-off rule set.

    Builds a Tokenizer for the call. For repeated use, build a Tokenizer
    once and call its tokenize() method instead.

    Args:
        text: Source text
        rules: Recognizer rules in priority order
        default_kind: Kind stamped on fallback tokens
        fallback_mode: WORD_SCAN or MATCH_SEEKING (enum or its string value)
        allow_default_identifiers: When False, unrecognized input raises
        source_file: Optional path carried on tokens and errors

    Returns:
        Tokens in input order

    Raises:
        TokenizerError: If unrecognized input cannot be handled
        RuleError, DispatchError: If a rule is invalid
    """
    config = TokenizerConfig(
        default_kind=default_kind,
        fallback_mode=FallbackMode.coerce(fallback_mode),
        allow_default_identifiers=allow_default_identifiers,
    )
    return Tokenizer(rules, config=config).tokenize(text, source_file=source_file)


__all__ = [
    # Main API
    "tokenize",
    "Tokenizer",
    "TokenizeResult",
    # Rules
    "Combinator",
    "DelimitedRegion",
    "Keyword",
    "PatternMatch",
    "Rule",
    # Dispatch
    "DispatchTable",
    "DispatchTableBuilder",
    "Match",
    "Matcher",
    "create_default_dispatch_table",
    "create_dispatch_table_with_defaults",
    # Tokens and positions
    "Cursor",
    "DEFAULT_KIND",
    "SourceLocation",
    "Token",
    "TokenKind",
    # Configuration
    "DEFAULT_CONFIG",
    "FallbackMode",
    "TokenizerConfig",
    # Profiling
    "TokenizeAccumulator",
    "get_tokenize_accumulator",
    "profiled_tokenize",
    # Errors
    "CursorStateError",
    "DispatchError",
    "RuleError",
    "TokenizerError",
    "ToksError",
]
