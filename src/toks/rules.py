"""Built-in recognizer rules.

Rules are immutable configuration objects. They say *what* to recognize;
the matching algorithms live in ``toks.dispatch`` and are looked up by
rule type, so new rule types can be added without touching the
tokenizer loop.

Variants:
- Keyword: exact literal
- DelimitedRegion: begin ... end span (strings, comments)
- PatternMatch: regular expression
- Combinator: ordered AND of sub-rules, emitted as one token

Example:
    >>> number = PatternMatch(r"[0-9]+", "NUMBER")
    >>> hex_literal = Combinator([Keyword("0x", "PREFIX"), number], "HEX")

Thread Safety:
All rules are frozen dataclasses and safe to share across threads.

"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from toks.errors import RuleError
from toks.protocols import Rule
from toks.tokens import TokenKind


@dataclass(frozen=True, slots=True)
class Keyword:
    """Matches an exact literal, case-sensitively.

    Attributes:
        literal: Text that must appear at the cursor
        kind: Tag stamped on the token
    """

    literal: str
    kind: TokenKind

    def __post_init__(self) -> None:
        if not self.literal:
            raise RuleError("Keyword", "literal must not be empty")


@dataclass(frozen=True, slots=True)
class DelimitedRegion:
    """Matches a span from ``begin`` through the next ``end``.

    The search for ``end`` starts right after ``begin``, so ``'"'`` ...
    ``'"'`` never treats the opening quote as the terminator. A region
    with no terminator does not match.

    The keep flags only change the captured text; the tokenizer always
    consumes the full span including both delimiters.

    Example:
        DelimitedRegion("/*", "*/", "COMMENT")                 -> "/* note */"
        DelimitedRegion("/*", "*/", "COMMENT", False, False)   -> " note "
        DelimitedRegion("/*", "*/", "COMMENT", False, True)    -> " note */"

    Attributes:
        begin: Opening delimiter
        end: Closing delimiter
        kind: Tag stamped on the token
        keep_begin: Keep ``begin`` in the captured text
        keep_end: Keep ``end`` in the captured text
    """

    begin: str
    end: str
    kind: TokenKind
    keep_begin: bool = True
    keep_end: bool = True

    def __post_init__(self) -> None:
        if not self.begin:
            raise RuleError("DelimitedRegion", "begin delimiter must not be empty")
        if not self.end:
            raise RuleError("DelimitedRegion", "end delimiter must not be empty")


@dataclass(frozen=True, slots=True)
class PatternMatch:
    """Matches a regular expression.

    By default the search is unanchored: the first match at or after the
    cursor is accepted even if it starts further ahead, and the
    characters in between are consumed without producing a token. Pass
    ``anchored=True`` to require the match to start at the cursor.
    ``^`` always anchors at the cursor. Zero-length matches never count.

    Attributes:
        pattern: Regex source or a compiled pattern
        kind: Tag stamped on the token
        anchored: Require the match to begin at the cursor
        flags: re flags applied when ``pattern`` is a string
    """

    pattern: str | re.Pattern[str]
    kind: TokenKind
    anchored: bool = False
    flags: int = 0
    regex: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if isinstance(self.pattern, re.Pattern):
            compiled = self.pattern
        else:
            try:
                compiled = re.compile(self.pattern, self.flags)
            except re.error as e:
                raise RuleError("PatternMatch", f"invalid pattern {self.pattern!r}: {e}") from e
        object.__setattr__(self, "regex", compiled)


@dataclass(frozen=True, slots=True)
class Combinator:
    """Ordered AND of sub-rules, emitted as a single token.

    Every sub-rule must match, each starting where the previous one
    stopped. If any fails the whole attempt is rolled back. The token's
    text is the concatenation of the sub-rules' captured text and its
    kind is the combinator's own; sub-rule kinds are ignored.

    Attributes:
        rules: Sub-rules, tried in order (any sequence; stored as a tuple)
        kind: Tag stamped on the token
    """

    rules: tuple[Rule, ...]
    kind: TokenKind

    def __post_init__(self) -> None:
        rules = tuple(self.rules)
        if not rules:
            raise RuleError("Combinator", "needs at least one sub-rule")
        for sub in rules:
            if not isinstance(sub, Rule):
                raise RuleError("Combinator", f"sub-rule {sub!r} has no 'kind'")
        object.__setattr__(self, "rules", rules)

    def walk(self) -> list[Rule]:
        """All nested sub-rules, depth first."""
        found: list[Rule] = []
        for sub in self.rules:
            found.append(sub)
            if isinstance(sub, Combinator):
                found.extend(sub.walk())
        return found


__all__ = [
    "Combinator",
    "DelimitedRegion",
    "Keyword",
    "PatternMatch",
]
