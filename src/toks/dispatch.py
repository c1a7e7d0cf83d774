"""Dispatch table mapping rule types to matching algorithms.

Decouples what a rule *is* (``toks.rules``) from how it is executed.
The tokenizer never inspects rule types itself; it asks the table.
Adding a rule type means registering one more matcher.

Thread Safety:
DispatchTable is immutable after creation. Safe to share.
Use DispatchTableBuilder for mutable construction.

Example:
    >>> builder = create_dispatch_table_with_defaults()
    >>> builder.register(AnyChar, match_any_char)
    >>> table = builder.build()
    >>> table.match(Keyword("if", "IF"), Cursor("if x"))
    Match(text='if', consumed=2)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

from toks.errors import DispatchError
from toks.rules import Combinator, DelimitedRegion, Keyword, PatternMatch
from toks.stringbuilder import StringBuilder

if TYPE_CHECKING:
    from toks.cursor import Cursor
    from toks.protocols import Matcher, Rule


class Match(NamedTuple):
    """Successful match at the cursor.

    Attributes:
        text: Captured text to put on the token
        consumed: Characters to advance past (may exceed len(text))
    """

    text: str
    consumed: int


# =============================================================================
# Built-in matchers
# =============================================================================


def match_keyword(rule: Keyword, cursor: Cursor, table: DispatchTable) -> Match | None:
    """Exact, case-sensitive literal at the cursor."""
    if cursor.starts_with(rule.literal):
        return Match(rule.literal, len(rule.literal))
    return None


def match_delimited(
    rule: DelimitedRegion, cursor: Cursor, table: DispatchTable
) -> Match | None:
    """``begin`` at the cursor, then the first ``end`` after it."""
    if not cursor.starts_with(rule.begin):
        return None

    begin_len = len(rule.begin)
    end_at = cursor.find(rule.end, begin_len)
    if end_at is None:
        # Unterminated region is a plain miss
        return None

    consumed = end_at + len(rule.end)
    start = 0 if rule.keep_begin else begin_len
    stop = consumed if rule.keep_end else end_at
    return Match(cursor.slice(start, stop - start), consumed)


def match_pattern(rule: PatternMatch, cursor: Cursor, table: DispatchTable) -> Match | None:
    """Regex search from the cursor.

    Searches a slice of the remaining text so ``^`` anchors at the
    cursor. Unanchored rules accept a match that starts later; the
    skipped characters are consumed along with it.
    """
    remaining = cursor.remaining()
    m = rule.regex.match(remaining) if rule.anchored else rule.regex.search(remaining)
    if m is None or m.end() == m.start():
        return None
    return Match(m.group(0), m.end())


def match_combinator(
    rule: Combinator, cursor: Cursor, table: DispatchTable
) -> Match | None:
    """All sub-rules back to back; the cursor is always rolled back.

    Sub-matches advance the cursor so each sub-rule sees the text after
    the previous one. The saved position is restored on success as well
    as failure; the tokenizer does the final advance.
    """
    start = cursor.offset
    text = StringBuilder()
    cursor.save()
    try:
        for sub in rule.rules:
            sub_match = table.match(sub, cursor)
            if sub_match is None:
                return None
            text.append(sub_match.text)
            cursor.advance(sub_match.consumed)
        consumed = cursor.offset - start
    finally:
        cursor.restore()
    return Match(text.build(), consumed)


# =============================================================================
# Table
# =============================================================================


class DispatchTable:
    """Immutable mapping from rule type to matcher.

    Lookup walks the rule's MRO, so a subclass of a registered rule type
    uses its base's matcher unless it has its own entry.

    Thread Safety:
        Immutable after creation. Safe to share across threads.
    """

    __slots__ = ("_matchers",)

    def __init__(self, matchers: dict[type, Matcher]) -> None:
        """Initialize table with a pre-built mapping.

        Use DispatchTableBuilder to create instances.
        """
        self._matchers = matchers

    def get(self, rule_type: type) -> Matcher | None:
        """Get the matcher for a rule type (or its nearest registered base)."""
        for klass in rule_type.__mro__:
            matcher = self._matchers.get(klass)
            if matcher is not None:
                return matcher
        return None

    def has(self, rule_type: type) -> bool:
        """Check if a rule type can be dispatched."""
        return self.get(rule_type) is not None

    def matcher_for(self, rule: Rule) -> Matcher:
        """Get the matcher for a rule instance.

        Raises:
            DispatchError: If no matcher handles the rule's type
        """
        matcher = self.get(type(rule))
        if matcher is None:
            raise DispatchError(type(rule))
        return matcher

    def match(self, rule: Rule, cursor: Cursor) -> Match | None:
        """Run the rule's matcher at the cursor."""
        return self.matcher_for(rule)(rule, cursor, self)

    def validate(self, rule: Rule) -> None:
        """Check that rule and every nested Combinator sub-rule dispatch.

        Raises:
            DispatchError: On the first rule type with no matcher
        """
        self.matcher_for(rule)
        if isinstance(rule, Combinator):
            for sub in rule.walk():
                self.matcher_for(sub)

    @property
    def rule_types(self) -> frozenset[type]:
        """All directly registered rule types."""
        return frozenset(self._matchers)

    def __contains__(self, rule_type: type) -> bool:
        return self.has(rule_type)

    def __len__(self) -> int:
        return len(self._matchers)


class DispatchTableBuilder:
    """Mutable builder for DispatchTable.

    Example:
        >>> builder = DispatchTableBuilder()
        >>> builder.register(Keyword, match_keyword)
        >>> table = builder.build()
    """

    __slots__ = ("_matchers",)

    def __init__(self) -> None:
        """Initialize empty builder."""
        self._matchers: dict[type, Matcher] = {}

    def register(self, rule_type: type, matcher: Matcher) -> DispatchTableBuilder:
        """Register the matcher for a rule type.

        Args:
            rule_type: Rule class handled by matcher
            matcher: Callable implementing the Matcher protocol

        Returns:
            Self for chaining

        Raises:
            TypeError: If matcher is not callable
            ValueError: If rule_type already has a matcher
        """
        if not callable(matcher):
            msg = f"Matcher for {rule_type.__name__} is not callable"
            raise TypeError(msg)
        if rule_type in self._matchers:
            msg = f"Rule type '{rule_type.__name__}' already has a matcher"
            raise ValueError(msg)
        self._matchers[rule_type] = matcher
        return self

    def build(self) -> DispatchTable:
        """Build immutable table from registered matchers."""
        return DispatchTable(dict(self._matchers))

    def __len__(self) -> int:
        return len(self._matchers)


def create_dispatch_table_with_defaults() -> DispatchTableBuilder:
    """Create a builder pre-populated with the built-in matchers.

    Use this to add matchers for custom rule types.
    """
    builder = DispatchTableBuilder()
    builder.register(Keyword, match_keyword)
    builder.register(DelimitedRegion, match_delimited)
    builder.register(PatternMatch, match_pattern)
    builder.register(Combinator, match_combinator)
    return builder


# Cached singleton, safe to share since DispatchTable is immutable
_DEFAULT_TABLE: DispatchTable | None = None


def create_default_dispatch_table() -> DispatchTable:
    """Get the default dispatch table (cached singleton).

    Returns:
        Table with matchers for Keyword, DelimitedRegion, PatternMatch
        and Combinator
    """
    global _DEFAULT_TABLE
    if _DEFAULT_TABLE is None:
        _DEFAULT_TABLE = create_dispatch_table_with_defaults().build()
    return _DEFAULT_TABLE


__all__ = [
    "DispatchTable",
    "DispatchTableBuilder",
    "Match",
    "create_default_dispatch_table",
    "create_dispatch_table_with_defaults",
    "match_combinator",
    "match_delimited",
    "match_keyword",
    "match_pattern",
]
