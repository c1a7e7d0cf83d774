"""Rule-driven tokenizer.

The Tokenizer holds an ordered list of recognizer rules plus a fallback
policy, and turns text into a list of tokens:

1. Skip whitespace
2. Try every rule in registration order; the first match wins
3. If nothing matches, apply the fallback policy (or fail)

Priority is strictly registration order. There is no longest-match
arbitration: put longer keywords ("==") before their prefixes ("=").

Thread Safety:
A configured Tokenizer can be shared. Each tokenize() call scans with
its own Cursor and snapshots the rule tuple and config when it starts.
Registering rules while other threads tokenize is safe but those calls
will not see the new rule.

"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, NoReturn

from toks.config import DEFAULT_CONFIG, TokenizerConfig
from toks.cursor import Cursor
from toks.dispatch import DispatchTable, create_default_dispatch_table
from toks.errors import TokenizerError
from toks.modes import FallbackMode
from toks.profiling import get_tokenize_accumulator
from toks.protocols import Rule
from toks.rules import Combinator, DelimitedRegion, Keyword, PatternMatch
from toks.tokens import Token, TokenKind
from toks.utils.logger import get_logger

if TYPE_CHECKING:
    from toks.profiling import TokenizeAccumulator
    from toks.protocols import Matcher

logger = get_logger(__name__)

Position = tuple[int, int, int]  # (offset, line, column)


@dataclass(frozen=True, slots=True)
class TokenizeResult:
    """Outcome of Tokenizer.try_tokenize().

    Holds either the complete token list or the error, never both:
    tokens produced before a failure are not kept.

    Attributes:
        tokens: Tokens from a successful call (empty on failure)
        error: The TokenizerError on failure, else None
    """

    tokens: tuple[Token, ...] = ()
    error: TokenizerError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> list[Token]:
        """Return the tokens, or raise the stored error."""
        if self.error is not None:
            raise self.error
        return list(self.tokens)


class Tokenizer:
    """Ordered set of recognizer rules plus a fallback policy.

    Usage:
            >>> tokenizer = Tokenizer()
            >>> eq = tokenizer.add_keyword("=", "EQ")
            >>> tokenizer.set_fallback_mode(FallbackMode.MATCH_SEEKING)
            >>> tokenizer.set_default_kind("ID")
            >>> tokenizer.tokenize("x=1")
        [Token(ID, 'x', 0:0), Token(EQ, '=', 0:1), Token(ID, '1', 0:2)]

    """

    __slots__ = ("_rules", "_config", "_dispatch")

    def __init__(
        self,
        rules: Iterable[Rule] = (),
        *,
        config: TokenizerConfig | None = None,
        dispatch_table: DispatchTable | None = None,
    ) -> None:
        """Initialize tokenizer.

        Args:
            rules: Initial rules, in priority order
            config: Fallback settings (defaults to DEFAULT_CONFIG)
            dispatch_table: Matchers by rule type (defaults to built-ins)

        Raises:
            TypeError: If a rule has no 'kind'
            DispatchError: If a rule type has no matcher in the table
        """
        self._rules: tuple[Rule, ...] = ()
        self._config = config if config is not None else DEFAULT_CONFIG
        self._dispatch = (
            dispatch_table if dispatch_table is not None else create_default_dispatch_table()
        )
        self.register_all(rules)

    # =========================================================================
    # Registration
    # =========================================================================

    def register(self, rule: Rule) -> Tokenizer:
        """Append a rule at the lowest priority.

        Args:
            rule: Rule instance whose type the dispatch table handles

        Returns:
            Self for chaining

        Raises:
            TypeError: If rule has no 'kind'
            DispatchError: If rule (or a nested sub-rule) cannot be dispatched
        """
        if not isinstance(rule, Rule):
            msg = f"{type(rule).__name__} is not a rule (missing 'kind' attribute)"
            raise TypeError(msg)
        self._dispatch.validate(rule)
        self._rules = (*self._rules, rule)
        logger.debug("Registered %r at priority %d", rule, len(self._rules) - 1)
        return self

    def register_all(self, rules: Iterable[Rule]) -> Tokenizer:
        """Register several rules, keeping their order."""
        for rule in rules:
            self.register(rule)
        return self

    def add_keyword(self, literal: str, kind: TokenKind) -> Keyword:
        """Register and return a Keyword rule."""
        rule = Keyword(literal, kind)
        self.register(rule)
        return rule

    def add_delimited(
        self,
        begin: str,
        end: str,
        kind: TokenKind,
        keep_begin: bool = True,
        keep_end: bool = True,
    ) -> DelimitedRegion:
        """Register and return a DelimitedRegion rule."""
        rule = DelimitedRegion(begin, end, kind, keep_begin, keep_end)
        self.register(rule)
        return rule

    def add_pattern(
        self,
        pattern: str | re.Pattern[str],
        kind: TokenKind,
        *,
        anchored: bool = False,
        flags: int = 0,
    ) -> PatternMatch:
        """Register and return a PatternMatch rule."""
        rule = PatternMatch(pattern, kind, anchored=anchored, flags=flags)
        self.register(rule)
        return rule

    def add_combinator(self, rules: Sequence[Rule], kind: TokenKind) -> Combinator:
        """Register and return a Combinator over rules."""
        rule = Combinator(tuple(rules), kind)
        self.register(rule)
        return rule

    # =========================================================================
    # Configuration
    # =========================================================================

    def set_default_kind(self, kind: TokenKind) -> None:
        """Set the kind stamped on fallback tokens."""
        self._config = replace(self._config, default_kind=kind)

    def set_fallback_mode(self, mode: FallbackMode | str) -> None:
        """Choose between WORD_SCAN and MATCH_SEEKING fallback."""
        self._config = replace(self._config, fallback_mode=FallbackMode.coerce(mode))

    @property
    def rules(self) -> tuple[Rule, ...]:
        """Registered rules in priority order."""
        return self._rules

    @property
    def config(self) -> TokenizerConfig:
        return self._config

    @property
    def dispatch_table(self) -> DispatchTable:
        return self._dispatch

    def __len__(self) -> int:
        """Number of registered rules."""
        return len(self._rules)

    def __repr__(self) -> str:
        return (
            f"Tokenizer(rules={len(self._rules)}, "
            f"default_kind={self._config.default_kind!r}, "
            f"fallback_mode={self._config.fallback_mode.name})"
        )

    # =========================================================================
    # Tokenizing
    # =========================================================================

    def tokenize(
        self,
        text: str,
        allow_default_identifiers: bool | None = None,
        *,
        source_file: str | None = None,
    ) -> list[Token]:
        """Tokenize text.

        Args:
            text: Source text (line endings are normalized to ``\\n``)
            allow_default_identifiers: Use the fallback policy for input no
                rule recognizes; None uses the config default
            source_file: Optional path carried on tokens and errors

        Returns:
            Tokens in input order

        Raises:
            TokenizerError: If unrecognized input cannot be handled. No
                partial token list is returned.
        """
        config = self._config
        if allow_default_identifiers is None:
            allow_default_identifiers = config.allow_default_identifiers

        scan = _Scan(
            Cursor(text),
            [(rule, self._dispatch.matcher_for(rule)) for rule in self._rules],
            self._dispatch,
            config.default_kind,
            source_file,
            get_tokenize_accumulator(),
        )
        return scan.run(allow_default_identifiers, config.fallback_mode)

    def try_tokenize(
        self,
        text: str,
        allow_default_identifiers: bool | None = None,
        *,
        source_file: str | None = None,
    ) -> TokenizeResult:
        """Like tokenize(), but return the error instead of raising it."""
        try:
            tokens = self.tokenize(
                text, allow_default_identifiers, source_file=source_file
            )
        except TokenizerError as e:
            return TokenizeResult(error=e)
        return TokenizeResult(tokens=tuple(tokens))


class _Scan:
    """State for one tokenize() call.

    Thread Safety:
        Single-use. Owned by the calling thread for the duration of the call.
    """

    __slots__ = (
        "_cursor",
        "_matchers",  # (rule, matcher) pairs in priority order
        "_table",
        "_default_kind",
        "_source_file",
        "_acc",
        "_tokens",
        "_fallback_count",
    )

    def __init__(
        self,
        cursor: Cursor,
        matchers: list[tuple[Rule, Matcher]],
        table: DispatchTable,
        default_kind: TokenKind,
        source_file: str | None,
        acc: TokenizeAccumulator | None,
    ) -> None:
        self._cursor = cursor
        self._matchers = matchers
        self._table = table
        self._default_kind = default_kind
        self._source_file = source_file
        self._acc = acc
        self._tokens: list[Token] = []
        self._fallback_count = 0

    def run(self, allow_default_identifiers: bool, mode: FallbackMode) -> list[Token]:
        """Scan the whole buffer.

        Raises:
            TokenizerError: On the first position that cannot be tokenized.
        """
        cursor = self._cursor
        acc = self._acc
        if acc is not None:
            acc.record_call(len(cursor))

        try:
            while not cursor.eof():
                cursor.skip_whitespace()
                if cursor.eof():
                    break

                token = self._try_rules()
                if token is not None:
                    self._tokens.append(token)
                    continue

                if not allow_default_identifiers:
                    self._fail()

                if mode is FallbackMode.WORD_SCAN:
                    self._scan_word()
                else:
                    self._scan_until_match()
        except TokenizerError:
            if acc is not None:
                acc.record_error()
            raise

        if acc is not None:
            acc.record_result(len(self._tokens), self._fallback_count)
        return self._tokens

    def _try_rules(self) -> Token | None:
        """Try every rule at the cursor; advance past the first match."""
        cursor = self._cursor
        start = cursor.position()
        attempts = 0
        result: Token | None = None

        for rule, matcher in self._matchers:
            attempts += 1
            match = matcher(rule, cursor, self._table)
            if match is not None:
                cursor.advance(match.consumed)
                result = self._make_token(rule.kind, match.text, start)
                break

        if self._acc is not None:
            self._acc.record_attempts(attempts)
        return result

    def _scan_word(self) -> None:
        """Emit everything up to the next whitespace as one default token."""
        cursor = self._cursor
        start = cursor.position()
        while not cursor.eof() and not cursor.is_whitespace():
            cursor.advance()
        self._emit_fallback(start, cursor.position())

    def _scan_until_match(self) -> None:
        """Consume characters until a rule matches, whitespace, or end.

        When a rule matches, the text consumed so far is emitted first,
        then the matched token, preserving input order.
        """
        cursor = self._cursor
        start = cursor.position()

        while not cursor.eof() and not cursor.is_whitespace():
            cursor.advance()
            fallback_end = cursor.position()
            token = self._try_rules()
            if token is not None:
                self._emit_fallback(start, fallback_end)
                self._tokens.append(token)
                return

        if cursor.offset == start[0]:
            self._fail()
        self._emit_fallback(start, cursor.position())

    def _emit_fallback(self, start: Position, end: Position) -> None:
        text = self._cursor.buffer[start[0] : end[0]]
        logger.debug(
            "No rule matched at %d:%d, emitting %r as %r",
            start[1],
            start[2],
            text,
            self._default_kind,
        )
        self._tokens.append(self._make_token(self._default_kind, text, start, end))
        self._fallback_count += 1

    def _make_token(
        self,
        kind: TokenKind,
        text: str,
        start: Position,
        end: Position | None = None,
    ) -> Token:
        """Create a Token spanning start to end (default: the cursor)."""
        end_offset, end_line, end_column = end if end is not None else self._cursor.position()
        return Token(
            kind=kind,
            text=text,
            line=start[1],
            column=start[2],
            offset=start[0],
            end_offset=end_offset,
            end_line=end_line,
            end_column=end_column,
            source_file=self._source_file,
        )

    def _fail(self) -> NoReturn:
        cursor = self._cursor
        logger.debug(
            "Unrecognized input at %d:%d: %r",
            cursor.line,
            cursor.column,
            cursor.slice(0, 20),
        )
        raise TokenizerError(cursor.line, cursor.column, self._source_file)


__all__ = ["Tokenizer", "TokenizeResult"]
