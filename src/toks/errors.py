"""Exception classes for toks.

Provides standardized exceptions for error handling throughout toks.
"""

from __future__ import annotations


class ToksError(Exception):
    """Base exception for all toks errors.

    Subclass this for specific error categories.
    """

    pass


class TokenizerError(ToksError):
    """No recognizer rule matched and the fallback policy could not help.

    Raised by ``Tokenizer.tokenize`` when, at some position, no registered
    rule matches and default identifiers are disallowed, or when
    match-seeking fallback cannot make progress. The whole call fails;
    tokens produced earlier in the same call are discarded.
    """

    def __init__(
        self,
        line: int,
        column: int,
        source_file: str | None = None,
    ) -> None:
        """Initialize tokenizer error with the failing position.

        Args:
            line: Line of the unrecognized input (0-indexed)
            column: Column of the unrecognized input (0-indexed)
            source_file: Path to source file (optional)
        """
        self.line = line
        self.column = column
        self.source_file = source_file

        prefix = f"{source_file}: " if source_file else ""
        super().__init__(f"{prefix}Tokenizer error at line {line}, column {column}")


class RuleError(ToksError):
    """Invalid recognizer rule configuration.

    Raised when a rule is constructed with values it can never match
    sensibly (empty literal, empty delimiter, uncompilable pattern).
    """

    def __init__(self, rule_name: str, message: str) -> None:
        """Initialize rule error.

        Args:
            rule_name: Name of the rule variant (e.g., "Keyword")
            message: Description of the problem
        """
        self.rule_name = rule_name
        super().__init__(f"{rule_name}: {message}")


class DispatchError(ToksError):
    """A rule has no matcher registered in the dispatch table."""

    def __init__(self, rule_type: type) -> None:
        self.rule_type = rule_type
        super().__init__(f"No matcher registered for rule type {rule_type.__name__}")


class CursorStateError(ToksError):
    """Cursor save stack misuse (restore or discard with nothing saved)."""

    pass
