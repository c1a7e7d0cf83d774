"""Opt-in profiling for tokenize() calls.

Accumulates, across every tokenize() call made inside a profiled block:
- Total time and source length
- Tokens produced and how many came from the fallback policy
- Rule attempts (each matcher call at the top level of the scan loop)

Rule attempts are the number to watch on adversarial input: with
match-seeking fallback every consumed character retries every rule, and
an unterminated delimiter or far-reaching pattern rescans the rest of
the buffer on each try, so work can grow quadratically with input size.

Zero overhead when disabled (get_tokenize_accumulator() returns None).

Example:
    from toks.profiling import profiled_tokenize

    with profiled_tokenize() as metrics:
        tokens = tokenizer.tokenize(source)

    print(metrics.summary())
    # {"total_ms": 0.4, "tokenize_calls": 1, "source_length": 18, ...}

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any


@dataclass
class TokenizeAccumulator:
    """Accumulated metrics during tokenization.

    Attributes:
        start_time: Profiling start timestamp.
        tokenize_calls: Number of tokenize() calls recorded.
        source_length: Total normalized source length scanned.
        token_count: Tokens produced by successful calls.
        fallback_tokens: Tokens produced by the fallback policy.
        rule_attempts: Matcher calls made by the scan loop.
        errors: Calls that ended in TokenizerError.

    """

    start_time: float = field(default_factory=perf_counter)
    tokenize_calls: int = 0
    source_length: int = 0
    token_count: int = 0
    fallback_tokens: int = 0
    rule_attempts: int = 0
    errors: int = 0

    def record_call(self, source_length: int) -> None:
        """Record the start of a tokenize() call."""
        self.tokenize_calls += 1
        self.source_length += source_length

    def record_attempts(self, count: int) -> None:
        """Record matcher calls made while trying the rule list."""
        self.rule_attempts += count

    def record_result(self, token_count: int, fallback_tokens: int) -> None:
        """Record the tokens produced by a successful call."""
        self.token_count += token_count
        self.fallback_tokens += fallback_tokens

    def record_error(self) -> None:
        self.errors += 1

    @property
    def total_duration_ms(self) -> float:
        """Total profiling duration in milliseconds."""
        return (perf_counter() - self.start_time) * 1000

    def summary(self) -> dict[str, Any]:
        """Get summary of tokenize metrics."""
        return {
            "total_ms": round(self.total_duration_ms, 2),
            "tokenize_calls": self.tokenize_calls,
            "source_length": self.source_length,
            "token_count": self.token_count,
            "fallback_tokens": self.fallback_tokens,
            "rule_attempts": self.rule_attempts,
            "errors": self.errors,
        }


# Module-level ContextVar
_accumulator: ContextVar[TokenizeAccumulator | None] = ContextVar(
    "tokenize_accumulator",
    default=None,
)


def get_tokenize_accumulator() -> TokenizeAccumulator | None:
    """Get current accumulator (None if profiling disabled)."""
    return _accumulator.get()


@contextmanager
def profiled_tokenize() -> Iterator[TokenizeAccumulator]:
    """Context manager for profiled tokenization.

    Creates a TokenizeAccumulator and makes it available via
    get_tokenize_accumulator() for the duration of the with block.

    Yields:
        TokenizeAccumulator that will be populated during tokenize calls.

    """
    acc = TokenizeAccumulator()
    token: Token[TokenizeAccumulator | None] = _accumulator.set(acc)
    try:
        yield acc
    finally:
        _accumulator.reset(token)
