"""Benchmark tokenize() across fallback modes.

Run with:
    pytest benchmarks/benchmark_tokenize.py -v --benchmark-only

Or for quick comparison:
    python benchmarks/benchmark_tokenize.py
"""

import time

from toks import FallbackMode, PatternMatch, Tokenizer, TokenizerConfig
from toks.profiling import profiled_tokenize


def benchmark_mode(source: str, mode: FallbackMode, iterations: int = 5) -> tuple[float, int]:
    """Time one fallback mode; return (ms per call, rule attempts per call)."""
    tokenizer = Tokenizer(
        [PatternMatch("z", "Z")], config=TokenizerConfig(fallback_mode=mode)
    )
    tokenizer.tokenize(source)  # Warmup

    with profiled_tokenize() as acc:
        start = time.perf_counter()
        for _ in range(iterations):
            tokenizer.tokenize(source)
        elapsed = time.perf_counter() - start
    return elapsed / iterations * 1000, acc.rule_attempts // iterations


def main() -> None:
    print("Unmatched word, one unanchored pattern rule")
    print(f"{'length':>8} {'mode':>14} {'ms':>10} {'attempts':>10}")
    for n in (250, 500, 1000, 2000):
        source = "a" * n
        for mode in FallbackMode:
            ms, attempts = benchmark_mode(source, mode)
            print(f"{n:>8} {mode.value:>14} {ms:>10.3f} {attempts:>10}")

    print("\nNote: match-seeking retries every rule after each character; time grows")
    print("quadratically with word length when a rule scans ahead.")


# pytest-benchmark integration
try:
    import pytest

    @pytest.mark.benchmark(group="tokenize-source")
    def test_benchmark_word_scan(benchmark, tokenizer, large_source):
        """Benchmark WORD_SCAN on ~100KB of C-like source."""
        benchmark(tokenizer.tokenize, large_source)

    @pytest.mark.benchmark(group="tokenize-source")
    def test_benchmark_match_seeking(benchmark, rules, large_source):
        """Benchmark MATCH_SEEKING on ~100KB of C-like source."""
        tokenizer = Tokenizer(
            rules, config=TokenizerConfig(fallback_mode=FallbackMode.MATCH_SEEKING)
        )
        benchmark(tokenizer.tokenize, large_source)

    @pytest.mark.benchmark(group="tokenize-unmatched")
    def test_benchmark_unmatched_word_scan(benchmark, unmatched_word):
        tokenizer = Tokenizer([PatternMatch("z", "Z")])
        benchmark(tokenizer.tokenize, unmatched_word)

    @pytest.mark.benchmark(group="tokenize-unmatched")
    def test_benchmark_unmatched_match_seeking(benchmark, unmatched_word):
        """Quadratic case: every character retries a pattern that scans to the end."""
        tokenizer = Tokenizer(
            [PatternMatch("z", "Z")],
            config=TokenizerConfig(fallback_mode=FallbackMode.MATCH_SEEKING),
        )
        benchmark(tokenizer.tokenize, unmatched_word)

except ImportError:
    pass


if __name__ == "__main__":
    main()
