"""Error-path tests.

Exercise the failure modes of tokenize(): unrecognized input with the
fallback disabled, invalid rules, and the non-raising try_tokenize().
"""

import pytest

from toks import (
    Combinator,
    CursorStateError,
    DelimitedRegion,
    DispatchError,
    Keyword,
    RuleError,
    TokenizeResult,
    Tokenizer,
    TokenizerConfig,
    TokenizerError,
    ToksError,
)

# =========================================================================
# TokenizerError construction and formatting
# =========================================================================


class TestTokenizerErrorFormatting:
    def test_message(self) -> None:
        err = TokenizerError(3, 7)
        assert str(err) == "Tokenizer error at line 3, column 7"
        assert (err.line, err.column, err.source_file) == (3, 7, None)

    def test_message_with_source_file(self) -> None:
        err = TokenizerError(0, 0, "rules.txt")
        assert str(err) == "rules.txt: Tokenizer error at line 0, column 0"

    @pytest.mark.parametrize(
        "error_class", [TokenizerError, RuleError, DispatchError, CursorStateError]
    )
    def test_hierarchy(self, error_class: type) -> None:
        assert issubclass(error_class, ToksError)
        assert issubclass(ToksError, Exception)


# =========================================================================
# Unrecognized input
# =========================================================================


class TestUnrecognizedInput:
    def test_fails_at_first_character(self) -> None:
        with pytest.raises(TokenizerError) as exc_info:
            Tokenizer().tokenize("@@@", False)
        assert (exc_info.value.line, exc_info.value.column) == (0, 0)

    def test_fails_at_later_position(self) -> None:
        tokenizer = Tokenizer([Keyword("a", "A")])
        with pytest.raises(TokenizerError) as exc_info:
            tokenizer.tokenize("a a\n @", False)
        assert (exc_info.value.line, exc_info.value.column) == (1, 1)

    def test_position_after_crlf(self) -> None:
        tokenizer = Tokenizer([Keyword("a", "A")])
        with pytest.raises(TokenizerError) as exc_info:
            tokenizer.tokenize("a\r\n\r\n  b", False)
        assert (exc_info.value.line, exc_info.value.column) == (2, 2)

    def test_source_file_in_error(self) -> None:
        with pytest.raises(TokenizerError, match=r"^in\.txt: Tokenizer error"):
            Tokenizer().tokenize("x", False, source_file="in.txt")

    def test_config_default_disallows_fallback(self) -> None:
        tokenizer = Tokenizer(config=TokenizerConfig(allow_default_identifiers=False))
        with pytest.raises(TokenizerError):
            tokenizer.tokenize("x")

    def test_argument_overrides_config(self) -> None:
        tokenizer = Tokenizer(config=TokenizerConfig(allow_default_identifiers=False))
        assert [t.text for t in tokenizer.tokenize("x", True)] == ["x"]

    def test_recognized_input_succeeds_without_fallback(self) -> None:
        tokenizer = Tokenizer([Keyword("a", "A"), Keyword("b", "B")])
        assert [t.kind for t in tokenizer.tokenize(" a\nb ", False)] == ["A", "B"]

    def test_empty_input_never_fails(self) -> None:
        assert Tokenizer().tokenize("", False) == []
        assert Tokenizer().tokenize(" \n\t", False) == []

    def test_unterminated_region_without_fallback(self) -> None:
        tokenizer = Tokenizer([DelimitedRegion('"', '"', "STR")])
        with pytest.raises(TokenizerError) as exc_info:
            tokenizer.tokenize('"ok', False)
        assert exc_info.value.column == 0


# =========================================================================
# try_tokenize
# =========================================================================


class TestTryTokenize:
    def test_success(self) -> None:
        result = Tokenizer([Keyword("a", "A")]).try_tokenize("a a")
        assert isinstance(result, TokenizeResult)
        assert result.ok
        assert result.error is None
        assert [t.kind for t in result.unwrap()] == ["A", "A"]

    def test_failure_holds_error_and_no_tokens(self) -> None:
        result = Tokenizer([Keyword("a", "A")]).try_tokenize("a a @", False)
        assert not result.ok
        assert result.tokens == ()
        assert result.error is not None
        assert (result.error.line, result.error.column) == (0, 4)

    def test_unwrap_raises_stored_error(self) -> None:
        result = Tokenizer().try_tokenize("x", False, source_file="f.txt")
        with pytest.raises(TokenizerError, match="f.txt"):
            result.unwrap()

    def test_rule_errors_still_raise(self) -> None:
        """Only tokenization failures are captured."""
        with pytest.raises(RuleError):
            Tokenizer().add_keyword("", "EMPTY")


# =========================================================================
# Invalid rules
# =========================================================================


class TestInvalidRules:
    @pytest.mark.parametrize(
        "build",
        [
            lambda: Keyword("", "K"),
            lambda: DelimitedRegion("", "*/", "C"),
            lambda: DelimitedRegion("/*", "", "C"),
            lambda: Combinator([], "EMPTY"),
        ],
    )
    def test_rejected_at_construction(self, build) -> None:
        with pytest.raises(RuleError):
            build()

    def test_bad_pattern_through_helper(self) -> None:
        tokenizer = Tokenizer()
        with pytest.raises(RuleError, match="PatternMatch"):
            tokenizer.add_pattern("(unclosed", "BAD")
        assert len(tokenizer) == 0

    def test_rejected_rule_not_registered(self) -> None:
        class Orphan:
            kind = "ORPHAN"

        tokenizer = Tokenizer([Keyword("a", "A")])
        with pytest.raises(DispatchError):
            tokenizer.register(Orphan())
        assert len(tokenizer) == 1
