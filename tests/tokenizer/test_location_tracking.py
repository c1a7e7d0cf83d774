"""Tests for line/column/offset tracking on emitted tokens.

Lines and columns are 0-indexed and always refer to the buffer after
line-ending normalization.
"""

from toks import DelimitedRegion, Keyword, Tokenizer


class TestSingleLine:
    def test_first_token_at_origin(self) -> None:
        token = Tokenizer().tokenize("abc")[0]
        assert (token.line, token.column, token.offset) == (0, 0, 0)

    def test_leading_whitespace_counted(self) -> None:
        token = Tokenizer().tokenize(" \t abc")[0]
        assert (token.line, token.column) == (0, 3)

    def test_location_object(self) -> None:
        token = Tokenizer().tokenize("  abc")[0]
        loc = token.location
        assert (loc.line, loc.column, loc.offset, loc.end_offset) == (0, 2, 2, 5)
        assert loc.length == 3
        assert str(loc) == "0:2"

    def test_location_cached(self) -> None:
        token = Tokenizer().tokenize("abc")[0]
        assert token.location is token.location


class TestMultiline:
    def test_tokens_on_successive_lines(self) -> None:
        tokens = Tokenizer().tokenize("one\ntwo\n  three")
        assert [(t.line, t.column) for t in tokens] == [(0, 0), (1, 0), (2, 2)]

    def test_blank_lines(self) -> None:
        tokens = Tokenizer().tokenize("a\n\n\nb")
        assert (tokens[1].line, tokens[1].column) == (3, 0)

    def test_newlines_inside_delimited_token(self) -> None:
        """Crossing a multi-line token moves line by its newline count."""
        tokenizer = Tokenizer([DelimitedRegion('"', '"', "STR")])
        tokens = tokenizer.tokenize('x "a\nbc\nd" y')
        string, after = tokens[1], tokens[2]
        assert (string.line, string.column) == (0, 2)
        assert (string.end_line, string.end_column) == (2, 2)
        assert (after.text, after.line, after.column) == ("y", 2, 3)

    def test_stripped_delimiters_do_not_shift_positions(self) -> None:
        tokenizer = Tokenizer([DelimitedRegion("/*", "*/", "C", keep_begin=False, keep_end=False)])
        tokens = tokenizer.tokenize("/*\n\n*/z")
        assert tokens[0].text == "\n\n"
        assert (tokens[1].line, tokens[1].column) == (2, 2)

    def test_keyword_containing_newline(self) -> None:
        tokens = Tokenizer([Keyword("a\nb", "AB")]).tokenize("a\nb c")
        assert (tokens[1].line, tokens[1].column) == (1, 2)


class TestLineEndingNormalization:
    def test_crlf_counts_as_one_newline(self) -> None:
        tokens = Tokenizer().tokenize("a\r\nb")
        assert [(t.text, t.line, t.column, t.offset) for t in tokens] == [
            ("a", 0, 0, 0),
            ("b", 1, 0, 2),
        ]

    def test_bare_cr_is_newline(self) -> None:
        tokens = Tokenizer().tokenize("a\rb\r\rc")
        assert [(t.text, t.line) for t in tokens] == [("a", 0), ("b", 1), ("c", 3)]

    def test_crlf_inside_delimited_text(self) -> None:
        tokenizer = Tokenizer([DelimitedRegion("[", "]", "BR")])
        assert tokenizer.tokenize("[a\r\nb]")[0].text == "[a\nb]"

    def test_keyword_with_crlf_needs_normalized_literal(self) -> None:
        tokens = Tokenizer([Keyword("\r\n", "CRLF")]).tokenize("x\r\ny")
        assert [t.kind for t in tokens] == ["__default__", "__default__"]


class TestSourceFile:
    def test_source_file_on_tokens(self) -> None:
        tokens = Tokenizer().tokenize("a b", source_file="grammar.txt")
        assert all(t.source_file == "grammar.txt" for t in tokens)
        assert str(tokens[1].location) == "grammar.txt:0:2"

    def test_no_source_file(self) -> None:
        assert Tokenizer().tokenize("a")[0].source_file is None
