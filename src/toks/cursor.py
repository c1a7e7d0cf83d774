"""Scan cursor over a normalized, memory-resident text buffer.

The cursor owns the buffer and the positional bookkeeping (offset, line,
column). Line endings are normalized once at construction; afterwards the
buffer never changes.

Positions can be saved on an explicit stack and later restored or
discarded, which gives recognizers transactional backtracking.

Thread Safety:
Cursor instances are single-use. Create one per tokenize() call.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from toks.errors import CursorStateError

WHITESPACE = frozenset(" \t\n")


def normalize_newlines(text: str) -> str:
    """Fold ``\\r\\n`` and bare ``\\r`` into ``\\n``."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


class Cursor:
    """Read position within a normalized source buffer.

    Lines and columns are 0-indexed. Advancing over ``\\n`` moves to the
    next line and resets the column; any other character bumps the column.

    Usage:
            >>> cursor = Cursor("ab\\ncd")
            >>> cursor.advance(3)
            >>> (cursor.offset, cursor.line, cursor.column)
            (3, 1, 0)
            >>> cursor.peek()
            'c'

    """

    __slots__ = (
        "_buffer",
        "_buffer_len",  # Cached len(buffer)
        "_pos",
        "_line",
        "_col",
        "_saved",  # Stack of (offset, line, column)
    )

    def __init__(self, text: str) -> None:
        """Initialize cursor at the start of text.

        Args:
            text: Raw source text; line endings are normalized here
        """
        self._buffer = normalize_newlines(text)
        self._buffer_len = len(self._buffer)
        self._pos = 0
        self._line = 0
        self._col = 0
        self._saved: list[tuple[int, int, int]] = []

    # =========================================================================
    # Position accessors
    # =========================================================================

    @property
    def buffer(self) -> str:
        """The normalized text being scanned."""
        return self._buffer

    @property
    def offset(self) -> int:
        return self._pos

    @property
    def line(self) -> int:
        return self._line

    @property
    def column(self) -> int:
        return self._col

    @property
    def depth(self) -> int:
        """Number of saved positions on the stack."""
        return len(self._saved)

    def position(self) -> tuple[int, int, int]:
        """Current (offset, line, column)."""
        return self._pos, self._line, self._col

    def __len__(self) -> int:
        return self._buffer_len

    def __repr__(self) -> str:
        return f"Cursor(offset={self._pos}, line={self._line}, column={self._col})"

    # =========================================================================
    # Character navigation
    # =========================================================================

    def eof(self) -> bool:
        """True once every character of the buffer has been consumed."""
        return self._pos >= self._buffer_len

    def peek(self) -> str:
        """Peek at current character without advancing.

        Returns:
            Current character or empty string at end of input.
        """
        if self._pos >= self._buffer_len:
            return ""
        return self._buffer[self._pos]

    def is_whitespace(self) -> bool:
        """True if the current character is a space, tab or newline."""
        return self._pos < self._buffer_len and self._buffer[self._pos] in WHITESPACE

    def advance(self, n: int = 1) -> None:
        """Advance by n characters, stopping at end of input.

        Equivalent to n single-character steps: line/column stay correct
        for spans that cross newlines. Uses str.count/rfind on the crossed
        segment instead of a per-character loop.

        Args:
            n: Number of characters to consume.
        """
        if n <= 0:
            return
        end = min(self._pos + n, self._buffer_len)
        segment = self._buffer[self._pos : end]
        newline_count = segment.count("\n")

        if newline_count > 0:
            last_nl = segment.rfind("\n")
            self._line += newline_count
            self._col = len(segment) - last_nl - 1  # chars after last newline
        else:
            self._col += len(segment)

        self._pos = end

    def skip_whitespace(self) -> None:
        """Advance while the current character is whitespace."""
        pos = self._pos
        while pos < self._buffer_len and self._buffer[pos] in WHITESPACE:
            pos += 1
        self.advance(pos - self._pos)

    # =========================================================================
    # Lookahead (never moves the cursor)
    # =========================================================================

    def starts_with(self, s: str) -> bool:
        """Check if the remaining text starts with s."""
        return self._buffer.startswith(s, self._pos)

    def find(self, s: str, start: int = 0) -> int | None:
        """Find s in the remaining text.

        Args:
            s: Substring to look for.
            start: Characters to skip past the current position before
                searching.

        Returns:
            Offset of the match relative to the current position, or None.
        """
        idx = self._buffer.find(s, self._pos + start)
        return idx - self._pos if idx != -1 else None

    def slice(self, relative_start: int, length: int) -> str:
        """Substring starting relative_start characters past the cursor."""
        begin = self._pos + relative_start
        return self._buffer[begin : begin + length]

    def remaining(self) -> str:
        """Everything from the cursor to the end of the buffer."""
        return self._buffer[self._pos :]

    # =========================================================================
    # Transactional backtracking
    # =========================================================================

    def save(self) -> None:
        """Push the current position onto the save stack."""
        self._saved.append((self._pos, self._line, self._col))

    def restore(self) -> None:
        """Pop the most recently saved position and move back to it.

        Raises:
            CursorStateError: If nothing has been saved.
        """
        if not self._saved:
            raise CursorStateError("restore() called with an empty save stack")
        self._pos, self._line, self._col = self._saved.pop()

    def discard(self) -> None:
        """Pop the most recently saved position, keeping the current one.

        Raises:
            CursorStateError: If nothing has been saved.
        """
        if not self._saved:
            raise CursorStateError("discard() called with an empty save stack")
        self._saved.pop()
