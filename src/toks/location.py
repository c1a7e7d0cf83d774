"""Source location tracking for tokens and error messages.

Provides SourceLocation dataclass for tracking positions in the
normalized source buffer.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Span of a token in the normalized source buffer.

    Lines and columns are 0-indexed. Offsets index into the buffer after
    line-ending normalization (every ``\\r\\n`` and ``\\r`` folded to ``\\n``).

    Attributes:
        line: Starting line (0-indexed)
        column: Starting column (0-indexed)
        offset: Absolute start offset in the buffer
        end_offset: Absolute end offset in the buffer (exclusive)
        end_line: Line after the last consumed character (optional)
        end_column: Column after the last consumed character (optional)
        source_file: Source file path (optional, for error messages)

    Examples:
            >>> loc = SourceLocation(line=0, column=4)
            >>> str(loc)
            '0:4'

            >>> loc = SourceLocation(2, 0, source_file="grammar.txt")
            >>> str(loc)
            'grammar.txt:2:0'

    """

    line: int
    column: int
    offset: int = 0
    end_offset: int = 0
    end_line: int | None = None
    end_column: int | None = None
    source_file: str | None = None

    def __str__(self) -> str:
        """Format location for error messages.

        Returns:
            Formatted string like "file.txt:10:5" or "10:5"
        """
        if self.source_file:
            return f"{self.source_file}:{self.line}:{self.column}"
        return f"{self.line}:{self.column}"

    @property
    def length(self) -> int:
        """Number of buffer characters covered by this span."""
        return self.end_offset - self.offset

    def span_to(self, end: SourceLocation) -> SourceLocation:
        """Create a new location spanning from this location to end.

        Args:
            end: Ending location

        Returns:
            New SourceLocation with this start and end's end positions
        """
        return SourceLocation(
            line=self.line,
            column=self.column,
            offset=self.offset,
            end_offset=end.end_offset or end.offset,
            end_line=end.end_line if end.end_line is not None else end.line,
            end_column=end.end_column if end.end_column is not None else end.column,
            source_file=self.source_file,
        )
