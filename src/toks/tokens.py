"""Token definitions for the toks tokenizer.

The tokenizer produces a list of Token objects. Each Token carries the
kind stamped by the rule that produced it, the literal text, and the
0-indexed line and column where it starts.

Thread Safety:
Token is frozen (immutable) and safe to share across threads.

Performance Note:
Token stores raw coordinates and lazily creates SourceLocation on demand.

"""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from toks.location import SourceLocation

# Kinds are opaque to the engine: strings, enum members, anything hashable.
TokenKind = Hashable

# Kind stamped on fallback tokens when no default kind is configured
DEFAULT_KIND: TokenKind = "__default__"


@dataclass(frozen=True, slots=True)
class Token:
    """A token produced by the tokenizer.

    Attributes:
        kind: Tag supplied by the producing rule (or the default kind)
        text: Captured text (may differ from the consumed span, see
            DelimitedRegion keep flags and unanchored PatternMatch)
        line: Start line (0-indexed)
        column: Start column (0-indexed)
        offset: Absolute start offset in the normalized buffer
        end_offset: Absolute end offset of the consumed span
        end_line: Line after the consumed span
        end_column: Column after the consumed span
        source_file: Optional source file path

    Thread Safety:
        Frozen dataclass ensures immutability for safe sharing.
        The lazy cache uses idempotent write (safe for concurrent access).

    """

    kind: TokenKind
    text: str
    line: int
    column: int
    offset: int = 0
    end_offset: int = 0
    end_line: int | None = None
    end_column: int | None = None
    source_file: str | None = None
    # Cache field - excluded from repr and comparison
    _location_cache: SourceLocation | None = field(
        default=None, repr=False, compare=False, hash=False
    )

    @property
    def location(self) -> SourceLocation:
        """Get source location (lazily created and cached)."""
        if self._location_cache is not None:
            return self._location_cache

        # Import here to avoid circular import at module load
        from toks.location import SourceLocation

        loc = SourceLocation(
            line=self.line,
            column=self.column,
            offset=self.offset,
            end_offset=self.end_offset,
            end_line=self.end_line,
            end_column=self.end_column,
            source_file=self.source_file,
        )
        object.__setattr__(self, "_location_cache", loc)
        return loc

    @property
    def kind_name(self) -> str:
        """Printable name of the kind (enum member name or str())."""
        name = getattr(self.kind, "name", None)
        return name if isinstance(name, str) else str(self.kind)

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        val = self.text
        if len(val) > 20:
            val = val[:17] + "..."
        return f"Token({self.kind_name}, {val!r}, {self.line}:{self.column})"
