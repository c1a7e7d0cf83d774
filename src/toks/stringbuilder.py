"""StringBuilder for O(n) text accumulation.

Appends to a list, joins once at the end. Used when a token's text is
assembled from several captured pieces (Combinator sub-matches).

Thread Safety:
StringBuilder instances are local to a single match attempt.
No shared mutable state.

"""

from __future__ import annotations


class StringBuilder:
    """Efficient string accumulator.

    Usage:
            >>> sb = StringBuilder()
            >>> sb.append("0x").append("ff")
            >>> sb.build()
            '0xff'

    """

    __slots__ = ("_parts", "_length")

    def __init__(self) -> None:
        """Initialize empty StringBuilder."""
        self._parts: list[str] = []
        self._length = 0

    def append(self, s: str) -> StringBuilder:
        """Append a string to the builder.

        Args:
            s: String to append (empty strings are skipped)

        Returns:
            self for method chaining
        """
        if s:
            self._parts.append(s)
            self._length += len(s)
        return self

    def build(self) -> str:
        """Join all parts into final string."""
        return "".join(self._parts)

    def clear(self) -> StringBuilder:
        """Clear all accumulated parts."""
        self._parts.clear()
        self._length = 0
        return self

    def __len__(self) -> int:
        """Total number of characters appended."""
        return self._length

    def __bool__(self) -> bool:
        """Return True if any text has been appended."""
        return self._length > 0
