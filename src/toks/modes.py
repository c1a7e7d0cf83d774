"""Tokenizer fallback modes.

This module defines what the tokenizer does with input that no
registered rule recognizes.
"""

from __future__ import annotations

from enum import Enum


class FallbackMode(Enum):
    """Fallback policy applied when no rule matches.

    - WORD_SCAN: Consume up to the next whitespace as one default token
    - MATCH_SEEKING: Consume one character at a time until a rule matches,
      then emit the consumed text just before the matched token

    """

    WORD_SCAN = "word_scan"
    MATCH_SEEKING = "match_seeking"

    @classmethod
    def coerce(cls, value: FallbackMode | str) -> FallbackMode:
        """Accept an enum member, its value, or its name (any case).

        Raises:
            ValueError: If value names no mode.
        """
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        for mode in cls:
            if key in (mode.value, mode.name.lower()):
                return mode
        names = ", ".join(m.value for m in cls)
        msg = f"Unknown fallback mode {value!r}. Available: {names}"
        raise ValueError(msg)
