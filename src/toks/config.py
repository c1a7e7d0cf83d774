"""Tokenizer configuration.

TokenizerConfig holds the settings that shape how unrecognized input is
handled. It is frozen; the Tokenizer replaces it wholesale when a setter
is called, so a config object seen by one tokenize() call never changes
underneath it.

Usage:
    config = TokenizerConfig(default_kind="IDENT", fallback_mode=FallbackMode.MATCH_SEEKING)
    tokenizer = Tokenizer(rules, config=config)

    # Or from loaded settings
    config = TokenizerConfig.from_dict({"default_kind": "IDENT", "fallback_mode": "match_seeking"})

"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any

from toks.modes import FallbackMode
from toks.tokens import DEFAULT_KIND, TokenKind


@dataclass(frozen=True, slots=True)
class TokenizerConfig:
    """Immutable tokenizer configuration.

    Attributes:
        default_kind: Kind stamped on fallback tokens
        fallback_mode: What to do with input no rule recognizes
        allow_default_identifiers: Default for tokenize(); when False,
            unrecognized input raises TokenizerError

    """

    default_kind: TokenKind = DEFAULT_KIND
    fallback_mode: FallbackMode = FallbackMode.WORD_SCAN
    allow_default_identifiers: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "fallback_mode", FallbackMode.coerce(self.fallback_mode))

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> TokenizerConfig:
        """Create TokenizerConfig from dictionary.

        Only includes keys that are valid TokenizerConfig fields; unknown
        keys are silently ignored. ``fallback_mode`` may be given by enum
        member, value or name.

        Example:
            >>> config = TokenizerConfig.from_dict({
            ...     "default_kind": "IDENT",
            ...     "fallback_mode": "match_seeking",
            ...     "unknown_key": "ignored",
            ... })
            >>> config.fallback_mode
            <FallbackMode.MATCH_SEEKING: 'match_seeking'>

        """
        valid_fields = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict form, with the fallback mode as its string value."""
        return {
            "default_kind": self.default_kind,
            "fallback_mode": self.fallback_mode.value,
            "allow_default_identifiers": self.allow_default_identifiers,
        }


# Module-level default config (reused, never recreated)
DEFAULT_CONFIG: TokenizerConfig = TokenizerConfig()


__all__ = ["DEFAULT_CONFIG", "TokenizerConfig"]
