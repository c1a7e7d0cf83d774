"""Protocols for toks.

Defines the contracts between recognizer rules, their matchers, and the
dispatch table that connects them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from toks.cursor import Cursor
    from toks.dispatch import DispatchTable, Match
    from toks.tokens import TokenKind


@runtime_checkable
class Rule(Protocol):
    """Anything the tokenizer can register.

    A rule is plain configuration: the tag to stamp on tokens it produces
    plus whatever its matcher needs. Rules must be immutable once
    registered; concurrent tokenize() calls share them.

    """

    @property
    def kind(self) -> TokenKind:
        """Tag stamped on tokens this rule produces."""
        ...


class Matcher(Protocol):
    """Matching algorithm for one rule type.

    Matchers look at the text from the cursor's current position and
    report what they would capture. They must leave the cursor where they
    found it; the tokenizer advances it by ``Match.consumed``.
    Composite matchers run sub-rules through ``table``.

    Thread Safety:
        Matchers must be stateless. The same matcher runs concurrently for
        every tokenize() call that uses the table.

    """

    def __call__(
        self,
        rule: Rule,
        cursor: Cursor,
        table: DispatchTable,
    ) -> Match | None:
        """Attempt to match rule at the cursor.

        Args:
            rule: The rule being tried
            cursor: Scan cursor (net position must be unchanged on return)
            table: Dispatch table, for matching nested rules

        Returns:
            Match with captured text and consumed length, or None
        """
        ...
