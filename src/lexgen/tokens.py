"""Token definitions for lexgen.

The scanner produces a list of Token objects that a cursor hands out
one at a time. Each Token has a type (a rule name), a value, and its
position in the source buffer.

Thread Safety:
Token is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

# Type of the sentinel token returned once after the last real token
EOF = "EOF"

# Type of the implicit fallback rule absorbing unmatched input
ERROR = "ERROR"

RESERVED_NAMES = frozenset({EOF, ERROR})


@dataclass(frozen=True, slots=True)
class Token:
    """A token produced by the scanner.

    Attributes:
        type: Name of the rule that matched, ERROR, or EOF
        value: Matched text, or the rule's value hook applied to it
        line: Line number (starts at the scan's start line, usually 1)
        col: Column relative to the most recent line start (1-indexed)
        length: Length of the matched text (before any value hook)

    Thread Safety:
        Frozen dataclass ensures immutability for safe sharing.

    """

    type: str
    value: str
    line: int
    col: int
    length: int

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        val = self.value
        if len(val) > 20:
            val = val[:17] + "..."
        return f"Token({self.type}, {val!r}, {self.line}:{self.col})"

    def with_type(self, type_name: str) -> Token:
        """Return a copy of this token with a different type."""
        return replace(self, type=type_name)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-compatible dict."""
        return {
            "type": self.type,
            "value": self.value,
            "line": self.line,
            "col": self.col,
            "length": self.length,
        }
