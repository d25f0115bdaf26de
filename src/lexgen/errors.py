"""Exception classes for lexgen.

Provides standardized exceptions raised while compiling rule sets.
Scanning itself never raises: unmatched input becomes ERROR tokens.
"""

from __future__ import annotations


class LexgenError(Exception):
    """Base exception for all lexgen errors.
    
    Subclass this for specific error categories.
    """

    pass


class RuleError(LexgenError):
    """Error in a rule supplied to the rule compiler.
    
    Raised at compile time; no partial lexer is ever returned.
    """

    def __init__(
        self,
        message: str,
        rule_index: int | None = None,
        pattern: str | None = None,
    ) -> None:
        """Initialize rule error with optional rule position.
        
        Args:
            message: Error description
            rule_index: Position of the offending rule (0-indexed)
            pattern: Source of the offending pattern (optional)
        """
        self.message = message
        self.rule_index = rule_index
        self.pattern = pattern

        prefix = f"Rule #{rule_index}: " if rule_index is not None else ""
        suffix = f" (pattern {pattern!r})" if pattern is not None else ""
        super().__init__(f"{prefix}{message}{suffix}")


class UnnamedPatternError(RuleError):
    """A pattern has zero or more than one named group.
    
    Every rule must carry exactly one ``(?P<NAME>...)`` binding.
    """

    pass


class DuplicateNameError(RuleError):
    """Two rules share a name, or a rule uses a reserved name."""

    def __init__(
        self,
        name: str,
        rule_index: int | None = None,
        pattern: str | None = None,
        *,
        reserved: bool = False,
    ) -> None:
        """Initialize duplicate name error.
        
        Args:
            name: The clashing token name
            rule_index: Position of the second rule using the name
            pattern: Source of the offending pattern
            reserved: True when the name belongs to the engine (ERROR, EOF)
        """
        self.name = name
        self.reserved = reserved
        if reserved:
            message = f"token name '{name}' is reserved"
        else:
            message = f"duplicate token name '{name}'"
        super().__init__(message, rule_index, pattern)
