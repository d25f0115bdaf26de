"""Reusable lexer built from an ordered rule set.

Usage:
    >>> from lexgen import build_lexer
    >>> lexer = build_lexer([
    ...     r"(?P<NUM>\\d+)",
    ...     (r"(?P<WS>\\s+)", {"skip": True}),
    ...     r"(?P<PLUS>\\+)",
    ... ])
    >>> lexer("12 + 3")
    [Token(NUM, '12', 1:1), Token(PLUS, '+', 1:4), Token(NUM, '3', 1:6)]
    >>> sorted(lexer.valid_tokens)
    ['ERROR', 'NUM', 'PLUS', 'WS']

Thread Safety:
Lexer wraps immutable CompiledRules; every call scans with a fresh
Scanner, so one Lexer may be used from many threads at once.

"""

from __future__ import annotations

from collections.abc import Iterable

from lexgen.rules import CompiledRules, RuleInput, compile_rules
from lexgen.scanner import scan
from lexgen.tokens import Token


class Lexer:
    """Callable tokenizer over compiled rules."""

    __slots__ = ("_compiled",)

    def __init__(self, compiled: CompiledRules) -> None:
        self._compiled = compiled

    @property
    def compiled(self) -> CompiledRules:
        return self._compiled

    @property
    def valid_tokens(self) -> frozenset[str]:
        """Names of all rules, including the ERROR fallback."""
        return self._compiled.names

    def tokenize(self, text: str, line: int = 1) -> list[Token]:
        """Scan text into tokens (no EOF sentinel).

        Args:
            text: Source text
            line: Line number of the first line of text
        """
        return scan(self._compiled, text, line)

    __call__ = tokenize

    def __repr__(self) -> str:
        names = ", ".join(r.name for r in self._compiled.rules)
        return f"Lexer({names})"


def build_lexer(rules: Iterable[RuleInput]) -> Lexer:
    """Compile rules into a Lexer.

    Args:
        rules: Rules in priority order; see compile_rules for accepted forms

    Raises:
        UnnamedPatternError: A pattern lacks exactly one named group
        DuplicateNameError: A name is reused or reserved
    """
    return Lexer(compile_rules(rules))
