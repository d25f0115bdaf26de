"""
lexgen: regex-driven tokenizer generator

Compiles an ordered list of named regular expressions into a single
scanning engine that turns text into typed tokens with line/column
metadata, plus a pull-based cursor for grammar-driven parsers.

Quick Start:
    >>> from lexgen import build_lexer
    >>> lexer = build_lexer([
    ...     r"(?P<NUM>\\d+)",
    ...     (r"(?P<WS>\\s+)", {"skip": True}),
    ...     r"(?P<PLUS>\\+)",
    ... ])
    >>> lexer("12 + 3")
    [Token(NUM, '12', 1:1), Token(PLUS, '+', 1:4), Token(NUM, '3', 1:6)]

Parser Cursor:
    >>> from lexgen import nearley_lexer
    >>> cursor = nearley_lexer([r"(?P<WORD>\\w+)"]).reset("hello")
    >>> cursor.next(), cursor.next(), cursor.next()
    (Token(WORD, 'hello', 1:1), Token(EOF, 'hello', 1:1), None)

Rules:
    Earlier rules win when two rules match at the same position. Input no
    rule accepts becomes ERROR tokens instead of aborting the scan.
"""

from lexgen.config import (
    LexerConfig,
    get_lexer_config,
    lexer_config_context,
    reset_lexer_config,
    set_lexer_config,
)
from lexgen.cursor import TokenCursor, nearley_lexer
from lexgen.errors import (
    DuplicateNameError,
    LexgenError,
    RuleError,
    UnnamedPatternError,
)
from lexgen.lexer import Lexer, build_lexer
from lexgen.rules import CompiledRules, CompositeMatcher, Rule, RuleMatch, compile_rules, rule
from lexgen.scanner import Scanner, scan
from lexgen.tokens import EOF, ERROR, Token

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Rule compiler
    "Rule",
    "RuleMatch",
    "CompiledRules",
    "CompositeMatcher",
    "compile_rules",
    "rule",
    # Scanning engine
    "Scanner",
    "scan",
    # Lexer and cursor
    "Lexer",
    "build_lexer",
    "TokenCursor",
    "nearley_lexer",
    # Tokens
    "Token",
    "EOF",
    "ERROR",
    # Errors
    "LexgenError",
    "RuleError",
    "UnnamedPatternError",
    "DuplicateNameError",
    # Configuration (ContextVar-based)
    "LexerConfig",
    "get_lexer_config",
    "set_lexer_config",
    "reset_lexer_config",
    "lexer_config_context",
]
