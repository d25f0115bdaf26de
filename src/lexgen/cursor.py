"""Pull-based cursor over a scanned token list.

This is the boundary an external grammar-driven parser talks to:
``reset(buffer, info)``, ``next()``, ``save()``, ``has(name)`` and
``format_error(token)``. It is shaped after the lexer protocol of
nearley-style parsers.

End of stream:
    After the last real token, ``next()`` returns exactly one EOF token
    (a copy of the last token with ``type="EOF"``) and ``None`` afterwards.
    For an empty stream the EOF token is ``Token("EOF", "", start_line, 1, 0)``.

Checkpoints:
    ``position`` is the authoritative checkpoint; ``save()`` only peeks at
    the token there. There is no in-place rewind: a consumer restores an
    earlier point by calling ``reset(data, info)`` again with the line info
    it captured (a saved token or any object/mapping with ``line``).

Thread Safety:
    A TokenCursor owns mutable state and must not be shared between threads
    without external locking. Distinct cursors are fully independent.

"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import replace
from typing import Any

from lexgen.config import (
    LexerConfig,
    TokenTransform,
    get_lexer_config,
    normalize_transforms,
)
from lexgen.lexer import Lexer, build_lexer
from lexgen.rules import RuleInput
from lexgen.tokens import EOF, Token
from lexgen.utils.logger import get_logger

logger = get_logger(__name__)


class TokenCursor:
    """Stateful cursor handing out tokens one at a time.

    Usage:
            >>> cursor = TokenCursor(build_lexer([r"(?P<WORD>\\w+)"])).reset("hi")
            >>> cursor.next()
        Token(WORD, 'hi', 1:1)
            >>> cursor.next()
        Token(EOF, 'hi', 1:1)
            >>> cursor.next() is None
        True

    """

    __slots__ = (
        "_lexer",
        "_config",
        "_buffer",
        "_tokens",
        "_pos",
        "_start_line",
    )

    def __init__(self, lexer: Lexer, config: LexerConfig | None = None) -> None:
        """Initialize an empty cursor.

        Args:
            lexer: Lexer used by every reset()
            config: Cursor configuration; defaults to the context config
        """
        self._lexer = lexer
        self._config = config if config is not None else get_lexer_config()
        self._buffer = ""
        self._tokens: list[Token] = []
        self._pos = 0
        self._start_line = self._config.start_line

    @property
    def lexer(self) -> Lexer:
        return self._lexer

    @property
    def config(self) -> LexerConfig:
        return self._config

    @property
    def buffer(self) -> str:
        """Text passed to the last reset()."""
        return self._buffer

    @property
    def tokens(self) -> tuple[Token, ...]:
        """Tokens produced by the last reset(), after transforms."""
        return tuple(self._tokens)

    @property
    def position(self) -> int:
        """Index of the next token next() will return."""
        return self._pos

    def reset(self, data: str | None = None, info: Any = None) -> TokenCursor:
        """Scan a new buffer and rewind to its first token.

        Args:
            data: Text to scan (None is treated as empty)
            info: Optional line info, e.g. a token from save() or
                ``{"line": 12}``; defaults to the config's start_line

        Returns:
            This cursor, for chaining.
        """
        self._buffer = data or ""
        self._start_line = self._line_from(info)
        tokens = self._lexer.tokenize(self._buffer, self._start_line)
        for transform in self._config.transforms:
            tokens = list(transform(tokens))
        self._tokens = tokens
        self._pos = 0
        logger.debug(
            "Reset cursor: %d tokens from %d chars starting at line %d",
            len(tokens),
            len(self._buffer),
            self._start_line,
        )
        return self

    def next(self) -> Token | None:
        """Return the next token, then a single EOF token, then None."""
        tokens = self._tokens
        pos = self._pos
        if pos < len(tokens):
            self._pos = pos + 1
            return tokens[pos]
        if pos == len(tokens):
            self._pos = pos + 1
            if tokens:
                return tokens[-1].with_type(EOF)
            return Token(type=EOF, value="", line=self._start_line, col=1, length=0)
        return None

    def save(self) -> Token | None:
        """Peek at the token at the current position without advancing."""
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return None

    def has(self, token_type: str) -> bool:
        """Check whether token_type is a known rule name, ERROR or EOF."""
        return token_type == EOF or token_type in self._lexer.valid_tokens

    def format_error(self, token: Token) -> str:
        """Describe the location of an offending token."""
        return f'Error near "{token.value}" in line {token.line}'

    def __iter__(self) -> TokenCursor:
        return self

    def __next__(self) -> Token:
        token = self.next()
        if token is None:
            raise StopIteration
        return token

    def _line_from(self, info: Any) -> int:
        if info is None:
            return self._config.start_line
        if isinstance(info, Mapping):
            return info.get("line", self._config.start_line)
        return getattr(info, "line", self._config.start_line)


def nearley_lexer(
    rules: Iterable[RuleInput],
    transform: TokenTransform | Sequence[TokenTransform] | None = None,
    config: LexerConfig | None = None,
) -> TokenCursor:
    """Build a lexer from rules and wrap it in a TokenCursor.

    Args:
        rules: Rules in priority order; see compile_rules for accepted forms
        transform: One transform or a sequence applied in order after each
            reset; overrides ``config.transforms`` when given
        config: Cursor configuration; defaults to the context config

    Raises:
        UnnamedPatternError: A pattern lacks exactly one named group
        DuplicateNameError: A name is reused or reserved
    """
    if config is None:
        config = get_lexer_config()
    if transform is not None:
        config = replace(config, transforms=normalize_transforms(transform))
    return TokenCursor(build_lexer(rules), config)
