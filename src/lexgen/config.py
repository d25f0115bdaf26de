"""ContextVar-based cursor configuration for lexgen.

Provides thread-local defaults using Python's ContextVars (PEP 567).
A TokenCursor created without an explicit config reads the context
config once, at construction time.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed.

Usage:
    # Explicit config
    cursor = TokenCursor(lexer, LexerConfig(start_line=10))

    # Or use the context manager
    with lexer_config_context(LexerConfig(transforms=(drop_comments,))):
        cursor = nearley_lexer(rules)

"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lexgen.tokens import Token

TokenTransform = Callable[[list["Token"]], list["Token"]]


@dataclass(frozen=True, slots=True)
class LexerConfig:
    """Immutable cursor configuration.

    Attributes:
        start_line: Line number used by reset() when no line info is given
        transforms: Functions applied in order to the full token list after
            every reset; each maps a list of tokens to a new list

    """

    start_line: int = 1
    transforms: tuple[TokenTransform, ...] = ()

    @classmethod
    def from_dict(cls, config_dict: dict) -> LexerConfig:
        """Create LexerConfig from dictionary.

        Unknown keys are silently ignored. A single callable given as
        ``transforms`` (or the shorthand key ``transform``) is wrapped in a
        one-element tuple.

        Example:
            >>> config = LexerConfig.from_dict({"start_line": 3, "unknown_key": 1})
            >>> config.start_line
            3

        """
        filtered = {k: v for k, v in config_dict.items() if k in cls.__dataclass_fields__}
        transforms = filtered.get("transforms", config_dict.get("transform"))
        if transforms is not None:
            filtered["transforms"] = normalize_transforms(transforms)
        return cls(**filtered)


def normalize_transforms(
    transforms: TokenTransform | Sequence[TokenTransform] | None,
) -> tuple[TokenTransform, ...]:
    """Accept a single transform, a sequence of them, or None."""
    if transforms is None:
        return ()
    if callable(transforms):
        return (transforms,)
    return tuple(transforms)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: LexerConfig = LexerConfig()

_lexer_config: ContextVar[LexerConfig] = ContextVar(
    "lexer_config",
    default=_DEFAULT_CONFIG,
)


def get_lexer_config() -> LexerConfig:
    """Get current lexer configuration (thread-local)."""
    return _lexer_config.get()


def set_lexer_config(config: LexerConfig) -> None:
    """Set lexer configuration for current context.

    Args:
        config: LexerConfig instance to use for this context.

    """
    _lexer_config.set(config)


def reset_lexer_config() -> None:
    """Reset to default configuration."""
    _lexer_config.set(_DEFAULT_CONFIG)


@contextmanager
def lexer_config_context(config: LexerConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with lexer_config_context(LexerConfig(start_line=5)):
        ...     get_lexer_config().start_line
        5

    """
    previous = _lexer_config.get()
    _lexer_config.set(config)
    try:
        yield
    finally:
        _lexer_config.set(previous)


__all__ = [
    "LexerConfig",
    "TokenTransform",
    "get_lexer_config",
    "set_lexer_config",
    "reset_lexer_config",
    "lexer_config_context",
    "normalize_transforms",
]
