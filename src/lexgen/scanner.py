"""Scanning engine: drives the composite matcher over a source string.

Every step matches anchored at the current offset, so already consumed
text is never re-examined and no character is silently skipped. The scan
ends as soon as nothing matches (for instance a line break that no rule and
not even the ERROR fallback accepts).

Line bookkeeping is per match: a match containing one or more newlines
advances the line by exactly one, and columns are counted from the end of
that match. Blocks of several newlines matched at once are therefore
counted as a single line.

Thread Safety:
Scanner instances are single-use. Create one per source string.
The CompiledRules they read are immutable and may be shared.

"""

from __future__ import annotations

from collections.abc import Iterator

from lexgen.rules import CompiledRules, RuleMatch
from lexgen.tokens import ERROR, Token
from lexgen.utils.logger import get_logger

logger = get_logger(__name__)


class Scanner:
    """Single-use scanner over one source string.

    Usage:
            >>> compiled = compile_rules([r"(?P<NUM>\\d+)", (r"(?P<WS>\\s+)", {"skip": True})])
            >>> list(Scanner(compiled, "1 22").tokenize())
        [Token(NUM, '1', 1:1), Token(NUM, '22', 1:3)]

    """

    __slots__ = (
        "_compiled",
        "_source",
        "_pos",
        "_lineno",
        "_line_start",  # Offset the current line's columns are counted from
    )

    def __init__(self, compiled: CompiledRules, source: str, start_line: int = 1) -> None:
        """Initialize scanner state.

        Args:
            compiled: Rule table and composite matcher from compile_rules
            source: Text to scan
            start_line: Line number of the first line of source
        """
        self._compiled = compiled
        self._source = source
        self._pos = 0
        self._lineno = start_line
        self._line_start = 0

    def tokenize(self) -> Iterator[Token]:
        """Scan the source, yielding tokens left to right.

        Skip rules consume input without yielding. No EOF token is produced
        here; cursors synthesise it after the last real token.

        Yields:
            Token objects one at a time
        """
        rules = self._compiled.rules
        fallback = self._compiled.fallback_index
        while True:
            found = self._next_match()
            if found is None:
                return

            if "\n" in found.text:
                self._lineno += 1
                self._line_start = found.end

            current = rules[found.index]
            if not current.skip:
                value = current.value(found.text) if current.value is not None else found.text
                yield Token(
                    type=ERROR if found.index == fallback else current.name,
                    value=value,
                    line=self._lineno,
                    col=found.start - self._line_start + 1,
                    length=len(found.text),
                )
            self._pos = found.end

    def _next_match(self) -> RuleMatch | None:
        """Match at the current position, never returning an empty match."""
        found = self._compiled.matcher.match(self._source, self._pos)
        if found is None or found.end > found.start:
            return found

        # A user pattern such as `\d*` or a lookahead matched nothing here.
        # Try the lower-priority rules one by one; the fallback is last.
        logger.debug(
            "Rule '%s' matched an empty string at offset %d; trying later rules",
            self._compiled.rules[found.index].name,
            self._pos,
        )
        for index in range(found.index + 1, len(self._compiled.rules)):
            m = self._compiled.rules[index].pattern.match(self._source, self._pos)
            if m is not None and m.end() > m.start():
                return RuleMatch(index=index, text=m.group(), start=m.start(), end=m.end())
        return None


def scan(compiled: CompiledRules, source: str, start_line: int = 1) -> list[Token]:
    """Scan source eagerly and return every emitted token.

    Args:
        compiled: Rule table and composite matcher from compile_rules
        source: Text to scan
        start_line: Line number of the first line of source

    Returns:
        Tokens in source order, without the EOF sentinel.
    """
    return list(Scanner(compiled, source, start_line).tokenize())
