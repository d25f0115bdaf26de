"""Rule compiler: validates named pattern rules and builds one matcher.

Each rule is a regular expression carrying exactly one named group, e.g.
``(?P<NUM>\\d+)``. The compiler checks the names, appends the implicit
ERROR fallback rule, and merges every pattern into a single alternation
that is matched anchored at the current scan offset.

Alternation is first-match: when two rules can match at the same
position the one listed earlier wins, whatever the match lengths.

Thread Safety:
CompiledRules, Rule, RuleMatch and CompositeMatcher are immutable after
construction and safe to share across threads and cursors.

"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from lexgen.errors import DuplicateNameError, UnnamedPatternError
from lexgen.tokens import ERROR, RESERVED_NAMES
from lexgen.utils.logger import get_logger

logger = get_logger(__name__)

# One or more characters up to (not including) a line terminator: \n, \r, U+2028, U+2029
FALLBACK_PATTERN = re.compile(rf"(?P<{ERROR}>[^\n\r\u2028\u2029]+)")

# Flags that can be carried into the composite pattern as scoped inline flags
_SCOPED_FLAGS = (
    (re.ASCII, "a"),
    (re.IGNORECASE, "i"),
    (re.MULTILINE, "m"),
    (re.DOTALL, "s"),
    (re.VERBOSE, "x"),
)

ValueHook = Callable[[str], str]

# Leading global inline flags such as "(?i)"; already reflected in Pattern.flags
_GLOBAL_FLAGS_PREFIX = re.compile(r"^\(\?[aiLmsux]+\)")


@dataclass(frozen=True, slots=True)
class Rule:
    """A named pattern plus its skip/value behaviour.

    Attributes:
        name: Token type produced by this rule (the pattern's group name)
        pattern: Compiled pattern with exactly one named group
        skip: Matched text is consumed but no token is emitted
        value: Optional hook mapping the matched text to the token value

    """

    name: str
    pattern: re.Pattern[str]
    skip: bool = False
    value: ValueHook | None = None


RuleInput = str | re.Pattern[str] | Rule | tuple[Any, Mapping[str, Any]]


@dataclass(frozen=True, slots=True)
class RuleMatch:
    """Result of one anchored match: which rule fired and what it consumed."""

    index: int
    text: str
    start: int
    end: int


class CompositeMatcher:
    """Ordered alternation of all rule patterns.

    Every rule is wrapped in its own capturing group. Because the wrapper
    is the outermost group of its alternative it is always the last group
    to close, so ``Match.lastindex`` identifies the rule directly.

    Usage:
            >>> matcher = CompositeMatcher(rules)
            >>> matcher.match("12 + 3", 0)
        RuleMatch(index=0, text='12', start=0, end=2)

    """

    __slots__ = ("_regex", "_group_to_rule")

    def __init__(self, rules: Iterable[Rule]) -> None:
        parts: list[str] = []
        group_to_rule: dict[int, int] = {}
        next_group = 1
        for index, entry in enumerate(rules):
            group_to_rule[next_group] = index
            parts.append(f"({_scoped_source(entry.pattern)})")
            next_group += 1 + entry.pattern.groups

        self._regex = re.compile("|".join(parts))
        self._group_to_rule = MappingProxyType(group_to_rule)

    @property
    def pattern(self) -> str:
        """Source of the combined pattern (for debugging)."""
        return self._regex.pattern

    def match(self, text: str, pos: int) -> RuleMatch | None:
        """Match anchored at pos.

        Args:
            text: Source buffer
            pos: Offset to match at; nothing before it is re-examined

        Returns:
            RuleMatch for the first rule that matches, or None.
        """
        m = self._regex.match(text, pos)
        if m is None:
            return None
        return RuleMatch(
            index=self._group_to_rule[m.lastindex],
            text=m.group(),
            start=m.start(),
            end=m.end(),
        )


@dataclass(frozen=True, slots=True)
class CompiledRules:
    """Immutable result of compile_rules.

    Attributes:
        rules: User rules followed by the ERROR fallback, in priority order
        table: Read-only mapping from rule name to Rule
        matcher: Composite matcher over ``rules``

    """

    rules: tuple[Rule, ...]
    table: Mapping[str, Rule] = field(repr=False)
    matcher: CompositeMatcher = field(repr=False)

    @property
    def fallback_index(self) -> int:
        """Index of the ERROR fallback rule (always last)."""
        return len(self.rules) - 1

    @property
    def names(self) -> frozenset[str]:
        """Names of all rules, ERROR included."""
        return frozenset(self.table)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)


def rule(
    pattern: str | re.Pattern[str],
    *,
    skip: bool = False,
    value: ValueHook | None = None,
) -> Rule:
    """Build a Rule from a pattern, extracting its single group name.

    Args:
        pattern: Pattern source or compiled pattern, e.g. ``r"(?P<WS>\\s+)"``
        skip: Consume matches without emitting tokens
        value: Optional transform of the matched text

    Raises:
        UnnamedPatternError: If the pattern does not have exactly one name
    """
    compiled = re.compile(pattern) if isinstance(pattern, str) else pattern
    return Rule(_extract_name(compiled), compiled, skip=skip, value=value)


def compile_rules(rules: Iterable[RuleInput]) -> CompiledRules:
    """Validate rules and build the rule table plus composite matcher.

    Accepted rule forms:
        - pattern string or compiled pattern
        - ``(pattern, {"skip": bool, "value": callable})``
        - Rule (see ``rule()``)

    Args:
        rules: Rules in priority order (earlier rules win ties)

    Returns:
        CompiledRules with the ERROR fallback appended last.

    Raises:
        UnnamedPatternError: A pattern lacks exactly one named group
        DuplicateNameError: A name is reused or reserved (ERROR, EOF)
    """
    user_rules: list[Rule] = []
    seen: set[str] = set()
    for index, entry in enumerate(rules):
        parsed = _coerce_rule(entry, index)
        source = parsed.pattern.pattern
        if parsed.name in RESERVED_NAMES:
            raise DuplicateNameError(parsed.name, index, source, reserved=True)
        if parsed.name in seen:
            raise DuplicateNameError(parsed.name, index, source)
        if parsed.pattern.fullmatch("") is not None:
            logger.warning(
                "Rule #%d (%s) can match an empty string; empty matches fall through to later rules",
                index,
                parsed.name,
            )
        seen.add(parsed.name)
        user_rules.append(parsed)

    all_rules = with_fallback(user_rules)
    table = MappingProxyType({r.name: r for r in all_rules})
    matcher = CompositeMatcher(all_rules)
    logger.debug("Compiled %d rules: %s", len(user_rules), ", ".join(table))
    return CompiledRules(rules=all_rules, table=table, matcher=matcher)


def with_fallback(rules: Iterable[Rule]) -> tuple[Rule, ...]:
    """Return a new rule tuple with the ERROR fallback appended.

    The input is never mutated.
    """
    return (*rules, Rule(ERROR, FALLBACK_PATTERN))


def _coerce_rule(entry: Any, index: int) -> Rule:
    """Normalize one accepted rule form into a Rule."""
    if isinstance(entry, Rule):
        name = _name_at(entry.pattern, index)
        if name != entry.name:
            raise UnnamedPatternError(
                f"rule name '{entry.name}' does not match group name '{name}'",
                index,
                entry.pattern.pattern,
            )
        return entry

    options: Mapping[str, Any] = {}
    if isinstance(entry, tuple):
        if len(entry) != 2 or not isinstance(entry[1], Mapping):
            raise UnnamedPatternError("expected a pattern or a (pattern, options) pair", index)
        entry, options = entry
    if isinstance(entry, str):
        entry = re.compile(entry)
    if not isinstance(entry, re.Pattern):
        raise UnnamedPatternError(
            f"expected a regular expression, got {type(entry).__name__}", index
        )
    return Rule(
        _name_at(entry, index),
        entry,
        skip=bool(options.get("skip", False)),
        value=options.get("value"),
    )


def _name_at(pattern: re.Pattern[str], index: int) -> str:
    """_extract_name, reporting the rule position on failure."""
    try:
        return _extract_name(pattern)
    except UnnamedPatternError as exc:
        raise UnnamedPatternError(exc.message, index, pattern.pattern) from None


def _extract_name(pattern: re.Pattern[str]) -> str:
    """Return the single group name bound by the pattern."""
    names = list(pattern.groupindex)
    if len(names) != 1:
        raise UnnamedPatternError(
            f"expected exactly one named group, found {len(names)}",
            pattern=pattern.pattern,
        )
    return names[0]


def _scoped_source(pattern: re.Pattern[str]) -> str:
    """Pattern source with its compile flags moved into a scoped inline group."""
    source = _GLOBAL_FLAGS_PREFIX.sub("", pattern.pattern, count=1)
    letters = "".join(letter for flag, letter in _SCOPED_FLAGS if pattern.flags & flag)
    if "x" in letters:
        # a trailing comment must not swallow the closing parenthesis
        return f"(?{letters}:{source}\n)"
    if letters:
        return f"(?{letters}:{source})"
    return source
