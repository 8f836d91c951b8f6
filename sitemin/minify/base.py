"""Rule primitives for text-rewriting minifiers."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable, Iterator, Tuple, Union

Replacement = Union[str, Callable[["re.Match[str]"], str]]

STRICTNESS_SAFE = "safe"
STRICTNESS_AGGRESSIVE = "aggressive"
STRICTNESS_LEVELS: Tuple[str, ...] = (STRICTNESS_SAFE, STRICTNESS_AGGRESSIVE)


@dataclass(frozen=True)
class Rule:
    """A named regex rewrite applied to the whole text in one pass."""

    name: str
    pattern: str
    replacement: Replacement
    flags: int = 0
    count: int = 0
    _compiled: "re.Pattern[str]" = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_compiled", re.compile(self.pattern, self.flags))

    def apply(self, text: str) -> str:
        return self._compiled.sub(self.replacement, text, count=self.count)


@dataclass(frozen=True)
class FixedPointRule(Rule):
    """A rule reapplied until the text stops changing."""

    max_passes: int = 32

    def apply(self, text: str) -> str:
        for _ in range(self.max_passes):
            rewritten = self._compiled.sub(self.replacement, text, count=self.count)
            if rewritten == text:
                break
            text = rewritten
        return text


@dataclass(frozen=True)
class RuleSet:
    """An ordered, immutable pipeline of rules.

    Later rules assume the earlier ones already ran, so the order is part of
    the contract.
    """

    name: str
    rules: Tuple[Rule, ...]

    def __post_init__(self) -> None:
        names = [rule.name for rule in self.rules]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate rule names in {self.name}: {', '.join(duplicates)}")

    def apply(self, text: str) -> str:
        for rule in self.rules:
            text = rule.apply(text)
        return text

    def names(self) -> Tuple[str, ...]:
        return tuple(rule.name for rule in self.rules)

    def get(self, name: str) -> Rule:
        for rule in self.rules:
            if rule.name == name:
                return rule
        raise KeyError(name)

    def without(self, *names: str) -> "RuleSet":
        """Return a copy of the set with the named rules removed."""
        missing = set(names) - set(self.names())
        if missing:
            raise KeyError(", ".join(sorted(missing)))
        kept = tuple(rule for rule in self.rules if rule.name not in names)
        return RuleSet(self.name, kept)

    def extend(self, *rules: Rule, before: str | None = None) -> "RuleSet":
        """Return a copy with rules appended, or inserted ahead of ``before``."""
        if before is None:
            return RuleSet(self.name, self.rules + tuple(rules))
        index = self.names().index(before)
        return RuleSet(self.name, self.rules[:index] + tuple(rules) + self.rules[index:])

    def replace(self, rule: Rule) -> "RuleSet":
        """Return a copy with the same-named rule swapped for ``rule``."""
        if rule.name not in self.names():
            raise KeyError(rule.name)
        swapped = tuple(rule if existing.name == rule.name else existing for existing in self.rules)
        return RuleSet(self.name, swapped)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)


def check_strictness(strictness: str) -> str:
    if strictness not in STRICTNESS_LEVELS:
        choices = ", ".join(STRICTNESS_LEVELS)
        raise ValueError(f"Unknown strictness '{strictness}' (expected one of: {choices})")
    return strictness
