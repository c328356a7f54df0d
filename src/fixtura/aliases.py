from __future__ import annotations

import re
from collections.abc import Collection, Iterable, Iterator
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AliasRule:
    """Rewrite an override key into the name of the attribute it stands in for.

    ``AliasRule(re.compile(r"(.*)_alias"), r"\\1")`` lets ``test_alias=...``
    override the declared ``test`` attribute.
    """

    pattern: re.Pattern[str]
    rewrite: str

    @classmethod
    def from_pattern(cls, pattern: str | re.Pattern[str], rewrite: str) -> AliasRule:
        """Create a rule from a string or compiled pattern."""
        compiled = pattern if isinstance(pattern, re.Pattern) else re.compile(pattern)
        return cls(pattern=compiled, rewrite=rewrite)

    def apply(self, key: str) -> str | None:
        """Return the rewritten key, or ``None`` when the pattern does not match."""
        if self.pattern.search(key) is None:
            return None
        return self.pattern.sub(self.rewrite, key, count=1)


class AliasRules:
    """Append-only, ordered collection of alias rules."""

    def __init__(self, rules: Iterable[AliasRule] = ()) -> None:
        self._rules: list[AliasRule] = list(rules)

    def add(self, rule: AliasRule) -> None:
        """Append a rule; it is tried after every rule registered before it."""
        self._rules.append(rule)

    def resolve(self, key: str, declared: Collection[str]) -> str | None:
        """Return the declared attribute ``key`` stands in for, if any.

        Rules are tried in registration order. The first rule whose rewrite
        names a declared attribute wins.
        """
        for rule in self._rules:
            rewritten = rule.apply(key)
            if rewritten is not None and rewritten != key and rewritten in declared:
                return rewritten
        return None

    def __iter__(self) -> Iterator[AliasRule]:
        return iter(tuple(self._rules))

    def __len__(self) -> int:
        return len(self._rules)


__all__ = ["AliasRule", "AliasRules"]
