from __future__ import annotations

import logging
from collections.abc import Collection, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from fixtura.aliases import AliasRules
from fixtura.exceptions import FixturaAmbiguousOverrideError
from fixtura.naming import AttributeKey, normalize_key

OverrideMap = Mapping[AttributeKey, Any]
"""Caller-supplied mapping from attribute key to value."""

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ResolvedOverrides:
    """Overrides split into declared-attribute overrides and ad hoc extras."""

    by_attribute: dict[str, Any] = field(default_factory=dict)
    """Overrides keyed by the declared attribute they replace."""
    extras: dict[str, Any] = field(default_factory=dict)
    """Overrides matching no declared attribute, applied after all attributes."""


def merge_overrides(
    overrides: OverrideMap | None,
    keyword_overrides: Mapping[str, Any],
) -> dict[str, Any]:
    """Merge positional and keyword overrides into one mapping with normalized keys.

    Raises:
        FixturaAmbiguousOverrideError: If two keys normalize to the same name.

    """
    pairs: list[tuple[AttributeKey, Any]] = []
    if overrides:
        pairs.extend(overrides.items())
    pairs.extend(keyword_overrides.items())
    return _normalize_pairs(pairs)


def _normalize_pairs(pairs: Iterable[tuple[AttributeKey, Any]]) -> dict[str, Any]:
    normalized: dict[str, Any] = {}
    for key, value in pairs:
        name = normalize_key(key)
        if name in normalized:
            msg = f"Override for {name!r} is given more than once."
            raise FixturaAmbiguousOverrideError(msg)
        normalized[name] = value
    return normalized


def resolve_overrides(
    overrides: Mapping[str, Any],
    declared: Collection[str],
    aliases: AliasRules,
) -> ResolvedOverrides:
    """Resolve normalized override keys against declared attribute names.

    A key naming a declared attribute overrides it directly. Any other key is
    tried against the alias rules; a key no rule maps to a declared attribute
    is kept as an extra.

    Args:
        overrides: Overrides with normalized keys.
        declared: Declared attribute names of the factory.
        aliases: Alias rules in registration order.

    Raises:
        FixturaAmbiguousOverrideError: If a direct key and an aliased key (or two
            aliased keys) resolve to the same attribute.

    """
    resolved = ResolvedOverrides()
    sources: dict[str, str] = {}

    for key in overrides:
        if key in declared:
            _claim(sources, key, key)

    for key, value in overrides.items():
        if key in declared:
            resolved.by_attribute[key] = value
            continue

        target = aliases.resolve(key, declared)
        if target is None:
            logger.debug(
                "Override %r matches no declared attribute or alias rule; kept as an extra",
                key,
            )
            resolved.extras[key] = value
            continue

        _claim(sources, target, key)
        resolved.by_attribute[target] = value

    return resolved


def _claim(sources: dict[str, str], attribute_name: str, key: str) -> None:
    previous = sources.get(attribute_name)
    if previous is not None and previous != key:
        msg = (
            f"Overrides {previous!r} and {key!r} both target attribute "
            f"{attribute_name!r}. Pass only one of them."
        )
        raise FixturaAmbiguousOverrideError(msg)
    sources[attribute_name] = key


__all__ = [
    "OverrideMap",
    "ResolvedOverrides",
    "merge_overrides",
    "resolve_overrides",
]
