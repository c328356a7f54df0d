from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, TypeAlias

from fixtura._internal.type_checks import computation_arity
from fixtura.exceptions import FixturaAttributeDefinitionError

if TYPE_CHECKING:
    from fixtura.proxies import Proxy

Computation: TypeAlias = "Callable[[Proxy], Any] | Callable[[], Any]"
"""A deferred attribute computation. One-argument computations receive the running proxy."""


class _Missing:
    """Type of the ``MISSING`` sentinel."""

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()
"""Sentinel for an attribute declared without a value (``None`` is a valid static value)."""


class Attribute(ABC):
    """One named attribute rule of a factory."""

    name: str

    @abstractmethod
    def add_to(self, proxy: Proxy) -> None:
        """Apply this attribute to the running proxy."""


@dataclass(frozen=True, slots=True)
class StaticAttribute(Attribute):
    """An attribute with a fixed value."""

    name: str
    value: Any = None

    def add_to(self, proxy: Proxy) -> None:
        """Set the fixed value on the proxy."""
        proxy.set(self.name, self.value)


@dataclass(frozen=True, slots=True)
class DynamicAttribute(Attribute):
    """An attribute computed lazily, only when it is applied to a proxy.

    Whether the computation receives the proxy is decided once, when the
    attribute is declared: it does only when it cannot be called without
    arguments but can be called with one.
    """

    name: str
    computation: Computation
    accepts_proxy: bool = field(init=False)

    def __post_init__(self) -> None:
        if not callable(self.computation):
            msg = f"Computation for attribute {self.name!r} must be callable."
            raise FixturaAttributeDefinitionError(msg)
        arity = computation_arity(self.computation)
        if arity is None:
            msg = (
                f"Computation for attribute {self.name!r} must accept no arguments "
                "or a single proxy argument."
            )
            raise FixturaAttributeDefinitionError(msg)
        object.__setattr__(self, "accepts_proxy", arity == 1)

    def add_to(self, proxy: Proxy) -> None:
        """Invoke the computation and set its result on the proxy."""
        if self.accepts_proxy:
            value = self.computation(proxy)  # type: ignore[call-arg]
        else:
            value = self.computation()  # type: ignore[call-arg]
        proxy.set(self.name, value)


@dataclass(frozen=True, slots=True)
class AssociationAttribute(Attribute):
    """An attribute whose value comes from running another factory.

    The proxy decides what the association turns into: build and create runs
    create the associated entity, attribute runs only record the key.
    """

    name: str
    factory_name: str
    overrides: Mapping[str, Any] = field(default_factory=dict)

    def add_to(self, proxy: Proxy) -> None:
        """Ask the proxy to associate the target factory under this attribute name."""
        proxy.associate(self.name, self.factory_name, dict(self.overrides))


def make_attribute(
    name: str,
    value: Any = MISSING,
    computation: Computation | None = None,
) -> Attribute:
    """Create a static or dynamic attribute from a declaration.

    Args:
        name: Attribute name.
        value: Fixed value. Omitted together with ``computation`` declares a
            static attribute with value ``None``.
        computation: Deferred computation for a dynamic attribute.

    Raises:
        FixturaAttributeDefinitionError: If both ``value`` and ``computation``
            are supplied.

    """
    if computation is not None:
        if value is not MISSING:
            msg = (
                f"Attribute {name!r} cannot have both a value and a computation. "
                "Pass one of them."
            )
            raise FixturaAttributeDefinitionError(msg)
        return DynamicAttribute(name, computation)

    return StaticAttribute(name, None if value is MISSING else value)


__all__ = [
    "MISSING",
    "AssociationAttribute",
    "Attribute",
    "Computation",
    "DynamicAttribute",
    "StaticAttribute",
    "make_attribute",
]
