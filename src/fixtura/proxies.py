from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeAlias

from fixtura._internal.instantiation import instantiate
from fixtura.exceptions import (
    FixturaPersistenceError,
    FixturaProxyStateError,
    FixturaUnresolvedAttributeError,
)

if TYPE_CHECKING:
    from fixtura.registry import Registry

PersistHook: TypeAlias = Callable[[Any], Any]
"""A callable persisting a created instance. Its return value is ignored."""


def persist_with_save(instance: Any) -> None:
    """Persist an instance by calling its ``save()`` method.

    Raises:
        FixturaPersistenceError: If the instance has no callable ``save``.

    """
    save = getattr(instance, "save", None)
    if not callable(save):
        msg = (
            f"Cannot persist {type(instance).__qualname__}: it has no save() method. "
            "Pass persist=... to the factory or registry."
        )
        raise FixturaPersistenceError(msg)
    save()


class Proxy(ABC):
    """Build strategy driven by a factory run.

    A proxy is created for one run, receives every attribute through ``set``
    or ``associate`` in declaration order, and is discarded once ``result``
    has been read.
    """

    def __init__(
        self,
        build_class: type[Any],
        *,
        registry: Registry,
        persist: PersistHook = persist_with_save,
    ) -> None:
        self.build_class = build_class
        self._registry = registry
        self._persist = persist
        self._resolved: set[str] = set()
        self._resulted = False

    def set(self, name: str, value: Any) -> None:
        """Store an attribute value and mark the attribute as resolved."""
        self._ensure_running()
        self._store(name, value)
        self._resolved.add(name)

    def get(self, name: str) -> Any:
        """Return the value of an attribute already resolved in this run.

        Raises:
            FixturaUnresolvedAttributeError: If ``name`` was not resolved yet.

        """
        if name not in self._resolved:
            resolved = ", ".join(sorted(self._resolved)) or "none"
            msg = (
                f"Attribute {name!r} is not resolved yet (resolved: {resolved}). "
                "Declare attributes in dependency order."
            )
            raise FixturaUnresolvedAttributeError(msg)
        return self._load(name)

    def has(self, name: str) -> bool:
        """Return true when ``name`` was already resolved in this run."""
        return name in self._resolved

    def associate(self, name: str, factory_name: str, overrides: dict[str, Any]) -> None:
        """Resolve an association by creating the associated entity."""
        self._ensure_running()
        self.set(name, self._registry.create(factory_name, overrides))

    def result(self) -> Any:
        """Finish the run and return its product."""
        self._ensure_running()
        product = self._finish()
        self._resulted = True
        return product

    def _ensure_running(self) -> None:
        if self._resulted:
            msg = f"{type(self).__name__} already produced its result."
            raise FixturaProxyStateError(msg)

    @abstractmethod
    def _store(self, name: str, value: Any) -> None: ...

    @abstractmethod
    def _load(self, name: str) -> Any: ...

    @abstractmethod
    def _finish(self) -> Any: ...


class AttributesForProxy(Proxy):
    """Collect attributes into a plain dict without instantiating the build class."""

    def __init__(
        self,
        build_class: type[Any],
        *,
        registry: Registry,
        persist: PersistHook = persist_with_save,
    ) -> None:
        super().__init__(build_class, registry=registry, persist=persist)
        self._attributes: dict[str, Any] = {}

    def associate(self, name: str, factory_name: str, overrides: dict[str, Any]) -> None:
        """Record the association key without running the associated factory."""
        self.set(name, None)

    def _store(self, name: str, value: Any) -> None:
        self._attributes[name] = value

    def _load(self, name: str) -> Any:
        return self._attributes[name]

    def _finish(self) -> dict[str, Any]:
        return dict(self._attributes)


class BuildProxy(Proxy):
    """Instantiate the build class and assign attributes onto the instance."""

    def __init__(
        self,
        build_class: type[Any],
        *,
        registry: Registry,
        persist: PersistHook = persist_with_save,
    ) -> None:
        super().__init__(build_class, registry=registry, persist=persist)
        self.instance = instantiate(build_class)

    def _store(self, name: str, value: Any) -> None:
        setattr(self.instance, name, value)

    def _load(self, name: str) -> Any:
        return getattr(self.instance, name)

    def _finish(self) -> Any:
        return self.instance


class CreateProxy(BuildProxy):
    """Build the instance, then persist it through the persistence hook."""

    def _finish(self) -> Any:
        self._persist(self.instance)
        return self.instance


__all__ = [
    "AttributesForProxy",
    "BuildProxy",
    "CreateProxy",
    "PersistHook",
    "Proxy",
    "persist_with_save",
]
