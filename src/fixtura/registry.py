from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Iterator, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any, TypeVar, overload

from fixtura.aliases import AliasRule, AliasRules
from fixtura.defaults import DEFAULT_ALIASES, DEFAULT_DEFINITION_PATHS
from fixtura.discovery import DefinitionLoader, find_definitions, load_definitions_file
from fixtura.exceptions import FixturaUnknownFactoryError
from fixtura.factory import Factory
from fixtura.naming import FactoryName, normalize_factory_name
from fixtura.overrides import OverrideMap, merge_overrides
from fixtura.proxies import (
    AttributesForProxy,
    BuildProxy,
    CreateProxy,
    PersistHook,
    Proxy,
    persist_with_save,
)

C = TypeVar("C", bound=type[Any])
DefinitionBlock = Callable[[Factory], Any]
BlockF = TypeVar("BlockF", bound=DefinitionBlock)

logger = logging.getLogger(__name__)


class Registry:
    """Map factory names to factories and dispatch build requests to them.

    Populate a registry during a single-threaded setup phase (``define``,
    ``alias``, ``register_class``) and treat it as read-only afterwards. Each
    build request runs on a fresh proxy, so concurrent runs share nothing but
    the registry itself.

    Factory names are normalized, so ``"user"``, ``"User"``, an enum member
    with value ``"user"`` and the class ``User`` address the same factory.
    """

    def __init__(
        self,
        *,
        classes: Iterable[type[Any]] | Mapping[str, type[Any]] = (),
        persist: PersistHook | None = None,
        aliases: Iterable[tuple[str | re.Pattern[str], str]] = DEFAULT_ALIASES,
    ) -> None:
        """Initialize an empty registry.

        Args:
            classes: Classes available to build-class lookup by name, either as
                an iterable of classes (keyed by ``__name__``) or an explicit
                name-to-class mapping.
            persist: Persistence hook for ``create`` runs of factories that do
                not set their own. Defaults to calling ``instance.save()``.
            aliases: Initial ``(pattern, rewrite)`` alias rules.

        Examples:
            .. code-block:: python

                registry = Registry(classes=[User, Post])

                in_memory = Registry(persist=session.add)

        """
        self._factories: dict[str, Factory] = {}
        self._classes: dict[str, type[Any]] = {}
        self._persist: PersistHook = persist or persist_with_save
        self._aliases = AliasRules(
            AliasRule.from_pattern(pattern, rewrite) for pattern, rewrite in aliases
        )
        self._loaded_definition_files: set[Path] = set()

        if isinstance(classes, Mapping):
            for class_name, cls in classes.items():
                self.register_class(cls, name=class_name)
        else:
            for cls in classes:
                self.register_class(cls)

    @property
    def factories(self) -> Mapping[str, Factory]:
        """Read-only view of registered factories keyed by normalized name."""
        return MappingProxyType(self._factories)

    @property
    def classes(self) -> Mapping[str, type[Any]]:
        """Read-only view of the name-to-class mapping used for class lookup."""
        return MappingProxyType(self._classes)

    @property
    def aliases(self) -> AliasRules:
        """Alias rules consulted by every factory run."""
        return self._aliases

    @property
    def persist(self) -> PersistHook:
        """Default persistence hook for ``create`` runs."""
        return self._persist

    def register_class(self, cls: C, *, name: str | None = None) -> C:
        """Make a class available to build-class lookup by name.

        Usable as a decorator.

        Args:
            cls: Class to register.
            name: Lookup name. Defaults to ``cls.__name__``.

        Returns:
            ``cls`` unchanged.

        """
        self._classes[name or cls.__name__] = cls
        return cls

    @overload
    def define(
        self,
        name: FactoryName,
        block: None = None,
        *,
        build_class: type[Any] | str | None = None,
        persist: PersistHook | None = None,
    ) -> Callable[[BlockF], BlockF]: ...

    @overload
    def define(
        self,
        name: FactoryName,
        block: DefinitionBlock,
        *,
        build_class: type[Any] | str | None = None,
        persist: PersistHook | None = None,
    ) -> Factory: ...

    def define(
        self,
        name: FactoryName,
        block: DefinitionBlock | None = None,
        *,
        build_class: type[Any] | str | None = None,
        persist: PersistHook | None = None,
    ) -> Factory | Callable[[BlockF], BlockF]:
        """Define a factory and register it under its normalized name.

        The block receives the new factory and declares its attributes. The
        factory is registered only after the block returns; if the block
        raises, nothing is registered. Defining an existing name replaces the
        previous factory.

        Args:
            name: Factory name, or a class to build (named after the class).
            block: Definition block. Omit it to use decorator form.
            build_class: Explicit build class or class name.
            persist: Persistence hook for ``create`` runs of this factory.

        Returns:
            The registered factory in direct form, or a decorator in decorator
            form.

        Raises:
            FixturaAttributeDefinitionError: If the block declares an invalid
                attribute.
            FixturaTypeResolutionError: If the build class cannot be resolved.

        Examples:
            .. code-block:: python

                registry.define("user", lambda f: f.attribute("name", "Ada"))


                @registry.define("post")
                def _post(f: Factory) -> None:
                    f.add_attribute("title", "Hello")
                    f.association("author", factory="user")

        """
        if block is None:

            def decorator(decorated_block: BlockF) -> BlockF:
                self.define(name, decorated_block, build_class=build_class, persist=persist)
                return decorated_block

            return decorator

        factory = Factory(name, build_class=build_class, persist=persist, registry=self)
        block(factory)

        if factory.factory_name in self._factories:
            logger.debug("Replacing factory %r", factory.factory_name)
        self._factories[factory.factory_name] = factory
        logger.debug(
            "Defined factory %r for %s with attributes %s",
            factory.factory_name,
            factory.build_class.__qualname__,
            list(factory.attribute_names),
        )
        return factory

    def alias(self, pattern: str | re.Pattern[str], rewrite: str) -> AliasRule:
        """Register an alias rule used by every subsequent factory run.

        Args:
            pattern: Regular expression matched against override keys that do
                not name a declared attribute.
            rewrite: Replacement template producing the attribute name, for
                example ``r"\\1"``.

        Returns:
            The registered rule.

        Examples:
            .. code-block:: python

                registry.alias(r"(.*)_alias", r"\\1")

        """
        rule = AliasRule.from_pattern(pattern, rewrite)
        self._aliases.add(rule)
        logger.debug("Registered alias %r -> %r", rule.pattern.pattern, rewrite)
        return rule

    def get(self, name: FactoryName) -> Factory:
        """Return the factory registered under ``name``.

        Raises:
            FixturaUnknownFactoryError: If no such factory is registered.

        """
        factory_name = normalize_factory_name(name)
        factory = self._factories.get(factory_name)
        if factory is None:
            known = ", ".join(sorted(self._factories)) or "none"
            msg = f"No such factory: {factory_name!r} (defined factories: {known})."
            raise FixturaUnknownFactoryError(msg)
        return factory

    def run(
        self,
        name: FactoryName,
        proxy_class: type[Proxy],
        overrides: OverrideMap | None = None,
        /,
        **kwargs: Any,
    ) -> Any:
        """Run the named factory with an explicit proxy class.

        Raises:
            FixturaUnknownFactoryError: If no such factory is registered.

        """
        factory = self.get(name)
        return factory.run(proxy_class, merge_overrides(overrides, kwargs))

    def attributes_for(
        self,
        name: FactoryName,
        overrides: OverrideMap | None = None,
        /,
        **kwargs: Any,
    ) -> dict[str, Any]:
        """Return the attribute dict of the named factory without instantiating anything.

        Args:
            name: Factory name.
            overrides: Override mapping. Keys may be strings or enum members.
            **kwargs: Overrides given as keyword arguments.

        Raises:
            FixturaUnknownFactoryError: If no such factory is registered.

        """
        return self.run(name, AttributesForProxy, overrides, **kwargs)

    def build(
        self,
        name: FactoryName,
        overrides: OverrideMap | None = None,
        /,
        **kwargs: Any,
    ) -> Any:
        """Return an unpersisted instance built by the named factory.

        Associations are still created through their own factories.

        Args:
            name: Factory name.
            overrides: Override mapping. Keys may be strings or enum members.
            **kwargs: Overrides given as keyword arguments.

        Raises:
            FixturaUnknownFactoryError: If no such factory is registered.

        """
        return self.run(name, BuildProxy, overrides, **kwargs)

    def create(
        self,
        name: FactoryName,
        overrides: OverrideMap | None = None,
        /,
        **kwargs: Any,
    ) -> Any:
        """Return an instance built by the named factory and persisted.

        Args:
            name: Factory name.
            overrides: Override mapping. Keys may be strings or enum members.
            **kwargs: Overrides given as keyword arguments.

        Raises:
            FixturaUnknownFactoryError: If no such factory is registered.
            FixturaPersistenceError: If the default hook cannot persist the
                instance.

        """
        return self.run(name, CreateProxy, overrides, **kwargs)

    def __call__(
        self,
        name: FactoryName,
        overrides: OverrideMap | None = None,
        /,
        **kwargs: Any,
    ) -> Any:
        """Shorthand for ``create``."""
        return self.create(name, overrides, **kwargs)

    def find_definitions(
        self,
        root: Path | str | None = None,
        *,
        paths: Iterable[str] = DEFAULT_DEFINITION_PATHS,
        loader: DefinitionLoader = load_definitions_file,
    ) -> list[Path]:
        """Load factory definition files found under ``root`` into this registry.

        See ``fixtura.discovery.find_definitions``.
        """
        return find_definitions(root, registry=self, paths=paths, loader=loader)

    @property
    def loaded_definition_files(self) -> frozenset[Path]:
        """Resolved paths of definition files already loaded into this registry."""
        return frozenset(self._loaded_definition_files)

    def mark_definition_file_loaded(self, path: Path) -> None:
        """Record a definitions file as loaded so it is not loaded twice."""
        self._loaded_definition_files.add(path.resolve())

    def clear(self) -> None:
        """Remove every factory and forget loaded definition files."""
        self._factories.clear()
        self._loaded_definition_files.clear()

    def __contains__(self, name: object) -> bool:
        try:
            factory_name = normalize_factory_name(name)  # type: ignore[arg-type]
        except TypeError:
            return False
        return factory_name in self._factories

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._factories))

    def __len__(self) -> int:
        return len(self._factories)

    def __repr__(self) -> str:
        return f"Registry(factories={sorted(self._factories)})"


__all__ = ["DefinitionBlock", "Registry"]
