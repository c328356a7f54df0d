from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any, TypeVar, overload

from fixtura.aliases import AliasRule
from fixtura.defaults import DEFAULT_DEFINITION_PATHS
from fixtura.discovery import DefinitionLoader, load_definitions_file
from fixtura.factory import Factory
from fixtura.naming import FactoryName
from fixtura.overrides import OverrideMap
from fixtura.proxies import PersistHook
from fixtura.registry import DefinitionBlock
from fixtura.registry_context import registry_context

BlockF = TypeVar("BlockF", bound=DefinitionBlock)


@overload
def define(
    name: FactoryName,
    block: None = None,
    *,
    build_class: type[Any] | str | None = None,
    persist: PersistHook | None = None,
) -> Callable[[BlockF], BlockF]: ...


@overload
def define(
    name: FactoryName,
    block: DefinitionBlock,
    *,
    build_class: type[Any] | str | None = None,
    persist: PersistHook | None = None,
) -> Factory: ...


def define(
    name: FactoryName,
    block: DefinitionBlock | None = None,
    *,
    build_class: type[Any] | str | None = None,
    persist: PersistHook | None = None,
) -> Factory | Callable[[BlockF], BlockF]:
    """Define a factory in the current registry of ``registry_context``.

    Args:
        name: Factory name, or a class to build.
        block: Definition block receiving the factory. Omit it to use
            decorator form.
        build_class: Explicit build class or class name.
        persist: Persistence hook for ``create`` runs of this factory.

    Returns:
        The registered factory in direct form, or a decorator in decorator form.

    Raises:
        FixturaAttributeDefinitionError: If the block declares an invalid attribute.
        FixturaTypeResolutionError: If the build class cannot be resolved.

    Examples:
        .. code-block:: python

            @fixtura.define("user")
            def _user(f: Factory) -> None:
                f.add_attribute("first_name", "Ada")

    """
    if block is None:

        def decorator(decorated_block: BlockF) -> BlockF:
            registry_context.get_current().define(
                name,
                decorated_block,
                build_class=build_class,
                persist=persist,
            )
            return decorated_block

        return decorator

    return registry_context.get_current().define(
        name,
        block,
        build_class=build_class,
        persist=persist,
    )


def alias(pattern: str | re.Pattern[str], rewrite: str) -> AliasRule:
    """Register an alias rule in the current registry.

    Args:
        pattern: Regular expression matched against override keys.
        rewrite: Replacement template producing the attribute name.

    """
    return registry_context.get_current().alias(pattern, rewrite)


def attributes_for(
    name: FactoryName,
    overrides: OverrideMap | None = None,
    /,
    **kwargs: Any,
) -> dict[str, Any]:
    """Return the attribute dict of a factory in the current registry."""
    return registry_context.get_current().attributes_for(name, overrides, **kwargs)


def build(name: FactoryName, overrides: OverrideMap | None = None, /, **kwargs: Any) -> Any:
    """Build an unpersisted instance with a factory in the current registry."""
    return registry_context.get_current().build(name, overrides, **kwargs)


def create(name: FactoryName, overrides: OverrideMap | None = None, /, **kwargs: Any) -> Any:
    """Build and persist an instance with a factory in the current registry."""
    return registry_context.get_current().create(name, overrides, **kwargs)


def make(name: FactoryName, overrides: OverrideMap | None = None, /, **kwargs: Any) -> Any:
    """Shorthand for ``create``."""
    return registry_context.get_current().create(name, overrides, **kwargs)


def find_definitions(
    root: Path | str | None = None,
    *,
    paths: Iterable[str] = DEFAULT_DEFINITION_PATHS,
    loader: DefinitionLoader = load_definitions_file,
) -> list[Path]:
    """Load factory definition files under ``root`` into the current registry."""
    return registry_context.get_current().find_definitions(root, paths=paths, loader=loader)


__all__ = [
    "alias",
    "attributes_for",
    "build",
    "create",
    "define",
    "find_definitions",
    "make",
]
