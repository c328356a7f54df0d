from __future__ import annotations

import builtins
import importlib
from collections.abc import Mapping
from enum import Enum
from typing import Any, TypeAlias

import inflection

from fixtura._internal.type_checks import is_runtime_class
from fixtura.exceptions import FixturaInvalidNameError, FixturaTypeResolutionError

FactoryName: TypeAlias = str | Enum | type[Any]
"""A factory name as accepted by the public API: string, enum member or class."""

AttributeKey: TypeAlias = str | Enum
"""An attribute key as accepted in override mappings: string or enum member."""


def _enum_text(member: Enum) -> str:
    value = member.value
    if isinstance(value, str):
        return value
    return member.name


def normalize_factory_name(name: FactoryName) -> str:
    """Return the canonical registry key for a factory name.

    Strings, enum members and classes addressing the same factory normalize to
    the same underscored, lower-cased key.

    Args:
        name: Factory name in any supported form.

    Raises:
        FixturaInvalidNameError: If ``name`` is of an unsupported type or empty.

    """
    if is_runtime_class(name):
        text = name.__name__
    elif isinstance(name, Enum):
        text = _enum_text(name)
    elif isinstance(name, str):
        text = name
    else:
        msg = f"Factory name must be a string, enum member or class, got {name!r}."
        raise FixturaInvalidNameError(msg)

    normalized = inflection.underscore(text.strip())
    if not normalized:
        msg = "Factory name must not be empty."
        raise FixturaInvalidNameError(msg)
    return normalized


def normalize_key(key: AttributeKey) -> str:
    """Return the canonical attribute name for an override or declaration key.

    Args:
        key: Attribute key as a string or enum member.

    Raises:
        FixturaInvalidNameError: If ``key`` is neither a string nor an enum member.

    """
    if isinstance(key, Enum):
        return _enum_text(key)
    if isinstance(key, str):
        return key
    msg = f"Attribute key must be a string or enum member, got {key!r}."
    raise FixturaInvalidNameError(msg)


def class_name_for(name: str) -> str:
    """Return the class name a string refers to (``"argument_error"`` -> ``"ArgumentError"``)."""
    return inflection.camelize(name)


def inferred_class_name(factory_name: str) -> str:
    """Return the class name inferred from a factory name (``"users"`` -> ``"User"``)."""
    return inflection.camelize(inflection.singularize(factory_name))


def resolve_class_name(class_name: str, classes: Mapping[str, type[Any]]) -> type[Any]:
    """Resolve a class name to a class.

    Lookup order is the explicit ``classes`` mapping, then Python builtins. A
    dotted name (``"package.module.ClassName"``) is imported instead.

    Args:
        class_name: Class name, underscored name or dotted import path.
        classes: Explicit name-to-class mapping consulted first.

    Raises:
        FixturaTypeResolutionError: If the name does not resolve to a class.

    """
    if "." in class_name:
        return _import_class(class_name)

    camelized = class_name_for(class_name)
    for candidate in (class_name, camelized):
        if candidate in classes:
            return classes[candidate]

    resolved = getattr(builtins, camelized, None)
    if is_runtime_class(resolved):
        return resolved

    msg = (
        f"Cannot resolve class {camelized!r}. Pass the class explicitly or register it "
        "with Registry.register_class()."
    )
    raise FixturaTypeResolutionError(msg)


def _import_class(path: str) -> type[Any]:
    module_name, _, attribute_name = path.rpartition(".")
    try:
        module = importlib.import_module(module_name)
    except ImportError as error:
        msg = f"Cannot resolve class {path!r}: module {module_name!r} cannot be imported."
        raise FixturaTypeResolutionError(msg) from error

    resolved = getattr(module, attribute_name, None)
    if not is_runtime_class(resolved):
        msg = f"Cannot resolve class {path!r}: {attribute_name!r} is not a class."
        raise FixturaTypeResolutionError(msg)
    return resolved


__all__ = [
    "AttributeKey",
    "FactoryName",
    "class_name_for",
    "inferred_class_name",
    "normalize_factory_name",
    "normalize_key",
    "resolve_class_name",
]
