from fixtura.aliases import AliasRule
from fixtura.attributes import (
    MISSING,
    AssociationAttribute,
    Attribute,
    DynamicAttribute,
    StaticAttribute,
)
from fixtura.exceptions import (
    FixturaAmbiguousOverrideError,
    FixturaAttributeDefinitionError,
    FixturaDefinitionLoadError,
    FixturaError,
    FixturaInvalidNameError,
    FixturaPersistenceError,
    FixturaProxyStateError,
    FixturaTypeResolutionError,
    FixturaUnknownFactoryError,
    FixturaUnresolvedAttributeError,
)
from fixtura.factory import Factory
from fixtura.proxies import AttributesForProxy, BuildProxy, CreateProxy, Proxy, persist_with_save
from fixtura.registry import Registry
from fixtura.registry_context import RegistryContext, registry_context
from fixtura.shortcuts import (
    alias,
    attributes_for,
    build,
    create,
    define,
    find_definitions,
    make,
)

__all__ = [
    "MISSING",
    "AliasRule",
    "AssociationAttribute",
    "Attribute",
    "AttributesForProxy",
    "BuildProxy",
    "CreateProxy",
    "DynamicAttribute",
    "Factory",
    "FixturaAmbiguousOverrideError",
    "FixturaAttributeDefinitionError",
    "FixturaDefinitionLoadError",
    "FixturaError",
    "FixturaInvalidNameError",
    "FixturaPersistenceError",
    "FixturaProxyStateError",
    "FixturaTypeResolutionError",
    "FixturaUnknownFactoryError",
    "FixturaUnresolvedAttributeError",
    "Proxy",
    "Registry",
    "RegistryContext",
    "StaticAttribute",
    "alias",
    "attributes_for",
    "build",
    "create",
    "define",
    "find_definitions",
    "make",
    "persist_with_save",
    "registry_context",
]
