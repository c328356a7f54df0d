from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, TypeVar

from fixtura._internal.type_checks import is_runtime_class
from fixtura.attributes import (
    MISSING,
    AssociationAttribute,
    Attribute,
    Computation,
    make_attribute,
)
from fixtura.exceptions import FixturaAttributeDefinitionError, FixturaTypeResolutionError
from fixtura.naming import (
    AttributeKey,
    FactoryName,
    inferred_class_name,
    normalize_factory_name,
    normalize_key,
    resolve_class_name,
)
from fixtura.overrides import OverrideMap, merge_overrides, resolve_overrides
from fixtura.proxies import PersistHook, Proxy
from fixtura.registry_context import registry_context

if TYPE_CHECKING:
    from typing_extensions import Self

    from fixtura.registry import Registry

ComputationF = TypeVar("ComputationF", bound=Callable[..., Any])

logger = logging.getLogger(__name__)


class Factory:
    """A named recipe for building instances of one class.

    A factory owns an ordered list of attribute definitions. ``run`` resolves
    caller overrides against them (including alias rules) and drives a proxy
    through every attribute in declaration order. Overridden attributes are
    never evaluated, so their computations are never invoked.

    Attributes can only be declared before the first run.
    """

    def __init__(
        self,
        name: FactoryName,
        *,
        build_class: type[Any] | str | None = None,
        persist: PersistHook | None = None,
        registry: Registry | None = None,
    ) -> None:
        """Initialize a factory and resolve its build class.

        Args:
            name: Factory name. A class passed here is also used as the build
                class unless ``build_class`` is given.
            build_class: Explicit build class, or a class name resolved through
                the registry's class mapping, builtins or a dotted import path.
            persist: Persistence hook used by ``create`` runs. Falls back to the
                registry's hook.
            registry: Registry used for associations, alias rules and class
                lookup. Defaults to the current registry of ``registry_context``.

        Raises:
            FixturaTypeResolutionError: If the build class cannot be resolved.
            FixturaInvalidNameError: If ``name`` is of an unsupported type.

        Examples:
            .. code-block:: python

                Factory("user")  # builds User
                Factory("author", build_class=User)
                Factory(User)  # named "user"

        """
        self._registry = registry
        self._factory_name = normalize_factory_name(name)
        self._build_class = self._resolve_build_class(name, build_class)
        self._persist = persist
        self._attributes: list[Attribute] = []
        self._attribute_names: set[str] = set()
        self._has_run = False

    @property
    def factory_name(self) -> str:
        """Normalized name of this factory."""
        return self._factory_name

    @property
    def build_class(self) -> type[Any]:
        """Class instantiated by build and create runs."""
        return self._build_class

    @property
    def registry(self) -> Registry:
        """Registry this factory resolves associations and aliases against."""
        if self._registry is not None:
            return self._registry
        return registry_context.get_current()

    @property
    def attributes(self) -> tuple[Attribute, ...]:
        """Declared attributes in declaration order."""
        return tuple(self._attributes)

    @property
    def attribute_names(self) -> tuple[str, ...]:
        """Declared attribute names in declaration order."""
        return tuple(attribute.name for attribute in self._attributes)

    def add_attribute(
        self,
        name: AttributeKey,
        value: Any = MISSING,
        computation: Computation | None = None,
    ) -> Attribute:
        """Declare a static or dynamic attribute.

        Args:
            name: Attribute name.
            value: Fixed value of a static attribute. Omit both ``value`` and
                ``computation`` to declare a static ``None``.
            computation: Deferred computation of a dynamic attribute. It may
                take the running proxy as its only argument to read sibling
                attributes declared before it.

        Returns:
            The declared attribute.

        Raises:
            FixturaAttributeDefinitionError: If the name is already declared,
                both ``value`` and ``computation`` are given, or the factory has
                already run.

        """
        attribute_name = normalize_key(name)
        self._ensure_declarable(attribute_name)
        attribute = make_attribute(attribute_name, value, computation)
        self._append(attribute)
        return attribute

    def attribute(
        self,
        name: AttributeKey,
        value: Any = MISSING,
        /,
        *,
        computation: Computation | None = None,
    ) -> Self:
        """Declare an attribute and return the factory for chaining.

        Examples:
            .. code-block:: python

                factory.attribute("first_name", "Ada").attribute("last_name", "Lovelace")

        """
        self.add_attribute(name, value, computation)
        return self

    def computed(self, name: AttributeKey) -> Callable[[ComputationF], ComputationF]:
        """Declare a dynamic attribute with decorator syntax.

        Examples:
            .. code-block:: python

                @factory.computed("email")
                def _email(proxy: Proxy) -> str:
                    return f"{proxy.get('first_name')}@example.com".lower()

        """

        def decorator(computation: ComputationF) -> ComputationF:
            self.add_attribute(name, computation=computation)
            return computation

        return decorator

    def association(
        self,
        name: AttributeKey,
        *,
        factory: FactoryName | None = None,
        overrides: Mapping[AttributeKey, Any] | None = None,
    ) -> Attribute:
        """Declare an attribute whose value is created by another factory.

        Args:
            name: Attribute name.
            factory: Name of the associated factory. Defaults to ``name``.
            overrides: Overrides passed to the associated factory run.

        Returns:
            The declared association attribute.

        Raises:
            FixturaAttributeDefinitionError: If the name is already declared or
                the factory has already run.

        """
        attribute_name = normalize_key(name)
        self._ensure_declarable(attribute_name)
        target = normalize_factory_name(factory if factory is not None else attribute_name)
        attribute = AssociationAttribute(
            attribute_name,
            target,
            merge_overrides(overrides, {}),
        )
        self._append(attribute)
        return attribute

    def run(
        self,
        proxy_class: type[Proxy],
        overrides: OverrideMap | None = None,
    ) -> Any:
        """Run the factory with a build strategy.

        Args:
            proxy_class: Proxy class selecting the strategy.
            overrides: Values replacing declared attributes for this run. Keys
                that match no declared attribute directly or through an alias
                rule are applied after all declared attributes.

        Returns:
            The proxy result: a dict, a built instance or a created instance.

        Raises:
            FixturaAmbiguousOverrideError: If several keys target one attribute.
            FixturaUnresolvedAttributeError: If a computation reads an attribute
                that is not resolved yet.

        """
        self._has_run = True
        registry = self.registry
        resolved = resolve_overrides(
            merge_overrides(overrides, {}),
            self._attribute_names,
            registry.aliases,
        )
        logger.debug(
            "Running factory %r with %s (overrides: %s)",
            self._factory_name,
            proxy_class.__name__,
            sorted(resolved.by_attribute) + sorted(resolved.extras),
        )

        proxy = proxy_class(
            self._build_class,
            registry=registry,
            persist=self._persist or registry.persist,
        )
        for attribute in self._attributes:
            if attribute.name in resolved.by_attribute:
                proxy.set(attribute.name, resolved.by_attribute[attribute.name])
            else:
                attribute.add_to(proxy)

        for name, value in resolved.extras.items():
            proxy.set(name, value)

        return proxy.result()

    def _ensure_declarable(self, name: str) -> None:
        if self._has_run:
            msg = (
                f"Cannot add attribute {name!r} to factory {self._factory_name!r} "
                "after it has been run."
            )
            raise FixturaAttributeDefinitionError(msg)
        if name in self._attribute_names:
            msg = f"Attribute {name!r} is already defined on factory {self._factory_name!r}."
            raise FixturaAttributeDefinitionError(msg)

    def _append(self, attribute: Attribute) -> None:
        self._attributes.append(attribute)
        self._attribute_names.add(attribute.name)

    def _resolve_build_class(
        self,
        name: FactoryName,
        build_class: type[Any] | str | None,
    ) -> type[Any]:
        if build_class is None:
            if is_runtime_class(name):
                return name
            return resolve_class_name(
                inferred_class_name(self._factory_name),
                self.registry.classes,
            )

        if is_runtime_class(build_class):
            return build_class
        if isinstance(build_class, str):
            return resolve_class_name(build_class, self.registry.classes)

        msg = f"build_class must be a class or a class name, got {build_class!r}."
        raise FixturaTypeResolutionError(msg)

    def __repr__(self) -> str:
        return (
            f"Factory({self._factory_name!r}, build_class={self._build_class.__qualname__}, "
            f"attributes={list(self.attribute_names)})"
        )


__all__ = ["Factory"]
