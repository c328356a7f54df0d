"""Tests for factory definition, build-class resolution and runs."""

from __future__ import annotations

from enum import Enum
from typing import Any

import pytest

from fixtura.attributes import DynamicAttribute, StaticAttribute
from fixtura.exceptions import (
    FixturaAmbiguousOverrideError,
    FixturaAttributeDefinitionError,
    FixturaTypeResolutionError,
    FixturaUnresolvedAttributeError,
)
from fixtura.factory import Factory
from fixtura.proxies import AttributesForProxy, BuildProxy, CreateProxy, Proxy
from fixtura.registry import Registry
from fixtura.registry_context import registry_context


class User:
    def __init__(self) -> None:
        self.saved = False

    def save(self) -> None:
        self.saved = True


class Post:
    def __init__(self) -> None:
        self.saved = False

    def save(self) -> None:
        self.saved = True


class Business:
    pass


class ArgumentError(Exception):
    pass


class Field(Enum):
    NAME = "name"


@pytest.fixture()
def registry() -> Registry:
    return Registry(classes=[User, Post, Business, ArgumentError])


@pytest.fixture()
def factory(registry: Registry) -> Factory:
    return Factory("user", registry=registry)


def test_factory_has_normalized_name(factory: Factory) -> None:
    assert factory.factory_name == "user"


def test_factory_converts_string_name_forms(registry: Registry) -> None:
    assert Factory("User", registry=registry).factory_name == "user"


def test_factory_guesses_build_class_from_name(factory: Factory) -> None:
    assert factory.build_class is User


def test_factory_guesses_build_class_from_plural_name(registry: Registry) -> None:
    assert Factory("users", registry=registry).build_class is User


def test_factory_name_ending_in_s_keeps_its_class(registry: Registry) -> None:
    factory = Factory("business", registry=registry)

    assert factory.factory_name == "business"
    assert factory.build_class is Business


def test_factory_uses_explicit_build_class(registry: Registry) -> None:
    factory = Factory("author", build_class=User, registry=registry)

    assert factory.factory_name == "author"
    assert factory.build_class is User


def test_factory_resolves_explicit_class_name(registry: Registry) -> None:
    factory = Factory("author", build_class="argument_error", registry=registry)

    assert factory.build_class is ArgumentError


def test_factory_infers_registered_class_from_underscored_name(registry: Registry) -> None:
    assert Factory("argument_error", registry=registry).build_class is ArgumentError


def test_factory_infers_builtin_class_from_name(registry: Registry) -> None:
    assert Factory("value_error", registry=registry).build_class is ValueError


def test_factory_resolves_dotted_class_path(registry: Registry) -> None:
    factory = Factory("namespace", build_class="types.SimpleNamespace", registry=registry)

    assert factory.build_class.__name__ == "SimpleNamespace"


def test_factory_defined_from_class_guesses_name(registry: Registry) -> None:
    factory = Factory(ArgumentError, registry=registry)

    assert factory.factory_name == "argument_error"
    assert factory.build_class is ArgumentError


def test_factory_raises_when_class_cannot_be_inferred(registry: Registry) -> None:
    with pytest.raises(FixturaTypeResolutionError, match="Cannot resolve class 'Gadget'"):
        Factory("gadgets", registry=registry)


def test_factory_raises_for_unimportable_dotted_class(registry: Registry) -> None:
    with pytest.raises(FixturaTypeResolutionError, match="cannot be imported"):
        Factory("thing", build_class="missing_module_xyz.Thing", registry=registry)


def test_add_attribute_with_value_declares_static_attribute(factory: Factory) -> None:
    attribute = factory.add_attribute("name", "value")

    assert isinstance(attribute, StaticAttribute)
    assert attribute.value == "value"
    assert factory.attributes == (attribute,)


def test_add_attribute_with_computation_declares_dynamic_attribute(factory: Factory) -> None:
    attribute = factory.add_attribute("name", computation=lambda: "value")

    assert isinstance(attribute, DynamicAttribute)


def test_add_attribute_without_value_declares_none(factory: Factory) -> None:
    factory.add_attribute("first_name")

    assert factory.run(AttributesForProxy) == {"first_name": None}


def test_add_attribute_twice_raises_and_keeps_attributes(factory: Factory) -> None:
    factory.add_attribute("first_name", "Ada")

    with pytest.raises(FixturaAttributeDefinitionError, match="already defined"):
        factory.add_attribute("first_name", "Grace")

    assert factory.attribute_names == ("first_name",)
    assert factory.run(AttributesForProxy) == {"first_name": "Ada"}


def test_add_attribute_with_value_and_computation_raises(factory: Factory) -> None:
    with pytest.raises(FixturaAttributeDefinitionError, match="both a value and a computation"):
        factory.add_attribute("name", "value", lambda: "other")

    assert factory.attributes == ()


def test_add_attribute_after_run_raises(factory: Factory) -> None:
    factory.run(AttributesForProxy)

    with pytest.raises(FixturaAttributeDefinitionError, match="after it has been run"):
        factory.add_attribute("late", 1)


def test_attribute_declaration_chains(factory: Factory) -> None:
    factory.attribute("first_name", "Ada").attribute("last_name", computation=lambda: "Lovelace")

    assert factory.run(AttributesForProxy) == {"first_name": "Ada", "last_name": "Lovelace"}


def test_computed_decorator_declares_dynamic_attribute(factory: Factory) -> None:
    factory.add_attribute("first_name", "Ada")

    @factory.computed("email")
    def _email(proxy: Proxy) -> str:
        return f"{proxy.get('first_name')}@example.com".lower()

    assert factory.run(AttributesForProxy)["email"] == "ada@example.com"


def test_attribute_names_accept_enum_members(factory: Factory) -> None:
    factory.add_attribute(Field.NAME, "Ada")

    assert factory.attribute_names == ("name",)


def test_run_returns_attribute_dict_for_attributes_for(factory: Factory) -> None:
    factory.add_attribute("first_name", "Ada")
    factory.add_attribute("last_name", "Lovelace")

    assert factory.run(AttributesForProxy, {}) == {"first_name": "Ada", "last_name": "Lovelace"}


def test_run_build_instantiates_and_assigns_attributes(factory: Factory) -> None:
    factory.add_attribute("first_name", "Ada")
    factory.add_attribute("last_name", "Lovelace")

    user = factory.run(BuildProxy, {})

    assert isinstance(user, User)
    assert user.first_name == "Ada"
    assert user.last_name == "Lovelace"
    assert user.saved is False


def test_run_create_persists_instance(factory: Factory) -> None:
    factory.add_attribute("first_name", "Ada")

    user = factory.run(CreateProxy, {})

    assert user.first_name == "Ada"
    assert user.saved is True


def test_run_build_applies_overrides(factory: Factory) -> None:
    factory.add_attribute("first_name", "Ada")
    factory.add_attribute("last_name", "Lovelace")

    user = factory.run(BuildProxy, {"last_name": "Davis"})

    assert user.first_name == "Ada"
    assert user.last_name == "Davis"


def test_run_returns_overridden_value_for_attributes_for(factory: Factory) -> None:
    factory.add_attribute("name", "The price is wrong, Bob!")

    result = factory.run(AttributesForProxy, {"name": "The price is right!"})

    assert result["name"] == "The price is right!"


def test_run_never_calls_computation_of_overridden_attribute(factory: Factory) -> None:
    calls: list[str] = []

    def compute() -> str:
        calls.append("called")
        return "computed"

    factory.add_attribute("name", computation=compute)

    for proxy_class in (AttributesForProxy, BuildProxy, CreateProxy):
        factory.run(proxy_class, {"name": "given"})

    assert calls == []


def test_run_calls_computation_once_per_run(factory: Factory) -> None:
    calls: list[str] = []

    def compute() -> str:
        calls.append("called")
        return f"value-{len(calls)}"

    factory.add_attribute("name", computation=compute)

    assert factory.run(AttributesForProxy) == {"name": "value-1"}
    assert factory.run(AttributesForProxy) == {"name": "value-2"}
    assert calls == ["called", "called"]


def test_run_treats_string_and_enum_override_keys_alike(factory: Factory) -> None:
    factory.add_attribute("name", "declared")

    by_string = factory.run(AttributesForProxy, {"name": "X"})
    by_enum = factory.run(AttributesForProxy, {Field.NAME: "X"})

    assert by_string == by_enum == {"name": "X"}


def test_run_rejects_string_and_enum_keys_for_same_attribute(factory: Factory) -> None:
    factory.add_attribute("name", "declared")

    with pytest.raises(FixturaAmbiguousOverrideError, match="more than once"):
        factory.run(AttributesForProxy, {"name": "X", Field.NAME: "Y"})


def test_run_applies_undeclared_overrides_as_extras(factory: Factory) -> None:
    factory.add_attribute("first_name", "Ada")

    assert factory.run(AttributesForProxy, {"nickname": "countess"}) == {
        "first_name": "Ada",
        "nickname": "countess",
    }
    assert factory.run(BuildProxy, {"nickname": "countess"}).nickname == "countess"


def test_run_applies_extras_after_declared_attributes(factory: Factory) -> None:
    factory.add_attribute("first_name", "Ada")

    result = factory.run(AttributesForProxy, {"nickname": "countess"})

    assert list(result) == ["first_name", "nickname"]


def test_dynamic_attribute_reads_previously_resolved_sibling(factory: Factory) -> None:
    factory.add_attribute("first_name", "Ada")
    factory.add_attribute(
        "email",
        computation=lambda proxy: f"{proxy.get('first_name')}@example.com".lower(),
    )

    assert factory.run(BuildProxy).email == "ada@example.com"


def test_dynamic_attribute_sees_overridden_sibling(factory: Factory) -> None:
    factory.add_attribute("first_name", "Ada")
    factory.add_attribute("email", computation=lambda proxy: f"{proxy.get('first_name')}@x.io")

    assert factory.run(AttributesForProxy, {"first_name": "grace"})["email"] == "grace@x.io"


def test_dynamic_attribute_reading_later_sibling_raises(factory: Factory) -> None:
    factory.add_attribute("email", computation=lambda proxy: proxy.get("first_name"))
    factory.add_attribute("first_name", "Ada")

    with pytest.raises(FixturaUnresolvedAttributeError, match="'first_name' is not resolved"):
        factory.run(AttributesForProxy)


def test_run_with_alias_overrides_underlying_attribute(registry: Registry) -> None:
    factory = Factory("user", registry=registry)
    factory.add_attribute("test", "original")
    registry.alias(r"(.*)_alias", r"\1")

    result = factory.run(AttributesForProxy, {"test_alias": "new"})

    assert result == {"test": "new"}
    assert "original" not in result.values()


def test_run_with_alias_skips_underlying_computation(registry: Registry) -> None:
    calls: list[str] = []
    factory = Factory("user", registry=registry)
    factory.add_attribute("test", computation=lambda: calls.append("called"))
    registry.alias(r"(.*)_alias", r"\1")

    user = factory.run(BuildProxy, {"test_alias": "new"})

    assert user.test == "new"
    assert calls == []


def test_run_rejects_direct_and_aliased_keys_for_same_attribute(registry: Registry) -> None:
    factory = Factory("user", registry=registry)
    factory.add_attribute("test", "original")
    registry.alias(r"(.*)_alias", r"\1")

    with pytest.raises(FixturaAmbiguousOverrideError, match="both target attribute 'test'"):
        factory.run(AttributesForProxy, {"test": "direct", "test_alias": "aliased"})


def test_run_keeps_alias_key_without_declared_target_as_extra(registry: Registry) -> None:
    factory = Factory("user", registry=registry)
    factory.add_attribute("test", "original")
    registry.alias(r"(.*)_alias", r"\1")

    result = factory.run(AttributesForProxy, {"other_alias": "new"})

    assert result == {"test": "original", "other_alias": "new"}


def test_association_without_factory_name_creates_same_named_factory(registry: Registry) -> None:
    registry.define("user", lambda f: f.add_attribute("first_name", "Ada"))
    factory = Factory("post", registry=registry)
    factory.association("user")

    post = factory.run(BuildProxy, {})

    assert isinstance(post.user, User)
    assert post.user.first_name == "Ada"
    assert post.user.saved is True
    assert post.saved is False


def test_association_without_factory_name_adds_key_for_attributes_for(
    registry: Registry,
) -> None:
    registry.define("user", lambda f: f.add_attribute("first_name", "Ada"))
    factory = Factory("post", registry=registry)
    factory.association("user")

    assert factory.run(AttributesForProxy, {}) == {"user": None}


def test_association_with_factory_name_creates_named_factory(registry: Registry) -> None:
    registry.define("user", lambda f: f.add_attribute("first_name", "Ada"))
    factory = Factory("post", registry=registry)
    factory.association("author", factory="user")

    post = factory.run(BuildProxy, {})

    assert isinstance(post.author, User)
    assert post.author.saved is True
    assert not hasattr(post, "user")


def test_association_with_factory_name_keeps_attribute_key(registry: Registry) -> None:
    registry.define("user", lambda f: f.add_attribute("first_name", "Ada"))
    factory = Factory("post", registry=registry)
    factory.association("author", factory="user")

    result = factory.run(AttributesForProxy, {})

    assert "author" in result
    assert "user" not in result


def test_association_passes_overrides_to_associated_factory(registry: Registry) -> None:
    registry.define("user", lambda f: f.add_attribute("first_name", "Ada"))
    factory = Factory("post", registry=registry)
    factory.association("author", factory="user", overrides={"first_name": "Grace"})

    assert factory.run(CreateProxy).author.first_name == "Grace"


def test_overridden_association_does_not_run_associated_factory(registry: Registry) -> None:
    created: list[Any] = []
    registry.define("user", lambda f: f.add_attribute("first_name", "Ada"), persist=created.append)
    factory = Factory("post", registry=registry)
    factory.association("author", factory="user")
    author = User()

    post = factory.run(BuildProxy, {"author": author})

    assert post.author is author
    assert created == []


def test_association_duplicate_name_raises(factory: Factory) -> None:
    factory.add_attribute("user", None)

    with pytest.raises(FixturaAttributeDefinitionError):
        factory.association("user")


def test_factory_persist_option_overrides_registry_hook(registry: Registry) -> None:
    persisted: list[Any] = []
    factory = Factory("user", persist=persisted.append, registry=registry)
    factory.add_attribute("first_name", "Ada")

    user = factory.run(CreateProxy)

    assert persisted == [user]
    assert user.saved is False


def test_factory_without_registry_uses_current_registry() -> None:
    current = Registry(classes=[User])
    registry_context.set_current(current)

    factory = Factory("user")

    assert factory.registry is current
    assert factory.build_class is User


def test_factory_repr_lists_attributes(factory: Factory) -> None:
    factory.add_attribute("first_name", "Ada")

    assert repr(factory) == "Factory('user', build_class=User, attributes=['first_name'])"
