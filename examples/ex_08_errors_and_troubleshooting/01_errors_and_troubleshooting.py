"""Errors raised by common mistakes.

Every error derives from ``FixturaError`` and from the builtin exception that
matches its kind, so ``except LookupError`` also catches unknown factories.
"""

from __future__ import annotations

from types import SimpleNamespace

from fixtura import (
    FixturaAttributeDefinitionError,
    FixturaTypeResolutionError,
    FixturaUnknownFactoryError,
    FixturaUnresolvedAttributeError,
    Registry,
)


def main() -> None:
    registry = Registry()

    try:
        registry.build("ghost")
    except FixturaUnknownFactoryError as error:
        print(error)  # => No such factory: 'ghost' (defined factories: none).
        print(f"lookup_error={isinstance(error, LookupError)}")  # => lookup_error=True

    try:
        registry.define("widget", lambda f: None)
    except FixturaTypeResolutionError as error:
        print(error)  # => Cannot resolve class 'Widget'. Pass the class explicitly or register it with Registry.register_class().

    try:
        registry.define(
            "tag",
            lambda f: f.attribute("label", "a").attribute("label", "b"),
            build_class=SimpleNamespace,
        )
    except FixturaAttributeDefinitionError as error:
        print(error)  # => Attribute 'label' is already defined on factory 'tag'.

    registry.define(
        "user",
        lambda f: f.attribute("email", computation=lambda p: p.get("name")).attribute("name"),
        build_class=SimpleNamespace,
    )
    try:
        registry.build("user")
    except FixturaUnresolvedAttributeError as error:
        print(error)  # => Attribute 'name' is not resolved yet (resolved: none). Declare attributes in dependency order.


if __name__ == "__main__":
    main()
