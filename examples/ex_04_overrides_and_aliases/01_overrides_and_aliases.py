"""Overrides and alias rules.

Override keys may be strings or enum members. Alias rules let a key such as
``account_id`` stand in for the declared ``account`` attribute, and keys that
match nothing are added after the declared attributes.
"""

from __future__ import annotations

from enum import Enum

from fixtura import FixturaAmbiguousOverrideError, Registry


class User:
    pass


class Field(Enum):
    FIRST_NAME = "first_name"


def main() -> None:
    registry = Registry(classes=[User])
    registry.define("user", lambda f: f.attribute("first_name", "Ada").attribute("account", "main"))
    registry.alias(r"(.*)_id", r"\1")

    by_enum = registry.attributes_for("user", {Field.FIRST_NAME: "Grace"})
    print(by_enum)  # => {'first_name': 'Grace', 'account': 'main'}

    by_alias = registry.attributes_for("user", account_id=7)
    print(by_alias)  # => {'first_name': 'Ada', 'account': 7}

    extra = registry.attributes_for("user", nickname="amazing")
    print(list(extra))  # => ['first_name', 'account', 'nickname']

    try:
        registry.attributes_for("user", {"account": 1, "account_id": 2})
    except FixturaAmbiguousOverrideError as error:
        print(type(error).__name__)  # => FixturaAmbiguousOverrideError


if __name__ == "__main__":
    main()
