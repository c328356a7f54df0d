"""Quickstart: define a factory once, then build test objects three ways.

``attributes_for`` returns a plain dict, ``build`` returns an unsaved
instance and ``create`` returns an instance persisted through ``save()``.
"""

from __future__ import annotations

from fixtura import Factory, Registry


class User:
    def __init__(self) -> None:
        self.saved = False

    def save(self) -> None:
        self.saved = True


def main() -> None:
    registry = Registry(classes=[User])

    @registry.define("user")
    def _user(f: Factory) -> None:
        f.add_attribute("first_name", "Ada")
        f.add_attribute("admin", False)

    print(registry.attributes_for("user"))  # => {'first_name': 'Ada', 'admin': False}

    built = registry.build("user", first_name="Grace")
    print(f"built={built.first_name} saved={built.saved}")  # => built=Grace saved=False

    created = registry.create("user", admin=True)
    print(f"admin={created.admin} saved={created.saved}")  # => admin=True saved=True

    print(registry.get("user"))  # => Factory('user', build_class=User, attributes=['first_name', 'admin'])


if __name__ == "__main__":
    main()
