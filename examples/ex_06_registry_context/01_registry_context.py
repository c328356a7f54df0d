"""Module-level front door and the current registry.

``fixtura.define`` and ``fixtura.create`` work on the current registry of
``registry_context``. ``registry_context.use`` binds one for a block and
restores the previous binding afterwards.
"""

from __future__ import annotations

import fixtura
from fixtura import Registry, registry_context


class User:
    def __init__(self) -> None:
        self.saved = False

    def save(self) -> None:
        self.saved = True


def main() -> None:
    with registry_context.use(Registry(classes=[User])) as registry:
        fixtura.define("user", lambda f: f.add_attribute("name", "Ada"))

        user = fixtura.make("user", name="Grace")
        print(f"user={user.name} saved={user.saved}")  # => user=Grace saved=True
        print(f"factories={list(registry)}")  # => factories=['user']

    print(f"restored={'user' not in registry_context.get_current()}")  # => restored=True


if __name__ == "__main__":
    main()
