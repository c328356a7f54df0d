"""Persistence hooks for ``create`` runs.

The default hook calls ``instance.save()``. A registry-wide hook replaces it,
and a factory-level hook wins over the registry one.
"""

from __future__ import annotations

from typing import Any

from fixtura import FixturaPersistenceError, Registry


class Session:
    def __init__(self) -> None:
        self.added: list[Any] = []

    def add(self, instance: Any) -> None:
        self.added.append(instance)


class User:
    pass


class AuditEntry:
    pass


def main() -> None:
    session = Session()
    audit: list[Any] = []

    registry = Registry(classes=[User, AuditEntry], persist=session.add)
    registry.define("user", lambda f: f.add_attribute("name", "Ada"))
    registry.define(
        "audit_entry",
        lambda f: f.add_attribute("action", "login"),
        persist=audit.append,
    )

    user = registry.create("user")
    registry.create("audit_entry")
    print(f"session={len(session.added)} audit={len(audit)}")  # => session=1 audit=1
    print(f"same={session.added[0] is user} action={audit[0].action}")  # => same=True action=login

    plain = Registry(classes=[User])
    plain.define("user", lambda f: None)
    try:
        plain.create("user")
    except FixturaPersistenceError as error:
        print(error)  # => Cannot persist User: it has no save() method. Pass persist=... to the factory or registry.


if __name__ == "__main__":
    main()
