"""Dynamic attributes: computations evaluated on every run.

A computation may take the running proxy to read attributes declared before
it. Overridden attributes are never computed.
"""

from __future__ import annotations

from itertools import count

from fixtura import Factory, Proxy, Registry


class User:
    pass


def main() -> None:
    sequence = count(1)
    registry = Registry(classes=[User])

    @registry.define("user")
    def _user(f: Factory) -> None:
        f.add_attribute("first_name", "Ada")
        f.add_attribute("last_name", "Lovelace")
        f.add_attribute("number", computation=lambda: next(sequence))

        @f.computed("email")
        def _email(proxy: Proxy) -> str:
            return f"{proxy.get('first_name')}.{proxy.get('last_name')}@example.com".lower()

    first = registry.build("user")
    print(f"first={first.number} {first.email}")  # => first=1 ada.lovelace@example.com

    second = registry.build("user", first_name="Grace")
    print(f"second={second.number} {second.email}")  # => second=2 grace.lovelace@example.com

    overridden = registry.build("user", number=99)
    print(f"overridden={overridden.number}")  # => overridden=99
    print(f"next={registry.build('user').number}")  # => next=3


if __name__ == "__main__":
    main()
