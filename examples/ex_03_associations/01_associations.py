"""Associations: attributes filled by running another factory.

``build`` and ``create`` both create the associated entity. ``attributes_for``
only records the key and runs nothing.
"""

from __future__ import annotations

from fixtura import Factory, Registry

saved: list[str] = []


class Model:
    def save(self) -> None:
        saved.append(type(self).__name__)


class User(Model):
    pass


class Post(Model):
    pass


def main() -> None:
    registry = Registry(classes=[User, Post])
    registry.define("user", lambda f: f.add_attribute("name", "Ada"))

    @registry.define("post")
    def _post(f: Factory) -> None:
        f.add_attribute("title", "Hello")
        f.association("author", factory="user", overrides={"name": "Grace"})

    print(registry.attributes_for("post"))  # => {'title': 'Hello', 'author': None}
    print(f"saved={saved}")  # => saved=[]

    post = registry.build("post")
    print(f"author={post.author.name}")  # => author=Grace
    print(f"saved={saved}")  # => saved=['User']

    registry.create("post")
    print(f"saved={saved}")  # => saved=['User', 'User', 'Post']


if __name__ == "__main__":
    main()
