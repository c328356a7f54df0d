"""Loading factory definitions from ``factories/`` files.

``find_definitions`` executes every definitions file under the project root
with the target registry bound as current, and skips files it already loaded.
"""

from __future__ import annotations

from pathlib import Path

from fixtura import Registry


def main() -> None:
    root = Path(__file__).resolve().parent
    registry = Registry(persist=lambda instance: None)

    loaded = registry.find_definitions(root)
    print([path.relative_to(root).as_posix() for path in loaded])  # => ['factories/posts.py', 'factories/users.py']
    print(sorted(registry))  # => ['post', 'user']
    print(registry.find_definitions(root))  # => []

    post = registry.build("post")
    print(f"{post.title} by {post.author.name}")  # => Hello by Ada


if __name__ == "__main__":
    main()
