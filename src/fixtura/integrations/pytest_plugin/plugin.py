from __future__ import annotations

from collections.abc import Iterator

import pytest

from fixtura.registry import Registry
from fixtura.registry_context import registry_context


@pytest.fixture()
def fixtura_registry() -> Registry:
    """Create a per-test factory registry used by the plugin.

    Override this fixture in your test suite to return a registry populated
    with your factory definitions. The fixture is function-scoped, so
    definitions and alias rules are isolated between tests unless users
    override fixture scope explicitly.

    Returns:
        A new ``Registry`` instance.

    """
    return Registry()


@pytest.fixture(autouse=True)
def _fixtura_current_registry(fixtura_registry: Registry) -> Iterator[Registry]:
    """Bind ``fixtura_registry`` as the current registry for the duration of a test.

    Module-level calls such as ``fixtura.build("user")`` then use the per-test
    registry, and the previous binding is restored afterwards.

    Yields:
        The bound registry.

    """
    with registry_context.use(fixtura_registry) as registry:
        yield registry
