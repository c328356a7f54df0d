from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fixtura.registry import Registry

logger = logging.getLogger(__name__)


class RegistryContext:
    """Holder of the process-wide current registry.

    The module-level front door (``fixtura.define``, ``fixtura.build``, ...) and
    factories constructed without an explicit registry use the current
    registry. A default registry is created on first use.

    The binding is process-global for this ``RegistryContext`` instance. It is
    not task-local or thread-local; bind registries during single-threaded
    setup.
    """

    def __init__(self) -> None:
        self._registry: Registry | None = None

    def get_current(self) -> Registry:
        """Return the current registry, creating the default one on first use."""
        if self._registry is None:
            from fixtura.registry import Registry  # noqa: PLC0415

            self._registry = Registry()
            logger.debug("Created default registry")
        return self._registry

    def set_current(self, registry: Registry) -> None:
        """Bind ``registry`` as the current registry."""
        self._registry = registry

    def reset(self) -> None:
        """Drop the current registry; the next use creates a fresh default one."""
        self._registry = None

    @contextmanager
    def use(self, registry: Registry) -> Iterator[Registry]:
        """Bind ``registry`` as current for the duration of a ``with`` block.

        Examples:
            .. code-block:: python

                with registry_context.use(Registry()) as registry:
                    fixtura.define("user", lambda f: f.add_attribute("name", "Ada"))

        """
        previous = self._registry
        self._registry = registry
        try:
            yield registry
        finally:
            self._registry = previous


registry_context = RegistryContext()
"""Process-wide registry context used by the module-level front door."""

__all__ = ["RegistryContext", "registry_context"]
