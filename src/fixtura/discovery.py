from __future__ import annotations

import hashlib
import importlib.util
import logging
from collections.abc import Callable, Iterable, Iterator
from pathlib import Path
from typing import TYPE_CHECKING, Any

from fixtura.defaults import DEFAULT_DEFINITION_PATHS, DEFINITION_FILE_SUFFIX
from fixtura.exceptions import FixturaDefinitionLoadError
from fixtura.registry_context import registry_context

if TYPE_CHECKING:
    from fixtura.registry import Registry

DefinitionLoader = Callable[[Path], Any]
"""Callable executing one definitions file."""

logger = logging.getLogger(__name__)


def iter_definition_files(
    root: Path,
    paths: Iterable[str] = DEFAULT_DEFINITION_PATHS,
) -> Iterator[Path]:
    """Yield existing definition files under ``root`` in load order.

    For every entry ``p`` of ``paths`` this yields ``root/p.py`` when it exists,
    then every ``root/p/*.py`` sorted by name.
    """
    for entry in paths:
        base = root / entry
        single_file = base.with_name(base.name + DEFINITION_FILE_SUFFIX)
        if single_file.is_file():
            yield single_file
        if base.is_dir():
            yield from sorted(
                candidate
                for candidate in base.glob(f"*{DEFINITION_FILE_SUFFIX}")
                if candidate.is_file()
            )


def load_definitions_file(path: Path) -> None:
    """Execute a definitions file as a uniquely named module."""
    digest = hashlib.sha1(str(path.resolve()).encode(), usedforsecurity=False).hexdigest()[:12]
    module_name = f"fixtura_definitions_{path.stem}_{digest}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        msg = f"Cannot load definitions from {path}."
        raise ImportError(msg)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)


def find_definitions(
    root: Path | str | None = None,
    *,
    registry: Registry | None = None,
    paths: Iterable[str] = DEFAULT_DEFINITION_PATHS,
    loader: DefinitionLoader = load_definitions_file,
) -> list[Path]:
    """Load factory definition files found under a project root.

    While loading, ``registry`` is bound as the current registry so that
    module-level ``fixtura.define(...)`` calls in definition files register
    into it. Files already loaded into the registry are skipped.

    Args:
        root: Project root. Defaults to the current working directory.
        registry: Target registry. Defaults to the current registry.
        paths: Definition locations relative to ``root``.
        loader: Callable executing one definitions file.

    Returns:
        The files loaded by this call, in load order.

    Raises:
        FixturaDefinitionLoadError: If a definitions file fails to load.

    """
    root_path = Path.cwd() if root is None else Path(root)
    target = registry if registry is not None else registry_context.get_current()

    loaded: list[Path] = []
    with registry_context.use(target):
        for path in iter_definition_files(root_path, paths):
            if path.resolve() in target.loaded_definition_files:
                continue
            try:
                loader(path)
            except Exception as error:
                msg = f"Failed to load factory definitions from {path}: {error}"
                raise FixturaDefinitionLoadError(msg) from error
            target.mark_definition_file_loaded(path)
            loaded.append(path)
            logger.debug("Loaded factory definitions from %s", path)

    return loaded


__all__ = [
    "DefinitionLoader",
    "find_definitions",
    "iter_definition_files",
    "load_definitions_file",
]
