from __future__ import annotations

import inspect
import types
from collections.abc import Callable
from typing import Any, TypeGuard


def is_runtime_class(candidate: object) -> TypeGuard[type[Any]]:
    """Return true when candidate is a runtime class usable as a build class.

    Args:
        candidate: Value being checked.

    """
    return isinstance(candidate, type) and not isinstance(candidate, types.GenericAlias)


def computation_arity(func: Callable[..., Any]) -> int | None:
    """Return how many arguments a computation should be called with.

    Zero when ``func`` can be called without arguments, one when it needs
    exactly one positional argument, ``None`` when it can be called with
    neither. Callables whose signature cannot be inspected (some builtins) are
    called without arguments.

    Args:
        func: Computation callable to inspect.

    """
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return 0

    for arguments in ((), (None,)):
        try:
            signature.bind(*arguments)
        except TypeError:
            continue
        return len(arguments)
    return None


__all__ = ["computation_arity", "is_runtime_class"]
