from __future__ import annotations

from typing import Any

from fixtura._internal.integrations.pydantic import construct_unvalidated, is_pydantic_model


def instantiate(build_class: type[Any]) -> Any:
    """Create the live instance a build or create run assigns attributes onto.

    Pydantic models are created without validation; every other class is
    called without arguments.

    Args:
        build_class: Factory build class.

    """
    if is_pydantic_model(build_class):
        return construct_unvalidated(build_class)
    return build_class()


__all__ = ["instantiate"]
