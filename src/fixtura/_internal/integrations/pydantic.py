from __future__ import annotations

import importlib
from typing import Any


def _load_base_model(module_name: str) -> type[Any] | None:
    try:
        module = importlib.import_module(module_name)
    except ImportError:
        return None
    base_model = getattr(module, "BaseModel", None)
    if isinstance(base_model, type):
        return base_model
    return None


BASE_MODEL: type[Any] | None = _load_base_model("pydantic")


def is_pydantic_model(candidate: object) -> bool:
    """Return true when candidate subclasses ``pydantic.BaseModel``."""
    if BASE_MODEL is None or not isinstance(candidate, type):
        return False
    return issubclass(candidate, BASE_MODEL)


def construct_unvalidated(model_class: type[Any]) -> Any:
    """Create a model instance without validation so fields can be assigned one by one."""
    return model_class.model_construct()


__all__ = [
    "BASE_MODEL",
    "construct_unvalidated",
    "is_pydantic_model",
]
