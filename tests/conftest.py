"""Shared pytest fixtures for fixtura tests."""

from collections.abc import Iterator

import pytest

from fixtura.registry import Registry
from fixtura.registry_context import registry_context


@pytest.fixture()
def registry() -> Registry:
    """Empty registry with default configuration."""
    return Registry()


@pytest.fixture(autouse=True)
def _reset_registry_context() -> Iterator[None]:
    """Drop the process-wide default registry after every test."""
    yield
    registry_context.reset()
