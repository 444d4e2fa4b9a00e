"""Shared pytest fixtures for rev_models tests."""

from collections.abc import Iterator

import pytest

from rev_models.backends import InMemoryBackend
from rev_models.config import reset_config
from rev_models.registry import ModelRegistry


@pytest.fixture(autouse=True)
def fresh_config() -> Iterator[None]:
    """Make sure each test reads configuration from its own environment."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def backend() -> InMemoryBackend:
    """Return an empty in-memory backend."""
    return InMemoryBackend()


@pytest.fixture
def registry(backend: InMemoryBackend) -> ModelRegistry:
    """Return a registry with the in-memory backend registered as 'default'."""
    registry = ModelRegistry()
    registry.register_backend("default", backend)
    return registry
