"""
Backend interface.

A backend stores and retrieves model records. Every method receives the
registry first so the backend can look up model metadata, and writes its
outcome into the ModelOperationResult it is given (``result``,
``results``, ``meta`` and soft ``errors``) before returning it.

Options arrive as options instances from the operation functions, but
callers may also pass plain mappings; backends should normalise them with
the options class's ``coerce()``.

Backends don't have to subclass Backend: registration only checks that the
methods in BACKEND_METHODS exist and are callable.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from rev_models.models.model import Model
    from rev_models.operations.options import (
        CreateOptions,
        ExecOptions,
        ReadOptions,
        RemoveOptions,
        UpdateOptions,
    )
    from rev_models.operations.result import ModelOperationResult
    from rev_models.registry import ModelRegistry

BACKEND_METHODS: tuple[str, ...] = ("create", "update", "remove", "read", "exec")


# =============================================================================
# Backend Protocol
# =============================================================================


class Backend(ABC):
    """Abstract storage backend."""

    @abstractmethod
    async def create(
        self,
        registry: ModelRegistry,
        model: Model,
        result: ModelOperationResult[Any],
        options: CreateOptions,
    ) -> ModelOperationResult[Any]:
        """
        Store a new record.

        Sets ``result.result`` to a new model instance holding the stored
        values (including backend-assigned values such as auto-numbers).
        """
        pass

    @abstractmethod
    async def update(
        self,
        registry: ModelRegistry,
        model: Model,
        where: dict[str, Any],
        result: ModelOperationResult[Any],
        options: UpdateOptions,
    ) -> ModelOperationResult[Any]:
        """
        Write the model's values to every record matching ``where``.

        Sets ``result.meta["total_count"]`` to the number of records updated.
        """
        pass

    @abstractmethod
    async def remove(
        self,
        registry: ModelRegistry,
        model: Model,
        where: dict[str, Any],
        result: ModelOperationResult[Any],
        options: RemoveOptions,
    ) -> ModelOperationResult[Any]:
        """
        Delete every record matching ``where``.

        Sets ``result.meta["total_count"]`` to the number of records removed.
        """
        pass

    @abstractmethod
    async def read(
        self,
        registry: ModelRegistry,
        model: type[Model],
        where: dict[str, Any],
        result: ModelOperationResult[Any],
        options: ReadOptions,
    ) -> ModelOperationResult[Any]:
        """
        Fetch records matching ``where``.

        Sets ``result.results`` to model instances and ``result.meta`` to
        ``offset``, ``limit`` and ``total_count`` (matches before paging).
        """
        pass

    @abstractmethod
    async def exec(
        self,
        registry: ModelRegistry,
        model: Model,
        method: str,
        arg_obj: dict[str, Any],
        result: ModelOperationResult[Any],
        options: ExecOptions,
    ) -> ModelOperationResult[Any]:
        """Run a named backend-side method for a model."""
        pass


def check_backend(backend: Any) -> list[str]:
    """Return the names of required backend methods that ``backend`` lacks."""
    return [name for name in BACKEND_METHODS if not callable(getattr(backend, name, None))]

