"""remove(): delete the records matching a where clause or the model's primary key."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from rev_models.errors import ArgumentError, ModelError
from rev_models.models.model import Model, is_model_instance
from rev_models.operations.operation import ModelOperation, OperationName
from rev_models.operations.options import RemoveOptions
from rev_models.operations.result import ModelOperationResult
from rev_models.operations.utils import check_stored, get_model_primary_key_query

if TYPE_CHECKING:
    from rev_models.registry import ModelRegistry


async def remove(
    registry: ModelRegistry,
    model: Model,
    options: RemoveOptions | Mapping[str, Any] | None = None,
) -> ModelOperationResult[Model]:
    """
    Remove records.

    Returns:
        Result whose ``meta["total_count"]`` is the number of records removed

    Raises:
        ModelError: If model is not a model instance
        ArgumentError: If no where clause is given and the model has no primary key
        OperationError: If the backend reports errors
    """
    if not is_model_instance(model):
        raise ModelError("remove() - Specified model is not a Model instance")
    meta = registry.get_model_meta(model)
    check_stored(meta, "remove")
    backend = registry.get_backend(meta.backend or "")
    opts = RemoveOptions.coerce(options)

    if opts.where is not None:
        where = opts.where
    elif meta.primary_key:
        where = get_model_primary_key_query(model, meta)
    else:
        raise ArgumentError(
            "remove() must be called with a where clause for models with no primary_key"
        )

    operation = ModelOperation(OperationName.REMOVE, where)
    operation_result: ModelOperationResult[Model] = ModelOperationResult(operation)

    result = await backend.remove(registry, model, where, operation_result, opts)
    if not result.success:
        raise result.create_operation_error()
    return result
