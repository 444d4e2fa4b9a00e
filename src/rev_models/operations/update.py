"""update(): validate a model instance and write its values to matching records."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from rev_models.errors import ArgumentError, ModelError
from rev_models.models.model import Model, is_model_instance
from rev_models.operations.operation import ModelOperation, OperationName
from rev_models.operations.options import UpdateOptions
from rev_models.operations.result import ModelOperationResult
from rev_models.operations.utils import check_stored, get_model_primary_key_query
from rev_models.operations.validate import validate

if TYPE_CHECKING:
    from rev_models.registry import ModelRegistry


async def update(
    registry: ModelRegistry,
    model: Model,
    options: UpdateOptions | Mapping[str, Any] | None = None,
) -> ModelOperationResult[Model]:
    """
    Update records with the values of ``model``.

    Records are selected by ``options.where``; without one, singleton
    models update their only record and other models match on their
    primary key.

    Returns:
        Result whose ``meta["total_count"]`` is the number of records updated

    Raises:
        ModelError: If model is not a model instance
        ArgumentError: If no where clause is given and none can be derived
        ValidationError: If the model fails validation
        OperationError: If the backend reports errors
    """
    if not is_model_instance(model):
        raise ModelError("update() - Specified model is not a Model instance")
    meta = registry.get_model_meta(model)
    check_stored(meta, "update")
    backend = registry.get_backend(meta.backend or "")
    opts = UpdateOptions.coerce(options)

    if opts.where is not None:
        where = opts.where
    elif meta.singleton:
        where = {}
    elif meta.primary_key:
        where = get_model_primary_key_query(model, meta)
    else:
        raise ArgumentError(
            "update() must be called with a where clause for models with no primary_key"
        )

    operation = ModelOperation(OperationName.UPDATE, where)
    operation_result: ModelOperationResult[Model] = ModelOperationResult(operation)

    validation = await validate(registry, model, operation, opts.validation)
    if not validation.valid:
        raise operation_result.create_validation_error(validation)
    operation_result.validation = validation

    result = await backend.update(registry, model, where, operation_result, opts)
    if not result.success:
        raise result.create_operation_error()
    return result
