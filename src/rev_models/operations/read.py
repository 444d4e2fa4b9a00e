"""read(): fetch records matching a where clause."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from rev_models.errors import ArgumentError, ModelError
from rev_models.models.meta import ModelMeta
from rev_models.models.model import Model, is_model_class
from rev_models.operations.operation import ModelOperation, OperationName
from rev_models.operations.options import ReadOptions
from rev_models.operations.result import ModelOperationResult

if TYPE_CHECKING:
    from rev_models.registry import ModelRegistry

SORT_DIRECTIONS = ("asc", "desc")


def validate_order_by(meta: ModelMeta, order_by: Any) -> None:
    """
    Check ``order_by`` is a non-empty list of ``"field [asc|desc]"`` entries.

    Raises:
        ArgumentError: Describing the first problem found
    """
    if not isinstance(order_by, (list, tuple)) or len(order_by) == 0:
        raise ArgumentError("read(): order_by: must be an array with at least one item")
    for entry in order_by:
        if not isinstance(entry, str):
            raise ArgumentError("read(): order_by: array contains a non-string value")
        parts = entry.split(" ")
        if len(parts) > 2 or not parts[0] or (len(parts) == 2 and parts[1] not in SORT_DIRECTIONS):
            raise ArgumentError(f"read(): order_by: invalid entry '{entry}'")
        if parts[0] not in meta.fields_by_name:
            raise ArgumentError(
                f"read(): order_by: field '{parts[0]}' does not exist in model {meta.name}"
            )


async def read(
    registry: ModelRegistry,
    model: type[Model],
    where: dict[str, Any] | None = None,
    options: ReadOptions | Mapping[str, Any] | None = None,
) -> ModelOperationResult[Model]:
    """
    Read records of ``model`` matching ``where``.

    Returns:
        Result whose ``results`` holds model instances and whose ``meta`` holds
        ``offset``, ``limit`` and ``total_count``

    Raises:
        ModelError: If model is not a model class
        ArgumentError: For a where clause on a singleton model or a bad order_by
        OperationError: If the backend reports errors
    """
    if not is_model_class(model):
        raise ModelError("read() - Specified model is not a model class")
    meta = registry.get_model_meta(model)
    if meta.singleton and where:
        raise ArgumentError("read() cannot be called with a where clause for singleton models")
    backend = registry.get_backend(meta.backend or "")
    opts = ReadOptions.coerce(options)
    if opts.order_by is not None:
        validate_order_by(meta, opts.order_by)

    where = where if where is not None else {}
    operation = ModelOperation(OperationName.READ, where)
    operation_result: ModelOperationResult[Model] = ModelOperationResult(operation)

    result = await backend.read(registry, model, where, operation_result, opts)
    if not result.success:
        raise result.create_operation_error()
    return result
