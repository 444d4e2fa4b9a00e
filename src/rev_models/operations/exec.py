"""exec(): run a named method on a model instance or on its backend."""

from __future__ import annotations

import inspect
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from rev_models.errors import ArgumentError, ModelError
from rev_models.models.model import Model, is_model_instance
from rev_models.operations.operation import ModelOperation, OperationName
from rev_models.operations.options import ExecOptions
from rev_models.operations.result import ModelOperationResult
from rev_models.operations.validate import validate

if TYPE_CHECKING:
    from rev_models.registry import ModelRegistry


async def exec(
    registry: ModelRegistry,
    model: Model,
    method: str,
    arg_obj: dict[str, Any] | None = None,
    options: ExecOptions | Mapping[str, Any] | None = None,
) -> ModelOperationResult[Any]:
    """
    Execute ``method`` for ``model``.

    If the model defines an attribute called ``method`` it must be callable
    and is called with ``arg_obj``; its return value (awaited if needed)
    becomes ``result.result``. Otherwise the call is passed to the model's
    backend.

    Raises:
        ModelError: If model is not a model instance or ``method`` is not callable
        ArgumentError: If method is not a non-empty string
        ValidationError: If validation is enabled and the model is invalid
        NotFoundError: If the call is delegated and the model's backend is not configured
        OperationError: If the backend reports errors
    """
    if not is_model_instance(model):
        raise ModelError("exec() - Specified model is not a Model instance")
    if not isinstance(method, str) or not method:
        raise ArgumentError("exec() - Specified method name is not valid")
    meta = registry.get_model_meta(model)
    opts = ExecOptions.coerce(options)
    args = arg_obj if arg_obj is not None else {}

    operation = ModelOperation(OperationName.EXEC)
    operation_result: ModelOperationResult[Any] = ModelOperationResult(operation)

    if opts.validate_model:
        validation = await validate(registry, model, operation, opts.validation)
        if not validation.valid:
            raise operation_result.create_validation_error(validation)
        operation_result.validation = validation

    if hasattr(model, method):
        handler = getattr(model, method)
        if not callable(handler):
            raise ModelError(f"exec() - {meta.name}.{method} is not a function")
        value = handler(args)
        if inspect.isawaitable(value):
            value = await value
        operation_result.result = value
        return operation_result

    backend = registry.get_backend(meta.backend or "")
    result = await backend.exec(registry, model, method, args, operation_result, opts)
    if not result.success:
        raise result.create_operation_error()
    return result
