"""
validate(): run every field and model validator for a model instance.

Order within one call:
1. extra attributes (not declared as fields) are reported as model errors
2. all synchronous field validators, field by field
3. all asynchronous field validators, concurrently
4. the model's ``validate`` hooks, then its ``validate_async`` hooks

The whole run is bounded by ``options.timeout``. When it expires, pending
async validators are cancelled and ValidationTimeoutError is raised.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from rev_models.errors import ModelError, ValidationTimeoutError
from rev_models.logging import log_with_context
from rev_models.models.meta import ModelMeta, check_metadata_initialised
from rev_models.models.model import Model, is_model_instance
from rev_models.operations.operation import ModelOperation, OperationName
from rev_models.validation import messages as msg
from rev_models.validation.options import ValidationOptions
from rev_models.validation.result import ModelValidationResult

if TYPE_CHECKING:
    from rev_models.registry import ModelRegistry

logger = logging.getLogger(__name__)


async def validate(
    registry: ModelRegistry,
    model: Model,
    operation: ModelOperation | None = None,
    options: ValidationOptions | Mapping[str, Any] | None = None,
) -> ModelValidationResult:
    """
    Validate a model instance against its registered metadata.

    Args:
        registry: Registry the model's class is registered with
        model: Model instance to validate
        operation: Operation being validated for (defaults to create)
        options: Validation options (timeout)

    Returns:
        ModelValidationResult with any field and model errors

    Raises:
        ModelError: If model is not a model instance
        MetadataError: If the model's class is not registered
        ValidationTimeoutError: If validation takes longer than options.timeout
    """
    if not is_model_instance(model):
        raise ModelError("validate() - Specified model is not a Model instance")
    meta = registry.get_model_meta(model)
    check_metadata_initialised(meta)
    if operation is None:
        operation = ModelOperation(OperationName.CREATE)
    opts = ValidationOptions.coerce(options)

    result = ModelValidationResult()
    try:
        async with asyncio.timeout(opts.timeout):
            await _run_validators(model, meta, operation, result, opts)
    except TimeoutError as e:
        if isinstance(e, ValidationTimeoutError):
            raise
        log_with_context(
            logger,
            logging.WARNING,
            "Validation timed out",
            model=meta.name,
            operation=operation.operation,
            timeout=opts.timeout,
        )
        raise ValidationTimeoutError(
            f"validate() - timed out after {opts.timeout} seconds"
        ) from e
    return result


async def _run_validators(
    model: Model,
    meta: ModelMeta,
    operation: ModelOperation,
    result: ModelValidationResult,
    options: ValidationOptions,
) -> None:
    for name in vars(model):
        if name not in meta.fields_by_name:
            result.add_model_error(msg.extra_field(name), "extra_field")

    for field in meta.fields:
        field.run_validators(model, meta, operation, result, options)

    await asyncio.gather(
        *(field.run_async_validators(model, meta, operation, result, options) for field in meta.fields)
    )

    model_validate = getattr(model, "validate", None)
    if callable(model_validate):
        model_validate(operation, result, options)
    if meta.validate is not None:
        meta.validate(model, operation, result, options)

    model_validate_async = getattr(model, "validate_async", None)
    if callable(model_validate_async):
        await _maybe_await(model_validate_async(operation, result, options))
    if meta.validate_async is not None:
        await _maybe_await(meta.validate_async(model, operation, result, options))


async def _maybe_await(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value
