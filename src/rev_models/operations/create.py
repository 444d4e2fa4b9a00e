"""create(): validate a model instance and store it as a new record."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from rev_models.errors import ModelError
from rev_models.models.model import Model, is_model_instance
from rev_models.operations.operation import ModelOperation, OperationName
from rev_models.operations.options import CreateOptions
from rev_models.operations.result import ModelOperationResult
from rev_models.operations.utils import check_stored
from rev_models.operations.validate import validate

if TYPE_CHECKING:
    from rev_models.registry import ModelRegistry

logger = logging.getLogger(__name__)


async def create(
    registry: ModelRegistry,
    model: Model,
    options: CreateOptions | Mapping[str, Any] | None = None,
) -> ModelOperationResult[Model]:
    """
    Create a new record from ``model``.

    Returns:
        Result whose ``result`` is a new model instance with the stored values

    Raises:
        ModelError: If model is not a model instance
        ConfigurationError: If the model is declared with ``stored: False``
        ValidationError: If the model fails validation (``error.result.validation``)
        OperationError: If the backend reports errors
    """
    if not is_model_instance(model):
        raise ModelError("create() - Specified model is not a Model instance")
    meta = registry.get_model_meta(model)
    check_stored(meta, "create")
    backend = registry.get_backend(meta.backend or "")
    opts = CreateOptions.coerce(options)

    operation = ModelOperation(OperationName.CREATE)
    operation_result: ModelOperationResult[Model] = ModelOperationResult(operation)

    validation = await validate(registry, model, operation, opts.validation)
    if not validation.valid:
        logger.debug("create() rejected invalid %s: %s", meta.name, validation.field_errors)
        raise operation_result.create_validation_error(validation)
    operation_result.validation = validation

    result = await backend.create(registry, model, operation_result, opts)
    if not result.success:
        raise result.create_operation_error()
    return result
