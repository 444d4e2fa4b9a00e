"""
Model operations.

Every operation takes the registry as its first argument:

    await validate(registry, model)
    await create(registry, model)
    await read(registry, ModelClass, where, options)
    await update(registry, model, {"where": {...}})
    await remove(registry, model, {"where": {...}})
    await exec(registry, model, "method_name", {"arg": 1})
"""

from rev_models.operations.create import create
from rev_models.operations.exec import exec
from rev_models.operations.operation import ModelOperation, OperationName
from rev_models.operations.options import (
    DEFAULT_CREATE_OPTIONS,
    DEFAULT_EXEC_OPTIONS,
    DEFAULT_READ_OPTIONS,
    DEFAULT_REMOVE_OPTIONS,
    DEFAULT_UPDATE_OPTIONS,
    CreateOptions,
    ExecOptions,
    ReadOptions,
    RemoveOptions,
    UpdateOptions,
)
from rev_models.operations.read import read, validate_order_by
from rev_models.operations.remove import remove
from rev_models.operations.result import ModelOperationResult
from rev_models.operations.update import update
from rev_models.operations.utils import get_model_primary_key_query
from rev_models.operations.validate import validate

__all__ = [
    "DEFAULT_CREATE_OPTIONS",
    "DEFAULT_EXEC_OPTIONS",
    "DEFAULT_READ_OPTIONS",
    "DEFAULT_REMOVE_OPTIONS",
    "DEFAULT_UPDATE_OPTIONS",
    "CreateOptions",
    "ExecOptions",
    "ModelOperation",
    "ModelOperationResult",
    "OperationName",
    "ReadOptions",
    "RemoveOptions",
    "UpdateOptions",
    "create",
    "exec",
    "get_model_primary_key_query",
    "read",
    "remove",
    "update",
    "validate",
    "validate_order_by",
]
