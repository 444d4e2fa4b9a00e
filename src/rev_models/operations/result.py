"""
Operation result.

Every operation returns a ModelOperationResult. Backends fill in
``result`` (create/exec), ``results`` (read) and ``meta`` (counts, paging),
and may add soft errors with add_error(); the operation then raises
OperationError with the result attached.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Generic, TypeVar

from rev_models.errors import ArgumentError, OperationError, ValidationError
from rev_models.operations.operation import ModelOperation
from rev_models.validation.result import ModelValidationResult

T = TypeVar("T")


class ModelOperationResult(Generic[T]):
    """Outcome of one create/read/update/remove/exec call.

    Attributes:
        operation: The operation that produced this result
        success: False once an error has been added or validation failed
        result: Single model returned by create()/exec()
        results: Models returned by read()
        validation: Validation result, when the operation validated the model
        errors: Soft errors reported by the backend
        meta: Backend-provided details such as total_count, offset and limit
    """

    def __init__(self, operation: ModelOperation):
        self.operation = operation
        self.success = True
        self.result: T | None = None
        self.results: list[T] | None = None
        self.validation: ModelValidationResult | None = None
        self.errors: list[dict[str, Any]] = []
        self.meta: dict[str, Any] = {}

    def add_error(
        self,
        message: str,
        code: str | None = None,
        data: Mapping[str, Any] | None = None,
    ) -> None:
        """Record an error and mark the operation as failed."""
        if not message:
            raise ArgumentError("add_error() - you must specify a message")
        if data is not None and not isinstance(data, Mapping):
            raise ArgumentError("add_error() - you cannot add non-object data")
        error: dict[str, Any] = {"message": message}
        if code is not None:
            error["code"] = code
        if data:
            error.update(data)
        self.success = False
        self.errors.append(error)

    def set_meta(self, **meta: Any) -> None:
        self.meta.update(meta)

    def create_validation_error(self, validation: ModelValidationResult) -> ValidationError:
        """Attach a failed validation result and return the error to raise."""
        self.validation = validation
        self.success = False
        return ValidationError(self)

    def create_operation_error(self) -> OperationError:
        self.success = False
        return OperationError(self)

    def __repr__(self) -> str:
        return (
            f"ModelOperationResult(operation={self.operation.operation!r}, "
            f"success={self.success}, errors={self.errors!r}, meta={self.meta!r})"
        )
