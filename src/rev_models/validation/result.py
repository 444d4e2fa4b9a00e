"""
Validation result container.

A single ModelValidationResult is shared by every validator that runs during
one validate() call. Validators add errors to it; once ``valid`` becomes
False it never flips back.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from rev_models.errors import ArgumentError

ValidationErrorRecord = dict[str, Any]


class ModelValidationResult:
    """Accumulates field-level and model-level validation errors.

    Attributes:
        valid: False as soon as any error has been added
        field_errors: Error records keyed by field name
        model_errors: Error records not tied to a single field
    """

    def __init__(self, valid: bool = True):
        if not isinstance(valid, bool):
            raise ArgumentError(
                "First argument to the ModelValidationResult constructor must be a boolean"
            )
        self.valid = valid
        self.field_errors: dict[str, list[ValidationErrorRecord]] = {}
        self.model_errors: list[ValidationErrorRecord] = []

    def add_field_error(
        self,
        field_name: str,
        message: str,
        code: str | None = None,
        data: Mapping[str, Any] | None = None,
    ) -> None:
        """Record an error against ``field_name`` and mark the result invalid."""
        if not field_name:
            raise ArgumentError("You must specify field_name when adding a field error")
        record = self._make_record(message, code, data)
        self.valid = False
        self.field_errors.setdefault(field_name, []).append(record)

    def add_model_error(
        self,
        message: str,
        code: str | None = None,
        data: Mapping[str, Any] | None = None,
    ) -> None:
        """Record a model-level error and mark the result invalid."""
        if not message:
            raise ArgumentError("You must specify a message when adding a model error")
        record = self._make_record(message, code, data)
        self.valid = False
        self.model_errors.append(record)

    @staticmethod
    def _make_record(
        message: str, code: str | None, data: Mapping[str, Any] | None
    ) -> ValidationErrorRecord:
        if data is not None and not isinstance(data, Mapping):
            raise ArgumentError("You cannot add non-object data to a validation result")
        record: ValidationErrorRecord = {"message": message}
        if code is not None:
            record["code"] = code
        if data:
            record.update(data)
        return record

    def __repr__(self) -> str:
        return (
            f"ModelValidationResult(valid={self.valid}, "
            f"field_errors={self.field_errors!r}, model_errors={self.model_errors!r})"
        )
