"""
Field base class and field kinds.

A Field names one attribute of a model and carries the ordered list of
validators that check its value. Synchronous validators run first, in order;
asynchronous validators then run concurrently under the validation timeout.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Mapping
from enum import StrEnum
from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from rev_models.errors import ArgumentError, ModelError, ValidationTimeoutError
from rev_models.fields.options import FieldOptions
from rev_models.models.model import is_model_instance
from rev_models.validation import validators
from rev_models.validation.options import ValidationOptions
from rev_models.validation.validators import FieldValidator

if TYPE_CHECKING:
    from rev_models.models.meta import ModelMeta
    from rev_models.operations.operation import ModelOperation
    from rev_models.validation.result import ModelValidationResult

AsyncFieldValidator = Callable[
    [Any, "Field", "ModelMeta", "ModelOperation", "ModelValidationResult", Any],
    Awaitable[None],
]


class FieldKind(StrEnum):
    """Closed set of field kinds. Backends dispatch on these."""

    FIELD = "field"
    TEXT = "text"
    EMAIL = "email"
    URL = "url"
    PASSWORD = "password"
    NUMBER = "number"
    INTEGER = "integer"
    AUTO_NUMBER = "auto_number"
    BOOLEAN = "boolean"
    SELECTION = "selection"
    DATE = "date"
    TIME = "time"
    DATETIME = "datetime"
    RECORD = "record"
    RECORD_LIST = "record_list"


class Field:
    """
    A named, validated model attribute.

    Args:
        name: Attribute name on the model
        options: Options instance or mapping (validated against ``options_class``)

    Raises:
        ArgumentError: If the name is missing or options are invalid
    """

    kind: ClassVar[FieldKind] = FieldKind.FIELD
    options_class: ClassVar[type[FieldOptions]] = FieldOptions

    def __init__(self, name: str, options: FieldOptions | Mapping[str, Any] | None = None):
        if not name or not isinstance(name, str):
            raise ArgumentError("new fields must have a name")
        self.name = name
        self.options = self._parse_options(options)
        self.validators: list[FieldValidator] = []
        self.async_validators: list[AsyncFieldValidator] = []
        if self.options.required:
            self.validators.append(validators.required_validator)

    def _parse_options(self, options: FieldOptions | Mapping[str, Any] | None) -> Any:
        cls = self.options_class
        if options is None:
            data: dict[str, Any] = {}
        elif isinstance(options, cls):
            return options
        elif isinstance(options, BaseModel):
            data = options.model_dump(exclude_unset=True)
        elif isinstance(options, Mapping):
            data = dict(options)
        else:
            raise ArgumentError(f"{type(self).__name__}: the options parameter must be an object")
        try:
            return cls.model_validate(data)
        except PydanticValidationError as e:
            details = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'options'}: {err['msg']}"
                for err in e.errors()
            )
            raise ArgumentError(f"{type(self).__name__} '{self.name}': {details}") from e

    @property
    def label(self) -> str:
        return self.options.label or self.name

    def run_validators(
        self,
        model: Any,
        meta: ModelMeta,
        operation: ModelOperation,
        result: ModelValidationResult,
        options: Any = None,
    ) -> None:
        """Run the synchronous validators in order."""
        for validator in self.validators:
            validator(model, self, meta, operation, result, options)

    async def run_async_validators(
        self,
        model: Any,
        meta: ModelMeta,
        operation: ModelOperation,
        result: ModelValidationResult,
        options: Any = None,
    ) -> None:
        """Run the asynchronous validators concurrently."""
        if self.async_validators:
            await asyncio.gather(
                *(v(model, self, meta, operation, result, options) for v in self.async_validators)
            )

    async def validate(
        self,
        model: Any,
        meta: ModelMeta,
        operation: ModelOperation,
        result: ModelValidationResult,
        options: ValidationOptions | Mapping[str, Any] | None = None,
    ) -> ModelValidationResult:
        """
        Validate this field's value on ``model``.

        Errors are added to ``result``, which is also returned.

        Raises:
            ModelError: If model is not a model instance
            ValidationTimeoutError: If async validators exceed ``options.timeout``
        """
        if not is_model_instance(model):
            raise ModelError(f"Field.validate() - '{self.name}': model is not a model instance")
        opts = ValidationOptions.coerce(options)

        self.run_validators(model, meta, operation, result, opts)
        if self.async_validators:
            try:
                async with asyncio.timeout(opts.timeout):
                    await self.run_async_validators(model, meta, operation, result, opts)
            except TimeoutError as e:
                if isinstance(e, ValidationTimeoutError):
                    raise
                raise ValidationTimeoutError(
                    f"Field.validate() - timed out after {opts.timeout} seconds"
                ) from e
        return result

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"
