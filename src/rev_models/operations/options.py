"""
Operation options.

Each operation accepts its options as an options instance, a mapping or
None; missing values come from the DEFAULT_*_OPTIONS instances. Unknown keys
are kept so custom backends can receive their own options.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from rev_models.config import get_config
from rev_models.errors import ArgumentError
from rev_models.validation.options import ValidationOptions


class OperationOptions(BaseModel):
    """Base class for operation options."""

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    @classmethod
    def coerce(cls, options: BaseModel | Mapping[str, Any] | None) -> Self:
        """Build options from an instance, a mapping or None."""
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        if isinstance(options, BaseModel):
            data = options.model_dump(exclude_unset=True, by_alias=True)
        elif isinstance(options, Mapping):
            data = dict(options)
        else:
            raise ArgumentError(f"options must be a mapping or {cls.__name__}, got {options!r}")
        try:
            return cls.model_validate(data)
        except PydanticValidationError as e:
            details = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
            )
            raise ArgumentError(f"invalid {cls.__name__}: {details}") from e


class CreateOptions(OperationOptions):
    validation: ValidationOptions | None = Field(default=None, description="Validation options")


class ReadOptions(OperationOptions):
    """Paging and ordering for read().

    ``order_by`` entries are ``"field"``, ``"field asc"`` or ``"field desc"``.
    """

    limit: int = Field(
        default_factory=lambda: get_config().default_read_limit,
        description="Maximum number of records to return",
    )
    offset: int = Field(default=0, description="Number of matching records to skip")
    order_by: Any = Field(default=None, description="List of sort entries")


class UpdateOptions(OperationOptions):
    where: dict[str, Any] | None = Field(default=None, description="Records to update")
    fields: list[str] | None = Field(default=None, description="Only write these fields")
    validation: ValidationOptions | None = Field(default=None, description="Validation options")


class RemoveOptions(OperationOptions):
    where: dict[str, Any] | None = Field(default=None, description="Records to remove")


class ExecOptions(OperationOptions):
    validate_model: bool = Field(
        default=True,
        alias="validate",
        description="Validate the model before running the method",
    )
    validation: ValidationOptions | None = Field(default=None, description="Validation options")


DEFAULT_CREATE_OPTIONS = CreateOptions()
DEFAULT_READ_OPTIONS = ReadOptions()
DEFAULT_UPDATE_OPTIONS = UpdateOptions()
DEFAULT_REMOVE_OPTIONS = RemoveOptions()
DEFAULT_EXEC_OPTIONS = ExecOptions()
