"""
Field option models.

Options are immutable pydantic models. Fields accept either an options
instance or a plain mapping, which is validated against the field's options
class (unknown keys are rejected).
"""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# =============================================================================
# Common Options
# =============================================================================


class FieldOptions(BaseModel):
    """Options shared by every field type."""

    label: str | None = Field(default=None, description="Display label, defaults to field name")
    required: bool = Field(default=True, description="Value must be set (not None)")
    primary_key: bool = Field(default=False, description="Field is part of the primary key")
    default: Any = Field(default=None, description="Default value for new records")

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)


DEFAULT_FIELD_OPTIONS = FieldOptions()


# =============================================================================
# Type-specific Options
# =============================================================================


class TextFieldOptions(FieldOptions):
    """Options for text-based fields (text, email, URL, password)."""

    min_length: int | None = Field(default=None, ge=0, description="Minimum string length")
    max_length: int | None = Field(default=None, ge=0, description="Maximum string length")
    min_value: str | None = Field(default=None, description="Lowest allowed value (string order)")
    max_value: str | None = Field(default=None, description="Highest allowed value (string order)")
    regex: str | None = Field(default=None, description="Pattern the value must contain a match for")
    multiline: bool = Field(default=False, description="Hint for UIs: value may span lines")

    @field_validator("regex")
    @classmethod
    def validate_regex(cls, v: str | None) -> str | None:
        """Ensure the pattern compiles."""
        if v is not None:
            try:
                re.compile(v)
            except re.error as e:
                raise ValueError(f"invalid regex '{v}': {e}") from e
        return v


class NumberFieldOptions(FieldOptions):
    """Options for number and integer fields."""

    min_value: int | float | None = Field(default=None, description="Lowest allowed value")
    max_value: int | float | None = Field(default=None, description="Highest allowed value")


class AutoNumberFieldOptions(NumberFieldOptions):
    """Options for auto-number fields. Values come from the backend, never the caller."""

    required: bool = Field(default=False, description="Auto-numbers are assigned on create")


class SelectionFieldOptions(FieldOptions):
    """Options for selection fields.

    ``selection`` is a list of ``[key, label]`` pairs.
    """

    selection: list[tuple[Any, str]] = Field(
        default=None,  # type: ignore[assignment]
        validate_default=True,
        description="Allowed [key, label] pairs",
    )
    multiple: bool = Field(default=False, description="Value is a list of keys")

    @field_validator("selection", mode="before")
    @classmethod
    def validate_selection(cls, v: Any) -> Any:
        """Ensure selection is a list of two-item [key, label] entries."""
        if not isinstance(v, (list, tuple)):
            raise ValueError('"selection" parameter must be an array')
        for entry in v:
            if not isinstance(entry, (list, tuple)) or len(entry) != 2:
                raise ValueError(
                    f'"selection" entry {entry!r} should be an array with two items'
                )
        return [tuple(entry) for entry in v]


class RecordFieldOptions(FieldOptions):
    """Options for fields holding related model instances."""

    model: str = Field(
        default=None,  # type: ignore[assignment]
        validate_default=True,
        description="Name of the related model class",
    )

    @field_validator("model", mode="before")
    @classmethod
    def validate_model(cls, v: Any) -> Any:
        """Ensure model is a non-empty string."""
        if not isinstance(v, str) or not v:
            raise ValueError("options.model must be a non-empty string")
        return v
