"""Options accepted by validate() and Field.validate()."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from rev_models.config import get_config


class ValidationOptions(BaseModel):
    """Options for a validation run."""

    timeout: float = Field(
        default_factory=lambda: get_config().validation_timeout,
        gt=0,
        description="Seconds allowed before validation fails with a timeout",
    )

    model_config = ConfigDict(frozen=True, extra="allow")

    @classmethod
    def coerce(cls, options: ValidationOptions | Mapping[str, Any] | None) -> ValidationOptions:
        """Accept an options instance, a mapping or None."""
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        if isinstance(options, BaseModel):
            return cls.model_validate(options.model_dump(exclude_unset=True))
        return cls.model_validate(dict(options))
