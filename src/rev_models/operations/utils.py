"""Helpers shared by the operation functions."""

from __future__ import annotations

from typing import Any

from rev_models.errors import ArgumentError, ConfigurationError
from rev_models.models.meta import ModelMeta
from rev_models.models.model import Model
from rev_models.utils import get_value, is_set


def get_model_primary_key_query(model: Model, meta: ModelMeta) -> dict[str, Any]:
    """
    Build a where clause matching the model's primary key values.

    Raises:
        ArgumentError: If the model has no primary key, or a key field is unset
    """
    if not meta.primary_key:
        raise ArgumentError(f"Model '{meta.name}' does not have a primary_key")
    query: dict[str, Any] = {}
    for field_name in meta.primary_key:
        value = get_value(model, field_name)
        if not is_set(value):
            raise ArgumentError(f"primary key field '{field_name}' is undefined")
        query[field_name] = value
    return query


def check_stored(meta: ModelMeta, operation: str) -> None:
    if not meta.stored:
        raise ConfigurationError(f"Cannot call {operation}() on models with stored: false")
