"""
Model metadata.

ModelMeta describes a registered model: its fields, backend, and behaviour
flags. Definitions (a ModelMeta or a plain mapping, usually taken from the
model's ``__meta__`` attribute) are turned into a complete, initialised
ModelMeta by initialise_meta() when the model is registered.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from rev_models.config import get_config
from rev_models.errors import MetadataError

if TYPE_CHECKING:
    from rev_models.fields.field import Field
    from rev_models.models.model import Model
    from rev_models.operations.operation import ModelOperation
    from rev_models.validation.result import ModelValidationResult

ModelValidateHook = Callable[
    ["Model", "ModelOperation", "ModelValidationResult", Any], None
]
ModelValidateAsyncHook = Callable[
    ["Model", "ModelOperation", "ModelValidationResult", Any], Awaitable[None]
]


@dataclass
class ModelMeta:
    """Metadata for a model class.

    Attributes:
        fields: Ordered field definitions
        name: Model name (always the class name once initialised)
        label: Human-readable name, defaults to ``name``
        backend: Name of the backend that stores this model
        singleton: True if the model has exactly one record (no where clauses on read)
        stored: False for models that are never persisted (create() is refused)
        primary_key: Names of the primary key fields
        validate: Optional model-level validation hook
        validate_async: Optional asynchronous model-level validation hook
        ctor: The model class, set at registration
        fields_by_name: Lookup built from ``fields`` at registration
    """

    fields: list[Field] = field(default_factory=list)
    name: str | None = None
    label: str | None = None
    backend: str | None = None
    singleton: bool = False
    stored: bool = True
    primary_key: list[str] | None = None
    validate: ModelValidateHook | None = None
    validate_async: ModelValidateAsyncHook | None = None
    ctor: type[Model] | None = None
    fields_by_name: dict[str, Field] = field(default_factory=dict)
    initialised: bool = False

    @classmethod
    def from_definition(cls, definition: ModelMeta | Mapping[str, Any] | None) -> ModelMeta:
        """Build a ModelMeta from a ModelMeta, a mapping or None."""
        if definition is None:
            return cls()
        if isinstance(definition, ModelMeta):
            return dataclasses.replace(definition)
        if not isinstance(definition, Mapping):
            raise MetadataError("MetadataError: model metadata must be a mapping or ModelMeta")
        known = {f.name for f in dataclasses.fields(cls)} - {"ctor", "fields_by_name", "initialised"}
        unknown = sorted(set(definition) - known)
        if unknown:
            raise MetadataError(
                f"MetadataError: unrecognised model metadata key(s): {', '.join(unknown)}"
            )
        values = dict(definition)
        if "fields" in values:
            fields_value = values["fields"]
            if not isinstance(fields_value, (list, tuple)):
                raise MetadataError("MetadataError: 'fields' must be a list of Field objects")
            values["fields"] = list(fields_value)
        return cls(**values)


def initialise_meta(ctor: type[Model], definition: ModelMeta | Mapping[str, Any] | None) -> ModelMeta:
    """
    Complete a metadata definition for ``ctor``.

    Fills in name, label, backend and primary key defaults and builds
    ``fields_by_name``.

    Raises:
        MetadataError: If there are no fields, a non-Field entry, duplicate
            field names, a mismatched name or an unknown primary key field.
    """
    from rev_models.fields.field import Field

    meta = ModelMeta.from_definition(definition)
    model_name = ctor.__name__

    if meta.name is not None and meta.name != model_name:
        raise MetadataError(
            f"MetadataError: meta.name '{meta.name}' does not match the model class name "
            f"'{model_name}'. Model names cannot be overridden."
        )
    if not meta.fields:
        raise MetadataError(f"MetadataError: Model '{model_name}' must define at least one field")

    fields_by_name: dict[str, Field] = {}
    for entry in meta.fields:
        if not isinstance(entry, Field):
            raise MetadataError(
                f"MetadataError: Model '{model_name}' fields list contains an entry "
                f"that is not a Field: {entry!r}"
            )
        if entry.name in fields_by_name:
            raise MetadataError(
                f"MetadataError: Model '{model_name}' defines field '{entry.name}' more than once"
            )
        fields_by_name[entry.name] = entry

    if meta.primary_key is None:
        primary_key = [f.name for f in meta.fields if f.options.primary_key]
    else:
        primary_key = list(meta.primary_key)
    for key in primary_key:
        if key not in fields_by_name:
            raise MetadataError(
                f"MetadataError: primary key field '{key}' does not exist in model '{model_name}'"
            )

    return dataclasses.replace(
        meta,
        name=model_name,
        label=meta.label or model_name,
        backend=meta.backend or get_config().default_backend,
        primary_key=primary_key,
        ctor=ctor,
        fields_by_name=fields_by_name,
        initialised=True,
    )


def check_metadata_initialised(meta: ModelMeta | None) -> None:
    """Raise MetadataError unless ``meta`` came from initialise_meta()."""
    if meta is None or not meta.initialised or meta.ctor is None:
        raise MetadataError(
            "MetadataError: Model metadata has not been initialised. "
            "Register the model with a ModelRegistry first."
        )
