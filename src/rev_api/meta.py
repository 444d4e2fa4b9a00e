"""
API metadata.

Describes which operations of a model are exposed through an API layer,
plus any custom methods with their argument fields and handler.

A definition's ``methods`` may be:
- ``"all"``: every built-in operation
- a list of built-in operation names
- a mapping of name to ``True`` (built-in operation) or ApiMethod (custom)
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from rev_api.errors import ApiMetadataError
from rev_models.fields import Field
from rev_models.models.meta import ModelMeta, check_metadata_initialised

MODEL_OPERATIONS: tuple[str, ...] = ("create", "read", "update", "remove")


@dataclass
class ApiMethod:
    """A custom API method: the fields it takes and the function that runs it."""

    args: list[Field | str]
    handler: Callable[..., Any]


@dataclass
class ApiMeta:
    """Initialised API metadata for one model."""

    model: str
    methods: dict[str, ApiMethod | bool] = field(default_factory=dict)

    @property
    def operations(self) -> list[str]:
        """Built-in operations exposed for the model."""
        return [name for name, method in self.methods.items() if method is True]


def initialise_api_meta(model_meta: ModelMeta, definition: Mapping[str, Any] | None) -> ApiMeta:
    """
    Validate an API definition against a model's metadata.

    String arguments of custom methods are resolved to the model's Field
    objects.

    Raises:
        MetadataError: If model_meta is not initialised
        ApiMetadataError: If the definition is invalid
    """
    check_metadata_initialised(model_meta)

    methods_def = definition.get("methods") if isinstance(definition, Mapping) else None
    if not methods_def or not (methods_def == "all" or isinstance(methods_def, (list, tuple, Mapping))):
        raise ApiMetadataError("API metadata must include a valid 'methods' key")

    if methods_def == "all":
        raw_methods: dict[str, Any] = {name: True for name in MODEL_OPERATIONS}
    elif isinstance(methods_def, (list, tuple)):
        raw_methods = {name: True for name in methods_def}
    else:
        raw_methods = dict(methods_def)

    methods: dict[str, ApiMethod | bool] = {}
    for name, method in raw_methods.items():
        if method is True:
            if name not in MODEL_OPERATIONS:
                raise ApiMetadataError(f"Method '{name}' is not recognised")
            methods[name] = True
        elif isinstance(method, ApiMethod):
            methods[name] = _initialise_method(model_meta, method)
        elif isinstance(method, Mapping):
            methods[name] = _initialise_method(
                model_meta, ApiMethod(args=method.get("args"), handler=method.get("handler"))  # type: ignore[arg-type]
            )
        else:
            raise ApiMetadataError(f"Invalid method definition for '{name}'")

    return ApiMeta(model=model_meta.name or "", methods=methods)


def _initialise_method(model_meta: ModelMeta, method: ApiMethod) -> ApiMethod:
    if not isinstance(method.args, (list, tuple)) or not callable(method.handler):
        raise ApiMetadataError(
            "Custom API methods must define an args list and a handler function"
        )
    args: list[Field | str] = []
    for arg in method.args:
        if isinstance(arg, str):
            if arg not in model_meta.fields_by_name:
                raise ApiMetadataError(
                    f"Field '{arg}' does not exist in model '{model_meta.name}'"
                )
            args.append(model_meta.fields_by_name[arg])
        elif isinstance(arg, Field):
            args.append(arg)
        else:
            raise ApiMetadataError(
                "API method args must either be a Field or the name of a field on the model"
            )
    return ApiMethod(args=args, handler=method.handler)
