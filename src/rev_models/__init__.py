"""
rev_models - declarative data models with validation and pluggable backends.

This package provides:
- Fields: typed, validated model attributes (rev_models.fields)
- Model / ModelMeta: model base class and metadata
- ModelRegistry: explicit registry of models and backends
- Operations: validate, create, read, update, remove, exec (rev_models.operations)
- Backends: the Backend interface and InMemoryBackend (rev_models.backends)
"""

from rev_models._version import get_version as _get_version

__version__ = _get_version()

from rev_models import fields
from rev_models.backends import Backend, InMemoryBackend
from rev_models.errors import (
    ArgumentError,
    BackendError,
    ConfigurationError,
    MetadataError,
    ModelError,
    ModelsError,
    NotFoundError,
    OperationError,
    QueryError,
    ValidationError,
    ValidationTimeoutError,
)
from rev_models.models import Model, ModelMeta
from rev_models.operations import ModelOperation, ModelOperationResult
from rev_models.registry import ModelRegistry
from rev_models.validation import ModelValidationResult

__all__ = [
    "ArgumentError",
    "Backend",
    "BackendError",
    "ConfigurationError",
    "InMemoryBackend",
    "MetadataError",
    "Model",
    "ModelError",
    "ModelMeta",
    "ModelOperation",
    "ModelOperationResult",
    "ModelRegistry",
    "ModelValidationResult",
    "ModelsError",
    "NotFoundError",
    "OperationError",
    "QueryError",
    "ValidationError",
    "ValidationTimeoutError",
    "fields",
]
