"""
Error types for model registration, validation, queries and backends.

Every error raised by rev_models derives from ModelsError. Several classes also
derive from the closest builtin exception so callers can catch them generically
(ModelError is a TypeError, NotFoundError is a LookupError, and so on).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from rev_models.operations.result import ModelOperationResult


class ModelsError(Exception):
    """Base exception for all rev_models errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        self.message = message
        self.context = context or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            details = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({details})"
        return self.message


class ConfigurationError(ModelsError):
    """
    Raised when models, fields or backends are set up incorrectly.

    Examples:
    - Duplicate model registration
    - Backend missing one of the required methods
    - Invalid environment configuration
    """

    pass


class ArgumentError(ConfigurationError, ValueError):
    """
    Raised when a constructor or call receives an invalid argument.

    Examples:
    - Field created without a name
    - Field options that are not a mapping
    - Missing backend name in register_backend()
    """

    pass


class ModelError(ConfigurationError, TypeError):
    """
    Raised when a value is not a model class or model instance.

    Examples:
    - Registering a plain function or non-Model class
    - Passing a dict to create() instead of a model instance
    """

    pass


class MetadataError(ModelsError):
    """
    Raised when model metadata is missing, incomplete or not yet initialised.

    Examples:
    - Model defines no fields
    - fields list contains non-Field entries
    - Model used in an operation before it was registered
    """

    pass


class NotFoundError(ModelsError, LookupError):
    """
    Raised when a named model or backend cannot be found.

    Examples:
    - get_model_meta("Unknown")
    - get_backend("mongo") before a backend called "mongo" is registered
    """

    pass


class QueryError(ModelsError, ValueError):
    """
    Raised when a where clause cannot be parsed.

    Examples:
    - Unknown field name
    - Unrecognised operator
    - Object passed where a scalar value is expected
    """

    pass


class BackendError(ModelsError):
    """
    Raised by a backend when it cannot carry out a request.

    Examples:
    - update() or remove() called without a where clause
    - Invalid limit or offset
    - exec() called on a backend with no server-side methods
    """

    pass


class ValidationTimeoutError(ModelsError, TimeoutError):
    """Raised when field or model validators do not finish within the timeout."""

    pass


class ValidationError(ModelsError):
    """
    Raised when an operation is rejected because the model failed validation.

    The operation result (with its ``validation`` attribute populated) is
    available as ``error.result``.
    """

    def __init__(self, result: ModelOperationResult[Any]):
        self.result = result
        super().__init__("ValidationError")


class OperationError(ModelsError):
    """
    Raised when a backend reports errors on an operation result.

    The operation result, including its ``errors`` list, is available as
    ``error.result``.
    """

    def __init__(self, result: ModelOperationResult[Any]):
        self.result = result
        messages = "; ".join(str(e.get("message")) for e in result.errors)
        super().__init__(f"OperationError: {result.operation.operation}() failed: {messages}")
