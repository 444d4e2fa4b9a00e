"""
Model registry.

A ModelRegistry holds the models and backends for one application. There is
no global registry: create one and pass it to every operation.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from rev_models.backends.base import Backend, check_backend
from rev_models.errors import ArgumentError, ConfigurationError, MetadataError, ModelError, NotFoundError
from rev_models.models.meta import ModelMeta, initialise_meta
from rev_models.models.model import Model, is_model_class, is_model_instance

logger = logging.getLogger(__name__)


class ModelRegistry:
    """
    Registry of models and the backends that store them.

    Example:
        registry = ModelRegistry()
        registry.register_backend("default", InMemoryBackend())
        registry.register(Person)
        meta = registry.get_model_meta("Person")
    """

    def __init__(self) -> None:
        self._models: dict[str, ModelMeta] = {}
        self._backends: dict[str, Backend] = {}

    # =========================================================================
    # Models
    # =========================================================================

    def is_registered(self, model_name: Any) -> bool:
        return isinstance(model_name, str) and model_name in self._models

    def register(
        self,
        model: type[Model],
        meta: ModelMeta | Mapping[str, Any] | None = None,
    ) -> ModelMeta:
        """
        Register a model class.

        Metadata comes from ``meta`` if given, otherwise from the class's
        ``__meta__`` attribute.

        Returns:
            The initialised ModelMeta

        Raises:
            ModelError: If ``model`` is not a Model subclass
            ConfigurationError: If a model with the same name is already registered
            MetadataError: If the metadata is invalid (e.g. no fields)
        """
        if not is_model_class(model):
            raise ModelError("ModelError: registry.register() - 'model' must be a Model subclass")
        model_name = model.__name__
        if self.is_registered(model_name):
            raise ConfigurationError(f"Model '{model_name}' already exists in the registry.")

        definition = meta if meta is not None else model.__meta__
        initialised = initialise_meta(model, definition)
        self._models[model_name] = initialised

        logger.debug(
            "Registered model %s (backend=%s, fields=%s)",
            model_name,
            initialised.backend,
            [f.name for f in initialised.fields],
        )
        return initialised

    def get_model_names(self) -> list[str]:
        return list(self._models)

    def get_model_meta(self, model: str | type[Model] | Model) -> ModelMeta:
        """
        Look up metadata by model name, model class or model instance.

        Raises:
            NotFoundError: If no model with that name is registered
            MetadataError: If a model class or instance is not registered
        """
        if isinstance(model, str):
            if model not in self._models:
                raise NotFoundError(f"Model '{model}' does not exist in the registry.")
            return self._models[model]

        if is_model_class(model):
            model_name = model.__name__
        elif is_model_instance(model):
            model_name = type(model).__name__
        else:
            raise ModelError("ModelError: get_model_meta() - value is not a model or model name")

        meta = self._models.get(model_name)
        if meta is None:
            raise MetadataError(f"MetadataError: Model '{model_name}' does not exist in the registry.")
        return meta

    # =========================================================================
    # Backends
    # =========================================================================

    def is_backend_registered(self, backend_name: Any) -> bool:
        return isinstance(backend_name, str) and backend_name in self._backends

    def register_backend(self, backend_name: str, backend: Any) -> None:
        """
        Register a backend instance under ``backend_name``.

        Raises:
            ArgumentError: If the name is missing or ``backend`` is a class
            ConfigurationError: If the backend lacks one of the required methods
        """
        if not backend_name or not isinstance(backend_name, str):
            raise ArgumentError("register_backend(): you must specify a name for the backend")
        if backend is None or isinstance(backend, type):
            raise ArgumentError("register_backend(): you must pass an instance of a backend class")
        missing = check_backend(backend)
        if missing:
            raise ConfigurationError(
                "register_backend(): the specified backend does not fully implement "
                f"the IBackend interface (missing: {', '.join(missing)})"
            )
        self._backends[backend_name] = backend
        logger.debug("Registered backend '%s' (%s)", backend_name, type(backend).__name__)

    def get_backend(self, backend_name: str) -> Backend:
        """
        Get a backend by name.

        Raises:
            ArgumentError: If no name is given
            NotFoundError: If no backend with that name is registered
        """
        if not backend_name:
            raise ArgumentError("get_backend(): you must specify the name of the backend to get")
        if backend_name not in self._backends:
            raise NotFoundError(f"get_backend(): Backend '{backend_name}' has not been configured")
        return self._backends[backend_name]

    def get_backend_names(self) -> list[str]:
        return list(self._backends)

    def get_backend_for(self, model: str | type[Model] | Model) -> Backend:
        """Return the backend configured for a model."""
        meta = self.get_model_meta(model)
        return self.get_backend(meta.backend or "")

    def clear(self) -> None:
        """Remove all models and backends."""
        self._models.clear()
        self._backends.clear()
