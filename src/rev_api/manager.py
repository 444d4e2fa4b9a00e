"""
ModelApiManager: registry of the models exposed through an API layer.

API layers (GraphQL, HTTP) ask the manager which models and operations to
expose; the manager keeps the model registry the operations run against.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from rev_api.errors import ApiNotFoundError
from rev_api.meta import ApiMeta, initialise_api_meta
from rev_models.errors import ArgumentError
from rev_models.registry import ModelRegistry

logger = logging.getLogger(__name__)


class ModelApiManager:
    """API metadata for the models of one ModelRegistry."""

    def __init__(self, registry: ModelRegistry):
        if not isinstance(registry, ModelRegistry):
            raise ArgumentError("ModelApiManager: invalid ModelRegistry passed in constructor")
        self.registry = registry
        self._api_meta: dict[str, ApiMeta] = {}

    def get_registry(self) -> ModelRegistry:
        return self.registry

    def is_registered(self, model_name: Any) -> bool:
        return isinstance(model_name, str) and model_name in self._api_meta

    def register(self, model_name: str, definition: Mapping[str, Any]) -> ApiMeta:
        """
        Expose a registered model through the API.

        Raises:
            NotFoundError: If the model is not in the registry
            ApiMetadataError: If the definition is invalid
        """
        model_meta = self.registry.get_model_meta(model_name)
        api_meta = initialise_api_meta(model_meta, definition)
        self._api_meta[model_name] = api_meta
        logger.debug("Registered API for %s: %s", model_name, list(api_meta.methods))
        return api_meta

    def get_model_names(self) -> list[str]:
        return list(self._api_meta)

    def get_model_names_by_operation(self, operation_name: str) -> list[str]:
        """Names of models whose API exposes ``operation_name``."""
        return [
            name for name, meta in self._api_meta.items() if operation_name in meta.methods
        ]

    def get_api_meta(self, model_name: str) -> ApiMeta:
        if model_name not in self._api_meta:
            raise ApiNotFoundError(f"Model '{model_name}' does not have a registered API")
        return self._api_meta[model_name]

    def clear(self) -> None:
        self._api_meta.clear()
