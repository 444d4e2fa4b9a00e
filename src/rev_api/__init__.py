"""
rev_api - API metadata for rev_models.

Records which models, operations and custom methods an API layer should
expose. Transport layers (GraphQL, HTTP) build on ModelApiManager.
"""

from rev_api.errors import ApiMetadataError, ApiNotFoundError
from rev_api.manager import ModelApiManager
from rev_api.meta import MODEL_OPERATIONS, ApiMeta, ApiMethod, initialise_api_meta

__all__ = [
    "MODEL_OPERATIONS",
    "ApiMeta",
    "ApiMetadataError",
    "ApiMethod",
    "ApiNotFoundError",
    "ModelApiManager",
    "initialise_api_meta",
]
