"""
Model base class and model metadata.
"""

from rev_models.models.model import Model, is_model_class, is_model_instance
from rev_models.models.meta import ModelMeta, check_metadata_initialised, initialise_meta

__all__ = [
    "Model",
    "ModelMeta",
    "check_metadata_initialised",
    "initialise_meta",
    "is_model_class",
    "is_model_instance",
]
