"""
Storage backends.

- Backend: the abstract interface every backend implements
- InMemoryBackend: dict-based storage for tests and prototyping
"""

from rev_models.backends.base import BACKEND_METHODS, Backend, check_backend
from rev_models.backends.inmemory import InMemoryBackend, InMemoryQuery

__all__ = ["BACKEND_METHODS", "Backend", "InMemoryBackend", "InMemoryQuery", "check_backend"]
