from rev_models.backends.inmemory.backend import InMemoryBackend
from rev_models.backends.inmemory.query import InMemoryQuery

__all__ = ["InMemoryBackend", "InMemoryQuery"]
