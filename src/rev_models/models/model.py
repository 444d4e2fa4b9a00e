"""
Model base class.

A model is a plain class whose instances hold field values as attributes.
Field definitions and other metadata are attached at registration time (see
ModelRegistry.register); the instance ``__dict__`` only ever holds values, so
anything in it that isn't a declared field is reported by validate() as an
extra field.

Subclasses may define ``validate(operation, result, options)`` and
``validate_async(operation, result, options)`` methods; validate() calls them
after the field validators.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar

from rev_models.errors import ArgumentError


class Model:
    """Base class for data models.

    Example:
        class Person(Model):
            __meta__ = {"fields": [TextField("name"), IntegerField("age")]}

        jane = Person(name="Jane", age=31)
    """

    __meta__: ClassVar[Any] = None

    def __init__(self, data: Mapping[str, Any] | None = None, **values: Any):
        if data is not None and not isinstance(data, Mapping):
            raise ArgumentError(f"{type(self).__name__}() data must be a mapping")
        for name, value in {**(data or {}), **values}.items():
            setattr(self, name, value)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return vars(self) == vars(other)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        values = ", ".join(f"{k}={v!r}" for k, v in vars(self).items())
        return f"{type(self).__name__}({values})"


def is_model_class(value: Any) -> bool:
    """Return True if value is a Model subclass (not an instance)."""
    return isinstance(value, type) and issubclass(value, Model)


def is_model_instance(value: Any) -> bool:
    """Return True if value is an instance of a Model subclass."""
    return isinstance(value, Model)
