"""Numeric fields: number, integer and auto-number."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar

from rev_models.fields.field import Field, FieldKind
from rev_models.fields.options import AutoNumberFieldOptions, FieldOptions, NumberFieldOptions
from rev_models.validation import validators


class NumberField(Field):
    """A numeric value. Numeric strings such as ``"34.5"`` are accepted."""

    kind: ClassVar[FieldKind] = FieldKind.NUMBER
    options_class: ClassVar[type[FieldOptions]] = NumberFieldOptions

    def __init__(self, name: str, options: FieldOptions | Mapping[str, Any] | None = None):
        super().__init__(name, options)
        self.validators.append(validators.number_validator)
        if self.options.min_value is not None:
            self.validators.append(validators.min_value_validator)
        if self.options.max_value is not None:
            self.validators.append(validators.max_value_validator)


class IntegerField(NumberField):
    """A whole number. The integer check runs straight after the required check."""

    kind: ClassVar[FieldKind] = FieldKind.INTEGER

    def __init__(self, name: str, options: FieldOptions | Mapping[str, Any] | None = None):
        super().__init__(name, options)
        position = 1 if self.options.required else 0
        self.validators.insert(position, validators.integer_validator)


class AutoNumberField(IntegerField):
    """
    An integer assigned by the backend when a record is created.

    Values supplied by the caller are ignored on create and never written on
    update. Not required by default, since new models have no value yet.
    """

    kind: ClassVar[FieldKind] = FieldKind.AUTO_NUMBER
    options_class: ClassVar[type[FieldOptions]] = AutoNumberFieldOptions
