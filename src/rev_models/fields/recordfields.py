"""Fields that hold instances of other models."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar

from rev_models.fields.field import Field, FieldKind
from rev_models.fields.options import FieldOptions, RecordFieldOptions
from rev_models.validation import validators


class RecordField(Field):
    """A single related record. ``options.model`` names the related model class."""

    kind: ClassVar[FieldKind] = FieldKind.RECORD
    options_class: ClassVar[type[FieldOptions]] = RecordFieldOptions

    def __init__(self, name: str, options: FieldOptions | Mapping[str, Any] | None = None):
        super().__init__(name, options)
        self.validators.append(validators.record_class_validator)


class RecordListField(Field):
    """A list of related records, all instances of ``options.model``."""

    kind: ClassVar[FieldKind] = FieldKind.RECORD_LIST
    options_class: ClassVar[type[FieldOptions]] = RecordFieldOptions

    def __init__(self, name: str, options: FieldOptions | Mapping[str, Any] | None = None):
        super().__init__(name, options)
        self.validators.append(validators.record_list_class_validator)
