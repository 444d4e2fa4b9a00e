"""
Field types for rev_models.

Each field class declares a FieldKind and builds its validator list from its
options when constructed.
"""

from rev_models.fields.datetimefields import DateField, DateTimeField, TimeField
from rev_models.fields.field import AsyncFieldValidator, Field, FieldKind
from rev_models.fields.numberfields import AutoNumberField, IntegerField, NumberField
from rev_models.fields.options import (
    DEFAULT_FIELD_OPTIONS,
    AutoNumberFieldOptions,
    FieldOptions,
    NumberFieldOptions,
    RecordFieldOptions,
    SelectionFieldOptions,
    TextFieldOptions,
)
from rev_models.fields.recordfields import RecordField, RecordListField
from rev_models.fields.selectionfields import BooleanField, SelectionField
from rev_models.fields.textfields import EmailField, PasswordField, TextField, URLField

__all__ = [
    "DEFAULT_FIELD_OPTIONS",
    "AsyncFieldValidator",
    "AutoNumberField",
    "AutoNumberFieldOptions",
    "BooleanField",
    "DateField",
    "DateTimeField",
    "EmailField",
    "Field",
    "FieldKind",
    "FieldOptions",
    "IntegerField",
    "NumberField",
    "NumberFieldOptions",
    "PasswordField",
    "RecordField",
    "RecordFieldOptions",
    "RecordListField",
    "SelectionField",
    "SelectionFieldOptions",
    "TextField",
    "TextFieldOptions",
    "TimeField",
    "URLField",
]
