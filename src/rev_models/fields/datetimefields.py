"""
Date and time fields.

Values may be Python objects (``date``, ``time``, ``datetime``) or ISO strings
in exactly these forms:

- DateField: ``YYYY-MM-DD``
- TimeField: ``HH:MM:SS``
- DateTimeField: ``YYYY-MM-DDTHH:MM:SS`` (no fractional seconds, no zone)
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar

from rev_models.fields.field import Field, FieldKind
from rev_models.fields.options import FieldOptions
from rev_models.validation import validators


class DateField(Field):
    kind: ClassVar[FieldKind] = FieldKind.DATE

    def __init__(self, name: str, options: FieldOptions | Mapping[str, Any] | None = None):
        super().__init__(name, options)
        self.validators.append(validators.date_only_validator)


class TimeField(Field):
    kind: ClassVar[FieldKind] = FieldKind.TIME

    def __init__(self, name: str, options: FieldOptions | Mapping[str, Any] | None = None):
        super().__init__(name, options)
        self.validators.append(validators.time_only_validator)


class DateTimeField(Field):
    kind: ClassVar[FieldKind] = FieldKind.DATETIME

    def __init__(self, name: str, options: FieldOptions | Mapping[str, Any] | None = None):
        super().__init__(name, options)
        self.validators.append(validators.datetime_validator)
