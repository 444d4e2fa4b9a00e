"""Text-based fields: text, email, URL and password."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar

from rev_models.fields.field import Field, FieldKind
from rev_models.fields.options import FieldOptions, TextFieldOptions
from rev_models.validation import validators


class TextField(Field):
    """A string value, optionally constrained by length, range and pattern."""

    kind: ClassVar[FieldKind] = FieldKind.TEXT
    options_class: ClassVar[type[FieldOptions]] = TextFieldOptions

    def __init__(self, name: str, options: FieldOptions | Mapping[str, Any] | None = None):
        super().__init__(name, options)
        opts = self.options
        self.validators.append(validators.string_validator)
        if opts.required:
            self.validators.append(validators.string_empty_validator)
        if opts.min_length is not None:
            self.validators.append(validators.min_string_length_validator)
        if opts.max_length is not None:
            self.validators.append(validators.max_string_length_validator)
        if opts.min_value is not None:
            self.validators.append(validators.min_value_validator)
        if opts.max_value is not None:
            self.validators.append(validators.max_value_validator)
        if opts.regex is not None:
            self.validators.append(validators.regex_validator)


class EmailField(TextField):
    kind: ClassVar[FieldKind] = FieldKind.EMAIL

    def __init__(self, name: str, options: FieldOptions | Mapping[str, Any] | None = None):
        super().__init__(name, options)
        self.validators.append(validators.email_validator)


class URLField(TextField):
    kind: ClassVar[FieldKind] = FieldKind.URL

    def __init__(self, name: str, options: FieldOptions | Mapping[str, Any] | None = None):
        super().__init__(name, options)
        self.validators.append(validators.url_validator)


class PasswordField(TextField):
    kind: ClassVar[FieldKind] = FieldKind.PASSWORD
