"""Boolean and selection fields."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar

from rev_models.fields.field import Field, FieldKind
from rev_models.fields.options import FieldOptions, SelectionFieldOptions
from rev_models.validation import validators


class BooleanField(Field):
    kind: ClassVar[FieldKind] = FieldKind.BOOLEAN

    def __init__(self, name: str, options: FieldOptions | Mapping[str, Any] | None = None):
        super().__init__(name, options)
        self.validators.append(validators.boolean_validator)


class SelectionField(Field):
    """
    A value chosen from a fixed list of ``[key, label]`` pairs.

    With ``multiple=True`` the value is a list of keys.
    """

    kind: ClassVar[FieldKind] = FieldKind.SELECTION
    options_class: ClassVar[type[FieldOptions]] = SelectionFieldOptions

    def __init__(self, name: str, options: FieldOptions | Mapping[str, Any] | None = None):
        super().__init__(name, options)
        opts = self.options
        if opts.required:
            if opts.multiple:
                self.validators.append(validators.list_empty_validator)
            else:
                self.validators.append(validators.string_empty_validator)
        if opts.multiple:
            self.validators.append(validators.multiple_selection_validator)
        else:
            self.validators.append(validators.single_selection_validator)
