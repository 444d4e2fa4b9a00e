"""
Synchronous field validators.

Every validator has the signature::

    validator(model, field, meta, operation, result, options=None) -> None

and reports problems by calling ``result.add_field_error(field.name, message, code)``
with the validator's error code. All validators except ``required_validator``
(and the None case of ``record_list_class_validator``) pass when the value is
unset or None, so type checks never duplicate a "required" error.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable
from datetime import date, datetime, time
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from rev_models.models.model import Model
from rev_models.utils import UNSET, get_value, is_set
from rev_models.validation import messages as msg

if TYPE_CHECKING:
    from rev_models.fields.field import Field
    from rev_models.models.meta import ModelMeta
    from rev_models.operations.operation import ModelOperation
    from rev_models.validation.result import ModelValidationResult

FieldValidator = Callable[
    [Any, "Field", "ModelMeta", "ModelOperation", "ModelValidationResult", Any], None
]

DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}\Z")
TIME_RE = re.compile(r"^\d{2}:\d{2}:\d{2}\Z")
DATETIME_RE = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\Z")
INTEGER_RE = re.compile(r"^-?\d+\Z")
EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+\Z")
URL_RE = re.compile(r"^(https?|ftp)://[^\s/$.?#][^\s]*\Z", re.IGNORECASE)


# =============================================================================
# Presence
# =============================================================================


def required_validator(
    model: Any,
    field: Field,
    meta: ModelMeta,
    operation: ModelOperation,
    result: ModelValidationResult,
    options: Any = None,
) -> None:
    if not is_set(get_value(model, field.name)):
        result.add_field_error(field.name, msg.required(field.label), "required")


# =============================================================================
# Strings
# =============================================================================


def string_validator(
    model: Any,
    field: Field,
    meta: ModelMeta,
    operation: ModelOperation,
    result: ModelValidationResult,
    options: Any = None,
) -> None:
    value = get_value(model, field.name)
    if is_set(value) and not isinstance(value, str):
        result.add_field_error(field.name, msg.not_a_string(field.label), "not_a_string")


def string_empty_validator(
    model: Any,
    field: Field,
    meta: ModelMeta,
    operation: ModelOperation,
    result: ModelValidationResult,
    options: Any = None,
) -> None:
    # Whitespace-only strings are a value; only "" counts as empty
    value = get_value(model, field.name)
    if isinstance(value, str) and value == "":
        result.add_field_error(field.name, msg.string_empty(field.label), "string_empty")


def regex_validator(
    model: Any,
    field: Field,
    meta: ModelMeta,
    operation: ModelOperation,
    result: ModelValidationResult,
    options: Any = None,
) -> None:
    value = get_value(model, field.name)
    pattern = getattr(field.options, "regex", None)
    if not is_set(value) or pattern is None:
        return
    if not re.search(pattern, str(value)):
        result.add_field_error(field.name, msg.no_regex_match(field.label), "no_regex_match")


def email_validator(
    model: Any,
    field: Field,
    meta: ModelMeta,
    operation: ModelOperation,
    result: ModelValidationResult,
    options: Any = None,
) -> None:
    value = get_value(model, field.name)
    if is_set(value) and not (isinstance(value, str) and EMAIL_RE.match(value)):
        result.add_field_error(field.name, msg.not_an_email(field.label), "not_an_email")


def url_validator(
    model: Any,
    field: Field,
    meta: ModelMeta,
    operation: ModelOperation,
    result: ModelValidationResult,
    options: Any = None,
) -> None:
    value = get_value(model, field.name)
    if is_set(value) and not (isinstance(value, str) and URL_RE.match(value)):
        result.add_field_error(field.name, msg.not_a_url(field.label), "not_a_url")


def min_string_length_validator(
    model: Any,
    field: Field,
    meta: ModelMeta,
    operation: ModelOperation,
    result: ModelValidationResult,
    options: Any = None,
) -> None:
    value = get_value(model, field.name)
    min_length = field.options.min_length
    if isinstance(value, str) and len(value) < min_length:
        result.add_field_error(
            field.name, msg.min_string_length(field.label, min_length), "min_string_length"
        )


def max_string_length_validator(
    model: Any,
    field: Field,
    meta: ModelMeta,
    operation: ModelOperation,
    result: ModelValidationResult,
    options: Any = None,
) -> None:
    value = get_value(model, field.name)
    max_length = field.options.max_length
    if isinstance(value, str) and len(value) > max_length:
        result.add_field_error(
            field.name, msg.max_string_length(field.label, max_length), "max_string_length"
        )


# =============================================================================
# Numbers and booleans
# =============================================================================


def _as_number(value: Any) -> float | None:
    """Numeric reading of a value, or None when it is not a number."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return float(value)
    if isinstance(value, Decimal):
        return None if value.is_nan() else float(value)
    if isinstance(value, float):
        return None if math.isnan(value) else value
    if isinstance(value, str):
        if value.strip() == "":
            return None
        try:
            number = float(value)
        except ValueError:
            return None
        return None if math.isnan(number) else number
    return None


def number_validator(
    model: Any,
    field: Field,
    meta: ModelMeta,
    operation: ModelOperation,
    result: ModelValidationResult,
    options: Any = None,
) -> None:
    value = get_value(model, field.name)
    if is_set(value) and _as_number(value) is None:
        result.add_field_error(field.name, msg.not_a_number(field.label), "not_a_number")


def integer_validator(
    model: Any,
    field: Field,
    meta: ModelMeta,
    operation: ModelOperation,
    result: ModelValidationResult,
    options: Any = None,
) -> None:
    value = get_value(model, field.name)
    if not is_set(value):
        return
    if isinstance(value, bool):
        valid = False
    elif isinstance(value, int):
        valid = True
    elif isinstance(value, (float, Decimal)):
        valid = math.isfinite(value) and value == int(value)
    elif isinstance(value, str):
        valid = bool(INTEGER_RE.match(value))
    else:
        valid = False
    if not valid:
        result.add_field_error(field.name, msg.not_an_integer(field.label), "not_an_integer")


def boolean_validator(
    model: Any,
    field: Field,
    meta: ModelMeta,
    operation: ModelOperation,
    result: ModelValidationResult,
    options: Any = None,
) -> None:
    value = get_value(model, field.name)
    if is_set(value) and not isinstance(value, bool):
        result.add_field_error(field.name, msg.not_a_boolean(field.label), "not_a_boolean")


def _compare(value: Any, bound: Any) -> int | None:
    """Three-way compare value with bound; None when the two can't be ordered."""
    if _as_number(bound) is not None and not isinstance(bound, str):
        number = _as_number(value)
        if number is None:
            return None
        left, right = number, float(bound)
    elif isinstance(bound, str) and isinstance(value, str):
        left, right = value, bound
    else:
        try:
            return (value > bound) - (value < bound)
        except TypeError:
            return None
    return (left > right) - (left < right)


def min_value_validator(
    model: Any,
    field: Field,
    meta: ModelMeta,
    operation: ModelOperation,
    result: ModelValidationResult,
    options: Any = None,
) -> None:
    value = get_value(model, field.name)
    bound = field.options.min_value
    if is_set(value) and (_compare(value, bound) or 0) < 0:
        result.add_field_error(field.name, msg.min_value(field.label, bound), "min_value")


def max_value_validator(
    model: Any,
    field: Field,
    meta: ModelMeta,
    operation: ModelOperation,
    result: ModelValidationResult,
    options: Any = None,
) -> None:
    value = get_value(model, field.name)
    bound = field.options.max_value
    if is_set(value) and (_compare(value, bound) or 0) > 0:
        result.add_field_error(field.name, msg.max_value(field.label, bound), "max_value")


# =============================================================================
# Selections
# =============================================================================


def _selection_keys(field: Field) -> list[Any]:
    return [key for key, _label in field.options.selection]


def single_selection_validator(
    model: Any,
    field: Field,
    meta: ModelMeta,
    operation: ModelOperation,
    result: ModelValidationResult,
    options: Any = None,
) -> None:
    value = get_value(model, field.name)
    if not is_set(value):
        return
    if isinstance(value, (list, dict)) or value not in _selection_keys(field):
        result.add_field_error(
            field.name, msg.no_selection_match(field.label), "no_selection_match"
        )


def list_empty_validator(
    model: Any,
    field: Field,
    meta: ModelMeta,
    operation: ModelOperation,
    result: ModelValidationResult,
    options: Any = None,
) -> None:
    value = get_value(model, field.name)
    if isinstance(value, list) and len(value) == 0:
        result.add_field_error(field.name, msg.list_empty(field.label), "list_empty")


def multiple_selection_validator(
    model: Any,
    field: Field,
    meta: ModelMeta,
    operation: ModelOperation,
    result: ModelValidationResult,
    options: Any = None,
) -> None:
    value = get_value(model, field.name)
    if not is_set(value):
        return
    if not isinstance(value, list):
        result.add_field_error(
            field.name, msg.selection_not_an_array(field.label), "selection_not_an_array"
        )
        return
    keys = _selection_keys(field)
    for item in value:
        if isinstance(item, (list, dict)) or item not in keys:
            result.add_field_error(
                field.name, msg.no_selection_match(field.label), "no_selection_match"
            )
            break


# =============================================================================
# Dates and times
# =============================================================================


def _parses(pattern: re.Pattern[str], parse: Callable[[str], Any], value: str) -> bool:
    if not pattern.match(value):
        return False
    try:
        parse(value)
    except ValueError:
        return False
    return True


def date_only_validator(
    model: Any,
    field: Field,
    meta: ModelMeta,
    operation: ModelOperation,
    result: ModelValidationResult,
    options: Any = None,
) -> None:
    value = get_value(model, field.name)
    if not is_set(value):
        return
    if isinstance(value, datetime):
        valid = False
    elif isinstance(value, date):
        valid = True
    elif isinstance(value, str):
        valid = _parses(DATE_RE, date.fromisoformat, value)
    else:
        valid = False
    if not valid:
        result.add_field_error(field.name, msg.not_a_date(field.label), "not_a_date")


def time_only_validator(
    model: Any,
    field: Field,
    meta: ModelMeta,
    operation: ModelOperation,
    result: ModelValidationResult,
    options: Any = None,
) -> None:
    value = get_value(model, field.name)
    if not is_set(value):
        return
    if isinstance(value, time):
        valid = True
    elif isinstance(value, str):
        valid = _parses(TIME_RE, time.fromisoformat, value)
    else:
        valid = False
    if not valid:
        result.add_field_error(field.name, msg.not_a_time(field.label), "not_a_time")


def datetime_validator(
    model: Any,
    field: Field,
    meta: ModelMeta,
    operation: ModelOperation,
    result: ModelValidationResult,
    options: Any = None,
) -> None:
    value = get_value(model, field.name)
    if not is_set(value):
        return
    if isinstance(value, datetime):
        valid = True
    elif isinstance(value, str):
        valid = _parses(DATETIME_RE, datetime.fromisoformat, value)
    else:
        valid = False
    if not valid:
        result.add_field_error(field.name, msg.not_a_datetime(field.label), "not_a_datetime")


# =============================================================================
# Related records
# =============================================================================


def _is_record_of(value: Any, model_name: str) -> bool:
    return isinstance(value, Model) and any(
        cls.__name__ == model_name for cls in type(value).__mro__
    )


def record_class_validator(
    model: Any,
    field: Field,
    meta: ModelMeta,
    operation: ModelOperation,
    result: ModelValidationResult,
    options: Any = None,
) -> None:
    value = get_value(model, field.name)
    if is_set(value) and not _is_record_of(value, field.options.model):
        result.add_field_error(
            field.name, msg.invalid_record_class(field.label), "invalid_record_class"
        )


def record_list_class_validator(
    model: Any,
    field: Field,
    meta: ModelMeta,
    operation: ModelOperation,
    result: ModelValidationResult,
    options: Any = None,
) -> None:
    # Unassigned is fine; an explicit None is not a list of records
    value = get_value(model, field.name)
    if value is UNSET:
        return
    if not isinstance(value, list):
        result.add_field_error(
            field.name, msg.invalid_record_list_data(field.label), "invalid_record_list_data"
        )
        return
    for item in value:
        if not _is_record_of(item, field.options.model):
            result.add_field_error(
                field.name,
                msg.invalid_record_list_class(field.label),
                "invalid_record_list_class",
            )
            break
