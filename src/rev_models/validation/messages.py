"""Human-readable validation messages, one function per error code."""

from __future__ import annotations

from typing import Any


def required(label: str) -> str:
    return f"{label} is a required field"


def not_a_string(label: str) -> str:
    return f"{label} should be a string"


def string_empty(label: str) -> str:
    return f"{label} is a required field"


def no_regex_match(label: str) -> str:
    return f"{label} is not in the correct format"


def not_an_email(label: str) -> str:
    return f"{label} is not a valid email address"


def not_a_url(label: str) -> str:
    return f"{label} is not a valid URL"


def not_a_number(label: str) -> str:
    return f"{label} should be a number"


def not_an_integer(label: str) -> str:
    return f"{label} should be a whole number"


def not_a_boolean(label: str) -> str:
    return f"{label} should be either true or false"


def min_string_length(label: str, length: int) -> str:
    return f"{label} should be at least {length} characters"


def max_string_length(label: str, length: int) -> str:
    return f"{label} should not exceed {length} characters"


def min_value(label: str, value: Any) -> str:
    return f"{label} should be at least {value}"


def max_value(label: str, value: Any) -> str:
    return f"{label} should not exceed {value}"


def no_selection_match(label: str) -> str:
    return f"{label} does not contain a valid selection"


def list_empty(label: str) -> str:
    return f"{label} requires at least one selection"


def selection_not_an_array(label: str) -> str:
    return f"{label} should be a list of selections"


def not_a_date(label: str) -> str:
    return f"{label} should be a date, with no time component"


def not_a_time(label: str) -> str:
    return f"{label} should be a time, with no date component"


def not_a_datetime(label: str) -> str:
    return f"{label} should be a date and time"


def invalid_record_class(label: str) -> str:
    return f"{label} should be a different model class"


def invalid_record_list_data(label: str) -> str:
    return f"{label} should be a list of records"


def invalid_record_list_class(label: str) -> str:
    return f"{label} contains records of the wrong model class"


def extra_field(name: str) -> str:
    return f"Field '{name}' does not exist in model metadata"
