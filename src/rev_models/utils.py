"""Small helpers shared across rev_models."""

from __future__ import annotations

import json
import re
from typing import Any, Final


class _Unset:
    """Marker for a model attribute that was never assigned."""

    _instance: _Unset | None = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Final = _Unset()


def is_set(value: Any) -> bool:
    """Return True when a value is neither None nor UNSET."""
    return value is not None and value is not UNSET


def is_field_value(value: Any) -> bool:
    """Return True if value can be used as a scalar operand in a where clause."""
    if value is UNSET:
        return False
    return not isinstance(value, (dict, list, tuple, set, frozenset))


def get_value(model: Any, name: str) -> Any:
    """Read an attribute from a model, returning UNSET when it was never assigned."""
    return getattr(model, name, UNSET)


def print_obj(value: Any) -> str:
    """Render a value as compact JSON for use in error messages."""
    return json.dumps(value, default=str)


def escape_for_regex(text: str) -> str:
    if not isinstance(text, str):
        raise TypeError("escape_for_regex() - argument must be a string")
    return re.escape(text)
