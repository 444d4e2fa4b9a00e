"""
In-memory evaluation of query trees.

InMemoryQuery wraps a parsed query tree and tests plain record dicts
against it. Comparisons between values that can't be ordered (e.g. a string
and a number) simply don't match.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Any

from rev_models.errors import QueryError
from rev_models.queries.nodes import (
    ConjunctionNode,
    FieldNode,
    QueryNode,
    ValueListOperator,
    ValueOperator,
)
from rev_models.utils import escape_for_regex


@lru_cache(maxsize=256)
def like_to_regex(pattern: str) -> re.Pattern[str]:
    """Convert a ``$like`` pattern (``%`` wildcard) to a compiled regex."""
    return re.compile(".*".join(escape_for_regex(part) for part in pattern.split("%")), re.DOTALL)


def _compare(record_value: Any, operator: str, value: Any) -> bool:
    """
    Perform a single comparison.

    Args:
        record_value: Value from the record (None when missing)
        operator: Field operator, e.g. "$gt"
        value: Value from the where clause

    Returns:
        True if the comparison passes
    """
    if operator == "$eq":
        return bool(record_value == value)
    if operator == "$ne":
        return bool(record_value != value)
    if operator == "$like":
        return isinstance(record_value, str) and like_to_regex(value).fullmatch(record_value) is not None

    if record_value is None or value is None:
        return False
    try:
        if operator == "$gt":
            return bool(record_value > value)
        if operator == "$gte":
            return bool(record_value >= value)
        if operator == "$lt":
            return bool(record_value < value)
        if operator == "$lte":
            return bool(record_value <= value)
    except TypeError:
        return False
    raise QueryError(f"unrecognised field operator '{operator}'")


class InMemoryQuery:
    """Evaluates a query tree against record dicts."""

    def __init__(self, query: QueryNode):
        self.query = query

    def test_record(self, record: dict[str, Any]) -> bool:
        """Return True if ``record`` matches the query."""
        return self._test_node(self.query, record, None)

    def _test_node(self, node: QueryNode, record: dict[str, Any], field_name: str | None) -> bool:
        if isinstance(node, ConjunctionNode):
            if node.operator == "$or":
                return any(self._test_node(child, record, None) for child in node.children)
            return all(self._test_node(child, record, None) for child in node.children)

        if isinstance(node, FieldNode):
            return all(self._test_node(child, record, node.field_name) for child in node.children)

        if field_name is None:
            raise QueryError(f"'{node.operator}' must be applied to a field")
        record_value = record.get(field_name)

        if isinstance(node, ValueListOperator):
            found = record_value in node.value
            return found if node.operator == "$in" else not found

        if isinstance(node, ValueOperator):
            return _compare(record_value, node.operator, node.value)

        raise QueryError(f"unsupported query node {type(node).__name__}")
