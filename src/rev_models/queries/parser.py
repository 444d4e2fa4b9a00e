"""
Where-clause parser.

Where clauses are mappings of field names to values or operator objects,
combined with ``$and`` / ``$or``::

    {"name": "Jane"}
    {"age": {"$gte": 18, "$lt": 65}}
    {"$or": [{"status": {"$in": ["new", "open"]}}, {"priority": 1}]}
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from rev_models.errors import QueryError
from rev_models.models.meta import ModelMeta
from rev_models.queries.nodes import ConjunctionNode, FieldNode, QueryNode
from rev_models.utils import print_obj

if TYPE_CHECKING:
    from rev_models.models.model import Model
    from rev_models.registry import ModelRegistry


class ConjunctionOperator(StrEnum):
    AND = "$and"
    OR = "$or"


class FieldOperator(StrEnum):
    """Supported field operators."""

    EQ = "$eq"  # Equal (default)
    NE = "$ne"  # Not equal
    GT = "$gt"  # Greater than
    GTE = "$gte"  # Greater than or equal
    LT = "$lt"  # Less than
    LTE = "$lte"  # Less than or equal
    LIKE = "$like"  # Case-sensitive match, % is a wildcard
    IN = "$in"  # In list
    NIN = "$nin"  # Not in list


class QueryParser:
    """Parses where clauses into query trees for a registry's models."""

    CONJUNCTION_OPERATORS: frozenset[str] = frozenset(ConjunctionOperator)
    FIELD_OPERATORS: frozenset[str] = frozenset(FieldOperator)
    LIST_OPERATORS: frozenset[str] = frozenset({FieldOperator.IN, FieldOperator.NIN})

    def __init__(self, registry: ModelRegistry):
        self.registry = registry

    def get_query_node_for_query(
        self, model: str | type[Model] | ModelMeta, where: Mapping[str, Any]
    ) -> QueryNode:
        """
        Parse a where clause for ``model``.

        Returns:
            The root node, an implicit ``$and`` over the clause's keys

        Raises:
            QueryError: If the clause is malformed
        """
        meta = model if isinstance(model, ModelMeta) else self.registry.get_model_meta(model)
        if not isinstance(where, Mapping):
            raise QueryError(f"where clause must be an object, got {print_obj(where)}")
        return ConjunctionNode(self, ConjunctionOperator.AND, where, meta)

    def get_query_node(
        self,
        key: str,
        value: Any,
        model: ModelMeta,
        parent: QueryNode | None = None,
    ) -> QueryNode:
        """Build the node for one key of a where clause."""
        if key in self.CONJUNCTION_OPERATORS:
            if not isinstance(value, (list, tuple)):
                raise QueryError(f"value for '{key}' must be an array")
            return ConjunctionNode(self, key, value, model, parent)
        if key.startswith("$"):
            raise QueryError(f"unrecognised conjunction operator '{key}'")
        return FieldNode(self, key, value, model, parent)
