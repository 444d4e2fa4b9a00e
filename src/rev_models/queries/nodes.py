"""
Query tree nodes.

A where clause parses into a tree:

- ConjunctionNode: ``$and`` / ``$or`` over child clauses
- FieldNode: all operators applied to one field (implicitly ANDed)
- ValueOperator: one comparison against a scalar value
- ValueListOperator: ``$in`` / ``$nin`` against a list of scalars

Nodes only describe the query; backends decide how to evaluate it.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from rev_models.errors import QueryError
from rev_models.utils import is_field_value, print_obj

if TYPE_CHECKING:
    from rev_models.models.meta import ModelMeta
    from rev_models.queries.parser import QueryParser


class QueryNode:
    """Base class for query tree nodes."""

    def __init__(
        self,
        parser: QueryParser,
        operator: str,
        model: ModelMeta,
        parent: QueryNode | None = None,
    ):
        self.parser = parser
        self.operator = operator
        self.model = model
        self.parent = parent
        self.children: list[QueryNode] = []

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.operator!r}, children={self.children!r})"


class ConjunctionNode(QueryNode):
    """
    Combines child clauses with ``$and`` or ``$or``.

    ``value`` is either a list of where-clause mappings (one child per
    mapping) or a single mapping (one child per key). The root of every
    query is an implicit ``$and`` over the where clause's keys.
    """

    def __init__(
        self,
        parser: QueryParser,
        operator: str,
        value: Any,
        model: ModelMeta,
        parent: QueryNode | None = None,
    ):
        if operator not in parser.CONJUNCTION_OPERATORS:
            raise QueryError(f"unrecognised conjunction operator '{operator}'")
        super().__init__(parser, operator, model, parent)

        if isinstance(value, Mapping):
            for key, sub_value in value.items():
                self.children.append(parser.get_query_node(key, sub_value, model, self))
        elif isinstance(value, (list, tuple)):
            for clause in value:
                if not isinstance(clause, Mapping):
                    raise QueryError(
                        f"elements of the '{operator}' array must be objects, got {print_obj(clause)}"
                    )
                self.children.append(ConjunctionNode(parser, "$and", clause, model, self))
        else:
            raise QueryError(f"value for '{operator}' must be an array")


class FieldNode(QueryNode):
    """Applies one or more value operators to a single field."""

    def __init__(
        self,
        parser: QueryParser,
        field_name: str,
        value: Any,
        model: ModelMeta,
        parent: QueryNode | None = None,
    ):
        if field_name not in model.fields_by_name:
            raise QueryError(f"field '{field_name}' does not exist in model {model.name}")
        super().__init__(parser, field_name, model, parent)
        self.field_name = field_name

        if isinstance(value, Mapping):
            if not value:
                raise QueryError(f"no operators specified for field '{field_name}'")
            for op, op_value in value.items():
                if op in parser.LIST_OPERATORS:
                    self.children.append(ValueListOperator(parser, op, op_value, model, self))
                else:
                    self.children.append(ValueOperator(parser, op, op_value, model, self))
        elif is_field_value(value):
            self.children.append(ValueOperator(parser, "$eq", value, model, self))
        else:
            raise QueryError(f"invalid field value {print_obj(value)} for field '{field_name}'")


class ValueOperator(QueryNode):
    """A single scalar comparison, e.g. ``{"$gt": 10}``."""

    def __init__(
        self,
        parser: QueryParser,
        operator: str,
        value: Any,
        model: ModelMeta,
        parent: QueryNode | None = None,
    ):
        if operator not in parser.FIELD_OPERATORS:
            raise QueryError(f"unrecognised field operator '{operator}'")
        if not is_field_value(value):
            raise QueryError(f"invalid field value {print_obj(value)}")
        if operator == "$like" and not isinstance(value, str):
            raise QueryError("value for '$like' must be a string")
        super().__init__(parser, operator, model, parent)
        self.value = value


class ValueListOperator(QueryNode):
    """A membership test, e.g. ``{"$in": [1, 2, 3]}``."""

    def __init__(
        self,
        parser: QueryParser,
        operator: str,
        value: Any,
        model: ModelMeta,
        parent: QueryNode | None = None,
    ):
        if operator not in parser.LIST_OPERATORS:
            raise QueryError(f"unrecognised field operator '{operator}'")
        if not isinstance(value, (list, tuple)):
            raise QueryError(f"value for '{operator}' must be an array")
        for item in value:
            if not is_field_value(item):
                raise QueryError(f"invalid field value {print_obj(item)} in '{operator}' list")
        super().__init__(parser, operator, model, parent)
        self.value = list(value)
