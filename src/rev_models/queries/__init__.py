"""
Where-clause parsing into query trees.
"""

from rev_models.queries.nodes import (
    ConjunctionNode,
    FieldNode,
    QueryNode,
    ValueListOperator,
    ValueOperator,
)
from rev_models.queries.parser import ConjunctionOperator, FieldOperator, QueryParser

__all__ = [
    "ConjunctionNode",
    "ConjunctionOperator",
    "FieldNode",
    "FieldOperator",
    "QueryNode",
    "QueryParser",
    "ValueListOperator",
    "ValueOperator",
]
