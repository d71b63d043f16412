"""
Operators package.

Every operator is a Proposition (``evaluate(context) -> bool``) and a
VariableOperand (``prepare_value(context) -> Value``).

Modules of interest:
- base: Proposition and Operator contracts.
- comparison: Binary comparisons built on Value predicates.
- logical: AND, OR, NOT and XOR over propositions.
"""

from .base import Operator, Proposition
from .comparison import (
    ComparisonOperator,
    ContainsSubset,
    DoesNotContainSubset,
    EqualTo,
    GreaterThan,
    GreaterThanOrEqualTo,
    LessThan,
    LessThanOrEqualTo,
    NotEqualTo,
    NotSameAs,
    SameAs,
)
from .logical import LogicalAnd, LogicalNot, LogicalOperator, LogicalOr, LogicalXor

__all__ = [
    "Operator",
    "Proposition",
    "ComparisonOperator",
    "ContainsSubset",
    "DoesNotContainSubset",
    "EqualTo",
    "GreaterThan",
    "GreaterThanOrEqualTo",
    "LessThan",
    "LessThanOrEqualTo",
    "NotEqualTo",
    "NotSameAs",
    "SameAs",
    "LogicalAnd",
    "LogicalNot",
    "LogicalOperator",
    "LogicalOr",
    "LogicalXor",
]
