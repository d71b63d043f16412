"""
Rulebook: an embeddable proposition evaluation engine.

Host code declares variables, operators and rules once, then evaluates them
against a Context it owns:

    age = Variable("age")
    rule = Rule(age.greater_than_or_equal_to(18), action=grant_access)
    rule.evaluate(Context({"age": 25}))

Modules of interest:
- value: Terminal values and the coercion table.
- context: The name -> entry store consulted during evaluation.
- variable: Deferred references and nested property lookups.
- operators: Comparison and logical operators.
- rules: Rule and RuleSet.
"""

from .context import Context
from .operand import VariableOperand
from .operators import (
    ComparisonOperator,
    ContainsSubset,
    DoesNotContainSubset,
    EqualTo,
    GreaterThan,
    GreaterThanOrEqualTo,
    LessThan,
    LessThanOrEqualTo,
    LogicalAnd,
    LogicalNot,
    LogicalOperator,
    LogicalOr,
    LogicalXor,
    NotEqualTo,
    NotSameAs,
    Operator,
    Proposition,
    SameAs,
)
from .rules import Rule, RuleSet, RuleSetResult
from .value import Value
from .variable import Variable, VariableProperty

__all__ = [
    "Context",
    "VariableOperand",
    "ComparisonOperator",
    "ContainsSubset",
    "DoesNotContainSubset",
    "EqualTo",
    "GreaterThan",
    "GreaterThanOrEqualTo",
    "LessThan",
    "LessThanOrEqualTo",
    "LogicalAnd",
    "LogicalNot",
    "LogicalOperator",
    "LogicalOr",
    "LogicalXor",
    "NotEqualTo",
    "NotSameAs",
    "Operator",
    "Proposition",
    "SameAs",
    "Rule",
    "RuleSet",
    "RuleSetResult",
    "Value",
    "Variable",
    "VariableProperty",
]
