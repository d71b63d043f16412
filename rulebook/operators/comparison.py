"""
Binary comparison operators.

Each operator resolves both operands with ``prepare_value`` and applies the
matching Value predicate. Evaluation has no side effects.
"""

from abc import abstractmethod
from typing import TYPE_CHECKING

from shared.errors import InvalidArgumentError
from ..operand import VariableOperand
from ..value import Value
from .base import Operator

if TYPE_CHECKING:  # pragma: no cover
    from ..context import Context


class ComparisonOperator(Operator):
    """Base class for operators comparing a left and a right operand."""

    operand_count = 2

    def __init__(self, left: VariableOperand, right: VariableOperand):
        for operand in (left, right):
            if not isinstance(operand, VariableOperand):
                raise InvalidArgumentError(
                    f"{type(self).__name__} operands must be VariableOperands, got {type(operand).__name__}",
                    {"operator": type(self).__name__}
                )
        super().__init__((left, right))

    @property
    def left(self) -> VariableOperand:
        return self._operands[0]

    @property
    def right(self) -> VariableOperand:
        return self._operands[1]

    def evaluate(self, context: "Context") -> bool:
        left = self.left.prepare_value(context)
        right = self.right.prepare_value(context)
        return self._trace(self.compare(left, right))

    @abstractmethod
    def compare(self, left: Value, right: Value) -> bool:
        """Apply the predicate to resolved values."""


class GreaterThan(ComparisonOperator):
    def compare(self, left: Value, right: Value) -> bool:
        return left.greater_than(right)


class GreaterThanOrEqualTo(ComparisonOperator):
    def compare(self, left: Value, right: Value) -> bool:
        return left.greater_than_or_equal_to(right)


class LessThan(ComparisonOperator):
    def compare(self, left: Value, right: Value) -> bool:
        return left.less_than(right)


class LessThanOrEqualTo(ComparisonOperator):
    def compare(self, left: Value, right: Value) -> bool:
        return left.less_than_or_equal_to(right)


class EqualTo(ComparisonOperator):
    """Coercive equality: ``"1"`` equals ``1``."""

    def compare(self, left: Value, right: Value) -> bool:
        return left.equal_to(right)


class NotEqualTo(ComparisonOperator):
    def compare(self, left: Value, right: Value) -> bool:
        return not left.equal_to(right)


class SameAs(ComparisonOperator):
    """Strict equality: type and value must both match."""

    def compare(self, left: Value, right: Value) -> bool:
        return left.same_as(right)


class NotSameAs(ComparisonOperator):
    def compare(self, left: Value, right: Value) -> bool:
        return not left.same_as(right)


class ContainsSubset(ComparisonOperator):
    """True if every member of the right operand is in the left one."""

    def compare(self, left: Value, right: Value) -> bool:
        return left.contains_subset(right)


class DoesNotContainSubset(ComparisonOperator):
    def compare(self, left: Value, right: Value) -> bool:
        return not left.contains_subset(right)
