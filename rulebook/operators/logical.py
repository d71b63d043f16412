"""
Logical combinators over propositions.
"""

from typing import Iterable, TYPE_CHECKING

from shared.errors import InvalidArgumentError
from .base import Operator, Proposition

if TYPE_CHECKING:  # pragma: no cover
    from ..context import Context


class LogicalOperator(Operator):
    """Base class for operators combining an ordered list of propositions."""

    def __init__(self, operands: Iterable[Proposition] = ()):
        operands = tuple(operands)
        for operand in operands:
            if not isinstance(operand, Proposition):
                raise InvalidArgumentError(
                    f"{type(self).__name__} operands must be Propositions, got {type(operand).__name__}",
                    {"operator": type(self).__name__}
                )
        super().__init__(operands)


class LogicalAnd(LogicalOperator):
    """True unless an operand is false; stops at the first false operand."""

    def evaluate(self, context: "Context") -> bool:
        for operand in self._operands:
            if not operand.evaluate(context):
                return self._trace(False)
        return self._trace(True)


class LogicalOr(LogicalOperator):
    """True if any operand is true; stops at the first true operand."""

    def evaluate(self, context: "Context") -> bool:
        for operand in self._operands:
            if operand.evaluate(context):
                return self._trace(True)
        return self._trace(False)


class LogicalNot(LogicalOperator):
    operand_count = 1

    def evaluate(self, context: "Context") -> bool:
        return self._trace(not self._operands[0].evaluate(context))


class LogicalXor(LogicalOperator):
    """True if an odd number of operands are true. Every operand is evaluated."""

    def evaluate(self, context: "Context") -> bool:
        true_count = sum(1 for operand in self._operands if operand.evaluate(context))
        return self._trace(true_count % 2 == 1)
