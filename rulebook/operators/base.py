"""
Proposition and Operator contracts.
"""

from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Any, ClassVar, Iterable, Optional, Tuple, TYPE_CHECKING

from pydantic import ValidationError

from shared.config import get_settings
from shared.errors import InvalidOperandCountError
from shared.logging import get_logger
from ..operand import VariableOperand
from ..value import Value

if TYPE_CHECKING:  # pragma: no cover
    from ..context import Context


logger = get_logger("rulebook.operators")


@lru_cache(maxsize=1)
def tracing_enabled() -> bool:
    """Read the trace flag once; unusable settings leave tracing off."""
    try:
        return get_settings().trace_evaluations
    except ValidationError as e:
        logger.warning("Invalid settings, evaluation tracing disabled", error=str(e))
        return False


class Proposition(ABC):
    """Anything that evaluates to a boolean given a Context."""

    @abstractmethod
    def evaluate(self, context: "Context") -> bool:
        """Evaluate against the current context."""


class Operator(Proposition, VariableOperand):
    """A proposition over an ordered, fixed tuple of operands.

    Operators are also operands: ``prepare_value`` wraps the verdict in a
    Value, so an operator can be compared like any other operand.
    """

    # Exact number of operands, or None for any number
    operand_count: ClassVar[Optional[int]] = None

    def __init__(self, operands: Iterable[Any]):
        operands = tuple(operands)
        if self.operand_count is not None and len(operands) != self.operand_count:
            raise InvalidOperandCountError(
                type(self).__name__, str(self.operand_count), len(operands)
            )
        self._operands: Tuple[Any, ...] = operands

    @property
    def operands(self) -> Tuple[Any, ...]:
        return self._operands

    def prepare_value(self, context: "Context") -> Value:
        return Value(self.evaluate(context))

    def _trace(self, result: bool) -> bool:
        if tracing_enabled():
            logger.debug("Operator evaluated", operator=type(self).__name__, result=result)
        return result

    def __repr__(self) -> str:
        operands = ", ".join(repr(operand) for operand in self._operands)
        return f"{type(self).__name__}({operands})"
