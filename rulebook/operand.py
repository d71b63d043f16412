"""
Operand capability shared by every node that resolves to a Value.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from .context import Context
    from .value import Value


class VariableOperand(ABC):
    """Anything that resolves to a terminal Value given a Context.

    The implementations are closed: Value, Variable (and its property
    variant) and Operator. Host code composes these, it does not extend
    the capability itself.
    """

    __slots__ = ()

    @abstractmethod
    def prepare_value(self, context: "Context") -> "Value":
        """Resolve this operand against the current context."""
