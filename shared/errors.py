"""
Shared error handling for the Rulebook evaluation engine.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response format."""

    code: str
    message: str
    details: Dict[str, Any] = Field(default_factory=dict)


class RulebookException(Exception):
    """Base exception for the evaluation engine."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            code=self.code,
            message=self.message,
            details=self.details
        )


class UndefinedVariableError(RulebookException):
    """A declared variable or property could not be resolved."""

    def __init__(self, name: str, message: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.name = name
        super().__init__(
            "UNDEFINED_VARIABLE",
            message or f"Variable '{name}' is not defined",
            {"name": name, **(details or {})}
        )


class TypeMismatchError(RulebookException, TypeError):
    """Ordering comparison between data that cannot be ordered."""

    def __init__(self, left: Any, right: Any, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            "TYPE_MISMATCH",
            f"Cannot order {type(left).__name__} against {type(right).__name__}",
            {"left": repr(left), "right": repr(right), **(details or {})}
        )


class InvalidOperandCountError(RulebookException):
    """An operator was constructed with the wrong number of operands."""

    def __init__(self, operator: str, expected: str, received: int):
        super().__init__(
            "INVALID_OPERAND_COUNT",
            f"{operator} takes {expected} operand(s), {received} given",
            {"operator": operator, "expected": expected, "received": received}
        )


class InvalidOperationError(RulebookException):
    """An unsupported mutation was attempted."""

    def __init__(self, message: str = "Invalid operation", details: Optional[Dict[str, Any]] = None):
        super().__init__("INVALID_OPERATION", message, details)


class InvalidArgumentError(RulebookException, ValueError):
    """An argument does not satisfy the engine's contract."""

    def __init__(self, message: str = "Invalid argument", details: Optional[Dict[str, Any]] = None):
        super().__init__("INVALID_ARGUMENT", message, details)


class CyclicReferenceError(RulebookException):
    """A variable re-entered its own resolution."""

    def __init__(self, name: Optional[str], chain: Optional[list] = None):
        label = name if name is not None else "<anonymous>"
        super().__init__(
            "CYCLIC_REFERENCE",
            f"Cyclic reference while resolving variable '{label}'",
            {"name": name, "chain": chain or []}
        )
