"""
Terminal values and the coercion table used by every comparison.

Equality and ordering follow one fixed policy rather than Python's native
semantics:

=========================  ==================================================
left / right               rule
=========================  ==================================================
None / anything            equal only to None, never orderable
bool / number              bool counts as 0 or 1
number / numeric string    string parsed as a number, compared numerically
number / other string      never equal, ordering raises TypeMismatchError
string / string            numeric when both parse as numbers, else textual
sequence / sequence        same length, pairwise coercive equality
mapping / mapping          same keys, pairwise coercive equality of values
set / set                  mutual coercive containment
anything else              Python ``==``
=========================  ==================================================
"""

import re
from collections.abc import Mapping, Set as AbstractSet
from decimal import Decimal
from dataclasses import dataclass
from numbers import Real
from typing import Any, List, Optional, TYPE_CHECKING

from shared.errors import TypeMismatchError
from .operand import VariableOperand

if TYPE_CHECKING:  # pragma: no cover
    from .context import Context


NUMERIC_STRING = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")


def to_number(raw: Any) -> Optional[Real]:
    """Return the numeric reading of ``raw`` or None if it has none."""
    if isinstance(raw, bool):
        return int(raw)
    if isinstance(raw, (Real, Decimal)):
        return raw
    if isinstance(raw, str) and NUMERIC_STRING.match(raw):
        text = raw.strip()
        try:
            return int(text)
        except ValueError:
            return float(text)
    return None


def _is_sequence(raw: Any) -> bool:
    return isinstance(raw, (list, tuple))


def members(raw: Any) -> List[Any]:
    """View a raw datum as a collection for containment checks."""
    if raw is None:
        return []
    if isinstance(raw, Mapping):
        return list(raw.values())
    if isinstance(raw, (list, tuple, AbstractSet)):
        return list(raw)
    return [raw]


def _contains_all(haystack: Any, needles: Any) -> bool:
    pool = members(haystack)
    return all(any(loose_equals(item, candidate) for candidate in pool) for item in members(needles))


def loose_equals(left: Any, right: Any) -> bool:
    """Coercive equality per the module coercion table."""
    if left is None or right is None:
        return left is None and right is None

    if _is_sequence(left) and _is_sequence(right):
        return len(left) == len(right) and all(
            loose_equals(a, b) for a, b in zip(left, right)
        )

    if isinstance(left, Mapping) and isinstance(right, Mapping):
        return left.keys() == right.keys() and all(
            loose_equals(left[key], right[key]) for key in left
        )

    if isinstance(left, AbstractSet) and isinstance(right, AbstractSet):
        return _contains_all(left, right) and _contains_all(right, left)

    left_number, right_number = to_number(left), to_number(right)
    if left_number is not None and right_number is not None:
        return left_number == right_number

    return left == right


def strict_equals(left: Any, right: Any) -> bool:
    """Equality requiring the same type all the way down."""
    if type(left) is not type(right):
        return False

    if _is_sequence(left):
        return len(left) == len(right) and all(
            strict_equals(a, b) for a, b in zip(left, right)
        )

    if isinstance(left, Mapping):
        return left.keys() == right.keys() and all(
            strict_equals(left[key], right[key]) for key in left
        )

    if isinstance(left, AbstractSet):
        return len(left) == len(right) and all(
            any(strict_equals(item, candidate) for candidate in right) for item in left
        )

    return left == right


def compare(left: Any, right: Any) -> int:
    """Order two raw data, returning -1, 0 or 1.

    Raises:
        TypeMismatchError: If the pair has no ordering under the coercion table.
    """
    left_number, right_number = to_number(left), to_number(right)
    if left_number is not None and right_number is not None:
        left, right = left_number, right_number
    elif not (isinstance(left, str) and isinstance(right, str)):
        raise TypeMismatchError(left, right)

    return (left > right) - (left < right)


@dataclass(frozen=True, eq=False)
class Value(VariableOperand):
    """Immutable wrapper around one raw datum.

    A Value built from another Value takes over its datum, so Values never
    nest.
    """

    raw: Any = None

    def __post_init__(self):
        if isinstance(self.raw, Value):
            object.__setattr__(self, "raw", self.raw.raw)

    def prepare_value(self, context: "Context") -> "Value":
        return self

    def equal_to(self, other: "Value") -> bool:
        """Coercive equality."""
        return loose_equals(self.raw, other.raw)

    def same_as(self, other: "Value") -> bool:
        """Strict equality: matching type and value."""
        return strict_equals(self.raw, other.raw)

    def compare(self, other: "Value") -> int:
        return compare(self.raw, other.raw)

    def greater_than(self, other: "Value") -> bool:
        return self.compare(other) > 0

    def greater_than_or_equal_to(self, other: "Value") -> bool:
        return self.compare(other) >= 0

    def less_than(self, other: "Value") -> bool:
        return self.compare(other) < 0

    def less_than_or_equal_to(self, other: "Value") -> bool:
        return self.compare(other) <= 0

    def contains_subset(self, candidate: "Value") -> bool:
        """True if every member of ``candidate`` is present in this value.

        An empty candidate is always contained.
        """
        return _contains_all(self.raw, candidate.raw)
