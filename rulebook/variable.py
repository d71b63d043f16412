"""
Variables: deferred references resolved to Values at evaluation time.

A Variable is a placeholder in propositions and comparison operators.
During evaluation it is replaced with a terminal Value, taken from the
current Context when it names an entry there, otherwise from its default.
"""

from collections.abc import Mapping, Set as AbstractSet
from decimal import Decimal
from numbers import Real
from typing import Any, Dict, Hashable, Optional, Tuple, TYPE_CHECKING

from shared.errors import InvalidArgumentError, UndefinedVariableError
from .operand import VariableOperand
from .operators.comparison import (
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
from .value import Value

if TYPE_CHECKING:  # pragma: no cover
    from .context import Context


_MISSING = object()

# Raw data whose attributes are never read as properties
_OPAQUE_TYPES = (str, bytes, Real, Decimal, Mapping, list, tuple, AbstractSet)


def _as_value(value: Any) -> Value:
    return value if isinstance(value, Value) else Value(value)


def _lookup(container: Any, name: Hashable) -> Tuple[bool, Any]:
    """Find ``name`` in a resolved parent datum."""
    if container is None:
        return False, None

    if isinstance(container, Mapping):
        if name in container:
            return True, container[name]
        return False, None

    if isinstance(container, (list, tuple)):
        if isinstance(name, int) and -len(container) <= name < len(container):
            return True, container[name]
        return False, None

    if isinstance(container, _OPAQUE_TYPES) or not isinstance(name, str) or name.startswith("_"):
        return False, None

    attribute = getattr(container, name, _MISSING)
    if attribute is _MISSING:
        return False, None
    if callable(attribute):
        return True, attribute()
    return True, attribute


class Variable(VariableOperand):
    """A propositional Variable.

    Args:
        name: Context entry to read (optional).
        value: Default used when the context has no such entry. It may be a
            raw datum or another VariableOperand, which is resolved against
            the same context.
    """

    def __init__(self, name: Optional[str] = None, value: Any = None):
        self._name = name
        self._value = value
        self._properties: Dict[Hashable, "VariableProperty"] = {}

    @property
    def name(self) -> Optional[str]:
        return self._name

    @property
    def value(self) -> Any:
        """The default value."""
        return self._value

    def set_value(self, value: Any) -> None:
        """Set the default value."""
        self._value = value

    def prepare_value(self, context: "Context") -> Value:
        """Prepare a Value for this Variable given the current Context.

        Raises:
            CyclicReferenceError: If resolution re-enters this Variable.
        """
        with context.resolving(self):
            # A Variable stored under its own name stands for its default
            if (
                self._name is not None
                and self._name in context
                and context.raw(self._name) is not self
            ):
                value = context.get(self._name)
                if isinstance(value, VariableOperand):
                    value = value.prepare_value(context)
            elif isinstance(self._value, VariableOperand):
                value = self._value.prepare_value(context)
            else:
                value = self._value

        return _as_value(value)

    def sibling(self, value: Any) -> "Variable":
        """Build an unnamed Variable of this kind holding ``value``.

        Used for the right-hand side of the fluent comparison helpers;
        subclasses override it to keep both operands of the same kind.
        """
        return Variable(value=value)

    def _operand(self, other: Any) -> VariableOperand:
        return other if isinstance(other, VariableOperand) else self.sibling(other)

    # Fluent comparison helpers

    def greater_than(self, other: Any) -> GreaterThan:
        return GreaterThan(self, self._operand(other))

    def greater_than_or_equal_to(self, other: Any) -> GreaterThanOrEqualTo:
        return GreaterThanOrEqualTo(self, self._operand(other))

    def less_than(self, other: Any) -> LessThan:
        return LessThan(self, self._operand(other))

    def less_than_or_equal_to(self, other: Any) -> LessThanOrEqualTo:
        return LessThanOrEqualTo(self, self._operand(other))

    def equal_to(self, other: Any) -> EqualTo:
        return EqualTo(self, self._operand(other))

    def not_equal_to(self, other: Any) -> NotEqualTo:
        return NotEqualTo(self, self._operand(other))

    def same_as(self, other: Any) -> SameAs:
        return SameAs(self, self._operand(other))

    def not_same_as(self, other: Any) -> NotSameAs:
        return NotSameAs(self, self._operand(other))

    def contains_subset(self, other: Any) -> ContainsSubset:
        return ContainsSubset(self, self._operand(other))

    def does_not_contain_subset(self, other: Any) -> DoesNotContainSubset:
        return DoesNotContainSubset(self, self._operand(other))

    # Nested properties

    def get_property(self, name: Hashable, value: Any = None) -> "VariableProperty":
        """Declare a nested property, or return the one already declared."""
        if name not in self._properties:
            self._properties[name] = VariableProperty(self, name, value)
        return self._properties[name]

    def property_exists(self, name: Hashable) -> bool:
        """Check whether a declared property has a non-None default.

        Raises:
            InvalidArgumentError: If the property was never declared.
        """
        return self._declared_property(name).value is not None

    def unset_property(self, name: Hashable) -> None:
        """Clear a declared property's default; the declaration stays.

        Raises:
            InvalidArgumentError: If the property was never declared.
        """
        self._declared_property(name).set_value(None)

    def _declared_property(self, name: Hashable) -> "VariableProperty":
        if name not in self._properties:
            raise InvalidArgumentError(
                f"Property '{name}' is not declared on variable '{self._name}'",
                {"variable": self._name, "property": name}
            )
        return self._properties[name]

    def __getitem__(self, name: Hashable) -> "VariableProperty":
        return self.get_property(name)

    def __setitem__(self, name: Hashable, value: Any) -> None:
        self.get_property(name).set_value(value)

    def __contains__(self, name: Hashable) -> bool:
        return self.property_exists(name)

    def __delitem__(self, name: Hashable) -> None:
        self.unset_property(name)

    # Item access declares properties, so the legacy iteration protocol
    # would never terminate.
    __iter__ = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r}, value={self._value!r})"


class VariableProperty(Variable):
    """A property looked up on the resolved value of a parent Variable.

    Mapping keys are tried first, then list indexes, then object
    attributes (zero-argument methods are called). When the parent has no
    such property the default is used.
    """

    def __init__(self, parent: Variable, name: Hashable, value: Any = None):
        super().__init__(name, value)
        self._parent = parent

    @property
    def parent(self) -> Variable:
        return self._parent

    def prepare_value(self, context: "Context") -> Value:
        """Resolve the parent, then read this property from it.

        Raises:
            UndefinedVariableError: If the property is missing and has no default.
        """
        with context.resolving(self):
            container = self._parent.prepare_value(context).raw
            found, value = _lookup(container, self._name)

            if not found:
                if isinstance(self._value, VariableOperand):
                    value = self._value.prepare_value(context)
                elif self._value is None:
                    raise UndefinedVariableError(
                        str(self._name),
                        f"Property '{self._name}' is not defined on variable '{self._parent.name}'",
                        {"parent": self._parent.name}
                    )
                else:
                    value = self._value

        return _as_value(value)
