"""
Evaluation context: the name -> entry store shared between host and engine.
"""

from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional

from shared.errors import (
    CyclicReferenceError,
    InvalidArgumentError,
    InvalidOperationError,
    UndefinedVariableError,
)
from .variable import Variable


class Protected:
    """A callable stored as a plain value rather than invoked on read."""

    __slots__ = ("callable",)

    def __init__(self, callable_: Callable):
        self.callable = callable_


class Shared:
    """A factory invoked once; later reads return the first result."""

    __slots__ = ("factory", "_result", "_resolved")

    def __init__(self, factory: Callable[["Context"], Any]):
        self.factory = factory
        self._result = None
        self._resolved = False

    def __call__(self, context: "Context") -> Any:
        if not self._resolved:
            self._result = self.factory(context)
            self._resolved = True
        return self._result


class Context:
    """Ordered mapping of names to raw data, Variables or lazy factories.

    Entries are stored as given, without coercion. A callable entry is a
    factory: it is invoked with the context each time it is read, unless it
    was stored through ``protect()``. Wrap it with ``share()`` to invoke it
    only once.

    A Context also tracks which Variables are being resolved against it, so
    it must not be evaluated from two threads at once.
    """

    def __init__(self, values: Optional[Mapping[str, Any]] = None):
        self._values: Dict[str, Any] = {}
        self._resolving: List[Variable] = []

        for name, value in (values or {}).items():
            self.set(name, value)

    def set(self, name: str, value: Any) -> None:
        """Set an entry."""
        self._values[name] = value

    def get(self, name: str, default: Any = None) -> Any:
        """Get an entry, invoking it if it is a factory."""
        if name not in self._values:
            return default
        return self._read(name)

    def raw(self, name: str) -> Any:
        """Get the stored entry without invoking factories."""
        if name not in self._values:
            raise UndefinedVariableError(name)
        return self._values[name]

    def exists(self, name: str) -> bool:
        """Check whether an entry is set.

        Variable entries only count when they resolve to a non-None value;
        an undefined nested property does not exist.
        """
        if name not in self._values:
            return False

        entry = self._values[name]
        if isinstance(entry, Variable):
            try:
                return entry.prepare_value(self).raw is not None
            except UndefinedVariableError:
                return False

        return True

    def remove(self, name: str) -> None:
        """Remove a Variable entry.

        Raises:
            UndefinedVariableError: If no entry of that name exists.
            InvalidOperationError: If the entry is a plain datum.
        """
        if name not in self._values:
            raise UndefinedVariableError(name)

        if not isinstance(self._values[name], Variable):
            raise InvalidOperationError(
                f"Context entry '{name}' is a plain value and cannot be removed",
                {"name": name}
            )

        del self._values[name]

    def keys(self) -> List[str]:
        """Get entry names in insertion order."""
        return list(self._values)

    @staticmethod
    def protect(callable_: Callable) -> Protected:
        """Mark a callable to be stored as a value."""
        if not callable(callable_):
            raise InvalidArgumentError("Only callables can be protected")
        return Protected(callable_)

    @staticmethod
    def share(factory: Callable[["Context"], Any]) -> Shared:
        """Wrap a factory so it is invoked at most once."""
        if not callable(factory):
            raise InvalidArgumentError("Shared factories must be callable")
        return Shared(factory)

    @contextmanager
    def resolving(self, variable: Variable) -> Iterator[None]:
        """Guard the resolution of ``variable`` against re-entry."""
        if any(active is variable for active in self._resolving):
            chain = [active.name for active in self._resolving] + [variable.name]
            raise CyclicReferenceError(variable.name, chain)

        self._resolving.append(variable)
        try:
            yield
        finally:
            self._resolving.pop()

    def _read(self, name: str) -> Any:
        entry = self._values[name]
        if isinstance(entry, Protected):
            return entry.callable
        if callable(entry) and not isinstance(entry, type):
            return entry(self)
        return entry

    def __getitem__(self, name: str) -> Any:
        if name not in self._values:
            raise UndefinedVariableError(name)
        return self._read(name)

    def __setitem__(self, name: str, value: Any) -> None:
        self.set(name, value)

    def __delitem__(self, name: str) -> None:
        self.remove(name)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Context({self.keys()!r})"
