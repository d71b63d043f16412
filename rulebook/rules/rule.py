"""
Rule: a proposition paired with an optional host action.
"""

from typing import Any, Callable, Optional, TYPE_CHECKING

from shared.errors import InvalidArgumentError
from shared.logging import get_logger
from ..operators.base import Proposition

if TYPE_CHECKING:  # pragma: no cover
    from ..context import Context


Action = Callable[["Context"], Any]


class Rule(Proposition):
    """A condition plus an optional action run when the condition holds."""

    def __init__(self, condition: Proposition, action: Optional[Action] = None, name: Optional[str] = None):
        if not isinstance(condition, Proposition):
            raise InvalidArgumentError(
                f"Rule condition must be a Proposition, got {type(condition).__name__}",
                {"rule": name}
            )
        if action is not None and not callable(action):
            raise InvalidArgumentError("Rule action must be callable", {"rule": name})

        self._condition = condition
        self._action = action
        self._name = name
        self.logger = get_logger("rulebook.rule")

    @property
    def condition(self) -> Proposition:
        return self._condition

    @property
    def action(self) -> Optional[Action]:
        return self._action

    @property
    def name(self) -> Optional[str]:
        return self._name

    def evaluate(self, context: "Context") -> bool:
        """Evaluate the condition, running the action when it holds.

        The verdict is returned whether or not an action ran. Whatever the
        action does to the context is up to the host.
        """
        verdict = bool(self._condition.evaluate(context))

        if verdict and self._action is not None:
            self.logger.debug("Rule matched, running action", rule=self._name)
            self._action(context)

        return verdict

    def __repr__(self) -> str:
        return f"Rule(name={self._name!r}, condition={self._condition!r})"
