"""
Ordered rule sets.
"""

import time
from typing import Iterable, Iterator, List, Tuple, TYPE_CHECKING

from shared.errors import InvalidArgumentError
from shared.logging import evaluation_id_var, get_logger, set_evaluation_id
from .models import RuleSetResult
from .rule import Rule

if TYPE_CHECKING:  # pragma: no cover
    from ..context import Context


class RuleSet:
    """Rules executed in declared order against one shared context.

    An action run by an earlier rule may change the context, and later rules
    see that change. The same Rule instance is only held once.
    """

    def __init__(self, rules: Iterable[Rule] = ()):
        self.logger = get_logger("rulebook.ruleset")
        self._rules: List[Rule] = []

        for rule in rules:
            self.add_rule(rule)

    @property
    def rules(self) -> Tuple[Rule, ...]:
        return tuple(self._rules)

    def add_rule(self, rule: Rule) -> bool:
        """Append a rule; returns False if this instance is already held."""
        if not isinstance(rule, Rule):
            raise InvalidArgumentError(
                f"RuleSet only holds Rules, got {type(rule).__name__}"
            )

        if any(held is rule for held in self._rules):
            return False

        self._rules.append(rule)
        return True

    def execute(self, context: "Context") -> RuleSetResult:
        """Evaluate every rule in order.

        Errors raised by a condition or an action are logged and propagate;
        rules after the failing one are not evaluated.
        """
        start_time = time.time()
        host_evaluation_id = evaluation_id_var.get()
        set_evaluation_id(host_evaluation_id)
        result = RuleSetResult()

        try:
            for index, rule in enumerate(self._rules):
                label = rule.name or f"rule[{index}]"

                try:
                    verdict = rule.evaluate(context)
                except Exception as e:
                    self.logger.error("Rule evaluation error", rule=label, error=str(e))
                    raise

                result.verdicts.append(verdict)
                if verdict:
                    result.matched_rules.append(label)

            result.evaluation_time_ms = (time.time() - start_time) * 1000

            self.logger.info(
                "Rule set executed",
                total_rules=len(self._rules),
                matched_rules=result.matched_rules,
                evaluation_time_ms=result.evaluation_time_ms
            )

            return result
        finally:
            evaluation_id_var.set(host_evaluation_id)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)
