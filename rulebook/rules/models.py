"""
Result models for rule set execution.
"""

from dataclasses import dataclass, field
from typing import List


@dataclass
class RuleSetResult:
    """Result of executing a rule set against one context."""
    verdicts: List[bool] = field(default_factory=list)
    matched_rules: List[str] = field(default_factory=list)
    evaluation_time_ms: float = 0.0

    @property
    def any_matched(self) -> bool:
        return bool(self.matched_rules)
