"""
Rules package.

A Rule pairs a proposition with an optional host action; a RuleSet runs
rules in declared order against one shared context.

Modules of interest:
- rule: Rule evaluation and action dispatch.
- ruleset: Ordered execution and result collection.
- models: Result data classes.
"""

from .models import RuleSetResult
from .rule import Rule
from .ruleset import RuleSet

__all__ = ["Rule", "RuleSet", "RuleSetResult"]
