"""
Integration tests for end-to-end rule evaluation.
"""

import pytest
from unittest.mock import MagicMock

from rulebook import (
    Context,
    GreaterThan,
    LogicalAnd,
    LogicalNot,
    LogicalOr,
    Rule,
    RuleSet,
    Value,
    Variable,
)


class TestRuleEvaluationFlow:
    """End-to-end evaluation of rules against host contexts."""

    @pytest.fixture
    def adult_rule(self):
        """Create the age check rule."""
        return Rule(Variable("age").greater_than_or_equal_to(18), name="adult")

    def test_age_rule(self, adult_rule):
        """Test the age check against two contexts."""
        assert adult_rule.evaluate(Context({"age": 25})) is True
        assert adult_rule.evaluate(Context({"age": 10})) is False

    def test_age_rule_with_numeric_string(self, adult_rule):
        """Test host data supplied as strings."""
        assert adult_rule.evaluate(Context({"age": "21"})) is True

    def test_numeric_coercive_ordering(self):
        """Test GreaterThan(Value(5), Value("3"))."""
        assert GreaterThan(Value(5), Value("3")).evaluate(Context()) is True

    def test_action_feeds_later_rule(self):
        """Test a RuleSet where the first action sets a flag read by the second rule."""
        context = Context({"age": 25})
        notify = MagicMock()

        def set_flag(ctx):
            ctx.set("flag", True)

        ruleset = RuleSet([
            Rule(Variable("age").greater_than_or_equal_to(18), set_flag, name="set-flag"),
            Rule(Variable("flag", False).same_as(True), notify, name="read-flag"),
        ])

        result = ruleset.execute(context)

        assert result.matched_rules == ["set-flag", "read-flag"]
        notify.assert_called_once_with(context)

    def test_reversed_order_does_not_see_flag(self):
        """Test the same rules in the opposite order."""
        context = Context({"age": 25})

        def set_flag(ctx):
            ctx.set("flag", True)

        ruleset = RuleSet([
            Rule(Variable("flag", False).same_as(True), name="read-flag"),
            Rule(Variable("age").greater_than_or_equal_to(18), set_flag, name="set-flag"),
        ])

        result = ruleset.execute(context)

        assert result.verdicts == [False, True]
        assert context.get("flag") is True

    def test_shared_tree_across_contexts(self):
        """Test one proposition tree evaluated against many contexts."""
        user = Variable("user")
        roles = Variable("roles")
        condition = LogicalAnd([
            user["active"].equal_to(True),
            LogicalOr([
                roles.contains_subset(["admin"]),
                LogicalAnd([
                    roles.contains_subset(["analyst"]),
                    LogicalNot([user["region"].equal_to("restricted")]),
                ]),
            ]),
        ])
        rule = Rule(condition, name="curve-access")

        contexts = [
            Context({"user": {"active": 1, "region": "eu"}, "roles": ["analyst"]}),
            Context({"user": {"active": True, "region": "restricted"}, "roles": ["analyst"]}),
            Context({"user": {"active": True, "region": "restricted"}, "roles": ["admin", "user"]}),
            Context({"user": {"active": False, "region": "eu"}, "roles": ["admin"]}),
        ]

        assert [rule.evaluate(context) for context in contexts] == [True, False, True, False]

    def test_lazy_context_entries(self):
        """Test factories supply values on demand."""
        lookup = MagicMock(return_value=["analyst", "user"])
        context = Context({"roles": Context.share(lambda ctx: lookup())})
        rule = Rule(Variable("roles").contains_subset("analyst"))

        assert rule.evaluate(context) is True
        assert rule.evaluate(context) is True
        lookup.assert_called_once_with()

    def test_variable_default_chain(self):
        """Test defaults falling back through another Variable."""
        fallback = Variable("default_limit", 100)
        limit = Variable("limit", fallback)
        rule = Rule(Variable("amount").less_than_or_equal_to(limit))

        assert rule.evaluate(Context({"amount": 50})) is True
        assert rule.evaluate(Context({"amount": 150, "default_limit": 200})) is True
        assert rule.evaluate(Context({"amount": 150, "limit": 120})) is False
