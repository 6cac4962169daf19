"""Rules evaluated only when a condition holds."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from validknobs_common.exceptions import ArgumentNullError

from ..context import RuleContext
from ..results import RuleResult, ValueResult
from ..rule import Rule

RuleCondition = Callable[[RuleContext], bool]


class ConditionalRule(Rule):
    """Wraps a rule and shares its value results.

    When the condition does not allow evaluation the wrapped rule yields no
    result at all.
    """

    def __init__(self, rule: Rule, condition: RuleCondition):
        ArgumentNullError.raise_if_none(rule, "rule")
        ArgumentNullError.raise_if_none(condition, "condition")
        self.rule = rule
        self.condition = condition

    @property
    def value_results(self) -> list[ValueResult]:  # type: ignore[override]
        return self.rule.value_results

    @property
    def stop_on_failure(self) -> bool:  # type: ignore[override]
        return self.rule.stop_on_failure

    @property
    def name(self) -> str:
        return self.rule.name

    def should_validate(self, context: RuleContext) -> bool:
        return bool(self.condition(context))

    def validate(self, context: RuleContext) -> RuleResult | None:
        ArgumentNullError.raise_if_none(context, "context")
        if not self.should_validate(context):
            return None
        return self.rule.validate(context)

    def execute(self, context: RuleContext) -> Any:
        return self.rule.execute(context)

    def stops_target(self, result: RuleResult, context: RuleContext) -> bool:
        return self.rule.stops_target(result, context)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(rule={self.rule!r})"


class IfRule(ConditionalRule):
    """Evaluates the wrapped rule only when the condition holds."""

    pass


class IfNotRule(ConditionalRule):
    """Evaluates the wrapped rule only when the condition does not hold."""

    def should_validate(self, context: RuleContext) -> bool:
        return not self.condition(context)
