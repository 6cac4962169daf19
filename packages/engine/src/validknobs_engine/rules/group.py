"""Named groups of rules."""

from __future__ import annotations

import logging
from typing import Any

from validknobs_common.exceptions import ArgumentNullError

from ..context import RuleContext
from ..results import GroupRuleResult, Outcome, RuleResult
from ..rule import Rule

logger = logging.getLogger(__name__)


class GroupRule(Rule):
    """A named group of rules evaluated against the same target.

    Nested rules follow the same ordering, filtering and short-circuit
    behaviour as the rules of a target. The group's value is False when any
    nested rule was violated and True otherwise, so value results can be
    attached to the group as a whole.
    """

    def __init__(self, name: str, stop_on_failure: bool = False):
        super().__init__(stop_on_failure)
        self._name = name
        self.rules: list[Rule | None] = []

    @property
    def name(self) -> str:
        return self._name

    def validate(self, context: RuleContext) -> RuleResult | None:
        ArgumentNullError.raise_if_none(context, "context")
        context.rule = self

        result = self.create_result(context, None)
        if result is None:
            return None

        validator_context = context.validator_context
        violated = False
        for rule in self.rules:
            if rule is None:
                continue

            rule_context = RuleContext(None, context.target_context)
            rule_result = rule.validate(rule_context)
            if rule_result is None:
                continue

            if not validator_context.ignore_empty_results or not rule_result.is_empty():
                result.rule_results.append(rule_result)

            violated = violated or rule.outcome(rule_result) is Outcome.VIOLATED
            if rule.stops_target(rule_result, rule_context):
                logger.debug(f"Rule group '{self.name}' stopped after rule '{rule_result.name}'")
                break

        result.value = not violated
        for value_result in self.select_value_results(context, result.value):
            if validator_context.ignore_empty_results and value_result.is_empty():
                continue
            result.value_results.append(value_result)

        return result

    def execute(self, context: RuleContext) -> Any:
        result = self.validate(context)
        return result.value if result is not None else None

    def create_result(self, context: RuleContext, value: Any) -> GroupRuleResult | None:
        ArgumentNullError.raise_if_none(context, "context")
        return GroupRuleResult(self.name, value)

    def __repr__(self) -> str:
        return f"GroupRule(name={self._name!r}, rules={len(self.rules)})"
