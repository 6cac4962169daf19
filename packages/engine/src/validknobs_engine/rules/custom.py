"""Custom rule backed by a function."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from validknobs_common.exceptions import ArgumentNullError

from ..context import RuleContext
from ..results import CustomRuleResult, RuleResult
from ..rule import Rule

RuleFunction = Callable[[RuleContext], Any]


class CustomRule(Rule):
    """Rule delegating to a user function.

    The function receives the rule context and returns either a complete
    ``RuleResult`` (used as is), None (no result) or a plain value wrapped
    in a ``CustomRuleResult``. Value results are selected for the result's
    ``value`` as for any other rule.

    Args:
        function: The rule function
        name: Name reported in results, ``Custom`` by default
        stop_on_failure: Skip the remaining rules of the target on failure
    """

    def __init__(self, function: RuleFunction, name: str | None = None, stop_on_failure: bool = False):
        ArgumentNullError.raise_if_none(function, "function")
        super().__init__(stop_on_failure)
        self.function = function
        self._name = name

    @property
    def name(self) -> str:
        return self._name or super().name

    def validate(self, context: RuleContext) -> RuleResult | None:
        ArgumentNullError.raise_if_none(context, "context")
        context.rule = self

        produced = self.function(context)
        if produced is None:
            return None

        if isinstance(produced, RuleResult):
            result = produced
        else:
            result = CustomRuleResult(self.name, produced)

        ignore_empty = context.validator_context.ignore_empty_results
        for value_result in self.select_value_results(context, result.value):
            if ignore_empty and value_result.is_empty():
                continue
            result.value_results.append(value_result)

        return result

    def execute(self, context: RuleContext) -> Any:
        result = self.validate(context)
        return result.value if result is not None else None
