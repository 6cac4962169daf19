"""Rule base classes."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any

from validknobs_common.exceptions import ArgumentNullError

from .context import RuleContext
from .results import Outcome, RuleResult, ValueResult


class Rule(ABC):
    """Base class for all rules.

    A rule computes a value for the target it is bound to (``execute``),
    wraps it in a result (``create_result``) and attaches the value results
    whose ``match_value`` equals the computed value.

    Value results are attached by the rule builder through ``with_error``,
    ``with_success`` and ``with_result``.
    """

    def __init__(self, stop_on_failure: bool = False):
        self.value_results: list[ValueResult] = []
        self.stop_on_failure = stop_on_failure

    @property
    def name(self) -> str:
        """Rule name: the class name without a trailing ``Rule``."""
        name = type(self).__name__
        return name[: -len("Rule")] if name.endswith("Rule") and name != "Rule" else name

    def validate(self, context: RuleContext) -> RuleResult | None:
        """Evaluate the rule.

        Args:
            context: Rule context bound to the target being evaluated

        Returns:
            The rule result, or None when the rule suppressed its result

        Raises:
            ArgumentNullError: If context is None
        """
        ArgumentNullError.raise_if_none(context, "context")
        context.rule = self

        value = self.execute(context)
        result = self.create_result(context, value)
        if result is None:
            return None

        ignore_empty = context.validator_context.ignore_empty_results
        for value_result in self.select_value_results(context, value):
            if value_result is None or (ignore_empty and value_result.is_empty()):
                continue
            result.value_results.append(value_result)

        return result

    @abstractmethod
    def execute(self, context: RuleContext) -> Any:
        """Compute the rule value for the current target."""

    def create_result(self, context: RuleContext, value: Any) -> RuleResult | None:
        ArgumentNullError.raise_if_none(context, "context")
        return RuleResult(self.name, value)

    def select_value_results(self, context: RuleContext, value: Any) -> Iterable[ValueResult]:
        """Value results whose match value equals ``value``, in declaration order.

        A skipped rule (value None) selects nothing.
        """
        ArgumentNullError.raise_if_none(context, "context")
        if value is None:
            return []
        return [vr for vr in self.value_results if vr is not None and vr.matches(value)]

    def outcome(self, result: RuleResult) -> Outcome:
        return result.outcome

    def stops_target(self, result: RuleResult, context: RuleContext) -> bool:
        """Whether the remaining rules of the target must be skipped."""
        if self.outcome(result) is not Outcome.VIOLATED:
            return False
        return self.stop_on_failure or not context.validator_context.continue_validation

    def __repr__(self) -> str:
        return f"{type(self).__name__}(value_results={len(self.value_results)})"


class BooleanRule(Rule):
    """Rule whose value is True when the target value satisfies ``check``.

    ``None`` target values satisfy every boolean rule except the required
    rule.
    """

    def execute(self, context: RuleContext) -> bool:
        ArgumentNullError.raise_if_none(context, "context")
        value = context.get_value()
        if value is None:
            return True
        return bool(self.check(value, context))

    @abstractmethod
    def check(self, value: Any, context: RuleContext) -> bool:
        """Check a non-None target value."""
