"""Comparison rules.

``ComparisonRule`` compares the target value with a constant or with a value
computed from the rule context. ``TargetComparisonRule`` compares it with the
value of another target of the same object, e.g. a password confirmation.
"""

from __future__ import annotations

import operator
from collections.abc import Callable
from enum import Enum
from typing import Any

from validknobs_common.exceptions import ArgumentNullError

from ..context import RuleContext
from ..results import ComparisonRuleResult, RuleResult
from ..rule import BooleanRule
from ..target import Target
from ..targets.item import AnyOfTarget, ItemTarget

OtherValueProvider = Callable[[RuleContext], Any]


class Comparison(Enum):
    EQUAL = "Equal"
    NOT_EQUAL = "NotEqual"
    LESS_THAN = "LessThan"
    LESS_THAN_OR_EQUAL = "LessThanOrEqual"
    GREATER_THAN = "GreaterThan"
    GREATER_THAN_OR_EQUAL = "GreaterThanOrEqual"

    def compare(self, value: Any, other: Any) -> bool:
        """Apply the comparison; incomparable values compare False."""
        try:
            return bool(_OPERATORS[self](value, other))
        except TypeError:
            return False


_OPERATORS: dict[Comparison, Callable[[Any, Any], Any]] = {
    Comparison.EQUAL: operator.eq,
    Comparison.NOT_EQUAL: operator.ne,
    Comparison.LESS_THAN: operator.lt,
    Comparison.LESS_THAN_OR_EQUAL: operator.le,
    Comparison.GREATER_THAN: operator.gt,
    Comparison.GREATER_THAN_OR_EQUAL: operator.ge,
}


class ComparisonRule(BooleanRule):
    """Compares the target value with another value.

    Args:
        other: Constant to compare with (ignored when ``other_provider`` is set)
        comparison: The comparison to apply
        other_provider: Callable computing the other value from the rule context
        stop_on_failure: Skip the remaining rules of the target on failure
    """

    def __init__(
        self,
        other: Any = None,
        comparison: Comparison = Comparison.EQUAL,
        other_provider: OtherValueProvider | None = None,
        stop_on_failure: bool = False,
    ):
        super().__init__(stop_on_failure)
        self.comparison = Comparison(comparison)
        self.other_provider = other_provider if other_provider is not None else (lambda _context: other)

    @property
    def name(self) -> str:
        return self.comparison.value

    def get_other_value(self, context: RuleContext) -> Any:
        return self.other_provider(context)

    def check(self, value: Any, context: RuleContext) -> bool:
        other = self.get_other_value(context)
        if other is None:
            return False
        return self.comparison.compare(value, other)

    def create_result(self, context: RuleContext, value: Any) -> RuleResult | None:
        ArgumentNullError.raise_if_none(context, "context")
        return ComparisonRuleResult(self.name, value, other_value=self.get_other_value(context))


class TargetComparisonRule(ComparisonRule):
    """Compares the target value with the value of another target.

    When the other target is a collection target every item must satisfy the
    comparison, or at least one item for an ``AnyOfTarget``.
    """

    def __init__(
        self,
        other_target: Target,
        comparison: Comparison = Comparison.EQUAL,
        stop_on_failure: bool = False,
    ):
        ArgumentNullError.raise_if_none(other_target, "other_target")
        super().__init__(
            comparison=comparison,
            other_provider=self._other_target_value,
            stop_on_failure=stop_on_failure,
        )
        self.other_target = other_target

    @property
    def name(self) -> str:
        return f"{self.comparison.value}ToTarget"

    def _other_target_value(self, context: RuleContext) -> Any:
        value = self.other_target.get_value(context.target_context)
        if isinstance(self.other_target, ItemTarget) and value is not None:
            return list(value)
        return value

    def check(self, value: Any, context: RuleContext) -> bool:
        other = self.get_other_value(context)
        if other is None:
            return False

        if not isinstance(self.other_target, ItemTarget):
            return self.comparison.compare(value, other)

        matches = (self.comparison.compare(value, item) for item in other)
        if isinstance(self.other_target, AnyOfTarget):
            return any(matches)
        return all(matches)
