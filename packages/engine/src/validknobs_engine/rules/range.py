"""Range rule."""

from __future__ import annotations

import math
from typing import Any

from validknobs_common.exceptions import ArgumentNullError

from ..context import RuleContext
from ..results import RangeRuleResult, RuleResult
from ..rule import BooleanRule


class RangeRule(BooleanRule):
    """The target value must lie within ``[min, max]``.

    Works with any mutually comparable values (numbers, dates, strings).
    Values that cannot be compared with the bounds, and NaN, fail.
    """

    def __init__(self, min: Any = None, max: Any = None, stop_on_failure: bool = False):
        super().__init__(stop_on_failure)
        self.min = min
        self.max = max

    def check(self, value: Any, context: RuleContext) -> bool:
        if isinstance(value, float) and math.isnan(value):
            return False
        try:
            if self.min is not None and value < self.min:
                return False
            if self.max is not None and value > self.max:
                return False
        except TypeError:
            return False
        return True

    def create_result(self, context: RuleContext, value: Any) -> RuleResult | None:
        ArgumentNullError.raise_if_none(context, "context")
        return RangeRuleResult(self.name, value, min=self.min, max=self.max)
