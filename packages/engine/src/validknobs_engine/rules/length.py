"""Length rule."""

from __future__ import annotations

from collections.abc import Sized
from typing import Any

from validknobs_common.exceptions import ArgumentNullError

from ..context import RuleContext
from ..results import LengthRuleResult, RuleResult
from ..rule import BooleanRule


class LengthRule(BooleanRule):
    """The length of the target value must lie within ``[min, max]``.

    Sized values use ``len``; other values are measured through ``str``.
    Either bound may be None.
    """

    def __init__(self, min: int | None = None, max: int | None = None, stop_on_failure: bool = False):
        if min is not None and min < 0:
            raise ValueError(f"min length cannot be negative: {min}")
        if max is not None and max < 0:
            raise ValueError(f"max length cannot be negative: {max}")
        if min is not None and max is not None and min > max:
            raise ValueError(f"min length ({min}) cannot be greater than max ({max})")
        super().__init__(stop_on_failure)
        self.min = min
        self.max = max

    def check(self, value: Any, context: RuleContext) -> bool:
        length = len(value) if isinstance(value, Sized) else len(str(value))
        if self.min is not None and length < self.min:
            return False
        if self.max is not None and length > self.max:
            return False
        return True

    def create_result(self, context: RuleContext, value: Any) -> RuleResult | None:
        ArgumentNullError.raise_if_none(context, "context")
        return LengthRuleResult(self.name, value, min=self.min, max=self.max)
