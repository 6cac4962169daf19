"""Targets evaluated only when a condition holds."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from validknobs_common.exceptions import ArgumentNullError

from ..context import TargetContext
from ..results import TargetResult
from ..rule import Rule
from ..target import Target

TargetCondition = Callable[[TargetContext], bool]


class ConditionalTarget(Target):
    """Wraps a target and shares its name and rules.

    Args:
        target: The wrapped target
        condition: Predicate evaluated with the target context
    """

    def __init__(self, target: Target, condition: TargetCondition):
        ArgumentNullError.raise_if_none(target, "target")
        ArgumentNullError.raise_if_none(condition, "condition")
        self.target = target
        self.condition = condition

    @property
    def name(self) -> str:  # type: ignore[override]
        return self.target.name

    @name.setter
    def name(self, value: str) -> None:
        self.target.name = value

    @property
    def rules(self) -> list[Rule | None]:  # type: ignore[override]
        return self.target.rules

    def get_value(self, context: TargetContext) -> Any:
        return self.target.get_value(context)

    def should_validate(self, context: TargetContext) -> bool:
        return bool(self.condition(context))

    def validate(self, context: TargetContext) -> TargetResult | None:
        ArgumentNullError.raise_if_none(context, "context")
        if not self.should_validate(context):
            return None
        return self.target.validate(context)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(target={self.target!r})"


class IfTarget(ConditionalTarget):
    """Evaluates the wrapped target only when the condition holds."""

    pass


class IfNotTarget(ConditionalTarget):
    """Evaluates the wrapped target only when the condition does not hold."""

    def should_validate(self, context: TargetContext) -> bool:
        return not self.condition(context)
