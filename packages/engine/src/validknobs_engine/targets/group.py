"""Named groups of targets."""

from __future__ import annotations

from typing import Any

from validknobs_common.exceptions import ArgumentNullError

from ..context import TargetContext
from ..results import GroupTargetResult, TargetResult
from ..target import Target, validate_targets


class GroupTarget(Target):
    """A named group of targets evaluated like a validator evaluates its own."""

    def __init__(self, name: str):
        super().__init__(name)
        self.targets: list[Target | None] = []

    def get_value(self, context: TargetContext) -> Any:
        ArgumentNullError.raise_if_none(context, "context")
        return self.targets

    def validate(self, context: TargetContext) -> TargetResult | None:
        ArgumentNullError.raise_if_none(context, "context")
        context.target = self

        result = self.create_result(context)
        if result is None:
            return None

        result.target_results.extend(validate_targets(self.targets, context.validator_context))
        return result

    def create_result(self, context: TargetContext) -> GroupTargetResult | None:
        ArgumentNullError.raise_if_none(context, "context")
        return GroupTargetResult(self.name)

    def __repr__(self) -> str:
        return f"GroupTarget(name={self.name!r}, targets={len(self.targets)})"
