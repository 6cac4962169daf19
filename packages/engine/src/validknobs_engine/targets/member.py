"""Targets resolving the validated object or one of its members."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from validknobs_common.exceptions import ArgumentNullError

from ..context import TargetContext
from ..results import TargetResult
from ..target import Target


class MemberTarget(Target):
    """Target resolving a member of the validated object.

    Args:
        name: Target name reported in results
        member: Accessor called with the validated object
    """

    def __init__(self, name: str, member: Callable[[Any], Any]):
        super().__init__(name)
        self.member = member

    @property
    def member(self) -> Callable[[Any], Any]:
        return self._member

    @member.setter
    def member(self, value: Callable[[Any], Any]) -> None:
        ArgumentNullError.raise_if_none(value, "member")
        if not callable(value):
            raise TypeError(f"Member accessor must be callable, got {type(value).__name__}")
        self._member = value

    def get_value(self, context: TargetContext) -> Any:
        ArgumentNullError.raise_if_none(context, "context")
        return self._member(context.validator_context.obj)


class ObjectTarget(Target):
    """Target resolving the validated object itself."""

    def __init__(self, name: str = ""):
        super().__init__(name)

    def get_value(self, context: TargetContext) -> Any:
        ArgumentNullError.raise_if_none(context, "context")
        return context.validator_context.obj

    def create_result(self, context: TargetContext) -> TargetResult | None:
        ArgumentNullError.raise_if_none(context, "context")
        return TargetResult(self.name)
