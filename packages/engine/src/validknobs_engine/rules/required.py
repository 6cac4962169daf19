"""Required value rule."""

from __future__ import annotations

from collections.abc import Sized

from validknobs_common.exceptions import ArgumentNullError

from ..context import RuleContext
from ..rule import Rule


class RequiredRule(Rule):
    """The target value must not be None.

    Args:
        allow_empty: When False, empty strings and collections fail as well
        stop_on_failure: Skip the remaining rules of the target on failure
    """

    def __init__(self, allow_empty: bool = True, stop_on_failure: bool = False):
        super().__init__(stop_on_failure)
        self.allow_empty = allow_empty

    def execute(self, context: RuleContext) -> bool:
        ArgumentNullError.raise_if_none(context, "context")
        value = context.get_value()
        if value is None:
            return False
        if not self.allow_empty and isinstance(value, Sized) and len(value) == 0:
            return False
        return True
