"""URI rule."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any
from urllib.parse import urlsplit

from validknobs_common.exceptions import ArgumentNullError

from ..context import RuleContext
from ..results import RuleResult, UriRuleResult
from ..rule import BooleanRule

DEFAULT_SCHEMES = ("http", "https")


class UriRule(BooleanRule):
    """The target value must be a URI.

    Args:
        absolute: True requires an absolute URI with one of ``schemes`` and a
            host, False requires a relative reference, None accepts both
        schemes: Accepted schemes (case-insensitive), http and https by default
        stop_on_failure: Skip the remaining rules of the target on failure
    """

    def __init__(
        self,
        absolute: bool | None = True,
        schemes: Iterable[str] | None = None,
        stop_on_failure: bool = False,
    ):
        super().__init__(stop_on_failure)
        self.absolute = absolute
        if schemes is None:
            self.schemes: tuple[str, ...] = DEFAULT_SCHEMES
        else:
            self.schemes = tuple(s.lower() for s in schemes if s is not None)

    def check(self, value: Any, context: RuleContext) -> bool:
        text = str(value)
        if not text or any(ch.isspace() for ch in text):
            return False

        try:
            parts = urlsplit(text)
        except ValueError:
            return False

        if parts.scheme:
            if self.absolute is False:
                return False
            return parts.scheme.lower() in self.schemes and bool(parts.netloc)

        return self.absolute is not True

    def create_result(self, context: RuleContext, value: Any) -> RuleResult | None:
        ArgumentNullError.raise_if_none(context, "context")
        return UriRuleResult(self.name, value, absolute=self.absolute, schemes=self.schemes)
