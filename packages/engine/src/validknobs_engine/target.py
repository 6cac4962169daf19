"""Target base class.

A target names something to validate, the object itself or one of its
members, and owns the ordered rules declared for it.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any

from validknobs_common.exceptions import ArgumentNullError

from .context import RuleContext, TargetContext, ValidatorContext
from .rule import Rule
from .results import TargetResult

logger = logging.getLogger(__name__)


class Target(ABC):
    """Base class for validation targets.

    Args:
        name: Target name reported in results
    """

    def __init__(self, name: str):
        self.name = name
        self.rules: list[Rule | None] = []

    @abstractmethod
    def get_value(self, context: TargetContext) -> Any:
        """Resolve the value under test."""

    def validate(self, context: TargetContext) -> TargetResult | None:
        """Evaluate the target's rules in declaration order.

        After a violated rule the remaining rules are skipped when the
        validator context disables ``continue_validation`` or the rule was
        declared with ``stop_on_failure``.

        Returns:
            The target result, or None when the target suppressed its result

        Raises:
            ArgumentNullError: If context is None
        """
        ArgumentNullError.raise_if_none(context, "context")
        context.target = self

        result = self.create_result(context)
        if result is None:
            return None

        ignore_empty = context.validator_context.ignore_empty_results
        for rule in self.rules:
            if rule is None:
                continue

            rule_context = RuleContext(None, context)
            rule_result = rule.validate(rule_context)
            if rule_result is None:
                continue

            if not ignore_empty or not rule_result.is_empty():
                result.rule_results.append(rule_result)

            if rule.stops_target(rule_result, rule_context):
                logger.debug(f"Target '{self.name}' stopped after rule '{rule_result.name}'")
                break

        return result

    def create_result(self, context: TargetContext) -> TargetResult | None:
        ArgumentNullError.raise_if_none(context, "context")
        return TargetResult(self.name, self.get_value(context))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, rules={len(self.rules)})"


def validate_targets(
    targets: Iterable[Target | None], context: ValidatorContext
) -> list[TargetResult]:
    """Evaluate targets in order, each with a fresh target context.

    Evaluation stops once ``continue_validation`` is cleared. None targets
    and None results are skipped; empty results are dropped while
    ``ignore_empty_results`` is set.
    """
    results: list[TargetResult] = []
    for target in targets:
        if not context.continue_validation:
            break
        if target is None:
            continue

        target_result = target.validate(TargetContext(None, context))
        if target_result is None:
            continue

        if not context.ignore_empty_results or not target_result.is_empty():
            results.append(target_result)

    return results
