"""Nested validation rule."""

from __future__ import annotations

import logging
from typing import Any

from validknobs_common.exceptions import ArgumentNullError

from ..context import RuleContext
from ..results import RuleResult, ValidatorRuleResult
from ..rule import Rule

logger = logging.getLogger(__name__)


class ValidatorRule(Rule):
    """Validates the target value with the validator registered for its type.

    The validator is resolved through the provider of the current validator
    context and runs in a child context whose parent is the current one. The
    nested ``ValidatorResult`` is attached to the rule result. A None target
    value is not validated.

    The rule's value is True when the nested result holds no violation,
    False otherwise and None when nothing was validated.

    Raises:
        ValidatorNotFoundError: If no validator exists for the value's type
    """

    def validate(self, context: RuleContext) -> RuleResult | None:
        ArgumentNullError.raise_if_none(context, "context")
        context.rule = self

        result = self.create_result(context, None)
        if result is None:
            return None

        value = context.get_value()
        if value is None:
            return result

        validator_context = context.validator_context
        validator = validator_context.validator_provider.get_validator(type(value))
        logger.debug(
            f"Validating nested {type(value).__name__} with {type(validator).__name__} "
            f"at depth {validator_context.depth + 1}"
        )

        nested = validator.validate(validator_context.create_child(value))
        result.validator_result = nested
        if nested is not None:
            result.value = not nested.errors()
            for value_result in self.select_value_results(context, result.value):
                if validator_context.ignore_empty_results and value_result.is_empty():
                    continue
                result.value_results.append(value_result)

        return result

    def execute(self, context: RuleContext) -> Any:
        result = self.validate(context)
        return result.value if result is not None else None

    def create_result(self, context: RuleContext, value: Any) -> ValidatorRuleResult | None:
        ArgumentNullError.raise_if_none(context, "context")
        return ValidatorRuleResult(self.name, value)
