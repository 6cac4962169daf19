"""Validation entry point."""

from __future__ import annotations

import logging
from typing import Any

from validknobs_common.exceptions import ArgumentNullError

from .context import ValidatorContext
from .provider import ValidatorProvider
from .results import ValidatorResult

logger = logging.getLogger(__name__)


class ValidationController:
    """Validates objects with the validators resolved by a provider.

    Args:
        validator_provider: Provider resolving validators by type
        continue_validation: Initial ``continue_validation`` of root contexts
        ignore_empty_results: Initial ``ignore_empty_results`` of root contexts

    Example:
        ```python
        controller = ValidationController(DefaultValidatorProvider())
        result = controller.validate(LoginForm(username, password))
        for resource_name, resource_key in result.errors():
            ...
        ```
    """

    def __init__(
        self,
        validator_provider: ValidatorProvider,
        continue_validation: bool = True,
        ignore_empty_results: bool = True,
    ):
        ArgumentNullError.raise_if_none(validator_provider, "validator_provider")
        self.validator_provider = validator_provider
        self.continue_validation = continue_validation
        self.ignore_empty_results = ignore_empty_results

    def validate(self, obj: Any) -> ValidatorResult | None:
        """Validate an object with the validator registered for its type.

        Returns:
            The result tree, or None when the validator suppressed it

        Raises:
            ArgumentNullError: If obj is None
            ValidatorNotFoundError: If no validator exists for the object's type
        """
        ArgumentNullError.raise_if_none(obj, "obj")
        context = ValidatorContext(
            obj,
            None,
            self.validator_provider,
            None,
            self.continue_validation,
            self.ignore_empty_results,
        )
        return self.validate_context(context)

    def validate_context(self, context: ValidatorContext) -> ValidatorResult | None:
        """Validate the object of a prepared context."""
        ArgumentNullError.raise_if_none(context, "context")
        validator = self.validator_provider.get_validator(type(context.obj))
        logger.debug(f"Validating {type(context.obj).__name__} with {type(validator).__name__}")
        return validator.validate(context)

    def is_valid(self, obj: Any) -> bool:
        """True when validation reports no violated rule."""
        result = self.validate(obj)
        return result is None or not result.errors()

    def __repr__(self) -> str:
        return (
            f"ValidationController(provider={self.validator_provider!r}, "
            f"continue_validation={self.continue_validation}, "
            f"ignore_empty_results={self.ignore_empty_results})"
        )
