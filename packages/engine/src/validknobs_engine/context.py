"""Validation contexts.

Three context levels are threaded through a validation run:

- ``ValidatorContext``: the object under validation, the active validator,
  the provider used to resolve nested validators, the control flags and a
  back-reference to the enclosing context for nested validation.
- ``TargetContext``: the target currently being evaluated.
- ``RuleContext``: the rule currently being evaluated.

Contexts are mutable and created per validation call.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from validknobs_common.exceptions import ArgumentNullError

if TYPE_CHECKING:
    from .provider import ValidatorProvider
    from .rule import Rule
    from .target import Target
    from .validator import Validator


class ValidatorContext:
    """State propagated through validation of one object.

    Args:
        obj: The object to validate
        validator: The validator currently in charge of ``obj``, if known
        validator_provider: Provider used to resolve validators for nested
            objects
        parent: Enclosing context when validating a nested object
        continue_validation: When False, validators return without evaluating
            targets and targets stop at the first violated rule
        ignore_empty_results: Drop results that carry no error or success
            identity

    Raises:
        ArgumentNullError: If ``obj`` or ``validator_provider`` is None
    """

    def __init__(
        self,
        obj: Any,
        validator: Validator | None,
        validator_provider: ValidatorProvider,
        parent: ValidatorContext | None = None,
        continue_validation: bool = True,
        ignore_empty_results: bool = True,
    ):
        ArgumentNullError.raise_if_none(obj, "obj")
        ArgumentNullError.raise_if_none(validator_provider, "validator_provider")

        self._obj = obj
        self._validator = validator
        self._validator_provider = validator_provider
        self.parent = parent
        self.continue_validation = continue_validation
        self.ignore_empty_results = ignore_empty_results

    @property
    def obj(self) -> Any:
        return self._obj

    @property
    def validator_provider(self) -> ValidatorProvider:
        return self._validator_provider

    @property
    def validator(self) -> Validator | None:
        return self._validator

    @validator.setter
    def validator(self, value: Validator) -> None:
        ArgumentNullError.raise_if_none(value, "validator")
        self._validator = value

    @property
    def root(self) -> ValidatorContext:
        """The outermost context of a nested validation."""
        context = self
        while context.parent is not None:
            context = context.parent
        return context

    @property
    def depth(self) -> int:
        """Number of enclosing contexts."""
        depth = 0
        context = self.parent
        while context is not None:
            depth += 1
            context = context.parent
        return depth

    def create_child(self, obj: Any) -> ValidatorContext:
        """Create the context for validating a nested object.

        The child shares this context's provider and flags and refers back to
        this context as its parent.
        """
        return ValidatorContext(
            obj,
            None,
            self._validator_provider,
            parent=self,
            continue_validation=self.continue_validation,
            ignore_empty_results=self.ignore_empty_results,
        )

    def __repr__(self) -> str:
        return (
            f"ValidatorContext(obj={type(self._obj).__name__}, "
            f"validator={type(self._validator).__name__ if self._validator else None}, "
            f"depth={self.depth})"
        )


class TargetContext:
    """Context for evaluating one target.

    Args:
        target: The target being evaluated (may be set later by the target)
        validator_context: The enclosing validator context
    """

    def __init__(self, target: Target | None, validator_context: ValidatorContext):
        ArgumentNullError.raise_if_none(validator_context, "validator_context")
        self._target = target
        self._validator_context = validator_context

    @property
    def validator_context(self) -> ValidatorContext:
        return self._validator_context

    @property
    def target(self) -> Target | None:
        return self._target

    @target.setter
    def target(self, value: Target) -> None:
        ArgumentNullError.raise_if_none(value, "target")
        self._target = value

    @property
    def obj(self) -> Any:
        """The object owning the target."""
        return self._validator_context.obj

    def get_value(self) -> Any:
        """Resolve the value of the current target."""
        if self._target is None:
            raise ArgumentNullError("target", "Target context has no target to resolve")
        return self._target.get_value(self)


class RuleContext:
    """Context for evaluating one rule.

    Args:
        rule: The rule being evaluated (may be set later by the rule)
        target_context: The enclosing target context
    """

    def __init__(self, rule: Rule | None, target_context: TargetContext):
        ArgumentNullError.raise_if_none(target_context, "target_context")
        self._rule = rule
        self._target_context = target_context

    @property
    def target_context(self) -> TargetContext:
        return self._target_context

    @property
    def validator_context(self) -> ValidatorContext:
        return self._target_context.validator_context

    @property
    def rule(self) -> Rule | None:
        return self._rule

    @rule.setter
    def rule(self, value: Rule) -> None:
        ArgumentNullError.raise_if_none(value, "rule")
        self._rule = value

    def get_value(self) -> Any:
        """Resolve the value of the target the rule is bound to."""
        return self._target_context.get_value()
