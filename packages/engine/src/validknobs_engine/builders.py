"""Fluent builder used by ``Validator.configure``.

The builder appends targets to ``Validator.targets`` and rules to
``Target.rules`` in call order. Every call returns a builder positioned on
what was just declared, so declarations chain::

    validate.member("username") \\
        .is_required().with_error("Errors", "Username.Required") \\
        .has_length(8, 80).with_error("Errors", "Username.Length")
    validate.each_of("emails").is_email()
    validate.member("address").has_validator()
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from validknobs_common.exceptions import ArgumentNullError, NotFoundError

from .results import ValueResult
from .rule import Rule
from .rules import (
    Comparison,
    ComparisonRule,
    ConditionalRule,
    CreditCardRule,
    CustomRule,
    DigitsRule,
    EmailRule,
    GroupRule,
    IfNotRule,
    IfRule,
    LengthRule,
    RangeRule,
    RegexRule,
    RequiredRule,
    SafeTextRule,
    TargetComparisonRule,
    UriRule,
    ValidatorRule,
)
from .rules.comparison import OtherValueProvider
from .rules.conditional import RuleCondition
from .rules.custom import RuleFunction
from .target import Target
from .targets import (
    AnyOfTarget,
    ConditionalTarget,
    EachOfTarget,
    GroupTarget,
    IfNotTarget,
    IfTarget,
    MemberTarget,
    ObjectTarget,
)
from .targets.conditional import TargetCondition
from .targets.item import ItemsSelector

if TYPE_CHECKING:
    from .validator import Validator

Selector = str | Callable[[Any], Any]


def attribute_path(path: str) -> Callable[[Any], Any]:
    """Accessor for a dotted attribute path.

    Mapping objects are read by key. A None along the path yields None.
    """
    parts = path.split(".")

    def accessor(obj: Any) -> Any:
        for part in parts:
            if obj is None:
                return None
            if isinstance(obj, Mapping):
                obj = obj.get(part)
            else:
                obj = getattr(obj, part)
        return obj

    return accessor


def resolve_selector(selector: Selector, name: str | None) -> tuple[str, Callable[[Any], Any]]:
    """Turn a member selector into a ``(name, accessor)`` pair."""
    ArgumentNullError.raise_if_none(selector, "selector")
    if isinstance(selector, str):
        if not selector:
            raise ValueError("Member path cannot be empty")
        return name or selector, attribute_path(selector)
    if not callable(selector):
        raise TypeError(f"Selector must be an attribute path or a callable, got {type(selector).__name__}")
    if not name:
        raise ValueError("A name is required for callable selectors")
    return name, selector


def find_group_target(targets: list[Target | None], name: str) -> GroupTarget | None:
    """Find a target group by name, searching nested groups depth first."""
    for target in targets:
        while isinstance(target, ConditionalTarget):
            target = target.target
        if isinstance(target, GroupTarget):
            if target.name == name:
                return target
            found = find_group_target(target.targets, name)
            if found is not None:
                return found
    return None


def find_group_rule(rules: list[Rule | None], name: str) -> GroupRule | None:
    """Find a rule group by name among a target's rules."""
    for rule in rules:
        while isinstance(rule, ConditionalRule):
            rule = rule.rule
        if isinstance(rule, GroupRule) and rule.name == name:
            return rule
    return None


class InitialTargetBuilder:
    """Entry point of the builder: declares targets.

    Args:
        validator: The validator receiving the declared targets
    """

    def __init__(self, validator: Validator):
        ArgumentNullError.raise_if_none(validator, "validator")
        self.validator = validator

    def target(self, target: Target) -> TargetBuilder:
        """Declare a custom target."""
        ArgumentNullError.raise_if_none(target, "target")
        self.validator.targets.append(target)
        return TargetBuilder(self.validator, target, self.validator.targets)

    def member(self, selector: Selector, name: str | None = None) -> TargetBuilder:
        """Declare a member of the validated object.

        Args:
            selector: Dotted attribute path, or a callable taking the object
            name: Target name; defaults to the path, required for callables
        """
        target_name, accessor = resolve_selector(selector, name)
        return self.target(MemberTarget(target_name, accessor))

    def object(self, name: str = "") -> TargetBuilder:
        """Declare the validated object itself."""
        return self.target(ObjectTarget(name))

    def each_of(
        self,
        selector: Selector,
        items_selector: ItemsSelector | None = None,
        name: str | None = None,
    ) -> TargetBuilder:
        """Declare a collection member whose items are validated one by one."""
        target_name, accessor = resolve_selector(selector, name)
        return self.target(EachOfTarget(target_name, accessor, items_selector))

    def any_of(
        self,
        selector: Selector,
        items_selector: ItemsSelector | None = None,
        name: str | None = None,
    ) -> TargetBuilder:
        """Declare a collection member compared by any of its items."""
        target_name, accessor = resolve_selector(selector, name)
        return self.target(AnyOfTarget(target_name, accessor, items_selector))

    def group(self, name: str) -> GroupTargetBuilder:
        """Declare a named target group; targets join it with ``in_group``."""
        ArgumentNullError.raise_if_none(name, "name")
        group = GroupTarget(name)
        self.validator.targets.append(group)
        return GroupTargetBuilder(self.validator, group, self.validator.targets)


class _PositionedTargetBuilder(InitialTargetBuilder):
    """Builder positioned on a declared target held in ``owner``."""

    def __init__(self, validator: Validator, target: Target, owner: list[Target | None]):
        super().__init__(validator)
        ArgumentNullError.raise_if_none(target, "target")
        self.current_target = target
        self._owner = owner

    def _replace_target(self, target: Target) -> None:
        index = self._owner.index(self.current_target)
        self._owner[index] = target
        self.current_target = target

    def _wrap_target(self, wrapper: type[IfTarget] | type[IfNotTarget], condition: TargetCondition) -> None:
        ArgumentNullError.raise_if_none(condition, "condition")
        self._replace_target(wrapper(self.current_target, condition))


class GroupTargetBuilder(_PositionedTargetBuilder):
    """Builder positioned on a target group."""

    def if_(self, condition: TargetCondition) -> GroupTargetBuilder:
        """Evaluate the group only when ``condition(target_context)`` holds."""
        self._wrap_target(IfTarget, condition)
        return self

    def if_not(self, condition: TargetCondition) -> GroupTargetBuilder:
        """Evaluate the group only when ``condition(target_context)`` does not hold."""
        self._wrap_target(IfNotTarget, condition)
        return self


class TargetBuilder(_PositionedTargetBuilder):
    """Builder positioned on a target: declares its rules."""

    def has_rule(self, rule: Rule) -> RuleBuilder:
        """Bind a rule instance to the current target."""
        ArgumentNullError.raise_if_none(rule, "rule")
        rules = self.current_target.rules
        rules.append(rule)
        return RuleBuilder(self.validator, self.current_target, self._owner, rule, rules)

    def is_required(self, allow_empty: bool = True, stop_on_failure: bool = False) -> RuleBuilder:
        return self.has_rule(RequiredRule(allow_empty=allow_empty, stop_on_failure=stop_on_failure))

    def has_length(
        self, min: int | None = None, max: int | None = None, stop_on_failure: bool = False
    ) -> RuleBuilder:
        return self.has_rule(LengthRule(min, max, stop_on_failure=stop_on_failure))

    def has_range(self, min: Any = None, max: Any = None, stop_on_failure: bool = False) -> RuleBuilder:
        return self.has_rule(RangeRule(min, max, stop_on_failure=stop_on_failure))

    def compares_to(
        self,
        comparison: Comparison,
        other: Any = None,
        other_provider: OtherValueProvider | None = None,
        stop_on_failure: bool = False,
    ) -> RuleBuilder:
        """Compare the target value with a constant or a computed value."""
        return self.has_rule(
            ComparisonRule(
                other,
                comparison,
                other_provider=other_provider,
                stop_on_failure=stop_on_failure,
            )
        )

    def is_equal_to(self, other: Any = None, **kwargs: Any) -> RuleBuilder:
        return self.compares_to(Comparison.EQUAL, other, **kwargs)

    def is_not_equal_to(self, other: Any = None, **kwargs: Any) -> RuleBuilder:
        return self.compares_to(Comparison.NOT_EQUAL, other, **kwargs)

    def is_less_than(self, other: Any = None, **kwargs: Any) -> RuleBuilder:
        return self.compares_to(Comparison.LESS_THAN, other, **kwargs)

    def is_less_than_or_equal_to(self, other: Any = None, **kwargs: Any) -> RuleBuilder:
        return self.compares_to(Comparison.LESS_THAN_OR_EQUAL, other, **kwargs)

    def is_greater_than(self, other: Any = None, **kwargs: Any) -> RuleBuilder:
        return self.compares_to(Comparison.GREATER_THAN, other, **kwargs)

    def is_greater_than_or_equal_to(self, other: Any = None, **kwargs: Any) -> RuleBuilder:
        return self.compares_to(Comparison.GREATER_THAN_OR_EQUAL, other, **kwargs)

    def compares_to_target(
        self,
        comparison: Comparison,
        other: Target | Selector,
        name: str | None = None,
        stop_on_failure: bool = False,
    ) -> RuleBuilder:
        """Compare the target value with the value of another target.

        Args:
            comparison: The comparison to apply
            other: A target, or a member selector resolved like ``member``
            name: Name for a callable selector
            stop_on_failure: Skip the remaining rules of the target on failure
        """
        ArgumentNullError.raise_if_none(other, "other")
        if not isinstance(other, Target):
            other_name, accessor = resolve_selector(other, name)
            other = MemberTarget(other_name, accessor)
        return self.has_rule(TargetComparisonRule(other, comparison, stop_on_failure=stop_on_failure))

    def is_equal_to_target(self, other: Target | Selector, **kwargs: Any) -> RuleBuilder:
        return self.compares_to_target(Comparison.EQUAL, other, **kwargs)

    def is_not_equal_to_target(self, other: Target | Selector, **kwargs: Any) -> RuleBuilder:
        return self.compares_to_target(Comparison.NOT_EQUAL, other, **kwargs)

    def is_less_than_target(self, other: Target | Selector, **kwargs: Any) -> RuleBuilder:
        return self.compares_to_target(Comparison.LESS_THAN, other, **kwargs)

    def is_less_than_or_equal_to_target(self, other: Target | Selector, **kwargs: Any) -> RuleBuilder:
        return self.compares_to_target(Comparison.LESS_THAN_OR_EQUAL, other, **kwargs)

    def is_greater_than_target(self, other: Target | Selector, **kwargs: Any) -> RuleBuilder:
        return self.compares_to_target(Comparison.GREATER_THAN, other, **kwargs)

    def is_greater_than_or_equal_to_target(self, other: Target | Selector, **kwargs: Any) -> RuleBuilder:
        return self.compares_to_target(Comparison.GREATER_THAN_OR_EQUAL, other, **kwargs)

    def matches_regex(self, pattern: str, flags: int = 0, stop_on_failure: bool = False) -> RuleBuilder:
        return self.has_rule(RegexRule(pattern, flags, stop_on_failure=stop_on_failure))

    def is_digits(self, stop_on_failure: bool = False) -> RuleBuilder:
        return self.has_rule(DigitsRule(stop_on_failure))

    def is_email(self, stop_on_failure: bool = False) -> RuleBuilder:
        return self.has_rule(EmailRule(stop_on_failure))

    def is_uri(
        self,
        absolute: bool | None = True,
        schemes: list[str] | None = None,
        stop_on_failure: bool = False,
    ) -> RuleBuilder:
        return self.has_rule(UriRule(absolute, schemes, stop_on_failure=stop_on_failure))

    def is_credit_card(self, stop_on_failure: bool = False) -> RuleBuilder:
        return self.has_rule(CreditCardRule(stop_on_failure))

    def is_safe_text(self, stop_on_failure: bool = False) -> RuleBuilder:
        return self.has_rule(SafeTextRule(stop_on_failure))

    def has_custom_rule(
        self, function: RuleFunction, name: str | None = None, stop_on_failure: bool = False
    ) -> RuleBuilder:
        return self.has_rule(CustomRule(function, name, stop_on_failure=stop_on_failure))

    def has_validator(self) -> RuleBuilder:
        """Validate the target value with the validator for its type."""
        return self.has_rule(ValidatorRule())

    def group(self, name: str, stop_on_failure: bool = False) -> RuleBuilder:  # type: ignore[override]
        """Declare a named rule group; rules join it with ``in_group``."""
        ArgumentNullError.raise_if_none(name, "name")
        return self.has_rule(GroupRule(name, stop_on_failure=stop_on_failure))

    def if_(self, condition: TargetCondition) -> TargetBuilder:
        """Evaluate the target only when ``condition(target_context)`` holds."""
        self._wrap_target(IfTarget, condition)
        return self

    def if_not(self, condition: TargetCondition) -> TargetBuilder:
        """Evaluate the target only when ``condition(target_context)`` does not hold."""
        self._wrap_target(IfNotTarget, condition)
        return self

    def in_group(self, name: str) -> TargetBuilder:
        """Move the target into the target group ``name``.

        Raises:
            NotFoundError: If no such group was declared
        """
        group = find_group_target(self.validator.targets, name)
        if group is None:
            raise NotFoundError(f"No target group named '{name}'", context={"group": name})
        self._owner.remove(self.current_target)
        group.targets.append(self.current_target)
        self._owner = group.targets
        return self


class RuleBuilder(TargetBuilder):
    """Builder positioned on a rule: attaches value results to it."""

    def __init__(
        self,
        validator: Validator,
        target: Target,
        owner: list[Target | None],
        rule: Rule,
        rule_owner: list[Rule | None],
    ):
        super().__init__(validator, target, owner)
        ArgumentNullError.raise_if_none(rule, "rule")
        self.current_rule = rule
        self._rule_owner = rule_owner

    def with_result(
        self,
        match_value: Any,
        resource_name: str | None = None,
        resource_key: str | None = None,
    ) -> RuleBuilder:
        """Attach a value result selected when the rule produces ``match_value``.

        A ``ValueResult`` instance may be passed as the only argument.
        """
        if isinstance(match_value, ValueResult):
            value_result = match_value
        else:
            value_result = ValueResult(match_value, resource_name, resource_key)
        self.current_rule.value_results.append(value_result)
        return self

    def with_error(self, resource_name: str | None = None, resource_key: str | None = None) -> RuleBuilder:
        """Attach an error identity, selected when the rule fails."""
        return self.with_result(False, resource_name, resource_key)

    def with_success(self, resource_name: str | None = None, resource_key: str | None = None) -> RuleBuilder:
        """Attach a success identity, selected when the rule passes."""
        return self.with_result(True, resource_name, resource_key)

    def _replace_rule(self, rule: Rule) -> None:
        index = self._rule_owner.index(self.current_rule)
        self._rule_owner[index] = rule
        self.current_rule = rule

    def if_(self, condition: RuleCondition) -> RuleBuilder:  # type: ignore[override]
        """Evaluate the rule only when ``condition(rule_context)`` holds."""
        ArgumentNullError.raise_if_none(condition, "condition")
        self._replace_rule(IfRule(self.current_rule, condition))
        return self

    def if_not(self, condition: RuleCondition) -> RuleBuilder:  # type: ignore[override]
        """Evaluate the rule only when ``condition(rule_context)`` does not hold."""
        ArgumentNullError.raise_if_none(condition, "condition")
        self._replace_rule(IfNotRule(self.current_rule, condition))
        return self

    def in_group(self, name: str) -> RuleBuilder:
        """Move the rule into the rule group ``name`` of the current target.

        Raises:
            NotFoundError: If no such group was declared on the target
        """
        group = find_group_rule(self.current_target.rules, name)
        if group is None:
            raise NotFoundError(
                f"No rule group named '{name}'",
                context={"group": name, "target": self.current_target.name},
            )
        self._rule_owner.remove(self.current_rule)
        group.rules.append(self.current_rule)
        self._rule_owner = group.rules
        return self
