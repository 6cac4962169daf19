"""Validation result tree.

A validation run produces a ``ValidatorResult`` holding one ``TargetResult``
per evaluated target, each holding one ``RuleResult`` per evaluated rule,
each holding the ``ValueResult`` identities selected for the value the rule
produced. Nested validation, grouping and collection items add further
levels through the specialised result types below.

Results carry resource name/key pairs, never rendered text.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Outcome(Enum):
    """Outcome of a single rule evaluation."""

    SATISFIED = "satisfied"
    VIOLATED = "violated"
    SKIPPED = "skipped"

    @classmethod
    def of(cls, value: Any) -> Outcome:
        """Map a rule value to an outcome.

        ``None`` means the rule was not evaluated, any other value is judged
        by its truthiness.
        """
        if value is None:
            return cls.SKIPPED
        return cls.SATISFIED if value else cls.VIOLATED


@dataclass
class ValueResult:
    """Error or success identity attached to a rule.

    Selected for a rule result when ``match_value`` equals the value the
    rule produced.
    """

    match_value: Any
    resource_name: str | None = None
    resource_key: str | None = None

    def is_empty(self) -> bool:
        """True when neither resource field carries a value."""
        return not self.resource_name and not self.resource_key

    def matches(self, value: Any) -> bool:
        return self.match_value == value

    def to_dict(self) -> dict[str, Any]:
        return {
            "match_value": self.match_value,
            "resource_name": self.resource_name,
            "resource_key": self.resource_key,
        }


@dataclass
class RuleResult:
    """Outcome of one rule evaluation."""

    name: str
    value: Any = None
    value_results: list[ValueResult] = field(default_factory=list)

    @property
    def outcome(self) -> Outcome:
        return Outcome.of(self.value)

    def is_empty(self) -> bool:
        return len(self.value_results) == 0

    def iter_errors(self) -> Iterator[tuple[str | None, str | None]]:
        """Yield resource pairs attached to this result when it is a violation."""
        if self.outcome is Outcome.VIOLATED:
            for value_result in self.value_results:
                yield value_result.resource_name, value_result.resource_key

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "value": self.value,
            "outcome": self.outcome.value,
            "value_results": [vr.to_dict() for vr in self.value_results],
        }


@dataclass
class LengthRuleResult(RuleResult):
    min: int | None = None
    max: int | None = None

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data.update(min=self.min, max=self.max)
        return data


@dataclass
class RangeRuleResult(RuleResult):
    min: Any = None
    max: Any = None

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data.update(min=self.min, max=self.max)
        return data


@dataclass
class ComparisonRuleResult(RuleResult):
    other_value: Any = None

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["other_value"] = self.other_value
        return data


@dataclass
class RegexRuleResult(RuleResult):
    pattern: str | None = None
    flags: int = 0

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data.update(pattern=self.pattern, flags=self.flags)
        return data


@dataclass
class UriRuleResult(RuleResult):
    absolute: bool | None = None
    schemes: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data.update(absolute=self.absolute, schemes=list(self.schemes))
        return data


@dataclass
class CustomRuleResult(RuleResult):
    """Result produced by a custom rule function, with free-form data."""

    data: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["data"] = dict(self.data)
        return result


@dataclass
class GroupRuleResult(RuleResult):
    """Results of the rules evaluated inside a rule group."""

    rule_results: list[RuleResult] = field(default_factory=list)

    def is_empty(self) -> bool:
        return len(self.rule_results) == 0 and super().is_empty()

    def iter_errors(self) -> Iterator[tuple[str | None, str | None]]:
        yield from super().iter_errors()
        for rule_result in self.rule_results:
            yield from rule_result.iter_errors()

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["rule_results"] = [rr.to_dict() for rr in self.rule_results]
        return data


@dataclass
class ValidatorRuleResult(RuleResult):
    """Result of validating a member with its own validator."""

    validator_result: ValidatorResult | None = None

    def is_empty(self) -> bool:
        nested_empty = self.validator_result is None or self.validator_result.is_empty()
        return nested_empty and super().is_empty()

    def iter_errors(self) -> Iterator[tuple[str | None, str | None]]:
        yield from super().iter_errors()
        if self.validator_result is not None:
            yield from self.validator_result.iter_errors()

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["validator_result"] = (
            self.validator_result.to_dict() if self.validator_result is not None else None
        )
        return data


@dataclass
class TargetResult:
    """Outcome of one target: its value and the results of its rules."""

    name: str
    value: Any = None
    rule_results: list[RuleResult] = field(default_factory=list)

    def is_empty(self) -> bool:
        return len(self.rule_results) == 0

    def iter_errors(self) -> Iterator[tuple[str | None, str | None]]:
        for rule_result in self.rule_results:
            yield from rule_result.iter_errors()

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "value": self.value,
            "rule_results": [rr.to_dict() for rr in self.rule_results],
        }


@dataclass
class GroupTargetResult(TargetResult):
    """Results of the targets evaluated inside a target group."""

    target_results: list[TargetResult] = field(default_factory=list)

    def is_empty(self) -> bool:
        return len(self.target_results) == 0

    def iter_errors(self) -> Iterator[tuple[str | None, str | None]]:
        for target_result in self.target_results:
            yield from target_result.iter_errors()

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["target_results"] = [tr.to_dict() for tr in self.target_results]
        return data


@dataclass
class ItemTargetResult(TargetResult):
    """Per-item results of a collection target."""

    item_target_results: list[TargetResult] = field(default_factory=list)

    def is_empty(self) -> bool:
        return len(self.item_target_results) == 0

    def iter_errors(self) -> Iterator[tuple[str | None, str | None]]:
        for target_result in self.item_target_results:
            yield from target_result.iter_errors()

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["item_target_results"] = [tr.to_dict() for tr in self.item_target_results]
        return data


@dataclass
class ValidatorResult:
    """Root of the result tree for one validation call."""

    target_results: list[TargetResult] = field(default_factory=list)

    def is_empty(self) -> bool:
        return len(self.target_results) == 0

    def iter_errors(self) -> Iterator[tuple[str | None, str | None]]:
        for target_result in self.target_results:
            yield from target_result.iter_errors()

    def errors(self) -> list[tuple[str | None, str | None]]:
        """Resource pairs of every violated rule in the tree, depth first."""
        return list(self.iter_errors())

    def to_dict(self) -> dict[str, Any]:
        return {"target_results": [tr.to_dict() for tr in self.target_results]}
