"""Tests for the validation result tree."""

from validknobs_engine import (
    GroupRuleResult,
    GroupTargetResult,
    ItemTargetResult,
    Outcome,
    RuleResult,
    TargetResult,
    ValidatorResult,
    ValidatorRuleResult,
    ValueResult,
)
from validknobs_engine.results import LengthRuleResult


class TestOutcome:
    """Test mapping of rule values to outcomes."""

    def test_none_is_skipped(self):
        """Test that None means the rule was not evaluated."""
        assert Outcome.of(None) is Outcome.SKIPPED

    def test_truthiness(self):
        """Test that other values are judged by truthiness."""
        assert Outcome.of(True) is Outcome.SATISFIED
        assert Outcome.of(1) is Outcome.SATISFIED
        assert Outcome.of(False) is Outcome.VIOLATED
        assert Outcome.of(0) is Outcome.VIOLATED


class TestValueResult:
    """Test error and success identities."""

    def test_is_empty(self):
        """Test emptiness of resource fields."""
        assert ValueResult(False).is_empty()
        assert ValueResult(False, "", "").is_empty()
        assert not ValueResult(False, "Errors").is_empty()
        assert not ValueResult(False, None, "Name.Required").is_empty()

    def test_matches(self):
        """Test match value selection."""
        assert ValueResult(False).matches(False)
        assert not ValueResult(False).matches(True)
        assert not ValueResult(False).matches(None)
        assert ValueResult(None).matches(None)
        assert not ValueResult(None).matches(False)


class TestRuleResult:
    """Test rule results."""

    def test_errors_only_when_violated(self):
        """Test that value results count as errors only for violations."""
        violated = RuleResult("Required", False, [ValueResult(False, "Errors", "Required")])
        satisfied = RuleResult("Required", True, [ValueResult(True, "Messages", "Ok")])
        skipped = RuleResult("Validator", None, [ValueResult(None, "Messages", "Skipped")])

        assert list(violated.iter_errors()) == [("Errors", "Required")]
        assert list(satisfied.iter_errors()) == []
        assert list(skipped.iter_errors()) == []

    def test_outcome(self):
        """Test outcome property."""
        assert RuleResult("Length", False).outcome is Outcome.VIOLATED
        assert RuleResult("Length", True).outcome is Outcome.SATISFIED

    def test_to_dict(self):
        """Test serialization of specialised results."""
        result = LengthRuleResult("Length", False, [ValueResult(False, "Errors", "Length")], min=2, max=4)

        data = result.to_dict()

        assert data["name"] == "Length"
        assert data["outcome"] == "violated"
        assert data["min"] == 2
        assert data["max"] == 4
        assert data["value_results"] == [
            {"match_value": False, "resource_name": "Errors", "resource_key": "Length"}
        ]


class TestNestedResults:
    """Test emptiness and error collection across nested results."""

    def test_group_rule_result(self):
        """Test that a group reports its own and its nested errors."""
        group = GroupRuleResult(
            "Credentials",
            False,
            [ValueResult(False, "Errors", "Credentials")],
            rule_results=[RuleResult("Required", False, [ValueResult(False, "Errors", "Required")])],
        )

        assert list(group.iter_errors()) == [("Errors", "Credentials"), ("Errors", "Required")]
        assert not group.is_empty()
        assert GroupRuleResult("Empty", True).is_empty()

    def test_validator_rule_result(self):
        """Test that nested validator errors are reported."""
        nested = ValidatorResult(
            [TargetResult("street", None, [RuleResult("Required", False, [ValueResult(False, "Errors", "Street")])])]
        )
        result = ValidatorRuleResult("Validator", False, validator_result=nested)

        assert list(result.iter_errors()) == [("Errors", "Street")]
        assert not result.is_empty()
        assert ValidatorRuleResult("Validator").is_empty()
        assert ValidatorRuleResult("Validator", True, validator_result=ValidatorResult()).is_empty()

    def test_errors_depth_first(self):
        """Test error order across targets, groups and items."""
        result = ValidatorResult(
            [
                GroupTargetResult(
                    "account",
                    target_results=[
                        TargetResult("name", None, [RuleResult("Required", False, [ValueResult(False, "E", "1")])]),
                    ],
                ),
                ItemTargetResult(
                    "emails",
                    item_target_results=[
                        TargetResult("emails", "a", [RuleResult("Email", False, [ValueResult(False, "E", "2")])]),
                        TargetResult("emails", "b", [RuleResult("Email", False, [ValueResult(False, "E", "3")])]),
                    ],
                ),
                TargetResult("age", 3, [RuleResult("Range", False, [ValueResult(False, "E", "4")])]),
            ]
        )

        assert result.errors() == [("E", "1"), ("E", "2"), ("E", "3"), ("E", "4")]

    def test_emptiness_of_containers(self):
        """Test is_empty of target level results."""
        assert ValidatorResult().is_empty()
        assert TargetResult("name").is_empty()
        assert GroupTargetResult("group").is_empty()
        assert ItemTargetResult("items").is_empty()
        assert not ItemTargetResult("items", item_target_results=[TargetResult("items")]).is_empty()

    def test_validator_result_to_dict(self):
        """Test serialization of the whole tree."""
        result = ValidatorResult([TargetResult("name", "x", [RuleResult("Required", True)])])

        data = result.to_dict()

        assert data["target_results"][0]["name"] == "name"
        assert data["target_results"][0]["rule_results"][0]["outcome"] == "satisfied"
