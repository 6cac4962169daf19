"""Tests for the built-in rules."""

import math
from datetime import date
from operator import attrgetter
from types import SimpleNamespace

import pytest

from validknobs_engine import Comparison, Outcome, RuleContext, TargetContext, ValidatorContext, ValueResult
from validknobs_engine.results import ComparisonRuleResult, CustomRuleResult, GroupRuleResult, RegexRuleResult
from validknobs_engine.rules import (
    ComparisonRule,
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
    UriRule,
)
from validknobs_engine.targets import MemberTarget


@pytest.fixture
def evaluate(provider):
    """Evaluate a rule against a single value."""

    def run(rule, value, ignore_empty_results=True, continue_validation=True):
        holder = SimpleNamespace(value=value)
        validator_context = ValidatorContext(
            holder,
            None,
            provider,
            continue_validation=continue_validation,
            ignore_empty_results=ignore_empty_results,
        )
        target_context = TargetContext(MemberTarget("value", attrgetter("value")), validator_context)
        return rule.validate(RuleContext(None, target_context))

    return run


class TestRuleBase:
    """Test behaviour shared by all rules."""

    def test_name_strips_suffix(self):
        """Test rule naming."""
        assert RequiredRule().name == "Required"
        assert LengthRule().name == "Length"
        assert CreditCardRule().name == "CreditCard"

    def test_value_results_selected_by_value(self, evaluate):
        """Test that only value results matching the rule value are attached."""
        rule = RequiredRule()
        rule.value_results.extend(
            [ValueResult(False, "Errors", "Required"), ValueResult(True, "Messages", "Present")]
        )

        failed = evaluate(rule, None)
        passed = evaluate(rule, "x")

        assert failed.value is False
        assert [vr.resource_key for vr in failed.value_results] == ["Required"]
        assert [vr.resource_key for vr in passed.value_results] == ["Present"]

    def test_empty_value_results(self, evaluate):
        """Test filtering of value results without resources."""
        rule = RequiredRule()
        rule.value_results.append(ValueResult(False))

        assert evaluate(rule, None).value_results == []
        assert len(evaluate(rule, None, ignore_empty_results=False).value_results) == 1

    def test_stops_target(self, evaluate):
        """Test short-circuit decisions."""
        rule = RequiredRule()
        stopping = RequiredRule(stop_on_failure=True)
        context = SimpleNamespace(validator_context=SimpleNamespace(continue_validation=True))
        halted = SimpleNamespace(validator_context=SimpleNamespace(continue_validation=False))

        assert not rule.stops_target(evaluate(rule, None), context)
        assert rule.stops_target(evaluate(rule, None), halted)
        assert stopping.stops_target(evaluate(stopping, None), context)
        assert not stopping.stops_target(evaluate(stopping, "x"), context)

    def test_none_passes_boolean_rules(self, evaluate):
        """Test that absent values satisfy every rule but required."""
        for rule in (LengthRule(1, 2), RangeRule(1, 2), EmailRule(), DigitsRule(), UriRule(), ComparisonRule(3)):
            assert evaluate(rule, None).value is True


class TestRequiredRule:
    """Test the required rule."""

    def test_none_fails(self, evaluate):
        """Test None values."""
        assert evaluate(RequiredRule(), None).outcome is Outcome.VIOLATED

    def test_empty_values(self, evaluate):
        """Test empty values with and without allow_empty."""
        assert evaluate(RequiredRule(), "").value is True
        assert evaluate(RequiredRule(allow_empty=False), "").value is False
        assert evaluate(RequiredRule(allow_empty=False), []).value is False
        assert evaluate(RequiredRule(allow_empty=False), 0).value is True


class TestLengthRule:
    """Test the length rule."""

    def test_bounds(self, evaluate):
        """Test inclusive bounds."""
        rule = LengthRule(2, 4)

        assert evaluate(rule, "ab").value is True
        assert evaluate(rule, "abcd").value is True
        assert evaluate(rule, "a").value is False
        assert evaluate(rule, "abcde").value is False
        assert evaluate(rule, [1, 2, 3]).value is True

    def test_open_bounds(self, evaluate):
        """Test a single bound."""
        assert evaluate(LengthRule(12, None), "$ecureP@ssw0rd").value is True
        assert evaluate(LengthRule(None, 3), "abcd").value is False

    def test_unsized_values_use_text(self, evaluate):
        """Test values without len()."""
        assert evaluate(LengthRule(5, 5), 12345).value is True

    def test_invalid_bounds(self):
        """Test bound validation."""
        with pytest.raises(ValueError):
            LengthRule(5, 2)
        with pytest.raises(ValueError):
            LengthRule(-1)

    def test_result_carries_bounds(self, evaluate):
        """Test the specialised result."""
        result = evaluate(LengthRule(2, 4), "a")

        assert result.min == 2
        assert result.max == 4


class TestRangeRule:
    """Test the range rule."""

    def test_numbers(self, evaluate):
        """Test numeric bounds."""
        rule = RangeRule(1, 10)

        assert evaluate(rule, 1).value is True
        assert evaluate(rule, 10).value is True
        assert evaluate(rule, 0).value is False
        assert evaluate(rule, 10.5).value is False

    def test_dates(self, evaluate):
        """Test any comparable type."""
        rule = RangeRule(date(2020, 1, 1), date(2020, 12, 31))

        assert evaluate(rule, date(2020, 6, 1)).value is True
        assert evaluate(rule, date(2021, 1, 1)).value is False

    def test_incomparable_values(self, evaluate):
        """Test NaN and mismatched types."""
        assert evaluate(RangeRule(0, 1), math.nan).value is False
        assert evaluate(RangeRule(0, 1), "a").value is False


class TestComparisonRule:
    """Test the comparison rule."""

    def test_comparisons(self):
        """Test the comparison operators."""
        assert Comparison.EQUAL.compare(1, 1)
        assert Comparison.NOT_EQUAL.compare(1, 2)
        assert Comparison.LESS_THAN.compare(1, 2)
        assert Comparison.LESS_THAN_OR_EQUAL.compare(2, 2)
        assert Comparison.GREATER_THAN.compare(3, 2)
        assert Comparison.GREATER_THAN_OR_EQUAL.compare(2, 2)
        assert not Comparison.LESS_THAN.compare(1, "a")

    def test_constant(self, evaluate):
        """Test comparison with a constant."""
        rule = ComparisonRule(18, Comparison.GREATER_THAN_OR_EQUAL)

        result = evaluate(rule, 21)

        assert rule.name == "GreaterThanOrEqual"
        assert isinstance(result, ComparisonRuleResult)
        assert result.value is True
        assert result.other_value == 18
        assert evaluate(rule, 17).value is False

    def test_missing_other_value(self, evaluate):
        """Test that a None other value fails the comparison."""
        assert evaluate(ComparisonRule(None), 1).value is False

    def test_other_provider(self, evaluate):
        """Test computed other values."""
        rule = ComparisonRule(
            comparison=Comparison.EQUAL,
            other_provider=lambda context: context.validator_context.obj.value.upper(),
        )

        assert evaluate(rule, "ABC").value is True
        assert evaluate(rule, "abc").value is False


class TestTextRules:
    """Test the text format rules."""

    def test_regex(self, evaluate):
        """Test full matching."""
        rule = RegexRule(r"[a-z]+")

        result = evaluate(rule, "abc")

        assert isinstance(result, RegexRuleResult)
        assert result.pattern == "[a-z]+"
        assert result.value is True
        assert evaluate(rule, "abc1").value is False

    def test_empty_regex_accepts_everything(self, evaluate):
        """Test an empty pattern."""
        assert evaluate(RegexRule(""), "anything").value is True

    def test_digits(self, evaluate):
        """Test digit strings."""
        assert evaluate(DigitsRule(), "0123").value is True
        assert evaluate(DigitsRule(), 42).value is True
        assert evaluate(DigitsRule(), "12a").value is False
        assert evaluate(DigitsRule(), "").value is False

    def test_email(self, evaluate):
        """Test email addresses."""
        assert evaluate(EmailRule(), "ada@example.com").value is True
        assert evaluate(EmailRule(), "first.last+tag@mail.example.org").value is True
        assert evaluate(EmailRule(), "ada@").value is False
        assert evaluate(EmailRule(), "ada lovelace@example.com").value is False
        assert evaluate(EmailRule(), "ada@localhost").value is False
        assert evaluate(EmailRule(), "a" * 250 + "@example.com").value is False

    def test_safe_text(self, evaluate):
        """Test letters, digits and whitespace."""
        assert evaluate(SafeTextRule(), "Hello World 42").value is True
        assert evaluate(SafeTextRule(), '" or ""="').value is False
        assert evaluate(SafeTextRule(), "<script>").value is False
        assert evaluate(SafeTextRule(), 42).value is True

    def test_credit_card(self, evaluate):
        """Test Luhn validation."""
        assert evaluate(CreditCardRule(), "4111 1111 1111 1111").value is True
        assert evaluate(CreditCardRule(), "4111-1111-1111-1111").value is True
        assert evaluate(CreditCardRule(), "4111 1111 1111 1112").value is False
        assert evaluate(CreditCardRule(), "4111 abcd").value is False


class TestUriRule:
    """Test the URI rule."""

    def test_absolute(self, evaluate):
        """Test absolute URIs with default schemes."""
        assert evaluate(UriRule(), "https://example.com/path?q=1").value is True
        assert evaluate(UriRule(), "http://example.com").value is True
        assert evaluate(UriRule(), "ftp://example.com").value is False
        assert evaluate(UriRule(), "https://").value is False
        assert evaluate(UriRule(), "/relative/path").value is False
        assert evaluate(UriRule(), "https://exa mple.com").value is False

    def test_schemes(self, evaluate):
        """Test custom schemes."""
        assert evaluate(UriRule(schemes=["FTP"]), "ftp://example.com").value is True
        assert evaluate(UriRule(schemes=["ftp"]), "https://example.com").value is False

    def test_relative(self, evaluate):
        """Test relative references."""
        assert evaluate(UriRule(absolute=False), "/relative/path").value is True
        assert evaluate(UriRule(absolute=False), "https://example.com").value is False
        assert evaluate(UriRule(absolute=None), "/relative/path").value is True
        assert evaluate(UriRule(absolute=None), "https://example.com").value is True


class TestCustomRule:
    """Test function backed rules."""

    def test_plain_value(self, evaluate):
        """Test wrapping of plain values."""
        rule = CustomRule(lambda context: context.get_value() % 2 == 0, name="Even")
        rule.value_results.append(ValueResult(False, "Errors", "Odd"))

        result = evaluate(rule, 3)

        assert isinstance(result, CustomRuleResult)
        assert result.name == "Even"
        assert result.value is False
        assert list(result.iter_errors()) == [("Errors", "Odd")]

    def test_default_name(self, evaluate):
        """Test the default rule name."""
        assert evaluate(CustomRule(lambda context: True), 1).name == "Custom"

    def test_returned_result(self, evaluate):
        """Test functions returning their own result."""
        rule = CustomRule(lambda context: CustomRuleResult("Checksum", False, data={"expected": 7}))

        result = evaluate(rule, 1)

        assert result.name == "Checksum"
        assert result.data == {"expected": 7}

    def test_no_result(self, evaluate):
        """Test functions returning None."""
        assert evaluate(CustomRule(lambda context: None), 1) is None


class TestGroupRule:
    """Test rule groups."""

    def test_value_reflects_nested_rules(self, evaluate):
        """Test the group value and nested results."""
        group = GroupRule("Credentials")
        group.value_results.append(ValueResult(False, "Errors", "Credentials"))
        required = RequiredRule()
        required.value_results.append(ValueResult(False, "Errors", "Required"))
        length = LengthRule(3)
        length.value_results.append(ValueResult(False, "Errors", "Length"))
        group.rules.extend([required, length])

        failed = evaluate(group, "ab")
        passed = evaluate(group, "abc")

        assert isinstance(failed, GroupRuleResult)
        assert failed.name == "Credentials"
        assert failed.value is False
        assert list(failed.iter_errors()) == [("Errors", "Credentials"), ("Errors", "Length")]
        assert passed.value is True
        assert passed.is_empty()

    def test_stop_on_failure_inside_group(self, evaluate):
        """Test short-circuit of nested rules."""
        group = GroupRule("Credentials")
        required = RequiredRule(stop_on_failure=True)
        required.value_results.append(ValueResult(False, "Errors", "Required"))
        custom = CustomRule(lambda context: pytest.fail("rule after stop was evaluated"))
        group.rules.extend([required, custom])

        result = evaluate(group, None)

        assert [rr.name for rr in result.rule_results] == ["Required"]


class TestConditionalRule:
    """Test conditional rules."""

    def test_if_rule(self, evaluate):
        """Test rules evaluated only when the condition holds."""
        rule = IfRule(RequiredRule(), lambda context: context.validator_context.obj.value == "check")

        assert evaluate(rule, "skip") is None
        assert evaluate(rule, "check").value is True
        assert rule.name == "Required"

    def test_if_not_rule(self, evaluate):
        """Test rules evaluated only when the condition does not hold."""
        rule = IfNotRule(LengthRule(5), lambda context: context.get_value() is None)

        assert evaluate(rule, None) is None
        assert evaluate(rule, "abc").value is False

    def test_shares_wrapped_rule_state(self):
        """Test delegation of value results and flags."""
        inner = RequiredRule(stop_on_failure=True)
        rule = IfRule(inner, lambda context: True)

        rule.value_results.append(ValueResult(False, "Errors", "Required"))

        assert inner.value_results == rule.value_results
        assert rule.stop_on_failure is True


class TestSkippedRules:
    """Test rules that were not evaluated."""

    def test_skipped_rule_selects_nothing(self, evaluate):
        """Test that a None rule value never selects value results."""
        rule = CustomRule(lambda context: CustomRuleResult("Lookup", None))
        rule.value_results.append(ValueResult(None, "Messages", "Lookup.Skipped"))

        result = evaluate(rule, 1)

        assert result.outcome is Outcome.SKIPPED
        assert result.is_empty()
