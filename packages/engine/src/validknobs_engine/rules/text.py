"""Text format rules."""

from __future__ import annotations

import re
from typing import Any

from validknobs_common.exceptions import ArgumentNullError

from ..context import RuleContext
from ..results import RegexRuleResult, RuleResult
from ..rule import BooleanRule

DIGITS_PATTERN = re.compile(r"[0-9]+")

# Local part and dotted domain with a top-level label of two or more letters
EMAIL_PATTERN = re.compile(
    r"[A-Za-z0-9.!#$%&'*+/=?^_`{|}~-]+@"
    r"[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?"
    r"(?:\.[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?)*\.[A-Za-z]{2,}"
)


class RegexRule(BooleanRule):
    """The whole text of the target value must match a pattern.

    An empty pattern accepts every value.
    """

    def __init__(self, pattern: str | re.Pattern[str], flags: int = 0, stop_on_failure: bool = False):
        super().__init__(stop_on_failure)
        if isinstance(pattern, re.Pattern):
            self.regex = pattern
        else:
            self.regex = re.compile(pattern or "", flags)
        self.pattern = self.regex.pattern
        self.flags = self.regex.flags

    def check(self, value: Any, context: RuleContext) -> bool:
        if not self.pattern:
            return True
        return self.regex.fullmatch(str(value)) is not None

    def create_result(self, context: RuleContext, value: Any) -> RuleResult | None:
        ArgumentNullError.raise_if_none(context, "context")
        return RegexRuleResult(self.name, value, pattern=self.pattern, flags=self.flags)


class DigitsRule(BooleanRule):
    """The target value must consist of ASCII digits only."""

    def check(self, value: Any, context: RuleContext) -> bool:
        return DIGITS_PATTERN.fullmatch(str(value)) is not None


class EmailRule(BooleanRule):
    """The target value must look like an email address."""

    def check(self, value: Any, context: RuleContext) -> bool:
        text = str(value)
        return len(text) <= 254 and EMAIL_PATTERN.fullmatch(text) is not None


class SafeTextRule(BooleanRule):
    """The target text may contain only letters, digits and whitespace.

    Non-string values are not checked.
    """

    def check(self, value: Any, context: RuleContext) -> bool:
        if not isinstance(value, str):
            return True
        return all(ch.isalnum() or ch.isspace() for ch in value)


class CreditCardRule(BooleanRule):
    """The target value must be a card number passing the Luhn checksum.

    Spaces and dashes are ignored.
    """

    def check(self, value: Any, context: RuleContext) -> bool:
        number = str(value).replace(" ", "").replace("-", "")
        if not number.isdigit() or not number.isascii():
            return False

        total = 0
        for position, digit in enumerate(reversed(number)):
            n = int(digit)
            if position % 2 == 1:
                n *= 2
                if n > 9:
                    n -= 9
            total += n
        return total % 10 == 0
