"""Built-in rules."""

from .comparison import Comparison, ComparisonRule, TargetComparisonRule
from .conditional import ConditionalRule, IfNotRule, IfRule
from .custom import CustomRule
from .group import GroupRule
from .length import LengthRule
from .range import RangeRule
from .required import RequiredRule
from .text import CreditCardRule, DigitsRule, EmailRule, RegexRule, SafeTextRule
from .uri import UriRule
from .validator import ValidatorRule

__all__ = [
    "RequiredRule",
    "LengthRule",
    "RangeRule",
    "Comparison",
    "ComparisonRule",
    "TargetComparisonRule",
    "RegexRule",
    "DigitsRule",
    "EmailRule",
    "SafeTextRule",
    "CreditCardRule",
    "UriRule",
    "CustomRule",
    "GroupRule",
    "ConditionalRule",
    "IfRule",
    "IfNotRule",
    "ValidatorRule",
]
