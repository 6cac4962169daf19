"""Recursive, composable object validation.

Validators declare targets (the object, its members or the items of its
collections) and the rules each target must satisfy. A controller resolves
the validator of an object through a provider and produces a result tree
holding the error and success identities selected by the rules.

Example:
    ```python
    from validknobs_engine import DefaultValidatorProvider, ValidationController, Validator

    class LoginFormValidator(Validator[LoginForm]):
        def configure(self, validate):
            validate.member("password").is_required().has_length(12, None)
            validate.member("username").is_required().has_length(8, 80) \\
                .is_safe_text().with_error("Errors", "Username.Unsafe")

    controller = ValidationController(DefaultValidatorProvider())
    controller.validate(LoginForm('" or ""="', "$ecureP@ssw0rd")).errors()
    # [('Errors', 'Username.Unsafe')]
    ```
"""

from .builders import InitialTargetBuilder, RuleBuilder, TargetBuilder
from .context import RuleContext, TargetContext, ValidatorContext
from .controller import ValidationController
from .exceptions import (
    AmbiguousValidatorError,
    RegistrationError,
    ValidatorCreationError,
    ValidatorNotFoundError,
)
from .provider import (
    DefaultValidatorProvider,
    FactoryValidatorProvider,
    ValidatorProvider,
    ValidatorRegistry,
)
from .results import (
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
from .rule import BooleanRule, Rule
from .rules import Comparison
from .target import Target
from .validator import Validator

__version__ = "1.0.0"

__all__ = [
    "__version__",
    # Core
    "Validator",
    "Target",
    "Rule",
    "BooleanRule",
    "Comparison",
    "ValidationController",
    # Providers
    "ValidatorProvider",
    "DefaultValidatorProvider",
    "FactoryValidatorProvider",
    "ValidatorRegistry",
    # Contexts
    "ValidatorContext",
    "TargetContext",
    "RuleContext",
    # Results
    "Outcome",
    "ValueResult",
    "RuleResult",
    "GroupRuleResult",
    "ValidatorRuleResult",
    "TargetResult",
    "GroupTargetResult",
    "ItemTargetResult",
    "ValidatorResult",
    # Builders
    "InitialTargetBuilder",
    "TargetBuilder",
    "RuleBuilder",
    # Exceptions
    "ValidatorNotFoundError",
    "AmbiguousValidatorError",
    "ValidatorCreationError",
    "RegistrationError",
]
