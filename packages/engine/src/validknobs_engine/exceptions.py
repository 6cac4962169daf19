"""Engine exceptions.

All engine exceptions extend the common validknobs hierarchy so callers can
catch ``ValidknobsError`` (or the more specific ``NotFoundError`` and
``OperationError``) across packages.

Business rule failures are never raised; they are reported as data in the
result tree.
"""

from validknobs_common.exceptions import (
    ArgumentNullError,
    ConfigurationError,
    NotFoundError,
    OperationError,
    ValidknobsError,
)


class ValidatorNotFoundError(NotFoundError):
    """Raised when no validator can be resolved for a type."""

    pass


class AmbiguousValidatorError(OperationError):
    """Raised when more than one validator implementation matches a type."""

    pass


class ValidatorCreationError(OperationError):
    """Raised when a validator cannot be instantiated or set up."""

    pass


class RegistrationError(OperationError):
    """Raised when a validator registration is rejected."""

    pass


__all__ = [
    "ValidknobsError",
    "ArgumentNullError",
    "ConfigurationError",
    "ValidatorNotFoundError",
    "AmbiguousValidatorError",
    "ValidatorCreationError",
    "RegistrationError",
]
