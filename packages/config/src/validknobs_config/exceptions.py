"""Custom exceptions for the config package.

This module defines exception types for the config package,
built on the common exception framework from validknobs_common.
"""

from validknobs_common import (
    ConfigurationError as BaseConfigurationError,
    NotFoundError,
    ValidationError as BaseValidationError,
)

ConfigError = BaseConfigurationError


class ConfigNotFoundError(NotFoundError):
    """Raised when a requested configuration is not found."""

    pass


ValidationError = BaseValidationError
