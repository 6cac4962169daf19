"""Common exception hierarchy for all validknobs packages.

This module provides the exception framework that the validknobs packages
extend. Every exception can carry a context dictionary with structured
information about the failure.

Two kinds of errors exist in validknobs:

- Contract violations (``ArgumentNullError`` and friends) are raised
  immediately and indicate a bug in the calling code.
- Business rule failures are never raised. They are reported as data in the
  validation result tree.

Example:
    ```python
    from validknobs_common.exceptions import ArgumentNullError, NotFoundError

    # Guard a required argument
    ArgumentNullError.raise_if_none(context, "context")

    # Context-rich exception
    raise NotFoundError(
        "Validator not found",
        context={"object_type": "LoginForm"}
    )

    # Catch any validknobs error
    try:
        operation()
    except ValidknobsError as e:
        logger.error(f"Error: {e}")
        if e.context:
            logger.error(f"Context: {e.context}")
    ```
"""

from typing import Any, Dict


class ValidknobsError(Exception):
    """Base exception for all validknobs packages.

    Attributes:
        context: Dictionary containing contextual information about the error

    Args:
        message: Human-readable error message
        context: Optional dictionary with error context (parameter names, types, etc.)

    Example:
        ```python
        error = ValidknobsError(
            "Operation failed",
            context={"operation": "setup", "validator": "LoginFormValidator"}
        )
        str(error)
        # 'Operation failed'
        error.context
        # {'operation': 'setup', 'validator': 'LoginFormValidator'}
        ```
    """

    def __init__(self, message: str, context: Dict[str, Any] | None = None):
        """Initialize the exception with optional context.

        Args:
            message: Error message
            context: Optional context dictionary
        """
        super().__init__(message)
        self.context = context or {}


class ArgumentNullError(ValidknobsError, ValueError):
    """Raised when a required argument or property value is None.

    The name of the offending parameter is available as ``param_name`` and
    in the context dictionary.

    Example:
        ```python
        raise ArgumentNullError("validator_provider")
        ```
    """

    def __init__(self, param_name: str, message: str | None = None):
        self.param_name = param_name
        super().__init__(
            message or f"Value cannot be None (parameter '{param_name}')",
            context={"param_name": param_name},
        )

    @classmethod
    def raise_if_none(cls, value: Any, param_name: str) -> None:
        """Raise if ``value`` is None.

        Args:
            value: Value to check
            param_name: Name reported when the check fails

        Raises:
            ArgumentNullError: If value is None
        """
        if value is None:
            raise cls(param_name)


class ValidationError(ValidknobsError):
    """Raised when input data or configuration fails validation checks.

    Note that validation *outcomes* produced by the engine are not raised;
    this exception is reserved for malformed inputs to the library itself.
    """

    pass


class ConfigurationError(ValidknobsError):
    """Raised when configuration is invalid or missing.

    Example:
        ```python
        raise ConfigurationError(
            "Provider configuration missing",
            context={"config_key": "provider.default", "available_keys": ["controller"]}
        )
        ```
    """

    pass


class NotFoundError(ValidknobsError):
    """Raised when a requested item is not found.

    Common scenarios include:
    - No validator registered or discoverable for a type
    - Configuration entry not found
    - Class path that does not resolve
    """

    pass


class OperationError(ValidknobsError):
    """Raised when an operation fails.

    Common scenarios include:
    - Duplicate registration
    - Validator construction failures
    """

    pass


__all__ = [
    "ValidknobsError",
    "ArgumentNullError",
    "ValidationError",
    "ConfigurationError",
    "NotFoundError",
    "OperationError",
]
