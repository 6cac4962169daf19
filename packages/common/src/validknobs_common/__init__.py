"""Common utilities and base classes for validknobs packages.

This package provides shared functionality used across all validknobs packages:

- **Exceptions**: Unified exception hierarchy with context support
- **Registry**: Thread-safe registry of factories keyed by type

Example:
    ```python
    from validknobs_common import ArgumentNullError, TypeRegistry

    ArgumentNullError.raise_if_none(value, "value")

    registry = TypeRegistry[Handler]("handlers", validate_type=Handler)
    registry.register(Order, OrderHandler)
    ```
"""

from validknobs_common.exceptions import (
    ArgumentNullError,
    ConfigurationError,
    NotFoundError,
    OperationError,
    ValidationError,
    ValidknobsError,
)
from validknobs_common.registry import TypeRegistry

__version__ = "1.0.0"

__all__ = [
    # Version
    "__version__",
    # Exceptions
    "ValidknobsError",
    "ArgumentNullError",
    "ValidationError",
    "ConfigurationError",
    "NotFoundError",
    "OperationError",
    # Registry
    "TypeRegistry",
]
