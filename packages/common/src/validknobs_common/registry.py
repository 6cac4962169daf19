"""Generic type-keyed registry for factories and their instances.

This module provides a reusable registry that maps a Python type to a factory
producing an item for that type (for example, a validator for a model class).
Packages extend it to manage their own kind of items.

The registry supports:
- Thread-safe registration and lookup
- Class or zero-argument factory registration
- Type validation of registered classes and created instances
- Optional instance caching (one instance per key type)

Example:
    ```python
    from validknobs_common.registry import TypeRegistry

    class HandlerRegistry(TypeRegistry[Handler]):
        def __init__(self):
            super().__init__("handlers", validate_type=Handler)

    registry = HandlerRegistry()
    registry.register(Order, OrderHandler)
    handler = registry.get(Order)
    ```
"""

import logging
import threading
from typing import (
    Any,
    Callable,
    Dict,
    Generic,
    TypeVar,
)

from validknobs_common.exceptions import ArgumentNullError, NotFoundError, OperationError

T = TypeVar("T")

logger = logging.getLogger(__name__)


class TypeRegistry(Generic[T]):
    """Registry of factories keyed by the type they serve.

    Subclasses may override ``not_found_error`` and ``creation_error`` to
    raise package-specific exceptions (they must derive from
    ``NotFoundError`` and ``OperationError`` respectively).

    Args:
        name: Registry name for identification
        validate_type: Optional base type registered classes and created
            instances must conform to

    Example:
        ```python
        registry = TypeRegistry[Handler]("handlers", validate_type=Handler)
        registry.register(Order, OrderHandler)
        registry.get(Order)             # new or cached OrderHandler
        registry.get(Order, use_cache=False)  # always a new instance
        ```
    """

    not_found_error: type[NotFoundError] = NotFoundError
    creation_error: type[OperationError] = OperationError

    def __init__(self, name: str, validate_type: type | None = None):
        """Initialize the registry.

        Args:
            name: Registry name for identification
            validate_type: Optional base type to validate registrations against
        """
        self._name = name
        self._factories: Dict[type, type[T] | Callable[[], T]] = {}
        self._instances: Dict[type, T] = {}
        self._lock = threading.RLock()
        self._validate_type = validate_type

    @property
    def name(self) -> str:
        """Get registry name."""
        return self._name

    def register(
        self,
        key_type: type,
        factory: type[T] | Callable[[], T],
        override: bool = False,
    ) -> None:
        """Register a class or factory for a type.

        Args:
            key_type: The type the factory serves
            factory: Class or zero-argument callable producing an item
            override: If True, allow replacing an existing registration

        Raises:
            ArgumentNullError: If key_type or factory is None
            OperationError: If key_type already registered and override=False
            TypeError: If factory doesn't match validate_type
        """
        ArgumentNullError.raise_if_none(key_type, "key_type")
        ArgumentNullError.raise_if_none(factory, "factory")

        with self._lock:
            if not override and key_type in self._factories:
                raise OperationError(
                    f"Type '{key_type.__qualname__}' already registered in {self._name}. "
                    f"Use override=True to replace.",
                    context={"key_type": key_type.__qualname__, "registry": self._name},
                )

            if self._validate_type and isinstance(factory, type):
                if not issubclass(factory, self._validate_type):
                    raise TypeError(
                        f"Factory class must be a subclass of {self._validate_type.__name__}, "
                        f"got {factory.__name__}"
                    )
            elif not callable(factory):
                raise TypeError(
                    f"Factory must be a class or callable, got {type(factory).__name__}"
                )

            self._factories[key_type] = factory
            self._instances.pop(key_type, None)

        logger.debug(f"Registered {key_type.__qualname__} in {self._name}")

    def unregister(self, key_type: type) -> None:
        """Unregister a type and drop its cached instance.

        Raises:
            NotFoundError: If the type is not registered
        """
        with self._lock:
            if key_type not in self._factories:
                raise self.not_found_error(
                    f"Type not registered: {key_type.__qualname__}",
                    context={"key_type": key_type.__qualname__, "registry": self._name},
                )

            del self._factories[key_type]
            self._instances.pop(key_type, None)

    def is_registered(self, key_type: type) -> bool:
        """Check if a type has a registered factory."""
        with self._lock:
            return key_type in self._factories

    def get(
        self,
        key_type: type,
        use_cache: bool = True,
        on_create: Callable[[T], Any] | None = None,
    ) -> T:
        """Get an item for a type, creating it with the registered factory.

        Args:
            key_type: The type to resolve
            use_cache: Return (and store) the cached instance
            on_create: Optional callback invoked on a freshly created item
                before it is cached

        Returns:
            The item

        Raises:
            NotFoundError: If the type is not registered
            OperationError: If the factory fails
        """
        ArgumentNullError.raise_if_none(key_type, "key_type")

        with self._lock:
            if use_cache and key_type in self._instances:
                return self._instances[key_type]

            factory = self._factories.get(key_type)
            if factory is None:
                raise self.not_found_error(
                    f"Type '{key_type.__qualname__}' not registered in {self._name}",
                    context={
                        "key_type": key_type.__qualname__,
                        "registry": self._name,
                        "available": [t.__qualname__ for t in self._factories],
                    },
                )

            instance = self.create(key_type, factory)
            if on_create is not None:
                on_create(instance)

            if use_cache:
                self._instances[key_type] = instance

            return instance

    def create(self, key_type: type, factory: type[T] | Callable[[], T]) -> T:
        """Invoke a factory, validating and wrapping failures.

        Raises:
            OperationError: If the factory raises or returns the wrong type
        """
        try:
            instance = factory()

            if self._validate_type and not isinstance(instance, self._validate_type):
                raise TypeError(
                    f"Factory must return a {self._validate_type.__name__} instance, "
                    f"got {type(instance).__name__}"
                )

        except Exception as e:
            raise self.creation_error(
                f"Failed to create item for '{key_type.__qualname__}': {e}",
                context={"key_type": key_type.__qualname__, "registry": self._name},
            ) from e

        return instance

    def clear_cache(self, key_type: type | None = None) -> None:
        """Clear cached instances.

        Args:
            key_type: Specific type to clear, or None for all
        """
        with self._lock:
            if key_type:
                self._instances.pop(key_type, None)
            else:
                self._instances.clear()

    def __len__(self) -> int:
        """Get number of registered types."""
        return len(self._factories)

    def __contains__(self, key_type: type) -> bool:
        """Check if a type is registered using 'in' operator."""
        return self.is_registered(key_type)

    def __repr__(self) -> str:
        """Get string representation."""
        return (
            f"{type(self).__name__}("
            f"name='{self._name}', "
            f"types={len(self._factories)}, "
            f"cached={len(self._instances)}"
            f")"
        )


__all__ = [
    "TypeRegistry",
]
