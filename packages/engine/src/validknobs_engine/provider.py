"""Validator providers.

A provider resolves the validator for a Python type. The controller uses one
to find the validator of the root object, and the validator rule uses the
same provider, reached through the validator context, for nested objects.
"""

from __future__ import annotations

import inspect
import logging
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator

from validknobs_common.exceptions import ArgumentNullError
from validknobs_common.registry import TypeRegistry

from .exceptions import (
    AmbiguousValidatorError,
    RegistrationError,
    ValidatorCreationError,
    ValidatorNotFoundError,
)
from .validator import Validator

logger = logging.getLogger(__name__)

ValidatorFactory = type[Validator] | Callable[[], Validator]


class ValidatorProvider(ABC):
    """Resolves validators by object type."""

    @abstractmethod
    def get_validator(self, obj_type: type) -> Validator:
        """Get a set-up validator for ``obj_type``.

        Raises:
            ArgumentNullError: If obj_type is None
            ValidatorNotFoundError: If no validator can be resolved
        """


class ValidatorRegistry(TypeRegistry[Validator]):
    """Type registry of validator factories."""

    not_found_error = ValidatorNotFoundError
    creation_error = ValidatorCreationError

    def __init__(self, name: str = "validators"):
        super().__init__(name, validate_type=Validator)


def iter_validator_classes(base: type[Validator] = Validator) -> Iterator[type[Validator]]:
    """Yield every concrete subclass of ``base``, depth first."""
    for subclass in base.__subclasses__():
        if not inspect.isabstract(subclass):
            yield subclass
        yield from iter_validator_classes(subclass)


def setup_validator(validator: Validator) -> None:
    """Run a validator's setup, wrapping failures."""
    try:
        validator.setup()
    except Exception as e:
        raise ValidatorCreationError(
            f"Failed to set up {type(validator).__name__}: {e}",
            context={"validator": type(validator).__name__},
        ) from e


class DefaultValidatorProvider(ValidatorProvider):
    """Provider backed by explicit registrations and subclass discovery.

    Explicit registrations win. Otherwise the concrete ``Validator``
    subclasses declaring the requested type as their own ``object_type``
    are discovered; more than one is an error. Subclasses inheriting the
    type from a concrete validator are not candidates. Discovered classes are registered so later
    lookups do not search again.

    Args:
        cached: Keep and reuse one set-up validator per type
        discover: Search ``Validator`` subclasses for unregistered types
    """

    def __init__(self, cached: bool = True, discover: bool = True):
        self.cached = cached
        self.discover = discover
        self._registry = ValidatorRegistry()
        self._lock = threading.RLock()

    @property
    def registry(self) -> ValidatorRegistry:
        return self._registry

    def register(
        self,
        obj_type: type,
        validator_factory: ValidatorFactory,
        override: bool = False,
    ) -> None:
        """Register the validator class or factory for a type.

        Raises:
            ArgumentNullError: If obj_type or validator_factory is None
            RegistrationError: If the registration is rejected
        """
        ArgumentNullError.raise_if_none(obj_type, "obj_type")
        ArgumentNullError.raise_if_none(validator_factory, "validator_factory")
        context = {"object_type": obj_type.__qualname__}

        if isinstance(validator_factory, type):
            if not issubclass(validator_factory, Validator):
                raise RegistrationError(
                    f"{validator_factory.__qualname__} is not a Validator subclass", context=context
                )
            declared = validator_factory.object_type
            if declared is not None and declared is not obj_type:
                raise RegistrationError(
                    f"{validator_factory.__qualname__} validates {declared.__qualname__}, "
                    f"not {obj_type.__qualname__}",
                    context=context,
                )
        elif not callable(validator_factory):
            raise RegistrationError(
                f"Validator factory must be a class or callable, got {type(validator_factory).__name__}",
                context=context,
            )

        if not override and obj_type in self._registry:
            raise RegistrationError(
                f"A validator is already registered for {obj_type.__qualname__}", context=context
            )

        self._registry.register(obj_type, validator_factory, override=True)

    def find_validator_class(self, obj_type: type) -> type[Validator] | None:
        """Discover the validator class for a type, or None.

        Raises:
            AmbiguousValidatorError: If several classes validate the type
        """
        candidates = [cls for cls in iter_validator_classes() if cls.declares_object_type(obj_type)]
        if len(candidates) > 1:
            raise AmbiguousValidatorError(
                f"Found {len(candidates)} validators for {obj_type.__qualname__}",
                context={
                    "object_type": obj_type.__qualname__,
                    "candidates": [cls.__qualname__ for cls in candidates],
                },
            )
        return candidates[0] if candidates else None

    def get_validator(self, obj_type: type) -> Validator:
        ArgumentNullError.raise_if_none(obj_type, "obj_type")

        with self._lock:
            if obj_type not in self._registry and self.discover:
                validator_class = self.find_validator_class(obj_type)
                if validator_class is not None:
                    logger.debug(f"Discovered {validator_class.__qualname__} for {obj_type.__qualname__}")
                    self._registry.register(obj_type, validator_class)

        return self._registry.get(obj_type, use_cache=self.cached, on_create=setup_validator)

    def clear_cache(self) -> None:
        """Drop cached validator instances."""
        self._registry.clear_cache()

    def __repr__(self) -> str:
        return f"DefaultValidatorProvider(cached={self.cached}, registry={self._registry!r})"


class FactoryValidatorProvider(ValidatorProvider):
    """Provider delegating resolution to a function, e.g. a DI container.

    Args:
        resolver: ``obj_type -> Validator | None``
        cached: Keep and reuse one validator per type
    """

    def __init__(self, resolver: Callable[[type], Validator | None], cached: bool = False):
        ArgumentNullError.raise_if_none(resolver, "resolver")
        self.resolver = resolver
        self.cached = cached
        self._instances: dict[type, Validator] = {}
        self._lock = threading.RLock()

    def get_validator(self, obj_type: type) -> Validator:
        ArgumentNullError.raise_if_none(obj_type, "obj_type")

        with self._lock:
            if self.cached and obj_type in self._instances:
                return self._instances[obj_type]

            validator = self.resolver(obj_type)
            if validator is None:
                raise ValidatorNotFoundError(
                    f"No validator resolved for {obj_type.__qualname__}",
                    context={"object_type": obj_type.__qualname__},
                )
            setup_validator(validator)

            if self.cached:
                self._instances[obj_type] = validator
            return validator

    def __repr__(self) -> str:
        return f"FactoryValidatorProvider(cached={self.cached}, instances={len(self._instances)})"
