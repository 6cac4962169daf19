"""Validator base class.

A validator owns the targets declared for one object type. Targets are
declared once, lazily, by ``configure`` through the fluent builder::

    class LoginFormValidator(Validator[LoginForm]):
        def configure(self, validate):
            validate.member("password").is_required().has_length(12, None)
            validate.member("username").is_required().is_safe_text() \\
                .with_error("Errors", "Username.Unsafe")
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Generic, TypeVar, get_args, get_origin

from validknobs_common.exceptions import ArgumentNullError

from .builders import InitialTargetBuilder
from .context import ValidatorContext
from .results import ValidatorResult
from .target import Target, validate_targets

T = TypeVar("T")

logger = logging.getLogger(__name__)


class Validator(ABC, Generic[T]):
    """Base class for validators of objects of type ``T``.

    ``object_type`` is taken from the generic argument of the class
    declaration unless a subclass sets it explicitly. Plain subclasses of a
    concrete validator inherit it without declaring it, see
    ``declares_object_type``.
    """

    object_type: ClassVar[type | None] = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if "object_type" in cls.__dict__:
            return
        for base in cls.__dict__.get("__orig_bases__", ()):
            origin = get_origin(base)
            if isinstance(origin, type) and issubclass(origin, Validator):
                args = get_args(base)
                if args and isinstance(args[0], type):
                    cls.object_type = args[0]
                    return

    @classmethod
    def declares_object_type(cls, obj_type: type) -> bool:
        """True when the class itself, not a base, declares ``obj_type``."""
        return cls.__dict__.get("object_type") is obj_type

    def __init__(self) -> None:
        self.targets: list[Target | None] = []
        self._setup_lock = threading.Lock()
        self._is_set_up = False

    @property
    def is_set_up(self) -> bool:
        return self._is_set_up

    @abstractmethod
    def configure(self, validate: InitialTargetBuilder) -> None:
        """Declare targets and rules with the builder ``validate``."""

    def setup(self) -> None:
        """Run ``configure`` once; later calls do nothing."""
        if self._is_set_up:
            return

        with self._setup_lock:
            if self._is_set_up:
                return

            try:
                self.configure(InitialTargetBuilder(self))
            except Exception:
                self.targets.clear()
                raise
            self._is_set_up = True

        logger.info(f"Validator {type(self).__name__} set up with {len(self.targets)} targets")

    def create_result(self, context: ValidatorContext) -> ValidatorResult | None:
        """Create the result of a validation run, or None to suppress it."""
        ArgumentNullError.raise_if_none(context, "context")
        return ValidatorResult()

    def validate(self, context: ValidatorContext) -> ValidatorResult | None:
        """Validate the object held by ``context``.

        Returns:
            The validator result, or None when ``create_result`` suppressed it

        Raises:
            ArgumentNullError: If context is None
        """
        ArgumentNullError.raise_if_none(context, "context")
        context.validator = self
        self.setup()

        result = self.create_result(context)
        if result is None:
            return None

        if not context.continue_validation:
            logger.debug(f"{type(self).__name__}: validation disabled by context")
            return result

        result.target_results.extend(validate_targets(self.targets, context))
        return result

    def __repr__(self) -> str:
        object_type = self.object_type.__name__ if self.object_type else None
        return f"{type(self).__name__}(object_type={object_type}, targets={len(self.targets)})"
