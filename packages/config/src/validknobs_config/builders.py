"""Optional object construction and caching functionality."""

import copy
import importlib
from typing import TYPE_CHECKING, Any, Dict, Tuple, Type, Union

if TYPE_CHECKING:
    from .config import Config

from .exceptions import ConfigError, ValidationError


def load_class(class_path: str) -> Type[Any]:
    """Load a class (or any module attribute) from a dotted path.

    Both ``package.module.Name`` and ``package.module:Name`` are accepted.

    Args:
        class_path: Full path to the attribute

    Returns:
        The loaded attribute

    Raises:
        ValidationError: If the path is malformed
        ConfigError: If the module or attribute cannot be loaded
    """
    if not isinstance(class_path, str) or not class_path:
        raise ValidationError(f"Invalid class path: {class_path!r}")

    if ":" in class_path:
        module_path, attr_path = class_path.split(":", 1)
    elif "." in class_path:
        module_path, attr_path = class_path.rsplit(".", 1)
    else:
        raise ValidationError(f"Invalid class path: {class_path}")

    try:
        module = importlib.import_module(module_path)
    except ImportError as e:
        raise ConfigError(
            f"Failed to import {class_path}: {e}",
            context={"class_path": class_path},
        ) from e

    obj: Any = module
    for part in attr_path.split("."):
        if not hasattr(obj, part):
            raise ConfigError(
                f"{attr_path} not found in {module_path}",
                context={"class_path": class_path},
            )
        obj = getattr(obj, part)

    return obj


class ObjectBuilder:
    """Handles object construction from configurations.

    Supports:
        - Direct class instantiation via 'class' attribute
        - Factory pattern via 'factory' attribute
        - Object caching
    """

    def __init__(self, config_instance: "Config") -> None:
        """Initialize the object builder.

        Args:
            config_instance: The Config instance to build objects from
        """
        self._config = config_instance
        self._cache: Dict[Tuple[str, Union[str, int]], Any] = {}

    def build(
        self,
        type_name: str,
        name_or_index: Union[str, int] = 0,
        cache: bool = True,
        **kwargs: Any,
    ) -> Any:
        """Build an object from a configuration entry.

        Args:
            type_name: Configuration type
            name_or_index: Entry name or index
            cache: Whether to cache the built object
            **kwargs: Additional keyword arguments for construction

        Returns:
            Built object instance

        Raises:
            ConfigError: If object cannot be built
        """
        key = (type_name, name_or_index)
        if cache and key in self._cache:
            return self._cache[key]

        config = self._config.get(type_name, name_or_index)
        obj = self.build_from_config(config, **kwargs)

        if cache:
            self._cache[key] = obj

        return obj

    def build_from_config(self, config: dict, **kwargs: Any) -> Any:
        """Build an object from a configuration dictionary.

        Args:
            config: Configuration dictionary
            **kwargs: Additional keyword arguments

        Returns:
            Built object instance
        """
        config = copy.deepcopy(config)
        config.update(kwargs)

        if "factory" in config:
            return self._build_with_factory(config)

        if "class" in config:
            return self._build_with_class(config)

        raise ConfigError(
            "Configuration must specify either 'class' or 'factory' for object construction"
        )

    def _build_with_class(self, config: dict) -> Any:
        class_path = config.pop("class")
        cls = load_class(class_path)

        config.pop("type", None)
        config.pop("name", None)

        if hasattr(cls, "from_config"):
            return cls.from_config(config)

        try:
            return cls(**config)
        except TypeError as e:
            raise ConfigError(f"Failed to instantiate {class_path}: {e}") from e

    def _build_with_factory(self, config: dict) -> Any:
        factory_path = config.pop("factory")
        factory_cls = load_class(factory_path)

        config.pop("type", None)
        config.pop("name", None)

        # Classes are instantiated, module-level functions are used as is
        factory = factory_cls() if isinstance(factory_cls, type) else factory_cls

        if hasattr(factory, "create"):
            return factory.create(**config)
        elif callable(factory):
            return factory(**config)
        else:
            raise ConfigError(
                f"Factory {factory_path} must have a 'create' method or be callable"
            )

    def clear_cache(self, type_name: str | None = None) -> None:
        """Clear cached objects.

        Args:
            type_name: Clear only objects of this type, or None to clear all
        """
        if type_name:
            for key in [k for k in self._cache if k[0] == type_name]:
                del self._cache[key]
        else:
            self._cache.clear()


class ConfigurableBase:
    """Base class for objects that can be configured.

    Classes that inherit from this can implement custom
    configuration loading logic.
    """

    @classmethod
    def from_config(cls, config: dict) -> "ConfigurableBase":
        """Create an instance from a configuration dictionary.

        Args:
            config: Configuration dictionary

        Returns:
            Instance of the class
        """
        return cls(**config)


class FactoryBase:
    """Base class for factory objects.

    Factories that inherit from this should implement
    the create method.
    """

    def create(self, **config: Any) -> Any:
        """Create an object from configuration.

        Args:
            **config: Configuration parameters

        Returns:
            Created object
        """
        raise NotImplementedError("Subclasses must implement create method")
