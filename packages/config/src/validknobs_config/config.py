"""Core Config class implementation."""

import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml  # type: ignore[import-untyped]

from .builders import ObjectBuilder
from .environment import EnvironmentOverrides
from .exceptions import ConfigNotFoundError, ValidationError
from .settings import SettingsManager

logger = logging.getLogger(__name__)


class Config:
    """Typed configuration sections for validknobs components.

    Internally stores configurations as a dictionary of lists of atomic
    configuration dictionaries, organized by type::

        settings:
          controller.continue_validation: true
        provider:
          - name: default
            factory: validknobs_engine.factory.ValidatorProviderFactory
            cached: true
        controller:
          - name: default
            factory: validknobs_engine.factory.ValidationControllerFactory
            provider:
              cached: true

    A controller's ``provider`` is either a nested provider configuration
    or the dotted path of a callable returning a provider.
    """

    def __init__(
        self,
        *sources: Union[str, Path, dict],
        use_env: bool = True,
        env_prefix: str | None = None,
    ) -> None:
        """Initialize a Config object from one or more sources.

        Args:
            *sources: File paths (YAML or JSON) or dictionaries
            use_env: Apply ``VALIDKNOBS_`` environment overrides after loading
            env_prefix: Custom environment variable prefix
        """
        self._data: Dict[str, List[Dict[str, Any]]] = {}
        self._settings_manager = SettingsManager()
        self._environment_overrides = EnvironmentOverrides(env_prefix)
        self._object_builder = ObjectBuilder(self)

        for source in sources:
            self.load(source)

        if use_env:
            self._apply_environment_overrides()

    @classmethod
    def from_file(cls, path: Union[str, Path], **kwargs: Any) -> "Config":
        return cls(path, **kwargs)

    @classmethod
    def from_dict(cls, data: dict, **kwargs: Any) -> "Config":
        return cls(data, **kwargs)

    def load(self, source: Union[str, Path, dict]) -> None:
        """Load configuration from a file path or dictionary."""
        if isinstance(source, dict):
            self._load_dict(source)
        elif isinstance(source, (str, Path)):
            self._load_file(source)
        else:
            raise ValidationError(f"Invalid source type: {type(source)}")

    def _load_file(self, path: Union[str, Path]) -> None:
        path = Path(path).resolve()

        if not path.exists():
            raise ConfigNotFoundError(
                f"Configuration file not found: {path}", context={"path": str(path)}
            )

        if not self._settings_manager.get_setting("config_root"):
            self._settings_manager.set_setting("config_root", str(path.parent))

        suffix = path.suffix.lower()
        with open(path) as f:
            if suffix in [".yaml", ".yml"]:
                data = yaml.safe_load(f)
            elif suffix == ".json":
                data = json.load(f)
            else:
                raise ValidationError(f"Unsupported file format: {suffix}")

        if data:
            if not isinstance(data, dict):
                raise ValidationError(f"Configuration file must contain a mapping: {path}")
            self._load_dict(data)

        logger.debug(f"Loaded configuration from {path}")

    def _load_dict(self, data: dict) -> None:
        if "settings" in data:
            self._settings_manager.load_settings(data["settings"])

        for type_name, configs in data.items():
            if type_name == "settings":
                continue

            if not isinstance(configs, list):
                configs = [configs]

            entries = self._data.setdefault(type_name, [])
            for config in configs:
                if not isinstance(config, dict):
                    logger.warning(
                        f"Skipping malformed {type_name} entry: expected a mapping, "
                        f"got {type(config).__name__}"
                    )
                    continue
                entries.append(self._normalize_atomic_config(config, type_name, len(entries)))

    def _normalize_atomic_config(self, config: dict, type_name: str, idx: int) -> dict:
        config = copy.deepcopy(config)

        if "type" not in config:
            config["type"] = type_name
        elif config["type"] != type_name:
            raise ValidationError(f"Type mismatch: expected {type_name}, got {config['type']}")

        if "name" not in config:
            config["name"] = str(idx)

        return self._settings_manager.apply_defaults(config, type_name)

    def _apply_environment_overrides(self) -> None:
        overrides = self._environment_overrides.get_overrides()

        for (type_name, name_or_index, attr), value in overrides.items():
            try:
                config = self.get(type_name, name_or_index)
            except ConfigNotFoundError as e:
                logger.warning(
                    f"Failed to apply environment override "
                    f"{type_name}[{name_or_index}].{attr}: {e}"
                )
                continue

            config[attr] = value
            self.set(type_name, name_or_index, config)
            logger.debug(f"Applied environment override {type_name}[{name_or_index}].{attr}")

    def get_types(self) -> List[str]:
        """Get all configuration types."""
        return list(self._data.keys())

    def get_count(self, type_name: str) -> int:
        """Get the count of configurations for a type."""
        return len(self._data.get(type_name, []))

    def get_names(self, type_name: str) -> List[str]:
        """Get all configuration names for a type."""
        return [config["name"] for config in self._data.get(type_name, [])]

    def get(self, type_name: str, name_or_index: Union[str, int] = 0) -> dict:
        """Get a configuration by type and name/index.

        Args:
            type_name: Type name
            name_or_index: Configuration name or index

        Returns:
            A copy of the configuration dictionary

        Raises:
            ConfigNotFoundError: If the type or entry does not exist
        """
        if type_name not in self._data:
            raise ConfigNotFoundError(
                f"Type not found: {type_name}",
                context={"type": type_name, "available": self.get_types()},
            )

        configs = self._data[type_name]

        if isinstance(name_or_index, int):
            try:
                return copy.deepcopy(configs[name_or_index])
            except IndexError:
                raise ConfigNotFoundError(
                    f"Index out of range: {type_name}[{name_or_index}]",
                    context={"type": type_name, "index": name_or_index},
                ) from None

        for config in configs:
            if config.get("name") == name_or_index:
                return copy.deepcopy(config)

        raise ConfigNotFoundError(
            f"Configuration not found: {type_name}[{name_or_index}]",
            context={"type": type_name, "name": name_or_index, "available": self.get_names(type_name)},
        )

    def get_all(self, type_name: str) -> List[dict]:
        """Get copies of all configurations for a type."""
        return copy.deepcopy(self._data.get(type_name, []))

    def set(self, type_name: str, name_or_index: Union[str, int], config: dict) -> None:
        """Set a configuration by type and name/index.

        Args:
            type_name: Type name
            name_or_index: Configuration name or index
            config: Configuration dictionary
        """
        configs = self._data.setdefault(type_name, [])
        config = copy.deepcopy(config)

        if isinstance(name_or_index, int):
            config = self._normalize_atomic_config(config, type_name, name_or_index)
            if name_or_index < len(configs):
                configs[name_or_index] = config
            elif name_or_index == len(configs):
                configs.append(config)
            else:
                raise ValidationError(f"Index out of range: {name_or_index}")
        else:
            config["name"] = name_or_index
            for i, existing in enumerate(configs):
                if existing.get("name") == name_or_index:
                    configs[i] = self._normalize_atomic_config(config, type_name, i)
                    break
            else:
                configs.append(self._normalize_atomic_config(config, type_name, len(configs)))

        self._object_builder.clear_cache(type_name)

    def get_setting(self, key: str, default: Any = None) -> Any:
        return self._settings_manager.get_setting(key, default)

    def to_dict(self) -> dict:
        """Export configuration as a dictionary."""
        result: Dict[str, Any] = copy.deepcopy(self._data)

        settings = self._settings_manager.to_dict()
        if settings:
            result["settings"] = settings

        return result

    def build_object(
        self,
        type_name: str,
        name_or_index: Union[str, int] = 0,
        cache: bool = True,
        **kwargs: Any,
    ) -> Any:
        """Build an object from a configuration entry.

        The entry must carry either a ``class`` or a ``factory`` dotted path.

        Args:
            type_name: Configuration type
            name_or_index: Entry name or index
            cache: Whether to cache the built object
            **kwargs: Additional keyword arguments for construction

        Returns:
            Built object instance
        """
        return self._object_builder.build(type_name, name_or_index, cache=cache, **kwargs)

    def clear_object_cache(self, type_name: str | None = None) -> None:
        """Clear cached objects, optionally only those of one type."""
        self._object_builder.clear_cache(type_name)
