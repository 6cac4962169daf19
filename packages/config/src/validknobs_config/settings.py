"""Global settings and defaults management."""

import copy
from typing import Any, Dict


class SettingsManager:
    """Manages global settings and per-type defaults.

    Settings attributes:
        - <type>.<attribute>: Type-specific defaults
        - <attribute>: Global defaults
        - config_root: Directory of the first configuration file loaded
          (never applied as a default)
    """

    RESERVED = ("config_root",)

    def __init__(self) -> None:
        self._settings: Dict[str, Any] = {}

    def load_settings(self, settings: dict) -> None:
        """Load settings from a dictionary.

        Args:
            settings: Settings dictionary
        """
        # First seen takes precedence
        for key, value in settings.items():
            if key not in self._settings:
                self._settings[key] = value

    def get_setting(self, key: str, default: Any = None) -> Any:
        """Get a setting value, or ``default`` when unset."""
        return self._settings.get(key, default)

    def set_setting(self, key: str, value: Any) -> None:
        self._settings[key] = value

    def apply_defaults(self, config: dict, type_name: str) -> dict:
        """Apply default values to a configuration.

        Type-specific defaults win over global ones; values already present
        in the configuration win over both.

        Args:
            config: Atomic configuration dictionary
            type_name: Type of the configuration

        Returns:
            Configuration with defaults applied
        """
        result = copy.deepcopy(config)

        type_prefix = f"{type_name}."
        for key, value in self._settings.items():
            if key.startswith(type_prefix):
                attr = key[len(type_prefix) :]
                if attr not in result:
                    result[attr] = copy.deepcopy(value)

        for key, value in self._settings.items():
            if "." in key or key in self.RESERVED:
                continue
            if key not in result:
                result[key] = copy.deepcopy(value)

        return result

    def to_dict(self) -> dict:
        return copy.deepcopy(self._settings)
