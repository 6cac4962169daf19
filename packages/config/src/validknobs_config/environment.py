"""Environment variable override system."""

import logging
import os
from typing import Any, Dict, Mapping, Tuple, Union

from .exceptions import ValidationError

logger = logging.getLogger(__name__)

OverrideKey = Tuple[str, Union[str, int], str]


class EnvironmentOverrides:
    """Handles environment variable overrides for configurations.

    Environment variable format:
    VALIDKNOBS_<TYPE>__<NAME_OR_INDEX>__<ATTRIBUTE>

    Examples:
        - VALIDKNOBS_CONTROLLER__DEFAULT__CONTINUE_VALIDATION=false
          -> controller[default].continue_validation = False
        - VALIDKNOBS_PROVIDER__0__CACHED=no
          -> provider[0].cached = False
    """

    ENV_PREFIX = "VALIDKNOBS_"
    ENV_SEPARATOR = "__"

    def __init__(self, prefix: str | None = None) -> None:
        """Initialize the environment override handler.

        Args:
            prefix: Custom environment variable prefix (default: VALIDKNOBS_)
        """
        self.prefix = prefix or self.ENV_PREFIX

    def get_overrides(self, environ: Mapping[str, str] | None = None) -> Dict[OverrideKey, Any]:
        """Get all environment variable overrides.

        Args:
            environ: Mapping to read instead of ``os.environ``

        Returns:
            Dictionary mapping (type, name_or_index, attribute) to override values
        """
        overrides: Dict[OverrideKey, Any] = {}
        environ = os.environ if environ is None else environ

        for key, value in environ.items():
            if not key.startswith(self.prefix):
                continue
            try:
                overrides[self.parse_env_var(key)] = self.parse_value(value)
            except ValidationError as e:
                logger.warning(f"Ignoring environment override {key}: {e}")

        return overrides

    def parse_env_var(self, env_var: str) -> OverrideKey:
        """Convert an environment variable name to an override key.

        Args:
            env_var: Environment variable name

        Returns:
            Tuple of (type_name, name_or_index, attribute)

        Raises:
            ValidationError: If environment variable format is invalid
        """
        if not env_var.startswith(self.prefix):
            raise ValidationError(f"Environment variable must start with {self.prefix}")

        parts = env_var[len(self.prefix) :].split(self.ENV_SEPARATOR)

        if len(parts) < 3 or not all(parts):
            raise ValidationError(f"Invalid environment variable format: {env_var}")

        type_name = parts[0].lower()
        selector = parts[1]
        attribute = self.ENV_SEPARATOR.join(parts[2:]).lower()

        name_or_index: Union[str, int]
        if selector.isdigit() or (selector.startswith("-") and selector[1:].isdigit()):
            name_or_index = int(selector)
        else:
            name_or_index = selector.lower()

        return type_name, name_or_index, attribute

    def to_env_var(self, type_name: str, name_or_index: Union[str, int], attribute: str) -> str:
        """Build the environment variable name for a configuration attribute.

        Args:
            type_name: Configuration type
            name_or_index: Entry name or index
            attribute: Attribute name

        Returns:
            Environment variable name
        """
        sep = self.ENV_SEPARATOR
        return f"{self.prefix}{type_name.upper()}{sep}{str(name_or_index).upper()}{sep}{attribute.upper()}"

    def parse_value(self, value: str) -> Any:
        """Parse an environment variable value to appropriate type.

        Args:
            value: String value from environment

        Returns:
            Parsed value (bool, int, float, or original string)
        """
        if value.lower() in ["true", "yes"]:
            return True
        elif value.lower() in ["false", "no"]:
            return False

        try:
            return int(value)
        except ValueError:
            pass

        try:
            return float(value)
        except ValueError:
            pass

        return value
