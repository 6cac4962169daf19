"""validknobs Config Package

Configuration for validation providers and controllers: typed sections loaded
from YAML, JSON or dictionaries, environment overrides and object construction.
"""

from .builders import ConfigurableBase, FactoryBase, load_class
from .config import Config
from .environment import EnvironmentOverrides
from .exceptions import (
    ConfigError,
    ConfigNotFoundError,
    ValidationError,
)

__version__ = "1.0.0"
__all__ = [
    "Config",
    "ConfigError",
    "ConfigNotFoundError",
    "ConfigurableBase",
    "EnvironmentOverrides",
    "FactoryBase",
    "ValidationError",
    "load_class",
]
