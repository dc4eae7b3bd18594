from __future__ import annotations

from .configuration import ConfigOption, Configuration, ConfigurationBuilder
from .default_config import LOG_LEVELS, DefaultConfiguration
from .registry import Registry, RegistryMixin, normalize_hook_name

__all__ = [
    "ConfigOption",
    "Configuration",
    "ConfigurationBuilder",
    "DefaultConfiguration",
    "LOG_LEVELS",
    "Registry",
    "RegistryMixin",
    "normalize_hook_name",
]
