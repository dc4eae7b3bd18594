from __future__ import annotations

from .core.configuration import Configuration, ConfigurationBuilder
from .core.default_config import DefaultConfiguration
from .core.registry import Registry, RegistryMixin
from .errors import BotplugError, ConfigurationError, RegistrationError
from .http.callback import ROBOT_SCOPE_KEY, HTTPCallback
from .http.response import HTTPResponse
from .plugins import Adapter, Builder, Handler, HTTPRoute, route
from .robot import Robot

__all__ = [
    "Adapter",
    "BotplugError",
    "Builder",
    "Configuration",
    "ConfigurationBuilder",
    "ConfigurationError",
    "DefaultConfiguration",
    "Handler",
    "HTTPCallback",
    "HTTPResponse",
    "HTTPRoute",
    "RegistrationError",
    "Registry",
    "RegistryMixin",
    "ROBOT_SCOPE_KEY",
    "Robot",
    "route",
]
