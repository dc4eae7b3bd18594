from __future__ import annotations


class BotplugError(Exception):
    """Base class for errors raised by botplug."""


class RegistrationError(BotplugError, TypeError):
    """A plugin was registered without a class or a builder function."""


class ConfigurationError(BotplugError, ValueError):
    """A configuration value or structure change was rejected."""
