from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .configuration import Configuration, ConfigurationBuilder

if TYPE_CHECKING:
    from .registry import RegistryMixin

logger = logging.getLogger(__name__)

LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


def _validate_log_level(value: Any) -> str | None:
    if str(value).strip().lower() not in LOG_LEVELS:
        return f"must be one of {', '.join(LOG_LEVELS)}"
    return None


def _validate_port(value: Any) -> str | None:
    if isinstance(value, bool) or not 0 < int(value) < 65536:
        return "must be between 1 and 65535"
    return None


class DefaultConfiguration:
    """The configuration tree a registry starts from.

    Adapter and handler namespaces are derived from whatever is registered
    at the time the configuration is built, so plugins should be registered
    before `Registry.config` is first read (or `reset_config()` afterwards).
    """

    def __init__(self, registry: RegistryMixin) -> None:
        self.registry = registry
        self.root = ConfigurationBuilder()

        self._robot_config()
        self._http_config()
        self._adapters_config()
        self._handlers_config()

    def finalize(self) -> Configuration:
        return self.root.finalize()

    def _robot_config(self) -> None:
        robot = self.root.namespace("robot")
        robot.config("name", types=str, default="Bot")
        robot.config("mention_name", types=str)
        robot.config("alias", types=str)
        robot.config("adapter", types=str, default="shell")
        robot.config("locale", types=str, default="en")
        robot.config("log_level", types=str, default="info", validate=_validate_log_level)
        robot.config("admins", types=(list, tuple))

    def _http_config(self) -> None:
        http = self.root.namespace("http")
        http.config("host", types=str, default="0.0.0.0")
        http.config("port", types=int, default=8080, validate=_validate_port)
        http.config("middleware", types=list, default=[])

    def _adapters_config(self) -> None:
        adapters = self.root.namespace("adapters")
        for key, adapter in self.registry.adapters.items():
            builder = getattr(adapter, "configuration_builder", None)
            adapters.attach(key, builder if builder is not None else ConfigurationBuilder())

    def _handlers_config(self) -> None:
        handlers = self.root.namespace("handlers")
        for handler in self.registry.handlers:
            namespace = getattr(handler, "namespace", None)
            if not namespace:
                continue
            builder = getattr(handler, "configuration_builder", None)
            if builder is None or not builder.entries:
                continue
            if namespace in handlers.entries:
                logger.warning("config namespace %r is already taken; skipping %r", namespace, handler)
                continue
            handlers.attach(namespace, builder)
