from __future__ import annotations

import re
from typing import Any, ClassVar

from ..core.configuration import ConfigOption, ConfigurationBuilder

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def namespace_from_class_name(name: str, suffix: str = "") -> str:
    """`GitHubWebhookHandler` -> `git_hub_webhook` when `suffix` is "Handler"."""
    if suffix and name.endswith(suffix) and name != suffix:
        name = name[: -len(suffix)]
    return _CAMEL_BOUNDARY.sub("_", name).lower()


class Plugin:
    """Shared behaviour of adapters and handlers.

    Each subclass gets its own `configuration_builder`; options declared with
    `option()` become the plugin's namespace in the robot configuration.
    """

    namespace: ClassVar[str] = ""
    configuration_builder: ClassVar[ConfigurationBuilder]
    _namespace_suffix: ClassVar[str] = ""

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls.configuration_builder = ConfigurationBuilder()
        if "namespace" not in cls.__dict__:
            cls.namespace = namespace_from_class_name(cls.__name__, cls._namespace_suffix)

    @classmethod
    def option(cls, name: str, **kwargs: Any) -> ConfigOption | ConfigurationBuilder:
        """Declare a configuration attribute for this plugin."""
        return cls.configuration_builder.config(name, **kwargs)

    def __init__(self, robot: Any = None) -> None:
        self.robot = robot

    def _config_section(self, section: str) -> Any:
        if self.robot is None:
            return None
        parent = getattr(self.robot.config, section)
        return getattr(parent, self._config_key(), None)

    def _config_key(self) -> str:
        return type(self).namespace
