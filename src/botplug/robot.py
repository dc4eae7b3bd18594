from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI

from .core.configuration import Configuration
from .core.registry import Registry, RegistryMixin, normalize_hook_name
from .http.app import create_app

logger = logging.getLogger(__name__)


class Robot:
    """The running bot as seen by handlers.

    Reads the registry's configuration on construction, so plugins should be
    registered (and `configure()` called) before a robot is created.
    """

    def __init__(self, registry: RegistryMixin | None = None) -> None:
        self.registry = registry if registry is not None else Registry()
        self._app: FastAPI | None = None
        level = self.config.robot.log_level
        if level is not None:
            logging.getLogger("botplug").setLevel(level.strip().upper())

    def __repr__(self) -> str:
        return f"Robot(name={self.name!r})"

    @property
    def config(self) -> Configuration:
        return self.registry.config

    @property
    def name(self) -> str:
        return self.config.robot.name

    @property
    def mention_name(self) -> str:
        return self.config.robot.mention_name or self.name

    @property
    def app(self) -> FastAPI:
        if self._app is None:
            self._app = create_app(self, title=self.name)
        return self._app

    def trigger(self, name: Any, **payload: Any) -> list[Any]:
        """Call each subscriber of hook `name` with `robot=self` plus `payload`."""
        hook = normalize_hook_name(name)
        subscribers = list(self.registry.hooks.get(hook, ()))
        logger.debug("triggering hook %r for %d subscriber(s)", hook, len(subscribers))
        return [subscriber(robot=self, **payload) for subscriber in subscribers]
