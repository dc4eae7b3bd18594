from __future__ import annotations

import inspect
import logging
import threading
from collections import defaultdict
from typing import Any, Callable

from ..errors import RegistrationError
from ..plugins.builder import Builder
from .configuration import Configuration
from .default_config import DefaultConfiguration

logger = logging.getLogger(__name__)

AdapterBuilder = Callable[[type], None]
HandlerBuilder = Callable[[type], None]


def normalize_hook_name(name: Any) -> str:
    return str(name).lower().strip()


class RegistryMixin:
    """Configuration, adapter, handler and hook storage for an owning object.

    Every container is created on first access and dropped again by its
    `reset_*` method; the next access then starts from an empty container.
    All access goes through one re-entrant lock per owner.
    """

    _config: Configuration | None = None
    _adapters: dict[str, type] | None = None
    _handlers: set[type] | None = None
    _hooks: defaultdict[str, set[Any]] | None = None

    def _lock(self):
        lock = self.__dict__.get("_registry_lock")
        if lock is None:
            # Concurrent first callers all get the lock that setdefault stored.
            lock = self.__dict__.setdefault("_registry_lock", threading.RLock())
        return lock

    @property
    def config(self) -> Configuration:
        """The primary configuration object, built and finalized on first access."""
        with self._lock():
            if self._config is None:
                self._config = DefaultConfiguration(self).finalize()
            return self._config

    def configure(self, fn: Callable[[Configuration], Any]) -> None:
        """Pass the configuration object to `fn` so it can set values."""
        fn(self.config)

    @property
    def adapters(self) -> dict[str, type]:
        with self._lock():
            if self._adapters is None:
                self._adapters = {}
            return self._adapters

    @property
    def handlers(self) -> set[type]:
        with self._lock():
            if self._handlers is None:
                self._handlers = set()
            return self._handlers

    @property
    def hooks(self) -> defaultdict[str, set[Any]]:
        """Hook names mapped to subscriber sets; reading a missing name creates an empty set."""
        with self._lock():
            if self._hooks is None:
                self._hooks = defaultdict(set)
            return self._hooks

    def hook_subscribers(self, name: Any) -> set[Any]:
        with self._lock():
            return self.hooks[normalize_hook_name(name)]

    def register_adapter(
        self,
        key: Any,
        adapter: type | AdapterBuilder | None = None,
        builder: AdapterBuilder | None = None,
    ) -> None:
        """Register an adapter class under `key`.

        `adapter` may be the class itself, or a builder function that receives
        a fresh `Adapter` subclass and fills it in. `builder` can also be
        passed explicitly.
        """
        if builder is None and callable(adapter) and not inspect.isclass(adapter):
            builder, adapter = adapter, None
        if builder is not None:
            adapter = Builder(key, builder).build_adapter()

        if not inspect.isclass(adapter):
            raise RegistrationError("register_adapter requires an adapter class or a builder function")

        name = str(key)
        with self._lock():
            self.adapters[name] = adapter
        logger.debug("registered adapter %r: %s", name, adapter.__name__)

    def register_handler(self, handler_or_key: Any, builder: HandlerBuilder | None = None) -> None:
        """Register a handler class, or build one under the namespace `handler_or_key`."""
        if builder is not None:
            handler = Builder(handler_or_key, builder).build_handler()
        else:
            handler = handler_or_key
            if not inspect.isclass(handler):
                raise RegistrationError("register_handler requires a handler class or a builder function")

        with self._lock():
            self.handlers.add(handler)
        logger.debug("registered handler %s", handler.__name__)

    def register_hook(self, name: Any, hook: Any) -> None:
        with self._lock():
            self.hook_subscribers(name).add(hook)
        logger.debug("registered hook subscriber for %r: %r", normalize_hook_name(name), hook)

    def reset(self) -> None:
        """Clear the configuration object and the adapter, handler and hook registries."""
        with self._lock():
            self.reset_adapters()
            self.reset_config()
            self.reset_handlers()
            self.reset_hooks()

    def reset_adapters(self) -> None:
        with self._lock():
            self._adapters = None

    def reset_config(self) -> None:
        """Drop the configuration object; the next `config` access builds a fresh one."""
        with self._lock():
            self._config = None

    clear_config = reset_config

    def reset_handlers(self) -> None:
        with self._lock():
            self._handlers = None

    def reset_hooks(self) -> None:
        with self._lock():
            self._hooks = None


class Registry(RegistryMixin):
    """A standalone registry object."""

    def __repr__(self) -> str:
        return (
            f"Registry(adapters={len(self._adapters or ())}, handlers={len(self._handlers or ())}, "
            f"hooks={len(self._hooks or ())})"
        )
