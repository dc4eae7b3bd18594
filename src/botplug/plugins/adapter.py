from __future__ import annotations

from typing import Any, Iterable

from .base import Plugin


class Adapter(Plugin):
    """Base class for chat network adapters.

    Concrete adapters implement the connection to one chat service; this
    package only registers and configures them.
    """

    _namespace_suffix = "Adapter"

    @property
    def config(self) -> Any:
        return self._config_section("adapters")

    def _config_key(self) -> str:
        # Adapters are configured under the key they were registered with.
        if self.robot is not None:
            for key, adapter in self.robot.registry.adapters.items():
                if adapter is type(self):
                    return key
        return type(self).namespace

    def run(self) -> None:
        raise NotImplementedError(f"{type(self).__name__} must implement run()")

    def shut_down(self) -> None:
        raise NotImplementedError(f"{type(self).__name__} must implement shut_down()")

    def send_messages(self, target: Any, strings: Iterable[str]) -> None:
        raise NotImplementedError(f"{type(self).__name__} must implement send_messages()")
