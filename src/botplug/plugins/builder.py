from __future__ import annotations

from typing import Any, Callable

from .adapter import Adapter
from .handler import Handler


def _class_name(namespace: str, suffix: str) -> str:
    parts = [p for p in namespace.replace("-", "_").split("_") if p]
    return "".join(p[:1].upper() + p[1:] for p in parts) + suffix


class Builder:
    """Create adapter or handler classes from a builder function.

    The builder function receives a fresh subclass whose `namespace` is
    already set, and fills it in: declaring config options, HTTP routes, or
    assigning methods.
    """

    def __init__(self, namespace: Any, fn: Callable[[type], Any]) -> None:
        self.namespace = str(namespace).strip()
        if not self.namespace:
            raise ValueError("namespace cannot be empty")
        self.fn = fn

    def build_adapter(self) -> type[Adapter]:
        return self._build(Adapter, "Adapter")

    def build_handler(self) -> type[Handler]:
        return self._build(Handler, "Handler")

    def _build(self, base: type, suffix: str) -> Any:
        cls = type(_class_name(self.namespace, suffix), (base,), {"namespace": self.namespace})
        self.fn(cls)
        return cls
