from __future__ import annotations

from .adapter import Adapter
from .base import Plugin, namespace_from_class_name
from .builder import Builder
from .handler import HTTP_METHODS, Handler, HTTPRoute, route

__all__ = [
    "Plugin",
    "Adapter",
    "Handler",
    "HTTPRoute",
    "HTTP_METHODS",
    "Builder",
    "route",
    "namespace_from_class_name",
]
