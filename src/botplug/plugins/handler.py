from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Union

from .base import Plugin

# (handler, request, response); may return an awaitable.
RouteCallback = Callable[[Any, Any, Any], Any]

HTTP_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD", "LINK", "UNLINK")

_ROUTE_ATTR = "__botplug_routes__"


def _normalize_method(method: str) -> str:
    m = str(method).strip().upper()
    if m not in HTTP_METHODS:
        raise ValueError(f"Unsupported HTTP method: {method!r}")
    return m


def _normalize_path(path: str) -> str:
    p = str(path).strip()
    if not p:
        raise ValueError("route path cannot be empty")
    return p if p.startswith("/") else f"/{p}"


@dataclass(frozen=True)
class HTTPRoute:
    method: str
    path: str
    callback: RouteCallback


def route(method: str, path: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Mark a handler method as the callback for an HTTP route.

        class Status(Handler):
            @route("GET", "/status")
            def status(self, request, response):
                response.write("ok")
    """
    m = _normalize_method(method)
    p = _normalize_path(path)

    def decorator(fn: Callable[..., Any]) -> Callable[..., Any]:
        marks = list(getattr(fn, _ROUTE_ATTR, ()))
        marks.append((m, p))
        setattr(fn, _ROUTE_ATTR, marks)
        return fn

    return decorator


class Handler(Plugin):
    """Base class for bot behaviours.

    A handler is instantiated with the robot for every unit of work, e.g. once
    per HTTP request, so instance state does not outlive a request.
    """

    _namespace_suffix = "Handler"
    http_routes: ClassVar[list[HTTPRoute]]

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        inherited: list[HTTPRoute] = []
        for base in reversed(cls.__mro__[1:]):
            for r in base.__dict__.get("http_routes", ()):
                if r not in inherited:
                    inherited.append(r)

        own = [
            HTTPRoute(m, p, value)
            for value in cls.__dict__.values()
            for m, p in getattr(value, _ROUTE_ATTR, ())
        ]
        own_keys = {(r.method, r.path) for r in own}

        def _overridden(r: HTTPRoute) -> bool:
            name = getattr(r.callback, "__name__", None)
            return name in cls.__dict__ and cls.__dict__[name] is not r.callback

        # Routes declared on this class win over inherited ones for the same method and path.
        cls.http_routes = [
            r for r in inherited if (r.method, r.path) not in own_keys and not _overridden(r)
        ] + own

    @classmethod
    def http(cls, method: str, path: str, callback: Union[RouteCallback, str]) -> HTTPRoute:
        """Register `callback` for `method` requests to `path`.

        `callback` is either a function taking (handler, request, response) or
        the name of a method on this handler taking (request, response).
        """
        if isinstance(callback, str):
            fn = getattr(cls, callback, None)
            if fn is None or not callable(fn):
                raise ValueError(f"{cls.__name__} has no method {callback!r}")
            callback = fn
        r = HTTPRoute(_normalize_method(method), _normalize_path(path), callback)
        cls.http_routes.append(r)
        return r

    @classmethod
    def http_get(cls, path: str, callback: Union[RouteCallback, str]) -> HTTPRoute:
        return cls.http("GET", path, callback)

    @classmethod
    def http_post(cls, path: str, callback: Union[RouteCallback, str]) -> HTTPRoute:
        return cls.http("POST", path, callback)

    @property
    def config(self) -> Any:
        return self._config_section("handlers")
