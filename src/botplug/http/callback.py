from __future__ import annotations

import inspect
import logging
from typing import Any

from starlette.concurrency import run_in_threadpool
from starlette.requests import Request
from starlette.types import Message, Receive, Scope, Send

from ..plugins.handler import RouteCallback
from .response import HTTPResponse, ResponseTriple

logger = logging.getLogger(__name__)

# Scope key under which the hosting app exposes the robot to route callbacks.
ROBOT_SCOPE_KEY = "botplug.robot"


async def _empty_receive() -> Message:
    return {"type": "http.request", "body": b"", "more_body": False}


class HTTPCallback:
    """Wraps a handler's route callback as an ASGI endpoint.

    Each request gets a fresh handler instance bound to the robot found in
    the scope. HEAD requests are answered with 204 without running the
    callback. Errors from the handler or the callback are not caught here;
    the hosting app turns them into 5xx responses.
    """

    __slots__ = ("_handler_class", "_callback")

    def __init__(self, handler_class: type, callback: RouteCallback) -> None:
        self._handler_class = handler_class
        self._callback = callback

    def __repr__(self) -> str:
        name = getattr(self._callback, "__qualname__", repr(self._callback))
        return f"HTTPCallback({self._handler_class.__name__}, {name})"

    @property
    def handler_class(self) -> type:
        return self._handler_class

    @property
    def callback(self) -> RouteCallback:
        return self._callback

    async def call(self, scope: Scope, receive: Receive = _empty_receive) -> ResponseTriple:
        request = Request(scope, receive)
        response = HTTPResponse()

        if request.method == "HEAD":
            response.status = 204
        else:
            handler = self._handler_class(scope.get(ROBOT_SCOPE_KEY))
            if inspect.iscoroutinefunction(self._callback):
                await self._callback(handler, request, response)
            else:
                result = await run_in_threadpool(self._callback, handler, request, response)
                if inspect.isawaitable(result):
                    await result

        logger.debug("%s %s -> %d", request.method, scope.get("path", ""), response.status)
        return response.finish()

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        status, headers, body = await self.call(scope, receive)
        await send(
            {
                "type": "http.response.start",
                "status": status,
                "headers": [(k.encode("latin-1"), v.encode("latin-1")) for k, v in headers],
            }
        )
        await send({"type": "http.response.body", "body": body})
