from __future__ import annotations

from typing import Any

from fastapi import FastAPI
from starlette.types import ASGIApp, Receive, Scope, Send

from ..errors import RegistrationError
from .callback import ROBOT_SCOPE_KEY, HTTPCallback


class RobotScopeMiddleware:
    """Expose the robot to route callbacks through the request scope."""

    def __init__(self, app: ASGIApp, robot: Any) -> None:
        self.app = app
        self.robot = robot

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] in ("http", "websocket"):
            scope = dict(scope)
            scope[ROBOT_SCOPE_KEY] = self.robot
        await self.app(scope, receive, send)


def mount_handler_routes(app: FastAPI, handlers: Any) -> list[HTTPCallback]:
    """Add every HTTP route declared by `handlers` to `app`."""

    owners: dict[tuple[str, str], type] = {}
    callbacks: list[HTTPCallback] = []

    for handler in sorted(handlers, key=lambda h: (h.__module__, h.__qualname__)):
        for r in getattr(handler, "http_routes", ()):
            key = (r.method, r.path)
            if key in owners:
                raise RegistrationError(
                    f"{r.method} {r.path} is already routed to {owners[key].__name__}, "
                    f"cannot also route it to {handler.__name__}"
                )
            owners[key] = handler
            cb = HTTPCallback(handler, r.callback)
            app.router.add_route(r.path, cb, methods=[r.method], include_in_schema=False)
            callbacks.append(cb)

    return callbacks


def create_app(robot: Any, *, title: str = "botplug") -> FastAPI:
    """Create the HTTP app serving the routes of all registered handlers."""

    app = FastAPI(title=title)
    mount_handler_routes(app, robot.registry.handlers)

    @app.get("/healthz")
    def healthz() -> dict[str, bool]:
        return {"ok": True}

    app.add_middleware(RobotScopeMiddleware, robot=robot)
    return app
