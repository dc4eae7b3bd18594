from __future__ import annotations

from .app import RobotScopeMiddleware, create_app, mount_handler_routes
from .callback import ROBOT_SCOPE_KEY, HTTPCallback
from .response import HTTPResponse, ResponseTriple

__all__ = [
    "ROBOT_SCOPE_KEY",
    "HTTPCallback",
    "HTTPResponse",
    "ResponseTriple",
    "RobotScopeMiddleware",
    "create_app",
    "mount_handler_routes",
]
