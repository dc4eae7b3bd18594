from __future__ import annotations

from typing import Any

from botplug import Handler, HTTPResponse, Registry, Robot, route


class GreeterHandler(Handler):
    @route("GET", "/hello/{name}")
    def hello(self, request: Any, response: HTTPResponse) -> None:
        greeting = self.config.greeting if self.config is not None else "Hello"
        response.json({"message": f"{greeting}, {request.path_params['name']}!", "from": self.robot.name})


GreeterHandler.option("greeting", types=str, default="Hello")


def build_robot() -> Robot:
    registry = Registry()
    registry.register_handler(GreeterHandler)
    registry.register_hook("loaded", lambda robot, **payload: print(f"{robot.name} loaded"))

    def setup(config: Any) -> None:
        config.robot.name = "Marvin"
        config.handlers.greeter.greeting = "Hi"

    registry.configure(setup)
    robot = Robot(registry)
    robot.trigger("loaded")
    return robot


# Serve with any ASGI server, e.g. `uvicorn hello_bot:app` from this directory.
app = build_robot().app
