from __future__ import annotations

from typing import Any

import pytest

from botplug import Handler, HTTPResponse, RegistrationError, Registry, Robot, route
from botplug.http import create_app


def _skip(msg: str) -> None:  # pragma: no cover
    pytest.skip(msg)


def _client(app: Any) -> Any:
    try:
        from fastapi.testclient import TestClient
    except Exception as e:  # pragma: no cover
        _skip(f"TestClient not available ({e!r}); install test extras to run this test")
    return TestClient(app)


class StatusHandler(Handler):
    @route("GET", "/status")
    def status(self, request: Any, response: HTTPResponse) -> None:
        response.json({"robot": self.robot.name, "handler": type(self).namespace})

    @route("POST", "/status/{name}")
    async def rename(self, request: Any, response: HTTPResponse) -> None:
        response.status = 201
        response.write(f"hello {request.path_params['name']}: {(await request.body()).decode()}")


class FailingHandler(Handler):
    @route("GET", "/fail")
    def fail(self, request: Any, response: HTTPResponse) -> None:
        raise RuntimeError("route exploded")


def _robot(*handlers: type) -> Robot:
    reg = Registry()
    for h in handlers:
        reg.register_handler(h)
    reg.configure(lambda c: setattr(c.robot, "name", "Marvin"))
    return Robot(reg)


def test_get_route_reaches_handler_with_robot() -> None:
    client = _client(_robot(StatusHandler).app)

    res = client.get("/status")

    assert res.status_code == 200
    assert res.json() == {"robot": "Marvin", "handler": "status"}


def test_head_route_is_204_with_no_body() -> None:
    client = _client(_robot(StatusHandler).app)

    res = client.head("/status")

    assert res.status_code == 204
    assert res.content == b""


def test_post_route_with_path_params_and_async_callback() -> None:
    client = _client(_robot(StatusHandler).app)

    res = client.post("/status/alice", content=b"hi")

    assert res.status_code == 201
    assert res.text == "hello alice: hi"


def test_wrong_method_is_rejected_by_router() -> None:
    client = _client(_robot(StatusHandler).app)
    assert client.delete("/status").status_code == 405


def test_callback_error_reaches_hosting_layer() -> None:
    client = _client(_robot(FailingHandler).app)

    with pytest.raises(RuntimeError, match="route exploded"):
        client.get("/fail")

    from fastapi.testclient import TestClient

    lenient = TestClient(_robot(FailingHandler).app, raise_server_exceptions=False)
    assert lenient.get("/fail").status_code == 500


def test_healthz() -> None:
    client = _client(_robot().app)
    assert client.get("/healthz").json() == {"ok": True}


def test_builder_registered_routes() -> None:
    reg = Registry()

    def build(cls: type) -> None:
        def ping(handler: Any, request: Any, response: HTTPResponse) -> None:
            response.write("pong")

        cls.http_get("/ping", ping)

    reg.register_handler("ping", build)
    client = _client(Robot(reg).app)

    res = client.get("/ping")
    assert res.status_code == 200
    assert res.text == "pong"


def test_http_by_method_name() -> None:
    class Named(Handler):
        def hello(self, request: Any, response: HTTPResponse) -> None:
            response.write("named")

    Named.http("get", "hello", "hello")

    client = _client(_robot(Named).app)
    assert client.get("/hello").text == "named"


def test_conflicting_routes_raise() -> None:
    class Other(Handler):
        @route("GET", "/status")
        def status(self, request: Any, response: HTTPResponse) -> None:
            pass

    with pytest.raises(RegistrationError):
        create_app(_robot(StatusHandler, Other))


def test_routes_are_per_class() -> None:
    assert [r.path for r in StatusHandler.http_routes] == ["/status", "/status/{name}"]
    assert [r.path for r in FailingHandler.http_routes] == ["/fail"]
    assert Handler.__dict__.get("http_routes") is None

    class Child(StatusHandler):
        pass

    assert [r.path for r in Child.http_routes] == ["/status", "/status/{name}"]


def test_subclass_can_override_a_routed_method() -> None:
    class LoudStatus(StatusHandler):
        @route("GET", "/status")
        def status(self, request: Any, response: HTTPResponse) -> None:
            response.write("LOUD")

    assert [(r.method, r.path) for r in LoudStatus.http_routes] == [
        ("POST", "/status/{name}"),
        ("GET", "/status"),
    ]
    assert LoudStatus.http_routes[-1].callback is LoudStatus.__dict__["status"]

    client = _client(_robot(LoudStatus).app)
    assert client.get("/status").text == "LOUD"


def test_overriding_a_routed_method_without_decorator_drops_its_route() -> None:
    class QuietStatus(StatusHandler):
        def status(self, request: Any, response: HTTPResponse) -> None:
            response.write("quiet")

    assert [r.path for r in QuietStatus.http_routes] == ["/status/{name}"]
