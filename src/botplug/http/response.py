from __future__ import annotations

from typing import Any

from starlette.datastructures import MutableHeaders
from starlette.responses import JSONResponse

ResponseTriple = tuple[int, list[tuple[str, str]], bytes]

# Statuses that must not carry a body or entity headers.
STATUS_WITH_NO_ENTITY_BODY = frozenset({204, 304})


class HTTPResponse:
    """Mutable response that route callbacks populate.

    Callbacks set `status`, add `headers` and `write()` body chunks; the
    calling layer turns it into a (status, headers, body) triple with
    `finish()`.
    """

    def __init__(self, status: int = 200) -> None:
        self.status = int(status)
        self.headers = MutableHeaders()
        self._chunks: list[bytes] = []

    def __repr__(self) -> str:
        return f"HTTPResponse(status={self.status}, bytes={len(self.body)})"

    @property
    def body(self) -> bytes:
        return b"".join(self._chunks)

    @body.setter
    def body(self, value: bytes | str) -> None:
        self._chunks = []
        self.write(value)

    def write(self, chunk: bytes | str) -> int:
        if isinstance(chunk, str):
            if "content-type" not in self.headers:
                self.headers["content-type"] = "text/plain; charset=utf-8"
            chunk = chunk.encode("utf-8")
        data = bytes(chunk)
        self._chunks.append(data)
        return len(data)

    def json(self, content: Any, status: int | None = None) -> None:
        if status is not None:
            self.status = int(status)
        self.headers["content-type"] = "application/json"
        self.body = JSONResponse(content).body

    def redirect(self, location: str, status: int = 302) -> None:
        self.status = int(status)
        self.headers["location"] = str(location)

    def finish(self) -> ResponseTriple:
        if self.status in STATUS_WITH_NO_ENTITY_BODY:
            for name in ("content-type", "content-length"):
                if name in self.headers:
                    del self.headers[name]
            return self.status, self.headers.items(), b""

        body = self.body
        self.headers["content-length"] = str(len(body))
        return self.status, self.headers.items(), body
