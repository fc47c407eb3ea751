# Copyright 2026 CredHub Client Contributors
# SPDX-License-Identifier: Apache-2.0
"""Shared fixtures: a scripted httpx transport and a local HTTP server."""

from __future__ import annotations

import http.server
import json
import threading
from typing import Any, Callable, Iterator

import httpx
import pytest

from credhub_client import Session

Handler = Callable[[httpx.Request], httpx.Response]

INFO_BODY = {
    "app": {"version": "0.1.0 build DEV", "name": "CredHub"},
    "auth-server": {"url": "https://uaa.example.com"},
}
TOKEN_BODY = {
    "access_token": "2YotnFZFEjr1zCsicMWpAA",
    "refresh_token": "erousflkajqwer",
    "token_type": "bearer",
    "expires_in": 3600,
}


def respond(status: int = 200, body: Any = None) -> Handler:
    """Handler answering with a JSON body (or raw text when given a str)."""

    def handler(request: httpx.Request) -> httpx.Response:
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)

    return handler


def fail_with(error: Exception) -> Handler:
    def handler(request: httpx.Request) -> httpx.Response:
        raise error

    return handler


class ScriptedTransport(httpx.MockTransport):
    """Answers requests with handlers in the order they were appended."""

    def __init__(self, *handlers: Handler) -> None:
        self.handlers = list(handlers)
        self.requests: list[httpx.Request] = []
        super().__init__(self._dispatch)

    def append(self, *handlers: Handler) -> None:
        self.handlers.extend(handlers)

    def _dispatch(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.handlers:
            return httpx.Response(500, json={"error": "unexpected request"})
        return self.handlers.pop(0)(request)


@pytest.fixture
def session() -> Session:
    return Session(
        api_url="https://credhub.example.com",
        auth_url="https://uaa.example.com",
        access_token="some-access-token",
    )


# ---------------------------------------------------------------------------
# Local HTTP server for end-to-end CLI tests
# ---------------------------------------------------------------------------


class _FixtureHandler(http.server.BaseHTTPRequestHandler):
    server: FixtureServer

    def _handle(self) -> None:
        length = int(self.headers.get("Content-Length") or 0)
        body = self.rfile.read(length) if length else b""
        self.server.received.append((self.command, self.path, body.decode()))

        status, payload = 500, {"error": "unexpected request"}
        if self.server.routes:
            method, path, status, payload = self.server.routes.pop(0)
            if (method, path) != (self.command, self.path):
                status, payload = 404, {"error": f"unexpected {self.command} {self.path}"}

        data = b"" if payload is None else json.dumps(payload).encode()
        if isinstance(payload, str):
            data = payload.encode()
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(data)))
        self.end_headers()
        self.wfile.write(data)

    do_GET = _handle
    do_POST = _handle
    do_DELETE = _handle

    def log_message(self, format: str, *args: Any) -> None:
        pass  # Suppress logs


class FixtureServer(http.server.HTTPServer):
    """HTTP server answering scripted (method, path, status, body) routes."""

    def __init__(self) -> None:
        super().__init__(("127.0.0.1", 0), _FixtureHandler)
        self.routes: list[tuple[str, str, int, Any]] = []
        self.received: list[tuple[str, str, str]] = []

    @property
    def url(self) -> str:
        return f"http://127.0.0.1:{self.server_address[1]}"

    def expect(self, method: str, path: str, status: int = 200, body: Any = None) -> None:
        self.routes.append((method, path, status, body))


@pytest.fixture
def start_server() -> Iterator[Callable[[], FixtureServer]]:
    servers: list[FixtureServer] = []

    def start() -> FixtureServer:
        server = FixtureServer()
        threading.Thread(target=server.serve_forever, daemon=True).start()
        servers.append(server)
        return server

    yield start

    for server in servers:
        server.shutdown()
        server.server_close()


@pytest.fixture
def config_dir(tmp_path: Any, monkeypatch: pytest.MonkeyPatch) -> Any:
    """Point the config store at a temp dir and bypass any HTTP proxy."""
    monkeypatch.setenv("CREDHUB_CONFIG_DIR", str(tmp_path))
    for var in ("HTTP_PROXY", "HTTPS_PROXY", "ALL_PROXY", "http_proxy", "https_proxy", "all_proxy"):
        monkeypatch.delenv(var, raising=False)
    return tmp_path
