# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import socket
import threading
from collections.abc import Iterator
from dataclasses import dataclass, field
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from leyvault.console import get_console_cache


@dataclass
class CatalogServer:
    """Serve in-memory documents over HTTP on localhost."""

    base_url: str
    documents: dict[str, bytes] = field(default_factory=dict)
    truncated: set[str] = field(default_factory=set)
    requests: list[str] = field(default_factory=list)

    def url(self, path: str) -> str:
        return f"{self.base_url}{path}"


def _handler_for(server_state: CatalogServer) -> type[BaseHTTPRequestHandler]:
    class Handler(BaseHTTPRequestHandler):
        def do_GET(self) -> None:  # noqa: N802 - http.server naming
            server_state.requests.append(self.path)
            body = server_state.documents.get(self.path)
            if body is None:
                self.send_error(404)
                return
            self.send_response(200)
            self.send_header("Content-Type", "application/toml")
            declared = len(body) * 2 if self.path in server_state.truncated else len(body)
            self.send_header("Content-Length", str(declared))
            self.end_headers()
            self.wfile.write(body)
            if self.path in server_state.truncated:
                self.close_connection = True

        def log_message(self, format: str, *args: object) -> None:
            return

    return Handler


@pytest.fixture
def catalog_server() -> Iterator[CatalogServer]:
    """Run a throwaway HTTP server for the duration of a test."""

    state = CatalogServer(base_url="")
    httpd = ThreadingHTTPServer(("127.0.0.1", 0), _handler_for(state))
    host, port = httpd.server_address[:2]
    state.base_url = f"http://{host}:{port}"
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    try:
        yield state
    finally:
        httpd.shutdown()
        httpd.server_close()
        thread.join(timeout=5)


@pytest.fixture
def unreachable_url() -> str:
    """Return an HTTP URL on a localhost port nobody listens on."""

    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    return f"http://127.0.0.1:{port}/libs.version.toml"


@pytest.fixture(autouse=True)
def _fresh_consoles() -> Iterator[None]:
    """Rebuild Rich consoles so output lands in the active capture."""

    get_console_cache().clear()
    yield
    get_console_cache().clear()
