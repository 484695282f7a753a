from __future__ import annotations

import json
import threading
from collections import deque
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from signup_ui.utils.api import ApiClient
from signup_ui.utils.errors import HttpError


class _ScriptedHandler(BaseHTTPRequestHandler):
    """Answers with the next queued status; 200 once the queue is empty."""

    def _reply(self):
        length = int(self.headers.get("Content-Length") or 0)
        if length:
            self.rfile.read(length)
        self.server.hits.append(self.command)
        status = self.server.statuses.popleft() if self.server.statuses else 200
        body = json.dumps({"items": []} if status < 400 else {"error": "Service unavailable"}).encode()
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    do_GET = _reply
    do_POST = _reply

    def log_message(self, *args):
        pass


@pytest.fixture
def backend():
    server = ThreadingHTTPServer(("127.0.0.1", 0), _ScriptedHandler)
    server.hits = []
    server.statuses = deque()
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield server
    server.shutdown()
    server.server_close()


def _client(server, retries):
    host, port = server.server_address
    client = ApiClient(f"http://{host}:{port}", timeout=5, retries=retries)
    client.session.trust_env = False
    return client


def test_get_is_retried_after_gateway_error(backend):
    backend.statuses.extend([503, 200])
    result = _client(backend, retries=2).list_blog_tags()
    assert result == {"items": []}
    assert backend.hits == ["GET", "GET"]


def test_get_gives_up_after_configured_retries(backend):
    backend.statuses.extend([502, 502, 502])
    with pytest.raises(HttpError) as excinfo:
        _client(backend, retries=1).list_blog_tags()
    assert excinfo.value.status == 502
    assert backend.hits == ["GET", "GET"]


def test_post_is_never_retried(backend):
    backend.statuses.extend([503, 200])
    with pytest.raises(HttpError) as excinfo:
        _client(backend, retries=2).signup({"username": "jane"})
    assert excinfo.value.status == 503
    assert str(excinfo.value) == "Service unavailable"
    assert backend.hits == ["POST"]


def test_no_retries_by_default(backend):
    backend.statuses.extend([503, 200])
    with pytest.raises(HttpError):
        _client(backend, retries=0).list_blog_tags()
    assert backend.hits == ["GET"]
