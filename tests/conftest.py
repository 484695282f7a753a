from __future__ import annotations

import json
from collections import deque

import pytest
import requests
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict

from signup_ui.utils.api import ApiClient

BASE_URL = "https://api.example.test"


class FakeTransport(BaseAdapter):
    """Transport adapter that records requests and replays queued responses."""

    def __init__(self):
        super().__init__()
        self.requests: list[requests.PreparedRequest] = []
        self.responses: deque = deque()

    def queue(self, status=200, json_body=None, text=None, content_type=None, headers=None):
        self.responses.append((status, json_body, text, content_type, headers or {}))

    def queue_error(self, exc: Exception):
        self.responses.append(exc)

    def send(self, request, **kwargs):
        self.requests.append(request)
        item = self.responses.popleft() if self.responses else (200, {"ok": True}, None, None, {})
        if isinstance(item, Exception):
            raise item
        status, json_body, text, content_type, extra_headers = item

        response = requests.Response()
        response.status_code = status
        response.url = request.url
        response.request = request
        if json_body is not None:
            response._content = json.dumps(json_body).encode()
            content_type = content_type or "application/json; charset=utf-8"
        else:
            response._content = (text or "").encode()
            content_type = content_type or "text/plain; charset=utf-8"
        response.headers = CaseInsensitiveDict({"Content-Type": content_type, **extra_headers})
        response.encoding = "utf-8"
        return response

    def close(self):
        pass

    @property
    def last(self) -> requests.PreparedRequest:
        return self.requests[-1]


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def session(transport) -> requests.Session:
    s = requests.Session()
    s.mount("http://", transport)
    s.mount("https://", transport)
    return s


@pytest.fixture
def client(session) -> ApiClient:
    return ApiClient(BASE_URL, timeout=5, session=session)
