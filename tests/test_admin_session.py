import pytest

from signup_ui.components.admin_login import current_admin
from signup_ui.utils.errors import HttpError


def test_current_admin_returns_username(client, transport):
    transport.queue(200, {"ok": True, "admin": {"username": "root"}})
    assert current_admin(client) == "root"


@pytest.mark.parametrize("status", [401, 403])
def test_current_admin_without_session(client, transport, status):
    transport.queue(status, {"error": "unauthorized"})
    assert current_admin(client) is None


def test_current_admin_propagates_server_errors(client, transport):
    transport.queue(500, text="boom")
    with pytest.raises(HttpError, match="boom"):
        current_admin(client)
