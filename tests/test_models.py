from signup_ui.utils.models import effective_status, history_consistent


def _entry(to, frm=None):
    return {"at": "2026-01-01T00:00:00Z", "by": "admin", "from": frm, "to": to}


def test_effective_status_prefers_last_transition():
    user = {"status": "pending", "statusHistory": [_entry("approved", "pending"), _entry("rejected", "approved")]}
    assert effective_status(user) == "rejected"


def test_effective_status_defaults_to_pending():
    assert effective_status({}) == "pending"
    assert effective_status({"status": "approved"}) == "approved"


def test_history_consistency():
    assert history_consistent({"status": "pending"})
    assert history_consistent({"status": "approved", "statusHistory": [_entry("approved", "pending")]})
    assert not history_consistent({"status": "pending", "statusHistory": [_entry("approved", "pending")]})
