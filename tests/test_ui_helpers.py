from signup_ui.utils.ui import clamp_page, format_contact_lines, format_status, format_user_summary


def test_clamp_page():
    assert clamp_page(0, 5) == 1
    assert clamp_page(7, 5) == 5
    assert clamp_page(3, 0) == 1


def test_format_status():
    assert format_status("approved") == "🟢 Approved"
    assert format_status(None) == "🟡 Pending"
    assert format_status("archived") == "Archived"


def test_format_contact_lines_skips_missing_fields():
    user = {"mobileNumber": "+15550100", "email": None, "telegramUsername": "@jane"}
    assert format_contact_lines(user) == ["**Mobile:** +15550100", "**Telegram:** @jane"]


def test_format_user_summary_uses_history_status():
    user = {
        "username": "jane",
        "mobileNumber": "+15550100",
        "status": "approved",
        "statusHistory": [{"at": "t", "by": "admin", "from": "pending", "to": "approved"}],
    }
    assert format_user_summary(user) == "jane · +15550100 · 🟢 Approved"
