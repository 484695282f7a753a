"""UI utilities for the Signup Portal."""

import json
import streamlit as st
from typing import Any, Dict, List, Optional

from signup_ui.ui_config import UIConfig
from signup_ui.utils.api import ApiClient
from signup_ui.utils.errors import ApiError, ValidationError
from signup_ui.utils.models import effective_status

# Constants
SUPPORTED_IMAGE_FORMATS = ["jpg", "jpeg", "png", "webp", "gif"]
PAGE_SIZE_OPTIONS = [10, 20, 50]

STATUS_BADGES = {
    "pending": "🟡 Pending",
    "approved": "🟢 Approved",
    "rejected": "🔴 Rejected",
}

CLIENT_KEY = "api_client"


def get_client(config: UIConfig) -> ApiClient:
    """Return the API client bound to this browser session.

    Each Streamlit session keeps its own client so admin cookies are
    never shared between visitors.
    """
    if CLIENT_KEY not in st.session_state:
        st.session_state[CLIENT_KEY] = ApiClient.from_config(config)
    return st.session_state[CLIENT_KEY]


def display_json(data: Any) -> None:
    """Display formatted JSON data.

    Args:
        data: Data to display as JSON
    """
    if data:
        st.code(json.dumps(data, indent=2), language="json")


def show_api_error(error: ApiError, prefix: str = "") -> None:
    """Render an API failure, listing field problems for validation errors.

    Args:
        error: Error raised by the API client
        prefix: Optional context shown before the message
    """
    message = f"{prefix}{error.message}" if prefix else error.message
    st.error(message)
    if isinstance(error, ValidationError):
        for field, field_message in error.field_errors().items():
            st.caption(f"• **{field}**: {field_message}")


def format_status(status: Optional[str]) -> str:
    """Human label for a moderation status."""
    if not status:
        return STATUS_BADGES["pending"]
    return STATUS_BADGES.get(status, status.capitalize())


def format_user_summary(user: Dict) -> str:
    """One-line heading for a user row."""
    contact = user.get("email") or user.get("mobileNumber") or ""
    return f"{user.get('username', '?')} · {contact} · {format_status(effective_status(user))}"


def format_contact_lines(user: Dict) -> List[str]:
    """Format contact fields of a user for display.

    Args:
        user: SignupUser dictionary

    Returns:
        Markdown lines, one per known contact field
    """
    lines = []

    if user.get("mobileNumber"):
        lines.append(f"**Mobile:** {user['mobileNumber']}")

    if user.get("email"):
        lines.append(f"**Email:** {user['email']}")

    if user.get("whatsappNumber"):
        lines.append(f"**WhatsApp:** {user['whatsappNumber']}")

    if user.get("telegramUsername"):
        lines.append(f"**Telegram:** {user['telegramUsername']}")

    if user.get("createdAt"):
        lines.append(f"**Signed up:** {user['createdAt']}")

    return lines


def create_history_table(user: Dict) -> None:
    """Show a user's status transitions as a table."""
    history = user.get("statusHistory") or []
    if not history:
        st.caption("No status changes yet.")
        return

    rows = []
    for entry in history:
        rows.append({
            "When": entry.get("at", ""),
            "By": entry.get("by", ""),
            "From": entry.get("from") or "—",
            "To": entry.get("to", ""),
            "Note": entry.get("note", ""),
        })
    st.dataframe(rows)


def clamp_page(page: int, pages: int) -> int:
    """Keep a page number within ``1..pages``."""
    return max(1, min(page, max(pages, 1)))


def page_controls(key: str, page: int, pages: int, total: int) -> int:
    """Previous/next controls; returns the page to show.

    Args:
        key: Session state prefix for the buttons
        page: Current page (1-based)
        pages: Total number of pages reported by the backend
        total: Total number of items reported by the backend
    """
    page = clamp_page(page, pages)
    col1, col2, col3 = st.columns([1, 3, 1])
    with col1:
        if st.button("◀ Previous", disabled=(page <= 1), key=f"{key}_prev"):
            page -= 1
    with col3:
        if st.button("Next ▶", disabled=(page >= pages), key=f"{key}_next"):
            page += 1
    with col2:
        st.write(f"Page {page} of {max(pages, 1)} ({total} total)")
    return clamp_page(page, pages)


# -------- helpers for confirmation dialogs --------
def _confirm_key(action: str) -> str:
    """Generate a unique session state key for confirmation actions."""
    return f"confirm_{action}"


def want_confirmation(action: str) -> bool:
    """Check if confirmation is pending for the given action."""
    return st.session_state.get(_confirm_key(action), False)


def set_confirmation(action: str, value: bool = True):
    """Set confirmation state for the given action."""
    st.session_state[_confirm_key(action)] = value


def reset_page(page_key: str):
    """Widget callback sending a listing back to its first page."""
    def _reset():
        st.session_state.pop(page_key, None)
    return _reset


def step_back_from_empty_page(page_key: str, page: int, pages: int) -> bool:
    """Move to the last page that can hold results after an empty one.

    Returns:
        True when the stored page changed and the caller should rerun
    """
    if page <= 1:
        return False
    st.session_state[page_key] = clamp_page(min(page - 1, pages), pages)
    return True


FLASH_KEY = "flash_message"


def flash(message: str) -> None:
    """Keep a success message for the next run, surviving ``st.rerun()``."""
    st.session_state[FLASH_KEY] = message


def show_flash() -> None:
    message = st.session_state.pop(FLASH_KEY, None)
    if message:
        st.success(message)
