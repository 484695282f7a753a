"""Admin session component: login, session check and logout."""

import logging
import streamlit as st
from typing import Optional

from signup_ui.utils.api import ApiClient
from signup_ui.utils.errors import ApiError, HttpError
from signup_ui.utils.ui import show_api_error

logger = logging.getLogger(__name__)


def current_admin(client: ApiClient) -> Optional[str]:
    """Return the logged-in admin's username, or None without a session.

    Raises:
        ApiError: for failures other than a missing or expired session
    """
    try:
        result = client.admin_me()
    except HttpError as e:
        if e.status in (401, 403):
            return None
        raise
    admin = result.get("admin") or {}
    return admin.get("username")


def admin_login_ui(client: ApiClient) -> None:
    """UI for logging in to the admin panel."""
    st.subheader("Admin login")

    with st.form("admin_login_form"):
        username = st.text_input("Username")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Log in")

    if not submitted or not username or not password:
        return

    with st.spinner("Logging in…"):
        try:
            client.admin_login(username, password)
        except ApiError as e:
            show_api_error(e, prefix="Login failed: ")
            return
    logger.info(f"Admin {username} logged in")
    st.rerun()


def admin_logout_ui(client: ApiClient, username: str) -> None:
    """Sidebar block showing the session owner with a logout button."""
    st.sidebar.write(f"Logged in as **{username}**")
    if st.sidebar.button("Log out", key="admin_logout"):
        try:
            client.admin_logout()
        except ApiError as e:
            show_api_error(e, prefix="Logout failed: ")
            return
        logger.info(f"Admin {username} logged out")
        st.rerun()
