"""Signup moderation component for the admin panel."""

import streamlit as st
from typing import Dict

from signup_ui.utils.api import ApiClient
from signup_ui.utils.errors import ApiError
from signup_ui.utils.forms import clean_optional
from signup_ui.utils.models import SORT_ORDERS, USER_STATUSES, effective_status
from signup_ui.utils.ui import (
    PAGE_SIZE_OPTIONS,
    create_history_table,
    flash,
    format_contact_lines,
    format_status,
    format_user_summary,
    page_controls,
    reset_page,
    set_confirmation,
    show_api_error,
    show_flash,
    step_back_from_empty_page,
    want_confirmation,
)

PAGE_KEY = "users_page"


def _status_buttons(client: ApiClient, user: Dict) -> None:
    """Approve / reject / reset-to-pending buttons for one user."""
    current = effective_status(user)
    cols = st.columns(len(USER_STATUSES))
    for col, status in zip(cols, USER_STATUSES):
        with col:
            if st.button(
                format_status(status),
                key=f"status_{status}_{user['id']}",
                disabled=(status == current),
            ):
                try:
                    client.update_user_status(user["id"], status)
                except ApiError as e:
                    show_api_error(e, prefix="Status update failed: ")
                    return
                flash(f"{user['username']} is now {status}")
                st.rerun()


def _edit_form(client: ApiClient, user: Dict) -> None:
    """Form for editing a user's contact fields."""
    with st.form(f"edit_user_{user['id']}"):
        mobile = st.text_input("Mobile number", value=user.get("mobileNumber") or "")
        email = st.text_input("Email", value=user.get("email") or "")
        whatsapp = st.text_input("WhatsApp", value=user.get("whatsappNumber") or "")
        telegram = st.text_input("Telegram", value=user.get("telegramUsername") or "")
        submitted = st.form_submit_button("Save changes")

    if not submitted:
        return

    payload = {
        "mobileNumber": mobile.strip(),
        "email": clean_optional(email),
        "whatsappNumber": clean_optional(whatsapp),
        "telegramUsername": clean_optional(telegram),
    }
    try:
        client.admin_update_user(user["id"], payload)
    except ApiError as e:
        show_api_error(e, prefix="Update failed: ")
        return
    flash("User updated")
    st.rerun()


def _danger_zone(client: ApiClient, user: Dict) -> None:
    """Reset-link and delete actions for one user."""
    col1, col2 = st.columns(2)
    with col1:
        if st.button("🔑 Issue reset link", key=f"reset_{user['id']}"):
            try:
                result = client.create_reset_token(user["id"])
            except ApiError as e:
                show_api_error(e, prefix="Could not create reset link: ")
            else:
                st.success("Reset link created. Share it with the user:")
                st.code(result.get("resetUrl", ""))

    action_id = f"delete_user_{user['id']}"
    with col2:
        if st.button("🗑️ Delete user", key=action_id):
            set_confirmation(action_id, True)

    if want_confirmation(action_id):
        st.warning(f"⚠️ Really delete **{user['username']}**?")
        col1, col2 = st.columns(2)
        with col1:
            if st.button("Cancel", key=f"cancel_{action_id}"):
                set_confirmation(action_id, False)
        with col2:
            if st.button("✓ Confirm Delete", key=f"do_{action_id}", type="primary"):
                set_confirmation(action_id, False)  # reset the flag
                with st.spinner(f"Deleting '{user['username']}'..."):
                    try:
                        client.admin_delete_user(user["id"])
                    except ApiError as e:
                        show_api_error(e, prefix="Delete failed: ")
                        return
                flash(f"Deleted '{user['username']}'")
                st.rerun()


def manage_users_ui(client: ApiClient) -> None:
    """UI for reviewing and editing signups.

    Args:
        client: API client carrying the admin session
    """
    st.subheader("Signups")
    show_flash()

    col1, col2, col3, col4 = st.columns([3, 2, 2, 1])
    with col1:
        q = st.text_input("🔍 Search username, email or phone", key="users_q", on_change=reset_page(PAGE_KEY))
    with col2:
        status = st.selectbox(
            "Status",
            options=("",) + USER_STATUSES,
            format_func=lambda s: format_status(s) if s else "All",
            key="users_status",
            on_change=reset_page(PAGE_KEY),
        )
    with col3:
        sort = st.selectbox("Sort", options=SORT_ORDERS, key="users_sort", on_change=reset_page(PAGE_KEY))
    with col4:
        page_size = st.selectbox("Per page", options=PAGE_SIZE_OPTIONS, key="users_page_size", on_change=reset_page(PAGE_KEY))

    page = st.session_state.get(PAGE_KEY, 1)
    with st.spinner("Loading signups..."):
        try:
            result = client.list_users(q=q, status=status, sort=sort, page=page, page_size=page_size)
        except ApiError as e:
            show_api_error(e, prefix="Failed to load signups: ")
            return

    counts = result.get("counts") or {}
    cols = st.columns(len(USER_STATUSES))
    for col, name in zip(cols, USER_STATUSES):
        col.metric(format_status(name), counts.get(name, 0))

    users = result.get("users", [])
    if not users:
        if step_back_from_empty_page(PAGE_KEY, page, result.get("pages", 1)):
            st.rerun()
        st.info("No signups match the current filters.")
        return

    for user in users:
        with st.expander(format_user_summary(user)):
            st.markdown("  \n".join(format_contact_lines(user)))
            _status_buttons(client, user)
            st.markdown("#### Status history")
            create_history_table(user)
            st.markdown("#### Edit")
            _edit_form(client, user)
            _danger_zone(client, user)

    new_page = page_controls("users", result.get("page", page), result.get("pages", 1), result.get("total", 0))
    if new_page != page:
        st.session_state[PAGE_KEY] = new_page
        st.rerun()
