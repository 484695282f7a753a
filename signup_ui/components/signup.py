"""Public signup form component."""

import streamlit as st

from signup_ui.utils.api import ApiClient
from signup_ui.utils.errors import ApiError
from signup_ui.utils.forms import signup_payload, validate_signup
from signup_ui.utils.ui import show_api_error


def signup_ui(client: ApiClient) -> None:
    """UI for the public signup form.

    Args:
        client: API client for this browser session
    """
    st.subheader("Create your account")
    st.write("Fill in your details. An admin reviews every signup before it is approved.")

    with st.form("signup_form", clear_on_submit=False):
        username = st.text_input("Username *")
        mobile = st.text_input("Mobile number *")
        email = st.text_input("Email (optional)")
        whatsapp = st.text_input("WhatsApp number (optional)")
        telegram = st.text_input("Telegram username (optional)")
        password = st.text_input("Password *", type="password")
        submitted = st.form_submit_button("Sign up")

    if not submitted:
        return

    form = {
        "username": username,
        "mobileNumber": mobile,
        "email": email,
        "whatsappNumber": whatsapp,
        "telegramUsername": telegram,
        "password": password,
    }
    problems = validate_signup(form)
    if problems:
        for problem in problems:
            st.error(problem["message"])
        return

    with st.spinner("Submitting…"):
        try:
            result = client.signup(signup_payload(form))
        except ApiError as e:
            show_api_error(e, prefix="Signup failed: ")
            return

    user = result.get("user", {})
    st.success(f"Thanks {user.get('username', username)}! Your signup is pending review.")
