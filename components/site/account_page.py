"""
Account page: sign up, log in, and photo upload for admins.

The session token returned at login is kept in Streamlit session state and
sent as a bearer token on uploads.
"""

import streamlit as st
from typing import Any, Dict, Optional
import logging

from components.config import get_site_config
from .api_client import SiteApiClient, ApiClientError
from utils.icons import render_title_with_icon, render_subheader_with_icon

logger = logging.getLogger(__name__)

SESSION_KEY = 'site_session'


def current_session() -> Optional[Dict[str, Any]]:
    return st.session_state.get(SESSION_KEY)


def log_in(client: SiteApiClient, username: str, password: str) -> bool:
    try:
        response = client.login(username, password)
    except ApiClientError as e:
        st.error(f"❌ {e.message}")
        return False

    st.session_state[SESSION_KEY] = {
        'token': response['token'],
        'role': response['role'],
        'username': response['username']
    }
    logger.info(f"Session started for {response['username']}")
    return True


def log_out() -> None:
    st.session_state.pop(SESSION_KEY, None)


def sign_up(client: SiteApiClient, username: str, password: str) -> bool:
    try:
        response = client.signup(username, password)
    except ApiClientError as e:
        st.error(f"❌ {e.message}")
        return False

    user = response.get('user', {})
    st.success(f"✅ {response.get('message')} You are registered as {user.get('role', 'user')}.")
    return True


def _render_auth_forms(client: SiteApiClient) -> None:
    tab_login, tab_signup = st.tabs(["Log In", "Sign Up"])

    with tab_login:
        with st.form("login_form"):
            username = st.text_input("Username", key="login_username")
            password = st.text_input("Password", type="password", key="login_password")
            if st.form_submit_button("Log In"):
                if log_in(client, username, password):
                    st.rerun()

    with tab_signup:
        with st.form("signup_form"):
            username = st.text_input("Username", key="signup_username")
            password = st.text_input("Password", type="password", key="signup_password",
                                     help="At least 6 characters")
            if st.form_submit_button("Sign Up"):
                sign_up(client, username, password)


def _render_upload_form(client: SiteApiClient, session: Dict[str, Any]) -> None:
    render_subheader_with_icon("upload", "Upload a Photo")
    allowed = get_site_config().get_backend_settings().get('allowed_extensions', [])
    uploaded = st.file_uploader("Photo", type=[ext.lstrip('.') for ext in allowed])

    if uploaded is not None and st.button("Upload", key="upload_photo_button"):
        try:
            response = client.upload_photo(session['token'], uploaded.name, uploaded, uploaded.type)
        except ApiClientError as e:
            st.error(f"❌ {e.message}")
            if e.status_code in (401, 403):
                st.info("💡 Your session may have expired. Log in again.")
            return
        st.success(f"✅ {response['message']}")


def render_account_page() -> None:
    render_title_with_icon("person-circle", "Account")
    client = SiteApiClient.from_settings(get_site_config().get_frontend_settings())

    session = current_session()
    if session is None:
        _render_auth_forms(client)
        return

    st.info(f"Logged in as **{session['username']}** ({session['role']})")
    if st.button("Log Out", key="logout_button"):
        log_out()
        st.rerun()

    if session['role'] == 'admin':
        _render_upload_form(client, session)
    else:
        st.caption("Only administrators can upload photos.")
