"""
Contact form page.
"""

import streamlit as st
import logging

from components.config import get_site_config
from .api_client import SiteApiClient, ApiClientError
from utils.icons import render_title_with_icon

logger = logging.getLogger(__name__)


def submit_contact(client: SiteApiClient, name: str, email: str, message: str) -> bool:
    """Send the form; shows the outcome and returns True on success."""
    if not name.strip() or not email.strip() or not message.strip():
        st.warning("⚠️ All fields are required.")
        return False

    try:
        response = client.send_contact(name.strip(), email.strip(), message.strip())
    except ApiClientError as e:
        st.error(f"❌ {e.message}")
        return False

    st.success(f"✅ {response.get('message', 'Message sent successfully!')}")
    return True


def render_contact_page() -> None:
    render_title_with_icon("envelope", "Contact Us")
    st.markdown("Questions about visiting a monastery? Send us a message.")

    client = SiteApiClient.from_settings(get_site_config().get_frontend_settings())

    with st.form("contact_form", clear_on_submit=False):
        name = st.text_input("Name")
        email = st.text_input("Email")
        message = st.text_area("Message", height=150)
        submitted = st.form_submit_button("Send Message")

    if submitted:
        submit_contact(client, name, email, message)
