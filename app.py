"""
Monasteries of Sikkim - Streamlit site

This module provides the Streamlit web interface: the interactive monastery
map, monastery details, the gallery, the contact form and account pages.
The pages talk to the backend API (see wsgi.py / api/index.py) over HTTP.
"""

import logging
import traceback

import streamlit as st

from components.maps import render_maps_page, get_app_context, MonasteryDetailsPanel
from components.gallery.page import render_gallery_page
from components.site.contact_page import render_contact_page
from components.site.account_page import render_account_page
from utils.icons import NAVIGATION_PAGES, get_emoji_for_page

# Try to import streamlit-option-menu for Bootstrap icons
try:
    from streamlit_option_menu import option_menu
    HAS_OPTION_MENU = True
except ImportError:
    HAS_OPTION_MENU = False

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Configure Streamlit page
st.set_page_config(
    page_title="Monasteries of Sikkim",
    page_icon="🏯",
    layout="wide",
    initial_sidebar_state="expanded"
)

PAGE_KEYS = [page for page, _ in NAVIGATION_PAGES]
DETAIL_PAGE = "Monastery Details"


def _initial_page() -> str:
    # Popup "View Details" links arrive as ?name=<monastery>
    if st.query_params.get("name"):
        return DETAIL_PAGE
    return PAGE_KEYS[0]


def _select_page() -> str:
    current_index = PAGE_KEYS.index(st.session_state.current_page)

    if HAS_OPTION_MENU:
        with st.sidebar:
            st.markdown("### Navigation")

            return option_menu(
                menu_title=None,
                options=PAGE_KEYS,
                icons=[icon for _, icon in NAVIGATION_PAGES],
                menu_icon="cast",
                default_index=current_index,
                orientation="vertical",
                key="nav_menu",
                styles={
                    "container": {"padding": "0!important", "background-color": "#f7f1e8"},
                    "icon": {"color": "#8b1e1e", "font-size": "16px"},
                    "nav-link": {
                        "font-size": "14px",
                        "text-align": "left",
                        "margin": "0px",
                        "color": "#262730",
                        "--hover-color": "#efe3d0"
                    },
                    "nav-link-selected": {
                        "background-color": "#efe3d0",
                        "color": "#000000 !important",
                        "font-weight": "bold"
                    },
                }
            )

    # Fallback to radio buttons with emoji icons
    radio_options = [f"{get_emoji_for_page(page)} {page}" for page in PAGE_KEYS]
    selected_option = st.sidebar.radio(
        "Choose a page:",
        radio_options,
        index=current_index,
        key="page_radio"
    )
    return PAGE_KEYS[radio_options.index(selected_option)]


def details_page():
    """Monastery details page; reads the name from the query string."""
    context = get_app_context()
    MonasteryDetailsPanel(context.catalog).render_details(st.query_params.get("name"))


def main():
    """Main Streamlit application entry point"""

    if 'current_page' not in st.session_state:
        st.session_state.current_page = _initial_page()

    selected_page = _select_page()

    if selected_page != st.session_state.current_page:
        st.session_state.current_page = selected_page
        st.rerun()

    page = st.session_state.current_page
    renderers = {
        "Monastery Map": render_maps_page,
        DETAIL_PAGE: details_page,
        "Gallery": render_gallery_page,
        "Contact": render_contact_page,
        "Account": render_account_page
    }

    try:
        renderers[page]()
    except Exception as e:
        logger.exception(f"Error rendering page {page}")
        st.error(f"❌ Error in {page} page: {e}")
        st.info("🔧 Error details:")
        st.code(traceback.format_exc())
        st.info("💡 Try refreshing the page.")


if __name__ == "__main__":
    main()
