"""
Icon utilities for the monastery site.
Provides consistent icon styling across pages using streamlit-option-menu (Bootstrap) icons.
"""

import streamlit as st

# Try to import streamlit-option-menu for Bootstrap icons
try:
    from streamlit_option_menu import option_menu
    HAS_OPTION_MENU = True
except ImportError:
    HAS_OPTION_MENU = False


# Bootstrap icon name -> emoji used when streamlit-option-menu is missing
EMOJI_FALLBACK = {
    'map': '🗺️',
    'geo-alt': '📍',
    'images': '🖼️',
    'envelope': '✉️',
    'person-circle': '👤',
    'search': '🔍',
    'upload': '📤',
    'info-circle': 'ℹ️'
}


def render_icon_header(icon_name: str, text: str, level: int = 1, color: str = "#8b1e1e") -> None:
    """
    Render a header with a Bootstrap icon.

    Args:
        icon_name: Bootstrap icon name (e.g., 'map', 'images')
        text: Header text
        level: Header level (1-6)
        color: Icon color
    """
    if not HAS_OPTION_MENU:
        emoji = EMOJI_FALLBACK.get(icon_name, '📄')
        if level == 1:
            st.title(f"{emoji} {text}")
        elif level == 2:
            st.header(f"{emoji} {text}")
        elif level == 3:
            st.subheader(f"{emoji} {text}")
        else:
            st.markdown(f"{'#' * level} {emoji} {text}")
        return

    icon_size = {1: 32, 2: 24, 3: 20, 4: 18, 5: 16, 6: 14}.get(level, 20)

    st.markdown(f"""
    <div style="display: flex; align-items: center; margin-bottom: 1rem;">
        <i class="bi bi-{icon_name}" style="font-size: {icon_size}px; color: {color}; margin-right: 12px;"></i>
        <h{level} style="margin: 0;">{text}</h{level}>
    </div>
    """, unsafe_allow_html=True)


def render_title_with_icon(icon_name: str, title: str) -> None:
    """Render a page title with icon."""
    render_icon_header(icon_name, title, level=1)


def render_subheader_with_icon(icon_name: str, subheader: str) -> None:
    """Render a subsection header with icon."""
    render_icon_header(icon_name, subheader, level=3)


# Navigation: (page key, Bootstrap icon)
NAVIGATION_PAGES = [
    ("Monastery Map", "map"),
    ("Monastery Details", "geo-alt"),
    ("Gallery", "images"),
    ("Contact", "envelope"),
    ("Account", "person-circle")
]


def get_icon_for_page(page_key: str) -> str:
    """Get the Bootstrap icon name for a navigation page."""
    for key, icon in NAVIGATION_PAGES:
        if key == page_key:
            return icon
    return 'info-circle'


def get_emoji_for_page(page_key: str) -> str:
    return EMOJI_FALLBACK.get(get_icon_for_page(page_key), '📄')
