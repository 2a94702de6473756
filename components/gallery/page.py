"""
Gallery page: auto-advancing slideshow and the uploaded photo grid.
"""

import streamlit as st
from pathlib import Path
import logging

from components.config import get_site_config
from components.site.api_client import SiteApiClient, ApiClientError
from .slideshow import SlideShow
from utils.icons import render_title_with_icon

logger = logging.getLogger(__name__)

PHOTO_COLUMNS = 3


def _render_slide(slideshow: SlideShow) -> None:
    slide = slideshow.active_slide
    if slide is None:
        st.info("No slides configured.")
        return

    if slide.image.startswith(('http://', 'https://')) or Path(slide.image).exists():
        st.image(slide.image, caption=slide.caption)
    else:
        st.markdown(f"### {slide.caption}")
        st.caption(f"Image not available: {slide.image}")

    st.caption(f"Slide {slideshow.current_index + 1} of {slideshow.count}")


def render_slideshow(slideshow: SlideShow) -> None:
    """Slideshow with manual controls; advances itself on the configured interval."""
    col_prev, col_slide, col_next = st.columns([1, 8, 1])

    with col_prev:
        if st.button("◀", key="slide_prev"):
            slideshow.previous()
            slideshow.last_advance = None
    with col_next:
        if st.button("▶", key="slide_next"):
            slideshow.next()
            slideshow.last_advance = None

    @st.fragment(run_every=slideshow.interval_seconds)
    def _auto_advance():
        slideshow.tick()
        _render_slide(slideshow)

    with col_slide:
        _auto_advance()


def render_photo_grid(client: SiteApiClient) -> None:
    """Photos from the backend, newest first."""
    try:
        photos = client.list_photos()
    except ApiClientError as e:
        st.error(f"❌ Could not load photos: {e.message}")
        return

    if not photos:
        st.info("No photos yet.")
        return

    columns = st.columns(PHOTO_COLUMNS)
    for i, photo in enumerate(photos):
        with columns[i % PHOTO_COLUMNS]:
            st.image(client.url_for(photo['filepath']), caption=photo.get("filename", ""))


def render_gallery_page() -> None:
    from components.maps.maps_page import get_app_context

    context = get_app_context()
    config = get_site_config()

    render_title_with_icon("images", "Gallery")
    render_slideshow(context.slideshow)

    st.markdown("---")
    st.subheader("📷 Photos")
    render_photo_grid(SiteApiClient.from_settings(config.get_frontend_settings()))
