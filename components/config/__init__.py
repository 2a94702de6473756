"""
Config Component - Site-wide settings for the map, slideshow and backend.
"""

from .site_config import SiteConfig, get_site_config

__all__ = [
    'SiteConfig',
    'get_site_config'
]
