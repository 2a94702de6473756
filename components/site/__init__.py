"""
Site Component - Backend API client and the contact / account pages.
"""

from .api_client import SiteApiClient, ApiClientError

__all__ = [
    'SiteApiClient',
    'ApiClientError'
]
