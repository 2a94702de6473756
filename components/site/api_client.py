"""
HTTP client for the monastery backend API.

Streamlit pages talk to the backend exclusively through SiteApiClient.
Every call returns the decoded JSON body or raises ApiClientError with the
server's error message.
"""

from typing import Any, Dict, List, Optional, BinaryIO
import logging

import requests

logger = logging.getLogger(__name__)


class ApiClientError(Exception):
    """Backend call failed (transport error or non-2xx response)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class SiteApiClient:
    """Thin wrapper over the backend endpoints."""

    def __init__(self, base_url: str, timeout: float = 10, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_settings(cls, frontend_settings: Dict[str, Any]) -> 'SiteApiClient':
        return cls(
            frontend_settings.get('api_base_url', 'http://localhost:3000'),
            timeout=frontend_settings.get('request_timeout', 10)
        )

    def url_for(self, path: str) -> str:
        """Absolute URL for a backend path (photo file paths are server-relative)."""
        if path.startswith(('http://', 'https://')):
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    def _request(self, method: str, path: str, token: Optional[str] = None, **kwargs) -> Any:
        headers = kwargs.pop('headers', {})
        if token:
            headers['Authorization'] = f"Bearer {token}"

        try:
            response = self.session.request(
                method, self.url_for(path), headers=headers, timeout=self.timeout, **kwargs
            )
        except requests.RequestException as e:
            logger.error(f"{method} {path} failed: {e}")
            raise ApiClientError(f"Could not reach the server: {e}") from e

        if not response.ok:
            try:
                message = response.json().get('error', response.reason)
            except ValueError:
                message = response.reason or f"HTTP {response.status_code}"
            logger.warning(f"{method} {path} returned {response.status_code}: {message}")
            raise ApiClientError(message, status_code=response.status_code)

        return response.json()

    def signup(self, username: str, password: str) -> Dict[str, Any]:
        return self._request('POST', '/api/signup', json={'username': username, 'password': password})

    def login(self, username: str, password: str) -> Dict[str, Any]:
        return self._request('POST', '/api/login', json={'username': username, 'password': password})

    def upload_photo(self, token: str, filename: str, content: BinaryIO,
                     content_type: str = 'application/octet-stream') -> Dict[str, Any]:
        files = {'photo': (filename, content, content_type)}
        return self._request('POST', '/api/upload-photo', token=token, files=files)

    def list_photos(self) -> List[Dict[str, Any]]:
        return self._request('GET', '/api/photos')

    def send_contact(self, name: str, email: str, message: str) -> Dict[str, Any]:
        return self._request('POST', '/api/contact', json={'name': name, 'email': email, 'message': message})
