"""
Backend Component - Flask API for accounts, photo gallery and contact form.

The same application core serves both deployment targets; only the storage
strategy differs, and the configuration selects it.
"""

from typing import Optional
import logging

from flask import Flask
from flask_cors import CORS

from components.config import SiteConfig, get_site_config
from .errors import register_error_handlers
from .routes import api_bp, uploads_bp
from .storage import Storage, MemoryStorage, SqlStorage, create_storage

logger = logging.getLogger(__name__)

# Multipart framing on top of the file itself
UPLOAD_OVERHEAD_BYTES = 64 * 1024


def create_app(config: Optional[SiteConfig] = None, storage: Optional[Storage] = None) -> Flask:
    """
    Build the backend application.

    Args:
        config: Site configuration (defaults to the process-wide instance)
        storage: Storage to use instead of the configured backend

    Returns:
        Configured Flask application
    """
    config = config or get_site_config()
    backend_settings = config.get_backend_settings()
    storage = storage or create_storage(backend_settings)

    app = Flask(__name__)
    app.config['SITE_BACKEND'] = backend_settings
    app.config['SITE_FALLBACK_PHOTOS'] = config.get_fallback_photos()
    app.config['MAX_CONTENT_LENGTH'] = (
        int(backend_settings.get('max_upload_mb', 10)) * 1024 * 1024 + UPLOAD_OVERHEAD_BYTES
    )
    app.extensions['site_storage'] = storage

    CORS(app, origins=backend_settings.get('cors_origins', '*'))

    app.register_blueprint(api_bp)
    app.register_blueprint(uploads_bp)
    register_error_handlers(app)

    if backend_settings.get('jwt_secret') == config.default_config['backend']['jwt_secret']:
        logger.warning("JWT_SECRET is not set; using the built-in development secret")

    logger.info(f"Backend ready with {storage.name} storage")
    return app


__all__ = [
    'create_app',
    'Storage',
    'MemoryStorage',
    'SqlStorage',
    'create_storage'
]
