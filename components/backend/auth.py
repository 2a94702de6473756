"""
Password hashing, session tokens and route guards.
"""

from datetime import datetime, timedelta, timezone
from functools import wraps
from typing import Any, Dict
import logging

import bcrypt
import jwt
from flask import current_app, g, request

from .errors import AuthenticationError, AuthorizationError
from .storage import ROLE_ADMIN

logger = logging.getLogger(__name__)

BCRYPT_ROUNDS = 10


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode('utf-8')


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8'))
    except ValueError:
        # Malformed hash or a password bcrypt refuses (over 72 bytes)
        return False


def issue_token(user: Dict[str, Any], secret: str, algorithm: str = 'HS256',
                expiry_minutes: int = 60) -> str:
    """Signed session token carrying the user's id, name and role."""
    payload = {
        'userId': user['id'],
        'username': user['username'],
        'role': user['role'],
        'exp': datetime.now(timezone.utc) + timedelta(minutes=expiry_minutes)
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_token(token: str, secret: str, algorithm: str = 'HS256') -> Dict[str, Any]:
    """
    Verify a session token.

    Raises:
        jwt.InvalidTokenError: If the signature is wrong or the token expired
    """
    return jwt.decode(token, secret, algorithms=[algorithm])


def _bearer_token() -> str:
    header = request.headers.get('Authorization', '')
    parts = header.split(' ')
    if len(parts) < 2 or not parts[1]:
        return ''
    return parts[1]


def token_required(view):
    """Require a valid bearer token; the payload is placed on ``g.user``."""
    @wraps(view)
    def wrapper(*args, **kwargs):
        token = _bearer_token()
        if not token:
            raise AuthenticationError('Authentication token required')

        settings = current_app.config['SITE_BACKEND']
        try:
            g.user = decode_token(token, settings['jwt_secret'], settings.get('jwt_algorithm', 'HS256'))
        except jwt.InvalidTokenError as e:
            logger.warning(f"Rejected token: {e}")
            raise AuthorizationError('Invalid or expired token')
        return view(*args, **kwargs)
    return wrapper


def admin_required(view):
    """Require ``g.user`` to carry the admin role; use under token_required."""
    @wraps(view)
    def wrapper(*args, **kwargs):
        user = getattr(g, 'user', None)
        if not user or user.get('role') != ROLE_ADMIN:
            raise AuthorizationError('Forbidden: Admin access required')
        return view(*args, **kwargs)
    return wrapper
