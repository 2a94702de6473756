"""
HTTP endpoints for accounts, photos and contact messages.
"""

from functools import wraps
from pathlib import Path
import logging
import time

from flask import Blueprint, abort, current_app, g, jsonify, request, send_from_directory
from werkzeug.exceptions import HTTPException

from .auth import admin_required, hash_password, issue_token, token_required, verify_password
from .errors import (
    ApiError, AuthenticationError, ConflictError, DuplicateUserError,
    PayloadTooLargeError, ValidationError
)
from .storage import Storage

logger = logging.getLogger(__name__)

api_bp = Blueprint('api', __name__, url_prefix='/api')
uploads_bp = Blueprint('uploads', __name__)

# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


def _storage() -> Storage:
    return current_app.extensions['site_storage']


def _settings() -> dict:
    return current_app.config['SITE_BACKEND']


def _payload() -> dict:
    """JSON body, falling back to form fields."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def failure_message(message: str):
    """Turn unexpected exceptions in a view into a logged 500 with ``message``."""
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except (ApiError, HTTPException):
                raise
            except Exception:
                logger.exception(f"{request.method} {request.path} failed")
                raise ApiError(message, 500)
        return wrapper
    return decorator


@api_bp.route('/health', methods=['GET'])
def health():
    return jsonify({'status': 'ok', 'storage': _storage().name})


@api_bp.route('/signup', methods=['POST'])
@failure_message('Failed to register user')
def signup():
    data = _payload()
    username = str(data.get('username') or '').strip()
    password = str(data.get('password') or '')

    if not username or not password:
        raise ValidationError('Username and password are required')

    min_length = int(_settings().get('min_password_length', 6))
    if len(password) < min_length:
        raise ValidationError(f'Password must be at least {min_length} characters long')
    if len(password.encode('utf-8')) > MAX_PASSWORD_BYTES:
        raise ValidationError(f'Password must be at most {MAX_PASSWORD_BYTES} bytes long')

    try:
        user = _storage().create_user(username, hash_password(password))
    except DuplicateUserError:
        raise ConflictError('Username already exists.')

    logger.info(f"New user registered: {user['username']} with role: {user['role']}")
    return jsonify({
        'message': 'User registered successfully!',
        'user': {'username': user['username'], 'role': user['role']}
    }), 201


@api_bp.route('/login', methods=['POST'])
@failure_message('Login failed')
def login():
    data = _payload()
    username = str(data.get('username') or '').strip()
    password = str(data.get('password') or '')

    user = _storage().find_user(username) if username else None
    if user is None or not verify_password(password, user['password']):
        raise AuthenticationError('Invalid credentials')

    settings = _settings()
    token = issue_token(
        user,
        settings['jwt_secret'],
        algorithm=settings.get('jwt_algorithm', 'HS256'),
        expiry_minutes=int(settings.get('token_expiry_minutes', 60))
    )
    logger.info(f"User logged in: {user['username']}")
    return jsonify({
        'message': 'Login successful',
        'token': token,
        'role': user['role'],
        'username': user['username']
    })


@api_bp.route('/upload-photo', methods=['POST'])
@token_required
@admin_required
@failure_message('Failed to save photo metadata')
def upload_photo():
    upload = request.files.get('photo')
    if upload is None or not upload.filename:
        raise ValidationError('No file uploaded')

    settings = _settings()
    # Only the extension of the client name is kept; the stored name is generated
    extension = Path(upload.filename).suffix.lower()
    allowed = [ext.lower() for ext in settings.get('allowed_extensions', [])]
    if allowed and extension not in allowed:
        raise ValidationError('Only image files are allowed')

    max_bytes = int(settings.get('max_upload_mb', 10)) * 1024 * 1024
    upload.stream.seek(0, 2)
    size = upload.stream.tell()
    upload.stream.seek(0)
    if size > max_bytes:
        raise PayloadTooLargeError('File too large')

    filename = f"{int(time.time() * 1000)}{extension}"
    storage = _storage()
    filepath = storage.save_upload(upload.stream, filename)
    photo = storage.add_photo(filename, filepath)

    logger.info(f"Photo uploaded by admin {g.user['username']}: {filename}")
    return jsonify({'message': 'Photo uploaded successfully!', 'file': photo}), 201


@api_bp.route('/photos', methods=['GET'])
@failure_message('Failed to fetch photos')
def list_photos():
    photos = _storage().list_photos()
    if not photos:
        logger.info("No stored photos, returning placeholders")
        return jsonify(current_app.config['SITE_FALLBACK_PHOTOS'])
    return jsonify(photos)


@api_bp.route('/contact', methods=['POST'])
@failure_message('Failed to submit contact form')
def contact():
    data = _payload()
    name = str(data.get('name') or '').strip()
    email = str(data.get('email') or '').strip()
    message = str(data.get('message') or '').strip()

    if not name or not email or not message:
        raise ValidationError('All fields are required.')

    record = _storage().add_contact(name, email, message)
    logger.info(f"Contact message received from {email}")
    return jsonify({'message': 'Message sent successfully!', 'contact': record}), 201


@uploads_bp.route('/uploads/<path:filename>', methods=['GET'])
def uploaded_file(filename):
    upload_dir = _storage().upload_dir
    if upload_dir is None:
        abort(404)
    return send_from_directory(upload_dir.resolve(), filename)
