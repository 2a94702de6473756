"""
Storage strategies for the backend API.

Users, photo metadata and contact messages go through the Storage
interface. Two implementations exist and the configuration picks one:

* ``memory`` - process-local lists; uploaded files are accepted but not
  written anywhere (serverless deployments have no writable disk).
* ``database`` - SQLAlchemy tables (SQLite under ``data_dir`` unless
  ``database_url`` names another database) and uploaded files under
  ``upload_dir``.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, BinaryIO, Dict, List, Optional
import logging
import shutil
import threading
import uuid

from sqlalchemy import Column, String, Text, case, create_engine, insert, literal, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import declarative_base, sessionmaker

from .errors import DuplicateUserError

logger = logging.getLogger(__name__)

ROLE_ADMIN = 'admin'
ROLE_USER = 'user'

SQLITE_FILENAME = 'monastery_site.db'


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _new_id() -> str:
    return uuid.uuid4().hex


class Storage(ABC):
    """Persistence interface used by the API routes."""

    name = 'abstract'

    @property
    def upload_dir(self) -> Optional[Path]:
        """Directory uploaded files are served from, if any."""
        return None

    @abstractmethod
    def count_users(self) -> int:
        ...

    @abstractmethod
    def find_user(self, username: str) -> Optional[Dict[str, Any]]:
        ...

    @abstractmethod
    def create_user(self, username: str, password_hash: str) -> Dict[str, Any]:
        """
        Store a new user. The first user ever stored becomes an admin.

        Raises:
            DuplicateUserError: If the username is taken
        """

    @abstractmethod
    def save_upload(self, stream: BinaryIO, filename: str) -> str:
        """Persist an uploaded file; returns the public file path."""

    @abstractmethod
    def add_photo(self, filename: str, filepath: str) -> Dict[str, Any]:
        ...

    @abstractmethod
    def list_photos(self) -> List[Dict[str, Any]]:
        """Photo metadata, most recent upload first."""

    @abstractmethod
    def add_contact(self, name: str, email: str, message: str) -> Dict[str, Any]:
        ...

    @abstractmethod
    def list_contacts(self) -> List[Dict[str, Any]]:
        ...


class MemoryStorage(Storage):
    """Keeps everything in process memory; uploads are not written."""

    name = 'memory'

    def __init__(self, placeholder_path: str = '/static/placeholder.jpg'):
        self.placeholder_path = placeholder_path
        self._lock = threading.Lock()
        self._users: List[Dict[str, Any]] = []
        self._photos: List[Dict[str, Any]] = []
        self._contacts: List[Dict[str, Any]] = []

    def count_users(self) -> int:
        return len(self._users)

    def find_user(self, username: str) -> Optional[Dict[str, Any]]:
        for user in self._users:
            if user['username'] == username:
                return dict(user)
        return None

    def create_user(self, username: str, password_hash: str) -> Dict[str, Any]:
        with self._lock:
            if any(user['username'] == username for user in self._users):
                raise DuplicateUserError(username)
            user = {
                'id': _new_id(),
                'username': username,
                'password': password_hash,
                'role': ROLE_ADMIN if not self._users else ROLE_USER
            }
            self._users.append(user)
        return dict(user)

    def save_upload(self, stream: BinaryIO, filename: str) -> str:
        logger.info(f"Upload {filename} accepted without persistence (memory storage)")
        return self.placeholder_path

    def add_photo(self, filename: str, filepath: str) -> Dict[str, Any]:
        photo = {
            'id': _new_id(),
            'filename': filename,
            'filepath': filepath,
            'uploadDate': _now()
        }
        with self._lock:
            self._photos.append(photo)
        return dict(photo)

    def list_photos(self) -> List[Dict[str, Any]]:
        photos = [dict(photo) for photo in self._photos]
        return sorted(photos, key=lambda photo: photo['uploadDate'], reverse=True)

    def add_contact(self, name: str, email: str, message: str) -> Dict[str, Any]:
        contact = {
            'id': _new_id(),
            'name': name,
            'email': email,
            'message': message,
            'timestamp': _now()
        }
        with self._lock:
            self._contacts.append(contact)
        return dict(contact)

    def list_contacts(self) -> List[Dict[str, Any]]:
        return [dict(contact) for contact in self._contacts]


Base = declarative_base()


class UserRecord(Base):
    """Table: users. Usernames are unique."""
    __tablename__ = "users"

    id = Column(String(32), primary_key=True)
    username = Column(String(150), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default=ROLE_USER)

    def to_dict(self) -> Dict[str, Any]:
        return {'id': self.id, 'username': self.username, 'password': self.password, 'role': self.role}


class PhotoRecord(Base):
    """Table: photos. ``upload_date`` is a UTC ISO-8601 string, so it sorts chronologically."""
    __tablename__ = "photos"

    id = Column(String(32), primary_key=True)
    filename = Column(String(255), nullable=False)
    filepath = Column(String(512), nullable=False)
    upload_date = Column(String(40), nullable=False, index=True)

    def to_dict(self) -> Dict[str, Any]:
        return {'id': self.id, 'filename': self.filename, 'filepath': self.filepath,
                'uploadDate': self.upload_date}


class ContactRecord(Base):
    """Table: contacts."""
    __tablename__ = "contacts"

    id = Column(String(32), primary_key=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    timestamp = Column(String(40), nullable=False)

    def to_dict(self) -> Dict[str, Any]:
        return {'id': self.id, 'name': self.name, 'email': self.email,
                'message': self.message, 'timestamp': self.timestamp}


class SqlStorage(Storage):
    """SQLAlchemy-backed storage plus an uploads directory."""

    name = 'database'

    def __init__(self, database_url: str, upload_dir: str):
        self.database_url = database_url
        self._upload_dir = Path(upload_dir)
        self._upload_dir.mkdir(parents=True, exist_ok=True)

        connect_args = {}
        if database_url.startswith('sqlite'):
            # Connections are shared across request threads; writers wait for the file lock
            connect_args = {'check_same_thread': False, 'timeout': 30}
        self.engine = create_engine(database_url, connect_args=connect_args)
        Base.metadata.create_all(self.engine)
        self.Session = sessionmaker(bind=self.engine, expire_on_commit=False)

        logger.info(f"Database storage at {self.engine.url.render_as_string(hide_password=True)} "
                    f"(uploads: {self._upload_dir.resolve()})")

    @property
    def upload_dir(self) -> Path:
        return self._upload_dir

    def dispose(self) -> None:
        self.engine.dispose()

    def count_users(self) -> int:
        with self.Session() as session:
            return session.query(UserRecord).count()

    def find_user(self, username: str) -> Optional[Dict[str, Any]]:
        with self.Session() as session:
            user = session.query(UserRecord).filter_by(username=username).one_or_none()
            return user.to_dict() if user is not None else None

    def create_user(self, username: str, password_hash: str) -> Dict[str, Any]:
        user_id = _new_id()
        # Role is decided inside the INSERT so concurrent first signups cannot both be admin
        role = case(
            (select(UserRecord.id).exists(), literal(ROLE_USER)),
            else_=literal(ROLE_ADMIN)
        )
        statement = insert(UserRecord).from_select(
            ['id', 'username', 'password', 'role'],
            select(literal(user_id), literal(username), literal(password_hash), role)
        )

        try:
            with self.Session() as session, session.begin():
                session.execute(statement)
                user = session.get(UserRecord, user_id)
                created = user.to_dict()
        except IntegrityError:
            raise DuplicateUserError(username)
        return created

    def save_upload(self, stream: BinaryIO, filename: str) -> str:
        target = self._upload_dir / filename
        with open(target, 'wb') as f:
            shutil.copyfileobj(stream, f)
        logger.info(f"Saved upload to {target}")
        return f"/uploads/{filename}"

    def add_photo(self, filename: str, filepath: str) -> Dict[str, Any]:
        photo = PhotoRecord(id=_new_id(), filename=filename, filepath=filepath, upload_date=_now())
        with self.Session() as session, session.begin():
            session.add(photo)
        return photo.to_dict()

    def list_photos(self) -> List[Dict[str, Any]]:
        with self.Session() as session:
            photos = session.query(PhotoRecord).order_by(PhotoRecord.upload_date.desc()).all()
            return [photo.to_dict() for photo in photos]

    def add_contact(self, name: str, email: str, message: str) -> Dict[str, Any]:
        contact = ContactRecord(id=_new_id(), name=name, email=email, message=message, timestamp=_now())
        with self.Session() as session, session.begin():
            session.add(contact)
        return contact.to_dict()

    def list_contacts(self) -> List[Dict[str, Any]]:
        with self.Session() as session:
            contacts = session.query(ContactRecord).order_by(ContactRecord.timestamp).all()
            return [contact.to_dict() for contact in contacts]


def default_database_url(data_dir: str) -> str:
    """SQLite file inside ``data_dir`` (created if missing)."""
    directory = Path(data_dir)
    directory.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{(directory / SQLITE_FILENAME).resolve()}"


def create_storage(backend_settings: Dict[str, Any]) -> Storage:
    """
    Build the storage named by ``backend_settings['storage_backend']``.

    Raises:
        ValueError: If the backend name is unknown
    """
    backend = backend_settings.get('storage_backend', 'memory')
    if backend == 'memory':
        return MemoryStorage(backend_settings.get('placeholder_photo', '/static/placeholder.jpg'))
    if backend == 'database':
        database_url = backend_settings.get('database_url') or default_database_url(backend_settings['data_dir'])
        return SqlStorage(database_url, backend_settings['upload_dir'])
    raise ValueError(f"Unknown storage backend: {backend}")
