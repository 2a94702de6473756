"""
Tests for the memory and database storage strategies.
"""

import io
import threading
from unittest.mock import patch

import pytest

from components.backend.errors import DuplicateUserError
from components.backend.storage import (
    MemoryStorage, ROLE_ADMIN, ROLE_USER, SqlStorage, create_storage
)


def _sqlite_url(tmp_path):
    return f"sqlite:///{tmp_path / 'site.db'}"


@pytest.fixture(params=['memory', 'database'])
def storage(request, tmp_path):
    if request.param == 'memory':
        yield MemoryStorage('/static/placeholder.jpg')
        return
    storage = SqlStorage(_sqlite_url(tmp_path), str(tmp_path / "uploads"))
    yield storage
    storage.dispose()


class TestUsers:
    """User records behave the same on every backend."""

    def test_first_user_is_admin(self, storage):
        first = storage.create_user('abbot', 'hash-1')
        second = storage.create_user('pilgrim', 'hash-2')

        assert first['role'] == ROLE_ADMIN
        assert second['role'] == ROLE_USER
        assert storage.count_users() == 2

    def test_duplicate_username_raises(self, storage):
        storage.create_user('abbot', 'hash-1')

        with pytest.raises(DuplicateUserError):
            storage.create_user('abbot', 'hash-2')
        assert storage.count_users() == 1

    def test_find_user(self, storage):
        storage.create_user('abbot', 'hash-1')

        user = storage.find_user('abbot')
        assert user['password'] == 'hash-1'
        assert storage.find_user('nobody') is None

    def test_find_user_returns_a_copy(self, storage):
        storage.create_user('abbot', 'hash-1')

        storage.find_user('abbot')['role'] = 'changed'
        assert storage.find_user('abbot')['role'] == ROLE_ADMIN


class TestPhotosAndContacts:

    def test_photos_listed_most_recent_first(self, storage):
        stamps = ['2024-01-01T00:00:00+00:00', '2024-03-01T00:00:00+00:00',
                  '2024-02-01T00:00:00+00:00']
        with patch('components.backend.storage._now', side_effect=stamps):
            storage.add_photo('1.jpg', '/uploads/1.jpg')
            storage.add_photo('2.jpg', '/uploads/2.jpg')
            storage.add_photo('3.jpg', '/uploads/3.jpg')

        assert [p['filename'] for p in storage.list_photos()] == ['2.jpg', '3.jpg', '1.jpg']

    def test_photo_fields(self, storage):
        photo = storage.add_photo('1.jpg', '/uploads/1.jpg')
        assert set(photo) == {'id', 'filename', 'filepath', 'uploadDate'}

    def test_contacts_are_recorded(self, storage):
        contact = storage.add_contact('Tenzin', 'tenzin@example.com', 'Opening hours?')

        assert contact['timestamp']
        assert storage.list_contacts() == [contact]


class TestMemoryStorage:

    def test_upload_returns_placeholder_and_has_no_upload_dir(self):
        storage = MemoryStorage('/static/placeholder.jpg')

        assert storage.save_upload(io.BytesIO(b'data'), '1.jpg') == '/static/placeholder.jpg'
        assert storage.upload_dir is None


class TestSqlStorage:

    def setup_method(self):
        self.opened = []

    def teardown_method(self):
        for storage in self.opened:
            storage.dispose()

    def _open(self, tmp_path):
        storage = SqlStorage(_sqlite_url(tmp_path), str(tmp_path / "uploads"))
        self.opened.append(storage)
        return storage

    def test_upload_written_to_upload_dir(self, tmp_path):
        storage = self._open(tmp_path)

        filepath = storage.save_upload(io.BytesIO(b'image-bytes'), '123.jpg')

        assert filepath == '/uploads/123.jpg'
        assert (tmp_path / "uploads" / "123.jpg").read_bytes() == b'image-bytes'

    def test_records_survive_a_new_instance(self, tmp_path):
        first = self._open(tmp_path)
        first.create_user('abbot', 'hash-1')
        first.add_contact('Tenzin', 'tenzin@example.com', 'Hello')

        second = self._open(tmp_path)
        assert second.find_user('abbot')['role'] == ROLE_ADMIN
        assert len(second.list_contacts()) == 1
        assert second.create_user('pilgrim', 'hash-2')['role'] == ROLE_USER

    def test_username_unique_across_instances(self, tmp_path):
        first = self._open(tmp_path)
        second = self._open(tmp_path)
        first.create_user('abbot', 'hash-1')

        with pytest.raises(DuplicateUserError):
            second.create_user('abbot', 'hash-2')

    def test_concurrent_writers_keep_every_record(self, tmp_path):
        writers = [self._open(tmp_path), self._open(tmp_path)]
        errors = []

        def write(storage, prefix):
            try:
                for i in range(50):
                    storage.add_contact(f"{prefix}-{i}", 'visitor@example.com', 'Hello')
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=write, args=(storage, f"writer{n}"))
                   for n, storage in enumerate(writers)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        assert len(writers[0].list_contacts()) == 100

    def test_concurrent_first_signups_yield_one_admin(self, tmp_path):
        instances = [self._open(tmp_path) for _ in range(4)]
        barrier = threading.Barrier(len(instances))
        errors = []

        def sign_up(storage, username):
            barrier.wait()
            try:
                storage.create_user(username, 'hash')
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=sign_up, args=(storage, f"monk{n}"))
                   for n, storage in enumerate(instances)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        roles = [instances[0].find_user(f"monk{n}")['role'] for n in range(len(instances))]
        assert roles.count(ROLE_ADMIN) == 1


class TestCreateStorage:

    def test_memory_backend(self):
        storage = create_storage({'storage_backend': 'memory', 'placeholder_photo': '/static/p.jpg'})
        assert isinstance(storage, MemoryStorage)
        assert storage.placeholder_path == '/static/p.jpg'

    def test_database_backend_defaults_to_sqlite_in_data_dir(self, tmp_path):
        storage = create_storage({
            'storage_backend': 'database',
            'database_url': '',
            'data_dir': str(tmp_path / "data"),
            'upload_dir': str(tmp_path / "uploads")
        })

        assert isinstance(storage, SqlStorage)
        assert storage.name == 'database'
        assert storage.database_url.startswith('sqlite:///')
        assert (tmp_path / "data" / "monastery_site.db").exists()
        storage.dispose()

    def test_database_url_setting(self, tmp_path):
        url = f"sqlite:///{tmp_path / 'custom.db'}"
        storage = create_storage({
            'storage_backend': 'database',
            'database_url': url,
            'data_dir': str(tmp_path / "data"),
            'upload_dir': str(tmp_path / "uploads")
        })

        assert storage.database_url == url
        storage.dispose()

    def test_unknown_backend_raises(self):
        with pytest.raises(ValueError):
            create_storage({'storage_backend': 'mongo'})
