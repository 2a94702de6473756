"""
Pytest configuration and fixtures for the monastery site tests.
"""

import io

import pytest

from components.config import SiteConfig
from components.maps.catalog import LocationCatalog, LocationRecord
from components.backend import create_app
from components.backend.storage import MemoryStorage, SqlStorage

TEST_JWT_SECRET = "test-secret-key-with-enough-length-for-hs256"


@pytest.fixture
def catalog():
    """The default nine-monastery catalog."""
    return LocationCatalog()


@pytest.fixture
def small_catalog():
    """A three-record catalog for rendering tests."""
    return LocationCatalog([
        LocationRecord("Alpha Gompa", 27.1, 88.1, "Kagyu", "East Sikkim"),
        LocationRecord("Beta Gompa", 27.2, 88.2, "Nyingma", "West Sikkim"),
        LocationRecord("Gamma Gompa", 27.3, 88.3, "Nyingma", "East Sikkim")
    ])


@pytest.fixture
def site_config(tmp_path):
    """Site configuration with defaults only (no file, no environment)."""
    config = SiteConfig(config_path=str(tmp_path / "missing_config.json"), apply_env=False)
    config.update_section('backend', {
        'jwt_secret': TEST_JWT_SECRET,
        'data_dir': str(tmp_path / "data"),
        'upload_dir': str(tmp_path / "uploads")
    })
    return config


@pytest.fixture
def memory_storage():
    return MemoryStorage()


@pytest.fixture
def db_storage(tmp_path):
    storage = SqlStorage(f"sqlite:///{tmp_path / 'site.db'}", str(tmp_path / "uploads"))
    yield storage
    storage.dispose()


@pytest.fixture
def app(site_config, memory_storage):
    app = create_app(site_config, storage=memory_storage)
    app.config['TESTING'] = True
    return app


@pytest.fixture
def db_app(site_config, db_storage):
    app = create_app(site_config, storage=db_storage)
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def db_client(db_app):
    return db_app.test_client()


def _register_and_login(test_client, username, password):
    test_client.post('/api/signup', json={'username': username, 'password': password})
    response = test_client.post('/api/login', json={'username': username, 'password': password})
    return response.get_json()['token']


@pytest.fixture
def admin_token(client):
    """Token of the first registered user (the admin)."""
    return _register_and_login(client, 'abbot', 'secret123')


@pytest.fixture
def user_token(client, admin_token):
    """Token of a second, non-admin user."""
    return _register_and_login(client, 'pilgrim', 'secret456')


@pytest.fixture
def db_admin_token(db_client):
    return _register_and_login(db_client, 'abbot', 'secret123')


@pytest.fixture
def image_bytes():
    """Small fake JPEG payload."""
    return b'\xff\xd8\xff\xe0' + b'\x00' * 128


@pytest.fixture
def make_upload(image_bytes):
    """Factory for multipart upload bodies."""
    def _make(filename='rumtek.jpg', content=None):
        return {'photo': (io.BytesIO(image_bytes if content is None else content), filename)}
    return _make


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
