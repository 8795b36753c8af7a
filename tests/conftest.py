"""
Shared pytest fixtures for Cash Hub tests.
"""

import pytest
import os
import sys
from unittest.mock import MagicMock

# Ensure the project root is on sys.path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from kv_store import MemoryKeyValueStore
from storage_service import StorageService

DEVICE_ID = 'test-device'
TEST_PASSWORD = 'senha-segura-123'


class TestConfig:
    """Test configuration using the in-memory store."""
    SECRET_KEY = 'test-secret-key-for-testing-only'
    TESTING = True
    WTF_CSRF_ENABLED = True
    SERVER_NAME = 'localhost'
    STORAGE_BACKEND = 'memory'
    GEMINI_API_KEY = 'test-api-key'
    GEMINI_MODEL = 'gemini-test'
    LOG_LEVEL = 'WARNING'
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'

    @staticmethod
    def init_db(app):
        """Fresh in-memory store per app - no MySQL needed."""
        app.kv_store = MemoryKeyValueStore()


def storage_for(app, device_id=DEVICE_ID):
    return StorageService(app.kv_store, device_id)


def login_session(client, app, email='joao@example.com', cpf='12345678901', name='João Silva'):
    """Register a user on the test device; registration also logs them in."""
    with client.session_transaction() as sess:
        sess['device_id'] = DEVICE_ID
    result = storage_for(app).register_user(name, email, TEST_PASSWORD, cpf, '1990-05-20')
    assert result.success, result.message
    return result.user


def flashed(client):
    """Flash messages waiting in the client's session as (category, message) tuples."""
    with client.session_transaction() as sess:
        return list(sess.get('_flashes', []))


@pytest.fixture
def app():
    """Create application for testing."""
    from app import create_app
    application = create_app(config_class=TestConfig)
    application.config['WTF_CSRF_ENABLED'] = True
    yield application


@pytest.fixture
def app_no_csrf():
    """Create application for testing without CSRF protection."""
    from app import create_app
    application = create_app(config_class=TestConfig)
    application.config['WTF_CSRF_ENABLED'] = False
    yield application


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def client_no_csrf(app_no_csrf):
    """Create test client without CSRF."""
    return app_no_csrf.test_client()


@pytest.fixture
def ai(app_no_csrf):
    """Replace the Gemini client with a mock."""
    mock = MagicMock()
    app_no_csrf.ai_service = mock
    return mock


@pytest.fixture
def logged_in_client(client_no_csrf, app_no_csrf):
    """Client with an active session on the test device."""
    login_session(client_no_csrf, app_no_csrf)
    return client_no_csrf


@pytest.fixture
def storage(app_no_csrf):
    """Storage service bound to the test device."""
    return storage_for(app_no_csrf)
