import os
import sys
import pytest

# Ensure the repo root (containing the `poker` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
REPO_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from poker import create_app, socketio
from poker.store import RoomStore
from poker.services.rooms.state_machine import RoomStateMachine

NAMESPACE = '/ws'


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    CORS_ORIGINS = ['*']
    SOCKETIO_NAMESPACE = NAMESPACE
    APP_HOST = '127.0.0.1'
    APP_PORT = 3001
    LOG_LEVEL = 'DEBUG'
    DEFAULT_PLAYER_NAME = 'guest'


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def room_store(flask_app):
    return flask_app.extensions['poker_store']


@pytest.fixture()
def sio_clients(flask_app):
    """Factory for Socket.IO test clients connected to the room namespace."""
    created = []

    def _connect():
        test_client = socketio.test_client(
            flask_app,
            flask_test_client=flask_app.test_client(),
            namespace=NAMESPACE,
        )
        created.append(test_client)
        return test_client

    yield _connect
    for test_client in created:
        try:
            if test_client.is_connected(NAMESPACE):
                test_client.disconnect(namespace=NAMESPACE)
        except Exception:
            pass


@pytest.fixture()
def sio_client(sio_clients):
    return sio_clients()


@pytest.fixture()
def store():
    return RoomStore()


@pytest.fixture()
def machine(store):
    return RoomStateMachine(store)
