import os
import sys
import pytest

# Ensure the project root (containing `config.py` and the package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from xiangqi_relay import create_app, socketio
from xiangqi_relay.session import SESSION_EXTENSION

NAMESPACE = '/ws'


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    LOG_LEVEL = 'DEBUG'
    WS_NAMESPACE = NAMESPACE
    CLIENT_INDEX = 'index.html'
    CORS_ORIGINS = '*'


@pytest.fixture()
def flask_app(tmp_path):
    client_dir = tmp_path / 'client'
    client_dir.mkdir()
    (client_dir / 'index.html').write_text('<html><body>xiangqi</body></html>', encoding='utf-8')
    (client_dir / 'app.js').write_text('console.log("xiangqi");', encoding='utf-8')

    class _Config(TestConfig):
        CLIENT_DIR = str(client_dir)

    application = create_app(_Config)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def game_session(flask_app):
    return flask_app.extensions[SESSION_EXTENSION]


@pytest.fixture()
def connect(flask_app):
    """Factory opening Socket.IO test clients on the relay namespace."""
    opened = []

    def _connect():
        test_client = socketio.test_client(
            flask_app,
            flask_test_client=flask_app.test_client(),
            namespace=NAMESPACE
        )
        opened.append(test_client)
        return test_client

    yield _connect
    for test_client in opened:
        try:
            if test_client.is_connected(NAMESPACE):
                test_client.disconnect(namespace=NAMESPACE)
        except Exception:
            pass


def payloads(test_client):
    """Protocol payloads received since the last call, oldest first."""
    received = []
    for pkt in test_client.get_received(NAMESPACE):
        if pkt['name'] != 'message':
            continue
        args = pkt['args']
        # The test client unwraps single-argument `message` events
        if isinstance(args, list):
            args = args[0]
        received.append(args)
    return received


class RecordingEmitter:
    """Emitter stand-in that records (conn_id, payload) pairs."""

    def __init__(self, failing=()):
        self.sent = []
        self.failing = set(failing)

    def __call__(self, conn_id, payload):
        if conn_id in self.failing:
            raise ConnectionError(f"{conn_id} is gone")
        self.sent.append((conn_id, payload))

    def to(self, conn_id):
        return [payload for cid, payload in self.sent if cid == conn_id]


@pytest.fixture()
def emitter():
    return RecordingEmitter()
