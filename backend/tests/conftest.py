import os
import sys
import pytest

# Ensure the backend root (containing the `deckhub` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from deckhub import create_app, socketio


class TestConfig:
    TESTING = True
    SECRET_KEY = 'test-secret'
    PORT = 3001
    LOG_LEVEL = 'DEBUG'
    STATIC_BUILD_DIR = None
    CORS_ALLOWED_ORIGINS = '*'
    SOCKETIO_NAMESPACE = '/'
    SOCKETIO_ASYNC_MODE = 'threading'
    SOCKETIO_TRANSPORTS = ['websocket', 'polling']
    STALE_AFTER_SEC = 60
    SWEEP_INTERVAL_SEC = 0
    BROADCAST_PEEK_REORDER = False


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


def make_cards(*ids):
    return [{'id': card_id, 'label': f'Card {card_id}'} for card_id in ids]


@pytest.fixture()
def build_dir(tmp_path):
    root = tmp_path / 'build'
    (root / 'static').mkdir(parents=True)
    (root / 'index.html').write_text('<html><body>deck</body></html>')
    (root / 'static' / 'app.js').write_text('console.log("deck");')
    return root


@pytest.fixture()
def flask_app(build_dir):
    class _Config(TestConfig):
        STATIC_BUILD_DIR = str(build_dir)

    application = create_app(_Config)
    with application.app_context():
        yield application


@pytest.fixture()
def hub(flask_app):
    return flask_app.extensions['deck_hub']


@pytest.fixture()
def clock(hub):
    fake = FakeClock()
    hub.clock = fake
    return fake


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_factory(flask_app):
    clients = []

    def _connect():
        test_client = socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
        clients.append(test_client)
        return test_client

    yield _connect
    for test_client in clients:
        try:
            test_client.disconnect()
        except Exception:
            pass


@pytest.fixture()
def sio_client(sio_factory):
    return sio_factory()
