import os


def default_build_dir():
    return os.path.join(os.getcwd(), 'build')


def _env_list(name, default):
    raw = os.environ.get(name)
    if not raw:
        return default
    items = [item.strip() for item in raw.split(',') if item.strip()]
    if items == ['*']:
        return '*'
    return items


def _env_bool(name, default=False):
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    PORT = int(os.environ.get('PORT', '3001'))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    # Built client bundle (index.html + assets), relative to the working directory by default
    STATIC_BUILD_DIR = os.environ.get('STATIC_BUILD_DIR') or default_build_dir()
    CORS_ALLOWED_ORIGINS = _env_list('CORS_ALLOWED_ORIGINS', '*')
    # Socket.IO transport
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/')
    SOCKETIO_ASYNC_MODE = os.environ.get('SOCKETIO_ASYNC_MODE') or None
    SOCKETIO_TRANSPORTS = _env_list('SOCKETIO_TRANSPORTS', ['websocket'])
    SOCKETIO_PING_INTERVAL_SEC = int(os.environ.get('SOCKETIO_PING_INTERVAL_SEC', '25'))
    SOCKETIO_PING_TIMEOUT_SEC = int(os.environ.get('SOCKETIO_PING_TIMEOUT_SEC', '60'))
    # Connection liveness (seconds). SWEEP_INTERVAL_SEC=0 disables the sweeper.
    STALE_AFTER_SEC = int(os.environ.get('STALE_AFTER_SEC', '60'))
    SWEEP_INTERVAL_SEC = int(os.environ.get('SWEEP_INTERVAL_SEC', '60'))
    # Broadcast manual reorders of peeked cards to every client
    BROADCAST_PEEK_REORDER = _env_bool('BROADCAST_PEEK_REORDER')
