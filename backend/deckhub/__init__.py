from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from deckhub.config import Config

socketio = SocketIO()


def create_app(config_class=Config):
    flask_app = Flask(__name__, static_folder=None)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = flask_app.config.get('CORS_ALLOWED_ORIGINS', '*')
    CORS(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(
        flask_app,
        async_mode=flask_app.config.get('SOCKETIO_ASYNC_MODE'),
        cors_allowed_origins=allowed_origins,
        transports=flask_app.config.get('SOCKETIO_TRANSPORTS', ['websocket']),
        ping_interval=flask_app.config.get('SOCKETIO_PING_INTERVAL_SEC', 25),
        ping_timeout=flask_app.config.get('SOCKETIO_PING_TIMEOUT_SEC', 60),
    )

    # One shared deck per process
    from deckhub.hub import SessionHub
    from deckhub.services.deck.store import DeckStore
    namespace = flask_app.config.get('SOCKETIO_NAMESPACE', '/')
    flask_app.extensions['deck_hub'] = SessionHub(
        DeckStore(),
        socketio,
        namespace=namespace,
        stale_after=flask_app.config.get('STALE_AFTER_SEC', 60),
        broadcast_peek_reorder=flask_app.config.get('BROADCAST_PEEK_REORDER', False),
        logger=flask_app.logger,
    )

    from deckhub.socketio_events import register_socketio_handlers
    register_socketio_handlers(namespace)

    from deckhub.main import main
    flask_app.register_blueprint(main)

    return flask_app
