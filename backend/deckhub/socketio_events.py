from flask import current_app, request

from deckhub import socketio
from deckhub.services.deck.sweeper import start_sweeper


def _hub():
    return current_app.extensions['deck_hub']


def handle_connect(auth=None):
    hub = _hub()
    hub.connect(request.sid)
    start_sweeper(current_app._get_current_object(), hub)


def handle_disconnect(reason=None):
    _hub().disconnect(request.sid)


def handle_message(message):
    _hub().handle_message(request.sid, message)


def handle_error(exc):
    sid = getattr(request, 'sid', None)
    current_app.logger.exception(f"[socket-error] sid={sid} event={getattr(request, 'event', None)}: {exc}")


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register Socket.IO event handlers on ``namespace``.

    Clients send every action as a ``message`` event; the server answers
    with ``stateUpdate``, ``connectionUpdate`` and ``pong`` events.
    """
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('message', handle_message, namespace=namespace)
    socketio.on_error(namespace)(handle_error)
