import logging
import threading
import time
from typing import Any, Callable, Dict, List, Optional, Tuple

from deckhub.models import ConnectionRecord
from deckhub.services.deck.store import DeckStore, RESET_DECK, UPDATE_PEEKED_CARDS


STATE_UPDATE = 'stateUpdate'
CONNECTION_UPDATE = 'connectionUpdate'
PONG = 'pong'

PING = 'ping'
GET_CONNECTION_COUNT = 'getConnectionCount'

# Tags sent by older clients
ACTION_ALIASES = {'reset': RESET_DECK}


def parse_message(message) -> Tuple[Optional[str], Dict[str, Any]]:
    """Split an inbound ``{type, data?}`` message into ``(type, payload)``.

    The payload may also arrive inlined next to ``type``. Returns
    ``(None, {})`` when the message has no usable shape.
    """
    if not isinstance(message, dict):
        return None, {}
    action_type = message.get('type')
    if not isinstance(action_type, str) or not action_type:
        return None, {}
    data = message.get('data')
    if not isinstance(data, dict):
        data = {k: v for k, v in message.items() if k not in ('type', 'data')}
    return ACTION_ALIASES.get(action_type, action_type), data


class SessionHub:
    """Live connections around one ``DeckStore``.

    Every mutation and the broadcast that follows it happen under one lock,
    so all connections receive state snapshots in the order the mutations
    were applied. The lock is re-entrant because force-closing a connection
    during a sweep calls straight back into ``disconnect``.
    """

    def __init__(
        self,
        store: DeckStore,
        socketio,
        namespace: str = '/',
        stale_after: float = 60.0,
        broadcast_peek_reorder: bool = False,
        clock: Callable[[], float] = time.time,
        logger: Optional[logging.Logger] = None,
    ):
        self.store = store
        self.socketio = socketio
        self.namespace = namespace
        self.stale_after = stale_after
        self.broadcast_peek_reorder = broadcast_peek_reorder
        self.clock = clock
        self.logger = logger or logging.getLogger(__name__)
        self.sweeper_started = False
        self._records: Dict[str, ConnectionRecord] = {}
        self._lock = threading.RLock()

    @property
    def connection_count(self) -> int:
        return len(self._records)

    def connect(self, sid: str) -> None:
        with self._lock:
            self._records[sid] = ConnectionRecord(sid, self.clock())
            self.logger.info(f"[connect] sid={sid} connections={self.connection_count}")
            self._send(STATE_UPDATE, self.store.snapshot(), to=sid)
            self._broadcast_connection_count()

    def disconnect(self, sid: str) -> bool:
        with self._lock:
            record = self._records.pop(sid, None)
            if record is None:
                return False
            self.logger.info(f"[disconnect] sid={sid} connections={self.connection_count}")
            self._broadcast_connection_count()
            return True

    def handle_message(self, sid: str, message) -> None:
        try:
            with self._lock:
                self._dispatch(sid, message)
        except Exception:
            self.logger.exception("[message-error] sid=%s message=%r", sid, message)

    def sweep(self, now: Optional[float] = None) -> List[str]:
        """Evict connections idle for at least ``stale_after`` seconds.

        Returns the evicted sids. A single connection-count broadcast
        follows when anything was evicted.
        """
        with self._lock:
            now = self.clock() if now is None else now
            stale = [r for r in self._records.values() if r.is_stale(now, self.stale_after)]
            for record in stale:
                # Drop the record first so the disconnect callback stays quiet
                self._records.pop(record.sid, None)
                self.logger.info(f"[evict] sid={record.sid} idle={record.idle_for(now):.1f}s")
                self._close(record.sid)
            if stale:
                self._broadcast_connection_count()
            return [r.sid for r in stale]

    def _dispatch(self, sid: str, message) -> None:
        record = self._records.get(sid)
        if record is not None:
            record.touch(self.clock())

        action_type, payload = parse_message(message)
        if action_type is None:
            self.logger.debug("[ignored] sid=%s malformed message=%r", sid, message)
            return
        if action_type == PING:
            self._send(PONG, to=sid)
            return
        if action_type == GET_CONNECTION_COUNT:
            self._send(CONNECTION_UPDATE, {'connections': self.connection_count}, to=sid)
            return

        mutated, snapshot = self.store.apply(action_type, payload)
        if not mutated:
            self.logger.debug("[noop] sid=%s action=%s", sid, action_type)
            return
        if action_type == UPDATE_PEEKED_CARDS:
            order = [card.get('id') for card in snapshot['peekedCards']]
            self.logger.info(f"[peek-reorder] sid={sid} order={order}")
            if not self.broadcast_peek_reorder:
                return
        self.logger.info(f"[action] sid={sid} action={action_type}")
        self._send(STATE_UPDATE, snapshot)

    def _broadcast_connection_count(self) -> None:
        self._send(CONNECTION_UPDATE, {'connections': self.connection_count})

    def _send(self, event: str, *args, to: Optional[str] = None) -> None:
        self.socketio.emit(event, *args, to=to, namespace=self.namespace)

    def _close(self, sid: str) -> None:
        try:
            self.socketio.server.disconnect(sid, namespace=self.namespace)
        except Exception:
            self.logger.exception(f"[evict-error] sid={sid} failed to close transport")
