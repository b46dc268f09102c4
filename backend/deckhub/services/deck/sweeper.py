import threading

from deckhub import socketio


_start_lock = threading.Lock()


def start_sweeper(app, hub) -> bool:
    """Start the periodic stale-connection sweep for ``hub``.

    - No-ops in TESTING mode unless ENABLE_SWEEPER_IN_TESTS is set
    - No-ops when SWEEP_INTERVAL_SEC is 0
    - Ensures a single sweeper per hub
    """
    if app.config.get('TESTING') and not app.config.get('ENABLE_SWEEPER_IN_TESTS'):
        return False
    interval = int(app.config.get('SWEEP_INTERVAL_SEC', 60))
    if interval <= 0:
        return False
    with _start_lock:
        if hub.sweeper_started:
            return False
        hub.sweeper_started = True
    app.logger.info(f"[sweep-start] interval={interval}s stale_after={hub.stale_after}s")
    socketio.start_background_task(_worker, app, hub, interval)
    return True


def _worker(app, hub, interval: int) -> None:
    while True:
        socketio.sleep(interval)
        try:
            evicted = hub.sweep()
        except Exception:
            app.logger.exception("[sweep-error] sweep failed")
            continue
        if evicted:
            app.logger.info(f"[sweep] evicted={len(evicted)} connections={hub.connection_count}")
