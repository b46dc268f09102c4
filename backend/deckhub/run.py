import click

from deckhub import create_app, socketio


@click.command()
@click.option('--host', envvar='HOST', default='0.0.0.0', show_default=True, help='Interface to bind.')
@click.option('--port', type=int, default=None, help='Port to bind (defaults to $PORT or 3001).')
@click.option('--debug', is_flag=True, help='Development mode: Flask debugger, reloader and the Werkzeug server.')
def main(host, port, debug):
    app = create_app()
    port = port or app.config['PORT']
    app.logger.info(f"[startup] serving deck on {host}:{port} debug={debug}")
    # The Werkzeug server is only allowed for local development
    socketio.run(app, host=host, port=port, debug=debug, allow_unsafe_werkzeug=debug)
