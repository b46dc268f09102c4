import os

from flask import Blueprint, current_app, jsonify, send_from_directory

main = Blueprint('main', __name__)


@main.route('/health')
def health():
    hub = current_app.extensions['deck_hub']
    return jsonify({'status': 'ok', 'connections': hub.connection_count})


@main.route('/', defaults={'path': ''})
@main.route('/<path:path>')
def client_app(path):
    """Serve the built client bundle; unknown paths fall back to index.html."""
    build_dir = current_app.config['STATIC_BUILD_DIR']
    if path and os.path.isfile(os.path.join(build_dir, path)):
        return send_from_directory(build_dir, path)
    if os.path.isfile(os.path.join(build_dir, 'index.html')):
        return send_from_directory(build_dir, 'index.html')
    return jsonify({'error': 'Client bundle not found'}), 404
