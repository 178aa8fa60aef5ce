from flask import Blueprint, current_app, jsonify, send_from_directory
from werkzeug.exceptions import NotFound

from xiangqi_relay.session import SESSION_EXTENSION

main = Blueprint('main', __name__)


def _serve_client_file(filename):
    try:
        return send_from_directory(current_app.config['CLIENT_DIR'], filename)
    except NotFound:
        return jsonify({'error': 'Not Found'}), 404


@main.route('/')
def index():
    return _serve_client_file(current_app.config['CLIENT_INDEX'])


@main.route('/api/state')
def game_state():
    """
    Snapshot of the shared game: board, occupied seats and connection counts.
    """
    return jsonify(current_app.extensions[SESSION_EXTENSION].state())


@main.route('/<path:filename>')
def client_asset(filename):
    return _serve_client_file(filename)
