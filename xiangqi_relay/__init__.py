import click
from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO

from config import Config

socketio = SocketIO(async_mode=None)


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = flask_app.config.get('CORS_ORIGINS', '*')
    CORS(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from xiangqi_relay.main import main
    flask_app.register_blueprint(main)

    # One shared game per app; handlers find it through app.extensions
    from xiangqi_relay.session import SESSION_EXTENSION, GameSession
    from xiangqi_relay.socketio_events import make_emitter, register_socketio_handlers
    namespace = flask_app.config.get('WS_NAMESPACE', '/ws')
    flask_app.extensions[SESSION_EXTENSION] = GameSession(make_emitter(namespace), logger=flask_app.logger)
    register_socketio_handlers(namespace)

    @click.command('show-board')
    def show_board_command():
        """Prints the starting layout of the board."""
        from xiangqi_relay.board import Board
        click.echo(Board().render())

    flask_app.cli.add_command(show_board_command)

    return flask_app
