from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
import click
from config import Config

cors = CORS()
socketio = SocketIO(async_mode=None)


def _origins(config):
    origins = config.get('CORS_ORIGINS') or ['*']
    return '*' if '*' in origins else origins


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = _origins(flask_app.config)
    cors.init_app(flask_app, origins=allowed_origins)
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # Room state lives for the lifetime of this app only
    from poker.broadcast import BroadcastAdapter
    from poker.services.rooms.state_machine import RoomStateMachine
    from poker.store import RoomStore

    namespace = flask_app.config.get('SOCKETIO_NAMESPACE', '/ws')
    store = RoomStore()
    flask_app.extensions['poker_store'] = store
    flask_app.extensions['poker_machine'] = RoomStateMachine(
        store, default_player_name=flask_app.config.get('DEFAULT_PLAYER_NAME', 'guest'))
    flask_app.extensions['poker_broadcast'] = BroadcastAdapter(socketio, namespace)

    from poker.main import main
    flask_app.register_blueprint(main)

    from poker.api.rooms import rooms
    flask_app.register_blueprint(rooms, url_prefix='/scrumPoker')

    # Importing here ensures the handlers bind to the initialized socketio instance
    from poker.socketio_events import register_socketio_handlers
    register_socketio_handlers(namespace=namespace)

    @click.command('serve')
    @click.option('--host', default=None, help='Interface to bind (default: APP_HOST).')
    @click.option('--port', type=int, default=None, help='Port to listen on (default: APP_PORT).')
    def serve_command(host, port):
        """Runs the Socket.IO server."""
        socketio.run(
            flask_app,
            host=host or flask_app.config['APP_HOST'],
            port=port or flask_app.config['APP_PORT'],
            allow_unsafe_werkzeug=True,
        )

    flask_app.cli.add_command(serve_command)

    return flask_app
