import random

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
import click
from config import Config

allowed_origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:5174",
    "http://127.0.0.1:5174",
]
socketio = SocketIO(cors_allowed_origins=allowed_origins, async_mode=None)


def _build_content_provider(flask_app):
    from trivia_show.content import JServiceProvider, StaticContentProvider
    cfg = flask_app.config
    if cfg.get('CONTENT_FILE'):
        return StaticContentProvider.from_json_file(cfg['CONTENT_FILE'])
    return JServiceProvider(
        base_url=cfg.get('CONTENT_BASE_URL', 'https://jservice.io/api'),
        timeout=float(cfg.get('CONTENT_TIMEOUT_SEC', 10)),
        max_retries=int(cfg.get('CONTENT_MAX_RETRIES', 3)),
    )


def _timer_spawn(flask_app):
    # Auto-close never fires in TESTING unless explicitly enabled
    if flask_app.config.get('TESTING') and not flask_app.config.get('ENABLE_TIMER_IN_TESTS'):
        return lambda target, *args: None
    return socketio.start_background_task


def create_app(config_class=Config, content_provider=None):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    CORS(flask_app, supports_credentials=True, origins=allowed_origins)
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from trivia_show.services.trivia import RevealTimer, SessionEngine
    engine = SessionEngine(
        content_provider or _build_content_provider(flask_app),
        category_pool=flask_app.config.get('CATEGORY_IDS') or None,
        board_size=int(flask_app.config.get('BOARD_SIZE', 5)),
        clues_per_category=int(flask_app.config.get('CLUES_PER_CATEGORY', 5)),
        reveal_duration=float(flask_app.config.get('REVEAL_DURATION_SEC', 3)),
        timer=RevealTimer(spawn=_timer_spawn(flask_app), logger=flask_app.logger),
        logger=flask_app.logger,
    )
    flask_app.extensions['trivia_engine'] = engine

    from trivia_show.api.session import session_api
    flask_app.register_blueprint(session_api, url_prefix='/api/session')

    # Socket.IO handlers plus engine events pushed to connected clients
    from trivia_show.socketio_events import broadcast_engine_event, register_socketio_handlers
    register_socketio_handlers(testing=flask_app.config.get('TESTING', False))
    engine.subscribe(broadcast_engine_event)

    @flask_app.route('/health')
    def health():
        return {'status': 'ok'}

    @click.command('preview-board')
    @click.option('--seed', type=int, default=None, help='Seed the category and clue selection.')
    def preview_board_command(seed):
        """Loads a board from the content source and prints it."""
        if seed is not None:
            engine.rng = random.Random(seed)
        board = engine.restart()
        for category in board or []:
            values = ' '.join(str(c['value']) for c in category['clues'])
            click.echo(f"{category['title']}: {values}")

    flask_app.cli.add_command(preview_board_command)

    return flask_app
