"""
Flask SocketIO server for the snake game.

The browser draws the board, plays sounds and captures keys. This server
owns the game: it runs the tick loop and pushes a snapshot after every tick.

Events in:  init, key, set_autoplay, play, pause, step, reset_game,
            set_debug_settings
Events out: game_update, sound, time_update, playing, autoplay_changed,
            init_error, init_warning
"""
import sys
import os
import logging

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from flask import Flask, jsonify, request
from flask_socketio import SocketIO, emit
from flask_cors import CORS

from snakegame import ConfigurationError, Event, GameConfig, Snapshot, create_game
from server.session import Session
from server.players import create_player
from server.scoreboard import Scoreboard
from server.validation import validate_game_settings

# ========== LOGGING SETUP ==========
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    datefmt='%H:%M:%S'
)

logger = logging.getLogger('SnakeGame')
logger.setLevel(logging.INFO)

# Reduce noise from Flask and SocketIO internals
logging.getLogger('werkzeug').setLevel(logging.ERROR)
logging.getLogger('socketio').setLevel(logging.ERROR)
logging.getLogger('engineio').setLevel(logging.ERROR)

# CORS configuration
# Example: CORS_ORIGINS=http://localhost:3000,https://myapp.com
CORS_ORIGINS = os.environ.get('CORS_ORIGINS', 'http://localhost:3000,http://127.0.0.1:3000')
if CORS_ORIGINS == '*':
    allowed_origins = '*'
else:
    allowed_origins = [origin.strip() for origin in CORS_ORIGINS.split(',')]

HOST = os.environ.get('SNAKE_HOST', '127.0.0.1')
PORT = int(os.environ.get('SNAKE_PORT', '5000'))

app = Flask(__name__)
CORS(app, resources={r"/*": {"origins": allowed_origins}})
# The game loop runs on plain threads
socketio = SocketIO(app, cors_allowed_origins=allowed_origins, async_mode='threading')

# Sound the client should play for each event
SOUNDS = {
    Event.EATEN: 'eat',
    Event.WALL_COLLISION: 'gameover',
    Event.SELF_COLLISION: 'gameover',
    Event.WON: 'win',
}

# ========== GLOBAL STATE ==========
# Single-user mode
session = None
config = GameConfig()
debug_settings = {'path': False, 'distance': False}


@app.route('/')
def index():
    """Health check endpoint."""
    return {'status': 'ok', 'message': 'Snake backend running'}


@app.route('/config')
def get_config():
    """Settings of the current game."""
    return jsonify(config.to_dict())


@app.route('/stats')
def get_stats():
    """
    Results of recent finished games.

    Query params:
        - window: number of recent games to summarize (default 100)
    """
    window = request.args.get('window', 100, type=int)
    if window < 1:
        return jsonify({'error': 'window must be a positive integer'}), 400
    scoreboard = session.scoreboard if session is not None else Scoreboard()
    return jsonify({
        **scoreboard.get_summary(window),
        'games_played': scoreboard.games_played,
        'highscore': scoreboard.highscore,
    })


def build_update(current: Session, snapshot: Snapshot) -> dict:
    """Snapshot plus scoreboard and any enabled debug overlays."""
    update = {**snapshot.to_dict(), **current.scoreboard.to_dict()}
    if debug_settings['path'] or debug_settings['distance']:
        update['debug'] = current.get_debug_info(
            debug_path=debug_settings['path'],
            debug_distance=debug_settings['distance']
        )
    return update


def publish(current: Session, snapshot: Snapshot):
    """Send a tick result to all clients. Safe to call from the loop thread."""
    socketio.emit('game_update', build_update(current, snapshot))
    for event in snapshot.events:
        if event in SOUNDS:
            socketio.emit('sound', {'name': SOUNDS[event]})
    if snapshot.game_over and snapshot.events:
        socketio.emit('playing', {'playing': False})


@socketio.on('init')
def handle_init(data=None):
    """
    Initialize a new game session.

    Expected data:
        - board_size: board width/height in px
        - block_size: cell size in px
        - fps: ticks per second
        - control_mode: 'human' or 'autoplay'
        - autoplay: bool, used when control_mode is missing
        - seed: int or None
    """
    global session, config

    is_valid, errors, settings = validate_game_settings(data or {})
    if not is_valid:
        logger.warning(f"Init settings corrected: {errors}")

    try:
        new_config = GameConfig.from_dict(settings)
        game = create_game(new_config)
    except ConfigurationError as e:
        logger.error(f"Could not create game: {e}")
        emit('init_error', {'error': str(e)})
        return

    if session is not None:
        session.pause()

    config = new_config
    player = create_player(settings['control_mode'])
    new_session = Session(game, player, config)
    new_session.set_update_callback(lambda snapshot: publish(new_session, snapshot))
    new_session.set_time_callback(lambda seconds: socketio.emit('time_update', {'seconds': seconds}))
    session = new_session

    logger.info(
        f"Initializing session: grid={config.grid_size}, fps={config.fps}, "
        f"mode={settings['control_mode']}, seed={config.seed}"
    )
    emit('game_update', session.get_state())
    if errors:
        emit('init_warning', {'errors': errors, 'corrected': config.to_dict()})


@socketio.on('key')
def handle_key(data):
    """
    Queue a direction from a key press.

    Expected data:
        - key: keyCode (37-40) or key name ('ArrowUp', 'w', ...)
    """
    if session is None:
        return
    session.handle_key((data or {}).get('key'))


@socketio.on('set_autoplay')
def handle_set_autoplay(data):
    """
    Switch between keyboard and autoplay during a game.

    Expected data:
        - enabled: bool
    """
    if session is None:
        return
    enabled = bool((data or {}).get('enabled', False))
    session.set_player(create_player('autoplay' if enabled else 'human'))
    emit('autoplay_changed', {'enabled': enabled})


@socketio.on('play')
def handle_play(data=None):
    """Start or resume the game loop."""
    if session is None:
        return
    started = session.play()
    emit('playing', {'playing': started})


@socketio.on('pause')
def handle_pause(data=None):
    """Stop the game loop; state is kept."""
    if session is None:
        return
    session.pause()
    emit('playing', {'playing': False})


@socketio.on('step')
def handle_step(data=None):
    """
    Execute one tick by hand (while paused).

    Expected data:
        - key: optional key to apply before the tick
    """
    if session is None:
        return
    key = (data or {}).get('key')
    if key is not None:
        session.handle_key(key)
    snapshot = session.tick()
    emit('game_update', build_update(session, snapshot))
    for event in snapshot.events:
        if event in SOUNDS:
            emit('sound', {'name': SOUNDS[event]})


@socketio.on('reset_game')
def handle_reset_game(data=None):
    """Stop the loop and start a new game."""
    if session is None:
        return
    session.reset()
    emit('playing', {'playing': False})
    emit('game_update', session.get_state())


@socketio.on('set_debug_settings')
def handle_set_debug_settings(data=None):
    """
    Update debug overlay settings.

    Expected data:
        - path: bool (planned path to the food)
        - distance: bool (Manhattan distance and axis corners)
    """
    data = data or {}
    if 'path' in data:
        debug_settings['path'] = bool(data['path'])
    if 'distance' in data:
        debug_settings['distance'] = bool(data['distance'])


def run(host: str = HOST, port: int = PORT, debug: bool = False):
    logger.info(f"Starting snake server on http://{host}:{port}")
    socketio.run(app, host=host, port=port, debug=debug, use_reloader=False,
                 log_output=False, allow_unsafe_werkzeug=True)


if __name__ == '__main__':
    run()
