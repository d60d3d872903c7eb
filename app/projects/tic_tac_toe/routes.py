"""
Tic-Tac-Toe - play in the browser, step back through the move history.
Game state lives in the Flask session; nothing is stored server-side.
"""
import logging

from flask import Blueprint, jsonify, redirect, render_template, request, session, url_for

from app import csrf
from app.projects.tic_tac_toe.core.constants import BOARD_SIZE, STATUS_NEXT
from app.projects.tic_tac_toe.core.game_state import (
    GameSession,
    IllegalMove,
    OutOfRange,
)
from app.utils.logging import log_project_event, log_project_visit

logger = logging.getLogger(__name__)

SESSION_KEY = "tic_tac_toe"

tic_tac_toe_bp = Blueprint('tic_tac_toe', __name__,
                           template_folder='templates')


def _load_game() -> GameSession:
    """Game for this browser session; a fresh one if missing or unreadable."""
    data = session.get(SESSION_KEY)
    if data is None:
        return GameSession()
    try:
        return GameSession.from_dict(data)
    except ValueError as e:
        logger.warning(f"Discarding invalid tic-tac-toe session data: {e}")
        session.pop(SESSION_KEY, None)
        return GameSession()


def _save_game(game: GameSession) -> None:
    session[SESSION_KEY] = game.to_dict()


def _game_json(game: GameSession) -> dict:
    snapshot = game.current_snapshot()
    status = game.status
    result = game.winner
    return {
        "squares": list(snapshot.board),
        "location": list(snapshot.location) if snapshot.location else None,
        "cursor": game.cursor,
        "history_length": len(game.history),
        "status": status.text,
        "winner": result.winner if result else None,
        "winning_line": list(result.line) if result else None,
        "next_player": status.mark if status.kind == STATUS_NEXT else None,
        "ascending": game.ascending,
        "moves": [
            {
                "move": entry.move,
                "description": entry.description,
                "location": list(entry.location) if entry.location else None,
                "is_current": entry.is_current,
            }
            for entry in game.ordered_moves()
        ],
    }


@tic_tac_toe_bp.route('/')
def index():
    """Display the board, status line and move list"""
    log_project_visit('tic_tac_toe', 'Tic-Tac-Toe')
    game = _load_game()
    result = game.winner
    return render_template(
        'tic_tac_toe.html',
        game=game,
        squares=game.current_snapshot().board,
        status=game.status,
        winning_line=result.line if result else (),
        moves=game.ordered_moves(),
        board_size=BOARD_SIZE,
    )


@tic_tac_toe_bp.route('/play/<int:index>', methods=['POST'])
def play(index):
    """Play the current player's mark; illegal moves are ignored"""
    game = _load_game()
    try:
        game.apply_move(index)
    except IllegalMove as e:
        logger.debug(f"Ignored move at {index}: {e}")
    else:
        _save_game(game)
        status = game.status
        if status.kind != STATUS_NEXT:
            log_project_event('tic_tac_toe', 'Game Over', f"Game ended: {status.text}")
    return redirect(url_for('tic_tac_toe.index'))


@tic_tac_toe_bp.route('/jump/<int:move>', methods=['POST'])
def jump(move):
    """Show an earlier (or later) board from the history"""
    game = _load_game()
    try:
        game.jump(move)
    except OutOfRange as e:
        logger.debug(f"Ignored jump to {move}: {e}")
    else:
        _save_game(game)
    return redirect(url_for('tic_tac_toe.index'))


@tic_tac_toe_bp.route('/toggle-order', methods=['POST'])
def toggle_order():
    """Reverse the move list display order"""
    game = _load_game()
    game.toggle_order()
    _save_game(game)
    return redirect(url_for('tic_tac_toe.index'))


@tic_tac_toe_bp.route('/new', methods=['POST'])
def new_game():
    """Throw away the current game and start over"""
    session.pop(SESSION_KEY, None)
    log_project_event('tic_tac_toe', 'New Game', "Started a new game")
    return redirect(url_for('tic_tac_toe.index'))


# --- JSON API ---

def _int_field(name):
    """Read an integer field from the JSON body; None if missing or not an int."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return None
    value = data.get(name)
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


@tic_tac_toe_bp.route('/api/state', methods=['GET'])
def api_state():
    """Current game as JSON"""
    return jsonify(_game_json(_load_game()))


@tic_tac_toe_bp.route('/api/play', methods=['POST'])
@csrf.exempt
def api_play():
    """Apply a move. Body: {"index": 0-8}"""
    index = _int_field("index")
    game = _load_game()
    if index is None:
        return jsonify({"error": "Body must be JSON with an integer 'index'"}), 400
    try:
        game.apply_move(index)
    except IllegalMove as e:
        return jsonify({"error": str(e), "state": _game_json(game)}), 409
    _save_game(game)
    return jsonify(_game_json(game))


@tic_tac_toe_bp.route('/api/jump', methods=['POST'])
@csrf.exempt
def api_jump():
    """Move the cursor. Body: {"move": n}"""
    move = _int_field("move")
    game = _load_game()
    if move is None:
        return jsonify({"error": "Body must be JSON with an integer 'move'"}), 400
    try:
        game.jump(move)
    except OutOfRange as e:
        return jsonify({"error": str(e), "state": _game_json(game)}), 400
    _save_game(game)
    return jsonify(_game_json(game))
