from flask import Flask, request, session, jsonify
import os, random, logging
from logging.handlers import RotatingFileHandler

from sudoku_tiles import (DIFFICULTY_LEVELS, HUMAN, COMPUTER, new_game, apply_human_move,
                          apply_computer_move, pass_turn, move_rejection)
from config import Config

app = Flask(__name__)
app.config.from_object(Config)

_rng = None


# Configure logging
def setup_logging():
    level = getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)
    logging.basicConfig(level=level)
    handler = RotatingFileHandler(app.config['LOG_FILE'],
                                  maxBytes=app.config.get('LOG_MAX_BYTES', 10000),
                                  backupCount=app.config.get('LOG_BACKUP_COUNT', 3))
    handler.setLevel(level)
    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    handler.setFormatter(formatter)
    app.logger.addHandler(handler)
    # Engine modules log under sudoku_tiles.*
    logging.getLogger('sudoku_tiles').addHandler(handler)


def get_rng():
    """Process-wide random source, seeded from RANDOM_SEED when set."""
    global _rng
    if _rng is None:
        _rng = random.Random(app.config.get('RANDOM_SEED'))
    return _rng


def public_state(state):
    """Game state as the client may see it: no solution, no computer tiles."""
    players = state['players']
    data = {
        'game_id': state['game_id'],
        'difficulty': state['difficulty'],
        'board': state['board'],
        'pool_size': len(state['pool']),
        'players': [
            {'name': players[HUMAN]['name'], 'score': players[HUMAN]['score'],
             'hand': players[HUMAN]['hand']},
            {'name': players[COMPUTER]['name'], 'score': players[COMPUTER]['score'],
             'hand_size': len(players[COMPUTER]['hand'])},
        ],
        'current_player': state['current_player'],
        'game_over': state['game_over'],
        'message': state['message'],
        'last_move': state['last_move'],
    }
    if not state['game_over'] and state['current_player'] == COMPUTER:
        data['computer_delay_ms'] = {
            'think': app.config.get('COMPUTER_THINK_MS', 1500),
            'place': app.config.get('COMPUTER_PLACE_MS', 1000),
        }
    return data


def current_game():
    return session.get('game')


def save_game(state):
    # Replace the whole game at once
    session['game'] = state
    return jsonify(public_state(state))


def request_data():
    return request.get_json(silent=True) or {}


@app.route('/api/difficulties')
def api_difficulties():
    return jsonify({'levels': DIFFICULTY_LEVELS, 'default': app.config.get('DEFAULT_DIFFICULTY', 'medium')})


@app.route('/api/new_game', methods=['POST'])
def api_new_game():
    data = request_data()
    diff = data.get('difficulty') or request.args.get('difficulty') or app.config.get('DEFAULT_DIFFICULTY', 'medium')
    if diff not in DIFFICULTY_LEVELS:
        app.logger.warning(f"Rejected new game with difficulty {diff!r}")
        return jsonify({'error': f'Unknown difficulty: {diff}'}), 400

    try:
        state = new_game(diff, get_rng())
    except Exception as e:
        app.logger.error(f"New game error: {e}")
        return jsonify({'error': 'Failed to generate puzzle'}), 500

    app.logger.info(f"New game {state['game_id']} with difficulty {diff}, {len(state['pool'])} tiles in pool")
    return save_game(state)


@app.route('/api/state')
def api_state():
    state = current_game()
    if not state:
        return jsonify({'error': 'No active game'}), 404
    return jsonify(public_state(state))


@app.route('/api/move', methods=['POST'])
def api_move():
    state = current_game()
    if not state:
        return jsonify({'error': 'No active game'}), 404

    data = request_data()
    try:
        row, col, hand_index = int(data['row']), int(data['col']), int(data['hand_index'])
    except (KeyError, TypeError, ValueError):
        return jsonify({'error': 'row, col and hand_index must be integers'}), 400

    reason = move_rejection(state, HUMAN, row, col, hand_index)
    if reason:
        app.logger.warning(f"Rejected move in game {state['game_id']} at ({row}, {col}): {reason}")
        return jsonify({'error': reason}), 400

    state = apply_human_move(state, row, col, hand_index, get_rng())
    app.logger.info(f"Game {state['game_id']}: {state['last_move']['message']}")
    return save_game(state)


@app.route('/api/computer_move', methods=['POST'])
def api_computer_move():
    state = current_game()
    if not state:
        return jsonify({'error': 'No active game'}), 404

    # A timer scheduled against an earlier game must not touch this one
    game_id = request_data().get('game_id')
    if not game_id:
        return jsonify({'error': 'game_id is required'}), 400
    if game_id != state['game_id']:
        app.logger.warning(f"Stale computer move for game {game_id}, current is {state['game_id']}")
        return jsonify({'error': 'Game has been reset'}), 409

    if state['game_over']:
        return jsonify({'error': 'Game is over'}), 400
    if state['current_player'] != COMPUTER:
        return jsonify({'error': "Not the computer's turn"}), 400

    state = apply_computer_move(state, get_rng())
    app.logger.info(f"Game {state['game_id']}: {state['last_move']['message']}")
    return save_game(state)


@app.route('/api/pass', methods=['POST'])
def api_pass():
    state = current_game()
    if not state:
        return jsonify({'error': 'No active game'}), 404
    if state['game_over']:
        return jsonify({'error': 'Game is over'}), 400
    if state['current_player'] != HUMAN:
        return jsonify({'error': 'Not your turn'}), 400
    if state['players'][HUMAN]['hand'] and any(None in row for row in state['board']):
        return jsonify({'error': 'You still have tiles to play'}), 400

    state = pass_turn(state)
    app.logger.info(f"Game {state['game_id']}: {state['last_move']['message']}")
    return save_game(state)


@app.errorhandler(404)
def not_found(error):
    app.logger.warning(f"404 error: {error}")
    return jsonify({'error': 'Not found'}), 404


@app.errorhandler(500)
def internal_error(error):
    app.logger.error(f"500 error: {error}")
    return jsonify({'error': 'Internal server error'}), 500


if __name__ == '__main__':
    setup_logging()
    app.logger.info("Starting Sudoku Tiles application...")
    app.run(debug=app.config.get('DEBUG', False), host='0.0.0.0', port=int(os.environ.get('PORT', 5000)))
