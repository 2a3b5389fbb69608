# sudoku_tiles/game.py
"""
Turn engine for the two-player tile game.

A game is a plain dict so it can live in the Flask session as-is:

    {game_id, difficulty, board, puzzle, solution, pool,
     players: [{name, score, hand}, {name, score, hand}],
     current_player, game_over, message, last_move}

Every transition returns a new dict and leaves its input untouched.
Rejected actions (wrong player, filled cell, bad hand index, finished
game) return the input state unchanged instead of raising.
"""
import copy
import logging
import random

from .sudoku import generate_sudoku, generate_puzzle, hidden_values
from .validator import is_valid_placement, completed_sections, section_bonus

logger = logging.getLogger(__name__)

HUMAN = 0
COMPUTER = 1
HAND_SIZE = 7
INVALID_PENALTY = 10

SECTION_MESSAGES = {
    'row': " Row complete! +25 bonus points.",
    'column': " Column complete! +25 bonus points.",
    'box': " Box complete! +50 bonus points.",
}


def new_game(difficulty='medium', rng=None, num_cells_to_show=None):
    """
    Generate a puzzle and deal the opening hands.
    num_cells_to_show overrides the difficulty preset when given.
    """
    rng = rng or random
    if num_cells_to_show is None:
        puzzle, solution = generate_sudoku(difficulty, rng)
    else:
        puzzle, solution = generate_puzzle(num_cells_to_show, rng)
        # Not one of the presets
        difficulty = None
    return start_game(puzzle, solution, rng, difficulty)


def start_game(puzzle, solution, rng=None, difficulty=None):
    """
    Build the opening state for an existing puzzle/solution pair.
    The pool is every hidden value, shuffled; each player is dealt
    HAND_SIZE tiles from the front, human first.
    """
    rng = rng or random
    pool = hidden_values(puzzle, solution)
    rng.shuffle(pool)

    player_hand = pool[:HAND_SIZE]
    computer_hand = pool[HAND_SIZE:2 * HAND_SIZE]
    pool = pool[2 * HAND_SIZE:]

    state = {
        'game_id': '%032x' % rng.getrandbits(128),
        'difficulty': difficulty,
        'board': copy.deepcopy(puzzle),
        'puzzle': copy.deepcopy(puzzle),
        'solution': copy.deepcopy(solution),
        'pool': pool,
        'players': [
            {'name': 'You', 'score': 0, 'hand': player_hand},
            {'name': 'Computer', 'score': 0, 'hand': computer_hand},
        ],
        'current_player': HUMAN,
        'game_over': False,
        'message': "Your turn! Select a cell and then a number from your hand.",
        'last_move': None,
    }
    logger.debug("Started game %s with %d tiles in play", state['game_id'], tile_count(state))
    return state


def empty_cells(board):
    return [(i, j) for i in range(9) for j in range(9) if board[i][j] is None]


def count_empty_cells(board):
    return len(empty_cells(board))


def tile_count(state):
    """
    Tiles in the pool, in both hands and placed on the board since the
    start. Constant for the whole game.
    """
    placed = sum(1 for i, j in empty_cells(state['puzzle']) if state['board'][i][j] is not None)
    held = sum(len(p['hand']) for p in state['players'])
    return len(state['pool']) + held + placed


def should_game_end(board, players, pool):
    # Game ends when the board is full
    if count_empty_cells(board) == 0:
        return True

    # ... or when nobody has a tile left to play
    return all(len(p['hand']) == 0 for p in players) and len(pool) == 0


def determine_winner(players):
    you, computer = players[HUMAN], players[COMPUTER]
    if you['score'] > computer['score']:
        return (f"Game Over! You win with {you['score']} points "
                f"vs {computer['name']}'s {computer['score']} points!")
    elif computer['score'] > you['score']:
        return (f"Game Over! {computer['name']} wins with {computer['score']} points "
                f"vs your {you['score']} points!")
    return f"Game Over! It's a tie with {you['score']} points each!"


def turn_prompt(state):
    if state['current_player'] == HUMAN:
        return "Your turn!"
    return f"{state['players'][state['current_player']]['name']}'s turn!"


def move_rejection(state, player, row, col, hand_index):
    """
    Reason a placement may not be attempted, or None if it may.
    """
    if state['game_over']:
        return 'Game is over'
    if player != state['current_player']:
        return 'Not your turn'
    if not (0 <= row < 9 and 0 <= col < 9):
        return 'Cell out of range'
    if state['board'][row][col] is not None:
        return 'Cell already filled'
    if not 0 <= hand_index < len(state['players'][player]['hand']):
        return 'No such tile in hand'
    return None


def apply_move(state, player, row, col, hand_index, rng=None):
    """
    Place tile hand[hand_index] of `player` at (row, col).

    A correct tile scores its face value plus section bonuses. A wrong
    tile costs INVALID_PENALTY and goes back to the pool (which is then
    reshuffled), or to the opponent when the pool is empty. Either way
    the mover then draws one tile if the pool has any.
    """
    reason = move_rejection(state, player, row, col, hand_index)
    if reason:
        logger.debug("Rejected move by player %s at (%s, %s): %s", player, row, col, reason)
        return state

    rng = rng or random
    new_state = copy.deepcopy(state)
    board, pool, players = new_state['board'], new_state['pool'], new_state['players']
    mover, opponent = players[player], players[1 - player]

    tile = mover['hand'].pop(hand_index)
    valid = is_valid_placement(new_state['solution'], row, col, tile)
    sections = []

    if valid:
        board[row][col] = tile
        sections = completed_sections(board, row, col)
        score_change = tile + sum(section_bonus(s) for s in sections)
        message = f"{mover['name']} placed {tile} correctly! +{tile} points."
        for section in sections:
            message += SECTION_MESSAGES[section['type']]
        tile_to = 'board'
    else:
        score_change = -INVALID_PENALTY
        message = f"{mover['name']} made an invalid placement! -{INVALID_PENALTY} points."
        if not pool:
            # Nowhere else for the tile to go
            opponent['hand'].append(tile)
            message += f" Tile given to {'you' if player == COMPUTER else opponent['name']}."
            tile_to = 'opponent'
        else:
            pool.append(tile)
            rng.shuffle(pool)
            logger.debug("Tile %d returned to pool of %d and reshuffled", tile, len(pool))
            message += " Tile returned to pool."
            tile_to = 'pool'

    mover['score'] += score_change

    drew = False
    if pool:
        mover['hand'].append(pool.pop())
        message += f" {mover['name']} drew a new tile."
        drew = True

    new_state['last_move'] = {
        'type': 'place',
        'player': player,
        'row': row,
        'col': col,
        'tile': tile,
        'valid': valid,
        'score_change': score_change,
        'completed_sections': sections,
        'tile_to': tile_to,
        'drew': drew,
        'message': message,
    }
    return _finish_turn(new_state, message)


def apply_human_move(state, row, col, hand_index, rng=None):
    return apply_move(state, HUMAN, row, col, hand_index, rng)


def pass_turn(state):
    """
    End the current player's turn without placing anything. The player
    draws back up towards HAND_SIZE from the front of the pool.
    """
    if state['game_over']:
        return state

    new_state = copy.deepcopy(state)
    current = new_state['current_player']
    player = new_state['players'][current]
    pool = new_state['pool']

    # A hand can sit above HAND_SIZE after receiving an opponent's tile
    to_draw = max(0, min(HAND_SIZE - len(player['hand']), len(pool)))
    message = f"{player['name']} passed."
    if to_draw > 0:
        player['hand'].extend(pool[:to_draw])
        del pool[:to_draw]
        message = f"{player['name']} drew {to_draw} new tiles."

    new_state['last_move'] = {
        'type': 'pass',
        'player': current,
        'drawn': to_draw,
        'message': message,
    }
    return _finish_turn(new_state, message)


def choose_computer_move(state, rng=None):
    """
    Pick the computer's move: a random correct placement if one exists,
    otherwise a random guess. None means there is nothing to place.
    """
    rng = rng or random
    hand = state['players'][COMPUTER]['hand']
    cells = empty_cells(state['board'])
    if not cells or not hand:
        return None

    valid_moves = [
        {'row': r, 'col': c, 'hand_index': i, 'tile': tile}
        for r, c in cells
        for i, tile in enumerate(hand)
        if is_valid_placement(state['solution'], r, c, tile)
    ]
    if valid_moves:
        return rng.choice(valid_moves)

    row, col = rng.choice(cells)
    hand_index = rng.randrange(len(hand))
    return {'row': row, 'col': col, 'hand_index': hand_index, 'tile': hand[hand_index]}


def apply_computer_move(state, rng=None):
    if state['game_over'] or state['current_player'] != COMPUTER:
        return state

    move = choose_computer_move(state, rng)
    if move is None:
        return pass_turn(state)
    return apply_move(state, COMPUTER, move['row'], move['col'], move['hand_index'], rng)


def _finish_turn(state, message):
    players = state['players']
    if should_game_end(state['board'], players, state['pool']):
        state['game_over'] = True
        state['message'] = determine_winner(players)
        logger.info("Game %s over: %s", state['game_id'], state['message'])
    else:
        state['current_player'] = 1 - state['current_player']
        state['message'] = f"{message} {turn_prompt(state)}"
    return state
