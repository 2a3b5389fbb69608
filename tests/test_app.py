# tests/test_app.py
from sudoku_tiles.game import COMPUTER, HUMAN


def _session_game(client):
    with client.session_transaction() as sess:
        return sess['game']


def test_difficulties(client):
    data = client.get('/api/difficulties').get_json()
    assert data['levels'] == {'easy': 40, 'medium': 30, 'hard': 20}
    assert data['default'] == 'medium'


def test_state_without_game(client):
    res = client.get('/api/state')
    assert res.status_code == 404
    assert res.get_json() == {'error': 'No active game'}


def test_new_game_hides_solution_and_computer_tiles(client):
    res = client.post('/api/new_game', json={'difficulty': 'easy'})
    assert res.status_code == 200
    data = res.get_json()
    assert 'solution' not in data
    assert 'hand' not in data['players'][COMPUTER]
    assert data['players'][COMPUTER]['hand_size'] == 7
    assert len(data['players'][HUMAN]['hand']) == 7
    assert data['pool_size'] == 41 - 14
    assert sum(cell is not None for row in data['board'] for cell in row) == 40
    assert data['current_player'] == HUMAN

    assert client.get('/api/state').get_json() == data


def test_new_game_rejects_unknown_difficulty(client):
    res = client.post('/api/new_game', json={'difficulty': 'extreme'})
    assert res.status_code == 400


def test_move_validation(client):
    client.post('/api/new_game', json={'difficulty': 'medium'})
    game = _session_game(client)
    filled = next((r, c) for r in range(9) for c in range(9) if game['board'][r][c] is not None)

    res = client.post('/api/move', json={'row': 'x', 'col': 0, 'hand_index': 0})
    assert res.status_code == 400

    res = client.post('/api/move', json={'row': filled[0], 'col': filled[1], 'hand_index': 0})
    assert res.status_code == 400
    assert res.get_json()['error'] == 'Cell already filled'

    res = client.post('/api/computer_move', json={'game_id': game['game_id']})
    assert res.status_code == 400
    assert res.get_json()['error'] == "Not the computer's turn"


def test_computer_move_requires_game_id(client):
    client.post('/api/new_game', json={'difficulty': 'medium'})
    res = client.post('/api/computer_move', json={})
    assert res.status_code == 400
    assert res.get_json()['error'] == 'game_id is required'


def test_correct_move_then_computer_turn(client):
    client.post('/api/new_game', json={'difficulty': 'medium'})
    game = _session_game(client)
    tile = game['players'][HUMAN]['hand'][0]
    row, col = next((r, c) for r in range(9) for c in range(9)
                    if game['board'][r][c] is None and game['solution'][r][c] == tile)

    res = client.post('/api/move', json={'row': row, 'col': col, 'hand_index': 0})
    data = res.get_json()
    assert res.status_code == 200
    assert data['board'][row][col] == tile
    assert data['players'][HUMAN]['score'] >= tile
    assert data['current_player'] == COMPUTER
    assert data['computer_delay_ms'] == {'think': 1500, 'place': 1000}

    res = client.post('/api/move', json={'row': row, 'col': col, 'hand_index': 0})
    assert res.get_json()['error'] == 'Not your turn'

    res = client.post('/api/computer_move', json={'game_id': data['game_id']})
    data = res.get_json()
    assert res.status_code == 200
    assert data['last_move']['player'] == COMPUTER
    assert data['current_player'] == HUMAN


def test_stale_computer_move_is_rejected(client):
    client.post('/api/new_game', json={'difficulty': 'hard'})
    old_id = _session_game(client)['game_id']
    client.post('/api/new_game', json={'difficulty': 'hard'})

    res = client.post('/api/computer_move', json={'game_id': old_id})
    assert res.status_code == 409


def test_pass_requires_empty_hand(client):
    client.post('/api/new_game', json={'difficulty': 'easy'})
    res = client.post('/api/pass')
    assert res.status_code == 400
    assert res.get_json()['error'] == 'You still have tiles to play'

    with client.session_transaction() as sess:
        game = sess['game']
        game['pool'].extend(game['players'][HUMAN]['hand'])
        game['players'][HUMAN]['hand'] = []
        sess['game'] = game

    res = client.post('/api/pass')
    assert res.status_code == 200
    data = res.get_json()
    assert len(data['players'][HUMAN]['hand']) == 7
    assert data['current_player'] == COMPUTER


def test_unknown_route_returns_json(client):
    res = client.get('/nope')
    assert res.status_code == 404
    assert res.get_json() == {'error': 'Not found'}


def test_random_seed_seeds_process_wide_source(client):
    import app as app_module

    first = client.post('/api/new_game', json={'difficulty': 'easy'}).get_json()
    second = client.post('/api/new_game', json={'difficulty': 'easy'}).get_json()
    # One source for the process: consecutive games differ
    assert first['board'] != second['board']

    app_module._rng = None
    replay = client.post('/api/new_game', json={'difficulty': 'easy'}).get_json()
    assert replay['board'] == first['board']
    assert replay['game_id'] == first['game_id']
