# tests/conftest.py
import copy
import random
import sys
from pathlib import Path

import pytest

# Add project root to sys.path so "app", "config" and "sudoku_tiles" can be imported in tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

SOLVED = [
    [5, 3, 4, 6, 7, 8, 9, 1, 2],
    [6, 7, 2, 1, 9, 5, 3, 4, 8],
    [1, 9, 8, 3, 4, 2, 5, 6, 7],
    [8, 5, 9, 7, 6, 1, 4, 2, 3],
    [4, 2, 6, 8, 5, 3, 7, 9, 1],
    [7, 1, 3, 9, 2, 4, 8, 5, 6],
    [9, 6, 1, 5, 3, 7, 2, 8, 4],
    [2, 8, 7, 4, 1, 9, 6, 3, 5],
    [3, 4, 5, 2, 8, 6, 1, 7, 9],
]


def puzzle_with_holes(*cells):
    """Copy of SOLVED with the given (row, col) cells blanked."""
    puzzle = copy.deepcopy(SOLVED)
    for row, col in cells:
        puzzle[row][col] = None
    return puzzle


@pytest.fixture
def solved():
    return copy.deepcopy(SOLVED)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def client(tmp_path):
    import app as app_module

    app_module.app.config.update(TESTING=True, RANDOM_SEED=99, LOG_FILE=str(tmp_path / 'app.log'))
    app_module._rng = None
    with app_module.app.test_client() as c:
        yield c
    app_module._rng = None
