# sudoku_tiles/sudoku.py
import random
import copy
import logging

logger = logging.getLogger(__name__)

DIFFICULTY_LEVELS = {
    'easy': 40,
    'medium': 30,
    'hard': 20,
}

TOTAL_CELLS = 81


def empty_board():
    return [[None] * 9 for _ in range(9)]


def generate_sudoku(difficulty='medium', rng=None):
    """
    Generate a puzzle for one of the difficulty presets.
    Returns a tuple of (puzzle, solution)
    """
    if difficulty not in DIFFICULTY_LEVELS:
        raise ValueError(f"Unknown difficulty: {difficulty!r}")
    return generate_puzzle(DIFFICULTY_LEVELS[difficulty], rng)


def generate_puzzle(num_cells_to_show, rng=None):
    """
    Generate a puzzle showing exactly num_cells_to_show cells.
    Returns a tuple of (puzzle, solution); empty cells are None.
    """
    if not 0 <= num_cells_to_show <= TOTAL_CELLS:
        raise ValueError(f"num_cells_to_show must be in [0, 81], got {num_cells_to_show}")
    rng = rng or random

    # Create a solved Sudoku board
    solution = empty_board()
    solve_sudoku(solution, rng)

    # Create a copy for the puzzle
    puzzle = copy.deepcopy(solution)

    cells_to_hide = TOTAL_CELLS - num_cells_to_show
    hidden = 0
    while hidden < cells_to_hide:
        row, col = rng.randint(0, 8), rng.randint(0, 8)

        # Already blank, pick again
        if puzzle[row][col] is None:
            continue

        puzzle[row][col] = None
        hidden += 1

    logger.debug("Generated puzzle with %d of %d cells shown", num_cells_to_show, TOTAL_CELLS)
    return puzzle, solution


def hidden_values(puzzle, solution):
    """
    Solution values of every cell left blank in the puzzle, row-major.
    """
    return [solution[i][j] for i in range(9) for j in range(9) if puzzle[i][j] is None]


def solve_sudoku(board, rng=None):
    """
    Solve the Sudoku board in place using backtracking.
    Returns True if solved, False if the board has no solution.
    """
    rng = rng or random
    empty = find_empty(board)
    if not empty:
        return True

    row, col = empty

    # Try numbers in random order for more variety
    numbers = list(range(1, 10))
    rng.shuffle(numbers)

    for num in numbers:
        if is_valid_move(board, num, row, col):
            board[row][col] = num

            if solve_sudoku(board, rng):
                return True

            board[row][col] = None

    logger.debug("No candidate fits (%d, %d), backtracking", row, col)
    return False


def find_empty(board):
    """
    Find an empty cell in the board.
    Returns (row, col) or None if no empty cells.
    """
    for i in range(9):
        for j in range(9):
            if board[i][j] is None:
                return i, j
    return None


def is_valid_move(board, num, row, col):
    """
    Check if placing num at (row, col) breaks no row, column or box rule.
    """
    # Check row
    for i in range(9):
        if board[row][i] == num:
            return False

    # Check column
    for i in range(9):
        if board[i][col] == num:
            return False

    # Check 3x3 box
    start_row, start_col = 3 * (row // 3), 3 * (col // 3)
    for i in range(start_row, start_row + 3):
        for j in range(start_col, start_col + 3):
            if board[i][j] == num:
                return False

    return True


def is_solved_grid(board):
    """
    True when every row, column and box holds 1-9 exactly once.
    """
    digits = set(range(1, 10))
    for i in range(9):
        if set(board[i]) != digits:
            return False
        if {board[r][i] for r in range(9)} != digits:
            return False
    for box_row in range(3):
        for box_col in range(3):
            box = {board[3 * box_row + r][3 * box_col + c] for r in range(3) for c in range(3)}
            if box != digits:
                return False
    return True
