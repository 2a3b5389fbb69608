# sudoku_tiles/__init__.py
from .sudoku import DIFFICULTY_LEVELS, generate_sudoku, generate_puzzle, solve_sudoku, is_valid_move
from .validator import is_valid_placement, is_row_complete, is_column_complete, is_box_complete
from .game import (HUMAN, COMPUTER, new_game, apply_move, apply_human_move, apply_computer_move,
                   pass_turn, move_rejection)

__all__ = ['DIFFICULTY_LEVELS', 'generate_sudoku', 'generate_puzzle', 'solve_sudoku', 'is_valid_move',
           'is_valid_placement', 'is_row_complete', 'is_column_complete', 'is_box_complete',
           'HUMAN', 'COMPUTER', 'new_game', 'apply_move', 'apply_human_move', 'apply_computer_move',
           'pass_turn', 'move_rejection']
