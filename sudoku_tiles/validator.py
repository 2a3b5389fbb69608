# sudoku_tiles/validator.py

ROW_BONUS = 25
COLUMN_BONUS = 25
BOX_BONUS = 50


def is_valid_placement(solution, row, col, num):
    """Check a tile against the answer grid."""
    return solution[row][col] == num


def is_row_complete(board, row):
    """Check if a row is complete (all cells filled)."""
    return all(cell is not None for cell in board[row])


def is_column_complete(board, col):
    """Check if a column is complete (all cells filled)."""
    for row in range(9):
        if board[row][col] is None:
            return False
    return True


def is_box_complete(board, box_row, box_col):
    """Check if the 3x3 box at (box_row, box_col) is complete."""
    for row in range(3):
        for col in range(3):
            if board[box_row * 3 + row][box_col * 3 + col] is None:
                return False
    return True


def completed_sections(board, row, col):
    """
    Sections through (row, col) that are full on the given board.

    Only the row, column and box containing the cell are checked, so a
    placement never reports sections it did not touch.
    """
    sections = []

    if is_row_complete(board, row):
        sections.append({'type': 'row', 'index': row})

    if is_column_complete(board, col):
        sections.append({'type': 'column', 'index': col})

    box_row, box_col = row // 3, col // 3
    if is_box_complete(board, box_row, box_col):
        sections.append({'type': 'box', 'index': box_row * 3 + box_col,
                         'box_row': box_row, 'box_col': box_col})

    return sections


def section_bonus(section):
    return {'row': ROW_BONUS, 'column': COLUMN_BONUS, 'box': BOX_BONUS}[section['type']]
