"""
Constants for Tic-Tac-Toe: marks, board geometry, winning lines, status text.
"""

EMPTY = None
X = "X"
O = "O"
MARKS = (X, O)

BOARD_SIZE = 3
CELL_COUNT = BOARD_SIZE * BOARD_SIZE

# Enumeration order matters: the first matching line is reported.
WINNING_LINES = (
    # Rows
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    # Columns
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    # Diagonals
    (0, 4, 8),
    (2, 4, 6),
)

STATUS_WINNER = "winner"
STATUS_DRAW = "draw"
STATUS_NEXT = "next"

WINNER_TEXT = "Winner:{mark}"
DRAW_TEXT = "It's a draw!"
NEXT_PLAYER_TEXT = "Next player:{mark}"

GAME_START_TEXT = "Go to game start"
MOVE_TEXT = "Go to move #{move}"
