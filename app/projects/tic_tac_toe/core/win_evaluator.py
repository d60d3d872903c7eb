"""
Win and status evaluation for a single Tic-Tac-Toe board.
All functions here are pure.
"""
from dataclasses import dataclass

from app.projects.tic_tac_toe.core.constants import (
    CELL_COUNT,
    DRAW_TEXT,
    EMPTY,
    MARKS,
    NEXT_PLAYER_TEXT,
    O,
    STATUS_DRAW,
    STATUS_NEXT,
    STATUS_WINNER,
    WINNER_TEXT,
    WINNING_LINES,
    X,
)


@dataclass(frozen=True)
class WinResult:
    """Winning mark and the line of three indexes that produced it."""
    winner: str
    line: tuple[int, int, int]


@dataclass(frozen=True)
class GameStatus:
    kind: str
    mark: str | None
    text: str


def _check_board(board) -> None:
    if len(board) != CELL_COUNT:
        raise ValueError(f"Board must have {CELL_COUNT} cells, got {len(board)}")
    for cell in board:
        if cell is not EMPTY and cell not in MARKS:
            raise ValueError(f"Invalid cell value: {cell!r}")


def evaluate(board) -> WinResult | None:
    """
    Return the first winning line (in WINNING_LINES order) on the board,
    or None if no row, column or diagonal is uniformly marked.
    """
    _check_board(board)
    for a, b, c in WINNING_LINES:
        if board[a] is not EMPTY and board[a] == board[b] == board[c]:
            return WinResult(winner=board[a], line=(a, b, c))
    return None


def is_full(board) -> bool:
    """True when no cell is empty."""
    _check_board(board)
    return all(cell is not EMPTY for cell in board)


def next_player(move_number: int) -> str:
    """X moves on even move numbers, O on odd ones."""
    return X if move_number % 2 == 0 else O


def game_status(board, move_number: int) -> GameStatus:
    """
    Derive the status line for a board reached after move_number moves.
    Winner beats draw; a full board without a winner is a draw.
    """
    result = evaluate(board)
    if result is not None:
        return GameStatus(
            kind=STATUS_WINNER,
            mark=result.winner,
            text=WINNER_TEXT.format(mark=result.winner),
        )
    if is_full(board):
        return GameStatus(kind=STATUS_DRAW, mark=None, text=DRAW_TEXT)
    mark = next_player(move_number)
    return GameStatus(
        kind=STATUS_NEXT,
        mark=mark,
        text=NEXT_PLAYER_TEXT.format(mark=mark),
    )
