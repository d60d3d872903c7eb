"""
Game state for Tic-Tac-Toe: an append-only history of board snapshots and a
cursor into it.

Two transitions change a session: apply_move (truncate the future, append, move
the cursor to the end) and jump (move the cursor only). Turn, winner and status
are always computed from (history, cursor) and never stored.
"""
from dataclasses import dataclass, field

from app.projects.tic_tac_toe.core.constants import (
    BOARD_SIZE,
    CELL_COUNT,
    EMPTY,
    GAME_START_TEXT,
    MOVE_TEXT,
)
from app.projects.tic_tac_toe.core.win_evaluator import (
    GameStatus,
    WinResult,
    evaluate,
    game_status,
    next_player,
)


class GameError(Exception):
    """Base class for rejected game transitions."""


class IllegalMove(GameError):
    """Move onto an occupied cell, outside the board, or after a win."""


class OutOfRange(GameError):
    """Jump target outside the recorded history."""


def index_to_location(index: int) -> tuple[int, int]:
    """Board index (0-8) to a 1-based (row, col) pair."""
    return index // BOARD_SIZE + 1, index % BOARD_SIZE + 1


@dataclass(frozen=True)
class Snapshot:
    """One board configuration plus the 1-based location of the move that made it."""
    board: tuple
    location: tuple[int, int] | None = None

    @classmethod
    def initial(cls) -> "Snapshot":
        return cls(board=(EMPTY,) * CELL_COUNT, location=None)


@dataclass(frozen=True)
class MoveEntry:
    """A row of the move list."""
    move: int
    description: str
    location: tuple[int, int] | None
    is_current: bool


@dataclass
class GameSession:
    history: list[Snapshot] = field(default_factory=lambda: [Snapshot.initial()])
    cursor: int = 0
    ascending: bool = True

    # --- Reads ---

    def current_snapshot(self) -> Snapshot:
        return self.history[self.cursor]

    @property
    def current_player(self) -> str:
        return next_player(self.cursor)

    @property
    def winner(self) -> WinResult | None:
        return evaluate(self.current_snapshot().board)

    @property
    def status(self) -> GameStatus:
        return game_status(self.current_snapshot().board, self.cursor)

    def moves(self) -> list[MoveEntry]:
        """Move list entries in history order."""
        entries = []
        for move, snapshot in enumerate(self.history):
            if move > 0:
                description = MOVE_TEXT.format(move=move)
            else:
                description = GAME_START_TEXT
            entries.append(
                MoveEntry(
                    move=move,
                    description=description,
                    location=snapshot.location,
                    is_current=move == self.cursor,
                )
            )
        return entries

    def ordered_moves(self) -> list[MoveEntry]:
        """Move list entries in the current display order."""
        entries = self.moves()
        if not self.ascending:
            entries.reverse()
        return entries

    # --- Transitions ---

    def apply_move(self, index: int) -> None:
        """
        Place the current player's mark at index.
        Raises IllegalMove if index is off the board, the cell is taken,
        or the current board already has a winner.
        """
        if isinstance(index, bool) or not isinstance(index, int):
            raise IllegalMove(f"Cell index must be an integer, got {index!r}")
        if not 0 <= index < CELL_COUNT:
            raise IllegalMove(f"Cell index {index} is outside 0-{CELL_COUNT - 1}")

        current = self.current_snapshot()
        if current.board[index] is not EMPTY:
            raise IllegalMove(f"Cell {index} is already taken by {current.board[index]}")
        if evaluate(current.board) is not None:
            raise IllegalMove("The game is already won")

        squares = list(current.board)
        squares[index] = self.current_player
        snapshot = Snapshot(board=tuple(squares), location=index_to_location(index))

        self.history = self.history[: self.cursor + 1] + [snapshot]
        self.cursor = len(self.history) - 1

    def jump(self, move_index: int) -> None:
        """Move the cursor to move_index without touching history."""
        if isinstance(move_index, bool) or not isinstance(move_index, int):
            raise OutOfRange(f"Move must be an integer, got {move_index!r}")
        if not 0 <= move_index < len(self.history):
            raise OutOfRange(
                f"Move {move_index} is outside 0-{len(self.history) - 1}"
            )
        self.cursor = move_index

    def toggle_order(self) -> None:
        """Flip the move list display order. History and cursor are untouched."""
        self.ascending = not self.ascending

    # --- Session storage ---

    def to_dict(self) -> dict:
        """JSON-safe form for the Flask session."""
        return {
            "history": [
                {
                    "squares": list(snapshot.board),
                    "location": list(snapshot.location) if snapshot.location else None,
                }
                for snapshot in self.history
            ],
            "cursor": self.cursor,
            "ascending": self.ascending,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "GameSession":
        """
        Rebuild a session from to_dict() output.
        The history is replayed move by move, so anything that could not have
        come from legal play raises ValueError.
        """
        if not isinstance(data, dict):
            raise ValueError("Game data must be a mapping")
        raw_history = data.get("history")
        if not isinstance(raw_history, list) or not raw_history:
            raise ValueError("History must be a non-empty list")

        first = _parse_snapshot(raw_history[0])
        if first != Snapshot.initial():
            raise ValueError("History must start with an empty board")

        session = cls()
        for move, raw in enumerate(raw_history[1:], start=1):
            snapshot = _parse_snapshot(raw)
            if snapshot.location is None:
                raise ValueError(f"Move {move} has no location")
            row, col = snapshot.location
            index = (row - 1) * BOARD_SIZE + (col - 1)
            try:
                session.apply_move(index)
            except IllegalMove as e:
                raise ValueError(f"Move {move} is not legal: {e}") from e
            if session.current_snapshot() != snapshot:
                raise ValueError(f"Move {move} does not match its location")

        cursor = data.get("cursor", 0)
        ascending = data.get("ascending", True)
        if not isinstance(ascending, bool):
            raise ValueError("Display order flag must be a boolean")
        try:
            session.jump(cursor)
        except OutOfRange as e:
            raise ValueError(f"Invalid cursor: {e}") from e
        session.ascending = ascending
        return session


def _parse_snapshot(raw) -> Snapshot:
    if not isinstance(raw, dict):
        raise ValueError("Snapshot must be a mapping")
    squares = raw.get("squares")
    if not isinstance(squares, list) or len(squares) != CELL_COUNT:
        raise ValueError(f"Snapshot must have {CELL_COUNT} squares")
    location = raw.get("location")
    if location is not None:
        if (
            not isinstance(location, list)
            or len(location) != 2
            or not all(
                isinstance(v, int) and not isinstance(v, bool) and 1 <= v <= BOARD_SIZE
                for v in location
            )
        ):
            raise ValueError(f"Invalid location: {location!r}")
        location = tuple(location)
    return Snapshot(board=tuple(squares), location=location)
