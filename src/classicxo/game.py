"""Board state and rule evaluation for classic 3x3 tic-tac-toe."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple


class Cell(str, Enum):
    EMPTY = " "
    X = "X"
    O = "O"

    @property
    def label(self) -> str:
        """Text shown on the board button for this cell."""
        return "" if self is Cell.EMPTY else self.value

    @property
    def opponent(self) -> "Cell":
        if self is Cell.X:
            return Cell.O
        if self is Cell.O:
            return Cell.X
        raise ValueError("EMPTY has no opponent")


# Rows, then columns, then diagonals. Scan order doubles as the tie-break.
WINNING_LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)

BOARD_CELLS = 9


def _empty_board() -> List[Cell]:
    return [Cell.EMPTY] * BOARD_CELLS


@dataclass
class GameState:
    cells: List[Cell] = field(default_factory=_empty_board)
    current_player: Cell = Cell.X
    is_over: bool = False
    winner: Optional[Cell] = None

    @property
    def drawn(self) -> bool:
        return self.is_over and self.winner is None

    def empty_cells(self) -> List[int]:
        return [i for i, c in enumerate(self.cells) if c is Cell.EMPTY]

    def is_full(self) -> bool:
        return all(c is not Cell.EMPTY for c in self.cells)

    def refresh(self) -> None:
        """Recompute ``winner`` and ``is_over`` from the cells."""
        self.winner = check_winner(self)
        self.is_over = self.winner is not None or self.is_full()

    def copy(self) -> "GameState":
        return GameState(
            cells=self.cells.copy(),
            current_player=self.current_player,
            is_over=self.is_over,
            winner=self.winner,
        )


# ---------- Rule evaluation ----------


def _cells_of(board: GameState | Sequence[Cell]) -> Sequence[Cell]:
    return board.cells if isinstance(board, GameState) else board


def winning_line(board: GameState | Sequence[Cell]) -> Optional[Tuple[int, int, int]]:
    """First completed line in scan order, or ``None``."""
    cells = _cells_of(board)
    for line in WINNING_LINES:
        a, b, c = line
        v = cells[a]
        if v is not Cell.EMPTY and v == cells[b] == cells[c]:
            return line
    return None


def check_winner(board: GameState | Sequence[Cell]) -> Optional[Cell]:
    line = winning_line(board)
    if line is None:
        return None
    return _cells_of(board)[line[0]]


def check_draw(board: GameState | Sequence[Cell]) -> bool:
    if check_winner(board) is not None:
        return False
    return all(c is not Cell.EMPTY for c in _cells_of(board))
