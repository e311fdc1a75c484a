"""Three-step heuristic opponent: win now, block, otherwise play at random."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence
import logging
import random

from .game import Cell, GameState, WINNING_LINES

logger = logging.getLogger(__name__)


def find_immediate_move(cells: Sequence[Cell], mark: Cell) -> Optional[int]:
    """Empty cell completing a line that already holds two of ``mark``.

    Lines are scanned in ``WINNING_LINES`` order and the first match wins.
    """
    for line in WINNING_LINES:
        trio = [cells[i] for i in line]
        if trio.count(mark) == 2 and trio.count(Cell.EMPTY) == 1:
            return line[trio.index(Cell.EMPTY)]
    return None


@dataclass
class HeuristicAI:
    """Scripted opponent used in single-player mode.

    Public surface:
      - HeuristicAI(player=Cell.O, rng=random.Random(seed))
      - choose(state) -> cell index, or None on a full board
    """

    player: Cell = Cell.O
    rng: random.Random = field(default_factory=random.Random, repr=False)

    def choose(self, state: GameState) -> Optional[int]:
        cells = state.cells

        # 1) Take the win
        move = find_immediate_move(cells, self.player)
        if move is not None:
            logger.debug("%s wins at %d", self.player.value, move)
            return move

        # 2) Block the human
        move = find_immediate_move(cells, self.player.opponent)
        if move is not None:
            logger.debug("%s blocks at %d", self.player.value, move)
            return move

        # 3) Anything empty
        empty = state.empty_cells()
        if not empty:
            return None
        move = self.rng.choice(empty)
        logger.debug("%s plays random cell %d", self.player.value, move)
        return move
