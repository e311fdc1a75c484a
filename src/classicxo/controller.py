"""Turn controller owning one game: move application, opponent replies, reset."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple
import logging
import random
import time

from .ai import HeuristicAI
from .game import Cell, GameState, winning_line

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Move:
    player: Cell
    cell: int


class TurnController:
    """Single game session.

    The human always plays X. With ``opponent_enabled`` the scripted
    opponent answers as O inside the same ``apply_move`` call, so control
    returns to X before the call completes. Illegal intents are ignored.
    """

    def __init__(
        self, opponent_enabled: bool = True, rng: Optional[random.Random] = None
    ) -> None:
        self._rng = rng if rng is not None else random.Random()
        self._ai = HeuristicAI(player=Cell.O, rng=self._rng)
        self._opponent_enabled = opponent_enabled
        self._state = GameState()
        self._move_log: List[Move] = []

    # ---- lifecycle ----

    def start(self, seed: Optional[int] = None) -> None:
        """Seed the move RNG (clock-based unless ``seed`` is given) and reset."""
        self._rng.seed(time.time_ns() if seed is None else seed)
        self.reset()

    def reset(self) -> None:
        self._state = GameState()
        self._move_log.clear()
        logger.info("Game reset (opponent %s)", "on" if self._opponent_enabled else "off")

    # ---- read accessors ----

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def cells(self) -> List[Cell]:
        return list(self._state.cells)

    @property
    def current_player(self) -> Cell:
        return self._state.current_player

    @property
    def is_over(self) -> bool:
        return self._state.is_over

    @property
    def winner(self) -> Optional[Cell]:
        return self._state.winner

    @property
    def drawn(self) -> bool:
        return self._state.drawn

    @property
    def move_log(self) -> List[Move]:
        return list(self._move_log)

    @property
    def opponent_enabled(self) -> bool:
        return self._opponent_enabled

    @opponent_enabled.setter
    def opponent_enabled(self, enabled: bool) -> None:
        self._opponent_enabled = bool(enabled)
        # Switching the opponent on during O's turn would leave nobody able
        # to move, so it answers right away.
        if self._opponent_enabled and self._ai_to_move():
            self._play_opponent()

    # ---- moves ----

    def playable_cells(self) -> List[int]:
        """Cell indexes a human click may target right now."""
        state = self._state
        if state.is_over:
            return []
        if self._opponent_enabled and state.current_player is not Cell.X:
            return []
        return state.empty_cells()

    def apply_move(self, cell_index: int) -> bool:
        """Place the current player's mark; ``False`` means the intent was ignored."""
        if cell_index not in self.playable_cells():
            logger.debug("Ignoring move at %r", cell_index)
            return False

        self._place(cell_index)
        if self._state.is_over:
            return True

        if self._opponent_enabled:
            self._state.current_player = Cell.O
            self._play_opponent()
        else:
            self._state.current_player = self._state.current_player.opponent
        return True

    def winning_line(self) -> Optional[Tuple[int, int, int]]:
        return winning_line(self._state)

    def status_text(self) -> str:
        """Status line shown above the board."""
        state = self._state
        if not state.is_over:
            return f"Turn: {self._player_name(state.current_player)}"
        if state.winner is None:
            return "Result: Draw"
        return f"Winner: {self._player_name(state.winner)}"

    # ---- helpers ----

    def _player_name(self, player: Cell) -> str:
        if player is Cell.X:
            return "Player 1 (X)"
        return "AI (O)" if self._opponent_enabled else "Player 2 (O)"

    def _ai_to_move(self) -> bool:
        return not self._state.is_over and self._state.current_player is self._ai.player

    def _place(self, cell_index: int) -> None:
        player = self._state.current_player
        self._state.cells[cell_index] = player
        self._move_log.append(Move(player=player, cell=cell_index))
        self._state.refresh()
        logger.debug("%s -> %d", player.value, cell_index)
        if self._state.is_over:
            if self._state.winner is None:
                logger.info("Game drawn")
            else:
                logger.info("%s wins", self._state.winner.value)

    def _play_opponent(self) -> None:
        move = self._ai.choose(self._state)
        if move is not None:
            self._place(move)
        if not self._state.is_over:
            self._state.current_player = Cell.X
