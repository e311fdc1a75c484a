"""ClassicXO package exposing game rules, the scripted opponent, and the web application."""

from .ai import HeuristicAI
from .controller import TurnController
from .game import Cell, GameState, check_draw, check_winner
from .ui import app

__all__ = [
    "Cell",
    "GameState",
    "HeuristicAI",
    "TurnController",
    "app",
    "check_draw",
    "check_winner",
]
