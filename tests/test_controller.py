"""Tests for the ClassicXO turn controller."""

import random

from classicxo.controller import Move, TurnController
from classicxo.game import Cell


def _marks(controller):
    return sum(1 for c in controller.cells if c is not Cell.EMPTY)


def test_start_resets_to_initial_state():
    controller = TurnController(opponent_enabled=False)
    controller.start(seed=1)
    assert controller.cells == [Cell.EMPTY] * 9
    assert controller.current_player is Cell.X
    assert controller.is_over is False
    assert controller.winner is None
    assert controller.move_log == []


def test_reset_is_idempotent():
    controller = TurnController(opponent_enabled=False)
    controller.start(seed=1)
    controller.apply_move(0)
    controller.apply_move(4)

    controller.reset()
    once = controller.state.copy()
    controller.reset()
    assert controller.state == once
    assert controller.move_log == []


def test_two_player_top_row_win():
    controller = TurnController(opponent_enabled=False)
    controller.start(seed=1)
    for cell in (0, 4, 1, 5, 2):
        assert controller.apply_move(cell) is True

    assert controller.winner is Cell.X
    assert controller.is_over is True
    assert controller.winning_line() == (0, 1, 2)
    assert controller.status_text() == "Winner: Player 1 (X)"


def test_two_player_turns_alternate():
    controller = TurnController(opponent_enabled=False)
    controller.start(seed=1)
    controller.apply_move(0)
    assert controller.current_player is Cell.O
    assert controller.status_text() == "Turn: Player 2 (O)"
    controller.apply_move(1)
    assert controller.current_player is Cell.X
    assert controller.cells[:2] == [Cell.X, Cell.O]


def test_full_board_draw():
    controller = TurnController(opponent_enabled=False)
    controller.start(seed=1)
    for cell in (0, 1, 2, 4, 3, 5, 7, 6, 8):
        assert controller.apply_move(cell) is True

    assert controller.is_over is True
    assert controller.winner is None
    assert controller.drawn is True
    assert controller.status_text() == "Result: Draw"


def test_opponent_replies_within_same_call():
    controller = TurnController(opponent_enabled=True)
    controller.start(seed=5)
    assert controller.apply_move(0) is True

    assert _marks(controller) == 2
    assert controller.cells[0] is Cell.X
    assert controller.cells.count(Cell.O) == 1
    assert not controller.is_over
    assert controller.current_player is Cell.X
    assert [m.player for m in controller.move_log] == [Cell.X, Cell.O]


def test_opponent_prefers_win_over_block():
    controller = TurnController(opponent_enabled=True, rng=random.Random(0))
    controller.start(seed=0)
    controller.state.cells[:] = [
        Cell.X, Cell.X, Cell.EMPTY,
        Cell.O, Cell.O, Cell.EMPTY,
        Cell.X, Cell.EMPTY, Cell.EMPTY,
    ]
    # X ignores both threats; O completes its own row.
    controller.apply_move(8)

    assert controller.cells[5] is Cell.O
    assert controller.winner is Cell.O
    assert controller.is_over is True
    assert controller.status_text() == "Winner: AI (O)"


def test_illegal_intents_are_ignored():
    controller = TurnController(opponent_enabled=False)
    controller.start(seed=1)
    controller.apply_move(4)
    before = controller.state.copy()

    assert controller.apply_move(4) is False
    assert controller.apply_move(9) is False
    assert controller.apply_move(-1) is False
    assert controller.state == before


def test_no_moves_after_game_over():
    controller = TurnController(opponent_enabled=False)
    controller.start(seed=1)
    for cell in (0, 4, 1, 5, 2):
        controller.apply_move(cell)
    before = controller.state.copy()

    assert controller.playable_cells() == []
    assert controller.apply_move(8) is False
    assert controller.state == before


def test_playable_cells_gate_opponent_turn():
    controller = TurnController(opponent_enabled=False)
    controller.start(seed=1)
    controller.apply_move(0)
    # O to move in two-player mode
    assert 0 not in controller.playable_cells()
    assert len(controller.playable_cells()) == 8


def test_enabling_opponent_on_o_turn_plays_immediately():
    controller = TurnController(opponent_enabled=False)
    controller.start(seed=3)
    controller.apply_move(4)
    assert controller.current_player is Cell.O

    controller.opponent_enabled = True

    assert _marks(controller) == 2
    assert controller.current_player is Cell.X
    assert controller.status_text() == "Turn: Player 1 (X)"


def test_disabling_opponent_keeps_board():
    controller = TurnController(opponent_enabled=True)
    controller.start(seed=3)
    controller.apply_move(4)
    before = controller.state.copy()

    controller.opponent_enabled = False

    assert controller.state == before
    controller.apply_move(controller.playable_cells()[0])
    assert controller.current_player is Cell.O


def test_same_seed_same_game():
    first = TurnController()
    second = TurnController()
    first.start(seed=11)
    second.start(seed=11)
    for controller in (first, second):
        controller.apply_move(4)
        controller.apply_move(controller.playable_cells()[0])
    assert first.cells == second.cells


def test_move_log_records_each_mark():
    controller = TurnController(opponent_enabled=False)
    controller.start(seed=1)
    controller.apply_move(4)
    controller.apply_move(0)
    assert controller.move_log == [Move(Cell.X, 4), Move(Cell.O, 0)]
