"""FastAPI-powered web UI for playing ClassicXO in the browser."""

from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, ConfigDict, Field

from .controller import TurnController
from .game import Cell

logger = logging.getLogger(__name__)


@dataclass
class GameSession:
    """Container for one browser game and the lock serialising its requests."""

    controller: TurnController
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)


SESSIONS: Dict[str, GameSession] = {}
app = FastAPI(title="ClassicXO", description="Tic-tac-toe played in the browser")


class NewGameRequest(BaseModel):
    """Request payload for starting a new game."""

    opponent: bool = Field(
        default=True, description="Let the scripted opponent play O"
    )


class MoveRequest(BaseModel):
    """Request payload for clicking a cell on an existing game."""

    model_config = ConfigDict(populate_by_name=True)

    cell_index: int = Field(alias="cellIndex", ge=0, le=8)


class OpponentRequest(BaseModel):
    enabled: bool


def _create_session(opponent: bool) -> Tuple[str, GameSession]:
    """Create a new game session and register it for later access."""

    controller = TurnController(opponent_enabled=opponent)
    controller.start()
    session = GameSession(controller=controller)
    session_id = uuid.uuid4().hex
    SESSIONS[session_id] = session
    logger.info("Created game %s (opponent %s)", session_id, "on" if opponent else "off")
    return session_id, session


def _get_session(game_id: str) -> GameSession:
    try:
        return SESSIONS[game_id]
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Game not found") from exc


def _serialize_session(game_id: str, session: GameSession) -> Dict[str, object]:
    with session.lock:
        controller = session.controller
        move_log: List[Dict[str, object]] = [
            {"player": move.player.value, "cellIndex": move.cell}
            for move in controller.move_log
        ]
        line = controller.winning_line()
        winner = controller.winner
        state: Dict[str, object] = {
            "id": game_id,
            "cells": [cell.label for cell in controller.cells],
            "currentPlayer": controller.current_player.value,
            "isOver": controller.is_over,
            "winner": winner.value if winner is not None else None,
            "drawn": controller.drawn,
            "opponentEnabled": controller.opponent_enabled,
            "playableCells": controller.playable_cells(),
            "winningLine": list(line) if line is not None else None,
            "status": controller.status_text(),
            "moveLog": move_log,
        }
        if move_log:
            state["lastMove"] = move_log[-1]
        return state


def _apply_player_move(session: GameSession, cell_index: int) -> None:
    with session.lock:
        controller = session.controller
        if controller.is_over:
            raise HTTPException(status_code=400, detail="Game already finished")

        if controller.opponent_enabled and controller.current_player is not Cell.X:
            raise HTTPException(status_code=400, detail="AI is completing its move")

        if cell_index not in controller.playable_cells():
            raise HTTPException(status_code=400, detail="Cell is already taken")

        if not controller.apply_move(cell_index):
            raise HTTPException(
                status_code=400, detail="Move is not allowed on this turn"
            )


@app.post("/api/game")
def create_game(request: NewGameRequest) -> Dict[str, object]:
    game_id, session = _create_session(request.opponent)
    return _serialize_session(game_id, session)


@app.get("/api/game/{game_id}")
def get_game(game_id: str) -> Dict[str, object]:
    session = _get_session(game_id)
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/move")
def make_move(game_id: str, request: MoveRequest) -> Dict[str, object]:
    session = _get_session(game_id)
    _apply_player_move(session, request.cell_index)
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/reset")
def reset_game(game_id: str) -> Dict[str, object]:
    session = _get_session(game_id)
    with session.lock:
        session.controller.reset()
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/opponent")
def toggle_opponent(game_id: str, request: OpponentRequest) -> Dict[str, object]:
    session = _get_session(game_id)
    with session.lock:
        session.controller.opponent_enabled = request.enabled
    return _serialize_session(game_id, session)


@app.get("/", response_class=HTMLResponse)
def index() -> str:
    return HTML_PAGE


HTML_PAGE = """<!DOCTYPE html>
<html lang=\"en\">
  <head>
    <meta charset=\"utf-8\" />
    <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\" />
    <title>ClassicXO</title>
    <style>
      :root {
        color-scheme: dark;
        --bg: #1b1d24;
        --panel: #262a35;
        --cell: #323746;
        --cell-hover: #3d4356;
        --x: #8acaff;
        --o: #ff8a8a;
        --win: #4caf7a;
        --muted: #9aa1b2;
      }

      body {
        margin: 0;
        min-height: 100vh;
        display: flex;
        align-items: center;
        justify-content: center;
        background: var(--bg);
        color: #eef1f7;
        font-family: system-ui, -apple-system, \"Segoe UI\", sans-serif;
      }

      .window {
        background: var(--panel);
        border-radius: 12px;
        padding: 20px 24px;
        box-shadow: 0 12px 32px rgba(0, 0, 0, 0.35);
      }

      h1 {
        margin: 0 0 4px;
        font-size: 1.25rem;
      }

      .subtitle {
        margin: 0 0 12px;
        color: var(--muted);
        font-size: 0.85rem;
      }

      .controls {
        display: flex;
        gap: 12px;
        align-items: center;
        padding: 10px 0;
        border-top: 1px solid #3a3f4e;
        border-bottom: 1px solid #3a3f4e;
      }

      .controls button {
        padding: 6px 16px;
        border-radius: 6px;
        border: none;
        background: #4a5cff;
        color: #fff;
        font-weight: 600;
        cursor: pointer;
      }

      #status {
        margin: 12px 0;
        font-weight: 600;
      }

      .board {
        display: grid;
        grid-template-columns: repeat(3, 84px);
        grid-template-rows: repeat(3, 84px);
        gap: 6px;
      }

      .board button {
        font-size: 2.2rem;
        font-weight: 700;
        border: none;
        border-radius: 8px;
        background: var(--cell);
        color: #fff;
        cursor: pointer;
      }

      .board button:hover:enabled {
        background: var(--cell-hover);
      }

      .board button:disabled {
        cursor: default;
        opacity: 0.85;
      }

      .board button.mark-x {
        color: var(--x);
      }

      .board button.mark-o {
        color: var(--o);
      }

      .board button.winning {
        background: var(--win);
        opacity: 1;
      }

      #error {
        min-height: 1.2em;
        margin-top: 10px;
        color: var(--o);
        font-size: 0.85rem;
      }
    </style>
  </head>
  <body>
    <div class=\"window\">
      <h1>Tic Tac Toe</h1>
      <p class=\"subtitle\">2-player tic-tac-toe with an optional AI opponent</p>
      <div class=\"controls\">
        <button id=\"reset\" type=\"button\">Reset</button>
        <label><input id=\"opponent\" type=\"checkbox\" checked /> Play vs AI (O)</label>
      </div>
      <div id=\"status\"></div>
      <div class=\"board\" id=\"board\"></div>
      <div id=\"error\"></div>
    </div>
    <script>
      const boardEl = document.getElementById(\"board\");
      const statusEl = document.getElementById(\"status\");
      const errorEl = document.getElementById(\"error\");
      const opponentEl = document.getElementById(\"opponent\");
      const resetEl = document.getElementById(\"reset\");
      let gameId = null;

      async function request(path, body) {
        const response = await fetch(path, {
          method: body === undefined ? \"GET\" : \"POST\",
          headers: { \"Content-Type\": \"application/json\" },
          body: body === undefined ? undefined : JSON.stringify(body),
        });
        const payload = await response.json();
        if (!response.ok) {
          throw new Error(payload.detail || \"Request failed\");
        }
        return payload;
      }

      function render(state) {
        gameId = state.id;
        statusEl.textContent = state.status;
        opponentEl.checked = state.opponentEnabled;
        const playable = new Set(state.playableCells);
        const winning = new Set(state.winningLine || []);
        boardEl.replaceChildren();
        state.cells.forEach((label, index) => {
          const button = document.createElement(\"button\");
          button.type = \"button\";
          button.textContent = label;
          button.disabled = !playable.has(index);
          if (label) {
            button.classList.add(`mark-${label.toLowerCase()}`);
          }
          if (winning.has(index)) {
            button.classList.add(\"winning\");
          }
          button.addEventListener(\"click\", () =>
            run(() => request(`/api/game/${gameId}/move`, { cellIndex: index }))
          );
          boardEl.appendChild(button);
        });
      }

      async function run(action) {
        try {
          errorEl.textContent = \"\";
          render(await action());
        } catch (err) {
          errorEl.textContent = err.message;
        }
      }

      resetEl.addEventListener(\"click\", () =>
        run(() => request(`/api/game/${gameId}/reset`, {}))
      );
      opponentEl.addEventListener(\"change\", () =>
        run(() =>
          request(`/api/game/${gameId}/opponent`, { enabled: opponentEl.checked })
        )
      );

      run(() => request(\"/api/game\", { opponent: opponentEl.checked }));
    </script>
  </body>
</html>
"""
