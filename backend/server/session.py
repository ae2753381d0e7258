from __future__ import annotations

import logging
import random
from threading import Lock
from typing import Any, Optional

from checkers.game import Game
from checkers.move import Coordinate
from checkers.pieces import Color

from .schemas import MoveRequest, PlayerNamesRequest, ResetRequest, SelectRequest, StartingSideRequest
from .serializers import serialize_game, serialize_move, serialize_outcome, serialize_scoreboard
from .stats import Scoreboard

logger = logging.getLogger(__name__)


def color_from_label(label: str) -> Color:
    try:
        return Color(label.lower())
    except ValueError as exc:
        raise ValueError(f"Unsupported color '{label}'.") from exc


class GameSession:
    """Thread-safe orchestrator around a single Game instance and its scoreboard."""

    def __init__(self, starting_side: Color = Color.RED, rng: Optional[random.Random] = None) -> None:
        self.lock = Lock()
        self.game = Game(starting_side=starting_side)
        self.scoreboard = Scoreboard()
        self.rng = rng or random.Random()

    # public API ---------------------------------------------------------

    def serialize(self) -> dict[str, Any]:
        with self.lock:
            return self._serialize_locked()

    def reset(self, payload: Optional[ResetRequest] = None) -> dict[str, Any]:
        with self.lock:
            starting_side = None
            if payload and payload.startingSide:
                starting_side = color_from_label(payload.startingSide)
            self.game.reset(starting_side=starting_side)
            logger.info("Game reset, %s to move.", self.game.current_player.value)
            return self._serialize_locked()

    def set_starting_side(self, payload: StartingSideRequest) -> dict[str, Any]:
        with self.lock:
            color = color_from_label(payload.startingSide)
            if not self.game.set_starting_side(color):
                raise RuntimeError("Starting side can only change before the first move.")
            logger.info("Starting side set to %s.", color.value)
            return self._serialize_locked()

    def get_legal_moves(self, row: int, col: int) -> dict[str, Any]:
        with self.lock:
            square = (row, col)
            if not self.game.board.is_on_board(square):
                raise ValueError(f"Square row {row}, col {col} is off the board.")
            if self.game.board.getPiece(square) is None:
                raise ValueError(f"No piece at row {row}, col {col}.")
            moves = self.game.legalMoves(square)
            return {
                "piece": {"row": row, "col": col},
                "moves": [serialize_move(move) for move in moves],
            }

    def select_piece(self, payload: SelectRequest) -> dict[str, Any]:
        with self.lock:
            self._select_locked((payload.square.row, payload.square.col))
            return self._serialize_locked()

    def make_move(self, payload: MoveRequest) -> dict[str, Any]:
        with self.lock:
            previous = self.game.turn.selected
            if payload.start is not None:
                self._select_locked((payload.start.row, payload.start.col))
            destination = (payload.destination.row, payload.destination.col)
            outcome = self.game.applyMove(destination)
            if outcome is None:
                self.game.turn.selected = previous
                raise RuntimeError("Requested destination is not a legal move for the selected piece.")
            if outcome.game_over and outcome.winner is not None:
                self.scoreboard.record_win(outcome.winner)
                logger.info("Recorded win for %s.", outcome.winner.value)
            state = self._serialize_locked()
            state["outcome"] = serialize_outcome(outcome)
            return state

    def hint(self) -> dict[str, Any]:
        with self.lock:
            candidates = self.game.movablePieces()
            if not candidates:
                raise RuntimeError("No movable pieces available.")
            square = self.rng.choice(candidates)
            self._select_locked(square)
            state = self._serialize_locked()
            state["hint"] = {"row": square[0], "col": square[1]}
            return state

    def stats(self) -> dict[str, Any]:
        with self.lock:
            return serialize_scoreboard(self.scoreboard)

    def set_player_names(self, payload: PlayerNamesRequest) -> dict[str, Any]:
        with self.lock:
            for color_label, name in payload.model_dump(exclude_unset=True).items():
                if name is None:
                    continue
                self.scoreboard.set_name(color_from_label(color_label), name)
            return serialize_scoreboard(self.scoreboard)

    def record_draw(self) -> dict[str, Any]:
        with self.lock:
            if self.game.is_over:
                raise RuntimeError("The game is already decided.")
            self.scoreboard.record_draw()
            self.game.reset()
            logger.info("Draw recorded by agreement, game reset.")
            return self._serialize_locked()

    def reset_stats(self) -> dict[str, Any]:
        with self.lock:
            self.scoreboard.reset_counters()
            return serialize_scoreboard(self.scoreboard)

    # helpers ------------------------------------------------------------

    def _serialize_locked(self) -> dict[str, Any]:
        return serialize_game(self.game, self.scoreboard)

    def _select_locked(self, square: Coordinate) -> None:
        if not self.game.choosePiece(square):
            raise RuntimeError(f"Cannot select the piece at row {square[0]}, col {square[1]}.")
