from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from . import rules
from .board import Board
from .move import Coordinate, Move
from .pieces import Color

logger = logging.getLogger(__name__)


@dataclass
class TurnState:
    side_to_move: Color
    selected: Optional[Coordinate] = None
    pending_chain: bool = False

    def clear_selection(self) -> None:
        self.selected = None
        self.pending_chain = False


@dataclass(frozen=True, slots=True)
class MoveOutcome:
    move: Move
    captured: bool
    promoted: bool
    turn_ended: bool
    game_over: bool
    winner: Optional[Color] = None


class Game:
    """One checkers game: owns the board, the turn state and the result.

    Operations that break the rules are rejected without touching any state;
    ``choosePiece`` reports that with ``False`` and ``applyMove`` with ``None``.
    """

    def __init__(self, starting_side: Color = Color.RED) -> None:
        self.starting_side = starting_side
        self.board = Board()
        self.turn = TurnState(side_to_move=starting_side)
        self.winner: Optional[Color] = None
        self.move_count = 0

    def reset(self, starting_side: Optional[Color] = None) -> None:
        if starting_side is not None:
            self.starting_side = starting_side
        self.board = Board()
        self.turn = TurnState(side_to_move=self.starting_side)
        self.winner = None
        self.move_count = 0

    @property
    def current_player(self) -> Color:
        return self.turn.side_to_move

    @property
    def is_over(self) -> bool:
        return self.winner is not None

    def set_starting_side(self, color: Color) -> bool:
        if self.move_count > 0 or self.is_over:
            logger.debug("Starting side can only change before the first move.")
            return False
        self.starting_side = color
        self.turn = TurnState(side_to_move=color)
        return True

    def legalMoves(self, square: Coordinate) -> list[Move]:
        if self.is_over:
            return []
        if self.turn.pending_chain:
            if square != self.turn.selected:
                return []
            return rules.capture_moves(self.board, square)
        return rules.legal_moves(self.board, square)

    def mustCapture(self) -> bool:
        if self.is_over:
            return False
        return self.turn.pending_chain or rules.must_capture(self.board, self.current_player)

    def movablePieces(self) -> list[Coordinate]:
        if self.is_over:
            return []
        if self.turn.pending_chain and self.turn.selected is not None:
            return [self.turn.selected]
        return rules.movable_pieces(self.board, self.current_player)

    def choosePiece(self, square: Coordinate) -> bool:
        if self.is_over:
            logger.debug("Selection rejected: the game is over.")
            return False
        if self.turn.pending_chain:
            if square != self.turn.selected:
                logger.debug("Selection rejected: capture chain pending at %s.", self.turn.selected)
                return False
            return True
        piece = self.board.getPiece(square)
        if piece is None or piece.color != self.current_player:
            logger.debug("Selection rejected: %s holds no %s piece.", square, self.current_player.value)
            return False
        self.turn.selected = square
        return True

    def applyMove(self, destination: Coordinate) -> Optional[MoveOutcome]:
        if self.is_over:
            logger.debug("Move rejected: the game is over.")
            return None
        origin = self.turn.selected
        if origin is None:
            logger.debug("Move rejected: no piece selected.")
            return None
        move = next((m for m in self.legalMoves(origin) if m.end == destination), None)
        if move is None:
            logger.debug("Move rejected: %s is not a legal destination from %s.", destination, origin)
            return None

        result = rules.apply_move(self.board, move)
        self.move_count += 1

        # Promotion ends the turn even when the new king could keep capturing.
        if not result.promoted and result.captured and rules.capture_moves(self.board, move.end):
            self.turn.selected = move.end
            self.turn.pending_chain = True
            return MoveOutcome(
                move=move,
                captured=True,
                promoted=False,
                turn_ended=False,
                game_over=False,
            )

        self._end_turn()
        return MoveOutcome(
            move=move,
            captured=result.captured,
            promoted=result.promoted,
            turn_ended=True,
            game_over=self.is_over,
            winner=self.winner,
        )

    def getWinner(self) -> Optional[Color]:
        return self.winner

    def _end_turn(self) -> None:
        self.turn.clear_selection()
        self.turn.side_to_move = self.current_player.opponent
        self.winner = rules.find_winner(self.board, self.current_player)
        if self.winner is not None:
            logger.info("Game over, %s wins.", self.winner.value)
