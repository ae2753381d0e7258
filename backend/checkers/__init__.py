"""Checkers rules engine package."""

from .board import Board
from .game import Game, MoveOutcome, TurnState
from .move import Coordinate, Move
from .pieces import Color, Piece
from .rules import MoveResult

__all__ = [
	"Board",
	"Game",
	"MoveOutcome",
	"MoveResult",
	"TurnState",
	"Move",
	"Coordinate",
	"Color",
	"Piece",
]
