from __future__ import annotations

from typing import Any, Optional

from checkers.game import Game, MoveOutcome
from checkers.move import Coordinate, Move
from checkers.pieces import Color

from .stats import Scoreboard


def _coord_tuple_to_dict(coord: Optional[Coordinate]) -> Optional[dict[str, int]]:
    if coord is None:
        return None
    row, col = coord
    return {"row": row, "col": col}


def serialize_move(move: Move) -> dict[str, Any]:
    return {
        "start": _coord_tuple_to_dict(move.start),
        "end": _coord_tuple_to_dict(move.end),
        "captured": _coord_tuple_to_dict(move.captured),
        "isCapture": move.is_capture,
    }


def serialize_outcome(outcome: MoveOutcome) -> dict[str, Any]:
    return {
        "move": serialize_move(outcome.move),
        "captured": outcome.captured,
        "promoted": outcome.promoted,
        "turnEnded": outcome.turn_ended,
        "gameOver": outcome.game_over,
        "winner": outcome.winner.value if outcome.winner else None,
    }


def serialize_scoreboard(scoreboard: Scoreboard) -> dict[str, Any]:
    return {
        color.value: {
            "name": stats.name,
            "wins": stats.wins,
            "losses": stats.losses,
            "draws": stats.draws,
        }
        for color, stats in scoreboard.players.items()
    }


def serialize_game(game: Game, scoreboard: Scoreboard) -> dict[str, Any]:
    pieces = [
        {"row": row, "col": col, "color": piece.color.value, "isKing": piece.is_king}
        for (row, col), piece in game.board.getAllPieces()
    ]
    selected = game.turn.selected
    legal = game.legalMoves(selected) if selected is not None else []

    return {
        "turn": game.current_player.value,
        "startingSide": game.starting_side.value,
        "winner": game.winner.value if game.winner else None,
        "gameOver": game.is_over,
        "selected": _coord_tuple_to_dict(selected),
        "pendingChain": game.turn.pending_chain,
        "mandatoryCapture": game.mustCapture(),
        "moveCount": game.move_count,
        "pieces": pieces,
        "pieceCounts": {
            color.value: {
                "total": game.board.countPieces(color),
                "kings": sum(1 for _, piece in game.board.getAllPieces(color) if piece.is_king),
            }
            for color in Color
        },
        "legalMoves": [serialize_move(move) for move in legal],
        "players": serialize_scoreboard(scoreboard),
    }
