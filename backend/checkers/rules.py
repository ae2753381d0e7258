"""Move generation and move application for 8x8 checkers with flying kings.

Every function here is pure over the ``Board`` it receives except
``apply_move``, which mutates it. Nothing is cached between calls: whether a
side must capture is recomputed every time it is asked.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

from .board import BOARD_SIZE, Board
from .move import Coordinate, Move
from .pieces import Color, Piece


MoveList = list[Move]

PROMOTION_ROW: dict[Color, int] = {Color.RED: 0, Color.BLACK: BOARD_SIZE - 1}


@dataclass(frozen=True, slots=True)
class MoveResult:
    captured: bool
    promoted: bool


def _slide(board: Board, square: Coordinate, direction: tuple[int, int]) -> Iterator[Coordinate]:
    """Yield on-board squares along ``direction``, starting next to ``square``."""
    dr, dc = direction
    row, col = square[0] + dr, square[1] + dc
    while board.is_on_board((row, col)):
        yield (row, col)
        row += dr
        col += dc


def _empty_run(board: Board, square: Coordinate, direction: tuple[int, int]) -> Iterator[Coordinate]:
    for target in _slide(board, square, direction):
        if board.getPiece(target) is not None:
            return
        yield target


def simple_moves(board: Board, square: Coordinate) -> MoveList:
    piece = board.getPiece(square)
    if piece is None:
        return []

    moves: MoveList = []
    row, col = square
    for dr, dc in piece.directions:
        if piece.is_king:
            moves.extend(Move(square, target) for target in _empty_run(board, square, (dr, dc)))
            continue
        target = (row + dr, col + dc)
        if board.is_on_board(target) and board.getPiece(target) is None:
            moves.append(Move(square, target))
    return moves


def _man_capture(board: Board, piece: Piece, square: Coordinate, direction: tuple[int, int]) -> Optional[Move]:
    dr, dc = direction
    jumped = (square[0] + dr, square[1] + dc)
    landing = (square[0] + 2 * dr, square[1] + 2 * dc)
    if not board.is_on_board(landing):
        return None
    victim = board.getPiece(jumped)
    if victim is None or victim.color == piece.color:
        return None
    if board.getPiece(landing) is not None:
        return None
    return Move(square, landing, captured=jumped)


def _king_captures(board: Board, piece: Piece, square: Coordinate, direction: tuple[int, int]) -> MoveList:
    enemy: Optional[Coordinate] = None
    moves: MoveList = []
    for target in _slide(board, square, direction):
        occupant = board.getPiece(target)
        if enemy is None:
            if occupant is None:
                continue
            if occupant.color == piece.color:
                break
            enemy = target
            continue
        if occupant is not None:
            break
        moves.append(Move(square, target, captured=enemy))
    return moves


def capture_moves(board: Board, square: Coordinate) -> MoveList:
    piece = board.getPiece(square)
    if piece is None:
        return []

    moves: MoveList = []
    for direction in piece.directions:
        if piece.is_king:
            moves.extend(_king_captures(board, piece, square, direction))
            continue
        move = _man_capture(board, piece, square, direction)
        if move is not None:
            moves.append(move)
    return moves


def all_capture_moves(board: Board, color: Color) -> MoveList:
    moves: MoveList = []
    for square, _ in board.getAllPieces(color):
        moves.extend(capture_moves(board, square))
    return moves


def must_capture(board: Board, color: Color) -> bool:
    return any(capture_moves(board, square) for square, _ in board.getAllPieces(color))


def legal_moves(board: Board, square: Coordinate) -> MoveList:
    piece = board.getPiece(square)
    if piece is None:
        return []
    captures = capture_moves(board, square)
    if must_capture(board, piece.color):
        return captures
    return captures + simple_moves(board, square)


def movable_pieces(board: Board, color: Color) -> list[Coordinate]:
    return [square for square, _ in board.getAllPieces(color) if legal_moves(board, square)]


def has_legal_moves(board: Board, color: Color) -> bool:
    return any(legal_moves(board, square) for square, _ in board.getAllPieces(color))


def apply_move(board: Board, move: Move) -> MoveResult:
    piece = board.getPiece(move.start)
    if piece is None:
        raise ValueError(f"No piece at {move.start} to move.")
    if board.getPiece(move.end) is not None:
        raise ValueError("Destination square must be empty.")
    if move.captured is not None:
        target = board.getPiece(move.captured)
        if target is None or target.color == piece.color:
            raise RuntimeError("Capture move references a missing or friendly piece.")

    board.setPiece(move.end, piece)
    board.setPiece(move.start, None)

    captured = False
    if move.captured is not None:
        board.setPiece(move.captured, None)
        captured = True

    promoted = False
    if move.end[0] == PROMOTION_ROW[piece.color]:
        promoted = piece.promote()

    return MoveResult(captured=captured, promoted=promoted)


def find_winner(board: Board, side_to_move: Color) -> Optional[Color]:
    red_count = board.countPieces(Color.RED)
    black_count = board.countPieces(Color.BLACK)
    if red_count == 0:
        return Color.BLACK
    if black_count == 0:
        return Color.RED
    if not has_legal_moves(board, side_to_move):
        return side_to_move.opponent
    return None
