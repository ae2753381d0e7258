from __future__ import annotations

from typing import Iterator, Optional

from .move import Coordinate
from .pieces import Color, Piece


BOARD_SIZE = 8
HOME_ROWS = 3

BoardStatePiece = tuple[int, int, str, bool]
BoardState = tuple[BoardStatePiece, ...]


class Board:
    """Storage for the 8x8 grid. Knows nothing about the rules."""

    def __init__(self) -> None:
        self.board: list[list[Optional[Piece]]] = [
            [None for _ in range(BOARD_SIZE)] for _ in range(BOARD_SIZE)
        ]
        self._set_start_pieces()

    @classmethod
    def empty(cls) -> "Board":
        board = cls.__new__(cls)
        board.board = [[None for _ in range(BOARD_SIZE)] for _ in range(BOARD_SIZE)]
        return board

    def to_state(self) -> BoardState:
        return tuple(
            (row, col, piece.color.value, piece.is_king)
            for (row, col), piece in self.getAllPieces()
        )

    @classmethod
    def from_state(cls, state: BoardState) -> "Board":
        board = cls.empty()
        for row, col, color_value, is_king in state:
            board.setPiece((row, col), Piece(Color(color_value), is_king=is_king))
        return board

    def is_on_board(self, square: Coordinate) -> bool:
        row, col = square
        return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE

    def getPiece(self, square: Coordinate) -> Optional[Piece]:
        if self.is_on_board(square):
            row, col = square
            return self.board[row][col]
        return None

    def setPiece(self, square: Coordinate, piece: Optional[Piece]) -> None:
        if not self.is_on_board(square):
            raise ValueError(f"Square {square} is off the board.")
        row, col = square
        self.board[row][col] = piece

    def getAllPieces(self, color: Optional[Color] = None) -> list[tuple[Coordinate, Piece]]:
        return list(self._iter_pieces(color))

    def countPieces(self, color: Color) -> int:
        return sum(1 for _ in self._iter_pieces(color))

    def copy(self) -> "Board":
        new_board = Board.empty()
        for square, piece in self.getAllPieces():
            new_board.setPiece(square, piece.getCopy())
        return new_board

    def _iter_pieces(self, color: Optional[Color]) -> Iterator[tuple[Coordinate, Piece]]:
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                piece = self.board[row][col]
                if piece is None:
                    continue
                if color is not None and piece.color != color:
                    continue
                yield (row, col), piece

    def _set_start_pieces(self) -> None:
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                if (row + col) % 2 != 0:
                    continue
                if row < HOME_ROWS:
                    self.board[row][col] = Piece(Color.BLACK)
                elif row >= BOARD_SIZE - HOME_ROWS:
                    self.board[row][col] = Piece(Color.RED)

    def __str__(self) -> str:
        rows = []
        for row in self.board:
            cells = []
            for piece in row:
                if piece is None:
                    cells.append(".")
                    continue
                symbol = "r" if piece.color == Color.RED else "b"
                cells.append(symbol.upper() if piece.is_king else symbol)
            rows.append(" ".join(cells))
        return "\n".join(rows)
