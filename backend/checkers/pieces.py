from __future__ import annotations

from enum import Enum


class Color(Enum):
    RED = "red"
    BLACK = "black"

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self is Color.RED else Color.RED


# Men only travel toward the opponent's home rows.
FORWARD_DIRECTIONS: dict[Color, tuple[tuple[int, int], ...]] = {
    Color.RED: ((-1, -1), (-1, 1)),
    Color.BLACK: ((1, -1), (1, 1)),
}
KING_DIRECTIONS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))


class Piece:
    def __init__(self, color: Color, *, is_king: bool = False) -> None:
        self.color = color
        self.is_king = is_king

    @property
    def directions(self) -> tuple[tuple[int, int], ...]:
        if self.is_king:
            return KING_DIRECTIONS
        return FORWARD_DIRECTIONS[self.color]

    def promote(self) -> bool:
        """Crown the piece; returns False when it already was a king."""
        if self.is_king:
            return False
        self.is_king = True
        return True

    def getCopy(self) -> "Piece":
        return Piece(self.color, is_king=self.is_king)

    def __repr__(self) -> str:
        piece_type = "K" if self.is_king else "M"
        return f"{piece_type}({self.color.name})"
