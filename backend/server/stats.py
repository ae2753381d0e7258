from __future__ import annotations

from dataclasses import dataclass, field

from checkers.pieces import Color

DEFAULT_NAMES = {Color.RED: "Red Player", Color.BLACK: "Black Player"}


@dataclass
class PlayerStats:
    name: str
    wins: int = 0
    losses: int = 0
    draws: int = 0


def _default_players() -> dict[Color, PlayerStats]:
    return {color: PlayerStats(name=name) for color, name in DEFAULT_NAMES.items()}


@dataclass
class Scoreboard:
    """Per-process win/loss/draw counters and display names."""

    players: dict[Color, PlayerStats] = field(default_factory=_default_players)

    def record_win(self, winner: Color) -> None:
        self.players[winner].wins += 1
        self.players[winner.opponent].losses += 1

    def record_draw(self) -> None:
        for stats in self.players.values():
            stats.draws += 1

    def set_name(self, color: Color, name: str) -> None:
        self.players[color].name = name.strip() or DEFAULT_NAMES[color]

    def reset_counters(self) -> None:
        for stats in self.players.values():
            stats.wins = 0
            stats.losses = 0
            stats.draws = 0
