"""Move record kept as the game's last move."""

from __future__ import annotations

from dataclasses import dataclass

from .constants import piece_symbol
from .square import Square, parse_square


@dataclass(frozen=True, slots=True)
class Move:
    from_square: Square
    to_square: Square
    piece: int

    def uci(self) -> str:
        return f"{self.from_square}{self.to_square}"

    def __str__(self) -> str:
        return f"{piece_symbol(self.piece)} {self.uci()}"


def parse_move_squares(text: str) -> tuple[Square, Square]:
    """Parse ``e2e4`` or ``e2 e4`` into a (from, to) square pair."""
    compact = "".join(text.split())
    if len(compact) != 4:
        raise ValueError(f"Invalid move: {text}")
    return parse_square(compact[:2]), parse_square(compact[2:])
