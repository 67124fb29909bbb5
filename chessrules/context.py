"""History-dependent state consulted by move generation."""

from __future__ import annotations

from dataclasses import dataclass

from .constants import BOARD_SIZE
from .square import Square, require_square


class MovedSquares:
    """Per-square flags recording that the piece starting there has moved away.

    Flags are keyed by origin square, not piece identity: once set, a flag
    stays set for the rest of the game no matter what later occupies the
    square.
    """

    __slots__ = ("_flags",)

    def __init__(self, flags: list[bool] | None = None):
        self._flags = [False] * (BOARD_SIZE * BOARD_SIZE) if flags is None else list(flags)

    def mark(self, square: Square) -> None:
        self._flags[require_square(square).index] = True

    def has_moved(self, square: Square) -> bool:
        return self._flags[require_square(square).index]

    def copy(self) -> MovedSquares:
        return MovedSquares(self._flags)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MovedSquares):
            return NotImplemented
        return self._flags == other._flags


@dataclass(frozen=True, slots=True)
class MoveContext:
    """What generation needs beyond the board to offer castling and en passant."""

    moved: MovedSquares
    en_passant: Square | None = None
