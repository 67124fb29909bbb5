"""Square addressing and bounds checks."""

from __future__ import annotations

from dataclasses import dataclass

from .constants import BOARD_SIZE, FILES
from .errors import InvalidSquareError


@dataclass(frozen=True, slots=True, order=True)
class Square:
    file: int
    rank: int

    @property
    def index(self) -> int:
        return self.rank * BOARD_SIZE + self.file

    def offset(self, df: int, dr: int) -> Square:
        return Square(self.file + df, self.rank + dr)

    def __str__(self) -> str:
        if not valid_square(self):
            return f"({self.file},{self.rank})"
        return square_name(self)


def valid_square(square: Square) -> bool:
    return 0 <= square.file < BOARD_SIZE and 0 <= square.rank < BOARD_SIZE


def require_square(square: Square) -> Square:
    if not valid_square(square):
        raise InvalidSquareError(f"Square out of range: ({square.file},{square.rank})")
    return square


def square_name(square: Square) -> str:
    require_square(square)
    return f"{FILES[square.file]}{BOARD_SIZE - square.rank}"


def parse_square(name: str) -> Square:
    """Parse an algebraic name such as ``e4``; rank 8 maps to rank index 0."""
    text = name.strip().lower()
    if len(text) != 2 or text[0] not in FILES or not text[1].isdigit():
        raise InvalidSquareError(f"Invalid square: {name}")
    rank_number = int(text[1])
    if not 1 <= rank_number <= BOARD_SIZE:
        raise InvalidSquareError(f"Invalid square: {name}")
    return Square(FILES.index(text[0]), BOARD_SIZE - rank_number)


ALL_SQUARES = tuple(Square(f, r) for r in range(BOARD_SIZE) for f in range(BOARD_SIZE))
