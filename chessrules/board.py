"""Mailbox board representation."""

from __future__ import annotations

from .constants import (
    BACK_RANK_ORDER,
    BLACK,
    BOARD_SIZE,
    EMPTY,
    HOME_RANK,
    KING,
    PAWN,
    PAWN_RANK,
    WHITE,
    piece_from_symbol,
    piece_symbol,
    side_name,
)
from .errors import MissingKingError
from .square import ALL_SQUARES, Square, require_square


class Board:
    """8x8 grid of signed piece codes, indexed ``grid[rank][file]``."""

    __slots__ = ("grid",)

    def __init__(self, grid: list[list[int]] | None = None):
        if grid is None:
            self.grid = [[EMPTY] * BOARD_SIZE for _ in range(BOARD_SIZE)]
            return
        if len(grid) != BOARD_SIZE or any(len(row) != BOARD_SIZE for row in grid):
            raise ValueError("Board grid must be 8x8")
        self.grid = [list(row) for row in grid]

    @classmethod
    def empty(cls) -> Board:
        return cls()

    @classmethod
    def starting(cls) -> Board:
        board = cls()
        for file_idx, piece_kind in enumerate(BACK_RANK_ORDER):
            board.grid[HOME_RANK[BLACK]][file_idx] = -piece_kind
            board.grid[PAWN_RANK[BLACK]][file_idx] = -PAWN
            board.grid[PAWN_RANK[WHITE]][file_idx] = PAWN
            board.grid[HOME_RANK[WHITE]][file_idx] = piece_kind
        return board

    @classmethod
    def from_diagram(cls, diagram: str) -> Board:
        """Build a board from eight rows of piece letters, Black's back rank first.

        Whitespace inside a row is ignored, so both ``rnbqkbnr`` and
        ``r n b q k b n r`` are accepted.
        """
        rows = [line.split() for line in diagram.strip().splitlines() if line.strip()]
        rows = ["".join(parts) for parts in rows]
        if len(rows) != BOARD_SIZE:
            raise ValueError(f"Diagram must have 8 rows, got {len(rows)}")

        board = cls()
        for rank_idx, row in enumerate(rows):
            if len(row) != BOARD_SIZE:
                raise ValueError(f"Invalid diagram row: {row}")
            for file_idx, symbol in enumerate(row):
                board.grid[rank_idx][file_idx] = piece_from_symbol(symbol)
        return board

    def piece_at(self, square: Square) -> int:
        require_square(square)
        return self.grid[square.rank][square.file]

    def set_piece(self, square: Square, piece: int) -> None:
        require_square(square)
        self.grid[square.rank][square.file] = piece

    def is_empty(self, square: Square) -> bool:
        return self.piece_at(square) == EMPTY

    def copy(self) -> Board:
        return Board(self.grid)

    def occupied(self):
        """Yield ``(square, piece)`` for every non-empty square."""
        for square in ALL_SQUARES:
            piece = self.grid[square.rank][square.file]
            if piece != EMPTY:
                yield square, piece

    def find_king(self, side: int) -> Square:
        target = side * KING
        found = [square for square, piece in self.occupied() if piece == target]
        if len(found) != 1:
            raise MissingKingError(f"Expected one {side_name(side)} king, found {len(found)}")
        return found[0]

    def rows(self) -> tuple[tuple[int, ...], ...]:
        return tuple(tuple(row) for row in self.grid)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.grid == other.grid

    def __str__(self) -> str:
        return "\n".join(" ".join(piece_symbol(piece) for piece in row) for row in self.grid)

    def __repr__(self) -> str:
        return f"Board.from_diagram({str(self)!r})"
