"""Game aggregate and the move-application state transition."""

from __future__ import annotations

import logging

from .board import Board
from .constants import (
    BLACK,
    EMPTY,
    KING,
    KINGSIDE_ROOK_FILE,
    PAWN,
    QUEENSIDE_ROOK_FILE,
    WHITE,
    GameState,
    kind,
    owner,
    side_name,
)
from .context import MovedSquares, MoveContext
from .errors import IllegalMoveError
from .move import Move
from .movegen import is_checkmate, legal_moves
from .square import Square, require_square

_LOGGER = logging.getLogger(__name__)


class Game:
    """A single game: board plus castling, en passant, turn and outcome state.

    ``apply_move`` is the only operation that changes the position. It trusts
    its caller; ``play`` is the checked entry point for outer layers.
    """

    __slots__ = ("board", "moved", "en_passant", "last_move", "turn", "state")

    def __init__(self, board: Board | None = None, turn: int = WHITE):
        self.board = Board.starting() if board is None else board
        self.moved = MovedSquares()
        self.en_passant: Square | None = None
        self.last_move: Move | None = None
        self.turn = turn
        self.state = GameState.IN_PROGRESS

    def context(self) -> MoveContext:
        return MoveContext(moved=self.moved, en_passant=self.en_passant)

    def is_over(self) -> bool:
        return self.state is not GameState.IN_PROGRESS

    def legal_moves(self, square: Square) -> list[Square]:
        return legal_moves(self.board, square, self.context())

    def apply_move(self, from_square: Square, to_square: Square) -> None:
        require_square(from_square)
        require_square(to_square)

        board = self.board.copy()
        moved = self.moved.copy()
        piece = board.piece_at(from_square)

        moved.mark(from_square)

        if kind(piece) == KING and abs(to_square.file - from_square.file) == 2:
            rank_idx = from_square.rank
            if to_square.file > from_square.file:
                rook_from, rook_to = Square(KINGSIDE_ROOK_FILE, rank_idx), Square(5, rank_idx)
            else:
                rook_from, rook_to = Square(QUEENSIDE_ROOK_FILE, rank_idx), Square(3, rank_idx)
            board.set_piece(rook_to, board.piece_at(rook_from))
            board.set_piece(rook_from, EMPTY)

        if kind(piece) == PAWN and self.en_passant is not None and to_square == self.en_passant:
            board.set_piece(Square(to_square.file, from_square.rank), EMPTY)

        en_passant = None
        if kind(piece) == PAWN and abs(to_square.rank - from_square.rank) == 2:
            en_passant = Square(to_square.file, (from_square.rank + to_square.rank) // 2)

        board.set_piece(to_square, piece)
        board.set_piece(from_square, EMPTY)

        self.board = board
        self.moved = moved
        self.en_passant = en_passant
        self.last_move = Move(from_square, to_square, piece)
        self.turn = -self.turn
        _LOGGER.debug("applied %s, %s to move", self.last_move, side_name(self.turn))

    def update_state(self) -> GameState:
        if is_checkmate(self.board, WHITE):
            self.state = GameState.BLACK_WINS
        elif is_checkmate(self.board, BLACK):
            self.state = GameState.WHITE_WINS
        if self.is_over():
            _LOGGER.info("checkmate: %s", self.state.value)
        return self.state

    def play(self, from_square: Square, to_square: Square) -> Move:
        if self.is_over():
            raise IllegalMoveError(f"Game is over: {self.state.value}")
        piece = self.board.piece_at(from_square)
        if piece == EMPTY or owner(piece) != self.turn:
            raise IllegalMoveError(f"No {side_name(self.turn)} piece on {from_square}")
        if to_square not in self.legal_moves(from_square):
            _LOGGER.debug("rejected %s%s", from_square, to_square)
            raise IllegalMoveError(f"Illegal move: {from_square}{to_square}")

        self.apply_move(from_square, to_square)
        self.update_state()
        return self.last_move

    def copy(self) -> Game:
        clone = Game(self.board.copy(), self.turn)
        clone.moved = self.moved.copy()
        clone.en_passant = self.en_passant
        clone.last_move = self.last_move
        clone.state = self.state
        return clone
