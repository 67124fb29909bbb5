"""Pseudo-legal move generation, check detection and legality filtering."""

from __future__ import annotations

from .board import Board
from .constants import (
    BISHOP,
    EMPTY,
    EN_PASSANT_RANK,
    HOME_RANK,
    KING,
    KING_FILE,
    KINGSIDE_ROOK_FILE,
    KNIGHT,
    PAWN,
    PAWN_DIRECTION,
    PAWN_RANK,
    QUEEN,
    QUEENSIDE_ROOK_FILE,
    ROOK,
    kind,
    opposite,
    owner,
)
from .context import MoveContext
from .square import Square, require_square, valid_square


KNIGHT_DELTAS = ((-2, -1), (-2, 1), (-1, -2), (-1, 2), (1, -2), (1, 2), (2, -1), (2, 1))
KING_DELTAS = ((-1, -1), (-1, 0), (-1, 1), (0, -1), (0, 1), (1, -1), (1, 0), (1, 1))
BISHOP_DIRS = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS = BISHOP_DIRS + ROOK_DIRS

# (rook file, squares that must be empty, file the king passes through)
CASTLING_PATHS = (
    (KINGSIDE_ROOK_FILE, (5, 6), 5),
    (QUEENSIDE_ROOK_FILE, (1, 2, 3), 3),
)


def _pawn_moves(board: Board, square: Square, side: int, context: MoveContext | None) -> list[Square]:
    moves: list[Square] = []
    direction = PAWN_DIRECTION[side]

    one_step = square.offset(0, direction)
    if valid_square(one_step) and board.is_empty(one_step):
        moves.append(one_step)
        if square.rank == PAWN_RANK[side]:
            two_step = square.offset(0, 2 * direction)
            if board.is_empty(two_step):
                moves.append(two_step)

    for df in (-1, 1):
        target = square.offset(df, direction)
        if valid_square(target):
            piece = board.piece_at(target)
            if piece != EMPTY and owner(piece) != side:
                moves.append(target)

    if context is not None and context.en_passant is not None and square.rank == EN_PASSANT_RANK[side]:
        for df in (-1, 1):
            if square.offset(df, direction) == context.en_passant:
                moves.append(context.en_passant)

    return moves


def _leaper_moves(board: Board, square: Square, side: int, deltas: tuple[tuple[int, int], ...]) -> list[Square]:
    moves: list[Square] = []
    for df, dr in deltas:
        target = square.offset(df, dr)
        if valid_square(target):
            piece = board.piece_at(target)
            if piece == EMPTY or owner(piece) != side:
                moves.append(target)
    return moves


def _slider_moves(board: Board, square: Square, side: int, directions: tuple[tuple[int, int], ...]) -> list[Square]:
    moves: list[Square] = []
    for df, dr in directions:
        target = square.offset(df, dr)
        while valid_square(target):
            piece = board.piece_at(target)
            if piece == EMPTY:
                moves.append(target)
            else:
                if owner(piece) != side:
                    moves.append(target)
                break
            target = target.offset(df, dr)
    return moves


def _castling_moves(board: Board, square: Square, side: int, context: MoveContext) -> list[Square]:
    rank_idx = HOME_RANK[side]
    if square != Square(KING_FILE, rank_idx) or context.moved.has_moved(square):
        return []

    moves: list[Square] = []
    for rook_file, between, transit_file in CASTLING_PATHS:
        rook_square = Square(rook_file, rank_idx)
        if context.moved.has_moved(rook_square) or board.piece_at(rook_square) != side * ROOK:
            continue
        if any(not board.is_empty(Square(f, rank_idx)) for f in between):
            continue
        if in_check(board, side):
            continue
        if _king_attacked_after(board, square, Square(transit_file, rank_idx), side):
            continue
        step = 1 if rook_file > square.file else -1
        moves.append(square.offset(2 * step, 0))
    return moves


def _king_attacked_after(board: Board, from_square: Square, to_square: Square, side: int) -> bool:
    scratch = board.copy()
    scratch.set_piece(to_square, scratch.piece_at(from_square))
    scratch.set_piece(from_square, EMPTY)
    return in_check(scratch, side)


def pseudo_moves(board: Board, square: Square, context: MoveContext | None = None) -> list[Square]:
    """Destinations the piece on ``square`` can reach, ignoring king safety.

    Castling and en passant are only offered when ``context`` is given.
    """
    piece = board.piece_at(square)
    if piece == EMPTY:
        return []

    side = owner(piece)
    piece_kind = kind(piece)

    if piece_kind == PAWN:
        return _pawn_moves(board, square, side, context)
    if piece_kind == KNIGHT:
        return _leaper_moves(board, square, side, KNIGHT_DELTAS)
    if piece_kind == BISHOP:
        return _slider_moves(board, square, side, BISHOP_DIRS)
    if piece_kind == ROOK:
        return _slider_moves(board, square, side, ROOK_DIRS)
    if piece_kind == QUEEN:
        return _slider_moves(board, square, side, QUEEN_DIRS)
    if piece_kind == KING:
        moves = _leaper_moves(board, square, side, KING_DELTAS)
        if context is not None:
            moves.extend(_castling_moves(board, square, side, context))
        return moves
    raise ValueError(f"Unknown piece code: {piece}")


def in_check(board: Board, side: int) -> bool:
    king_sq = board.find_king(side)
    enemy = opposite(side)
    for square, piece in board.occupied():
        if owner(piece) == enemy and king_sq in pseudo_moves(board, square):
            return True
    return False


def is_legal(board: Board, from_square: Square, to_square: Square) -> bool:
    """True iff moving the piece does not leave its own king attacked."""
    require_square(to_square)
    piece = board.piece_at(from_square)
    if piece == EMPTY:
        return False
    return not _king_attacked_after(board, from_square, to_square, owner(piece))


def legal_moves(board: Board, square: Square, context: MoveContext | None = None) -> list[Square]:
    return [target for target in pseudo_moves(board, square, context) if is_legal(board, square, target)]


def has_legal_move(board: Board, side: int) -> bool:
    for square, piece in board.occupied():
        if owner(piece) == side and legal_moves(board, square):
            return True
    return False


def is_checkmate(board: Board, side: int) -> bool:
    if not in_check(board, side):
        return False
    return not has_legal_move(board, side)
