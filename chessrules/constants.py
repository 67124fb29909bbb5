"""Piece encoding, sides and game-state constants."""

from __future__ import annotations

from enum import Enum

EMPTY = 0
PAWN, KNIGHT, BISHOP, ROOK, QUEEN, KING = range(1, 7)

WHITE = 1
BLACK = -1

BOARD_SIZE = 8

PIECE_SYMBOLS = {
    PAWN: "P",
    KNIGHT: "N",
    BISHOP: "B",
    ROOK: "R",
    QUEEN: "Q",
    KING: "K",
}

SYMBOL_TO_KIND = {v: k for k, v in PIECE_SYMBOLS.items()}

BACK_RANK_ORDER = (ROOK, KNIGHT, BISHOP, QUEEN, KING, BISHOP, KNIGHT, ROOK)

# Rank 0 is Black's back rank, rank 7 is White's.
HOME_RANK = {WHITE: 7, BLACK: 0}
PAWN_RANK = {WHITE: 6, BLACK: 1}
PAWN_DIRECTION = {WHITE: -1, BLACK: 1}
EN_PASSANT_RANK = {WHITE: 3, BLACK: 4}

KING_FILE = 4
KINGSIDE_ROOK_FILE = 7
QUEENSIDE_ROOK_FILE = 0

FILES = "abcdefgh"


class GameState(Enum):
    IN_PROGRESS = "in_progress"
    WHITE_WINS = "white_wins"
    BLACK_WINS = "black_wins"


def kind(piece: int) -> int:
    return abs(piece)


def owner(piece: int) -> int:
    if piece > 0:
        return WHITE
    if piece < 0:
        return BLACK
    return EMPTY


def opposite(side: int) -> int:
    return -side


def side_name(side: int) -> str:
    return "white" if side == WHITE else "black"


def piece_symbol(piece: int) -> str:
    if piece == EMPTY:
        return "."
    symbol = PIECE_SYMBOLS[kind(piece)]
    return symbol if piece > 0 else symbol.lower()


def piece_from_symbol(symbol: str) -> int:
    if symbol == ".":
        return EMPTY
    try:
        piece_kind = SYMBOL_TO_KIND[symbol.upper()]
    except KeyError as exc:
        raise ValueError(f"Invalid piece symbol: {symbol}") from exc
    return piece_kind if symbol.isupper() else -piece_kind
