"""Perft utilities for move generation correctness checks."""

from __future__ import annotations

from .constants import owner
from .game import Game
from .square import Square


def generate_moves(game: Game) -> list[tuple[Square, Square]]:
    """Every legal (from, to) pair for the side to move, castling and en passant included."""
    moves: list[tuple[Square, Square]] = []
    for square, piece in list(game.board.occupied()):
        if owner(piece) != game.turn:
            continue
        for target in game.legal_moves(square):
            moves.append((square, target))
    return moves


def perft(game: Game, depth: int) -> int:
    if depth < 0:
        raise ValueError("Depth must be >= 0")
    if depth == 0:
        return 1

    moves = generate_moves(game)
    if depth == 1:
        return len(moves)

    nodes = 0
    for from_square, to_square in moves:
        child = game.copy()
        child.apply_move(from_square, to_square)
        nodes += perft(child, depth - 1)
    return nodes


def perft_divide(game: Game, depth: int) -> dict[str, int]:
    if depth < 1:
        raise ValueError("Depth must be >= 1 for perft divide")

    result: dict[str, int] = {}
    for from_square, to_square in generate_moves(game):
        child = game.copy()
        child.apply_move(from_square, to_square)
        result[f"{from_square}{to_square}"] = perft(child, depth - 1)
    return dict(sorted(result.items()))
