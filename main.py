"""Command-line utilities for the chess rules engine."""

from __future__ import annotations

import argparse
import logging
import sys

from chessrules.board import Board
from chessrules.constants import BLACK, WHITE
from chessrules.errors import ChessRulesError
from chessrules.game import Game
from chessrules.move import parse_move_squares
from chessrules.perft import perft, perft_divide


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Chess rules engine utilities")
    parser.add_argument("--diagram", help="File holding an 8-row board diagram (default: starting position)")
    parser.add_argument("--turn", choices=("w", "b"), default="w", help="Side to move")
    parser.add_argument("--log-level", default="WARNING", help="Logging level")

    subparsers = parser.add_subparsers(dest="command", required=False)

    subparsers.add_parser("show", help="Print the board")

    perft_parser = subparsers.add_parser("perft", help="Run perft")
    perft_parser.add_argument("depth", type=int, help="Perft depth")
    perft_parser.add_argument("--divide", action="store_true", help="Show per-move split")

    subparsers.add_parser("play", help="Read moves such as 'e2 e4' from stdin")

    return parser


def _load_game(args: argparse.Namespace) -> Game:
    turn = WHITE if args.turn == "w" else BLACK
    if args.diagram is None:
        return Game(turn=turn)
    with open(args.diagram, encoding="utf-8") as handle:
        return Game(Board.from_diagram(handle.read()), turn)


def play(game: Game, lines) -> None:
    print(game.board)
    for line in lines:
        if not line.strip():
            continue
        try:
            from_square, to_square = parse_move_squares(line)
            game.play(from_square, to_square)
        except (ValueError, ChessRulesError) as exc:
            print(f"error: {exc}")
            continue
        print(game.board)
        print(f"last {game.last_move} state {game.state.value}")
        if game.is_over():
            return


def run() -> None:
    parser = build_parser()
    args = parser.parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    game = _load_game(args)

    if args.command == "perft":
        if args.divide:
            for move, count in perft_divide(game, args.depth).items():
                print(f"{move}: {count}")
        else:
            print(perft(game, args.depth))
        return

    if args.command == "play":
        play(game, sys.stdin)
        return

    print(game.board)


if __name__ == "__main__":
    run()
