#!/usr/bin/env python3
"""Generate reproducible perft benchmark CSVs for the rules engine."""

from __future__ import annotations

import argparse
import csv
from dataclasses import dataclass
from pathlib import Path
from time import perf_counter
import sys

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from chessrules.board import Board
from chessrules.game import Game
from chessrules.perft import perft


CASTLING_DIAGRAM = """
r . . . k . . r
. . . . . . . .
. . . . . . . .
. . . . . . . .
. . . . . . . .
. . . . . . . .
. . . . . . . .
R . . . K . . R
"""


@dataclass(frozen=True)
class PositionCase:
    name: str
    diagram: str | None


def _write_csv(path: Path, fieldnames: list[str], rows: list[dict[str, object]]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=fieldnames)
        writer.writeheader()
        writer.writerows(rows)


def _game_for(case: PositionCase) -> Game:
    if case.diagram is None:
        return Game()
    return Game(Board.from_diagram(case.diagram))


def run_perft_bench(depths_by_case: dict[PositionCase, list[int]]) -> list[dict[str, object]]:
    rows: list[dict[str, object]] = []
    for case, depths in depths_by_case.items():
        for depth in depths:
            game = _game_for(case)
            start = perf_counter()
            nodes = perft(game, depth)
            elapsed_ms = (perf_counter() - start) * 1000.0
            nps = int(nodes / max(elapsed_ms / 1000.0, 1e-9))
            rows.append(
                {
                    "position": case.name,
                    "depth": depth,
                    "nodes": nodes,
                    "elapsed_ms": round(elapsed_ms, 3),
                    "nps": nps,
                }
            )
    return rows


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate perft benchmark CSV files")
    parser.add_argument(
        "--metrics-dir",
        default=str(ROOT / "docs" / "metrics"),
        help="Output directory for CSV metrics",
    )
    parser.add_argument("--max-depth", type=int, default=3, help="Deepest perft depth to time")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    metrics_dir = Path(args.metrics_dir)
    depths = list(range(1, args.max_depth + 1))

    perft_rows = run_perft_bench(
        {
            PositionCase("start", None): depths,
            # Kings and rooks only: exercises castling generation and transit checks.
            PositionCase("castling", CASTLING_DIAGRAM): depths,
        }
    )

    perft_path = metrics_dir / "perft_metrics.csv"
    _write_csv(
        perft_path,
        fieldnames=["position", "depth", "nodes", "elapsed_ms", "nps"],
        rows=perft_rows,
    )
    print(f"wrote {perft_path}")


if __name__ == "__main__":
    main()
