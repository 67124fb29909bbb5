#!/usr/bin/env python3
"""Chart perft throughput and elapsed time per position from bench.py output."""

from __future__ import annotations

import argparse
import csv
from collections import defaultdict
from pathlib import Path

import matplotlib.pyplot as plt

ROOT = Path(__file__).resolve().parents[1]


def load_series(path: Path) -> dict[str, list[tuple[int, int, float]]]:
    """Group ``(depth, nps, elapsed_ms)`` rows by position, sorted by depth."""
    series: dict[str, list[tuple[int, int, float]]] = defaultdict(list)
    with path.open("r", encoding="utf-8") as handle:
        for row in csv.DictReader(handle):
            series[row["position"]].append((int(row["depth"]), int(row["nps"]), float(row["elapsed_ms"])))
    return {position: sorted(points) for position, points in sorted(series.items())}


def plot(series: dict[str, list[tuple[int, int, float]]], output: Path) -> None:
    fig, (nps_ax, time_ax) = plt.subplots(1, 2, figsize=(12, 5))
    for position, points in series.items():
        depths = [depth for depth, _, _ in points]
        nps_ax.plot(depths, [nps for _, nps, _ in points], marker="o", label=position)
        time_ax.plot(depths, [ms for _, _, ms in points], marker="s", label=position)

    nps_ax.set(title="Perft nodes/second", xlabel="depth", ylabel="nps")
    time_ax.set(title="Perft elapsed time", xlabel="depth", ylabel="ms", yscale="log")
    for ax in (nps_ax, time_ax):
        ax.grid(True, alpha=0.4)
        ax.legend()

    output.parent.mkdir(parents=True, exist_ok=True)
    fig.tight_layout()
    fig.savefig(output, format="svg")
    plt.close(fig)


def main() -> None:
    parser = argparse.ArgumentParser(description="Plot perft benchmark metrics")
    parser.add_argument("--metrics", default=str(ROOT / "docs" / "metrics" / "perft_metrics.csv"))
    parser.add_argument("--output", default=str(ROOT / "docs" / "visuals" / "perft-charts.svg"))
    args = parser.parse_args()

    output = Path(args.output)
    plot(load_series(Path(args.metrics)), output)
    print(f"wrote {output}")


if __name__ == "__main__":
    main()
