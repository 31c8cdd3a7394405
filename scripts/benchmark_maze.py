#!/usr/bin/env python3
"""Benchmark full maze map generation across room grid sizes."""

from __future__ import annotations

import argparse
import json
import logging
import random
import time
from pathlib import Path

from tilemaze import MapConfig
from tilemaze.pipeline import create_maze_pipeline

# (columns, rows) of 12x12-tile rooms
GRID_SIZES: tuple[tuple[int, int], ...] = (
    (4, 4),
    (6, 6),
    (10, 10),
    (16, 16),
    (24, 24),
)


class MazeBenchmark:
    """Benchmark runner for the maze pipeline."""

    def __init__(self, iterations: int, room_size: int) -> None:
        self.iterations = iterations
        self.room_size = room_size
        self.results: dict[str, dict[str, float]] = {}

    def _run_case(self, columns: int, rows: int) -> tuple[float, float]:
        """Run one case; return (average ms, average props placed)."""
        settings = MapConfig(
            map_width=columns * self.room_size,
            map_height=rows * self.room_size,
            columns=columns,
            rows=rows,
            room_width=self.room_size,
            room_height=self.room_size,
        )
        pipeline = create_maze_pipeline(settings)
        elapsed_total = 0.0
        props_total = 0

        for i in range(self.iterations):
            rng = random.Random((columns * 1_000_000) + (rows * 1_000) + i)

            start = time.perf_counter()
            generated = pipeline.generate(rng)
            elapsed_total += time.perf_counter() - start
            props_total += generated.report.props_placed

        return (
            (elapsed_total / self.iterations) * 1000.0,
            props_total / self.iterations,
        )

    def run(self) -> None:
        """Run all configured grid-size benchmarks."""
        print("Maze Pipeline Benchmark")
        print("=" * 42)
        print(f"Iterations per size: {self.iterations}")
        print()
        print(f"{'Rooms':>12} {'Time (ms)':>12} {'Props':>10}")
        print("-" * 42)

        for columns, rows in GRID_SIZES:
            elapsed_ms, props = self._run_case(columns, rows)

            size_key = f"{columns}x{rows}"
            self.results[size_key] = {
                "elapsed_ms": elapsed_ms,
                "props": props,
            }

            print(f"{size_key:>12} {elapsed_ms:12.2f} {props:10.1f}")

    def save_results(self, filename: str) -> None:
        """Save benchmark output to a JSON file."""
        with Path(filename).open("w") as f:
            json.dump(self.results, f, indent=2)
        print(f"\nSaved benchmark results to {filename}")

    def compare_with_baseline(self, baseline_file: str) -> None:
        """Compare current run with a saved baseline JSON file."""
        try:
            with Path(baseline_file).open() as f:
                baseline: dict[str, dict[str, float]] = json.load(f)
        except FileNotFoundError:
            print(f"\nBaseline file not found: {baseline_file}")
            return

        print(f"\nComparison vs baseline: {baseline_file}")
        print("=" * 64)

        for size_key, current in self.results.items():
            if size_key not in baseline:
                continue

            old_ms = baseline[size_key].get("elapsed_ms", 0.0)
            new_ms = current["elapsed_ms"]
            if old_ms <= 0:
                continue

            delta_pct = ((new_ms - old_ms) / old_ms) * 100.0
            speed_ratio = old_ms / new_ms if new_ms > 0 else 0.0
            trend = "faster" if speed_ratio > 1.0 else "slower"

            print(
                f"{size_key:>12}: {new_ms:8.2f}ms "
                f"vs {old_ms:8.2f}ms | {speed_ratio:5.2f}x {trend} "
                f"({delta_pct:+6.1f}%)"
            )


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Benchmark maze map generation")
    parser.add_argument(
        "--iterations",
        type=int,
        default=5,
        help="Number of runs per grid size (default: 5)",
    )
    parser.add_argument(
        "--room-size",
        type=int,
        default=12,
        help="Room width and height in tiles (default: 12)",
    )
    parser.add_argument("--save", type=str, help="Save current results to JSON")
    parser.add_argument(
        "--compare",
        type=str,
        help="Compare current results against baseline JSON",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Show generation log output"
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)

    benchmark = MazeBenchmark(iterations=args.iterations, room_size=args.room_size)
    benchmark.run()

    if args.save:
        benchmark.save_results(args.save)

    if args.compare:
        benchmark.compare_with_baseline(args.compare)


if __name__ == "__main__":
    main()
