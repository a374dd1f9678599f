"""Compare sequential and threaded parent computation on random vertices."""

from __future__ import annotations

import argparse
import math
import random
import sys
import time
from collections.abc import Sequence
from dataclasses import dataclass

from bubbleist.parent import random_vertices
from bubbleist.processing import process_parallel, process_sequential

VALIDATION_LIMIT = 100


def _ratio(numerator: float, denominator: float) -> float:
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator)
    return numerator / denominator


@dataclass(frozen=True)
class BenchmarkResult:
    """Timings of one benchmark run, in seconds.

    ``mismatches`` counts vertices whose parents differ between the two
    runs; it is ``None`` when the run was too large to be validated.
    """

    n: int
    t: int
    num_vertices: int
    num_threads: int
    sequential_time: float
    parallel_time: float
    mismatches: int | None = None

    @property
    def speedup(self) -> float:
        return _ratio(self.sequential_time, self.parallel_time)

    @property
    def efficiency(self) -> float:
        return _ratio(self.speedup, self.num_threads)


def run_benchmark(
    n: int = 8,
    t: int = 2,
    num_vertices: int = 1000,
    num_threads: int = 4,
    seed: int | None = None,
) -> BenchmarkResult:
    """Time sequential and threaded parent computation for random vertices.

    Runs of at most ``VALIDATION_LIMIT`` vertices are also checked for
    agreement between the two methods.
    """
    if num_threads < 1:
        raise ValueError("num_threads must be at least 1")
    vertices = random_vertices(n, num_vertices, random.Random(seed))

    start = time.perf_counter()
    sequential = process_sequential(vertices, t)
    sequential_time = time.perf_counter() - start

    start = time.perf_counter()
    parallel = process_parallel(vertices, t, num_threads)
    parallel_time = time.perf_counter() - start

    mismatches = None
    if num_vertices <= VALIDATION_LIMIT:
        mismatches = sum(1 for a, b in zip(sequential, parallel) if a != b)

    return BenchmarkResult(
        n=n,
        t=t,
        num_vertices=num_vertices,
        num_threads=num_threads,
        sequential_time=sequential_time,
        parallel_time=parallel_time,
        mismatches=mismatches,
    )


def format_benchmark(result: BenchmarkResult) -> str:
    """Return the performance report for a benchmark run."""
    lines = [
        "",
        "----- Performance Results -----",
        f"Dimension (n): {result.n}",
        f"Tree (t): {result.t}",
        f"Number of vertices: {result.num_vertices}",
        f"Number of threads: {result.num_threads}",
        "Sequential execution time: %.6f seconds" % result.sequential_time,
        "OpenMP execution time: %.6f seconds" % result.parallel_time,
        "Speedup: %.2f" % result.speedup,
        "Efficiency: %.2f%%" % (result.efficiency * 100),
    ]
    if result.mismatches is not None:
        lines += ["", "Validating results..."]
        if result.mismatches > 0:
            lines.append(
                f"WARNING: {result.mismatches} mismatches found between "
                "sequential and parallel results!"
            )
        else:
            lines.append(
                "All results match between sequential and parallel execution."
            )
    return "\n".join(lines) + "\n"


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Benchmark sequential against threaded Parent1 computation."
    )
    parser.add_argument("n", type=int, nargs="?", default=8, help="dimension of Bn")
    parser.add_argument("t", type=int, nargs="?", default=2, help="index of the tree")
    parser.add_argument(
        "num_vertices", type=int, nargs="?", default=1000, help="vertices to process"
    )
    parser.add_argument(
        "num_threads", type=int, nargs="?", default=4, help="worker threads"
    )
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the benchmark from the command line."""
    args = _parser().parse_args(argv)
    print(
        f"Generating {args.num_vertices} random vertices for dimension {args.n}..."
    )
    print("Running sequential processing...")
    print(f"Running parallel processing with {args.num_threads} threads...")
    try:
        result = run_benchmark(
            args.n, args.t, args.num_vertices, args.num_threads, args.seed
        )
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print(format_benchmark(result), end="")
    return 0


if __name__ == "__main__":
    sys.exit(main())