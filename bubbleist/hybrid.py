"""Hybrid multi-process and multi-thread evaluation with reports and cluster setup."""

from __future__ import annotations

import argparse
import math
import random
import sys
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import TypeVar

from bubbleist.cluster import setup_cluster_environment, write_deployment_script
from bubbleist.parent import Vertex, random_vertices
from bubbleist.processing import (
    process_distributed,
    process_parallel,
    process_sequential,
)
from bubbleist.report import (
    ConfigResult,
    performance_report,
    save_results_csv,
    write_gnuplot_script,
)

CSV_NAME = "performance_results.csv"
PLOT_NAME = "performance_plot.png"
SCRIPT_NAME = "plot_performance.gp"

_T = TypeVar("_T")


def _ratio(numerator: float, denominator: float) -> float:
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator)
    return numerator / denominator


def _timed(func: Callable[..., _T], *args) -> tuple[_T, float]:
    start = time.perf_counter()
    value = func(*args)
    return value, time.perf_counter() - start


@dataclass(frozen=True)
class HybridResult:
    """Timings, in seconds, of one hybrid run and the outcome of its verification.

    ``mismatch`` holds ``(vertex, position, sequential, hybrid)`` for the
    first differing symbol, or ``None`` when all results agree.
    """

    n: int
    t: int
    num_vertices: int
    processes: int
    threads: int
    sequential: float
    openmp: float
    mpi: float
    hybrid: float
    mismatch: tuple[int, int, int, int] | None = None

    @property
    def verified(self) -> bool:
        return self.mismatch is None

    @property
    def total_cores(self) -> int:
        return self.processes * self.threads

    def to_config_result(self) -> ConfigResult:
        """Return the timings as a report entry."""
        return ConfigResult(
            processes=self.processes,
            threads=self.threads,
            sequential=self.sequential,
            openmp=self.openmp,
            mpi=self.mpi,
            hybrid=self.hybrid,
        )


def _first_mismatch(
    expected: Sequence[Vertex], actual: Sequence[Vertex]
) -> tuple[int, int, int, int] | None:
    for index, (a, b) in enumerate(zip(expected, actual)):
        for position, (x, y) in enumerate(zip(a, b)):
            if x != y:
                return index, position, x, y
    return None


def _measure(
    vertices: Sequence[Vertex], t: int, processes: int, threads: int
) -> tuple[ConfigResult, tuple[int, int, int, int] | None]:
    if processes < 1:
        raise ValueError("processes must be at least 1")
    if threads < 1:
        raise ValueError("threads must be at least 1")
    sequential, seq_time = _timed(process_sequential, vertices, t)
    _, mpi_time = _timed(process_distributed, vertices, t, processes, 1)
    _, omp_time = _timed(process_parallel, vertices, t, threads)
    hybrid, hybrid_time = _timed(process_distributed, vertices, t, processes, threads)
    config = ConfigResult(
        processes=processes,
        threads=threads,
        sequential=seq_time,
        openmp=omp_time,
        mpi=mpi_time,
        hybrid=hybrid_time,
    )
    return config, _first_mismatch(sequential, hybrid)


def run_hybrid(
    n: int = 8,
    t: int = 2,
    num_vertices: int = 1000,
    num_threads: int = 4,
    processes: int = 1,
    seed: int | None = None,
) -> HybridResult:
    """Time sequential, thread-only, process-only and hybrid evaluation.

    The hybrid results are checked against the sequential ones.
    """
    vertices = random_vertices(n, num_vertices, random.Random(seed))
    config, mismatch = _measure(vertices, t, processes, num_threads)
    return HybridResult(
        n=n,
        t=t,
        num_vertices=num_vertices,
        processes=processes,
        threads=num_threads,
        sequential=config.sequential,
        openmp=config.openmp,
        mpi=config.mpi,
        hybrid=config.hybrid,
        mismatch=mismatch,
    )


def format_summary(result: HybridResult) -> str:
    """Return the verification outcome and performance summary of a hybrid run."""
    lines = ["Verifying results correctness..."]
    if result.mismatch is not None:
        vertex, position, expected, actual = result.mismatch
        lines.append(
            f"ERROR: Mismatch at vertex {vertex} position {position}: "
            f"sequential={expected}, hybrid={actual}"
        )
    lines.append(
        "Results verification: " + ("PASSED" if result.verified else "FAILED")
    )
    speedup = _ratio(result.sequential, result.hybrid)
    lines += [
        "",
        "===== PERFORMANCE SUMMARY =====",
        f"Dimension (n): {result.n}",
        f"Tree (t): {result.t}",
        f"Vertices processed: {result.num_vertices}",
        f"MPI processes: {result.processes}",
        f"OpenMP threads per process: {result.threads}",
        f"Total cores used: {result.total_cores}",
        "Sequential time: %.6f seconds" % result.sequential,
        "OpenMP-only time: %.6f seconds (Speedup: %.2fx)"
        % (result.openmp, _ratio(result.sequential, result.openmp)),
        "MPI-only time: %.6f seconds (Speedup: %.2fx)"
        % (result.mpi, _ratio(result.sequential, result.mpi)),
        "Hybrid time: %.6f seconds (Speedup: %.2fx)" % (result.hybrid, speedup),
        "Efficiency: %.2f%%" % (_ratio(speedup, result.total_cores) * 100),
        "==============================",
    ]
    return "\n".join(lines) + "\n"


def run_scalability_tests(
    n: int,
    t: int,
    num_vertices: int,
    max_threads: int = 8,
    max_procs: int = 1,
    directory: str | Path = ".",
) -> list[ConfigResult]:
    """Time every combination of 1..max_procs processes and 1..max_threads threads.

    The same random vertices are used for every configuration.  The results
    are saved as CSV together with a gnuplot script in ``directory``.
    """
    if max_threads < 1 or max_procs < 1:
        raise ValueError("max_threads and max_procs must be at least 1")
    vertices = random_vertices(n, num_vertices)
    results = [
        _measure(vertices, t, procs, threads)[0]
        for procs in range(1, max_procs + 1)
        for threads in range(1, max_threads + 1)
    ]
    base = Path(directory)
    save_results_csv(base / CSV_NAME, results)
    write_gnuplot_script(CSV_NAME, PLOT_NAME, base / SCRIPT_NAME)
    return results


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Hybrid process/thread benchmark of Parent1 computation."
    )
    parser.add_argument("n", type=int, nargs="?", default=8, help="dimension of Bn")
    parser.add_argument("t", type=int, nargs="?", default=2, help="index of the tree")
    parser.add_argument(
        "num_vertices", type=int, nargs="?", default=1000, help="vertices to process"
    )
    parser.add_argument(
        "num_threads", type=int, nargs="?", default=4, help="threads per process"
    )
    parser.add_argument(
        "setup_cluster", type=int, nargs="?", default=0,
        help="nonzero to write cluster configuration and exit",
    )
    parser.add_argument(
        "run_scalability", type=int, nargs="?", default=0,
        help="nonzero to run scalability tests and exit",
    )
    parser.add_argument(
        "limit", type=int, nargs="?", default=None,
        help="cluster nodes (default 4) or maximum threads to test (default 8)",
    )
    parser.add_argument(
        "max_procs", type=int, nargs="?", default=None,
        help="maximum processes to test (default: --processes)",
    )
    parser.add_argument(
        "-p", "--processes", type=int, default=1, help="worker processes"
    )
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    parser.add_argument(
        "--directory", default=".", help="where output files are written"
    )
    return parser


def _setup_cluster(args: argparse.Namespace) -> None:
    num_nodes = args.limit if args.limit is not None else 4
    print(f"Setting up cluster environment for {num_nodes} nodes...")
    setup_cluster_environment(num_nodes, args.directory)
    print(f"Hostfile created for {num_nodes} nodes.")
    print(
        f"Machine file created for {num_nodes} nodes with 4 processes per node."
    )
    write_deployment_script(
        num_nodes, args.num_threads, args.n, args.t, args.num_vertices, args.directory
    )
    print("Deployment script created: setup_cluster.sh")
    print("Cluster configuration complete. Run ./setup_cluster.sh to deploy.")


def _scalability(args: argparse.Namespace) -> None:
    max_threads = args.limit if args.limit is not None else 8
    max_procs = args.max_procs if args.max_procs is not None else args.processes
    print("Running scalability tests for different configurations...")
    print(
        f"This will test combinations of MPI processes (1-{max_procs}) "
        f"and OpenMP threads (1-{max_threads})"
    )
    results = run_scalability_tests(
        args.n, args.t, args.num_vertices, max_threads, max_procs, args.directory
    )
    print(performance_report(results), end="")
    print(f"Performance results saved to {CSV_NAME}")
    print(
        f"Gnuplot script generated. Run 'gnuplot {SCRIPT_NAME}' to create visualization."
    )


def _single_run(args: argparse.Namespace) -> None:
    print(f"Running with {args.processes} MPI processes")
    print(
        f"Master: Generating {args.num_vertices} random vertices "
        f"for dimension {args.n}..."
    )
    result = run_hybrid(
        args.n, args.t, args.num_vertices, args.num_threads, args.processes, args.seed
    )
    print("Master: Sequential execution time: %.6f seconds" % result.sequential)
    print("MPI-only execution time: %.6f seconds" % result.mpi)
    print("OpenMP-only execution time: %.6f seconds" % result.openmp)
    print("Hybrid MPI/OpenMP execution time: %.6f seconds" % result.hybrid)
    print(format_summary(result), end="")
    base = Path(args.directory)
    save_results_csv(base / CSV_NAME, [result.to_config_result()])
    print(f"Performance results saved to {CSV_NAME}")
    write_gnuplot_script(CSV_NAME, PLOT_NAME, base / SCRIPT_NAME)
    print(
        f"Gnuplot script generated. Run 'gnuplot {SCRIPT_NAME}' to create visualization."
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Run the hybrid benchmark, scalability tests or cluster setup."""
    args = _parser().parse_args(argv)
    try:
        if args.setup_cluster:
            _setup_cluster(args)
        elif args.run_scalability:
            _scalability(args)
        else:
            _single_run(args)
    except (ValueError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())