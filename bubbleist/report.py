"""Performance reports, CSV export and gnuplot scripts for benchmark runs."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

CSV_HEADER = "Config,Processes,Threads,Sequential,OpenMP,MPI,Hybrid,Speedup"
DEFAULT_SCRIPT_PATH = "plot_performance.gp"


def _ratio(numerator: float, denominator: float) -> float:
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator)
    return numerator / denominator


@dataclass(frozen=True)
class ConfigResult:
    """Timings, in seconds, for one process/thread configuration."""

    processes: int
    threads: int
    sequential: float
    openmp: float
    mpi: float
    hybrid: float

    def speedup(self) -> float:
        """Sequential time divided by hybrid time."""
        return _ratio(self.sequential, self.hybrid)


def performance_report(results: Sequence[ConfigResult]) -> str:
    """Return a table of all configurations with the best one highlighted."""
    if not results:
        raise ValueError("at least one configuration is required")
    lines = [
        "",
        "========== PERFORMANCE ANALYSIS REPORT ==========",
        "| Config | Processes | Threads | Sequential | OpenMP | MPI | Hybrid | Speedup |",
        "|--------|-----------|---------|------------|--------|-----|--------|--------|",
    ]
    for number, r in enumerate(results, start=1):
        lines.append(
            "| %6d | %9d | %7d | %10.6f | %6.6f | %3.6f | %6.6f | %6.2f |"
            % (
                number,
                r.processes,
                r.threads,
                r.sequential,
                r.openmp,
                r.mpi,
                r.hybrid,
                r.speedup(),
            )
        )

    best = results[0]
    best_speedup = best.speedup()
    for r in results[1:]:
        speedup = r.speedup()
        if speedup > best_speedup:
            best, best_speedup = r, speedup

    efficiency = _ratio(best_speedup, best.processes * best.threads)
    lines += [
        "",
        f"Best configuration: {best.processes} MPI processes, "
        f"{best.threads} OpenMP threads",
        "Best speedup: %.2f" % best_speedup,
        "=================================================",
        "Parallel efficiency: %.2f%%" % (efficiency * 100),
    ]
    return "\n".join(lines) + "\n"


def save_results_csv(path: str | Path, results: Sequence[ConfigResult]) -> Path:
    """Write the results as CSV to ``path`` and return the path."""
    target = Path(path)
    rows = [CSV_HEADER]
    for number, r in enumerate(results, start=1):
        rows.append(
            "%d,%d,%d,%.6f,%.6f,%.6f,%.6f,%.2f"
            % (
                number,
                r.processes,
                r.threads,
                r.sequential,
                r.openmp,
                r.mpi,
                r.hybrid,
                r.speedup(),
            )
        )
    target.write_text("\n".join(rows) + "\n")
    return target


def gnuplot_script(data_file: str, output_file: str) -> str:
    """Return a gnuplot script that plots the timings and speedup in ``data_file``."""
    return (
        "set terminal png size 800,600\n"
        f"set output '{output_file}'\n"
        "set title 'Performance Analysis of Parent1 Algorithm'\n"
        "set xlabel 'Configuration (Process x Threads)'\n"
        "set ylabel 'Execution Time (s)'\n"
        "set y2label 'Speedup'\n"
        "set y2tics nomirror\n"
        "set key outside\n"
        "set grid\n"
        "set datafile separator ','\n"
        "set xtics rotate by -45\n"
        f"plot '{data_file}' using 0:4 with linespoints title 'Sequential', \\\n"
        f"     '{data_file}' using 0:5 with linespoints title 'OpenMP', \\\n"
        f"     '{data_file}' using 0:6 with linespoints title 'MPI', \\\n"
        f"     '{data_file}' using 0:7 with linespoints title 'Hybrid', \\\n"
        f"     '{data_file}' using 0:8 with linespoints axes x1y2 title 'Speedup'\n"
    )


def write_gnuplot_script(
    data_file: str, output_file: str, path: str | Path = DEFAULT_SCRIPT_PATH
) -> Path:
    """Write the gnuplot script to ``path`` and return the path."""
    target = Path(path)
    target.write_text(gnuplot_script(data_file, output_file))
    return target