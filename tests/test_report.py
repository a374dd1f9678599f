import csv
import math

import pytest

from bubbleist.report import (
    ConfigResult,
    gnuplot_script,
    performance_report,
    save_results_csv,
    write_gnuplot_script,
)


def _results():
    return [
        ConfigResult(1, 1, 2.0, 1.0, 1.0, 2.0),
        ConfigResult(2, 4, 2.0, 1.0, 1.0, 0.5),
        ConfigResult(4, 2, 2.0, 1.0, 1.0, 1.0),
    ]


def test_speedup_is_sequential_over_hybrid():
    assert ConfigResult(1, 1, 2.0, 1.0, 1.0, 0.5).speedup() == pytest.approx(4.0)


def test_speedup_with_zero_hybrid_time_is_infinite():
    assert ConfigResult(1, 1, 1.0, 1.0, 1.0, 0.0).speedup() == math.inf


def test_speedup_with_both_times_zero_is_nan():
    speedup = ConfigResult(1, 1, 0.0, 0.0, 0.0, 0.0).speedup()
    assert repr(float(speedup)) == "nan"


def test_report_requires_results():
    with pytest.raises(ValueError):
        performance_report([])


def test_report_names_best_configuration():
    text = performance_report(_results())
    assert "Best configuration: 2 MPI processes, 4 OpenMP threads" in text
    assert "PERFORMANCE ANALYSIS REPORT" in text


def test_report_has_one_row_per_configuration():
    results = _results()
    text = performance_report(results)
    rows = [line for line in text.splitlines() if line.startswith("|") and "---" not in line]
    # header row plus one row per configuration
    assert len(rows) == len(results) + 1


def test_report_first_best_wins_on_ties():
    results = [ConfigResult(3, 1, 1.0, 1.0, 1.0, 1.0), ConfigResult(5, 1, 1.0, 1.0, 1.0, 1.0)]
    assert "Best configuration: 3 MPI processes, 1 OpenMP threads" in performance_report(results)


def test_csv_round_trip(tmp_path):
    results = _results()
    path = save_results_csv(tmp_path / "perf.csv", results)
    with open(path, newline="") as handle:
        reader = csv.DictReader(handle)
        assert reader.fieldnames == [
            "Config", "Processes", "Threads", "Sequential", "OpenMP", "MPI", "Hybrid", "Speedup",
        ]
        rows = list(reader)
    assert len(rows) == len(results)
    for number, (row, result) in enumerate(zip(rows, results), start=1):
        assert int(row["Config"]) == number
        assert int(row["Processes"]) == result.processes
        assert int(row["Threads"]) == result.threads
        assert float(row["Sequential"]) == pytest.approx(result.sequential)
        assert float(row["Hybrid"]) == pytest.approx(result.hybrid)
        assert float(row["Speedup"]) == pytest.approx(result.speedup(), abs=0.01)


def test_gnuplot_script_references_files():
    script = gnuplot_script("data.csv", "out.png")
    assert "set output 'out.png'\n" in script
    assert script.count("'data.csv'") == 5
    assert script.startswith("set terminal png size 800,600\n")


def test_write_gnuplot_script_matches_text(tmp_path):
    target = tmp_path / "plot.gp"
    written = write_gnuplot_script("data.csv", "out.png", target)
    assert written == target
    assert target.read_text() == gnuplot_script("data.csv", "out.png")