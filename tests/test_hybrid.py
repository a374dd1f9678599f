import pytest

from bubbleist.hybrid import (
    HybridResult,
    format_summary,
    main,
    run_hybrid,
    run_scalability_tests,
)
from bubbleist.report import CSV_HEADER


def _result(**overrides):
    values = dict(
        n=5,
        t=2,
        num_vertices=10,
        processes=2,
        threads=3,
        sequential=1.0,
        openmp=0.5,
        mpi=0.5,
        hybrid=0.25,
        mismatch=None,
    )
    values.update(overrides)
    return HybridResult(**values)


def test_run_hybrid_single_process_verifies():
    result = run_hybrid(n=5, t=2, num_vertices=20, num_threads=2, processes=1, seed=1)
    assert result.verified
    assert result.mismatch is None
    assert result.total_cores == result.processes * result.threads
    assert result.num_vertices == 20


def test_run_hybrid_two_processes_verifies():
    result = run_hybrid(n=4, t=3, num_vertices=9, num_threads=2, processes=2, seed=5)
    assert result.verified
    assert result.processes == 2


def test_run_hybrid_rejects_zero_processes():
    with pytest.raises(ValueError):
        run_hybrid(n=4, t=1, num_vertices=4, num_threads=1, processes=0, seed=1)


def test_to_config_result_keeps_timings():
    result = _result()
    config = result.to_config_result()
    assert (config.processes, config.threads) == (result.processes, result.threads)
    assert config.hybrid == result.hybrid
    assert config.speedup() == pytest.approx(result.sequential / result.hybrid)


def test_format_summary_passed():
    text = format_summary(_result())
    assert text.startswith("Verifying results correctness...\n")
    assert "Results verification: PASSED" in text
    assert "Total cores used: 6" in text
    assert "Sequential time: 1.000000 seconds" in text
    assert "===== PERFORMANCE SUMMARY =====" in text


def test_format_summary_reports_mismatch():
    text = format_summary(_result(mismatch=(4, 1, 3, 2)))
    assert "ERROR: Mismatch at vertex 4 position 1: sequential=3, hybrid=2" in text
    assert "Results verification: FAILED" in text


def test_scalability_tests_cover_every_configuration(tmp_path):
    results = run_scalability_tests(4, 1, 6, max_threads=2, max_procs=1, directory=tmp_path)
    assert [(r.processes, r.threads) for r in results] == [(1, 1), (1, 2)]
    rows = (tmp_path / "performance_results.csv").read_text().splitlines()
    assert rows[0] == CSV_HEADER
    assert len(rows) == len(results) + 1
    script = (tmp_path / "plot_performance.gp").read_text()
    assert script.startswith("set terminal png size 800,600\n")


def test_scalability_rejects_zero_threads(tmp_path):
    with pytest.raises(ValueError):
        run_scalability_tests(4, 1, 6, max_threads=0, max_procs=1, directory=tmp_path)


def test_main_single_run_writes_files(tmp_path, capsys):
    assert main(["5", "2", "12", "2", "--seed", "2", "--directory", str(tmp_path)]) == 0
    out = capsys.readouterr().out
    assert "Results verification: PASSED" in out
    rows = (tmp_path / "performance_results.csv").read_text().splitlines()
    assert rows[0] == CSV_HEADER
    assert len(rows) == 2
    assert (tmp_path / "plot_performance.gp").exists()


def test_main_setup_cluster(tmp_path):
    assert main(["5", "2", "10", "2", "1", "0", "3", "--directory", str(tmp_path)]) == 0
    assert "compute-02 slots=1" in (tmp_path / "hostfile").read_text()
    assert (tmp_path / "cluster_config" / "README.txt").exists()
    script = (tmp_path / "setup_cluster.sh").read_text()
    assert "./parent1_hybrid 5 2 10 $threads" in script


def test_main_scalability(tmp_path, capsys):
    assert main(["4", "1", "6", "1", "0", "1", "2", "1", "--directory", str(tmp_path)]) == 0
    out = capsys.readouterr().out
    assert "PERFORMANCE ANALYSIS REPORT" in out
    rows = (tmp_path / "performance_results.csv").read_text().splitlines()
    assert len(rows) == 3


def test_main_reports_error(tmp_path, capsys):
    assert main(["5", "9", "4", "1", "--directory", str(tmp_path)]) == 1
    assert "Error:" in capsys.readouterr().err