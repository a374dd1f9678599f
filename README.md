# bubbleist

Computes the parent of a vertex in the t-th independent spanning tree of the
bubble-sort network B_n (the Parent1 rule), and times that computation run
sequentially, on a thread pool, across worker processes, and as a hybrid of
worker processes that each run a thread pool.

A vertex is a permutation of `1..n`, given as a sequence of integers; results
come back as tuples.

## Installing

    pip install .

For the tests:

    pip install ".[test]"
    pytest

## Using the library

    import random
    from bubbleist.parent import parent1, format_vertex, random_vertices

    print(format_vertex(parent1((1, 3, 2, 4), 2)))   # (1, 3, 4, 2)

    vertices = random_vertices(8, 1000, random.Random(42))

`bubbleist.parent`:

- `swap(vertex, symbol)` moves `symbol` one place right; a symbol in the last
  position trades places with the first. Raises `ValueError` if the symbol is
  not in the vertex.
- `find_position(vertex, t)` and `parent1(vertex, t)` apply the parent rule.
- `format_vertex(vertex)` renders `(a, b, c)`.
- `random_vertices(n, count, rng=None)` returns `count` random permutations.

`bubbleist.processing`:

- `process_sequential(vertices, t)` returns the parents in input order.
- `process_parallel(vertices, t, workers)` does the same on a thread pool.
- `partition(count, size)` splits `count` items into `size` contiguous ranges,
  the first `count % size` of them one item longer.
- `process_distributed(vertices, t, processes, threads)` hands each block to a
  local worker process, which runs its share on `threads` threads, and
  gathers the results back in input order.

`bubbleist.report` holds `ConfigResult` (processes, threads and the
sequential, openmp, mpi and hybrid timings, with `speedup()`), together with
`performance_report(results)`, `save_results_csv(path, results)`,
`gnuplot_script(data_file, output_file)` and
`write_gnuplot_script(data_file, output_file, path="plot_performance.gp")`.

`bubbleist.cluster` produces cluster configuration text and files:
`hostfile_text` / `write_hostfile`, `machinefile_text` / `write_machinefile`,
`readme_text`, `ensure_directory`, `setup_cluster_environment(num_nodes,
directory=".")` (creates `cluster_config/` with `logs/`, `results/` and a
`README.txt`, plus `hostfile` and a `machinefile` with 4 processes per node),
and `deployment_script` / `write_deployment_script`, which writes an
executable `setup_cluster.sh`.

`bubbleist.benchmark.run_benchmark` and `bubbleist.hybrid.run_hybrid` return
`BenchmarkResult` and `HybridResult` records; `format_benchmark` and
`format_summary` render them. `bubbleist.hybrid.run_scalability_tests` times
every combination of processes and threads and writes
`performance_results.csv` and `plot_performance.gp`.

## Commands

Compare sequential and threaded processing:

    bubbleist-benchmark [n] [t] [num_vertices] [num_threads] [--seed SEED]

Defaults are `n=8`, `t=2`, `1000` vertices and `4` threads. When there are at
most 100 vertices, the threaded results are checked against the sequential
ones.

Run the sequential / threaded / multi-process / hybrid comparison:

    bubbleist-hybrid [n] [t] [num_vertices] [num_threads] [setup_cluster] [run_scalability] [limit] [max_procs]
                     [-p PROCESSES] [--seed SEED] [--directory DIR]

- With `setup_cluster` nonzero, it writes the cluster configuration for
  `limit` nodes (default 4) into `--directory` and stops.
- Otherwise, with `run_scalability` nonzero, it times every combination of
  1..`max_procs` processes (default: `--processes`) and 1..`limit` threads
  (default 8), prints a report and writes `performance_results.csv` and
  `plot_performance.gp`.
- Otherwise it runs each mode once with `--processes` worker processes
  (default 1), checks that the hybrid results match the sequential ones,
  prints a summary, and writes the same CSV and plot script.

Both commands exit with status 1 and a message on invalid arguments.

Turn the CSV into a chart with `gnuplot plot_performance.gp`.

## What it does not do

The multi-process modes run on worker processes of the local machine only;
nothing is sent to other hosts. The files written by `bubbleist.cluster` are
text for use elsewhere: the generated `setup_cluster.sh` compiles, copies and
launches a program named `parent1_hybrid` with `mpic++` and `mpirun`, and that
program is not part of this package.