"""Host files, machine files and deployment scripts for a compute cluster."""

from __future__ import annotations

import stat
from pathlib import Path

CONFIG_DIR = "cluster_config"
DEFAULT_PPN = 4


def _check_nodes(num_nodes: int) -> None:
    if num_nodes < 1:
        raise ValueError("a cluster needs at least one node")


def _compute_nodes(num_nodes: int) -> list[str]:
    return [f"compute-{i:02d}" for i in range(1, num_nodes)]


def hostfile_text(num_nodes: int) -> str:
    """Return a host file listing the master and ``num_nodes - 1`` compute nodes."""
    _check_nodes(num_nodes)
    lines = ["master slots=1"] + [f"{node} slots=1" for node in _compute_nodes(num_nodes)]
    return "\n".join(lines) + "\n"


def write_hostfile(num_nodes: int, directory: str | Path = ".") -> Path:
    """Write ``hostfile`` into ``directory`` and return its path."""
    target = Path(directory) / "hostfile"
    target.write_text(hostfile_text(num_nodes))
    return target


def machinefile_text(num_nodes: int, ppn: int) -> str:
    """Return a machine file giving every node ``ppn`` processes."""
    _check_nodes(num_nodes)
    lines = [f"master:{ppn}"] + [f"{node}:{ppn}" for node in _compute_nodes(num_nodes)]
    return "\n".join(lines) + "\n"


def write_machinefile(num_nodes: int, ppn: int, directory: str | Path = ".") -> Path:
    """Write ``machinefile`` into ``directory`` and return its path."""
    target = Path(directory) / "machinefile"
    target.write_text(machinefile_text(num_nodes, ppn))
    return target


def ensure_directory(path: str | Path) -> bool:
    """Create ``path`` if it is missing; return whether it was created."""
    target = Path(path)
    if target.exists():
        return False
    target.mkdir(mode=0o700)
    return True


def readme_text(num_nodes: int) -> str:
    """Return the deployment instructions for a cluster of ``num_nodes`` nodes."""
    return (
        "PARENT1 ALGORITHM CLUSTER DEPLOYMENT\n"
        "====================================\n\n"
        "This package contains scripts to deploy and run the Parent1 algorithm\n"
        f"on a cluster with {num_nodes} nodes using hybrid MPI/OpenMP parallelization.\n\n"
        "Setup Instructions:\n"
        "1. Edit hostfile and machinefile to match your cluster configuration\n"
        "2. Run ./setup_cluster.sh to prepare the environment\n"
        "3. Run ./run_benchmark.sh to execute the benchmarks\n\n"
        "Results will be stored in the results/ directory.\n"
    )


def setup_cluster_environment(num_nodes: int, directory: str | Path = ".") -> Path:
    """Create the configuration tree, host and machine files and README.

    Returns the path of the configuration directory.
    """
    _check_nodes(num_nodes)
    base = Path(directory)
    config = base / CONFIG_DIR
    ensure_directory(config)
    ensure_directory(config / "logs")
    ensure_directory(config / "results")
    write_hostfile(num_nodes, base)
    write_machinefile(num_nodes, DEFAULT_PPN, base)
    (config / "README.txt").write_text(readme_text(num_nodes))
    return config


def deployment_script(num_nodes: int, ppn: int, n: int, t: int, num_vertices: int) -> str:
    """Return a bash script that builds, distributes and benchmarks the program."""
    _check_nodes(num_nodes)
    lines = [
        "#!/bin/bash",
        "",
        "# Automatic deployment script for Parent1 algorithm cluster setup",
        f"# Configured for {num_nodes} nodes with {ppn} processes per node",
        "",
        'echo "Setting up environment..."',
        "mkdir -p logs results",
        "",
        'echo "Compiling Parent1 algorithm..."',
        "mpic++ -fopenmp -O3 parent1_hybrid.c -o parent1_hybrid",
        "",
        'echo "Configuring nodes..."',
        f"for i in $(seq 1 {num_nodes - 1}); do",
        '    node="compute-$(printf %02d $i)"',
        '    echo "Setting up $node..."',
        '    ssh $node "mkdir -p ~/parent1_workspace"',
        "    scp parent1_hybrid $node:~/parent1_workspace/",
        "done",
        "",
        'echo "Creating run script..."',
        "cat > run_benchmark.sh << 'EOL'",
        "#!/bin/bash",
        "# Run benchmark script for Parent1 algorithm",
        "",
        'timestamp=$(date +"%Y%m%d_%H%M%S")',
        'log_file="logs/benchmark_${timestamp}.log"',
        "",
        'echo "Starting benchmark at $(date)" | tee $log_file',
        "",
        "# Run with different configurations",
        f"for procs in 1 2 4 8 {num_nodes * ppn}; do",
        f"    for threads in 1 2 4 8 {ppn}; do",
        '        echo "Running with $procs MPI processes and $threads OpenMP threads"'
        " | tee -a $log_file",
        "        mpirun -np $procs --hostfile hostfile -x OMP_NUM_THREADS=$threads"
        f" ./parent1_hybrid {n} {t} {num_vertices} $threads | tee -a $log_file",
        "    done",
        "done",
        "",
        'echo "Benchmark completed at $(date)" | tee -a $log_file',
        'echo "Results saved to $log_file"',
        "",
        "# Generate visualization",
        "if command -v gnuplot &> /dev/null; then",
        '    echo "Generating visualization..."',
        "    gnuplot plot_performance.gp",
        '    echo "Visualization saved to performance_plot.png"',
        "else",
        '    echo "Gnuplot not found. Skipping visualization."',
        "fi",
        "EOL",
        "",
        "chmod +x run_benchmark.sh",
        "",
        'echo "Cluster setup complete. Run ./run_benchmark.sh to execute benchmarks."',
    ]
    return "\n".join(lines) + "\n"


def write_deployment_script(
    num_nodes: int,
    ppn: int,
    n: int,
    t: int,
    num_vertices: int,
    directory: str | Path = ".",
) -> Path:
    """Write ``setup_cluster.sh`` into ``directory``, make it executable, return its path."""
    target = Path(directory) / "setup_cluster.sh"
    target.write_text(deployment_script(num_nodes, ppn, n, t, num_vertices))
    mode = target.stat().st_mode
    target.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return target