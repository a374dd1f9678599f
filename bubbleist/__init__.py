"""Parent1 rule for independent spanning trees of bubble-sort networks, with threaded, multi-process and hybrid benchmarks, reports and cluster configuration files."""

__version__ = "0.1.0"

__all__ = ["parent", "processing", "report", "cluster", "benchmark", "hybrid"]