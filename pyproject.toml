[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bubbleist"
version = "0.1.0"
description = "Parent1 rule for independent spanning trees of bubble-sort networks, with sequential, threaded, multi-process and hybrid benchmarks"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "bubble-sort network",
    "independent spanning trees",
    "permutations",
    "parallel",
    "benchmark",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
    "Topic :: System :: Benchmark",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
bubbleist-benchmark = "bubbleist.benchmark:main"
bubbleist-hybrid = "bubbleist.hybrid:main"

[tool.hatch.build.targets.wheel]
packages = ["bubbleist"]

[tool.pytest.ini_options]
addopts = "-ra"
