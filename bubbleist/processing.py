"""Sequential, threaded and multi-process evaluation of parent vertices."""

from __future__ import annotations

from collections.abc import Sequence
from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor

from bubbleist.parent import Vertex, parent1


def process_sequential(vertices: Sequence[Sequence[int]], t: int) -> list[Vertex]:
    """Return the parent of every vertex in tree ``t``, computed in order."""
    return [parent1(v, t) for v in vertices]


def process_parallel(
    vertices: Sequence[Sequence[int]], t: int, workers: int
) -> list[Vertex]:
    """Return the parent of every vertex in tree ``t`` using a pool of threads."""
    if workers < 1:
        raise ValueError("workers must be at least 1")
    with ThreadPoolExecutor(max_workers=workers) as pool:
        return list(pool.map(lambda v: parent1(v, t), vertices))


def partition(count: int, size: int) -> list[range]:
    """Split ``count`` items into ``size`` contiguous blocks.

    Each block gets ``count // size`` items; the first ``count % size``
    blocks get one more.
    """
    if size < 1:
        raise ValueError("size must be at least 1")
    if count < 0:
        raise ValueError("count must not be negative")
    base, remainder = divmod(count, size)
    blocks = []
    start = 0
    for rank in range(size):
        stop = start + base + (1 if rank < remainder else 0)
        blocks.append(range(start, stop))
        start = stop
    return blocks


def _process_block(block: list[Vertex], t: int, threads: int) -> list[Vertex]:
    return process_parallel(block, t, threads)


def process_distributed(
    vertices: Sequence[Sequence[int]], t: int, processes: int, threads: int
) -> list[Vertex]:
    """Return the parents of all vertices, split over worker processes.

    The vertices are divided into contiguous blocks, one per process; each
    process handles its block with ``threads`` threads.  Results come back
    in input order.
    """
    if processes < 1:
        raise ValueError("processes must be at least 1")
    if threads < 1:
        raise ValueError("threads must be at least 1")
    items = [tuple(v) for v in vertices]
    blocks = [[items[i] for i in block] for block in partition(len(items), processes)]
    if processes == 1:
        return _process_block(blocks[0], t, threads)
    with ProcessPoolExecutor(max_workers=processes) as pool:
        futures = [pool.submit(_process_block, block, t, threads) for block in blocks]
        return [parent for future in futures for parent in future.result()]