import random

import pytest

from bubbleist.parent import parent1, random_vertices
from bubbleist.processing import (
    partition,
    process_distributed,
    process_parallel,
    process_sequential,
)


@pytest.fixture
def vertices():
    return random_vertices(8, 60, random.Random(7))


def test_sequential_matches_parent1(vertices):
    results = process_sequential(vertices, 2)
    assert len(results) == len(vertices)
    assert results[0] == parent1(vertices[0], 2)
    assert results[-1] == parent1(vertices[-1], 2)


def test_sequential_empty():
    assert process_sequential([], 3) == []


@pytest.mark.parametrize("workers", [1, 2, 4])
def test_parallel_matches_sequential(vertices, workers):
    assert process_parallel(vertices, 2, workers) == process_sequential(vertices, 2)


def test_parallel_rejects_zero_workers(vertices):
    with pytest.raises(ValueError):
        process_parallel(vertices, 2, 0)


def test_partition_block_sizes():
    assert [len(b) for b in partition(10, 3)] == [4, 3, 3]


@pytest.mark.parametrize("count,size", [(0, 1), (1, 4), (1000, 7), (12, 4), (5, 5)])
def test_partition_covers_all_contiguously(count, size):
    blocks = partition(count, size)
    assert len(blocks) == size
    joined = [i for block in blocks for i in block]
    assert joined == list(range(count))
    lengths = [len(b) for b in blocks]
    assert max(lengths) - min(lengths) <= 1
    assert lengths == sorted(lengths, reverse=True)


def test_partition_rejects_zero_size():
    with pytest.raises(ValueError):
        partition(10, 0)


def test_partition_rejects_negative_count():
    with pytest.raises(ValueError):
        partition(-1, 2)


def test_distributed_single_process(vertices):
    assert process_distributed(vertices, 3, 1, 2) == process_sequential(vertices, 3)


def test_distributed_matches_sequential(vertices):
    assert process_distributed(vertices, 2, 2, 2) == process_sequential(vertices, 2)


def test_distributed_more_processes_than_vertices():
    small = random_vertices(5, 2, random.Random(9))
    assert process_distributed(small, 4, 3, 1) == process_sequential(small, 4)


def test_distributed_rejects_bad_counts(vertices):
    with pytest.raises(ValueError):
        process_distributed(vertices, 2, 0, 1)
    with pytest.raises(ValueError):
        process_distributed(vertices, 2, 1, 0)