"""Parent computation for independent spanning trees of the bubble-sort network."""

from __future__ import annotations

import random
from collections.abc import Sequence

Vertex = tuple[int, ...]


def _as_vertex(vertex: Sequence[int]) -> Vertex:
    result = tuple(vertex)
    if not result:
        raise ValueError("a vertex must hold at least one symbol")
    return result


def swap(vertex: Sequence[int], symbol: int) -> Vertex:
    """Return the neighbour of ``vertex`` reached by moving ``symbol`` one place right.

    The symbol trades places with its right-hand neighbour; a symbol in the
    last position trades places with the first one.
    """
    v = _as_vertex(vertex)
    try:
        i = v.index(symbol)
    except ValueError:
        raise ValueError(f"symbol {symbol} does not occur in vertex {v}") from None
    p = list(v)
    j = i + 1 if i < len(v) - 1 else 0
    p[i], p[j] = p[j], p[i]
    return tuple(p)


def find_position(vertex: Sequence[int], t: int) -> Vertex:
    """Return the parent of ``vertex`` in tree ``t`` for the case ``t != n - 1``."""
    v = _as_vertex(vertex)
    n = len(v)
    if t == 2:
        candidate = swap(v, t - 1)
        if candidate[-1] == 1:
            return candidate
    last = v[-1]
    if t <= last <= n - 1:
        return swap(v, last)
    return swap(v, t)


def parent1(vertex: Sequence[int], t: int) -> Vertex:
    """Return the parent of ``vertex`` in the ``t``-th independent spanning tree."""
    v = _as_vertex(vertex)
    n = len(v)
    if t != n - 1:
        return find_position(v, t)
    if v[-1] == n:
        return swap(v, n - 1)
    if n >= 2 and v[-1] == n - 1 and v[-2] == n and swap(v, n)[-1] != 1:
        return swap(v, n) if t == 1 else swap(v, t - 1)
    if v[-1] == t:
        return swap(v, n)
    return swap(v, t)


def format_vertex(vertex: Sequence[int]) -> str:
    """Render a vertex as ``(a, b, c)``."""
    return "(" + ", ".join(str(s) for s in vertex) + ")"


def random_vertices(
    n: int, count: int, rng: random.Random | None = None
) -> list[Vertex]:
    """Return ``count`` random permutations of the symbols ``1..n``."""
    if n < 0:
        raise ValueError("dimension must not be negative")
    if count < 0:
        raise ValueError("count must not be negative")
    rng = rng if rng is not None else random.Random()
    symbols = range(1, n + 1)
    return [tuple(rng.sample(symbols, n)) for _ in range(count)]