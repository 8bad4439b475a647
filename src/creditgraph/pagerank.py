from __future__ import annotations

import logging
from collections.abc import Mapping

from .errors import ConvergenceError, InvalidGraphInput
from .graph import Graph


def _restart_vector(order: list[str], personalization: Mapping[str, float] | None) -> list[float]:
    n = len(order)
    if personalization is None:
        return [1.0 / n] * n

    raw = [personalization.get(node, 0.0) for node in order]
    total = sum(raw)
    if total == 0:
        raise InvalidGraphInput("personalization vector sums to zero over the graph's nodes")
    return [value / total for value in raw]


def _transition_shares(graph: Graph, order: list[str]) -> tuple[list[list[tuple[int, float]]], list[int]]:
    index = {node: i for i, node in enumerate(order)}
    shares: list[list[tuple[int, float]]] = []
    dangling: list[int] = []

    for i, node in enumerate(order):
        out_degree = graph.out_degree(node)
        if out_degree == 0:
            dangling.append(i)
            shares.append([])
            continue
        shares.append([(index[e.target], e.weight / out_degree) for e in graph.out_edges(node)])

    return shares, dangling


def pagerank(
    graph: Graph,
    damping: float = 0.85,
    personalization: Mapping[str, float] | None = None,
    max_iterations: int = 100,
    tolerance: float = 1e-6,
) -> dict[str, float]:
    """Weighted power-iteration PageRank with a restart distribution.

    ``personalization`` is renormalized over the graph's nodes and used three
    ways: as the initial rank, as the random-jump target and as the
    destination of rank held by dangling nodes. ``None`` means uniform over
    every node in ``graph``, including endpoints added for edges that point
    at undeclared ids, so such nodes dilute the mass of the declared ones.

    Raises InvalidGraphInput if the personalization sums to zero and
    ConvergenceError if the L1 change does not fall below
    ``len(graph) * tolerance`` within ``max_iterations`` passes.
    """
    n = len(graph)
    if n == 0:
        return {}

    order = list(graph.nodes)
    restart = _restart_vector(order, personalization)
    shares, dangling = _transition_shares(graph, order)

    rank = list(restart)
    error = 0.0
    for iteration in range(1, max_iterations + 1):
        dangling_mass = sum(rank[d] for d in dangling)
        jump = damping * dangling_mass + (1 - damping)

        next_rank = [0.0] * n
        for i, links in enumerate(shares):
            flow = damping * rank[i]
            for j, share in links:
                next_rank[j] += flow * share
        for v in range(n):
            next_rank[v] += jump * restart[v]

        error = sum(abs(a - b) for a, b in zip(next_rank, rank))
        rank = next_rank
        if error < n * tolerance:
            logging.debug("PageRank converged: nodes=%d dangling=%d iterations=%d error=%.3e", n, len(dangling), iteration, error)
            return dict(zip(order, rank))

    raise ConvergenceError(max_iterations, error)
