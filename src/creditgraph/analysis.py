from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from .config import Config, merge_config
from .engine import AttributionEngine
from .types import Edge, Node


@dataclass(frozen=True)
class Counterfactual:
    baseline: dict[str, float]
    without: dict[str, float]
    excluded: frozenset[str]

    @property
    def delta(self) -> dict[str, float]:
        """Payout each agent owes to the excluded nodes (baseline minus without)."""
        agents = list(self.baseline) + [a for a in self.without if a not in self.baseline]
        return {a: self.baseline.get(a, 0.0) - self.without.get(a, 0.0) for a in agents}


def alpha_sweep(
    nodes: list[Node],
    edges: list[Edge],
    alphas: Iterable[float],
    config: Config | Mapping[str, Any] | None = None,
    pool: float = 1.0,
) -> dict[str, dict[float, float]]:
    """Reward per agent for each alpha, everything else held fixed."""
    base = merge_config(config)
    results: dict[str, dict[float, float]] = {}
    for alpha in alphas:
        engine = AttributionEngine(merge_config({"alpha": alpha}, base=base))
        payout = engine.reward(engine.evaluate(nodes, edges), pool)
        for agent, amount in payout.items():
            results.setdefault(agent, {})[alpha] = amount
    return results


def counterfactual(
    nodes: list[Node],
    edges: list[Edge],
    exclude: Iterable[str],
    config: Config | Mapping[str, Any] | None = None,
    pool: float = 1.0,
) -> Counterfactual:
    """Compare rewards with and without every edge touching ``exclude``.

    The excluded nodes stay in the graph as isolated nodes.
    """
    excluded = frozenset(exclude)
    engine = AttributionEngine(config)
    kept = [e for e in edges if e.source not in excluded and e.target not in excluded]
    logging.debug("Counterfactual: excluded=%s dropped_edges=%d", sorted(excluded), len(edges) - len(kept))

    baseline = engine.reward(engine.evaluate(nodes, edges), pool)
    without = engine.reward(engine.evaluate(nodes, kept), pool)
    return Counterfactual(baseline=baseline, without=without, excluded=excluded)
