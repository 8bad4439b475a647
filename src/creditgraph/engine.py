from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .config import Config, merge_config
from .graph import build_graphs
from .pagerank import pagerank
from .personalization import outcome_personalization
from .types import AGENT, Edge, Node


@dataclass(frozen=True)
class Attribution:
    forward: dict[str, float]
    reverse: dict[str, float]
    personalization: dict[str, float]
    scores: dict[str, float]


def hybrid_scores(
    nodes: list[Node],
    forward: Mapping[str, float],
    reverse: Mapping[str, float],
    alpha: float,
) -> dict[str, float]:
    return {
        node.id: alpha * forward.get(node.id, 0.0) + (1 - alpha) * reverse.get(node.id, 0.0)
        for node in nodes
        if node.type == AGENT
    }


def reward(scores: Mapping[str, float], pool: float = 1.0) -> dict[str, float]:
    total = sum(scores.values())
    if total == 0:
        return dict(scores)
    return {agent: score / total * pool for agent, score in scores.items()}


class AttributionEngine:
    """Scores agents by blending forward and outcome-personalized reverse PageRank.

    ``config`` may be a ``Config``, a partial mapping (merged over the
    defaults) or ``None``. The engine holds no state besides its config, so
    one instance can serve any number of ``evaluate`` calls.
    """

    def __init__(self, config: Config | Mapping[str, Any] | None = None) -> None:
        self.config = merge_config(config)

    def evaluate_detailed(self, nodes: list[Node], edges: list[Edge]) -> Attribution:
        """Both PageRank runs plus the blended agent scores.

        ``forward`` and ``reverse`` cover every graph node, undeclared edge
        endpoints included; those take part in the uniform restart and hold
        rank that no agent receives. ``scores`` holds declared agents only.
        Raises InvalidGraphInput for a non-finite effective edge weight or a
        zero personalization, and ConvergenceError from either run.
        """
        cfg = self.config
        views = build_graphs(nodes, edges, cfg)

        forward = pagerank(
            views.forward,
            damping=cfg.damping,
            max_iterations=cfg.max_iterations,
            tolerance=cfg.tolerance,
        )

        personalization = outcome_personalization(nodes, edges, views.node_map, cfg.weights, views.weights)
        reverse = pagerank(
            views.reverse,
            damping=cfg.damping,
            personalization=personalization or None,
            max_iterations=cfg.max_iterations,
            tolerance=cfg.tolerance,
        )

        scores = hybrid_scores(nodes, forward, reverse, cfg.alpha)
        logging.debug("Attribution: agents=%d alpha=%.3f damping=%.3f", len(scores), cfg.alpha, cfg.damping)
        return Attribution(forward=forward, reverse=reverse, personalization=personalization, scores=scores)

    def evaluate(self, nodes: list[Node], edges: list[Edge]) -> dict[str, float]:
        return self.evaluate_detailed(nodes, edges).scores

    def reward(self, scores: Mapping[str, float], pool: float = 1.0) -> dict[str, float]:
        return reward(scores, pool)
