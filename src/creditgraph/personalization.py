from __future__ import annotations

import logging
from collections import defaultdict

from .config import WeightsConfig
from .types import OUTCOME, Edge, Node


def outcome_personalization(
    nodes: list[Node],
    edges: list[Edge],
    node_map: dict[str, Node],
    weights: WeightsConfig,
    effective: list[float],
) -> dict[str, float]:
    """Restart mass for the reverse run, seeded at outcome nodes.

    Each outcome collects the effective weight of the edges it originates.
    When no outcome originates an edge, every outcome is seeded with its node
    multiplier instead. With no outcomes at all the result is empty and the
    solver goes uniform.
    The result is not normalized.
    """
    outcomes = [n for n in nodes if n.type == OUTCOME]
    if not outcomes:
        return {}

    personalization: dict[str, float] = defaultdict(float)
    for edge, weight in zip(edges, effective):
        src_node = node_map.get(edge.source)
        if src_node is not None and src_node.type == OUTCOME:
            personalization[edge.source] += weight

    if not personalization:
        logging.debug("No outcome-sourced edges; seeding %d outcomes by node multiplier", len(outcomes))
        return {n.id: weights.node_multiplier(n) for n in outcomes}

    return dict(personalization)
