from __future__ import annotations

import logging
import math
from collections import defaultdict

from .config import NormalizationConfig
from .types import Edge


def _transform(edges: list[Edge], transform: str) -> list[float]:
    if transform == "log1p":
        return [math.log1p(max(0.0, e.raw_weight)) for e in edges]
    return [e.raw_weight for e in edges]


def _ratio(value: float, denominator: float) -> float:
    # negative buckets can cancel epsilon exactly
    if denominator == 0:
        return 0.0
    return value / denominator


def normalize_edge_weights(edges: list[Edge], normalization: NormalizationConfig) -> list[float]:
    values = _transform(edges, normalization.transform)
    mode = normalization.edge_weight
    epsilon = normalization.epsilon

    if any(v < 0 for v in values):
        logging.warning("Edge weights contain negative values; they are used as-is (transform=%s)", normalization.transform)

    if mode == "none":
        return values

    if mode in ("perTypeSum", "perTypeMax"):
        by_type_sum: dict[str, float] = defaultdict(float)
        by_type_max: dict[str, float] = defaultdict(float)
        for edge, value in zip(edges, values):
            by_type_sum[edge.type] += value
            by_type_max[edge.type] = max(by_type_max[edge.type], value)
        denominators = by_type_sum if mode == "perTypeSum" else by_type_max
        return [_ratio(value, denominators[edge.type] + epsilon) for edge, value in zip(edges, values)]

    # perSourceTypeSum
    by_source_type: dict[tuple[str, str], float] = defaultdict(float)
    for edge, value in zip(edges, values):
        by_source_type[(edge.source, edge.type)] += value
    return [_ratio(value, by_source_type[(edge.source, edge.type)] + epsilon) for edge, value in zip(edges, values)]
