from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import Any

from .errors import ConfigError
from .types import AGENT, ARTIFACT, NODE_TYPES, OUTCOME, Node

EDGE_WEIGHT_MODES = ("none", "perTypeSum", "perSourceTypeSum", "perTypeMax")
TRANSFORMS = ("none", "log1p")

_KEY_ALIASES = {
    "edgeWeight": "edge_weight",
    "nodesByType": "nodes_by_type",
    "nodesById": "nodes_by_id",
    "maxIterations": "max_iterations",
}


@dataclass(frozen=True)
class NormalizationConfig:
    edge_weight: str = "perTypeSum"
    transform: str = "none"
    epsilon: float = 1e-12

    def __post_init__(self) -> None:
        if self.edge_weight not in EDGE_WEIGHT_MODES:
            raise ConfigError(f"normalization.edgeWeight must be one of {EDGE_WEIGHT_MODES}, got {self.edge_weight!r}")
        if self.transform not in TRANSFORMS:
            raise ConfigError(f"normalization.transform must be one of {TRANSFORMS}, got {self.transform!r}")
        if not self.epsilon > 0:
            raise ConfigError(f"normalization.epsilon must be > 0, got {self.epsilon}")


def _default_type_multipliers() -> dict[str, float]:
    return {AGENT: 1.0, ARTIFACT: 1.0, OUTCOME: 1.0}


@dataclass(frozen=True)
class WeightsConfig:
    edges: Mapping[str, float] = field(default_factory=dict)
    nodes_by_type: Mapping[str, float] = field(default_factory=_default_type_multipliers)
    nodes_by_id: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        unknown = set(self.nodes_by_type) - set(NODE_TYPES)
        if unknown:
            raise ConfigError(f"weights.nodesByType has unknown node types: {sorted(unknown)}")

    def edge_multiplier(self, edge_type: str) -> float:
        return self.edges.get(edge_type, 1.0)

    def node_multiplier(self, node: Node | None) -> float:
        if node is None:
            return 1.0
        type_multiplier = self.nodes_by_type.get(node.type, 1.0)
        id_multiplier = self.nodes_by_id.get(node.id, 1.0)
        node_weight = 1.0 if node.weight is None else node.weight
        return type_multiplier * id_multiplier * node_weight


@dataclass(frozen=True)
class Config:
    alpha: float = 0.5
    damping: float = 0.85
    normalization: NormalizationConfig = field(default_factory=NormalizationConfig)
    weights: WeightsConfig = field(default_factory=WeightsConfig)
    max_iterations: int = 100
    tolerance: float = 1e-6

    def __post_init__(self) -> None:
        for name in ("alpha", "damping"):
            value = getattr(self, name)
            if math.isnan(value) or not 0.0 <= value <= 1.0:
                raise ConfigError(f"{name} must be in [0, 1], got {value}")
        if self.max_iterations <= 0:
            raise ConfigError(f"max_iterations must be > 0, got {self.max_iterations}")
        if not self.tolerance > 0:
            raise ConfigError(f"tolerance must be > 0, got {self.tolerance}")


DEFAULT_CONFIG = Config()


def _canonical(doc: Mapping[str, Any], section: str) -> dict[str, Any]:
    if not isinstance(doc, Mapping):
        raise ConfigError(f"{section} must be a mapping, got {type(doc).__name__}")
    return {_KEY_ALIASES.get(key, key): value for key, value in doc.items()}


def _check_keys(doc: Mapping[str, Any], allowed: type, section: str) -> None:
    names = {f.name for f in fields(allowed)}
    unknown = set(doc) - names
    if unknown:
        raise ConfigError(f"unknown {section} keys: {sorted(unknown)}")


def _number(value: Any, where: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{where} must be a number, got {value!r}") from e


def _merge_table(base: Mapping[str, float], override: Any, section: str) -> dict[str, float]:
    merged = dict(base)
    if override is None:
        return merged
    if not isinstance(override, Mapping):
        raise ConfigError(f"{section} must be a mapping, got {type(override).__name__}")
    for key, value in override.items():
        if value is not None:
            merged[str(key)] = _number(value, f"{section}.{key}")
    return merged


def _merge_normalization(base: NormalizationConfig, override: Any) -> NormalizationConfig:
    if override is None:
        return base
    doc = _canonical(override, "normalization")
    _check_keys(doc, NormalizationConfig, "normalization")
    epsilon = doc.get("epsilon")
    return NormalizationConfig(
        edge_weight=base.edge_weight if doc.get("edge_weight") is None else str(doc["edge_weight"]),
        transform=base.transform if doc.get("transform") is None else str(doc["transform"]),
        epsilon=base.epsilon if epsilon is None else _number(epsilon, "normalization.epsilon"),
    )


def _merge_weights(base: WeightsConfig, override: Any) -> WeightsConfig:
    if override is None:
        return base
    doc = _canonical(override, "weights")
    _check_keys(doc, WeightsConfig, "weights")
    return WeightsConfig(
        edges=_merge_table(base.edges, doc.get("edges"), "weights.edges"),
        nodes_by_type=_merge_table(base.nodes_by_type, doc.get("nodes_by_type"), "weights.nodesByType"),
        nodes_by_id=_merge_table(base.nodes_by_id, doc.get("nodes_by_id"), "weights.nodesById"),
    )


def merge_config(overrides: Config | Mapping[str, Any] | None = None, base: Config = DEFAULT_CONFIG) -> Config:
    """Layer a partial configuration over ``base`` one field at a time.

    Accepts camelCase (dataset documents) or snake_case keys. ``None``
    values never replace a default, and the nested multiplier tables are
    merged key by key so that overriding one edge type keeps the others.
    """
    if overrides is None:
        return base
    if isinstance(overrides, Config):
        return overrides

    doc = _canonical(overrides, "config")
    _check_keys(doc, Config, "config")

    def pick(name: str) -> Any:
        value = doc.get(name)
        return getattr(base, name) if value is None else value

    max_iterations = pick("max_iterations")
    if isinstance(max_iterations, float) and not max_iterations.is_integer():
        raise ConfigError(f"max_iterations must be an integer, got {max_iterations}")

    return Config(
        alpha=_number(pick("alpha"), "alpha"),
        damping=_number(pick("damping"), "damping"),
        normalization=_merge_normalization(base.normalization, doc.get("normalization")),
        weights=_merge_weights(base.weights, doc.get("weights")),
        max_iterations=int(_number(max_iterations, "max_iterations")),
        tolerance=_number(pick("tolerance"), "tolerance"),
    )
