from __future__ import annotations

from .analysis import Counterfactual, alpha_sweep, counterfactual
from .config import DEFAULT_CONFIG, Config, NormalizationConfig, WeightsConfig, merge_config
from .dataset import Dataset, load_dataset, parse_dataset
from .engine import Attribution, AttributionEngine, hybrid_scores, reward
from .errors import ConfigError, ConvergenceError, CreditGraphError, DatasetError, InvalidGraphInput
from .graph import Graph, build_forward_graph, build_graphs, build_reverse_graph
from .normalize import normalize_edge_weights
from .pagerank import pagerank
from .personalization import outcome_personalization
from .types import NODE_TYPES, Edge, Node, NodeType
from .version import __version__

__all__ = [
    "DEFAULT_CONFIG",
    "NODE_TYPES",
    "Attribution",
    "AttributionEngine",
    "Config",
    "ConfigError",
    "ConvergenceError",
    "Counterfactual",
    "CreditGraphError",
    "Dataset",
    "DatasetError",
    "Edge",
    "Graph",
    "InvalidGraphInput",
    "Node",
    "NodeType",
    "NormalizationConfig",
    "WeightsConfig",
    "__version__",
    "alpha_sweep",
    "build_forward_graph",
    "build_graphs",
    "build_reverse_graph",
    "counterfactual",
    "hybrid_scores",
    "load_dataset",
    "merge_config",
    "normalize_edge_weights",
    "outcome_personalization",
    "pagerank",
    "parse_dataset",
    "reward",
]
