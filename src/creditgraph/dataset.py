from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .config import DEFAULT_CONFIG, Config, merge_config
from .errors import DatasetError
from .types import Edge, Node

_YAML_SUFFIXES = {".yaml", ".yml"}


@dataclass
class Dataset:
    nodes: list[Node]
    edges: list[Edge]
    config: Config = field(default_factory=lambda: DEFAULT_CONFIG)


def _read_document(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise DatasetError(f"Dataset file '{path}' does not exist") from e
    except (OSError, UnicodeDecodeError) as e:
        raise DatasetError(f"Cannot read dataset file '{path}': {e}") from e

    try:
        if path.suffix.lower() in _YAML_SUFFIXES:
            return yaml.safe_load(text)
        return json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise DatasetError(f"Cannot parse dataset file '{path}': {e}") from e


def parse_dataset(doc: Any) -> Dataset:
    if not isinstance(doc, Mapping):
        raise DatasetError(f"Dataset must be a mapping with 'nodes' and 'edges', got {type(doc).__name__}")

    raw_nodes = doc.get("nodes") or []
    raw_edges = doc.get("edges") or []
    if not isinstance(raw_nodes, list) or not isinstance(raw_edges, list):
        raise DatasetError("Dataset 'nodes' and 'edges' must be lists")
    if not all(isinstance(item, Mapping) for item in [*raw_nodes, *raw_edges]):
        raise DatasetError("Every dataset node and edge must be a mapping")

    nodes = [Node.from_dict(n) for n in raw_nodes]
    edges = [Edge.from_dict(e) for e in raw_edges]

    seen: set[str] = set()
    for node in nodes:
        if node.id in seen:
            raise DatasetError(f"Duplicate node id '{node.id}'")
        seen.add(node.id)

    return Dataset(nodes=nodes, edges=edges, config=merge_config(doc.get("config")))


def load_dataset(path: str | Path) -> Dataset:
    path = Path(path)
    dataset = parse_dataset(_read_document(path))
    logging.info("Loaded dataset %s: %d nodes, %d edges", path, len(dataset.nodes), len(dataset.edges))
    return dataset
