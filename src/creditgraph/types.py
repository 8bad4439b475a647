from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Literal

from .errors import InvalidGraphInput

NodeType = Literal["agent", "artifact", "outcome"]

AGENT = "agent"
ARTIFACT = "artifact"
OUTCOME = "outcome"
NODE_TYPES = (AGENT, ARTIFACT, OUTCOME)


def _optional_float(doc: Mapping[str, Any], key: str) -> float | None:
    value = doc.get(key)
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise InvalidGraphInput(f"'{key}' must be a number, got {value!r}") from e


def _require_str(doc: Mapping[str, Any], key: str, what: str) -> str:
    value = doc.get(key)
    if value is None or value == "":
        raise InvalidGraphInput(f"{what} is missing '{key}': {dict(doc)!r}")
    return str(value)


@dataclass(frozen=True)
class Node:
    id: str
    type: NodeType
    weight: float | None = None
    timestamp: float | None = None
    context: str | None = None
    metadata: Mapping[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @classmethod
    def from_dict(cls, doc: Mapping[str, Any]) -> Node:
        node_id = _require_str(doc, "id", "node")
        node_type = _require_str(doc, "type", f"node '{node_id}'")
        if node_type not in NODE_TYPES:
            raise InvalidGraphInput(f"node '{node_id}' has unknown type '{node_type}', expected one of {NODE_TYPES}")
        return cls(
            id=node_id,
            type=node_type,  # type: ignore[arg-type]
            weight=_optional_float(doc, "weight"),
            timestamp=_optional_float(doc, "timestamp"),
            context=doc.get("context"),
            metadata=dict(doc.get("metadata") or {}),
        )


@dataclass(frozen=True)
class Edge:
    """A typed relation between two nodes.

    ``source``/``target`` correspond to ``from``/``to`` in dataset documents.
    ``type`` is an open vocabulary: any string is accepted and looked up in
    the edge multiplier table, defaulting to 1.0.
    """

    source: str
    target: str
    type: str
    weight: float | None = None
    confidence: float | None = None
    timestamp: float | None = None
    context: str | None = None
    metadata: Mapping[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @classmethod
    def from_dict(cls, doc: Mapping[str, Any]) -> Edge:
        source = _require_str(doc, "from", "edge")
        target = _require_str(doc, "to", "edge")
        edge_type = _require_str(doc, "type", f"edge {source}->{target}")
        return cls(
            source=source,
            target=target,
            type=edge_type,
            weight=_optional_float(doc, "weight"),
            confidence=_optional_float(doc, "confidence"),
            timestamp=_optional_float(doc, "timestamp"),
            context=doc.get("context"),
            metadata=dict(doc.get("metadata") or {}),
        )

    @property
    def raw_weight(self) -> float:
        return 1.0 if self.weight is None else self.weight

    @property
    def confidence_value(self) -> float:
        return 1.0 if self.confidence is None else self.confidence


def index_nodes(nodes: list[Node]) -> dict[str, Node]:
    return {node.id: node for node in nodes}
