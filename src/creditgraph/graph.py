from __future__ import annotations

import logging
import math
from collections.abc import Iterator
from dataclasses import dataclass, field

from .config import Config, WeightsConfig
from .errors import InvalidGraphInput
from .normalize import normalize_edge_weights
from .types import OUTCOME, Edge, Node, index_nodes


@dataclass(frozen=True)
class GraphEdge:
    source: str
    target: str
    weight: float
    type: str


@dataclass
class Graph:
    """Directed weighted multigraph.

    Edges live in a single arena; each node keeps the arena positions of its
    outgoing edges, so parallel edges between one pair stay distinct.
    """

    nodes: dict[str, None] = field(default_factory=dict)
    edges: list[GraphEdge] = field(default_factory=list)
    adjacency: dict[str, list[int]] = field(default_factory=dict)

    def add_node(self, node: str) -> None:
        if node not in self.nodes:
            self.nodes[node] = None
            self.adjacency[node] = []

    def add_edge(self, src: str, dst: str, weight: float, edge_type: str) -> None:
        if not math.isfinite(weight):
            raise InvalidGraphInput(f"edge {src}->{dst} ({edge_type}) has non-finite weight {weight!r}")
        self.add_node(src)
        self.add_node(dst)
        self.adjacency[src].append(len(self.edges))
        self.edges.append(GraphEdge(src, dst, weight, edge_type))

    def out_edges(self, node: str) -> Iterator[GraphEdge]:
        for pos in self.adjacency.get(node, ()):
            yield self.edges[pos]

    def out_degree(self, node: str) -> float:
        return sum(e.weight for e in self.out_edges(node))

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, node: object) -> bool:
        return node in self.nodes


@dataclass
class GraphViews:
    forward: Graph
    reverse: Graph
    weights: list[float]
    node_map: dict[str, Node]


def effective_weights(
    edges: list[Edge],
    node_map: dict[str, Node],
    weights: WeightsConfig,
    normalized: list[float],
) -> list[float]:
    result: list[float] = []
    for edge, value in zip(edges, normalized):
        base = value * edge.confidence_value * weights.edge_multiplier(edge.type)
        src_mult = weights.node_multiplier(node_map.get(edge.source))
        dst_mult = weights.node_multiplier(node_map.get(edge.target))
        weight = base * src_mult * dst_mult
        if not math.isfinite(weight):
            raise InvalidGraphInput(
                f"edge {edge.source}->{edge.target} ({edge.type}) has non-finite effective weight {weight!r}"
            )
        result.append(weight)
    return result


def _seed_graph(nodes: list[Node], edges: list[Edge], node_map: dict[str, Node]) -> Graph:
    graph = Graph()
    for node in nodes:
        graph.add_node(node.id)
    for edge in edges:
        for endpoint in (edge.source, edge.target):
            if endpoint not in node_map and endpoint not in graph:
                logging.debug("Edge %s->%s (%s) references unknown node '%s'", edge.source, edge.target, edge.type, endpoint)
                graph.add_node(endpoint)
    return graph


def build_forward_graph(nodes: list[Node], edges: list[Edge], weights: list[float]) -> Graph:
    graph = _seed_graph(nodes, edges, index_nodes(nodes))
    for edge, weight in zip(edges, weights):
        graph.add_edge(edge.source, edge.target, weight, edge.type)
    return graph


def build_reverse_graph(
    nodes: list[Node],
    edges: list[Edge],
    weights: list[float],
    node_map: dict[str, Node] | None = None,
) -> Graph:
    node_map = index_nodes(nodes) if node_map is None else node_map
    graph = _seed_graph(nodes, edges, node_map)
    for edge, weight in zip(edges, weights):
        src_node = node_map.get(edge.source)
        # outcome edges keep their direction, all others are flipped
        if src_node is not None and src_node.type != OUTCOME:
            graph.add_edge(edge.target, edge.source, weight, edge.type)
        else:
            graph.add_edge(edge.source, edge.target, weight, edge.type)
    return graph


def build_graphs(nodes: list[Node], edges: list[Edge], config: Config) -> GraphViews:
    node_map = index_nodes(nodes)
    normalized = normalize_edge_weights(edges, config.normalization)
    weights = effective_weights(edges, node_map, config.weights, normalized)

    forward = build_forward_graph(nodes, edges, weights)
    reverse = build_reverse_graph(nodes, edges, weights, node_map)

    logging.debug(
        "Graphs built: nodes=%d edges=%d forward_edges=%d reverse_edges=%d",
        len(nodes),
        len(edges),
        len(forward.edges),
        len(reverse.edges),
    )
    return GraphViews(forward=forward, reverse=reverse, weights=weights, node_map=node_map)
