"""
Graph Value

The graph value handed between pipeline stages, plus the invariant checks
every transition relies on.
"""

import copy
import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional

from .node import Node, NodeType
from .edge import Edge, EdgeType


GRAPH_VERSION = "1.0"


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class InvalidGraph(ValueError):
    """Raised when a graph violates a structural invariant"""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


@dataclass
class GraphMetadata:
    """Graph-level bookkeeping"""
    version: str = GRAPH_VERSION
    created: str = field(default_factory=utc_now)
    last_updated: str = field(default_factory=utc_now)
    stage: int = 0
    total_nodes: int = 0
    total_edges: int = 0
    graph_metrics: Dict[str, float] = field(default_factory=dict)

    def copy(self) -> "GraphMetadata":
        return GraphMetadata(
            version=self.version,
            created=self.created,
            last_updated=self.last_updated,
            stage=self.stage,
            total_nodes=self.total_nodes,
            total_edges=self.total_edges,
            graph_metrics=dict(self.graph_metrics),
        )

    def to_dict(self) -> dict:
        return {
            "version": self.version,
            "created": self.created,
            "last_updated": self.last_updated,
            "stage": self.stage,
            "total_nodes": self.total_nodes,
            "total_edges": self.total_edges,
            "graph_metrics": dict(self.graph_metrics),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "GraphMetadata":
        now = utc_now()
        return cls(
            version=data.get("version", GRAPH_VERSION),
            created=data.get("created", now),
            last_updated=data.get("last_updated", now),
            stage=int(data.get("stage", 0)),
            total_nodes=int(data.get("total_nodes", 0)),
            total_edges=int(data.get("total_edges", 0)),
            graph_metrics=dict(data.get("graph_metrics", {})),
        )


@dataclass
class Graph:
    """Knowledge graph: ordered nodes, ordered edges, metadata"""
    nodes: List[Node] = field(default_factory=list)
    edges: List[Edge] = field(default_factory=list)
    metadata: Optional[GraphMetadata] = None

    def __post_init__(self):
        if self.metadata is None:
            self.metadata = GraphMetadata()
            self.refresh_counts()

    @property
    def node_ids(self) -> List[str]:
        return [n.id for n in self.nodes]

    def get_node(self, node_id: str) -> Optional[Node]:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def refresh_counts(self) -> None:
        self.metadata.total_nodes = len(self.nodes)
        self.metadata.total_edges = len(self.edges)

    def to_dict(self) -> dict:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
            "metadata": self.metadata.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Graph":
        graph = cls(
            nodes=[Node.from_dict(n) for n in data.get("nodes", [])],
            edges=[Edge.from_dict(e) for e in data.get("edges", [])],
            metadata=GraphMetadata.from_dict(data.get("metadata", {})),
        )
        graph.refresh_counts()
        return graph


def clone_graph(graph: Graph) -> Graph:
    """
    Deep structural clone.

    The clone shares no mutable substructure with the original, so callers
    may mutate it freely. Opaque metadata maps are deep-copied, which keeps
    non-JSON values such as sets intact.
    """
    return Graph(
        nodes=[n.copy() for n in graph.nodes],
        edges=[e.copy() for e in graph.edges],
        metadata=graph.metadata.copy(),
    )


def _in_unit_interval(value: float) -> bool:
    return not math.isnan(value) and 0.0 <= value <= 1.0


def validate(graph: Graph) -> None:
    """
    Check every structural invariant of a graph.

    Raises:
        InvalidGraph: with the first violation found
    """
    node_ids = set()
    dimension = None

    for node in graph.nodes:
        if node.id in node_ids:
            raise InvalidGraph(f"Duplicate node id: {node.id}")
        node_ids.add(node.id)

        if not isinstance(node.type, NodeType):
            raise InvalidGraph(f"Unknown node type on {node.id}: {node.type!r}")
        if not node.confidence:
            raise InvalidGraph(f"Empty confidence vector on node {node.id}")
        if dimension is None:
            dimension = len(node.confidence)
        elif len(node.confidence) != dimension:
            raise InvalidGraph(
                f"Node {node.id} has {len(node.confidence)} confidence dimensions, expected {dimension}"
            )
        for value in node.confidence:
            if not _in_unit_interval(value):
                raise InvalidGraph(f"Confidence {value} out of [0, 1] on node {node.id}")

    edge_ids = set()
    for edge in graph.edges:
        if edge.id in edge_ids:
            raise InvalidGraph(f"Duplicate edge id: {edge.id}")
        edge_ids.add(edge.id)

        if not isinstance(edge.type, EdgeType):
            raise InvalidGraph(f"Unknown edge type on {edge.id}: {edge.type!r}")
        if edge.source not in node_ids:
            raise InvalidGraph(f"Edge {edge.id} references missing source {edge.source}")
        if edge.target not in node_ids:
            raise InvalidGraph(f"Edge {edge.id} references missing target {edge.target}")
        if not _in_unit_interval(edge.confidence):
            raise InvalidGraph(f"Confidence {edge.confidence} out of [0, 1] on edge {edge.id}")

    if graph.metadata.total_nodes != len(graph.nodes):
        raise InvalidGraph(
            f"metadata.total_nodes={graph.metadata.total_nodes} but graph has {len(graph.nodes)} nodes"
        )
    if graph.metadata.total_edges != len(graph.edges):
        raise InvalidGraph(
            f"metadata.total_edges={graph.metadata.total_edges} but graph has {len(graph.edges)} edges"
        )


def check_graph(graph: Graph) -> bool:
    """Boolean form of validate()"""
    try:
        validate(graph)
    except InvalidGraph:
        return False
    return True
