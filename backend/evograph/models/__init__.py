"""
Graph value types and invariant checks
"""

from .node import Node, NodeType, Position
from .edge import Edge, EdgeType
from .graph import (
    Graph,
    GraphMetadata,
    InvalidGraph,
    clone_graph,
    validate,
    check_graph,
    utc_now,
)

__all__ = [
    "Node",
    "NodeType",
    "Position",
    "Edge",
    "EdgeType",
    "Graph",
    "GraphMetadata",
    "InvalidGraph",
    "clone_graph",
    "validate",
    "check_graph",
    "utc_now",
]
