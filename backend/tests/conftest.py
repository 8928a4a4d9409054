"""Shared graph factories for the test suite."""

import pytest

from evograph.models import Edge, EdgeType, Graph, Node, NodeType, Position


@pytest.fixture
def make_node():
    """Factory: make_node("a", confidence=[0.8, 0.8], tags=["bio"], ...)"""
    def _make(
        node_id,
        confidence=(0.8, 0.8),
        node_type=NodeType.HYPOTHESIS,
        tags=None,
        position=None,
        **metadata,
    ):
        if tags is not None:
            metadata["disciplinary_tags"] = list(tags)
        return Node(
            id=node_id,
            label=node_id.upper(),
            type=node_type,
            confidence=list(confidence),
            metadata=metadata,
            position=Position(*position) if position is not None else None,
        )
    return _make


@pytest.fixture
def make_edge():
    """Factory: make_edge("a", "b", confidence=0.8, bidirectional=False)"""
    def _make(
        source,
        target,
        confidence=0.8,
        edge_type=EdgeType.CORRELATIVE,
        bidirectional=False,
        edge_id=None,
    ):
        return Edge(
            id=edge_id or f"{source}->{target}",
            source=source,
            target=target,
            type=edge_type,
            confidence=confidence,
            bidirectional=bidirectional,
        )
    return _make


@pytest.fixture
def make_graph(make_node, make_edge):
    """
    Factory: make_graph(["a", "b"], [("a", "b")])

    Nodes may be ids or Node objects; edges may be (source, target) tuples,
    (source, target, confidence) tuples or Edge objects.
    """
    def _make(nodes, edges=(), bidirectional=False):
        node_values = [n if isinstance(n, Node) else make_node(n) for n in nodes]
        edge_values = []
        for e in edges:
            if isinstance(e, Edge):
                edge_values.append(e)
            else:
                edge_values.append(make_edge(*e, bidirectional=bidirectional))
        return Graph(nodes=node_values, edges=edge_values)
    return _make


@pytest.fixture
def path_graph(make_graph):
    """
    Directed path, uniform confidence 0.8:

        a --> b --> c --> d
    """
    return make_graph(["a", "b", "c", "d"], [("a", "b"), ("b", "c"), ("c", "d")])


@pytest.fixture
def empty_graph():
    return Graph()
