"""
Adjacency and Laplacian Matrices

Builds the dense matrices every analyzer works from. A GraphContext is
computed once per query and passed through the analyzers so the
node-id -> index map stays stable for the whole invocation.
"""

from dataclasses import dataclass
from typing import Dict, List
import networkx as nx
import numpy as np

from ..models import Graph
from .graph_builder import build_networkx_graph


@dataclass
class GraphContext:
    """Per-invocation view of a graph"""
    node_ids: List[str]
    index: Dict[str, int]  # node_id -> row/column in adjacency
    adjacency: np.ndarray  # adjacency[i, j] = confidence of arc i -> j, 0 = no arc
    arcs: nx.DiGraph  # index-labelled digraph of the positive entries of adjacency

    @property
    def n(self) -> int:
        return len(self.node_ids)

    def by_id(self, values) -> Dict[str, float]:
        """Key a per-index sequence by node id"""
        return {node_id: float(values[i]) for i, node_id in enumerate(self.node_ids)}


def build_adjacency(graph: Graph) -> np.ndarray:
    """
    n x n weighted adjacency matrix, rows/columns in node order.

    matrix[i][j] holds the confidence of an edge i -> j. Non-bidirectional
    edges leave matrix[j][i] untouched. Parallel edges overwrite (last wins).
    """
    node_ids = graph.node_ids
    if not node_ids:
        return np.zeros((0, 0))
    G = build_networkx_graph(graph, include_node_attrs=False)
    return nx.to_numpy_array(G, nodelist=node_ids, weight="weight", dtype=float)


def build_context(graph: Graph) -> GraphContext:
    node_ids = graph.node_ids
    adjacency = build_adjacency(graph)

    arcs = nx.DiGraph()
    arcs.add_nodes_from(range(len(node_ids)))
    sources, targets = np.nonzero(adjacency > 0)
    arcs.add_edges_from((int(i), int(j)) for i, j in zip(sources, targets))

    return GraphContext(
        node_ids=node_ids,
        index={node_id: i for i, node_id in enumerate(node_ids)},
        adjacency=adjacency,
        arcs=arcs,
    )


def laplacian_from_adjacency(adjacency: np.ndarray) -> np.ndarray:
    """
    L = D - A with D the diagonal out-degree-weight matrix.

    Self-loop weights are excluded from both D and the off-diagonal part.
    """
    A = adjacency.copy()
    np.fill_diagonal(A, 0.0)
    return np.diag(A.sum(axis=1)) - A


def build_laplacian(graph: Graph) -> np.ndarray:
    return laplacian_from_adjacency(build_adjacency(graph))


def symmetrize(adjacency: np.ndarray) -> np.ndarray:
    """Undirected view: w(i, j) = max(A[i, j], A[j, i]), no self-loops"""
    W = np.maximum(adjacency, adjacency.T)
    np.fill_diagonal(W, 0.0)
    return W
