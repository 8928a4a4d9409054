"""
Shortest Paths

Path primitives used by the centrality measures:
- All minimum-hop paths between two nodes (unweighted BFS)
- Single-source weighted distances (Dijkstra)
- Path statistics (eccentricity, diameter, radius)
"""

from dataclasses import dataclass, field
from typing import Dict, List
import networkx as nx
import numpy as np
from scipy.sparse import csr_matrix
from scipy.sparse.csgraph import dijkstra

from ..models import Graph
from .matrices import GraphContext, build_context


def all_shortest_paths(ctx: GraphContext, source: int, target: int) -> List[List[int]]:
    """
    Every minimum-length path from source to target.

    Arcs are the positive entries of the adjacency matrix, each counting as
    one hop regardless of weight. Paths are lists of node indices.

    Returns:
        All shortest paths, or an empty list when target is unreachable
    """
    if source == target:
        return [[source]]
    try:
        return [list(p) for p in nx.all_shortest_paths(ctx.arcs, source, target)]
    except nx.NetworkXNoPath:
        return []


def single_source_shortest_distances(ctx: GraphContext, source: int) -> np.ndarray:
    """
    Dijkstra distances from source, weights taken from the adjacency matrix.

    A zero entry means "no edge". Unreachable nodes get +inf.
    """
    if ctx.n == 0:
        return np.zeros(0)
    return dijkstra(csr_matrix(ctx.adjacency), directed=True, indices=source)


def all_pairs_shortest_distances(ctx: GraphContext) -> np.ndarray:
    """Dijkstra from every source; row i holds the distances from node i"""
    if ctx.n == 0:
        return np.zeros((0, 0))
    return dijkstra(csr_matrix(ctx.adjacency), directed=True)


@dataclass
class PathStatistics:
    """Distance-based structure of a graph"""
    eccentricity: Dict[str, float] = field(default_factory=dict)
    diameter: float = 0.0
    radius: float = 0.0
    central_nodes: List[str] = field(default_factory=list)
    peripheral_nodes: List[str] = field(default_factory=list)
    average_path_length: float = 0.0

    def to_dict(self) -> dict:
        return {
            "eccentricity": self.eccentricity,
            "diameter": self.diameter,
            "radius": self.radius,
            "centralNodes": self.central_nodes,
            "peripheralNodes": self.peripheral_nodes,
            "averagePathLength": self.average_path_length,
        }


def compute_path_statistics(graph: Graph) -> PathStatistics:
    """
    Compute eccentricities, diameter, radius and mean path length.

    Distances are weighted (Dijkstra). Eccentricity only considers reachable
    nodes; a node that reaches nobody has eccentricity 0 and is ignored when
    computing the radius.

    Args:
        graph: Graph value

    Returns:
        PathStatistics
    """
    ctx = build_context(graph)
    if ctx.n == 0:
        return PathStatistics()

    distances = all_pairs_shortest_distances(ctx)
    off_diagonal = ~np.eye(ctx.n, dtype=bool)
    finite = np.isfinite(distances) & off_diagonal

    ecc = np.where(finite, distances, 0.0).max(axis=1)
    eccentricity = ctx.by_id(ecc)

    diameter = float(ecc.max())
    reaching = ecc[ecc > 0]
    radius = float(reaching.min()) if reaching.size else 0.0

    central = [ctx.node_ids[i] for i in range(ctx.n) if ecc[i] > 0 and np.isclose(ecc[i], radius)]
    peripheral = [ctx.node_ids[i] for i in range(ctx.n) if ecc[i] > 0 and np.isclose(ecc[i], diameter)]

    average = float(distances[finite].mean()) if finite.any() else 0.0

    return PathStatistics(
        eccentricity=eccentricity,
        diameter=diameter,
        radius=radius,
        central_nodes=central,
        peripheral_nodes=peripheral,
        average_path_length=average,
    )
