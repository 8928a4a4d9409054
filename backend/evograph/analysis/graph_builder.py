"""
Graph Builder: Convert evograph Graph values to NetworkX graphs

The NetworkX view is what the adjacency matrix and every downstream
analyzer are derived from.
"""

from dataclasses import dataclass
import networkx as nx

from ..models import Graph


@dataclass
class GraphStats:
    """Basic graph statistics"""
    num_nodes: int
    num_edges: int
    density: float
    num_weakly_connected_components: int
    largest_wcc_size: int  # Largest Weakly Connected Component
    mean_confidence: float  # Mean of node mean-confidences

    def to_dict(self) -> dict:
        return {
            "numNodes": self.num_nodes,
            "numEdges": self.num_edges,
            "density": self.density,
            "numWeaklyConnectedComponents": self.num_weakly_connected_components,
            "largestWCCSize": self.largest_wcc_size,
            "meanConfidence": self.mean_confidence,
        }

    def to_metrics(self) -> dict:
        """Flat float mapping suitable for GraphMetadata.graph_metrics"""
        return {
            "density": float(self.density),
            "weakly_connected_components": float(self.num_weakly_connected_components),
            "largest_component_size": float(self.largest_wcc_size),
            "mean_confidence": float(self.mean_confidence),
        }


def build_networkx_graph(
    graph: Graph,
    directed: bool = True,
    include_node_attrs: bool = True,
) -> nx.DiGraph | nx.Graph:
    """
    Convert a Graph value to a NetworkX graph.

    Edge confidence becomes the `weight` attribute. Parallel edges between
    the same ordered pair overwrite each other, so the last edge wins. A
    bidirectional edge also sets the reverse arc in a directed view.

    Args:
        graph: Graph value
        directed: If True, return DiGraph; if False, return undirected Graph
        include_node_attrs: If True, include node attributes (label, type, ...)

    Returns:
        NetworkX graph (DiGraph or Graph)
    """
    if directed:
        G = nx.DiGraph()
    else:
        G = nx.Graph()

    for node in graph.nodes:
        attrs = {}
        if include_node_attrs:
            attrs = {
                "label": node.label,
                "type": node.type.value,
                "mean_confidence": node.mean_confidence,
            }
        G.add_node(node.id, **attrs)

    # Only add edges where both endpoints exist
    node_ids = set(graph.node_ids)
    for edge in graph.edges:
        if edge.source in node_ids and edge.target in node_ids:
            G.add_edge(edge.source, edge.target, weight=edge.confidence, edge_id=edge.id)
            if directed and edge.bidirectional:
                G.add_edge(edge.target, edge.source, weight=edge.confidence, edge_id=edge.id)

    return G


def compute_basic_stats(graph: Graph) -> GraphStats:
    """
    Compute basic graph statistics.

    Args:
        graph: Graph value

    Returns:
        GraphStats dataclass with basic metrics
    """
    G = build_networkx_graph(graph, include_node_attrs=False)
    num_nodes = G.number_of_nodes()
    num_edges = len(graph.edges)

    # Density: ratio of actual arcs to possible arcs
    if num_nodes > 1:
        density = G.number_of_edges() / (num_nodes * (num_nodes - 1))
    else:
        density = 0.0

    wccs = list(nx.weakly_connected_components(G))
    largest_wcc = max(len(c) for c in wccs) if wccs else 0

    if graph.nodes:
        mean_confidence = sum(n.mean_confidence for n in graph.nodes) / len(graph.nodes)
    else:
        mean_confidence = 0.0

    return GraphStats(
        num_nodes=num_nodes,
        num_edges=num_edges,
        density=min(1.0, density),
        num_weakly_connected_components=len(wccs),
        largest_wcc_size=largest_wcc,
        mean_confidence=mean_confidence,
    )
