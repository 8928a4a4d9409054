"""
Network Analysis Module for evograph

Provides graph-theoretic analysis of evolving knowledge graphs:
- Adjacency / Laplacian matrices
- Shortest paths (BFS all-shortest-paths, Dijkstra)
- Centrality measures (Degree, Betweenness, Closeness, PageRank, Eigenvector)
- Community detection (greedy modularity optimization)
- Spectral analysis (Laplacian spectrum, algebraic connectivity)
- Information metrics (Shannon entropy, KL divergence, mutual information)
"""

from .graph_builder import build_networkx_graph, compute_basic_stats, GraphStats
from .matrices import (
    GraphContext,
    build_context,
    build_adjacency,
    build_laplacian,
    laplacian_from_adjacency,
    symmetrize,
)
from .paths import (
    all_shortest_paths,
    single_source_shortest_distances,
    all_pairs_shortest_distances,
    compute_path_statistics,
    PathStatistics,
)
from .centrality import (
    CentralityMeasures,
    CentralityResult,
    compute_centrality_measures,
    compute_degree_centrality,
    compute_betweenness_centrality,
    compute_closeness_centrality,
    compute_pagerank,
    compute_eigenvector_centrality,
    DAMPING_FACTOR,
    MAX_ITERATIONS,
    TOLERANCE,
)
from .community import (
    Community,
    detect_communities,
    compute_modularity,
)
from .spectral import (
    SpectralAnalysis,
    compute_spectral_properties,
    compute_connectivity,
)
from .information import (
    shannon_entropy,
    kl_divergence,
    mutual_information,
    split_information_gain,
    graph_complexity,
    graph_entropy,
    information_gain,
    mdl_score,
    NodeInformationMetrics,
    node_information_metrics,
)
from .similarity import semantic_similarity, tag_overlap

__all__ = [
    # Graph builder
    "build_networkx_graph",
    "compute_basic_stats",
    "GraphStats",
    # Matrices
    "GraphContext",
    "build_context",
    "build_adjacency",
    "build_laplacian",
    "laplacian_from_adjacency",
    "symmetrize",
    # Paths
    "all_shortest_paths",
    "single_source_shortest_distances",
    "all_pairs_shortest_distances",
    "compute_path_statistics",
    "PathStatistics",
    # Centrality
    "CentralityMeasures",
    "CentralityResult",
    "compute_centrality_measures",
    "compute_degree_centrality",
    "compute_betweenness_centrality",
    "compute_closeness_centrality",
    "compute_pagerank",
    "compute_eigenvector_centrality",
    "DAMPING_FACTOR",
    "MAX_ITERATIONS",
    "TOLERANCE",
    # Community
    "Community",
    "detect_communities",
    "compute_modularity",
    # Spectral
    "SpectralAnalysis",
    "compute_spectral_properties",
    "compute_connectivity",
    # Information
    "shannon_entropy",
    "kl_divergence",
    "mutual_information",
    "split_information_gain",
    "graph_complexity",
    "graph_entropy",
    "information_gain",
    "mdl_score",
    "NodeInformationMetrics",
    "node_information_metrics",
    # Similarity
    "semantic_similarity",
    "tag_overlap",
]
