"""
evograph: graph transition and analytics engine

Evolves a weighted, typed knowledge graph through discrete transitions
driven by incoming evidence, and computes the structural analytics used to
decide how it should evolve next.
"""

from .models import (
    Node,
    NodeType,
    Position,
    Edge,
    EdgeType,
    Graph,
    GraphMetadata,
    InvalidGraph,
    clone_graph,
    validate,
    check_graph,
)
from .analysis import (
    CentralityMeasures,
    Community,
    SpectralAnalysis,
    compute_centrality_measures,
    detect_communities,
    compute_spectral_properties,
)
from .transition import (
    TransitionKind,
    TransitionMetrics,
    TransitionResult,
    apply_transition,
    integrate_evidence,
    prune,
    merge,
    refine,
    PRUNE_THRESHOLD,
    MERGE_THRESHOLD,
    LINK_THRESHOLD,
    MAX_EVIDENCE_LINKS,
    CANVAS_CENTER,
    REFINEMENT_STEP,
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
    "CentralityMeasures",
    "Community",
    "SpectralAnalysis",
    "compute_centrality_measures",
    "detect_communities",
    "compute_spectral_properties",
    "TransitionKind",
    "TransitionMetrics",
    "TransitionResult",
    "apply_transition",
    "integrate_evidence",
    "prune",
    "merge",
    "refine",
    "PRUNE_THRESHOLD",
    "MERGE_THRESHOLD",
    "LINK_THRESHOLD",
    "MAX_EVIDENCE_LINKS",
    "CANVAS_CENTER",
    "REFINEMENT_STEP",
]
