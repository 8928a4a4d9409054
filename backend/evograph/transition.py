"""
Graph Transition Operator

Maps one graph state to the next, O: G_t -> G_t+1. Each transition kind is
a pure function of the input graph (and evidence): the caller's graph is
never mutated, a new graph value is returned.

- evidence_integration: append evidence nodes, link them to similar nodes
- pruning: drop low-confidence nodes and edges
- merging: collapse clusters of near-identical nodes into one node
- refinement: move central nodes toward the canvas centre, strengthen
  edges between high-betweenness nodes
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Set, Tuple
import logging

from .models import (
    Edge,
    EdgeType,
    Graph,
    Node,
    Position,
    clone_graph,
    utc_now,
    validate,
)
from .analysis.centrality import compute_betweenness_centrality, compute_pagerank
from .analysis.graph_builder import compute_basic_stats
from .analysis.information import information_gain
from .analysis.matrices import build_context
from .analysis.similarity import semantic_similarity

logger = logging.getLogger(__name__)

PRUNE_THRESHOLD = 0.3
MERGE_THRESHOLD = 0.8
LINK_THRESHOLD = 0.6
MAX_EVIDENCE_LINKS = 3
CANVAS_CENTER = (400.0, 400.0)
REFINEMENT_STEP = 0.1


class TransitionKind(str, Enum):
    EVIDENCE_INTEGRATION = "evidence_integration"
    PRUNING = "pruning"
    MERGING = "merging"
    REFINEMENT = "refinement"


@dataclass
class TransitionMetrics:
    """How much a transition changed the graph"""
    nodes_added: int
    nodes_removed: int
    edges_added: int
    edges_removed: int
    topology_change: float
    information_gain: float

    def to_dict(self) -> dict:
        return {
            "nodesAdded": self.nodes_added,
            "nodesRemoved": self.nodes_removed,
            "edgesAdded": self.edges_added,
            "edgesRemoved": self.edges_removed,
            "topologyChange": self.topology_change,
            "informationGain": self.information_gain,
        }


@dataclass
class TransitionResult:
    new_graph: Graph
    metrics: TransitionMetrics
    confidence: float

    def to_dict(self) -> dict:
        return {
            "newGraph": self.new_graph.to_dict(),
            "transitionMetrics": self.metrics.to_dict(),
            "confidence": self.confidence,
        }


def _unique_id(base: str, taken: Set[str]) -> str:
    """Return base, or base_<k> for the first free k, and reserve it"""
    candidate = base
    suffix = 1
    while candidate in taken:
        candidate = f"{base}_{suffix}"
        suffix += 1
    taken.add(candidate)
    return candidate


# =============================================================================
# Transition kinds
# =============================================================================

def integrate_evidence(
    graph: Graph,
    evidence: Sequence[Node],
    link_threshold: float = LINK_THRESHOLD,
    max_links: int = MAX_EVIDENCE_LINKS,
) -> Graph:
    """
    Append evidence nodes and link each to the nodes it resembles.

    Every evidence node is compared with the nodes already present (earlier
    evidence of the same batch included). Up to `max_links` nodes scoring
    above `link_threshold` get a supportive edge evidence -> node whose
    confidence is the similarity score. Higher scores are linked first, ties
    in graph order.

    Raises:
        InvalidGraph: if the evidence would break a graph invariant
    """
    validate(Graph(nodes=[*graph.nodes, *evidence], edges=list(graph.edges)))

    work = clone_graph(graph)
    edge_ids = {e.id for e in work.edges}

    for incoming in evidence:
        node = incoming.copy()
        scored = [
            (semantic_similarity(node, other), position, other)
            for position, other in enumerate(work.nodes)
        ]
        work.nodes.append(node)

        relevant = sorted(
            (s for s in scored if s[0] > link_threshold),
            key=lambda s: (-s[0], s[1]),
        )[:max_links]

        for score, _, other in relevant:
            work.edges.append(Edge(
                id=_unique_id(f"trans_{node.id}_{other.id}", edge_ids),
                source=node.id,
                target=other.id,
                type=EdgeType.SUPPORTIVE,
                confidence=score,
                metadata={
                    "type": "transition_generated",
                    "source_description": "Evidence integration transition",
                    "timestamp": utc_now(),
                },
            ))

    return work


def prune(graph: Graph, threshold: float = PRUNE_THRESHOLD) -> Graph:
    """
    Drop nodes whose mean confidence is below threshold, then edges below
    threshold or touching a dropped node.
    """
    work = clone_graph(graph)
    work.nodes = [n for n in work.nodes if n.mean_confidence >= threshold]
    kept = {n.id for n in work.nodes}
    work.edges = [
        e for e in work.edges
        if e.source in kept and e.target in kept and e.confidence >= threshold
    ]
    return work


def _similar_node_groups(nodes: List[Node], threshold: float) -> List[List[Node]]:
    """
    Greedy clusters of nodes that are pairwise more similar than threshold.

    Each unclustered node seeds a cluster; later nodes join when they beat
    the threshold against every member. Singletons are not returned.
    """
    groups = []
    clustered: Set[str] = set()

    for i, seed in enumerate(nodes):
        if seed.id in clustered:
            continue
        group = [seed]
        for other in nodes[i + 1:]:
            if other.id in clustered:
                continue
            if all(semantic_similarity(other, member) > threshold for member in group):
                group.append(other)
        if len(group) > 1:
            groups.append(group)
            clustered.update(n.id for n in group)

    return groups


def _mean_position(nodes: Iterable[Node]) -> Optional[Position]:
    positions = [n.position for n in nodes if n.position is not None]
    if not positions:
        return None
    return Position(
        x=sum(p.x for p in positions) / len(positions),
        y=sum(p.y for p in positions) / len(positions),
    )


def _merge_node_group(group: List[Node], taken: Set[str]) -> Node:
    first = group[0]
    member_ids = [n.id for n in group]
    dimensions = len(first.confidence)
    confidence = [
        sum(n.confidence[d] for n in group) / len(group)
        for d in range(dimensions)
    ]

    metadata = first.copy().metadata
    metadata.update({
        "type": "merged_node",
        "source_description": f"Merged from nodes: {', '.join(member_ids)}",
        "timestamp": utc_now(),
        "merged_node_ids": member_ids,
    })

    return Node(
        id=_unique_id("merged_" + "_".join(member_ids), taken),
        label="Merged: " + " + ".join(n.label for n in group),
        type=first.type,
        confidence=confidence,
        metadata=metadata,
        position=_mean_position(group),
    )


def _rewire_edges(edges: List[Edge], member_ids: Set[str], merged_id: str) -> List[Edge]:
    """Point edges touching merged members at the merged node, dropping self-loops"""
    rewired = []
    for edge in edges:
        touches = edge.source in member_ids or edge.target in member_ids
        if not touches:
            rewired.append(edge)
            continue
        if edge.source in member_ids:
            edge.source = merged_id
        if edge.target in member_ids:
            edge.target = merged_id
        if edge.source != edge.target:
            rewired.append(edge)
    return rewired


def merge(graph: Graph, threshold: float = MERGE_THRESHOLD) -> Graph:
    """
    Collapse clusters of similar nodes into one synthetic node each.

    The merged node averages its members' confidence per dimension and lists
    them under metadata["merged_node_ids"]. Edges are rewired onto it; edges
    that would become self-loops are dropped.
    """
    work = clone_graph(graph)
    taken = set(work.node_ids)

    for group in _similar_node_groups(work.nodes, threshold):
        merged = _merge_node_group(group, taken)
        member_ids = {n.id for n in group}
        work.nodes = [n for n in work.nodes if n.id not in member_ids]
        work.nodes.append(merged)
        work.edges = _rewire_edges(work.edges, member_ids, merged.id)
        logger.debug(f"Merged {sorted(member_ids)} into {merged.id}")

    return work


def refine(
    graph: Graph,
    center: Tuple[float, float] = CANVAS_CENTER,
    step: float = REFINEMENT_STEP,
) -> Graph:
    """
    Nudge positions and edge confidences using PageRank and betweenness.

    Each positioned node moves step * pagerank of the way toward center.
    Each edge gains step * (mean betweenness of its endpoints), capped at 1.
    """
    work = clone_graph(graph)
    ctx = build_context(work)
    pagerank, converged = compute_pagerank(ctx)
    if not converged:
        logger.warning("PageRank did not converge during refinement; using best estimate")
    betweenness = compute_betweenness_centrality(ctx)

    cx, cy = center
    for node in work.nodes:
        if node.position is None:
            continue
        importance = pagerank.get(node.id, 0.0)
        node.position.x += (cx - node.position.x) * importance * step
        node.position.y += (cy - node.position.y) * importance * step

    for edge in work.edges:
        mean_betweenness = (betweenness.get(edge.source, 0.0) + betweenness.get(edge.target, 0.0)) / 2
        edge.confidence = min(1.0, edge.confidence + mean_betweenness * step)

    return work


# =============================================================================
# Transition metrics
# =============================================================================

def topology_change(old: Graph, new: Graph) -> float:
    """(node-id symmetric difference + |edge count delta|) / max(1, |V| + |E| of old)"""
    old_ids = set(old.node_ids)
    new_ids = set(new.node_ids)
    node_changes = len(old_ids ^ new_ids)
    edge_changes = abs(len(old.edges) - len(new.edges))
    return (node_changes + edge_changes) / max(1, len(old.nodes) + len(old.edges))


def compute_transition_metrics(old: Graph, new: Graph) -> TransitionMetrics:
    old_nodes, new_nodes = set(old.node_ids), set(new.node_ids)
    old_edges, new_edges = {e.id for e in old.edges}, {e.id for e in new.edges}
    return TransitionMetrics(
        nodes_added=len(new_nodes - old_nodes),
        nodes_removed=len(old_nodes - new_nodes),
        edges_added=len(new_edges - old_edges),
        edges_removed=len(old_edges - new_edges),
        topology_change=topology_change(old, new),
        information_gain=information_gain(old, new),
    )


def transition_confidence(metrics: TransitionMetrics) -> float:
    """0.5 + stability bonus (small topology change) + information bonus, in [0, 1]"""
    stability_bonus = max(0.0, 0.2 - metrics.topology_change)
    information_bonus = min(0.3, max(0.0, metrics.information_gain))
    return min(1.0, max(0.0, 0.5 + stability_bonus + information_bonus))


def apply_transition(
    graph: Graph,
    evidence: Optional[Sequence[Node]],
    kind: TransitionKind | str,
) -> TransitionResult:
    """
    Apply transition operator O: G_t -> G_t+1.

    Args:
        graph: current state, left untouched
        evidence: new evidence nodes (only used by evidence_integration)
        kind: TransitionKind or its string value

    Returns:
        TransitionResult with the new graph, its metrics and a confidence

    Raises:
        InvalidGraph: if graph or evidence violates an invariant
        ValueError: for an unknown transition kind
    """
    kind = TransitionKind(kind)
    validate(graph)

    if kind is TransitionKind.EVIDENCE_INTEGRATION:
        new_graph = integrate_evidence(graph, evidence or [])
    elif kind is TransitionKind.PRUNING:
        new_graph = prune(graph)
    elif kind is TransitionKind.MERGING:
        new_graph = merge(graph)
    else:
        new_graph = refine(graph)

    new_graph.metadata.last_updated = utc_now()
    new_graph.refresh_counts()
    new_graph.metadata.graph_metrics.update(compute_basic_stats(new_graph).to_metrics())
    validate(new_graph)

    metrics = compute_transition_metrics(graph, new_graph)
    confidence = transition_confidence(metrics)

    logger.debug(
        f"{kind.value}: {len(graph.nodes)}->{len(new_graph.nodes)} nodes, "
        f"{len(graph.edges)}->{len(new_graph.edges)} edges, confidence {confidence:.3f}"
    )

    return TransitionResult(new_graph=new_graph, metrics=metrics, confidence=confidence)
