"""
Centrality Measures

Computes Degree, Betweenness, Closeness, PageRank and Eigenvector centrality
over one adjacency matrix per call.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional, Tuple
import logging
import numpy as np

from ..models import Graph
from .matrices import GraphContext, build_context
from .paths import all_shortest_paths, single_source_shortest_distances

logger = logging.getLogger(__name__)

DAMPING_FACTOR = 0.85
MAX_ITERATIONS = 100
TOLERANCE = 1e-6

MEASURES = ("betweenness", "closeness", "pagerank", "eigenvector", "degree")


@dataclass
class CentralityResult:
    """One centrality measure ranked over the graph"""
    measure: str
    values: Dict[str, float]  # node_id -> centrality value
    top_nodes: List[Tuple[str, float]]  # highest first, ties in graph order
    mean: float = 0.0
    max_value: float = 0.0
    min_value: float = 0.0
    converged: Optional[bool] = None  # None for the closed-form measures

    def to_dict(self) -> dict:
        return {
            "measure": self.measure,
            "values": self.values,
            "topNodes": [{"nodeId": n, "value": v} for n, v in self.top_nodes],
            "mean": self.mean,
            "maxValue": self.max_value,
            "minValue": self.min_value,
            "converged": self.converged,
        }


def _rank_measure(
    measure: str,
    values: Dict[str, float],
    top_k: int = 10,
    converged: Optional[bool] = None,
) -> CentralityResult:
    if not values:
        return CentralityResult(measure=measure, values={}, top_nodes=[], converged=converged)

    ranked = sorted(values.items(), key=lambda item: -item[1])
    scores = np.fromiter(values.values(), dtype=float)
    return CentralityResult(
        measure=measure,
        values=values,
        top_nodes=ranked[:top_k],
        mean=float(scores.mean()),
        max_value=float(scores.max()),
        min_value=float(scores.min()),
        converged=converged,
    )


@dataclass
class CentralityMeasures:
    """All centrality measures for one graph, keyed by node id"""
    betweenness: Dict[str, float] = field(default_factory=dict)
    closeness: Dict[str, float] = field(default_factory=dict)
    pagerank: Dict[str, float] = field(default_factory=dict)
    eigenvector: Dict[str, float] = field(default_factory=dict)
    degree: Dict[str, float] = field(default_factory=dict)
    converged: Dict[str, bool] = field(default_factory=dict)  # iterative measures only

    def summary(self, measure: str, top_k: int = 10) -> CentralityResult:
        if measure not in MEASURES:
            raise ValueError(f"Unknown measure: {measure}. Choose from {list(MEASURES)}")
        return _rank_measure(measure, getattr(self, measure), top_k, self.converged.get(measure))

    def to_dict(self) -> dict:
        return {
            "betweenness": self.betweenness,
            "closeness": self.closeness,
            "pagerank": self.pagerank,
            "eigenvector": self.eigenvector,
            "degree": self.degree,
            "converged": self.converged,
        }


def compute_degree_centrality(ctx: GraphContext) -> Dict[str, float]:
    """
    Degree centrality: distinct neighbours (either direction) / (n - 1).

    Parallel edges and self-loops do not count twice, so the value stays
    within [0, 1].
    """
    n = ctx.n
    if n <= 1:
        return ctx.by_id(np.zeros(n))

    linked = (ctx.adjacency > 0) | (ctx.adjacency.T > 0)
    np.fill_diagonal(linked, False)
    return ctx.by_id(linked.sum(axis=1) / (n - 1))


def _pair_shortest_paths(ctx: GraphContext, s: int, t: int) -> List[List[int]]:
    """Shortest paths joining an unordered pair, in whichever direction is shorter"""
    forward = all_shortest_paths(ctx, s, t)
    backward = all_shortest_paths(ctx, t, s)
    candidates = forward + backward
    if not candidates:
        return []
    shortest = min(len(p) for p in candidates)
    return [p for p in candidates if len(p) == shortest]


def compute_betweenness_centrality(ctx: GraphContext) -> Dict[str, float]:
    """
    Compute Betweenness centrality.

    For every unordered pair (s, t) all shortest paths are enumerated; each
    internal node of each path accrues 1 / #paths. Values are normalized by
    the number of pairs not containing the node, (n-1)(n-2)/2.

    This is the naive all-pairs enumeration, fine for graphs of a few
    hundred nodes.
    """
    n = ctx.n
    scores = np.zeros(n)
    if n <= 2:
        return ctx.by_id(scores)

    for s in range(n):
        for t in range(s + 1, n):
            paths = _pair_shortest_paths(ctx, s, t)
            if not paths:
                continue
            share = 1.0 / len(paths)
            for path in paths:
                for v in path[1:-1]:
                    scores[v] += share

    scores /= (n - 1) * (n - 2) / 2
    return ctx.by_id(scores)


def compute_closeness_centrality(ctx: GraphContext) -> Dict[str, float]:
    """
    Closeness: reachable nodes / sum of finite weighted distances.

    A node that reaches nobody scores 0.
    """
    closeness = np.zeros(ctx.n)
    for i in range(ctx.n):
        distances = single_source_shortest_distances(ctx, i)
        finite = np.isfinite(distances)
        finite[i] = False
        reachable = int(finite.sum())
        total = float(distances[finite].sum())
        if reachable > 0 and total > 0:
            closeness[i] = reachable / total
    return ctx.by_id(closeness)


def compute_pagerank(
    ctx: GraphContext,
    alpha: float = DAMPING_FACTOR,
    max_iter: int = MAX_ITERATIONS,
    tol: float = TOLERANCE,
) -> Tuple[Dict[str, float], bool]:
    """
    Compute PageRank centrality by power iteration.

    pr[i] = (1 - alpha)/n + alpha * sum(pr[j] / out_degree[j]) over arcs j -> i,
    starting from the uniform distribution. Rank held by nodes without
    out-arcs is not redistributed, so with sinks present the raw iterate
    leaks mass and is not a distribution; only the final rescale to sum 1
    makes it one.

    Args:
        ctx: GraphContext
        alpha: Damping factor
        max_iter: Maximum iterations
        tol: Stop once sum(|pr_new - pr|) < tol

    Returns:
        (node_id -> PageRank, converged)
    """
    n = ctx.n
    if n == 0:
        return {}, True

    arcs = (ctx.adjacency > 0).astype(float)
    out_degree = arcs.sum(axis=1)
    has_out = out_degree > 0

    pr = np.full(n, 1.0 / n)
    converged = False
    for _ in range(max_iter):
        share = np.zeros(n)
        share[has_out] = pr[has_out] / out_degree[has_out]
        new_pr = (1 - alpha) / n + alpha * (arcs.T @ share)
        diff = np.abs(new_pr - pr).sum()
        pr = new_pr
        if diff < tol:
            converged = True
            break

    total = pr.sum()
    if total > 0:
        pr = pr / total

    return ctx.by_id(pr), converged


def compute_eigenvector_centrality(
    ctx: GraphContext,
    max_iter: int = MAX_ITERATIONS,
    tol: float = TOLERANCE,
) -> Tuple[Dict[str, float], bool]:
    """
    Compute Eigenvector centrality by power iteration on the adjacency matrix.

    The vector is L2-normalized every round; the result is the absolute
    value of the dominant eigenvector estimate.

    Returns:
        (node_id -> eigenvector centrality, converged)
    """
    n = ctx.n
    if n == 0:
        return {}, True

    vector = np.full(n, 1.0 / np.sqrt(n))
    converged = False
    for _ in range(max_iter):
        new_vector = ctx.adjacency @ vector
        norm = np.linalg.norm(new_vector)
        if norm > 0:
            new_vector = new_vector / norm
        diff = np.abs(new_vector - vector).sum()
        vector = new_vector
        if diff < tol:
            converged = True
            break

    return ctx.by_id(np.abs(vector)), converged


def compute_centrality_measures(graph: Graph) -> CentralityMeasures:
    """
    Compute all centrality measures at once.

    Non-convergence of the iterative measures is logged and reported in
    `converged`; the best estimate is still returned.

    Args:
        graph: Graph value

    Returns:
        CentralityMeasures
    """
    ctx = build_context(graph)

    pagerank, pagerank_converged = compute_pagerank(ctx)
    eigenvector, eigenvector_converged = compute_eigenvector_centrality(ctx)

    for name, ok in (("PageRank", pagerank_converged), ("Eigenvector centrality", eigenvector_converged)):
        if not ok:
            logger.warning(f"{name} did not converge within {MAX_ITERATIONS} iterations ({ctx.n} nodes)")

    return CentralityMeasures(
        betweenness=compute_betweenness_centrality(ctx),
        closeness=compute_closeness_centrality(ctx),
        pagerank=pagerank,
        eigenvector=eigenvector,
        degree=compute_degree_centrality(ctx),
        converged={
            "pagerank": pagerank_converged,
            "eigenvector": eigenvector_converged,
        },
    )
