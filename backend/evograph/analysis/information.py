"""
Information-Theoretic Metrics

Shannon entropy, KL divergence and mutual information over confidence
distributions, the entropy-based information gain of a graph change, and
per-node information metrics. Logarithms are base 2 except in the MDL
penalty, which uses ln(n).
"""

from dataclasses import dataclass
from typing import Optional, Sequence
import math
import numpy as np
from scipy.stats import entropy as _scipy_entropy

from ..models import Graph, Node

DEFAULT_GRAPH_SIZE = 10


def shannon_entropy(values: Sequence[float]) -> float:
    """
    Shannon entropy H = -sum(p log2 p) of values normalised to sum to 1.

    Returns 0 for an empty or all-zero input.
    """
    pk = np.asarray(values, dtype=float).ravel()
    if pk.size == 0 or pk.sum() <= 0:
        return 0.0
    return float(_scipy_entropy(pk, base=2))


def kl_divergence(p: Sequence[float], q: Sequence[float]) -> float:
    """
    KL(P || Q) = sum(p log2(p / q)) after normalising both inputs.

    Terms where either side is zero are skipped, so the result is always
    finite.
    """
    p = np.asarray(p, dtype=float)
    q = np.asarray(q, dtype=float)
    if p.shape != q.shape:
        raise ValueError("Probability distributions must have same length")
    if p.sum() <= 0 or q.sum() <= 0:
        return 0.0

    p = p / p.sum()
    q = q / q.sum()
    mask = (p > 0) & (q > 0)
    return float(np.sum(p[mask] * np.log2(p[mask] / q[mask])))


def mutual_information(
    x_probs: Sequence[float],
    y_probs: Sequence[float],
    joint_probs: Sequence[Sequence[float]],
) -> float:
    """I(X;Y) = H(X) + H(Y) - H(X,Y)"""
    return shannon_entropy(x_probs) + shannon_entropy(y_probs) - shannon_entropy(joint_probs)


def split_information_gain(
    parent_entropy: float,
    child_sizes: Sequence[int],
    child_entropies: Sequence[float],
) -> float:
    """IG = H(parent) - sum(|child| / |total| * H(child))"""
    total = sum(child_sizes)
    if total == 0:
        return parent_entropy
    weighted = sum(size / total * h for size, h in zip(child_sizes, child_entropies))
    return parent_entropy - weighted


def graph_complexity(num_nodes: int, num_edges: int) -> float:
    """Structural complexity log2(n + 1) + log2(m + 1)"""
    return math.log2(num_nodes + 1) + math.log2(num_edges + 1)


def graph_entropy(graph: Graph) -> float:
    """Entropy of all node confidence values pooled into one distribution"""
    return shannon_entropy([c for node in graph.nodes for c in node.confidence])


def information_gain(old: Graph, new: Graph) -> float:
    """Entropy change from old to new; 0 when the confidences are unchanged"""
    return graph_entropy(new) - graph_entropy(old)


def mdl_score(log_likelihood: float, model_complexity: float, data_size: int) -> float:
    """
    Minimum Description Length: -log P(data | model) + (k / 2) ln(n).

    Lower is better. `model_complexity` is the parameter count k and
    `data_size` the number of observations n.
    """
    if data_size <= 0:
        raise ValueError(f"data_size must be positive, got {data_size}")
    return -log_likelihood + (model_complexity / 2) * math.log(data_size)


@dataclass
class NodeInformationMetrics:
    """Information content of a single node"""
    entropy: float  # of the node's confidence vector
    information_gain: float  # log2(graph_size / (connections + 1))
    complexity: float  # log2(dimensions) + log2(connections + 1)

    def to_dict(self) -> dict:
        return {
            "entropy": self.entropy,
            "informationGain": self.information_gain,
            "complexity": self.complexity,
        }


def node_information_metrics(
    node: Node,
    connections: Optional[int] = None,
    graph_size: int = DEFAULT_GRAPH_SIZE,
) -> NodeInformationMetrics:
    """
    Entropy, positional information gain and complexity of one node.

    Args:
        node: Node with a non-empty confidence vector
        connections: number of edges touching the node; defaults to
            metadata["evidence_count"], or 1 when that is absent
        graph_size: number of nodes in the surrounding graph

    Raises:
        ValueError: for an empty confidence vector or a non-positive graph_size
    """
    if not node.confidence:
        raise ValueError(f"Node {node.id} has an empty confidence vector")
    if graph_size <= 0:
        raise ValueError(f"graph_size must be positive, got {graph_size}")
    if connections is None:
        connections = node.metadata.get("evidence_count") or 1

    return NodeInformationMetrics(
        entropy=shannon_entropy(node.confidence),
        information_gain=math.log2(graph_size / (connections + 1)),
        complexity=math.log2(len(node.confidence)) + math.log2(connections + 1),
    )
