"""
Spectral Analysis

Eigen-decomposition of the graph Laplacian:
- lambda_0 = 0 always (constant eigenvector)
- lambda_1 (Fiedler value): algebraic connectivity, > 0 iff connected
- Multiplicity of 0: number of connected components
"""

from dataclasses import dataclass, field
from typing import List
import numpy as np
from scipy.linalg import eigh

from ..models import Graph
from .matrices import build_context, laplacian_from_adjacency, symmetrize

ZERO_EIGENVALUE_TOL = 1e-9


@dataclass
class SpectralAnalysis:
    """Spectral properties of a graph"""
    eigenvalues: List[float] = field(default_factory=list)  # ascending
    eigenvectors: List[List[float]] = field(default_factory=list)  # eigenvectors[k][node_index]
    laplacian: List[List[float]] = field(default_factory=list)  # D - A, directed out-degree
    symmetric_laplacian: List[List[float]] = field(default_factory=list)  # decomposed matrix
    connectivity: float = 0.0
    algebraic_connectivity: float = 0.0
    num_components: int = 0
    spectral_gap: float = 0.0

    def to_dict(self) -> dict:
        return {
            "eigenvalues": self.eigenvalues,
            "eigenvectors": self.eigenvectors,
            "laplacianMatrix": self.laplacian,
            "symmetricLaplacian": self.symmetric_laplacian,
            "connectivity": self.connectivity,
            "algebraicConnectivity": self.algebraic_connectivity,
            "numComponents": self.num_components,
            "spectralGap": self.spectral_gap,
        }


def compute_connectivity(graph: Graph) -> float:
    """Edge count over the number of unordered node pairs"""
    n = len(graph.nodes)
    return len(graph.edges) / max(1, n * (n - 1) / 2)


def compute_spectral_properties(graph: Graph) -> SpectralAnalysis:
    """
    Compute eigenvalues and eigenvectors of the graph Laplacian.

    The decomposed matrix is the Laplacian of the symmetrized adjacency
    (w(i, j) = max(A[i, j], A[j, i])), which is real symmetric and positive
    semi-definite, so all eigenvalues are real and >= 0. The directed
    D - A Laplacian is reported alongside.

    Args:
        graph: Graph value

    Returns:
        SpectralAnalysis (empty for an empty graph)
    """
    ctx = build_context(graph)
    n = ctx.n
    if n == 0:
        return SpectralAnalysis()

    laplacian = laplacian_from_adjacency(ctx.adjacency)
    symmetric = laplacian_from_adjacency(symmetrize(ctx.adjacency))

    eigenvalues, eigenvectors = eigh(symmetric)
    # Round-off can push the zero eigenvalues slightly negative
    scale = max(1.0, float(np.abs(eigenvalues).max()))
    eigenvalues[np.abs(eigenvalues) < ZERO_EIGENVALUE_TOL * scale] = 0.0

    num_components = int((eigenvalues == 0.0).sum())
    algebraic_connectivity = float(eigenvalues[1]) if n > 1 else 0.0
    spectral_gap = float(eigenvalues[2] - eigenvalues[1]) if n > 2 else 0.0

    return SpectralAnalysis(
        eigenvalues=eigenvalues.tolist(),
        eigenvectors=eigenvectors.T.tolist(),
        laplacian=laplacian.tolist(),
        symmetric_laplacian=symmetric.tolist(),
        connectivity=compute_connectivity(graph),
        algebraic_connectivity=algebraic_connectivity,
        num_components=num_components,
        spectral_gap=spectral_gap,
    )
