"""
Connectivity statistics of a trace.

Derived from the recorded generations only; the engine never sees these.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
from scipy import sparse
from scipy.sparse.csgraph import connected_components

if TYPE_CHECKING:
    from motiongen.core.trace import Generation, Trace


@dataclass
class ConnectivitySummary:
    """Per-generation connectivity, one entry per generation."""

    edge_counts: np.ndarray
    mean_degree: np.ndarray
    component_counts: np.ndarray

    @property
    def empty_generations(self) -> int:
        """Generations in which no edge exists."""
        return int((self.edge_counts == 0).sum())


def adjacency_matrix(generation: "Generation") -> sparse.csr_matrix:
    """Directed adjacency of one generation as an (n, n) CSR matrix."""
    ids = generation.node_ids
    index = {node_id: i for i, node_id in enumerate(ids)}
    n = len(ids)

    rows = np.array([index[e.source] for e in generation.edges], dtype=np.int64)
    cols = np.array([index[e.target] for e in generation.edges], dtype=np.int64)
    data = np.ones(len(rows), dtype=np.int8)
    return sparse.csr_matrix((data, (rows, cols)), shape=(n, n))


def degree_per_node(generation: "Generation") -> dict[str, int]:
    """Out-degree of every node, in snapshot order."""
    degrees = np.asarray(adjacency_matrix(generation).sum(axis=1)).ravel()
    return {node_id: int(d) for node_id, d in zip(generation.node_ids, degrees)}


def component_count(generation: "Generation") -> int:
    """Number of (weakly) connected components, isolated nodes included."""
    if not generation.nodes:
        return 0
    n_components, _ = connected_components(
        adjacency_matrix(generation), directed=True, connection="weak"
    )
    return int(n_components)


def summarize(trace: "Trace") -> ConnectivitySummary:
    """Compute connectivity statistics for every generation of a trace."""
    edge_counts = np.array([len(g.edges) for g in trace.generations], dtype=np.int64)
    node_counts = np.array([len(g.nodes) for g in trace.generations], dtype=np.float64)

    with np.errstate(divide='ignore', invalid='ignore'):
        mean_degree = np.where(node_counts > 0, edge_counts / node_counts, 0.0)

    component_counts = np.array(
        [component_count(g) for g in trace.generations], dtype=np.int64
    )
    return ConnectivitySummary(
        edge_counts=edge_counts,
        mean_degree=mean_degree,
        component_counts=component_counts,
    )
