"""
Proximity graph: which nodes can hear each other in one generation.

Every ordered pair (i, j), i != j, whose positions are at most EDGE_RADIUS
apart becomes an edge. Edges come out with the source index ascending in
the outer loop and the target index ascending in the inner loop, and are
numbered e0, e1, ... from zero in every generation. The ordering is part
of the trace format.

Distances are compared on squared integer offsets, so the boundary
(distance exactly EDGE_RADIUS) is exact.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence

import numpy as np


EDGE_RADIUS = 75


@dataclass(frozen=True)
class Edge:
    """A directed proximity edge between two node ids."""

    edge_id: str
    source: str
    target: str


def edge_id(counter: int) -> str:
    return f"e{counter}"


def proximity_mask(positions: np.ndarray, radius: int = EDGE_RADIUS) -> np.ndarray:
    """
    Boolean (n, n) matrix, True where nodes i and j are within `radius`.

    The diagonal is always False.
    """
    positions = np.asarray(positions, dtype=np.int64).reshape(-1, 2)
    offsets = positions[:, None, :] - positions[None, :, :]
    dist_sq = (offsets ** 2).sum(axis=-1)
    mask = dist_sq <= radius * radius
    np.fill_diagonal(mask, False)
    return mask


def build_edges(
    node_ids: Sequence[str],
    positions: np.ndarray,
    radius: int = EDGE_RADIUS,
) -> list[Edge]:
    """
    Build the ordered edge list for one generation.

    Args:
        node_ids: Node ids in field order
        positions: (n, 2) integer positions in the same order
        radius: Connection radius (inclusive)

    Returns:
        Edges ordered by (source index, target index), ids from e0
    """
    if len(node_ids) == 0:
        return []

    # np.nonzero walks the matrix row-major: source ascending, then target
    sources, targets = np.nonzero(proximity_mask(positions, radius))
    return [
        Edge(edge_id(counter), node_ids[i], node_ids[j])
        for counter, (i, j) in enumerate(zip(sources, targets))
    ]
