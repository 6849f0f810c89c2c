"""
Analysis layer: statistics derived from a recorded trace.

- adjacency_matrix / degree_per_node: per-generation proximity graph
- component_count: connected components of one generation
- summarize: edge counts, mean degree and components over time
"""

from motiongen.analysis.connectivity import (
    ConnectivitySummary,
    adjacency_matrix,
    component_count,
    degree_per_node,
    summarize,
)

__all__ = [
    "ConnectivitySummary",
    "adjacency_matrix",
    "component_count",
    "degree_per_node",
    "summarize",
]
