"""
Visualization utilities.

- Node trajectories with one generation's proximity graph
- Edge and component counts over time
"""

from motiongen.viz.traces import (
    plot_trace,
    plot_connectivity,
    plot_trace_summary,
    save_figure,
)

__all__ = [
    "plot_trace",
    "plot_connectivity",
    "plot_trace_summary",
    "save_figure",
]
