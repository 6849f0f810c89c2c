"""
Trace visualization.

Plots node trajectories across all generations, the proximity graph of a
single generation on top of them, and connectivity over time.
"""

from __future__ import annotations
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.collections import LineCollection
from matplotlib.figure import Figure

from motiongen.analysis.connectivity import summarize

if TYPE_CHECKING:
    from motiongen.core.trace import Trace


def plot_trace(
    trace: "Trace",
    generation: int | None = None,
    title: str = "Mobility Trace",
    ax: Axes | None = None,
    figsize: tuple[float, float] = (8, 8),
    show_edges: bool = True,
    show_bounds: bool = True,
) -> tuple[Figure, Axes]:
    """
    Plot every node's path and the proximity edges of one generation.

    Args:
        trace: Recorded trace
        generation: 1-based generation whose positions and edges are drawn
            on top of the paths (last generation if None)
        title: Plot title
        ax: Existing axes (creates new if None)
        show_edges: Draw the proximity edges of `generation`
        show_bounds: Draw the field rectangle

    Returns:
        (fig, ax) tuple
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    if show_bounds:
        ax.add_patch(plt.Rectangle(
            (0, 0), trace.width, trace.height,
            fill=False, linestyle="--", edgecolor="gray", linewidth=1,
        ))

    cmap_lines = plt.get_cmap("tab10")
    for i, path in enumerate(trace.trajectories().values()):
        ax.plot(
            path[:, 0], path[:, 1],
            color=cmap_lines(i % 10), linewidth=1, alpha=0.6, zorder=1,
        )

    if trace.generations:
        index = trace.generation_count - 1 if generation is None else generation - 1
        gen = trace.generations[index]
        positions = gen.position_array()
        lookup = {node_id: i for i, node_id in enumerate(gen.node_ids)}

        if show_edges and gen.edges:
            segments = [
                (positions[lookup[e.source]], positions[lookup[e.target]])
                for e in gen.edges
            ]
            ax.add_collection(LineCollection(segments, colors="black", linewidths=0.5, zorder=2))

        ax.scatter(
            positions[:, 0], positions[:, 1],
            color="red", s=30, zorder=3, edgecolors="white", linewidths=0.5,
        )
        title = f"{title} (gen {gen.n})"

    ax.set_title(title)
    ax.set_xlabel("x")
    ax.set_ylabel("y")
    ax.set_aspect("equal", adjustable="datalim")
    ax.autoscale_view()

    return fig, ax


def plot_connectivity(
    trace: "Trace",
    title: str = "Connectivity",
    figsize: tuple[float, float] = (10, 4),
) -> Figure:
    """Edge count and component count per generation."""
    summary = summarize(trace)
    gens = np.arange(1, trace.generation_count + 1)

    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=figsize)

    ax1.plot(gens, summary.edge_counts, linewidth=2)
    ax1.set_xlabel("Generation")
    ax1.set_ylabel("Edges")
    ax1.set_title("Proximity edges")
    ax1.grid(True, alpha=0.3)

    ax2.plot(gens, summary.component_counts, linewidth=2, color="tab:orange")
    ax2.set_xlabel("Generation")
    ax2.set_ylabel("Components")
    ax2.set_title("Connected components")
    ax2.grid(True, alpha=0.3)

    fig.suptitle(title)
    fig.tight_layout()
    return fig


def plot_trace_summary(trace: "Trace", figsize: tuple[float, float] = (14, 6)) -> Figure:
    """Trace plot (left) next to edge and component counts (right)."""
    fig = plt.figure(figsize=figsize)
    grid = fig.add_gridspec(2, 2, width_ratios=[1.2, 1])

    plot_trace(trace, ax=fig.add_subplot(grid[:, 0]))

    summary = summarize(trace)
    gens = np.arange(1, trace.generation_count + 1)

    ax_edges = fig.add_subplot(grid[0, 1])
    ax_edges.plot(gens, summary.edge_counts, linewidth=2)
    ax_edges.set_ylabel("Edges")
    ax_edges.grid(True, alpha=0.3)

    ax_comp = fig.add_subplot(grid[1, 1], sharex=ax_edges)
    ax_comp.plot(gens, summary.component_counts, linewidth=2, color="tab:orange")
    ax_comp.set_xlabel("Generation")
    ax_comp.set_ylabel("Components")
    ax_comp.grid(True, alpha=0.3)

    fig.tight_layout()
    return fig


def save_figure(fig: Figure, path: str | Path, dpi: int = 150, **kwargs) -> None:
    """Save figure to file."""
    fig.savefig(path, dpi=dpi, bbox_inches="tight", **kwargs)
