"""
Pytest configuration and shared fixtures.
"""

import matplotlib
matplotlib.use("Agg")

import pytest
import numpy as np


class ScriptedRng:
    """
    Stand-in for np.random.Generator with predetermined draws.

    `random()` always returns `uniform`; `integers()` pops values from
    `ints` in order.
    """

    def __init__(self, uniform=0.5, ints=()):
        self.uniform = uniform
        self.ints = list(ints)

    def random(self):
        return self.uniform

    def integers(self, low, high=None):
        return self.ints.pop(0)


@pytest.fixture
def rng():
    """Reproducible random number generator."""
    return np.random.default_rng(seed=42)


@pytest.fixture
def scripted_rng():
    """Factory for generators with scripted draws."""
    return ScriptedRng


@pytest.fixture
def write_graph(tmp_path):
    """Write a transport-graph document and return its path."""

    def _write(nodes, edges, width=500, height=500, name="graph.xml"):
        lines = [f'<field width="{width}" height="{height}">']
        for node_id, x, y in nodes:
            lines.append(f'  <node id="{node_id}" x="{x}" y="{y}"/>')
        for source, target in edges:
            lines.append(f'  <edge from="{source}" to="{target}"/>')
        lines.append("</field>")
        path = tmp_path / name
        path.write_text("\n".join(lines), encoding="utf-8")
        return path

    return _write
