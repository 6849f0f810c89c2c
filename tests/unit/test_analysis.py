"""Unit tests for connectivity analysis."""

import numpy as np
import pytest

from motiongen.analysis.connectivity import (
    adjacency_matrix,
    component_count,
    degree_per_node,
    summarize,
)
from motiongen.core.proximity import build_edges
from motiongen.core.trace import BrownianConfig, Generation, Trace, generate_brownian


def make_generation(n, nodes):
    ids = [node_id for node_id, _, _ in nodes]
    positions = np.array([(x, y) for _, x, y in nodes]).reshape(-1, 2)
    return Generation(n=n, nodes=nodes, edges=build_edges(ids, positions))


@pytest.fixture
def pair_and_loner():
    return make_generation(1, [("n1", 0, 0), ("n2", 10, 0), ("n3", 500, 500)])


class TestGenerationStats:
    """Tests for single-generation statistics."""

    def test_adjacency_matrix(self, pair_and_loner):
        matrix = adjacency_matrix(pair_and_loner).toarray()
        assert matrix.shape == (3, 3)
        assert matrix.tolist() == [[0, 1, 0], [1, 0, 0], [0, 0, 0]]

    def test_degree_per_node(self, pair_and_loner):
        assert degree_per_node(pair_and_loner) == {"n1": 1, "n2": 1, "n3": 0}

    def test_component_count(self, pair_and_loner):
        assert component_count(pair_and_loner) == 2

    def test_fully_connected(self):
        gen = make_generation(1, [("n1", 0, 0), ("n2", 50, 0), ("n3", 100, 0)])
        # n1 and n3 are 100 apart but linked through n2
        assert component_count(gen) == 1
        assert degree_per_node(gen) == {"n1": 1, "n2": 2, "n3": 1}

    def test_empty_generation(self):
        gen = Generation(n=1, nodes=[], edges=[])
        assert component_count(gen) == 0
        assert degree_per_node(gen) == {}


class TestSummary:
    """Tests for whole-trace summaries."""

    def test_summary_values(self, pair_and_loner):
        apart = make_generation(2, [("n1", 0, 0), ("n2", 300, 0), ("n3", 500, 500)])
        trace = Trace(width=600, height=600, generations=[pair_and_loner, apart])
        summary = summarize(trace)

        assert summary.edge_counts.tolist() == [2, 0]
        assert summary.mean_degree.tolist() == pytest.approx([2 / 3, 0.0])
        assert summary.component_counts.tolist() == [2, 3]
        assert summary.empty_generations == 1

    def test_summary_lengths(self, rng):
        trace = generate_brownian(
            BrownianConfig(width=200, height=200, node_count=8, generation_count=15), rng
        )
        summary = summarize(trace)
        assert len(summary.edge_counts) == 15
        assert len(summary.component_counts) == 15
        assert (summary.component_counts >= 1).all()
        assert (summary.component_counts <= 8).all()

    def test_empty_trace(self):
        summary = summarize(Trace(width=1, height=1))
        assert len(summary.edge_counts) == 0
        assert summary.empty_generations == 0
