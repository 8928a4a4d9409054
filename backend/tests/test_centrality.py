"""
Tests for centrality measures
"""

import logging
import math

import pytest


# =============================================================================
# Test Fixtures
# =============================================================================

@pytest.fixture
def star_graph(make_graph):
    """
    Undirected star (bidirectional edges):

        l1
         |
    l2 - s - l3

    Every leaf-to-leaf shortest path runs through s.
    """
    return make_graph(
        ["s", "l1", "l2", "l3"],
        [("s", "l1"), ("s", "l2"), ("s", "l3")],
        bidirectional=True,
    )


@pytest.fixture
def triangle_graph(make_graph):
    """Complete graph K3, bidirectional edges of confidence 1.0"""
    return make_graph(
        ["a", "b", "c"],
        [("a", "b", 1.0), ("b", "c", 1.0), ("a", "c", 1.0)],
        bidirectional=True,
    )


@pytest.fixture
def undirected_path(make_graph):
    """a - b - c, bidirectional: bipartite, so power iteration oscillates"""
    return make_graph(["a", "b", "c"], [("a", "b", 1.0), ("b", "c", 1.0)], bidirectional=True)


# =============================================================================
# Tests: Betweenness
# =============================================================================

class TestBetweenness:
    """Betweenness via all-shortest-path enumeration"""

    def test_path_graph_interior_beats_endpoints(self, path_graph):
        from evograph.analysis.centrality import compute_centrality_measures

        betweenness = compute_centrality_measures(path_graph).betweenness

        assert betweenness["a"] == 0.0
        assert betweenness["d"] == 0.0
        assert betweenness["b"] > betweenness["a"]
        assert betweenness["c"] > betweenness["d"]
        # b lies on a-c and a-d, c on a-d and b-d, out of 3 pairs each
        assert betweenness["b"] == pytest.approx(2 / 3)
        assert betweenness["c"] == pytest.approx(2 / 3)

    def test_star_center(self, star_graph):
        from evograph.analysis.centrality import compute_centrality_measures

        betweenness = compute_centrality_measures(star_graph).betweenness

        assert betweenness["s"] == pytest.approx(1.0)
        assert betweenness["l1"] == 0.0

    def test_ties_split_equally(self, make_graph):
        """s reaches t through u or v; each gets half a path"""
        from evograph.analysis.centrality import compute_centrality_measures

        graph = make_graph(["s", "u", "v", "t"], [("s", "u"), ("u", "t"), ("s", "v"), ("v", "t")])

        betweenness = compute_centrality_measures(graph).betweenness

        assert betweenness["u"] == pytest.approx(0.5 / 3)
        assert betweenness["v"] == pytest.approx(0.5 / 3)

    def test_independent_of_node_order(self, make_graph):
        from evograph.analysis.centrality import compute_centrality_measures

        edges = [("a", "b"), ("b", "c"), ("c", "d")]
        forward = make_graph(["a", "b", "c", "d"], edges)
        reverse = make_graph(["d", "c", "b", "a"], edges)

        assert compute_centrality_measures(forward).betweenness == pytest.approx(
            compute_centrality_measures(reverse).betweenness
        )

    def test_two_nodes_all_zero(self, make_graph):
        from evograph.analysis.centrality import compute_centrality_measures

        graph = make_graph(["a", "b"], [("a", "b")])

        assert compute_centrality_measures(graph).betweenness == {"a": 0.0, "b": 0.0}


# =============================================================================
# Tests: Degree and Closeness
# =============================================================================

class TestDegreeAndCloseness:

    def test_degree_values(self, path_graph):
        from evograph.analysis.centrality import compute_centrality_measures

        degree = compute_centrality_measures(path_graph).degree

        assert degree == pytest.approx({"a": 1 / 3, "b": 2 / 3, "c": 2 / 3, "d": 1 / 3})

    def test_degree_bounded_with_parallel_edges(self, make_graph, make_edge):
        from evograph.analysis.centrality import compute_centrality_measures

        graph = make_graph(["a", "b"], [
            make_edge("a", "b", edge_id="e1"),
            make_edge("a", "b", edge_id="e2"),
            make_edge("b", "a", edge_id="e3"),
            make_edge("a", "a", edge_id="loop"),
        ])

        degree = compute_centrality_measures(graph).degree

        assert all(0.0 <= v <= 1.0 for v in degree.values())
        assert degree["a"] == pytest.approx(1.0)

    def test_single_node_degree_zero(self, make_graph):
        from evograph.analysis.centrality import compute_centrality_measures

        assert compute_centrality_measures(make_graph(["a"])).degree == {"a": 0.0}

    def test_closeness_uses_weighted_distances(self, path_graph):
        from evograph.analysis.centrality import compute_centrality_measures

        closeness = compute_centrality_measures(path_graph).closeness

        # a reaches 3 nodes at 0.8 + 1.6 + 2.4
        assert closeness["a"] == pytest.approx(3 / 4.8)
        assert closeness["c"] == pytest.approx(1 / 0.8)
        assert closeness["d"] == 0.0


# =============================================================================
# Tests: PageRank and Eigenvector
# =============================================================================

class TestPowerIteration:

    @pytest.mark.parametrize("fixture_name", ["path_graph", "star_graph", "triangle_graph"])
    def test_pagerank_mass(self, fixture_name, request):
        from evograph.analysis.centrality import compute_centrality_measures

        graph = request.getfixturevalue(fixture_name)

        pagerank = compute_centrality_measures(graph).pagerank

        assert sum(pagerank.values()) == pytest.approx(1.0, abs=1e-3)

    def test_pagerank_mass_without_edges(self, make_graph):
        from evograph.analysis.centrality import compute_centrality_measures

        measures = compute_centrality_measures(make_graph(["a", "b", "c", "d"]))

        assert measures.pagerank == pytest.approx({n: 0.25 for n in "abcd"})
        assert measures.converged["pagerank"]

    def test_pagerank_iteration_cap(self, path_graph):
        from evograph.analysis.centrality import compute_pagerank
        from evograph.analysis.matrices import build_context

        pagerank, converged = compute_pagerank(build_context(path_graph), max_iter=1)

        assert converged is False
        assert set(pagerank) == {"a", "b", "c", "d"}
        assert sum(pagerank.values()) == pytest.approx(1.0)

    def test_pagerank_converges_under_default_cap(self, path_graph):
        from evograph.analysis.centrality import compute_pagerank
        from evograph.analysis.matrices import build_context

        _, converged = compute_pagerank(build_context(path_graph))

        assert converged is True

    def test_pagerank_grows_downstream(self, path_graph):
        from evograph.analysis.centrality import compute_centrality_measures

        pagerank = compute_centrality_measures(path_graph).pagerank

        assert pagerank["a"] < pagerank["b"] < pagerank["c"] < pagerank["d"]

    def test_pagerank_star_center_highest(self, star_graph):
        from evograph.analysis.centrality import compute_centrality_measures

        measures = compute_centrality_measures(star_graph)

        assert measures.pagerank["s"] == max(measures.pagerank.values())
        assert measures.converged["pagerank"]

    def test_eigenvector_symmetric_triangle(self, triangle_graph):
        from evograph.analysis.centrality import compute_centrality_measures

        measures = compute_centrality_measures(triangle_graph)

        assert measures.eigenvector == pytest.approx({n: 1 / math.sqrt(3) for n in "abc"})
        assert measures.converged["eigenvector"]

    def test_eigenvector_reports_non_convergence(self, undirected_path, caplog):
        from evograph.analysis.centrality import compute_centrality_measures

        with caplog.at_level(logging.WARNING, logger="evograph.analysis.centrality"):
            measures = compute_centrality_measures(undirected_path)

        assert measures.converged["eigenvector"] is False
        assert set(measures.eigenvector) == {"a", "b", "c"}
        assert "did not converge" in caplog.text

    def test_eigenvector_without_edges(self, make_graph):
        from evograph.analysis.centrality import compute_centrality_measures

        measures = compute_centrality_measures(make_graph(["a", "b"]))

        assert measures.eigenvector == {"a": 0.0, "b": 0.0}
        assert measures.converged["eigenvector"]


# =============================================================================
# Tests: Degenerate input and summaries
# =============================================================================

class TestCentralityMeasures:

    def test_empty_graph(self, empty_graph):
        from evograph.analysis.centrality import compute_centrality_measures

        measures = compute_centrality_measures(empty_graph)

        assert measures.betweenness == {}
        assert measures.closeness == {}
        assert measures.pagerank == {}
        assert measures.eigenvector == {}
        assert measures.degree == {}

    def test_summary(self, star_graph):
        from evograph.analysis.centrality import compute_centrality_measures

        result = compute_centrality_measures(star_graph).summary("betweenness", top_k=1)

        assert result.top_nodes == [("s", pytest.approx(1.0))]
        assert result.max_value == pytest.approx(1.0)
        assert result.min_value == 0.0
        assert result.mean == pytest.approx(0.25)

    def test_summary_carries_convergence(self, star_graph, undirected_path):
        from evograph.analysis.centrality import compute_centrality_measures

        star = compute_centrality_measures(star_graph)
        path = compute_centrality_measures(undirected_path)

        assert star.summary("pagerank").converged is True
        assert star.summary("betweenness").converged is None
        assert path.summary("eigenvector").converged is False
        assert star.summary("degree").to_dict()["measure"] == "degree"

    def test_summary_of_empty_graph(self, empty_graph):
        from evograph.analysis.centrality import compute_centrality_measures

        result = compute_centrality_measures(empty_graph).summary("pagerank")

        assert result.top_nodes == []
        assert result.mean == 0.0
        assert result.converged is True

    def test_summary_unknown_measure(self, star_graph):
        from evograph.analysis.centrality import compute_centrality_measures

        with pytest.raises(ValueError):
            compute_centrality_measures(star_graph).summary("katz")

    def test_every_node_keyed(self, path_graph):
        from evograph.analysis.centrality import compute_centrality_measures

        measures = compute_centrality_measures(path_graph).to_dict()

        for name in ("betweenness", "closeness", "pagerank", "eigenvector", "degree"):
            assert set(measures[name]) == {"a", "b", "c", "d"}
