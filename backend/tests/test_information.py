"""
Tests for information-theoretic metrics
"""

import math

import pytest


class TestEntropy:

    def test_uniform_distribution(self):
        from evograph.analysis.information import shannon_entropy

        assert shannon_entropy([0.25, 0.25, 0.25, 0.25]) == pytest.approx(2.0)

    def test_values_are_normalised(self):
        from evograph.analysis.information import shannon_entropy

        assert shannon_entropy([0.8, 0.8]) == pytest.approx(1.0)

    def test_degenerate_inputs(self):
        from evograph.analysis.information import shannon_entropy

        assert shannon_entropy([]) == 0.0
        assert shannon_entropy([0.0, 0.0]) == 0.0
        assert shannon_entropy([0.7]) == 0.0

    def test_zero_entries_ignored(self):
        from evograph.analysis.information import shannon_entropy

        assert shannon_entropy([0.5, 0.0, 0.5]) == pytest.approx(1.0)


class TestDivergenceAndMutualInformation:

    def test_kl_identical_is_zero(self):
        from evograph.analysis.information import kl_divergence

        assert kl_divergence([0.2, 0.8], [0.2, 0.8]) == pytest.approx(0.0)

    def test_kl_value(self):
        from evograph.analysis.information import kl_divergence

        expected = 0.5 * math.log2(0.5 / 0.25) + 0.5 * math.log2(0.5 / 0.75)
        assert kl_divergence([1, 1], [1, 3]) == pytest.approx(expected)

    def test_kl_length_mismatch(self):
        from evograph.analysis.information import kl_divergence

        with pytest.raises(ValueError):
            kl_divergence([0.5, 0.5], [1.0])

    def test_mutual_information_independent(self):
        from evograph.analysis.information import mutual_information

        mi = mutual_information([0.5, 0.5], [0.5, 0.5], [[0.25, 0.25], [0.25, 0.25]])

        assert mi == pytest.approx(0.0)

    def test_mutual_information_identical(self):
        from evograph.analysis.information import mutual_information

        mi = mutual_information([0.5, 0.5], [0.5, 0.5], [[0.5, 0.0], [0.0, 0.5]])

        assert mi == pytest.approx(1.0)

    def test_split_information_gain(self):
        from evograph.analysis.information import split_information_gain

        assert split_information_gain(1.0, [2, 2], [0.0, 0.0]) == pytest.approx(1.0)
        assert split_information_gain(1.0, [1, 3], [1.0, 1.0]) == pytest.approx(0.0)

    def test_graph_complexity(self):
        from evograph.analysis.information import graph_complexity

        assert graph_complexity(3, 7) == pytest.approx(2.0 + 3.0)


class TestGraphInformation:

    def test_identity_has_no_gain(self, path_graph):
        from evograph.analysis.information import information_gain

        assert information_gain(path_graph, path_graph) == 0.0

    def test_graph_entropy_pools_confidences(self, path_graph):
        from evograph.analysis.information import graph_entropy

        # 8 equal confidence values
        assert graph_entropy(path_graph) == pytest.approx(3.0)

    def test_adding_nodes_gains_information(self, path_graph, make_graph):
        from evograph.analysis.information import information_gain

        smaller = make_graph(["a", "b"])

        assert information_gain(smaller, path_graph) == pytest.approx(1.0)

    def test_empty_graph(self, empty_graph):
        from evograph.analysis.information import graph_entropy

        assert graph_entropy(empty_graph) == 0.0


class TestDescriptionLength:

    def test_mdl_value(self):
        from evograph.analysis.information import mdl_score

        assert mdl_score(-10.0, 4, 100) == pytest.approx(10.0 + 2 * math.log(100))

    def test_single_observation_has_no_penalty(self):
        from evograph.analysis.information import mdl_score

        assert mdl_score(-3.5, 50, 1) == pytest.approx(3.5)

    def test_richer_model_costs_more(self):
        from evograph.analysis.information import mdl_score

        assert mdl_score(-10.0, 2, 50) < mdl_score(-10.0, 8, 50)

    def test_non_positive_data_size(self):
        from evograph.analysis.information import mdl_score

        with pytest.raises(ValueError):
            mdl_score(-1.0, 2, 0)


class TestNodeInformation:

    def test_explicit_connections(self, make_node):
        from evograph.analysis.information import node_information_metrics

        node = make_node("h", [0.5, 0.5, 0.5, 0.5])

        metrics = node_information_metrics(node, connections=3, graph_size=8)

        assert metrics.entropy == pytest.approx(2.0)
        assert metrics.information_gain == pytest.approx(1.0)
        assert metrics.complexity == pytest.approx(4.0)

    def test_connections_from_evidence_count(self, make_node):
        from evograph.analysis.information import node_information_metrics

        node = make_node("h", [0.9, 0.1], evidence_count=7)

        metrics = node_information_metrics(node, graph_size=16)

        assert metrics.information_gain == pytest.approx(1.0)
        assert metrics.complexity == pytest.approx(1.0 + 3.0)

    def test_defaults(self, make_node):
        from evograph.analysis.information import node_information_metrics

        metrics = node_information_metrics(make_node("h"))

        # one connection, graph of 10
        assert metrics.information_gain == pytest.approx(math.log2(5))
        assert metrics.complexity == pytest.approx(2.0)
        assert metrics.entropy == pytest.approx(1.0)

    def test_to_dict(self, make_node):
        from evograph.analysis.information import node_information_metrics

        result = node_information_metrics(make_node("h"), connections=1, graph_size=2).to_dict()

        assert result == {"entropy": pytest.approx(1.0), "informationGain": 0.0, "complexity": pytest.approx(2.0)}

    def test_invalid_arguments(self, make_node):
        from evograph.analysis.information import node_information_metrics

        with pytest.raises(ValueError):
            node_information_metrics(make_node("h", []))
        with pytest.raises(ValueError):
            node_information_metrics(make_node("h"), graph_size=0)
