"""
Tests for chain-based outcome prediction
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from causal_graph.config import EngineConfig
from causal_graph.models import (
    CausalGraph,
    Chain,
    Edge,
    EventDescriptor,
    GraphMetadata,
    Node,
    SourceAttribution,
)
from causal_graph.predictor import (
    CausalPredictor,
    fallback_prediction,
    is_negative_signal,
    is_positive_signal,
)

FALLBACK = {
    "outcome": "Yes",
    "probability": 0.5,
    "confidence": "Low",
    "ci_lower": 0.35,
    "ci_upper": 0.65,
    "reasoning": "Insufficient causal data for prediction"
}


def _make_attribution(title, source_id="source_0"):
    return SourceAttribution(
        source_id=source_id,
        source_title=title,
        source_url="",
        source_type="Unknown",
        relevance=0.5,
        extraction_method="pattern",
        confidence=0.75
    )


def _make_node(node_id, label, node_type="Concept", sources=None):
    properties = {"sources": sources} if sources is not None else {}
    return Node(id=node_id, label=label, type=node_type, size=10, color="#b5cea8", properties=properties)


def _make_graph(factor_label, strength=0.8, event_label="Will the economy expand?", sources=None):
    """Graph with one factor node A -> e1 and its chain in metadata."""
    graph = CausalGraph()
    graph.add_node(_make_node("e1", event_label, "Event"))
    graph.add_node(_make_node("A", factor_label, sources=sources))
    graph.add_edge(Edge("A", "e1", "INFLUENCES", strength))
    graph.metadata = GraphMetadata(causal_chains=[Chain("A", "e1", ["A", "e1"], strength)])
    return graph


class TestSignals:
    """Tests for keyword signal detection."""

    def test_positive(self):
        assert is_positive_signal(_make_node("a", "Economic Growth"))
        assert not is_positive_signal(_make_node("a", "Interest rates"))

    def test_negative(self):
        assert is_negative_signal(_make_node("a", "Revenue decline"))
        assert not is_negative_signal(_make_node("a", "Revenue"))

    def test_substring_match(self):
        assert is_positive_signal(_make_node("a", "Sunrise"))


class TestFallback:
    """Tests for the fixed fallback prediction."""

    def setup_method(self):
        self.predictor = CausalPredictor()
        self.event = EventDescriptor(title="Will it rain?", id="e1")

    def test_fallback_shape(self):
        assert [p.to_dict() for p in fallback_prediction()] == [FALLBACK]

    def test_no_graph(self):
        assert [p.to_dict() for p in self.predictor.predict(self.event, None)] == [FALLBACK]

    def test_empty_graph(self):
        assert [p.to_dict() for p in self.predictor.predict(self.event, CausalGraph())] == [FALLBACK]

    def test_graph_without_chains(self):
        graph = _make_graph("Economic growth")
        graph.metadata.causal_chains = []
        assert [p.to_dict() for p in self.predictor.predict(self.event, graph)] == [FALLBACK]

    def test_unresolvable_chain(self):
        graph = _make_graph("Economic growth")
        graph.metadata.causal_chains = [Chain("X", "Y", ["X", "Y"], 0.9)]
        assert [p.to_dict() for p in self.predictor.predict(self.event, graph)] == [FALLBACK]


class TestChainPrediction:
    """Tests for single-chain predictions."""

    def setup_method(self):
        self.predictor = CausalPredictor()
        self.event = EventDescriptor(title="Will the economy expand?", id="e1")

    def test_positive_chain(self):
        graph = _make_graph("Economic growth", sources=[_make_attribution("Reuters")])
        predictions = self.predictor.predict(self.event, graph)

        assert len(predictions) == 1
        prediction = predictions[0]
        assert prediction.outcome == "Yes"
        assert prediction.probability == pytest.approx(0.9)
        assert prediction.confidence == "High"
        assert prediction.ci_lower == pytest.approx(0.75)
        assert prediction.ci_upper == 1.0
        assert prediction.reasoning == (
            "Causal chain: Factor: Economic growth [Sources: Reuters]  "
            "Outcome: Will the economy expand?. Strength: 80.0%."
        )

    def test_negative_chain_clamped(self):
        graph = _make_graph("Revenue decline", strength=1.0)
        prediction = self.predictor.predict(self.event, graph)[0]

        assert prediction.probability == 0.1
        assert prediction.ci_lower == pytest.approx(0.0)

    def test_neutral_chain(self):
        graph = _make_graph("Interest rates", strength=0.6)
        prediction = self.predictor.predict(self.event, graph)[0]

        assert prediction.probability == 0.5
        assert prediction.confidence == "Medium"

    def test_zero_strength_chain(self):
        graph = _make_graph("Interest rates", strength=0.0)
        prediction = self.predictor.predict(self.event, graph)[0]

        assert prediction.confidence == "Low"
        assert prediction.reasoning.endswith("Strength: 50.0%.")

    def test_probability_bounds_from_config(self):
        predictor = CausalPredictor(EngineConfig(max_probability=0.8))
        graph = _make_graph("Economic growth", strength=1.0)
        assert predictor.predict(self.event, graph)[0].probability == 0.8


class TestOutcomeInference:
    """Tests for outcome labels."""

    def setup_method(self):
        self.predictor = CausalPredictor()

    def test_default_yes(self):
        graph = _make_graph("Interest rates")
        assert self.predictor.infer_outcome(list(graph.nodes.values()), graph) == "Yes"
        assert self.predictor.infer_outcome([], graph) == "Yes"

    def test_last_node_outcome(self):
        graph = _make_graph("Interest rates")
        outcome = _make_node("o", "Recession", "Outcome")
        graph.add_node(outcome)
        assert self.predictor.infer_outcome([graph.get_node("A"), outcome], graph) == "Recession"

    def test_outcome_reached_by_edge(self):
        graph = _make_graph("Interest rates")
        graph.add_node(_make_node("o", "Recession", "Outcome"))
        graph.add_edge(Edge("A", "o", "PREDICTS", 0.6))

        prediction = self.predictor.predict(EventDescriptor(title="Q", id="e1"), graph)[0]
        assert prediction.outcome == "Recession"


class TestReasoning:
    """Tests for reasoning text."""

    def setup_method(self):
        self.predictor = CausalPredictor()

    def test_source_titles_capped(self):
        sources = [
            _make_attribution("Reuters"),
            _make_attribution("", "source_1"),
            _make_attribution("Bloomberg", "source_2"),
        ]
        graph = _make_graph("Interest rates", sources=sources)
        chain = graph.metadata.causal_chains[0]
        reasoning = self.predictor.generate_reasoning(chain, list(graph.nodes.values())[::-1])

        assert "[Sources: Reuters, Source source_1]" in reasoning
        assert "Bloomberg" not in reasoning

    def test_intermediate_steps(self):
        nodes = [_make_node("a", "Rates"), _make_node("b", "Credit"), _make_node("e1", "Event", "Event")]
        reasoning = self.predictor.generate_reasoning(Chain("a", "e1", ["a", "b", "e1"], 0.36), nodes)
        assert reasoning == "Causal chain: Factor: Rates  Credit  Outcome: Event. Strength: 36.0%."

    def test_empty_path(self):
        assert self.predictor.generate_reasoning(Chain("a", "b", [], 0.5), []) == "No causal path identified"


class TestAggregation:
    """Tests for merging chain candidates."""

    def setup_method(self):
        self.predictor = CausalPredictor()

    def test_confidence_weighted_average(self):
        predictions = self.predictor.aggregate([
            {"outcome": "Yes", "probability": 0.8, "confidence": 0.6, "reasoning": "r1"},
            {"outcome": "Yes", "probability": 0.4, "confidence": 0.2, "reasoning": "r2"},
        ])

        assert len(predictions) == 1
        assert predictions[0].probability == pytest.approx(0.7)
        assert predictions[0].confidence == "Low"
        assert predictions[0].reasoning == "r1; r2"
        assert predictions[0].ci_lower == pytest.approx(0.55)
        assert predictions[0].ci_upper == pytest.approx(0.85)

    def test_top_two_sorted(self):
        predictions = self.predictor.aggregate([
            {"outcome": "A", "probability": 0.3, "confidence": 0.6, "reasoning": "a"},
            {"outcome": "B", "probability": 0.8, "confidence": 0.6, "reasoning": "b"},
            {"outcome": "C", "probability": 0.6, "confidence": 0.6, "reasoning": "c"},
        ])

        assert [p.outcome for p in predictions] == ["B", "C"]
        assert all(p.confidence == "Medium" for p in predictions)

    def test_missing_reasoning(self):
        predictions = self.predictor.aggregate([
            {"outcome": "Yes", "probability": 0.6, "confidence": 0.9, "reasoning": ""},
        ])
        assert predictions[0].reasoning == "Based on causal analysis"
        assert predictions[0].confidence == "High"

    def test_no_outcomes_falls_back(self):
        predictions = self.predictor.aggregate([
            {"outcome": "", "probability": 0.6, "confidence": 0.9, "reasoning": "r"},
        ])
        assert [p.to_dict() for p in predictions] == [FALLBACK]
