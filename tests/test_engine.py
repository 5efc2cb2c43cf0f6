"""
Tests for the CausalityEngine facade
"""

import sys
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from causal_graph import CausalityEngine, InvalidInputError

FALLBACK = {
    "outcome": "Yes",
    "probability": 0.5,
    "confidence": "Low",
    "ci_lower": 0.35,
    "ci_upper": 0.65,
    "reasoning": "Insufficient causal data for prediction"
}

ENERGY_SOURCES = [{
    "title": "Energy outlook",
    "text": "Green Energy policy drives investment.",
    "relevanceScore": 0.8
}]
ENERGY_EVENT = {"id": "inv", "title": "Will investment pick up?"}


class TestCausalityEngine:
    """Tests for build + predict."""

    def setup_method(self):
        self.engine = CausalityEngine()

    def test_analyze_without_chains_falls_back(self, scenario_sources, scenario_event):
        result = self.engine.analyze(scenario_sources, scenario_event)

        assert result["graph"].metadata.entity_count == 2
        assert [p.to_dict() for p in result["predictions"]] == [FALLBACK]

    def test_empty_input(self):
        result = self.engine.analyze([], None)

        assert list(result["graph"].nodes) == ["event"]
        assert [p.to_dict() for p in result["predictions"]] == [FALLBACK]

    def test_predict_without_graph(self, scenario_event):
        predictions = self.engine.predict_from_causality(scenario_event, None)
        assert [p.to_dict() for p in predictions] == [FALLBACK]

    def test_invalid_sources(self, scenario_event):
        with pytest.raises(InvalidInputError):
            self.engine.build_causal_graph("not a list", scenario_event)

    def test_chain_prediction(self, lenient_config):
        engine = CausalityEngine(lenient_config)
        predictions = engine.analyze(ENERGY_SOURCES, ENERGY_EVENT)["predictions"]

        assert len(predictions) == 1
        prediction = predictions[0]
        assert prediction.outcome == "Yes"
        assert prediction.probability == 0.5
        assert prediction.confidence == "Medium"
        assert prediction.ci_lower == pytest.approx(0.35)
        assert prediction.ci_upper == pytest.approx(0.65)
        assert prediction.reasoning == (
            "Causal chain: Factor: Green Energy [Sources: Energy outlook]  "
            "Outcome: Will investment pick up?. Strength: 70.0%."
        )

    def test_no_state_between_builds(self, scenario_sources, scenario_event, federal_reserve_sources):
        first = self.engine.build_causal_graph(scenario_sources, scenario_event).to_dict()
        self.engine.build_causal_graph(federal_reserve_sources, scenario_event)
        again = self.engine.build_causal_graph(scenario_sources, scenario_event).to_dict()

        assert first == again

    def test_concurrent_analyses(self, scenario_sources, scenario_event, federal_reserve_sources):
        inputs = [scenario_sources, federal_reserve_sources] * 4
        expected = [self.engine.build_causal_graph(s, scenario_event).to_dict() for s in inputs]

        with ThreadPoolExecutor(max_workers=4) as pool:
            graphs = list(pool.map(lambda s: self.engine.build_causal_graph(s, scenario_event), inputs))

        assert [g.to_dict() for g in graphs] == expected

    def test_log_dir(self, tmp_path, scenario_sources, scenario_event):
        CausalityEngine(output_dir=tmp_path).analyze(scenario_sources, scenario_event)
        assert (tmp_path / "summary.json").exists()
