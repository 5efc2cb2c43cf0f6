"""
Tests for CLI commands
"""

import json
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from cli import run_analysis as cli_main
from cli.commands import load_analysis_input, run_analysis
from causal_graph.exceptions import InvalidInputError


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    monkeypatch.setattr(cli_main, "setup_logging", lambda verbose=False: None)


class TestLoadAnalysisInput:
    """Tests for input file loading."""

    def test_sample_file(self, sample_analysis_path):
        sources, event = load_analysis_input(sample_analysis_path)

        assert len(sources) == 3
        assert event.node_id == "fed-rate-cut-2026"
        assert sources[0].source == "Exa AI"

    def test_bare_source_list(self, tmp_path, scenario_sources):
        path = tmp_path / "sources.json"
        path.write_text(json.dumps(scenario_sources))
        sources, event = load_analysis_input(path)

        assert len(sources) == 1
        assert event.title == "Untitled event"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_analysis_input(tmp_path / "missing.json")

    def test_invalid_payload(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps("just text"))
        with pytest.raises(InvalidInputError):
            load_analysis_input(path)


class TestRunAnalysis:
    """Tests for run_analysis."""

    def test_writes_output(self, tmp_path, sample_analysis_path):
        output = tmp_path / "out" / "result.json"
        result = run_analysis(sample_analysis_path, output_path=output)

        data = json.loads(output.read_text())
        assert set(data) == {"event", "graph", "predictions"}
        assert data["event"]["id"] == "fed-rate-cut-2026"
        assert data["graph"]["metadata"]["totalSources"] == 3
        assert len(data["graph"]["nodes"]) == len(result["graph"].nodes)
        assert data["predictions"] == [p.to_dict() for p in result["predictions"]]


class TestMain:
    """Tests for the argparse entry point."""

    def test_analyze(self, tmp_path, sample_analysis_path, capsys):
        output = tmp_path / "result.json"
        code = cli_main.main(["analyze", "--input", str(sample_analysis_path), "-o", str(output)])

        assert code == 0
        assert output.exists()
        out = capsys.readouterr().out
        assert "GRAPH:" in out
        assert "PREDICTIONS:" in out

    def test_predict(self, sample_analysis_path, capsys):
        assert cli_main.main(["predict", "-i", str(sample_analysis_path)]) == 0
        assert "PREDICTIONS:" in capsys.readouterr().out

    def test_missing_input(self, tmp_path, capsys):
        code = cli_main.main(["analyze", "--input", str(tmp_path / "missing.json")])

        assert code == 1
        assert "Error: Input file not found" in capsys.readouterr().out

    def test_invalid_config(self, tmp_path, sample_analysis_path):
        config = tmp_path / "engine.json"
        config.write_text(json.dumps({"min_probability": 0.95}))

        assert cli_main.main(["predict", "-i", str(sample_analysis_path), "-c", str(config)]) == 1

    def test_no_command(self, capsys):
        assert cli_main.main([]) == 0
        assert "usage" in capsys.readouterr().out
