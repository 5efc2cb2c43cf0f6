"""
CLI Command Handlers

Implementation of CLI commands for running analyses over JSON input files.

Input file format:
    {
        "event": {"id": "...", "title": "...", "volume": 0, ...},
        "sources": [{"title": "...", "url": "...", "text": "...", ...}, ...]
    }
"""

import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

# Add project root to path for imports
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from causal_graph import CausalGraph, CausalityEngine, EngineConfig, Prediction
from causal_graph.graph_builder import coerce_event, coerce_sources
from causal_graph.models import EventDescriptor, SourceRecord
from utils.json_utils import dump_json

logger = logging.getLogger(__name__)


def load_analysis_input(input_path: Union[str, Path]) -> Tuple[List[SourceRecord], EventDescriptor]:
    """
    Load sources and event from a JSON input file.

    Args:
        input_path: Path to the input JSON

    Returns:
        (sources, event)

    Raises:
        FileNotFoundError: If the file does not exist
        InvalidInputError: If the file does not hold an object with sources/event
    """
    path = Path(input_path)
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")

    logger.info(f"Loading analysis input from: {path}")
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    if not isinstance(data, dict):
        data = {"sources": data, "event": None}

    sources = coerce_sources(data.get("sources"))
    event = coerce_event(data.get("event"))
    logger.info(f"Loaded {len(sources)} sources for event {event.node_id!r}")
    return sources, event


def run_analysis(
    input_path: Union[str, Path],
    config: Optional[EngineConfig] = None,
    output_path: Optional[Union[str, Path]] = None,
    log_dir: Optional[Union[str, Path]] = None
) -> Dict[str, Any]:
    """
    Build the causal graph and predictions for one input file.

    Args:
        input_path: Path to the input JSON
        config: Engine configuration
        output_path: Optional path for the JSON result
        log_dir: Optional directory for enrichment logs

    Returns:
        Dict with 'graph' and 'predictions'
    """
    sources, event = load_analysis_input(input_path)
    engine = CausalityEngine(config, output_dir=log_dir)
    result = engine.analyze(sources, event)

    if output_path:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w', encoding='utf-8') as f:
            dump_json({
                "event": event,
                "graph": result["graph"],
                "predictions": result["predictions"]
            }, f)
        logger.info(f"Analysis written to: {output_path}")

    return result


def print_graph_summary(graph: CausalGraph, top: int = 5) -> None:
    """Print graph summary to console."""
    metadata = graph.metadata
    print(f"\n  GRAPH:")
    print(f"  {'─'*50}")
    print(f"  Nodes:           {len(graph.nodes)}")
    print(f"  Edges:           {metadata.total_relations}")
    print(f"  Entities:        {metadata.entity_count}")
    print(f"  Sources:         {metadata.total_sources}")
    print(f"  Causal chains:   {len(metadata.causal_chains)}")

    top_entities = graph.get_top_entities(top)
    if top_entities:
        print(f"\n  Top Entities:")
        for i, node in enumerate(top_entities, 1):
            print(f"    {i}. {node.label} ({node.type})")
            print(f"       Sources: {len(node.sources)} | Importance: {node.importance:.2f}")

    for chain in metadata.causal_chains[:3]:
        print(f"\n  Chain ({chain.strength:.1%}): {' -> '.join(chain.path)}")


def print_predictions(predictions: List[Prediction]) -> None:
    """Print ranked predictions to console."""
    print(f"\n  PREDICTIONS:")
    print(f"  {'─'*50}")
    for i, prediction in enumerate(predictions, 1):
        print(f"  {i}. {prediction.outcome}: {prediction.probability:.1%} "
              f"[{prediction.ci_lower:.1%} - {prediction.ci_upper:.1%}] "
              f"({prediction.confidence} confidence)")
        print(f"     {prediction.reasoning[:200]}")
