"""
Build the causal graph for a JSON input file and print it.

Usage:
    python scripts/run_graph_build.py [input.json] [engine_config.json]

Without arguments the bundled sample_analysis.json is used.
"""

import sys
import logging
from pathlib import Path

project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from causal_graph.config import load_config
from causal_graph.exceptions import InvalidInputError
from cli.commands import print_graph_summary, print_predictions, run_analysis

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger("graph_runner")

SAMPLE_INPUT = Path(__file__).parent / "sample_analysis.json"


def main():
    input_path = Path(sys.argv[1]) if len(sys.argv) > 1 else SAMPLE_INPUT
    config = load_config(sys.argv[2] if len(sys.argv) > 2 else None)

    logger.info(f"Analyzing {input_path.name}")
    try:
        result = run_analysis(input_path, config=config)
    except (FileNotFoundError, InvalidInputError) as e:
        logger.error(f"Graph build failed: {e}")
        sys.exit(1)

    print_graph_summary(result["graph"])
    print_predictions(result["predictions"])


if __name__ == "__main__":
    main()
