#!/usr/bin/env python3
"""
Causal Graph Intelligence CLI

Command-line interface for running causal analyses over JSON input files.

Usage:
    python cli/run_analysis.py analyze --input sources.json
    python cli/run_analysis.py analyze --input sources.json --output result.json
    python cli/run_analysis.py predict --input sources.json --config engine.json
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Add project root to path for imports
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from causal_graph.config import load_config
from causal_graph.exceptions import InvalidInputError
from cli.commands import print_graph_summary, print_predictions, run_analysis

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO

    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)

    logger.debug("Logging configured")


def _run(args) -> Optional[dict]:
    try:
        config = load_config(args.config)
        return run_analysis(args.input, config=config, output_path=args.output, log_dir=args.log_dir)
    except (FileNotFoundError, InvalidInputError, ValueError) as e:
        print(f"Error: {e}")
        logger.error(f"Analysis failed: {e}")
        return None


def cmd_analyze(args) -> int:
    """Build the causal graph (and predictions) for an input file."""
    logger.info(f"Command: analyze --input {args.input}")
    result = _run(args)
    if result is None:
        return 1

    print_graph_summary(result["graph"], top=args.top)
    print_predictions(result["predictions"])
    if args.output:
        print(f"\n  Output:    {args.output}")
    return 0


def cmd_predict(args) -> int:
    """Print ranked predictions for an input file."""
    logger.info(f"Command: predict --input {args.input}")
    result = _run(args)
    if result is None:
        return 1

    print_predictions(result["predictions"])
    return 0


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--input", "-i",
        required=True,
        help="Input JSON with 'event' and 'sources'"
    )
    parser.add_argument(
        "-o", "--output",
        help="Output file for graph and predictions (JSON)"
    )
    parser.add_argument(
        "--config", "-c",
        help="Engine configuration overrides (JSON)"
    )
    parser.add_argument(
        "--log-dir",
        help="Directory for enrichment logs (JSONL + summary)"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Causal Graph Intelligence CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python cli/run_analysis.py analyze --input sources.json
  python cli/run_analysis.py analyze --input sources.json -o result.json
  python cli/run_analysis.py predict --input sources.json --config engine.json
        """
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # analyze
    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Build the causal graph and predictions for an input file"
    )
    _add_common_arguments(analyze_parser)
    analyze_parser.add_argument(
        "--top",
        type=int,
        default=5,
        help="Number of top entities to show (default: 5)"
    )
    analyze_parser.set_defaults(func=cmd_analyze)

    # predict
    predict_parser = subparsers.add_parser(
        "predict",
        help="Print ranked predictions for an input file"
    )
    _add_common_arguments(predict_parser)
    predict_parser.set_defaults(func=cmd_predict)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    setup_logging(args.verbose)

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
