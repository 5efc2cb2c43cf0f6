"""
Logging utilities for graph operations.

Graph enrichment steps log to the "causal_graph.<module>" logger. When an
output directory is given they also write a per-module log file, a JSONL
record per graph modification and a summary JSON.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def _timestamp() -> str:
    return datetime.now(timezone.utc).replace(tzinfo=None).isoformat()


def setup_graph_logger(
    module_name: str,
    output_dir: Optional[Path] = None,
    level: int = logging.INFO
) -> logging.Logger:
    """
    Get the logger for a graph operation.

    Without output_dir the logger propagates to the application's handlers.
    With output_dir a file handler writing <output_dir>/<module_name>.log
    replaces any handler set up by a previous run.

    Args:
        module_name: Name of the operation (e.g., 'enrichment')
        output_dir: Directory for log files
        level: Logging level for the file handler

    Returns:
        Logger instance
    """
    logger = logging.getLogger(f"causal_graph.{module_name}")

    if output_dir:
        for handler in list(logger.handlers):
            if isinstance(handler, logging.FileHandler):
                logger.removeHandler(handler)
                handler.close()

        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(output_dir / f"{module_name}.log", mode='w')
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        logger.addHandler(file_handler)
        if logger.level == logging.NOTSET or logger.level > level:
            logger.setLevel(level)

    return logger


def log_edge_update(
    output_file: Optional[Path],
    edge_data: Dict[str, Any],
    append: bool = True
) -> None:
    """
    Append an edge record to a JSONL file. No-op when output_file is None.

    Args:
        output_file: Path to JSONL output file
        edge_data: Dictionary describing the edge change
        append: If True, append to file; if False, overwrite
    """
    if output_file is None:
        return
    output_file.parent.mkdir(parents=True, exist_ok=True)

    record = dict(edge_data, timestamp=_timestamp())
    mode = 'a' if append else 'w'
    with open(output_file, mode, encoding='utf-8') as f:
        f.write(json.dumps(record) + '\n')


def log_summary(
    output_file: Optional[Path],
    summary_data: Dict[str, Any]
) -> None:
    """Write a summary JSON file. No-op when output_file is None."""
    if output_file is None:
        return
    output_file.parent.mkdir(parents=True, exist_ok=True)

    with open(output_file, 'w', encoding='utf-8') as f:
        json.dump(dict(summary_data, timestamp=_timestamp()), f, indent=2)


def read_jsonl(file_path: Path) -> List[Dict[str, Any]]:
    """
    Read a JSONL file and return its records (empty if missing).
    """
    if not file_path.exists():
        return []

    records = []
    with open(file_path, 'r', encoding='utf-8') as f:
        for line in f:
            line = line.strip()
            if line:
                records.append(json.loads(line))
    return records
