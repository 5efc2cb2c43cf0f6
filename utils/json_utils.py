"""
JSON utilities for graph output.

Handles the types engine results contain besides plain JSON: sets, objects
with a to_dict() method (models), numpy scalars/arrays and datetimes.
"""

import json
from datetime import datetime
from typing import Any

import numpy as np


class GraphJSONEncoder(json.JSONEncoder):
    """JSON encoder for engine models, sets and numpy types."""

    def default(self, obj: Any) -> Any:
        if hasattr(obj, "to_dict"):
            return obj.to_dict()

        # Sets serialize as sorted lists for stable output
        if isinstance(obj, (set, frozenset)):
            return sorted(obj, key=str)

        if isinstance(obj, np.floating):
            return float(obj)
        if isinstance(obj, np.integer):
            return int(obj)
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        if isinstance(obj, np.bool_):
            return bool(obj)

        if isinstance(obj, datetime):
            return obj.isoformat()

        return super().default(obj)


def dump_json(obj: Any, fp, **kwargs) -> None:
    """Wrapper for json.dump that uses GraphJSONEncoder by default."""
    kwargs.setdefault('cls', GraphJSONEncoder)
    kwargs.setdefault('indent', 2)
    kwargs.setdefault('ensure_ascii', False)
    json.dump(obj, fp, **kwargs)


def dumps_json(obj: Any, **kwargs) -> str:
    """Wrapper for json.dumps that uses GraphJSONEncoder by default."""
    kwargs.setdefault('cls', GraphJSONEncoder)
    kwargs.setdefault('indent', 2)
    kwargs.setdefault('ensure_ascii', False)
    return json.dumps(obj, **kwargs)
