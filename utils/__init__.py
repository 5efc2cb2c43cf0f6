"""
Utility modules for the causal graph engine.
"""

from .json_utils import GraphJSONEncoder, dump_json, dumps_json

__all__ = ["GraphJSONEncoder", "dump_json", "dumps_json"]
