"""
Engine exceptions.

Data-quality problems never raise; only inputs that cannot be read as
sources or events at all do.
"""


class CausalGraphError(Exception):
    """Base class for causal graph errors."""


class InvalidInputError(CausalGraphError, ValueError):
    """Raised when sources or the event are not records at all."""
