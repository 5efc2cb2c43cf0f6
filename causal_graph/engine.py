"""
Causality Engine

In-process facade over graph building and prediction:
    engine = CausalityEngine()
    graph = engine.build_causal_graph(sources, event)
    predictions = engine.predict_from_causality(event, graph)

Each build uses a fresh CausalGraphBuilder resolver, and a lock serializes
calls on one engine instance, so concurrent analyses never share entity
state. Run independent analyses in parallel with one engine per thread.
"""

import logging
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .config import EngineConfig
from .graph_builder import CausalGraphBuilder, coerce_event
from .models import CausalGraph, Prediction
from .predictor import CausalPredictor

logger = logging.getLogger(__name__)


class CausalityEngine:
    """
    Builds causal graphs and predicts outcomes from them.
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        output_dir: Optional[Union[str, Path]] = None
    ):
        self.config = config or EngineConfig()
        self.output_dir = output_dir
        self.predictor = CausalPredictor(self.config)
        self._lock = threading.Lock()

    def build_causal_graph(self, sources: Any, event: Any) -> CausalGraph:
        """
        Build the causal graph for an event from its sources.

        Args:
            sources: List of SourceRecord or source dicts
            event: EventDescriptor or event dict

        Returns:
            CausalGraph
        """
        builder = CausalGraphBuilder(self.config, output_dir=self.output_dir)
        with self._lock:
            return builder.build(sources, event)

    def predict_from_causality(self, event: Any, graph: Optional[CausalGraph]) -> List[Prediction]:
        """
        Predict outcomes from a built graph's causal chains.

        Args:
            event: EventDescriptor or event dict
            graph: Graph returned by build_causal_graph

        Returns:
            Ranked predictions (the fallback prediction if evidence is missing)
        """
        with self._lock:
            return self.predictor.predict(coerce_event(event), graph)

    def analyze(self, sources: Any, event: Any) -> Dict[str, Any]:
        """
        Build the graph and predict in one call.

        Returns:
            Dict with 'graph' (CausalGraph) and 'predictions' (List[Prediction])
        """
        graph = self.build_causal_graph(sources, event)
        predictions = self.predict_from_causality(event, graph)
        return {"graph": graph, "predictions": predictions}
