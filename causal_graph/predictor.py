"""
Causal Predictor

Turns the causal chains of a built graph into ranked outcome predictions.

Per chain:
- count positive/negative signal keywords in the path node labels
- probability = clamp(0.5 + signal_diff * chain_strength, 0.1, 0.9)
- confidence = chain strength

Chains predicting the same outcome are merged by a confidence-weighted
average. The interval attached to each prediction is a fixed +-0.15 band,
not an estimate derived from the chains.
"""

import logging
from collections import OrderedDict
from typing import Any, Dict, List, Optional

import numpy as np

from .config import EngineConfig
from .models import CausalGraph, Chain, Node, Prediction

logger = logging.getLogger(__name__)

POSITIVE_SIGNALS = ("increase", "rise", "growth", "success", "positive", "gain", "improve", "boost")
NEGATIVE_SIGNALS = ("decrease", "fall", "decline", "failure", "negative", "loss", "worsen", "drop")

DEFAULT_OUTCOME = "Yes"
BASE_PROBABILITY = 0.5
DEFAULT_CHAIN_STRENGTH = 0.5
FALLBACK_REASONING = "Insufficient causal data for prediction"


def _has_signal(node: Node, keywords) -> bool:
    text = (node.label or "").lower()
    return any(word in text for word in keywords)


def is_positive_signal(node: Node) -> bool:
    return _has_signal(node, POSITIVE_SIGNALS)


def is_negative_signal(node: Node) -> bool:
    return _has_signal(node, NEGATIVE_SIGNALS)


def fallback_prediction() -> List[Prediction]:
    """The fixed low-confidence 50/50 prediction used when evidence is missing."""
    return [Prediction(
        outcome=DEFAULT_OUTCOME,
        probability=0.5,
        confidence="Low",
        ci_lower=0.35,
        ci_upper=0.65,
        reasoning=FALLBACK_REASONING
    )]


class CausalPredictor:
    """
    Predicts event outcomes from causal chains.

    Usage:
        predictor = CausalPredictor()
        predictions = predictor.predict(event, graph)
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()

    def infer_outcome(self, path_nodes: List[Node], graph: CausalGraph) -> str:
        """
        Outcome label for a chain.

        The last path node's label if it is an Outcome node, else the label of
        the Outcome node reached by the first edge leaving any path node,
        else "Yes".
        """
        if not path_nodes:
            return DEFAULT_OUTCOME

        last = path_nodes[-1]
        if last.type == "Outcome" and last.label:
            return last.label

        path_ids = {n.id for n in path_nodes}
        for edge in graph.edges:
            if edge.source not in path_ids:
                continue
            target = graph.get_node(edge.target)
            if target is not None and target.type == "Outcome":
                return target.label or DEFAULT_OUTCOME

        return DEFAULT_OUTCOME

    def _source_refs(self, node: Node) -> str:
        sources = node.properties.get("sources") or []
        if not sources:
            return ""
        titles = [
            s.source_title or f"Source {s.source_id}"
            for s in sources[:self.config.max_reasoning_sources]
        ]
        return f" [Sources: {', '.join(titles)}]"

    def generate_reasoning(self, chain: Chain, path_nodes: List[Node]) -> str:
        """
        Human-readable chain description with source attribution.

        Example:
            "Causal chain: Factor: Rate hikes [Sources: Reuters]  Event title.
            Strength: 63.0%."
        """
        if not path_nodes:
            return "No causal path identified"

        steps = []
        last_idx = len(path_nodes) - 1
        for idx, node in enumerate(path_nodes):
            if not node.label:
                continue
            refs = self._source_refs(node)
            if idx == 0:
                steps.append(f"Factor: {node.label}{refs}")
            elif idx == last_idx:
                steps.append(f" Outcome: {node.label}{refs}")
            else:
                steps.append(f" {node.label}{refs}")

        strength = f"{chain.strength * 100:.1f}" if chain.strength else "50.0"
        return f"Causal chain: {' '.join(steps)}. Strength: {strength}%."

    def _confidence_label(self, confidence: float) -> str:
        if confidence > self.config.high_confidence_cutoff:
            return "High"
        if confidence > self.config.medium_confidence_cutoff:
            return "Medium"
        return "Low"

    def _clamp_probability(self, value: float) -> float:
        return max(self.config.min_probability, min(self.config.max_probability, value))

    def score_chain(self, chain: Chain, graph: CausalGraph) -> Optional[Dict[str, Any]]:
        """
        Candidate prediction for one chain.

        Args:
            chain: Causal chain from graph metadata
            graph: Graph the chain belongs to

        Returns:
            Dict with outcome, probability, confidence (chain strength) and
            reasoning, or None if no path node resolves
        """
        path_nodes = [graph.get_node(node_id) for node_id in chain.path]
        path_nodes = [n for n in path_nodes if n is not None]
        if not path_nodes:
            logger.warning(f"Chain {chain.start} -> {chain.end} has no resolvable nodes")
            return None

        chain_strength = chain.strength or DEFAULT_CHAIN_STRENGTH
        positive = sum(1 for n in path_nodes if is_positive_signal(n))
        negative = sum(1 for n in path_nodes if is_negative_signal(n))
        signal_diff = (positive - negative) / len(path_nodes)

        return {
            "outcome": self.infer_outcome(path_nodes, graph),
            "probability": self._clamp_probability(BASE_PROBABILITY + signal_diff * chain_strength),
            "confidence": chain_strength,
            "reasoning": self.generate_reasoning(chain, path_nodes)
        }

    def aggregate(self, candidates: List[Dict[str, Any]]) -> List[Prediction]:
        """
        Merge candidates by outcome and rank them.

        Each outcome gets the confidence-weighted mean probability, the label
        of its mean confidence and the joined reasoning of its chains.

        Args:
            candidates: Outputs of score_chain

        Returns:
            Top predictions by probability, or the fallback if nothing groups
        """
        grouped: "OrderedDict[str, List[Dict[str, Any]]]" = OrderedDict()
        for candidate in candidates:
            if not candidate.get("outcome"):
                continue
            grouped.setdefault(candidate["outcome"], []).append(candidate)

        aggregated = []
        for outcome, preds in grouped.items():
            confidences = np.array([p["confidence"] or DEFAULT_CHAIN_STRENGTH for p in preds], dtype=float)
            if confidences.sum() == 0:
                continue
            probabilities = np.array([p["probability"] or BASE_PROBABILITY for p in preds], dtype=float)

            weighted_prob = float(np.average(probabilities, weights=confidences))
            reasoning = "; ".join(p["reasoning"] for p in preds if p["reasoning"])
            aggregated.append({
                "outcome": outcome,
                "probability": self._clamp_probability(weighted_prob),
                "confidence": self._confidence_label(float(confidences.mean())),
                "reasoning": reasoning or "Based on causal analysis"
            })

        if not aggregated:
            logger.warning("No outcome groups from causal chains, using fallback prediction")
            return fallback_prediction()

        aggregated.sort(key=lambda p: p["probability"], reverse=True)
        half_width = self.config.ci_half_width
        return [
            Prediction(
                outcome=p["outcome"],
                probability=p["probability"],
                confidence=p["confidence"],
                ci_lower=max(0.0, p["probability"] - half_width),
                ci_upper=min(1.0, p["probability"] + half_width),
                reasoning=p["reasoning"]
            )
            for p in aggregated[:self.config.max_predictions]
        ]

    def predict(self, event: Any, graph: Optional[CausalGraph]) -> List[Prediction]:
        """
        Predict outcomes for an event from its causal graph.

        Never raises for missing evidence: an empty graph or one without
        causal chains yields the fallback prediction.

        Args:
            event: Event descriptor (kept for interface symmetry with the builder)
            graph: Causal graph built for the event

        Returns:
            Ranked list of Prediction
        """
        if graph is None or not graph.nodes:
            logger.info("Insufficient graph data for prediction, using fallback")
            return fallback_prediction()

        chains = graph.metadata.causal_chains
        if not chains:
            logger.info("No causal chains found, using fallback prediction")
            return fallback_prediction()

        candidates = []
        for chain in chains:
            candidate = self.score_chain(chain, graph)
            if candidate is not None:
                candidates.append(candidate)

        if not candidates:
            return fallback_prediction()

        predictions = self.aggregate(candidates)
        logger.info(f"Generated {len(predictions)} predictions from {len(candidates)} chains")
        return predictions
