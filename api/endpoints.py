"""
API Endpoints

Route handlers exposing the causality engine over HTTP.

Endpoints:
- GET /health - Health check
- POST /causal-graph - Build the causal graph for sources + event
- POST /predictions - Build the graph and return ranked predictions
"""

import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, HTTPException

# Add project root to path for imports
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from api.schemas import (
    AnalysisRequest,
    CausalGraphResponse,
    ErrorResponse,
    GraphMetadataResponse,
    HealthResponse,
    PredictionListResponse,
    PredictionResponse,
)
from causal_graph import CausalityEngine, EventDescriptor, InvalidInputError, SourceRecord

logger = logging.getLogger(__name__)

router = APIRouter()

_engine: Optional[CausalityEngine] = None


def _utc_now() -> datetime:
    """Get current UTC time as a naive datetime."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def get_engine() -> CausalityEngine:
    """Get the shared engine instance (calls are serialized by its lock)."""
    global _engine
    if _engine is None:
        _engine = CausalityEngine()
    return _engine


def _to_records(request: AnalysisRequest):
    sources = [SourceRecord.from_dict(s.model_dump(by_alias=True)) for s in request.sources]
    event = EventDescriptor.from_dict(request.event.model_dump(by_alias=True))
    return sources, event


# Health check
@router.get("/health", response_model=HealthResponse, tags=["System"])
async def health_check():
    """Check system health."""
    logger.debug("Health check requested")
    return HealthResponse(
        status="healthy",
        timestamp=_utc_now(),
        version="1.0.0"
    )


@router.post(
    "/causal-graph",
    response_model=CausalGraphResponse,
    responses={422: {"model": ErrorResponse}},
    tags=["Causal Graph"]
)
def build_causal_graph(request: AnalysisRequest):
    """
    Build the causal graph for an event from its sources.

    Returns nodes, edges and metadata including causal chains.
    """
    sources, event = _to_records(request)
    logger.info(f"Building causal graph for {event.node_id!r} ({len(sources)} sources)")

    try:
        graph = get_engine().build_causal_graph(sources, event)
    except InvalidInputError as e:
        logger.warning(f"Rejected causal graph request: {e}")
        raise HTTPException(status_code=422, detail=str(e))

    return CausalGraphResponse.model_validate(graph.to_dict())


@router.post(
    "/predictions",
    response_model=PredictionListResponse,
    responses={422: {"model": ErrorResponse}},
    tags=["Predictions"]
)
def predict(request: AnalysisRequest):
    """
    Build the causal graph and predict outcomes from its causal chains.

    Without causal chains a single low-confidence 50/50 prediction is returned.
    """
    sources, event = _to_records(request)
    logger.info(f"Predicting outcomes for {event.node_id!r} ({len(sources)} sources)")

    try:
        result = get_engine().analyze(sources, event)
    except InvalidInputError as e:
        logger.warning(f"Rejected prediction request: {e}")
        raise HTTPException(status_code=422, detail=str(e))

    graph = result["graph"]
    return PredictionListResponse(
        event_id=event.node_id,
        predictions=[PredictionResponse(**p.to_dict()) for p in result["predictions"]],
        metadata=GraphMetadataResponse.model_validate(graph.metadata.to_dict())
    )
