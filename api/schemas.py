"""
API Schemas

Pydantic models for API request/response validation.

Field names are snake_case in Python and camelCase on the wire, matching
the dictionaries produced by the causal_graph models.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CamelModel(BaseModel):
    """Base model accepting both field names and camelCase aliases."""
    model_config = ConfigDict(populate_by_name=True)


# Request Models

class SourceRecordRequest(CamelModel):
    """A fetched source about the forecasting question."""
    title: str = ""
    url: str = ""
    text: str = ""
    relevance_score: Optional[float] = Field(
        default=None,
        alias="relevanceScore",
        description="Search relevance; 0.5 is used when missing"
    )
    is_recent: bool = Field(default=False, alias="isRecent")
    source: Optional[str] = Field(
        default=None,
        description="Search provider name, e.g. 'Exa AI'"
    )
    published_date: Optional[str] = Field(default=None, alias="publishedDate")


class EventRequest(CamelModel):
    """The forecasting event at the center of the graph."""
    id: Optional[str] = None
    title: Optional[str] = Field(
        default=None,
        description="Event question; 'Untitled event' is used when missing"
    )
    volume: Optional[float] = None
    liquidity: Optional[float] = None
    close_date: Optional[str] = Field(default=None, alias="closeDate")


class AnalysisRequest(BaseModel):
    """Sources plus event for one analysis."""
    sources: List[SourceRecordRequest] = Field(default_factory=list)
    event: EventRequest


# Response Models

class NodeResponse(BaseModel):
    """Graph node."""
    id: str
    label: str
    type: str
    size: float
    color: str
    properties: Dict[str, Any] = Field(default_factory=dict)


class EdgeResponse(BaseModel):
    """Directed, typed, weighted edge."""
    source: str
    target: str
    relationship: str
    strength: float
    weight: float
    properties: Dict[str, Any] = Field(default_factory=dict)


class ChainResponse(BaseModel):
    """Causal chain from a factor node to the event."""
    start: str
    end: str
    path: List[str]
    length: int
    strength: float


class GraphMetadataResponse(CamelModel):
    """Graph build metadata."""
    total_sources: int = Field(alias="totalSources")
    total_relations: int = Field(alias="totalRelations")
    entity_count: int = Field(alias="entityCount")
    relationship_types: List[str] = Field(alias="relationshipTypes")
    causal_chains: List[ChainResponse] = Field(alias="causalChains")


class CausalGraphResponse(BaseModel):
    """Complete causal graph."""
    nodes: List[NodeResponse]
    edges: List[EdgeResponse]
    metadata: GraphMetadataResponse


class PredictionResponse(BaseModel):
    """Ranked outcome prediction."""
    outcome: str
    probability: float
    confidence: str
    ci_lower: float
    ci_upper: float
    reasoning: str


class PredictionListResponse(BaseModel):
    """Predictions together with the metadata of the graph they came from."""
    event_id: str
    predictions: List[PredictionResponse]
    metadata: GraphMetadataResponse


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    timestamp: datetime
    version: str = "1.0.0"


class ErrorResponse(BaseModel):
    """Error response."""
    error: str
    detail: Optional[str] = None
