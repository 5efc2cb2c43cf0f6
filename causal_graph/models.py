"""
Data Models for the Causal Graph

Defines the core data structures of the causal inference engine:
- SourceRecord / EventDescriptor: inputs handed over by the caller
- Node / Edge: graph vertices and directed, typed, weighted connections
- SourceAttribution: which source mentioned an entity, and how
- Chain: a causal path from a factor node to the event node
- Prediction: a ranked outcome/probability/confidence record
- CausalGraph: nodes, edges and build metadata

Dictionary shapes use the camelCase keys the UI layer consumes.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Literal, Optional, Set

import networkx as nx

logger = logging.getLogger(__name__)


# Type definitions
NodeType = Literal["Event", "Source", "Person", "Organization", "Concept", "Statistic", "Outcome", "Factor"]
ConfidenceLabel = Literal["High", "Medium", "Low"]

NODE_TYPES = {"Event", "Source", "Person", "Organization", "Concept", "Statistic", "Outcome", "Factor"}

# Node types that are never counted as extracted entities
STRUCTURAL_NODE_TYPES = {"Event", "Source"}

NODE_COLORS: Dict[str, str] = {
    "Person": "#ce9178",
    "Organization": "#569cd6",
    "Concept": "#b5cea8",
    "Event": "#4ec9b0",
    "Statistic": "#dcdcaa",
    "Outcome": "#c586c0",
}
DEFAULT_NODE_COLOR = "#858585"
SOURCE_NODE_COLOR = "#569cd6"


def get_color_for_type(node_type: str) -> str:
    """Get display color for a node type (gray for unknown types)."""
    return NODE_COLORS.get(node_type, DEFAULT_NODE_COLOR)


def _check_unit_interval(name: str, value: float) -> None:
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{name} must be between 0.0 and 1.0, got {value}")


@dataclass
class SourceRecord:
    """
    A fetched web/search source about the forecasting question.
    """
    title: str = ""
    url: str = ""
    text: str = ""
    relevance_score: Optional[float] = None
    is_recent: bool = False
    source: Optional[str] = None  # provider name, e.g. "Exa AI"
    published_date: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "url": self.url,
            "text": self.text,
            "relevanceScore": self.relevance_score,
            "isRecent": self.is_recent,
            "source": self.source,
            "publishedDate": self.published_date
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SourceRecord":
        """Create from dictionary (camelCase or snake_case keys)."""
        return cls(
            title=data.get("title") or "",
            url=data.get("url") or "",
            text=data.get("text") or "",
            relevance_score=data.get("relevanceScore", data.get("relevance_score")),
            is_recent=bool(data.get("isRecent", data.get("is_recent", False))),
            source=data.get("source"),
            published_date=data.get("publishedDate", data.get("published_date"))
        )


@dataclass
class EventDescriptor:
    """
    The forecasting question at the center of the graph.
    """
    title: str
    id: Optional[str] = None
    volume: float = 0.0
    liquidity: float = 0.0
    close_date: Optional[str] = None

    @property
    def node_id(self) -> str:
        return self.id or "event"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "volume": self.volume,
            "liquidity": self.liquidity,
            "closeDate": self.close_date
        }

    @classmethod
    def from_dict(cls, data: dict) -> "EventDescriptor":
        return cls(
            title=data.get("title") or "Untitled event",
            id=data.get("id"),
            volume=data.get("volume") or 0.0,
            liquidity=data.get("liquidity") or 0.0,
            close_date=data.get("closeDate", data.get("close_date"))
        )


@dataclass
class SourceAttribution:
    """Records which source mentioned an entity and with what confidence."""
    source_id: str
    source_title: str
    source_url: str
    source_type: str
    relevance: float
    extraction_method: str
    confidence: float

    def to_dict(self) -> dict:
        return {
            "sourceId": self.source_id,
            "sourceTitle": self.source_title,
            "sourceUrl": self.source_url,
            "sourceType": self.source_type,
            "relevance": self.relevance,
            "extractionMethod": self.extraction_method,
            "confidence": self.confidence
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SourceAttribution":
        return cls(
            source_id=data.get("sourceId", ""),
            source_title=data.get("sourceTitle", ""),
            source_url=data.get("sourceUrl", ""),
            source_type=data.get("sourceType", "Unknown"),
            relevance=data.get("relevance", 0.5),
            extraction_method=data.get("extractionMethod", "NLP"),
            confidence=data.get("confidence", 0.6)
        )


@dataclass
class Node:
    """
    A graph vertex: the event, a source, or an extracted entity.

    Entity nodes keep confidence, importance, normalized key and a list of
    SourceAttribution records in properties.
    """
    id: str
    label: str
    type: str
    size: float
    color: str
    properties: Dict[str, Any] = field(default_factory=dict)

    @property
    def confidence(self) -> float:
        return self.properties.get("confidence", 0.0)

    @property
    def importance(self) -> float:
        return self.properties.get("importance", 0.0)

    @property
    def sources(self) -> List[SourceAttribution]:
        return self.properties.setdefault("sources", [])

    def to_dict(self) -> dict:
        properties = dict(self.properties)
        if "sources" in properties:
            properties["sources"] = [s.to_dict() for s in properties["sources"]]
        return {
            "id": self.id,
            "label": self.label,
            "type": self.type,
            "size": self.size,
            "color": self.color,
            "properties": properties
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Node":
        properties = dict(data.get("properties", {}))
        if "sources" in properties:
            properties["sources"] = [
                s if isinstance(s, SourceAttribution) else SourceAttribution.from_dict(s)
                for s in properties["sources"]
            ]
        return cls(
            id=data["id"],
            label=data.get("label", data["id"]),
            type=data.get("type", "Concept"),
            size=data.get("size", 6),
            color=data.get("color", DEFAULT_NODE_COLOR),
            properties=properties
        )


@dataclass
class Edge:
    """
    Directed, typed, weighted connection between two nodes.

    The same ordered pair may carry several edges with different
    relationships. weight equals strength at creation.
    """
    source: str
    target: str
    relationship: str
    strength: float
    weight: Optional[float] = None
    properties: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        _check_unit_interval("strength", self.strength)
        if self.weight is None:
            self.weight = self.strength
        _check_unit_interval("weight", self.weight)

    def to_dict(self) -> dict:
        return {
            "source": self.source,
            "target": self.target,
            "relationship": self.relationship,
            "strength": self.strength,
            "weight": self.weight,
            "properties": self.properties
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Edge":
        return cls(
            source=data["source"],
            target=data["target"],
            relationship=data["relationship"],
            strength=data.get("strength", 0.5),
            weight=data.get("weight"),
            properties=dict(data.get("properties", {}))
        )


@dataclass
class Chain:
    """
    A causal path from a factor node to the event node.

    path[0] == start, path[-1] == end, length == len(path).
    """
    start: str
    end: str
    path: List[str]
    strength: float

    @property
    def length(self) -> int:
        return len(self.path)

    def to_dict(self) -> dict:
        return {
            "start": self.start,
            "end": self.end,
            "path": list(self.path),
            "length": self.length,
            "strength": self.strength
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Chain":
        path = list(data.get("path", []))
        return cls(
            start=data.get("start", path[0] if path else ""),
            end=data.get("end", path[-1] if path else ""),
            path=path,
            strength=data.get("strength", 0.5)
        )


@dataclass
class Prediction:
    """An outcome with probability, confidence label and a fixed-band interval."""
    outcome: str
    probability: float
    confidence: str  # High | Medium | Low
    ci_lower: float
    ci_upper: float
    reasoning: str

    def __post_init__(self):
        _check_unit_interval("probability", self.probability)
        if self.confidence not in {"High", "Medium", "Low"}:
            raise ValueError(f"confidence must be High, Medium or Low, got {self.confidence}")

    def to_dict(self) -> dict:
        return {
            "outcome": self.outcome,
            "probability": self.probability,
            "confidence": self.confidence,
            "ci_lower": self.ci_lower,
            "ci_upper": self.ci_upper,
            "reasoning": self.reasoning
        }


@dataclass
class GraphMetadata:
    """Counts and chain results attached to a built graph."""
    total_sources: int = 0
    total_relations: int = 0
    entity_count: int = 0
    relationship_types: Set[str] = field(default_factory=set)
    causal_chains: List[Chain] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "totalSources": self.total_sources,
            "totalRelations": self.total_relations,
            "entityCount": self.entity_count,
            "relationshipTypes": sorted(self.relationship_types),
            "causalChains": [c.to_dict() for c in self.causal_chains]
        }

    @classmethod
    def from_dict(cls, data: dict) -> "GraphMetadata":
        return cls(
            total_sources=data.get("totalSources", 0),
            total_relations=data.get("totalRelations", 0),
            entity_count=data.get("entityCount", 0),
            relationship_types=set(data.get("relationshipTypes", [])),
            causal_chains=[Chain.from_dict(c) for c in data.get("causalChains", [])]
        )


@dataclass
class CausalGraph:
    """
    Complete causal graph for one analysis run.

    Nodes are kept in insertion order in a dict keyed by id, so ids are
    unique and lookups are O(1).
    """
    nodes: Dict[str, Node] = field(default_factory=dict)
    edges: List[Edge] = field(default_factory=list)
    metadata: GraphMetadata = field(default_factory=GraphMetadata)

    def add_node(self, node: Node) -> Node:
        self.nodes[node.id] = node
        return node

    def get_node(self, node_id: str) -> Optional[Node]:
        return self.nodes.get(node_id)

    def has_node(self, node_id: str) -> bool:
        return node_id in self.nodes

    def add_edge(self, edge: Edge) -> Edge:
        self.edges.append(edge)
        return edge

    def edge_exists(self, source: str, target: str, relationship: str) -> bool:
        return any(
            e.source == source and e.target == target and e.relationship == relationship
            for e in self.edges
        )

    def find_edge(self, source: str, target: str) -> Optional[Edge]:
        """First edge from source to target, any relationship."""
        for edge in self.edges:
            if edge.source == source and edge.target == target:
                return edge
        return None

    def outgoing(self, node_id: str, relationships: Optional[Set[str]] = None) -> Iterator[Edge]:
        for edge in self.edges:
            if edge.source == node_id and (relationships is None or edge.relationship in relationships):
                yield edge

    def entity_nodes(self) -> List[Node]:
        return [n for n in self.nodes.values() if n.type not in STRUCTURAL_NODE_TYPES]

    def get_top_entities(self, limit: int = 10) -> List[Node]:
        """
        Rank entity nodes by number of attributed sources, then importance.

        Args:
            limit: Maximum number of nodes to return

        Returns:
            Entity nodes, most corroborated first
        """
        ranked = sorted(
            self.entity_nodes(),
            key=lambda n: (len(n.properties.get("sources", [])), n.importance),
            reverse=True
        )
        return ranked[:limit]

    def to_networkx(self) -> nx.MultiDiGraph:
        """
        Build a networkx view of the graph.

        Parallel edges between the same pair are kept, keyed by relationship.
        """
        graph = nx.MultiDiGraph()
        for node in self.nodes.values():
            graph.add_node(node.id, label=node.label, node_type=node.type, **{
                k: v for k, v in node.properties.items() if k in ("confidence", "importance")
            })
        for edge in self.edges:
            graph.add_edge(
                edge.source, edge.target,
                key=edge.relationship,
                relationship=edge.relationship,
                strength=edge.strength,
                weight=edge.weight
            )
        return graph

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "nodes": [n.to_dict() for n in self.nodes.values()],
            "edges": [e.to_dict() for e in self.edges],
            "metadata": self.metadata.to_dict()
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CausalGraph":
        """Create from dictionary."""
        graph = cls()
        for node_data in data.get("nodes", []):
            graph.add_node(Node.from_dict(node_data))
        graph.edges = [Edge.from_dict(e) for e in data.get("edges", [])]
        graph.metadata = GraphMetadata.from_dict(data.get("metadata", {}))
        return graph
