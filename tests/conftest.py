"""
Pytest Configuration and Fixtures
"""

import pytest
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


@pytest.fixture
def scenario_event():
    """Provide the event used by the single-source scenarios."""
    return {"id": "e1", "title": "Will the economy slow down?"}


@pytest.fixture
def scenario_sources():
    """Provide one source with a single causal sentence."""
    return [{
        "title": "Rates and growth",
        "url": "https://example.com/rates",
        "text": "Rising interest rates causes economic slowdown.",
        "relevanceScore": 0.8
    }]


@pytest.fixture
def federal_reserve_sources():
    """Provide two sources naming the same organization with and without an article."""
    return [
        {
            "title": "Fed meeting preview",
            "url": "https://example.com/fed-preview",
            "text": "Federal Reserve will meet in June.",
            "relevanceScore": 0.7,
            "source": "Exa AI"
        },
        {
            "title": "Markets await the Fed",
            "url": "https://example.com/fed-markets",
            "text": "The Federal Reserve will meet in July.",
            "relevanceScore": 0.6,
            "isRecent": True
        }
    ]


@pytest.fixture
def sample_analysis_path():
    """Provide the bundled sample analysis input."""
    return project_root / "scripts" / "sample_analysis.json"


@pytest.fixture
def lenient_config():
    """Config whose key-entity thresholds let Concept entities reach the event."""
    from causal_graph.config import EngineConfig
    return EngineConfig(key_entity_min_importance=0.65, key_entity_min_confidence=0.7)
