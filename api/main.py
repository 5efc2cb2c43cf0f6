"""
FastAPI Application

Serves the causality engine in-process: every request builds its graph
from the posted sources, nothing is stored between requests.

Run with:
    uvicorn api.main:app --port 8001
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Add project root to path for imports
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from api.endpoints import get_engine, router
from api.schemas import ErrorResponse
from causal_graph.exceptions import CausalGraphError

API_TITLE = "Causal Graph Intelligence API"
API_VERSION = "1.0.0"

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the shared engine before the first request."""
    config = get_engine().config
    logger.info(
        f"{API_TITLE} ready: relationship gate {config.relationship_min_confidence}, "
        f"up to {config.max_causal_chains} chains and {config.max_predictions} predictions"
    )
    yield
    logger.info(f"{API_TITLE} stopped")


app = FastAPI(
    title=API_TITLE,
    description="""
    Builds a weighted causal graph around a forecasting question from the
    text of its web sources, then scores the causal chains that reach the
    question node.

    - `POST /causal-graph` returns nodes, edges, metadata and chains
    - `POST /predictions` returns at most two ranked outcomes with reasoning

    Both endpoints take `{"sources": [...], "event": {...}}`.
    """,
    version=API_VERSION,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


@app.exception_handler(CausalGraphError)
async def engine_error_handler(request: Request, exc: CausalGraphError):
    logger.error(f"Engine error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(error=type(exc).__name__, detail=str(exc)).model_dump()
    )


# Versioned routes, plus the same routes at root
app.include_router(router, prefix="/api/v1")
app.include_router(router)


@app.get("/")
async def root():
    return {
        "name": API_TITLE,
        "version": API_VERSION,
        "docs": "/docs",
        "endpoints": ["/health", "/causal-graph", "/predictions"]
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("api.main:app", host="0.0.0.0", port=8001)
