"""FastAPI application serving grid clusters."""

from typing import Any, Dict, List, Optional, Union

import structlog
from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from .. import __version__
from ..config import configure_logging, settings
from ..core import Extent, PointFormatError, ViewOutcome, ViewportLoadCoordinator

configure_logging(settings)

logger = structlog.get_logger()

# Initialize FastAPI app
app = FastAPI(
    title="Grid Cluster API",
    description="Multi-resolution grid clustering of point samples",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# One source per process, the API is its only caller
source = ViewportLoadCoordinator.from_settings(settings)


# Request/Response models
class PointModel(BaseModel):
    """A single point sample."""

    id: Union[int, str] = Field(..., description="Stable point identity")
    x: float = Field(..., description="X coordinate in projection units")
    y: float = Field(..., description="Y coordinate in projection units")


class PointsResponse(BaseModel):
    points: int
    clusters: int


class ClustersResponse(BaseModel):
    """Clusters published for a view request."""

    outcome: ViewOutcome
    side_width: Optional[float] = None
    clusters: List[Dict[str, Any]]


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Grid Cluster API",
        "version": __version__,
        "status": "running"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "points": len(source.points),
        "clusters": len(source.features),
        "cached_leaves": len(source.cache),
    }


@app.put("/points", response_model=PointsResponse)
async def set_points(points: List[PointModel]):
    """Replace the point set and recluster it."""
    try:
        clusters = source.set_points([p.model_dump() for p in points])
    except PointFormatError as e:
        logger.warning("Rejected point upload", error=str(e))
        raise HTTPException(status_code=422, detail=str(e))
    return PointsResponse(points=len(source.points), clusters=len(clusters))


@app.get("/clusters", response_model=ClustersResponse)
async def get_clusters(
    min_x: float = Query(..., description="View extent minimum x"),
    min_y: float = Query(..., description="View extent minimum y"),
    max_x: float = Query(..., description="View extent maximum x"),
    max_y: float = Query(..., description="View extent maximum y"),
    resolution: Optional[float] = Query(None, description="Projection units per pixel"),
):
    """Clusters for a view extent and resolution."""
    outcome = source.request_view(Extent(min_x, min_y, max_x, max_y), resolution)
    logger.debug("Clusters requested", outcome=outcome.value, resolution=resolution)
    return ClustersResponse(
        outcome=outcome,
        side_width=source.state.current_side_width,
        clusters=[record.to_feature() for record in source.features],
    )


@app.post("/features/single")
async def get_single_feature(point: PointModel):
    """Leaf cluster for one point, resolved without a full pass."""
    try:
        record = source.get_single_feature_for_coordinate(point.model_dump())
    except PointFormatError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return record.to_feature()


@app.delete("/cache")
async def clear_cache():
    """Drop all cached single features."""
    return {"cleared": source.clear_cache()}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
