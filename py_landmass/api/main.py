"""FastAPI main application."""

import logging
import threading
import uuid
from collections import OrderedDict
from typing import Dict, List, Optional

import structlog
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from .. import __version__
from ..config import settings
from ..core.continent import ContinentParams, ContinentResult, build_continent
from ..core.geometry import Point
from ..core.land_mask import render_ascii
from ..core.region_graph import region_adjacency
from ..core.voronoi_overlay import VoronoiOptions, build_voronoi_overlay

# Configure logging
logging.basicConfig(format="%(message)s", level=settings.log_level.upper())
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.JSONRenderer()
        if settings.log_format == "json"
        else structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()

app = FastAPI(
    title="Landmass Generator API",
    description="Single-landmass continents with Voronoi region overlays",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class MapStore:
    """In-memory LRU store of generated continents."""

    def __init__(self, capacity: int):
        self.capacity = max(1, capacity)
        self._maps: "OrderedDict[str, ContinentResult]" = OrderedDict()
        self._lock = threading.Lock()

    def add(self, result: ContinentResult) -> str:
        map_id = str(uuid.uuid4())
        with self._lock:
            self._maps[map_id] = result
            while len(self._maps) > self.capacity:
                evicted, _ = self._maps.popitem(last=False)
                logger.info("Evicted cached continent", map_id=evicted)
        return map_id

    def get(self, map_id: str) -> Optional[ContinentResult]:
        with self._lock:
            result = self._maps.get(map_id)
            if result is not None:
                self._maps.move_to_end(map_id)
            return result

    def clear(self) -> None:
        with self._lock:
            self._maps.clear()


store = MapStore(settings.map_cache_size)


# Request/Response models
class ContinentRequest(BaseModel):
    """Request to generate a continent."""

    width: int = Field(settings.default_map_width, ge=16, le=settings.max_map_width, description="Map width in pixels")
    height: int = Field(settings.default_map_height, ge=16, le=settings.max_map_height, description="Map height in pixels")
    seed: Optional[int] = Field(None, description="Seed for reproducible generation")
    island_size: float = Field(0.8, gt=0, le=2.0, description="Continent size relative to the map")
    blob_complexity: int = Field(12, ge=1, le=64, description="Number of metaballs")
    noise_scale: float = Field(3.0, gt=0, le=50.0, description="Noise features across the map")
    noise_strength: float = Field(0.4, ge=0, le=1.0, description="Coastal noise blend weight")
    erosion_iterations: int = Field(2, ge=0, le=20, description="Coastline erosion passes")
    vertical_stretch: float = Field(1.5, gt=0, le=5.0, description="Spine elongation")
    scale_factor: float = Field(1.0, gt=0, le=5.0, description="Continent scale multiplier")


class ContinentSummary(BaseModel):
    """Summary of a generated continent."""

    map_id: str
    width: int
    height: int
    seed: int
    land_pixel_count: int
    land_fraction: float
    land_percent: float


class MaskResponse(BaseModel):
    """Land mask as text rows ('#' land, '.' water)."""

    map_id: str
    step: int
    rows: List[str]


class OverlayRequest(BaseModel):
    """Request to build a region overlay on a stored continent."""

    count: int = Field(8, ge=3, le=15, description="Target number of regions")
    seed: Optional[int] = Field(None, description="Seed for site sampling and boundary jitter")
    segment_noise_amp: float = Field(1.8, ge=0, le=20.0, description="Boundary jitter amplitude")
    segment_noise_scale: float = Field(24.0, gt=0, le=500.0, description="Boundary jitter wavelength")
    variety: float = Field(0.5, ge=0, le=1.0, description="Reserved")
    metric_noise_amp: float = Field(0.08, ge=0, description="Reserved")
    metric_noise_scale: float = Field(80.0, gt=0, description="Reserved")
    max_area_ratio: float = Field(0.5, gt=0, le=1.0, description="Reserved")


class PointModel(BaseModel):
    x: float
    y: float


class SegmentModel(BaseModel):
    a: PointModel
    b: PointModel
    polyline: Optional[List[PointModel]] = None


class RegionModel(BaseModel):
    index: int
    center: PointModel
    polygon: List[PointModel]


class OverlayResponse(BaseModel):
    """Region overlay for a stored continent."""

    map_id: str
    seed: int
    region_count: int
    segments: List[SegmentModel]
    regions: List[RegionModel]
    adjacency: Dict[int, List[int]]


def _point(p: Point) -> PointModel:
    return PointModel(x=p.x, y=p.y)


def _summary(map_id: str, result: ContinentResult) -> ContinentSummary:
    return ContinentSummary(
        map_id=map_id,
        width=result.width,
        height=result.height,
        seed=result.seed,
        land_pixel_count=result.land_pixel_count,
        land_fraction=result.land_fraction,
        land_percent=result.land_percent,
    )


def _get_continent(map_id: str) -> ContinentResult:
    result = store.get(map_id)
    if result is None:
        raise HTTPException(status_code=404, detail="Continent not found")
    return result


# API endpoints
@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Landmass Generator API",
        "version": __version__,
        "status": "running",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.post("/continents", response_model=ContinentSummary)
def generate_continent(request: ContinentRequest):
    """Generate a continent and keep its land mask for overlays."""
    logger.info("Continent generation requested", request=request.model_dump())

    seed = request.seed if request.seed is not None else settings.default_seed
    params = ContinentParams(
        island_size=request.island_size,
        blob_complexity=request.blob_complexity,
        noise_scale=request.noise_scale,
        noise_strength=request.noise_strength,
        erosion_iterations=request.erosion_iterations,
        vertical_stretch=request.vertical_stretch,
        scale_factor=request.scale_factor,
        seed=seed,
    )
    result = build_continent(request.width, request.height, params)
    map_id = store.add(result)

    logger.info("Continent stored", map_id=map_id, land_percent=result.land_percent)
    return _summary(map_id, result)


@app.get("/continents/{map_id}", response_model=ContinentSummary)
async def get_continent(map_id: str):
    """Get a stored continent's summary."""
    return _summary(map_id, _get_continent(map_id))


@app.get("/continents/{map_id}/mask", response_model=MaskResponse)
async def get_continent_mask(map_id: str, step: int = 1):
    """Get a stored continent's land mask as text rows."""
    if step < 1:
        raise HTTPException(status_code=400, detail="step must be at least 1")
    result = _get_continent(map_id)
    return MaskResponse(map_id=map_id, step=step, rows=render_ascii(result.land_mask, step))


@app.post("/continents/{map_id}/overlay", response_model=OverlayResponse)
def build_overlay(map_id: str, request: OverlayRequest):
    """Build a Voronoi region overlay on a stored continent."""
    result = _get_continent(map_id)
    seed = request.seed if request.seed is not None else settings.default_seed

    options = VoronoiOptions(
        count=request.count,
        segment_noise_amp=request.segment_noise_amp,
        segment_noise_scale=request.segment_noise_scale,
        seed=seed,
        variety=request.variety,
        metric_noise_amp=request.metric_noise_amp,
        metric_noise_scale=request.metric_noise_scale,
        max_area_ratio=request.max_area_ratio,
    )
    overlay = build_voronoi_overlay(result.land_mask, result.width, result.height, options)
    adjacency = region_adjacency(overlay.triangles, len(overlay.sites))

    logger.info("Overlay built", map_id=map_id, regions=len(overlay.regions))
    return OverlayResponse(
        map_id=map_id,
        seed=seed,
        region_count=len(overlay.regions),
        segments=[
            SegmentModel(
                a=_point(segment.a),
                b=_point(segment.b),
                polyline=[_point(p) for p in segment.polyline] if segment.polyline else None,
            )
            for segment in overlay.segments
        ],
        regions=[
            RegionModel(
                index=region.index,
                center=_point(region.center),
                polygon=[_point(p) for p in region.polygon],
            )
            for region in overlay.regions
        ],
        adjacency=adjacency,
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
