"""FastAPI main application."""

from typing import Any, Dict, List, Optional, Tuple

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..config import settings
from ..core.features import DEFAULT_FEATURES, average_features, resolve_features
from ..core.garden import GardenGenerationError, GardenGenerator, GardenScene
from ..core.placement import animate_fireflies
from ..core.waves import OceanSurface, WaveParams
from ..utils.logging_config import configure_logging

configure_logging(settings.log_level, settings.log_format)

logger = structlog.get_logger()

app = FastAPI(
    title="Garden Generator API",
    description="Procedural island gardens from listening features",
    version="0.1.0",
    debug=settings.debug,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

generator = GardenGenerator.from_settings(settings)


# Request/Response models
class GardenRequest(BaseModel):
    """Request to generate a garden."""

    identity: Optional[str] = Field(None, description="Stable user identity used as the seed")
    features: Optional[Dict[str, Any]] = Field(
        None, description="Listening features; missing fields use defaults"
    )
    include_field: Optional[bool] = Field(None, description="Embed the full height/color field")


class TreeModel(BaseModel):
    position: Tuple[float, float, float]
    color: str
    rotation: float


class FireflyModel(BaseModel):
    position: Tuple[float, float, float]
    phase: float
    speed: float
    drift_direction: Tuple[float, float, float]
    drift_speed: float


class HeightFieldModel(BaseModel):
    size: float
    segments: int
    heights: List[float]
    colors: List[Tuple[float, float, float]]


class GardenResponse(BaseModel):
    """A generated garden, ready for a renderer."""

    seed: str
    noise_source: str
    features: Dict[str, float]
    palette: Dict[str, str]
    wave_params: Dict[str, float]
    zones: Dict[str, int]
    min_height: float
    max_height: float
    trees: List[TreeModel]
    fireflies: List[FireflyModel]
    height_field: Optional[HeightFieldModel] = None


class OceanRequest(BaseModel):
    danceability: float = Field(DEFAULT_FEATURES.danceability, description="Drives wave shape")
    t: float = Field(0.0, ge=0, description="Elapsed time in seconds")
    segments: int = Field(32, ge=1, le=256, description="Ocean cells per axis")


class OceanResponse(BaseModel):
    t: float
    segments: int
    base_level: float
    wave_params: Dict[str, float]
    heights: List[float]


class PoseRequest(BaseModel):
    identity: Optional[str] = None
    features: Optional[Dict[str, Any]] = None
    t: float = Field(0.0, ge=0, description="Elapsed time in seconds")


class PoseModel(BaseModel):
    position: Tuple[float, float, float]
    opacity: float
    scale: float


class PoseResponse(BaseModel):
    seed: str
    t: float
    poses: List[PoseModel]


def _scene_response(scene: GardenScene, include_field: bool) -> GardenResponse:
    summary = scene.summary()
    height_field = None
    if include_field:
        height_field = HeightFieldModel(
            size=scene.height_field.size,
            segments=scene.height_field.segments,
            heights=scene.height_field.heights.tolist(),
            colors=[tuple(c) for c in scene.height_field.colors.tolist()],
        )

    return GardenResponse(
        seed=scene.seed,
        noise_source=scene.noise_source,
        features=scene.features.as_dict(),
        palette=scene.palette.as_hex(),
        wave_params=scene.wave_params.as_dict(),
        zones=summary["zones"],
        min_height=summary["min_height"],
        max_height=summary["max_height"],
        trees=[
            TreeModel(position=tree.position, color=tree.color.to_hex(), rotation=tree.rotation)
            for tree in scene.trees
        ],
        fireflies=[
            FireflyModel(
                position=ff.position,
                phase=ff.phase,
                speed=ff.speed,
                drift_direction=ff.drift_direction,
                drift_speed=ff.drift_speed,
            )
            for ff in scene.fireflies
        ],
        height_field=height_field,
    )


@app.exception_handler(GardenGenerationError)
async def garden_generation_error_handler(request: Request, exc: GardenGenerationError):
    """Report a failed generation so the client can show a diagnostic."""
    logger.error("Garden request failed", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=500,
        content={"error": "garden_generation_failed", "detail": str(exc)},
    )


# API endpoints
@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Garden Generator API",
        "version": "0.1.0",
        "status": "running",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "noise_source": settings.noise_source}


@app.post("/garden", response_model=GardenResponse)
def generate_garden(request: GardenRequest):
    """Generate a garden scene for a user."""
    logger.info("Garden requested", has_identity=request.identity is not None, has_features=request.features is not None)
    scene = generator.generate(request.features, request.identity)

    include_field = settings.include_field_by_default if request.include_field is None else request.include_field
    return _scene_response(scene, include_field)


@app.post("/garden/ocean", response_model=OceanResponse)
def ocean_heights(request: OceanRequest):
    """Ocean vertex heights at elapsed time t."""
    params = WaveParams.from_danceability(request.danceability)
    ocean = OceanSurface(params, size=generator.terrain_config.size, segments=request.segments)
    heights = ocean.update(request.t)
    return OceanResponse(
        t=request.t,
        segments=request.segments,
        base_level=ocean.base_level,
        wave_params=params.as_dict(),
        heights=heights.tolist(),
    )


@app.post("/garden/fireflies/poses", response_model=PoseResponse)
def firefly_poses(request: PoseRequest):
    """Firefly poses at elapsed time t."""
    scene = generator.generate(request.features, request.identity)
    poses = animate_fireflies(scene.fireflies, request.t)
    return PoseResponse(
        seed=scene.seed,
        t=request.t,
        poses=[PoseModel(position=p.position, opacity=p.opacity, scale=p.scale) for p in poses],
    )


@app.post("/features/average")
async def features_average(tracks: List[Dict[str, Any]]):
    """Average per-track audio features; defaults when there are no tracks."""
    averaged = average_features(tracks)
    return resolve_features(averaged).as_dict()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_level="debug" if settings.debug else settings.log_level.lower(),
    )
