"""
FastAPI server for the exoplanet of the day.

Provides REST endpoints for today's planet, its derived features and its
procedurally generated textures.
"""

import argparse
import datetime
import os
import threading
from collections import OrderedDict
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from pydantic import BaseModel, Field
import uvicorn

from ..catalog import (
    PlanetCatalog, DailyPlanetPicker, DailyPlanet,
    CatalogEmptyError, PlanetNotFoundError
)
from ..engine import (
    PlanetRecord, TextureSynthesizer, TextureBuffers, TEXTURE_KINDS,
    derive_features, build_scene
)
from ..procgen import FEATURE_PARAMETERS
from .export import buffer_to_png_bytes

CATALOG_ENV_VAR = "EXOPLANET_CATALOG"
TEXTURE_CACHE_SIZE = 4


# Pydantic models for API
class HealthResponse(BaseModel):
    status: str
    catalog_size: int
    texture_size: List[int]


class PlanetResponse(BaseModel):
    date: str
    index: int
    planet: Dict[str, Any]
    features: Dict[str, Any]
    scene: Dict[str, Any]


class FeaturesRequest(BaseModel):
    pl_name: str = Field(..., description="Planet name (seed source)")
    pl_masse: Optional[float] = Field(None, description="Mass in Earth masses")
    pl_eqt: Optional[float] = Field(None, description="Equilibrium temperature in Kelvin")
    fallback_temperature: Optional[float] = Field(
        None, description="Temperature used when pl_eqt is missing"
    )


class FeaturesResponse(BaseModel):
    features: Dict[str, Any]
    scene: Dict[str, Any]
    violations: List[str]


def _parse_date(value: str) -> datetime.date:
    if value == "today":
        return datetime.date.today()
    try:
        return datetime.date.fromisoformat(value)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid date: {value!r}")


def _planet_response(daily: DailyPlanet) -> PlanetResponse:
    return PlanetResponse(
        date=daily.date.isoformat(),
        index=daily.index,
        planet=daily.record.to_dict(),
        features=daily.features.to_dict(),
        scene=build_scene(daily.features).to_dict()
    )


def create_app(
    catalog_path: Optional[str] = None,
    catalog: Optional[PlanetCatalog] = None,
    width: int = 1024,
    height: int = 512,
    fallback_temperature: Optional[float] = None,
    cors_origins: Optional[List[str]] = None
) -> FastAPI:
    """Create FastAPI application."""

    app = FastAPI(
        title="Exoplanet of the Day API",
        description="Daily exoplanet with procedurally generated surface textures",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc"
    )

    if cors_origins is None:
        cors_origins = ["*"]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if catalog is None:
        catalog = PlanetCatalog(catalog_path)

    picker = DailyPlanetPicker(catalog, fallback_temperature=fallback_temperature)
    synthesizer = TextureSynthesizer(width=width, height=height)
    texture_cache: "OrderedDict[str, TextureBuffers]" = OrderedDict()
    texture_lock = threading.Lock()

    app.state.picker = picker
    app.state.synthesizer = synthesizer

    def pick(date: datetime.date) -> DailyPlanet:
        try:
            return picker.pick(date)
        except CatalogEmptyError as e:
            raise HTTPException(status_code=503, detail=str(e))
        except PlanetNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))

    def textures_for(daily: DailyPlanet) -> TextureBuffers:
        key = daily.date.isoformat()
        # Held while rendering so concurrent requests for one date render once
        with texture_lock:
            if key in texture_cache:
                texture_cache.move_to_end(key)
                return texture_cache[key]

            buffers = synthesizer.synthesize(daily.features)
            texture_cache[key] = buffers
            while len(texture_cache) > TEXTURE_CACHE_SIZE:
                texture_cache.popitem(last=False)
            return buffers

    @app.get("/health", response_model=HealthResponse)
    async def health():
        """Health check endpoint."""
        return HealthResponse(
            status="healthy" if catalog.count() > 0 else "empty",
            catalog_size=catalog.count(),
            texture_size=[synthesizer.width, synthesizer.height]
        )

    @app.get("/planet/today", response_model=PlanetResponse)
    async def planet_today():
        """Today's planet with features and scene parameters."""
        return _planet_response(pick(datetime.date.today()))

    @app.get("/planet/{date}", response_model=PlanetResponse)
    async def planet_for_date(date: str):
        """The planet of a given ISO date."""
        return _planet_response(pick(_parse_date(date)))

    @app.get("/planet/{date}/textures/{kind}.png")
    def planet_texture(date: str, kind: str):
        """One of the planet's textures as PNG (rendered in the threadpool)."""

        if kind not in TEXTURE_KINDS:
            raise HTTPException(
                status_code=400,
                detail=f"Unknown texture kind {kind!r}; expected one of {list(TEXTURE_KINDS)}"
            )

        daily = pick(_parse_date(date))

        try:
            buffers = textures_for(daily)
            png = buffer_to_png_bytes(getattr(buffers, kind))
        except Exception as e:
            raise HTTPException(status_code=500, detail=f"Texture generation failed: {str(e)}")

        return Response(content=png, media_type="image/png")

    @app.post("/features", response_model=FeaturesResponse)
    async def features(request: FeaturesRequest):
        """Derive features for an arbitrary record."""

        record = PlanetRecord(
            pl_name=request.pl_name,
            pl_masse=request.pl_masse,
            pl_eqt=request.pl_eqt
        )
        fallback = request.fallback_temperature
        if fallback is None:
            fallback = fallback_temperature

        derived = derive_features(record, fallback_temperature=fallback)
        return FeaturesResponse(
            features=derived.to_dict(),
            scene=build_scene(derived).to_dict(),
            violations=derived.validate()
        )

    @app.get("/parameters")
    async def get_parameters():
        """Ranges of the numeric feature parameters."""
        defaults = FEATURE_PARAMETERS.get_defaults()
        return {
            "parameters": {
                name: {"min": min_val, "max": max_val, "default": defaults[name]}
                for name, (min_val, max_val) in FEATURE_PARAMETERS.get_param_ranges().items()
            },
            "texture_kinds": list(TEXTURE_KINDS),
            "texture_size": [synthesizer.width, synthesizer.height]
        }

    return app


def main():
    """CLI entry point for API server."""

    parser = argparse.ArgumentParser(description="Exoplanet of the Day API Server")
    parser.add_argument("--catalog", default=os.getenv(CATALOG_ENV_VAR),
                        help=f"Catalog JSON file (defaults to ${CATALOG_ENV_VAR})")
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind server")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind server")
    parser.add_argument("--width", type=int, default=1024, help="Texture width")
    parser.add_argument("--height", type=int, default=512, help="Texture height")
    parser.add_argument("--fallback-temperature", type=float,
                        help="Deterministic temperature (K) for planets without pl_eqt")

    args = parser.parse_args()

    if not args.catalog or not os.path.exists(args.catalog):
        print(f"Error: Catalog does not exist: {args.catalog}")
        return

    print("Starting Exoplanet of the Day API server...")
    print(f"Catalog: {args.catalog}")
    print(f"Server: http://{args.host}:{args.port}")
    print(f"Docs: http://{args.host}:{args.port}/docs")

    app = create_app(
        catalog_path=args.catalog,
        width=args.width,
        height=args.height,
        fallback_temperature=args.fallback_temperature
    )

    uvicorn.run(
        app,
        host=args.host,
        port=args.port,
        log_level="info"
    )


if __name__ == "__main__":
    main()
