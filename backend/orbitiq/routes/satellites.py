"""REST endpoints matching the frontend API: /api/satellites and friends."""

from __future__ import annotations

import logging
import math

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from orbitiq.catalog import STATIC_SATELLITES, TRACKED_SATELLITES, paginate, search_catalog
from orbitiq.models import (
    Category,
    DesignatorResponse,
    ISSPosition,
    SatellitePosition,
    SatelliteRecord,
    utcnow,
)
from orbitiq.pipeline import MISSING_KEY_MESSAGE, PositionPipeline
from orbitiq.providers import NoPositionData, Observer, ProviderError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/satellites")


def get_pipeline(request: Request) -> PositionPipeline:
    return request.app.state.pipeline


@router.get("")
async def list_satellites(
    category: str | None = None,
    search: str | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    pipeline: PositionPipeline = Depends(get_pipeline),
):
    has_key = pipeline.n2yo.enabled
    catalog = TRACKED_SATELLITES if has_key else STATIC_SATELLITES
    wanted = Category.match(category) if category else None

    # An unrecognised category matches nothing rather than widening the filter.
    filtered = [] if category and wanted is None else search_catalog(catalog, wanted, search)
    page_items = paginate(filtered, page, limit)
    logger.info(
        "Satellites requested (category=%s, search=%s, page=%d): %d matched, %d on page",
        category, search, page, len(filtered), len(page_items),
    )

    result = await pipeline.resolve_batch(page_items)

    metadata = {
        "liveDataCount": result.live_count,
        "simulatedCount": result.simulated_count,
        "staticCount": result.static_count,
        "lastUpdated": utcnow().isoformat(),
        "apiKeyStatus": "ACTIVE" if has_key else "MISSING",
    }
    if not has_key:
        metadata["message"] = "Using static data - API keys not configured"

    return {
        "satellites": [s.model_dump(by_alias=True, mode="json") for s in result.satellites],
        "totalPages": math.ceil(len(filtered) / limit),
        "currentPage": page,
        "total": len(filtered),
        "metadata": metadata,
    }


@router.get("/iss/position", response_model=ISSPosition, response_model_by_alias=True)
async def get_iss_position(pipeline: PositionPipeline = Depends(get_pipeline)):
    return await pipeline.iss_position()


@router.get("/test-api")
async def test_api(pipeline: PositionPipeline = Depends(get_pipeline)):
    """Report whether N2YO answers with positions (or a quota message)."""
    if not pipeline.n2yo.enabled:
        return {"success": False, "error": "No API key configured", "apiKeyStatus": "MISSING"}
    return await pipeline.n2yo.probe()


@router.get("/trending")
async def trending_satellites(pipeline: PositionPipeline = Depends(get_pipeline)):
    satellites = await pipeline.trending()
    return {
        "satellites": [s.model_dump(by_alias=True, mode="json") for s in satellites],
        "message": f"Found {len(satellites)} trending satellites",
    }


@router.get("/discover")
async def discover_satellites(
    limit: int = Query(20, ge=1, le=100),
    pipeline: PositionPipeline = Depends(get_pipeline),
):
    satellites = await pipeline.discover(limit)
    return {
        "satellites": [s.model_dump(by_alias=True, mode="json") for s in satellites],
        "total": len(satellites),
        "discoveredAt": utcnow().isoformat(),
        "message": f"Discovered {len(satellites)} satellites from N2YO API",
    }


@router.get("/above/{lat}/{lng}/{alt}/{radius}")
async def satellites_above(
    lat: float,
    lng: float,
    alt: float,
    radius: float,
    pipeline: PositionPipeline = Depends(get_pipeline),
):
    if not pipeline.n2yo.enabled:
        return JSONResponse(status_code=503, content={"error": MISSING_KEY_MESSAGE})
    try:
        return await pipeline.n2yo.fetch_above(Observer(lat, lng, alt), radius)
    except ProviderError as exc:
        logger.warning("Satellites above %.2f, %.2f unavailable: %s", lat, lng, exc)
        return JSONResponse(
            status_code=502, content={"error": "Failed to fetch satellites above location"}
        )


@router.get("/{norad_id}", response_model=SatelliteRecord, response_model_by_alias=True)
async def get_satellite(norad_id: int, pipeline: PositionPipeline = Depends(get_pipeline)):
    # No local hints: name comes from the provider, category from the name.
    return await pipeline.resolve_one(norad_id)


@router.get("/{norad_id}/designator", response_model=DesignatorResponse, response_model_by_alias=True)
async def get_designator(norad_id: int, pipeline: PositionPipeline = Depends(get_pipeline)):
    intl_des = await pipeline.resolve_designator(norad_id)
    return DesignatorResponse(norad_id=norad_id, intl_des=intl_des)


@router.get("/{norad_id}/position", response_model=SatellitePosition, response_model_by_alias=True)
async def get_satellite_position(
    norad_id: int,
    lat: float = 0.0,
    lng: float = 0.0,
    alt: float = 0.0,
    pipeline: PositionPipeline = Depends(get_pipeline),
):
    """Live fix only; no simulated fallback on this endpoint."""
    if not pipeline.n2yo.enabled:
        return JSONResponse(status_code=503, content={"error": MISSING_KEY_MESSAGE})
    try:
        return await pipeline.observed_position(norad_id, Observer(lat, lng, alt))
    except NoPositionData:
        return JSONResponse(status_code=404, content={"error": "Position data not available"})
    except ProviderError as exc:
        logger.warning("Position for %d unavailable: %s", norad_id, exc)
        return JSONResponse(status_code=502, content={"error": "Failed to fetch satellite position"})
