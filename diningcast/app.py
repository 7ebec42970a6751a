from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.responses import JSONResponse

from .analytics.aggregator import compute_analytics
from .analytics.store import get_events
from .auth.dependencies import UNAUTHORIZED_ERROR, UnauthorizedError, require_api_key
from .menus.cache import get_cache_stats
from .recommendations.data_store import get_latest_recommendation
from .recommendations.models import RecommendationResponse
from .recommendations.pipeline import get_recommendations

logger = logging.getLogger(__name__)

app = FastAPI(title="Dining Recommendation API", version="1.0.0")


@app.exception_handler(UnauthorizedError)
async def unauthorized(request: Request, exc: UnauthorizedError) -> JSONResponse:
    return JSONResponse(status_code=401, content={"error": UNAUTHORIZED_ERROR})


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


# ── Recommendation endpoints ─────────────────────────────────────────────


def _recommend(lat: float | None, lon: float | None):
    origin = (lat, lon) if lat is not None and lon is not None else None
    try:
        response = get_recommendations(origin=origin)
    except Exception as exc:
        logger.exception("Recommendation run failed")
        return JSONResponse(
            status_code=500,
            content={"error": "recommendation_failed", "detail": str(exc)},
        )
    return response


@app.post(
    "/recommend",
    response_model=RecommendationResponse,
    dependencies=[Depends(require_api_key)],
)
def recommend(
    lat: float | None = Query(default=None, ge=-90, le=90),
    lon: float | None = Query(default=None, ge=-180, le=180),
):
    return _recommend(lat, lon)


@app.get(
    "/recommend",
    response_model=RecommendationResponse,
    dependencies=[Depends(require_api_key)],
)
def recommend_get(
    lat: float | None = Query(default=None, ge=-90, le=90),
    lon: float | None = Query(default=None, ge=-180, le=180),
):
    return _recommend(lat, lon)


@app.get("/recommendation/latest", dependencies=[Depends(require_api_key)])
def latest_recommendation() -> dict:
    record = get_latest_recommendation()
    if record is None:
        raise HTTPException(status_code=404, detail="No recommendation yet")
    return record


# ── Operational endpoints ────────────────────────────────────────────────


@app.get("/analytics", dependencies=[Depends(require_api_key)])
def analytics() -> dict:
    return compute_analytics(get_events())


@app.get("/cache/stats", dependencies=[Depends(require_api_key)])
def cache_stats() -> dict:
    return get_cache_stats()
