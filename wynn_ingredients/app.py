from __future__ import annotations

import logging
import time

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from starlette.middleware.sessions import SessionMiddleware

from .auth.config import DEFAULT_AUTH_CONFIG
from .auth.dependencies import require_admin
from .auth.users import authenticate
from .catalog.data_store import load_catalog
from .catalog.models import (
    IngredientListResponse,
    LoginRequest,
    MetadataResponse,
    RefreshResponse,
)
from .catalog.query import catalog_metadata, get_ingredient, search_ingredients
from .data_refresh.config import DEFAULT_REFRESH_CONFIG
from .data_refresh.history import get_runs, record_failure, record_success
from .data_refresh.models import NormalizedIngredient
from .data_refresh.pipeline import run_refresh
from .data_refresh.sources import ItemSourceError

logger = logging.getLogger(__name__)

app = FastAPI(title="Wynncraft Ingredient Catalog API", version="1.0.0")
app.add_middleware(SessionMiddleware, secret_key=DEFAULT_AUTH_CONFIG.session_secret)


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/ingredients", response_model=IngredientListResponse)
def list_ingredients(
    tier: str | None = None,
    name: str | None = None,
    skill: str | None = None,
    has_location: bool | None = None,
    limit: int = Query(default=50, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
) -> IngredientListResponse:
    page, total = search_ingredients(
        tier=tier,
        name=name,
        skill=skill,
        has_location=has_location,
        limit=limit,
        offset=offset,
    )
    return IngredientListResponse(
        ingredients=[NormalizedIngredient.model_validate(r) for r in page],
        total=total,
        limit=limit,
        offset=offset,
    )


@app.get("/ingredients/{internal_name}", response_model=NormalizedIngredient)
def ingredient_detail(internal_name: str) -> NormalizedIngredient:
    record = get_ingredient(internal_name)
    if record is None:
        raise HTTPException(status_code=404, detail="Ingredient not found")
    return NormalizedIngredient.model_validate(record)


@app.get("/metadata", response_model=MetadataResponse)
def metadata() -> MetadataResponse:
    return MetadataResponse(**catalog_metadata())


# ── Auth endpoints ───────────────────────────────────────────────────────


@app.post("/auth/login")
def login(body: LoginRequest, request: Request) -> dict:
    user = authenticate(body.username, body.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    request.session["user"] = user
    return {"status": "ok", "user": user}


@app.post("/auth/logout")
def logout(request: Request) -> dict:
    request.session.clear()
    return {"status": "logged_out"}


@app.get("/auth/me")
def auth_me(user: dict = Depends(require_admin)) -> dict:
    return user


# ── Admin endpoints ──────────────────────────────────────────────────────


@app.post("/admin/refresh", response_model=RefreshResponse)
def refresh(user: dict = Depends(require_admin)) -> RefreshResponse:
    start = time.perf_counter()
    try:
        result = run_refresh(DEFAULT_REFRESH_CONFIG)
        load_catalog(result.path)
    except Exception as exc:
        duration_ms = round((time.perf_counter() - start) * 1000, 1)
        record_failure(exc, duration_ms)
        logger.error("Catalog refresh failed", exc_info=True)
        if isinstance(exc, ItemSourceError):
            raise HTTPException(status_code=502, detail=str(exc))
        raise

    duration_ms = round((time.perf_counter() - start) * 1000, 1)
    record_success(result, duration_ms)

    return RefreshResponse(
        status="ok",
        ingredient_count=result.ingredient_count,
        item_count=result.item_count,
        place_count=result.place_count,
        enrichment_available=result.enrichment_available,
        enriched_count=result.enriched_count,
        duration_ms=duration_ms,
    )


@app.get("/admin/refresh/history")
def refresh_history(user: dict = Depends(require_admin)) -> dict:
    runs = get_runs()
    return {"total": len(runs), "runs": [run.model_dump() for run in runs]}
