from __future__ import annotations

import time
from typing import Literal

from pydantic import BaseModel, Field

from .pipeline import RefreshResult


class RefreshRun(BaseModel):
    status: Literal["ok", "failed"]
    timestamp: float = Field(default_factory=time.time)
    duration_ms: float
    ingredient_count: int | None = None
    item_count: int | None = None
    enriched_count: int | None = None
    enrichment_available: bool | None = None
    error: str | None = None


_runs: list[RefreshRun] = []


def record_success(result: RefreshResult, duration_ms: float) -> RefreshRun:
    run = RefreshRun(
        status="ok",
        duration_ms=duration_ms,
        ingredient_count=result.ingredient_count,
        item_count=result.item_count,
        enriched_count=result.enriched_count,
        enrichment_available=result.enrichment_available,
    )
    _runs.append(run)
    return run


def record_failure(error: BaseException, duration_ms: float) -> RefreshRun:
    run = RefreshRun(
        status="failed",
        duration_ms=duration_ms,
        error=f"{type(error).__name__}: {error}",
    )
    _runs.append(run)
    return run


def get_runs() -> list[RefreshRun]:
    return list(_runs)


def clear_runs() -> None:
    _runs.clear()
