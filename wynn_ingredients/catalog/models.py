from __future__ import annotations

from pydantic import BaseModel, Field

from ..data_refresh.models import NormalizedIngredient


class IngredientListResponse(BaseModel):
    ingredients: list[NormalizedIngredient]
    total: int
    limit: int
    offset: int


class MetadataResponse(BaseModel):
    total: int
    tiers: list[str]
    skills: list[str]
    places: list[str]


class RefreshResponse(BaseModel):
    status: str
    ingredient_count: int
    item_count: int
    place_count: int
    enrichment_available: bool
    enriched_count: int
    duration_ms: float


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
