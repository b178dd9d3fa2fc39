from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class NearestPlace(BaseModel):
    name: str
    distance: int = Field(..., ge=0, description="Rounded planar distance in blocks")


class NormalizedIngredient(BaseModel):
    """One entry of the published ingredient catalog.

    Attributes are snake_case; the JSON document uses the camelCase names of the
    item database, so always dump with ``by_alias=True``.
    """

    model_config = ConfigDict(populate_by_name=True)

    internal_name: str = Field(..., alias="internalName")
    name: str
    tier: str = "Normal"
    requirements: dict[str, Any] = Field(default_factory=dict)
    identifications: dict[str, Any] = Field(default_factory=dict)
    consumable_only_ids: dict[str, Any] = Field(default_factory=dict, alias="consumableOnlyIDs")
    ingredient_position_modifiers: dict[str, Any] = Field(
        default_factory=dict, alias="ingredientPositionModifiers"
    )
    drop_meta: dict[str, Any] | None = Field(default=None, alias="dropMeta")
    nearest_place: NearestPlace | None = Field(default=None, alias="nearestPlace")
    icon: str | dict[str, Any] | None = None


@dataclass(frozen=True)
class PlacesResult:
    """
    Outcome of the best-effort places fetch.

    Either ``available`` with the place entries, or unavailable with a reason.
    The pipeline branches on ``available`` instead of catching exceptions.
    """

    available: bool
    places: list[Any] = field(default_factory=list)
    reason: str | None = None

    @classmethod
    def ok(cls, places: list[Any]) -> PlacesResult:
        return cls(available=True, places=list(places))

    @classmethod
    def unavailable(cls, reason: str) -> PlacesResult:
        return cls(available=False, reason=reason)
