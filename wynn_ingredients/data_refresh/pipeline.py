from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .classifier import is_ingredient
from .config import DEFAULT_REFRESH_CONFIG, RefreshConfig
from .enrichment import drop_coordinates_of, find_nearest_place
from .models import NormalizedIngredient
from .normalizer import normalize_ingredient
from .persistence import write_catalog
from .sources import fetch_items, fetch_places

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RefreshResult:
    path: Path
    ingredient_count: int
    item_count: int
    place_count: int
    enrichment_available: bool
    enriched_count: int


def build_catalog(
    raw_items: Mapping[str, Any],
    raw_places: Sequence[Any] | None = None,
) -> list[NormalizedIngredient]:
    """
    Turn the raw item database into the ordered ingredient catalog.

    Items are visited in the mapping's order. Non-ingredients are dropped,
    ingredients with a drop coordinate get their nearest place when any places
    are known, and every kept item is normalized exactly once.
    """
    places = raw_places or []
    catalog: list[NormalizedIngredient] = []

    for internal_name, item in raw_items.items():
        if not is_ingredient(item):
            continue

        nearest_place = None
        coordinates = drop_coordinates_of(item)
        if coordinates is not None and places:
            nearest_place = find_nearest_place(coordinates, places)

        catalog.append(normalize_ingredient(internal_name, item, nearest_place))

    return catalog


def run_refresh(
    config: RefreshConfig = DEFAULT_REFRESH_CONFIG,
    output_path: Path | None = None,
) -> RefreshResult:
    """
    Execute a full catalog refresh.

    Steps:
    - Fetch the item database (failure aborts the run before anything is written).
    - Fetch place labels (failure only disables enrichment).
    - Classify, enrich and normalize.
    - Replace the catalog file atomically.
    """
    raw_items = fetch_items(config)
    places_result = fetch_places(config)
    if not places_result.available:
        logger.warning("Place labels unavailable (%s); nearestPlace will be null", places_result.reason)

    logger.info("Processing %d items", len(raw_items))
    catalog = build_catalog(raw_items, places_result.places)

    path = write_catalog(catalog, output_path or config.catalog_path)
    enriched = sum(1 for entry in catalog if entry.nearest_place is not None)
    logger.info("Saved %d ingredients (%d with a nearest place) to %s", len(catalog), enriched, path)

    return RefreshResult(
        path=path,
        ingredient_count=len(catalog),
        item_count=len(raw_items),
        place_count=len(places_result.places),
        enrichment_available=places_result.available,
        enriched_count=enriched,
    )
