from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .classifier import is_present
from .models import NearestPlace, NormalizedIngredient

DEFAULT_TIER = "Normal"

# Optional object fields copied from the raw item, all defaulting to {}.
_OBJECT_FIELDS = {
    "requirements": "requirements",
    "identifications": "identifications",
    "consumableOnlyIDs": "consumable_only_ids",
    "ingredientPositionModifiers": "ingredient_position_modifiers",
}


def _text_or(value: Any, default: str) -> str:
    if not is_present(value) or isinstance(value, (Mapping, list, tuple)):
        return default
    return str(value)


def _mapping_or_empty(value: Any) -> dict[str, Any]:
    return dict(value) if isinstance(value, Mapping) else {}


def _icon_of(value: Any) -> str | dict[str, Any] | None:
    if isinstance(value, str):
        return value or None
    if isinstance(value, Mapping):
        return dict(value)
    return None


def normalize_ingredient(
    internal_name: str,
    item: Mapping[str, Any],
    nearest_place: NearestPlace | None = None,
) -> NormalizedIngredient:
    """
    Map a raw item record onto the catalog schema.

    Every field is filled: missing or malformed optional fields take their
    default. ``dropMeta`` is copied as-is when it is an object. The input
    record is never modified.
    """
    fields: dict[str, Any] = {
        key: _mapping_or_empty(item.get(raw_key)) for raw_key, key in _OBJECT_FIELDS.items()
    }
    drop_meta = item.get("dropMeta")

    return NormalizedIngredient(
        internal_name=internal_name,
        name=_text_or(item.get("name"), internal_name),
        tier=_text_or(item.get("tier"), DEFAULT_TIER),
        drop_meta=dict(drop_meta) if isinstance(drop_meta, Mapping) else None,
        nearest_place=nearest_place,
        icon=_icon_of(item.get("icon")),
        **fields,
    )
