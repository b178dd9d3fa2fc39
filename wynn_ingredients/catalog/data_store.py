from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pandas as pd

from ..data_refresh.config import DEFAULT_REFRESH_CONFIG

# Records and their lookup frame are always published together, so a reader
# never pairs a new record list with positions from an old frame.
_state: tuple[list[dict[str, Any]], pd.DataFrame] | None = None


def _skills_of(requirements: Any) -> list[str]:
    if not isinstance(requirements, dict):
        return []
    skills = requirements.get("skills")
    if not isinstance(skills, list):
        return []
    return [str(s).lower() for s in skills]


def _place_name_of(nearest_place: Any) -> str | None:
    if isinstance(nearest_place, dict):
        return nearest_place.get("name")
    return None


def _build_frame(records: list[dict[str, Any]]) -> pd.DataFrame:
    df = pd.DataFrame(
        {
            "internal_name": [r.get("internalName", "") for r in records],
            "name": [r.get("name", "") for r in records],
            "tier": [r.get("tier", "") for r in records],
            "skills_list": [_skills_of(r.get("requirements")) for r in records],
            "place_name": [_place_name_of(r.get("nearestPlace")) for r in records],
        }
    )

    # Lowercase for case-insensitive lookup
    df["name_lower"] = df["name"].fillna("").astype(str).str.lower()
    df["tier_lower"] = df["tier"].fillna("").astype(str).str.lower()
    df["has_location"] = df["place_name"].notna()
    return df


def load_catalog(path: Path = DEFAULT_REFRESH_CONFIG.catalog_path) -> list[dict[str, Any]]:
    """(Re)load the catalog from ``path``. A missing file yields an empty catalog."""
    global _state
    records = json.loads(path.read_text(encoding="utf-8")) if path.is_file() else []
    df = _build_frame(records)
    _state = (records, df)
    return records


def get_catalog() -> tuple[list[dict[str, Any]], pd.DataFrame]:
    """Return ``(records, frame)`` from one load; row ``i`` describes ``records[i]``."""
    state = _state
    if state is None:
        load_catalog()
        state = _state
    return state


def get_records() -> list[dict[str, Any]]:
    return get_catalog()[0]


def get_dataframe() -> pd.DataFrame:
    return get_catalog()[1]
