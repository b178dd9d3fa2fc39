from __future__ import annotations

from typing import Any

from .data_store import get_catalog, get_records


def search_ingredients(
    tier: str | None = None,
    name: str | None = None,
    skill: str | None = None,
    has_location: bool | None = None,
    limit: int = 50,
    offset: int = 0,
) -> tuple[list[dict[str, Any]], int]:
    """
    Filter the catalog, keeping catalog order.

    Returns the requested page and the total number of matches.
    """
    records, df = get_catalog()
    if df.empty:
        return [], 0

    mask = df["internal_name"].notna()
    if tier:
        mask &= df["tier_lower"] == tier.strip().lower()
    if name:
        mask &= df["name_lower"].str.contains(name.strip().lower(), regex=False)
    if skill:
        wanted = skill.strip().lower()
        mask &= df["skills_list"].apply(lambda skills: wanted in skills)
    if has_location is not None:
        mask &= df["has_location"] == has_location

    positions = [i for i, keep in enumerate(mask.tolist()) if keep]
    page = positions[offset : offset + limit]
    return [records[i] for i in page], len(positions)


def get_ingredient(internal_name: str) -> dict[str, Any] | None:
    for record in get_records():
        if record.get("internalName") == internal_name:
            return record
    return None


def catalog_metadata() -> dict[str, Any]:
    _records, df = get_catalog()
    if df.empty:
        return {"total": 0, "tiers": [], "skills": [], "places": []}

    skills: set[str] = set()
    for values in df["skills_list"]:
        skills.update(values)

    # Nameless places still count as a location but give no filter value.
    place_names = df["place_name"].dropna().astype(str)
    place_names = place_names[place_names != ""]

    return {
        "total": len(df),
        "tiers": sorted(df["tier"].dropna().astype(str).unique().tolist()),
        "skills": sorted(skills),
        "places": sorted(place_names.unique().tolist()),
    }
