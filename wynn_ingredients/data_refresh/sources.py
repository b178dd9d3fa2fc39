from __future__ import annotations

import logging
from typing import Any

import requests

from .config import DEFAULT_REFRESH_CONFIG, RefreshConfig
from .models import PlacesResult

logger = logging.getLogger(__name__)


class ItemSourceError(RuntimeError):
    """The item database could not be retrieved; the refresh cannot proceed."""


def _get_json(url: str, config: RefreshConfig) -> Any:
    resp = requests.get(
        url,
        timeout=config.timeout,
        headers={"User-Agent": config.user_agent, "Accept": "application/json"},
    )
    resp.raise_for_status()
    return resp.json()


def fetch_items(config: RefreshConfig = DEFAULT_REFRESH_CONFIG) -> dict[str, Any]:
    """
    Download the full item database as ``{internal_name: raw_item}``.

    Raises ``ItemSourceError`` on any network, status or payload problem.
    """
    logger.info("Fetching item database from %s", config.items_url)
    try:
        payload = _get_json(config.items_url, config)
    except requests.RequestException as exc:
        raise ItemSourceError(f"Item database request failed: {exc}") from exc
    except ValueError as exc:
        raise ItemSourceError(f"Item database returned invalid JSON: {exc}") from exc

    if not isinstance(payload, dict):
        raise ItemSourceError(
            f"Item database returned {type(payload).__name__}, expected an object"
        )
    return payload


def _flatten_places(payload: dict[str, Any]) -> list[Any]:
    places: list[Any] = []
    for value in payload.values():
        if isinstance(value, list):
            places.extend(value)
        else:
            places.append(value)
    return places


def fetch_places(config: RefreshConfig = DEFAULT_REFRESH_CONFIG) -> PlacesResult:
    """
    Download the place labels used for location enrichment.

    Never raises: any failure yields ``PlacesResult.unavailable`` and a warning,
    and the refresh continues without enrichment.
    """
    logger.info("Fetching place labels from %s", config.places_url)
    try:
        payload = _get_json(config.places_url, config)
    except (requests.RequestException, ValueError) as exc:
        logger.warning(
            "Could not fetch place labels, location enrichment will be skipped",
            exc_info=True,
        )
        return PlacesResult.unavailable(str(exc))

    if isinstance(payload, list):
        return PlacesResult.ok(payload)
    if isinstance(payload, dict):
        return PlacesResult.ok(_flatten_places(payload))

    reason = f"Place labels returned {type(payload).__name__}, expected a list or object"
    logger.warning("%s, location enrichment will be skipped", reason)
    return PlacesResult.unavailable(reason)
