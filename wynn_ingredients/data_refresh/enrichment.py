from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from typing import Any

from .geometry import calculate_distance
from .models import NearestPlace


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def round_distance(distance: float) -> int:
    """Round half up, so 2.5 becomes 3."""
    return int(math.floor(distance + 0.5))


def drop_coordinates_of(item: Mapping[str, Any]) -> tuple[float, float, float] | None:
    """Return the ``(x, y, z)`` drop coordinate of an item, if it has a usable one."""
    drop_meta = item.get("dropMeta")
    if not isinstance(drop_meta, Mapping):
        return None
    coordinates = drop_meta.get("coordinates")
    if not isinstance(coordinates, (list, tuple)) or len(coordinates) != 3:
        return None
    if not all(_is_number(c) for c in coordinates):
        return None
    x, y, z = coordinates
    return x, y, z


def _place_position(place: Any) -> tuple[float, float] | None:
    """Planar ``(x, z)`` of a place label, or ``None`` when unusable.

    Older label files store the horizontal second axis as ``y``.
    """
    if not isinstance(place, Mapping):
        return None
    x = place.get("x")
    if x is None:
        return None
    second = place.get("z")
    if second is None:
        second = place.get("y")
    if second is None:
        return None
    if not (_is_number(x) and _is_number(second)):
        return None
    return x, second


def find_nearest_place(
    drop_coordinates: Sequence[float],
    places: Sequence[Any],
) -> NearestPlace | None:
    """
    Find the place label closest to a drop coordinate.

    Only the horizontal components of the drop point take part; its height is
    ignored. Unusable place entries are skipped. On equal distances the place
    listed first wins, so callers must keep the source order.
    """
    drop_x, _drop_y, drop_z = drop_coordinates
    best: NearestPlace | None = None
    min_distance = math.inf

    for place in places:
        position = _place_position(place)
        if position is None:
            continue
        place_x, place_z = position
        distance = calculate_distance(drop_x, drop_z, place_x, place_z)
        if distance < min_distance:
            min_distance = distance
            name = place.get("name")
            best = NearestPlace(
                name=str(name) if name is not None else "",
                distance=round_distance(distance),
            )

    return best
