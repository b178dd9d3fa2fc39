from __future__ import annotations

from collections.abc import Mapping
from typing import Any

SKILL_REQUIREMENTS_KEY = "skills"
INGREDIENT_SIGNAL_FIELDS = ("consumableOnlyIDs", "ingredientPositionModifiers")


def is_present(value: Any) -> bool:
    """
    Whether an optional field carries a value.

    Null, false, empty strings and zero count as absent. Containers count as
    present even when empty: an empty ``consumableOnlyIDs`` object is still a
    signal.
    """
    if value is None or value is False:
        return False
    if isinstance(value, (str, int, float)):
        return bool(value)
    return True


def _has_skill_requirement(item: Mapping[str, Any]) -> bool:
    requirements = item.get("requirements")
    if not isinstance(requirements, Mapping):
        return False
    skills = requirements.get(SKILL_REQUIREMENTS_KEY)
    return isinstance(skills, (list, tuple)) and len(skills) > 0


def is_ingredient(item: Any) -> bool:
    """
    Heuristic ingredient check over a raw item record.

    An item qualifies if it has a non-empty skill requirement, or carries
    ``consumableOnlyIDs``, or carries ``ingredientPositionModifiers``.
    """
    if not isinstance(item, Mapping):
        return False
    if _has_skill_requirement(item):
        return True
    return any(is_present(item.get(key)) for key in INGREDIENT_SIGNAL_FIELDS)
