from __future__ import annotations

import math


def calculate_distance(x1: float, z1: float, x2: float, z2: float) -> float:
    """Planar Euclidean distance on the horizontal (x, z) plane."""
    return math.sqrt((x2 - x1) ** 2 + (z2 - z1) ** 2)
