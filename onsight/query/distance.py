"""Great-circle distance, distance ordering, and distance labels."""

from __future__ import annotations

import dataclasses
import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Sequence

from onsight.config import EARTH_RADIUS_MILES, FEET_PER_MILE, NEARBY_ROUTES_LIMIT
from onsight.models import Route, UserLocation


def calculate_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Return the great-circle distance in **miles** between two points.

    Haversine formula on a sphere of radius 3959 miles.
    """
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)

    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    # Rounding can push a just past 1 for near-antipodal points
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_MILES * c


def _distance_from(lat: float, lng: float, route: Route) -> Optional[float]:
    if not route.has_coordinates:
        return None
    return calculate_distance(lat, lng, route.lat, route.lng)


def _sort_key(route: Route) -> tuple[bool, float]:
    # Unknown distances go last
    if route.distance is None:
        return (True, 0.0)
    return (False, route.distance)


def rank_by_distance(
    routes: Sequence[Route],
    origin: Optional[UserLocation],
) -> Sequence[Route]:
    """Sort routes by distance from *origin*, nearest first.

    Without a complete origin the input is returned as-is. Otherwise each
    route is copied with its ``distance`` set (``None`` when the route has no
    coordinates) and the copies are stably sorted with unknowns last.
    """
    if origin is None or not origin.is_complete:
        return routes

    ranked = [
        dataclasses.replace(route, distance=_distance_from(origin.lat, origin.lng, route))
        for route in routes
    ]
    ranked.sort(key=_sort_key)
    return ranked


def nearby_routes(
    route: Route,
    routes: Sequence[Route],
    limit: int = NEARBY_ROUTES_LIMIT,
) -> list[Route]:
    """The closest other routes to *route*, each carrying its distance."""
    if not route.has_coordinates:
        return []
    others = [r for r in routes if r.id != route.id and r.has_coordinates]
    ranked = rank_by_distance(others, UserLocation(route.lat, route.lng))
    return list(ranked[:limit])


def _round_half_up(value: float, places: int) -> Decimal:
    quantum = Decimal(1).scaleb(-places)
    return Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP)


def format_distance(distance: float) -> str:
    """Render miles as ``"2640 ft"``, ``"5.3 mi"`` or ``"15 mi"``."""
    if distance < 1:
        return f"{_round_half_up(distance * FEET_PER_MILE, 0)} ft"
    if distance < 10:
        return f"{_round_half_up(distance, 1)} mi"
    return f"{_round_half_up(distance, 0)} mi"
