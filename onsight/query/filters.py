"""Route filtering: free-text search plus five independent facets.

Every facet is a pure intersection, so the order they are applied in does not
change the result. Malformed facet values never raise; they just contribute
no matches.
"""

from __future__ import annotations

import logging
import re
from typing import Optional, Sequence

from onsight.config import ALL_CRAGS, ANY_RATING, LENGTH_BUCKETS, LOCATION_KEY_SEPARATOR
from onsight.models import FilterState, Route
from onsight.query.grades import grades_for_tier

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"^\s*[+-]?\d+")


# ── Facet parsing ─────────────────────────────────────────────────────


def parse_location_key(key: str) -> Optional[tuple[str, str, str]]:
    """Split ``region|area|crag`` into its parts; None if malformed."""
    parts = key.split(LOCATION_KEY_SEPARATOR)
    if len(parts) < 3:
        return None
    return parts[0], parts[1], parts[2]


def location_key(region: str, area: str, crag: str = ALL_CRAGS) -> str:
    return LOCATION_KEY_SEPARATOR.join((region, area, crag))


def min_stars_for_rating(rating: str) -> Optional[int]:
    """Read the minimum from a ``"N+ stars"`` label; None if unreadable."""
    match = _LEADING_INT.match(rating.replace("+", ""))
    if match is None:
        return None
    return int(match.group(0))


# ── Per-route predicates ──────────────────────────────────────────────


def matches_search(route: Route, search_lower: str) -> bool:
    """Case-insensitive substring match on name, area, crag, region, type."""
    return any(
        search_lower in field.lower()
        for field in (route.name, route.area, route.crag, route.region, route.type)
    )


def matches_locations(route: Route, locations: Sequence[str]) -> bool:
    for key in locations:
        parsed = parse_location_key(key)
        if parsed is None:
            continue
        region, area, crag = parsed
        if route.region != region or route.area != area:
            continue
        if crag == ALL_CRAGS or route.crag == crag:
            return True
    return False


def matches_types(route: Route, types: Sequence[str]) -> bool:
    return route.type in types


def matches_difficulties(route: Route, difficulties: Sequence[str]) -> bool:
    return any(route.grade in grades_for_tier(tier, route.type) for tier in difficulties)


def matches_lengths(route: Route, lengths: Sequence[str]) -> bool:
    for label in lengths:
        bucket = LENGTH_BUCKETS.get(label)
        if bucket is None:
            continue
        low, high = bucket
        if low is not None and route.length_ft < low:
            continue
        if high is not None and route.length_ft >= high:
            continue
        return True
    return False


def matches_rating(route: Route, rating: str) -> bool:
    if not rating or rating == ANY_RATING:
        return True
    min_stars = min_stars_for_rating(rating)
    if min_stars is None:
        return False
    return route.stars >= min_stars


# ── Engine ────────────────────────────────────────────────────────────


def filter_routes(
    routes: Sequence[Route],
    filters: FilterState,
    search_query: str = "",
) -> list[Route]:
    """Return the routes that pass the search and every active facet.

    The input is not modified and relative order is preserved.
    """
    result = list(routes)

    if search_query and search_query.strip():
        search_lower = search_query.lower()
        result = [r for r in result if matches_search(r, search_lower)]

    if filters.locations:
        result = [r for r in result if matches_locations(r, filters.locations)]

    if filters.types:
        result = [r for r in result if matches_types(r, filters.types)]

    if filters.difficulties:
        result = [r for r in result if matches_difficulties(r, filters.difficulties)]

    if filters.lengths:
        result = [r for r in result if matches_lengths(r, filters.lengths)]

    if filters.rating and filters.rating != ANY_RATING:
        result = [r for r in result if matches_rating(r, filters.rating)]

    logger.debug("%d of %d routes match filters", len(result), len(routes))
    return result


def count_matches(
    routes: Sequence[Route],
    filters: FilterState,
    search_query: str = "",
) -> int:
    """Number of routes a (draft) filter state would show."""
    return len(filter_routes(routes, filters, search_query))
