"""Helpers for building, summarising and editing a FilterState.

These back the filter chips, filter-bar badges and the location picker; the
filter engine itself never needs them.
"""

from __future__ import annotations

import dataclasses
from collections import Counter
from typing import Sequence

from onsight.config import ALL_CRAGS, ANY_RATING, LENGTH_LABELS
from onsight.models import FilterChip, FilterState, LocationHierarchy, LocationOption, Route
from onsight.query.filters import location_key

SET_FACETS = ("locations", "types", "difficulties", "lengths")
FACETS = SET_FACETS + ("rating",)


def _check_facet(facet: str) -> None:
    if facet not in FACETS:
        raise ValueError(f"Unknown filter facet '{facet}'. Known facets: {', '.join(FACETS)}")


def _chip_label(facet: str, value: str) -> str:
    if facet == "difficulties":
        return value[:1].upper() + value[1:]
    if facet == "lengths":
        return LENGTH_LABELS.get(value, value)
    if facet == "rating":
        return value if value.endswith("stars") else f"{value} stars"
    return value


def active_chips(filters: FilterState) -> list[FilterChip]:
    """One chip per active facet value, in facet order."""
    chips = [
        FilterChip(facet=facet, value=value, label=_chip_label(facet, value))
        for facet in SET_FACETS
        for value in getattr(filters, facet)
    ]
    if filters.rating and filters.rating != ANY_RATING:
        chips.append(FilterChip("rating", filters.rating, _chip_label("rating", filters.rating)))
    return chips


def remove_filter(filters: FilterState, facet: str, value: str) -> FilterState:
    """Return a copy of *filters* without *value* in *facet*."""
    _check_facet(facet)
    if facet == "rating":
        return dataclasses.replace(filters, rating=ANY_RATING)
    remaining = tuple(v for v in getattr(filters, facet) if v != value)
    return dataclasses.replace(filters, **{facet: remaining})


def toggle_value(filters: FilterState, facet: str, value: str) -> FilterState:
    """Add *value* to a set facet, or drop it if already present.

    The rating facet holds a single value, so it is simply set.
    """
    _check_facet(facet)
    if facet == "rating":
        return dataclasses.replace(filters, rating=value)
    current = getattr(filters, facet)
    if value in current:
        return remove_filter(filters, facet, value)
    return dataclasses.replace(filters, **{facet: current + (value,)})


def clear_filters() -> FilterState:
    return FilterState()


def active_facet_counts(filters: FilterState) -> dict[str, int]:
    counts = {facet: len(getattr(filters, facet)) for facet in SET_FACETS}
    counts["rating"] = 0 if not filters.rating or filters.rating == ANY_RATING else 1
    return counts


def has_active_filters(filters: FilterState) -> bool:
    return any(active_facet_counts(filters).values())


def location_options(
    hierarchy: LocationHierarchy,
    routes: Sequence[Route],
) -> list[LocationOption]:
    """Flatten the hierarchy into picker rows with route counts.

    Counts come from the route collection, which may disagree with the
    hierarchy; a crag with no routes simply shows 0.
    """
    by_region = Counter(r.region for r in routes)
    by_area = Counter((r.region, r.area) for r in routes)
    by_crag = Counter((r.region, r.area, r.crag) for r in routes)

    options: list[LocationOption] = []
    for region in hierarchy.regions:
        options.append(LocationOption("region", region, region, None, None, by_region[region]))
        for area, crags in hierarchy.areas(region).items():
            area_count = by_area[(region, area)]
            options.append(LocationOption("area", area, region, area, None, area_count))
            options.append(LocationOption(
                "area-all", f"All routes in {area}", region, area,
                location_key(region, area, ALL_CRAGS), area_count,
            ))
            for crag in crags:
                options.append(LocationOption(
                    "crag", crag, region, area,
                    location_key(region, area, crag), by_crag[(region, area, crag)],
                ))
    return options
