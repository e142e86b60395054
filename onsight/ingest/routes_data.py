"""Load the bundled route collection and location hierarchy from JSON."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional, Sequence

from onsight.config import LOCATION_HIERARCHY_PATH, ROUTES_PATH
from onsight.models import LocationHierarchy, Route, RouteId

logger = logging.getLogger(__name__)

_REQUIRED_FIELDS = ("id", "name", "type", "grade", "region", "area", "crag")


def _optional_float(value) -> Optional[float]:
    return None if value is None else float(value)


def _route_from_entry(idx: int, entry: dict) -> Route:
    missing = [key for key in _REQUIRED_FIELDS if entry.get(key) is None]
    if missing:
        raise ValueError(
            f"Route record #{idx} is missing required field(s): {', '.join(missing)}"
        )
    try:
        return Route(
            id=entry["id"],
            name=entry["name"],
            type=entry["type"],
            grade=str(entry["grade"]).strip(),
            region=entry["region"],
            area=entry["area"],
            crag=entry["crag"],
            pitches=int(entry.get("pitches", 1)),
            length_ft=float(entry.get("lengthFt", 0.0)),
            stars=float(entry.get("stars", 0.0)),
            review_count=int(entry.get("reviewCount", 0)),
            lat=_optional_float(entry.get("lat")),
            lng=_optional_float(entry.get("lng")),
            style=entry.get("style"),
            description=entry.get("description"),
            protection=entry.get("protection"),
            approach_time=entry.get("approachTime"),
            features=tuple(entry.get("features", [])),
        )
    except (TypeError, ValueError) as e:
        raise ValueError(f"Route record #{idx} ({entry.get('name')!r}) is malformed: {e}") from e


def parse_routes(data) -> list[Route]:
    """Build Route objects from decoded JSON (a list or ``{"routes": [...]}``)."""
    entries = data["routes"] if isinstance(data, dict) else data
    return [_route_from_entry(idx, entry) for idx, entry in enumerate(entries)]


def load_routes(path: Path | None = None) -> list[Route]:
    """Load the route collection.

    Parameters
    ----------
    path : Path, optional
        JSON file to read. Defaults to data/routes.json.

    Raises
    ------
    ValueError
        If a record lacks a required field or has a non-numeric measure.
    """
    routes_path = path or ROUTES_PATH
    with open(routes_path, "r", encoding="utf-8") as f:
        data = json.load(f)

    routes = parse_routes(data)
    logger.info("Loaded %d routes from %s", len(routes), routes_path)
    return routes


def parse_location_hierarchy(data: dict) -> LocationHierarchy:
    regions: dict[str, dict[str, list[str]]] = {}
    for region, region_data in data.get("regions", {}).items():
        regions[region] = {
            area: list(area_data.get("crags", []))
            for area, area_data in region_data.get("areas", {}).items()
        }
    return LocationHierarchy(regions=regions)


def load_location_hierarchy(path: Path | None = None) -> LocationHierarchy:
    """Load the region → area → crag tree used for location options."""
    hierarchy_path = path or LOCATION_HIERARCHY_PATH
    with open(hierarchy_path, "r", encoding="utf-8") as f:
        data = json.load(f)

    hierarchy = parse_location_hierarchy(data)
    logger.info("Loaded %d regions from %s", len(hierarchy.regions), hierarchy_path)
    return hierarchy


def find_route(routes: Sequence[Route], route_id: RouteId) -> Optional[Route]:
    """Look up a route by id, comparing ids as strings."""
    wanted = str(route_id)
    for route in routes:
        if str(route.id) == wanted:
            return route
    return None
