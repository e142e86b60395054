"""FastAPI web app for the OnSight route finder."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional, Union
from urllib.parse import urlencode

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel
from shapely.geometry import Point, mapping

from onsight.config import (
    ANY_RATING,
    DEFAULT_MARKER_COLOR,
    DIFFICULTY_TIERS,
    GEOLOCATION_ENABLE_HIGH_ACCURACY,
    GEOLOCATION_MAX_AGE_MS,
    GEOLOCATION_TIMEOUT_MS,
    LENGTH_LABELS,
    MARKER_COLORS,
    RATING_OPTIONS,
    ROUTE_TYPES,
    ROUTES_PER_PAGE,
)
from onsight.ingest.routes_data import find_route, load_location_hierarchy, load_routes
from onsight.models import FilterChip, FilterState, LocationHierarchy, Route, UserLocation
from onsight.query.distance import format_distance, nearby_routes, rank_by_distance
from onsight.query.filters import count_matches, filter_routes
from onsight.query.grades import grade_badge_difficulty, tier_description
from onsight.query.pagination import page_numbers, paginate
from onsight.query.selection import (
    active_chips,
    active_facet_counts,
    clear_filters,
    has_active_filters,
    location_options,
    remove_filter,
    toggle_value,
)

logger = logging.getLogger(__name__)

# FilterState facet -> query parameter name
_FACET_PARAMS = (
    ("locations", "location"),
    ("types", "type"),
    ("difficulties", "difficulty"),
    ("lengths", "length"),
)

# ── Shared datasets (loaded once, read-only afterwards) ─────────────
_routes: list[Route] | None = None
_hierarchy: LocationHierarchy | None = None


def _get_data() -> tuple[list[Route], LocationHierarchy]:
    """Return the route collection and location hierarchy, loading on first use."""
    global _routes, _hierarchy
    if _routes is None or _hierarchy is None:
        _routes = load_routes()
        _hierarchy = load_location_hierarchy()
        logger.info("Datasets loaded: %d routes, %d regions", len(_routes), len(_hierarchy.regions))
    return _routes, _hierarchy


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s: %(message)s")
    logger.info("Starting OnSight web app")
    yield


app = FastAPI(title="OnSight", version="0.1.0", lifespan=lifespan)


# ── Pydantic response models ────────────────────────────────────────


class RouteOut(BaseModel):
    id: Union[int, str]
    name: str
    type: str
    grade: str
    badge: str
    region: str
    area: str
    crag: str
    pitches: int
    length_ft: float
    stars: float
    review_count: int
    lat: Optional[float] = None
    lng: Optional[float] = None
    distance: Optional[float] = None
    distance_label: Optional[str] = None
    features: list[str] = []


class RouteDetailOut(RouteOut):
    style: Optional[str] = None
    description: Optional[str] = None
    protection: Optional[str] = None
    approach_time: Optional[str] = None
    nearby: list[RouteOut] = []


class ChipOut(BaseModel):
    facet: str
    value: str
    label: str
    remove_url: str


class RouteSearchResponse(BaseModel):
    total: int
    page: int
    per_page: int
    total_pages: int
    page_numbers: list[Union[int, str]]
    chips: list[ChipOut]
    facet_counts: dict[str, int]
    has_filters: bool
    clear_url: str
    routes: list[RouteOut]


class FilterStateOut(BaseModel):
    locations: list[str]
    types: list[str]
    difficulties: list[str]
    lengths: list[str]
    rating: str


class ToggleResponse(BaseModel):
    filters: FilterStateOut
    count: int
    facet_counts: dict[str, int]
    routes_url: str


class CountResponse(BaseModel):
    count: int


class LocationOptionOut(BaseModel):
    level: str
    label: str
    region: str
    area: Optional[str]
    key: Optional[str]
    route_count: int


class TierOut(BaseModel):
    level: str
    description: str


class LengthOut(BaseModel):
    value: str
    label: str


class FilterOptionsOut(BaseModel):
    types: list[str]
    difficulties: list[TierOut]
    lengths: list[LengthOut]
    ratings: list[str]


class GeolocationPolicyOut(BaseModel):
    enableHighAccuracy: bool
    timeout: int
    maximumAge: int


# ── Serialization helpers ────────────────────────────────────────────


def _serialize_route(route: Route) -> RouteOut:
    return RouteOut(
        id=route.id,
        name=route.name,
        type=route.type,
        grade=route.grade,
        badge=grade_badge_difficulty(route.grade),
        region=route.region,
        area=route.area,
        crag=route.crag,
        pitches=route.pitches,
        length_ft=route.length_ft,
        stars=route.stars,
        review_count=route.review_count,
        lat=route.lat,
        lng=route.lng,
        distance=round(route.distance, 3) if route.distance is not None else None,
        distance_label=format_distance(route.distance) if route.distance is not None else None,
        features=list(route.features),
    )


def _serialize_detail(route: Route, nearby: list[Route]) -> RouteDetailOut:
    return RouteDetailOut(
        **_serialize_route(route).model_dump(),
        style=route.style,
        description=route.description,
        protection=route.protection,
        approach_time=route.approach_time,
        nearby=[_serialize_route(r) for r in nearby],
    )


def _search_url(filters: FilterState, q: str = "") -> str:
    """The /api/routes URL that reproduces *filters* and *q*."""
    params: list[tuple[str, str]] = []
    if q:
        params.append(("q", q))
    for facet, param in _FACET_PARAMS:
        params.extend((param, value) for value in getattr(filters, facet))
    if filters.rating and filters.rating != ANY_RATING:
        params.append(("rating", filters.rating))
    query = urlencode(params)
    return f"/api/routes?{query}" if query else "/api/routes"


def _serialize_chip(chip: FilterChip, filters: FilterState, q: str) -> ChipOut:
    return ChipOut(
        facet=chip.facet,
        value=chip.value,
        label=chip.label,
        remove_url=_search_url(remove_filter(filters, chip.facet, chip.value), q),
    )


def _serialize_filters(filters: FilterState) -> FilterStateOut:
    return FilterStateOut(
        locations=list(filters.locations),
        types=list(filters.types),
        difficulties=list(filters.difficulties),
        lengths=list(filters.lengths),
        rating=filters.rating,
    )


def _marker_feature(route: Route) -> dict:
    """GeoJSON feature for one route; popups link to the detail endpoint."""
    return {
        "type": "Feature",
        "geometry": mapping(Point(route.lng, route.lat)),
        "properties": {
            "id": route.id,
            "name": route.name,
            "grade": route.grade,
            "type": route.type,
            "stars": route.stars,
            "color": MARKER_COLORS.get(route.type.lower(), DEFAULT_MARKER_COLOR),
            "detail_url": f"/api/routes/{route.id}",
        },
    }


def _build_filters(
    location: Optional[list[str]],
    type_: Optional[list[str]],
    difficulty: Optional[list[str]],
    length: Optional[list[str]],
    rating: str,
) -> FilterState:
    return FilterState(
        locations=location or (),
        types=type_ or (),
        difficulties=difficulty or (),
        lengths=length or (),
        rating=rating,
    )


# ── API endpoints ────────────────────────────────────────────────────


@app.get("/api/routes", response_model=RouteSearchResponse)
async def search_routes(
    q: str = "",
    location: Optional[list[str]] = Query(None),
    type: Optional[list[str]] = Query(None),
    difficulty: Optional[list[str]] = Query(None),
    length: Optional[list[str]] = Query(None),
    rating: str = ANY_RATING,
    lat: Optional[float] = Query(None, ge=-90, le=90),
    lng: Optional[float] = Query(None, ge=-180, le=180),
    page: int = Query(1, ge=1),
    per_page: int = Query(ROUTES_PER_PAGE, ge=1, le=100),
):
    """Filter, optionally rank by distance, and page the route collection."""
    routes, _ = _get_data()
    filters = _build_filters(location, type, difficulty, length, rating)

    matched = filter_routes(routes, filters, q)
    matched = rank_by_distance(matched, UserLocation(lat, lng))
    result = paginate(matched, page, per_page)

    return RouteSearchResponse(
        total=result.total_items,
        page=result.page,
        per_page=result.per_page,
        total_pages=result.total_pages,
        page_numbers=page_numbers(result.page, result.total_pages),
        chips=[_serialize_chip(c, filters, q) for c in active_chips(filters)],
        facet_counts=active_facet_counts(filters),
        has_filters=has_active_filters(filters),
        clear_url=_search_url(clear_filters(), q),
        routes=[_serialize_route(r) for r in result.items],
    )


@app.get("/api/routes/count", response_model=CountResponse)
async def count_routes(
    q: str = "",
    location: Optional[list[str]] = Query(None),
    type: Optional[list[str]] = Query(None),
    difficulty: Optional[list[str]] = Query(None),
    length: Optional[list[str]] = Query(None),
    rating: str = ANY_RATING,
):
    """Live result count for a draft filter state."""
    routes, _ = _get_data()
    filters = _build_filters(location, type, difficulty, length, rating)
    return CountResponse(count=count_matches(routes, filters, q))


@app.get("/api/filters/toggle", response_model=ToggleResponse)
async def toggle_filter(
    facet: str,
    value: str,
    q: str = "",
    location: Optional[list[str]] = Query(None),
    type: Optional[list[str]] = Query(None),
    difficulty: Optional[list[str]] = Query(None),
    length: Optional[list[str]] = Query(None),
    rating: str = ANY_RATING,
):
    """Flip one facet value in a draft filter state and report the new count."""
    routes, _ = _get_data()
    filters = _build_filters(location, type, difficulty, length, rating)
    try:
        toggled = toggle_value(filters, facet, value)
    except ValueError as e:
        raise HTTPException(400, str(e))
    return ToggleResponse(
        filters=_serialize_filters(toggled),
        count=count_matches(routes, toggled, q),
        facet_counts=active_facet_counts(toggled),
        routes_url=_search_url(toggled, q),
    )


@app.get("/api/routes/{route_id}", response_model=RouteDetailOut)
async def route_detail(route_id: str):
    """One route plus the routes closest to it."""
    routes, _ = _get_data()
    route = find_route(routes, route_id)
    if route is None:
        raise HTTPException(404, f"No route with id '{route_id}'")
    return _serialize_detail(route, nearby_routes(route, routes))


@app.get("/api/locations", response_model=list[LocationOptionOut])
async def get_locations():
    """Location picker rows with route counts."""
    routes, hierarchy = _get_data()
    return [
        LocationOptionOut(
            level=opt.level,
            label=opt.label,
            region=opt.region,
            area=opt.area,
            key=opt.key,
            route_count=opt.route_count,
        )
        for opt in location_options(hierarchy, routes)
    ]


@app.get("/api/filters", response_model=FilterOptionsOut)
async def get_filter_options():
    """Selectable values for every filter facet."""
    return FilterOptionsOut(
        types=ROUTE_TYPES,
        difficulties=[TierOut(level=t, description=tier_description(t)) for t in DIFFICULTY_TIERS],
        lengths=[LengthOut(value=v, label=label) for v, label in LENGTH_LABELS.items()],
        ratings=RATING_OPTIONS,
    )


@app.get("/api/markers")
async def get_markers(
    q: str = "",
    location: Optional[list[str]] = Query(None),
    type: Optional[list[str]] = Query(None),
    difficulty: Optional[list[str]] = Query(None),
    length: Optional[list[str]] = Query(None),
    rating: str = ANY_RATING,
):
    """GeoJSON markers for the filtered routes that have coordinates."""
    routes, _ = _get_data()
    filters = _build_filters(location, type, difficulty, length, rating)
    matched = filter_routes(routes, filters, q)
    return {
        "type": "FeatureCollection",
        "features": [_marker_feature(r) for r in matched if r.has_coordinates],
    }


@app.get("/api/geolocation-policy", response_model=GeolocationPolicyOut)
async def get_geolocation_policy():
    """Options the front end should pass to the browser geolocation API."""
    return GeolocationPolicyOut(
        enableHighAccuracy=GEOLOCATION_ENABLE_HIGH_ACCURACY,
        timeout=GEOLOCATION_TIMEOUT_MS,
        maximumAge=GEOLOCATION_MAX_AGE_MS,
    )
