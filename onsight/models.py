"""Core data structures for the OnSight route finder."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional, Union

from onsight.config import ANY_RATING

RouteId = Union[int, str]


@dataclass(frozen=True)
class Route:
    """A single climbing route."""
    id: RouteId
    name: str
    type: str  # Boulder, Sport, Trad, Alpine, ...
    grade: str  # YDS ("5.10a") or V-scale ("V4")
    region: str
    area: str
    crag: str
    pitches: int = 1
    length_ft: float = 0.0
    stars: float = 0.0
    review_count: int = 0
    lat: Optional[float] = None
    lng: Optional[float] = None
    # ── detail view ──
    style: Optional[str] = None
    description: Optional[str] = None
    protection: Optional[str] = None
    approach_time: Optional[str] = None
    features: tuple[str, ...] = ()
    # Miles from the user; only set by rank_by_distance
    distance: Optional[float] = None

    @property
    def has_coordinates(self) -> bool:
        return self.lat is not None and self.lng is not None


@dataclass(frozen=True)
class LocationHierarchy:
    """Region -> area -> crags tree used to build location options."""
    regions: dict[str, dict[str, list[str]]] = field(default_factory=dict)

    def areas(self, region: str) -> dict[str, list[str]]:
        return self.regions.get(region, {})

    def iter_crags(self) -> Iterator[tuple[str, str, str]]:
        """Yield every (region, area, crag) path in declaration order."""
        for region in self.regions:
            for area, crags in self.areas(region).items():
                for crag in crags:
                    yield region, area, crag


@dataclass(frozen=True)
class FilterState:
    """The five filter facets. Empty facets impose no constraint."""
    locations: tuple[str, ...] = ()
    types: tuple[str, ...] = ()
    difficulties: tuple[str, ...] = ()
    lengths: tuple[str, ...] = ()
    rating: str = ANY_RATING

    def __post_init__(self) -> None:
        # Accept any iterable from callers but store tuples
        for name in ("locations", "types", "difficulties", "lengths"):
            object.__setattr__(self, name, tuple(getattr(self, name)))


@dataclass(frozen=True)
class UserLocation:
    """A user coordinate in decimal degrees."""
    lat: Optional[float]
    lng: Optional[float]

    @property
    def is_complete(self) -> bool:
        return self.lat is not None and self.lng is not None


@dataclass(frozen=True)
class FilterChip:
    """One removable active-filter value."""
    facet: str
    value: str
    label: str


@dataclass(frozen=True)
class LocationOption:
    """One selectable row in the location picker."""
    level: str  # "region", "area", "area-all" or "crag"
    label: str
    region: str
    area: Optional[str]
    key: Optional[str]  # selection key; None for non-selectable rows
    route_count: int


@dataclass
class Page:
    """A slice of a result list."""
    items: list
    page: int
    per_page: int
    total_items: int
    total_pages: int

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages
