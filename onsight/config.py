"""Constants and configuration for the OnSight route finder."""

from pathlib import Path

# ── Paths ──────────────────────────────────────────────────────────────
PROJECT_ROOT = Path(__file__).resolve().parent.parent
DATA_DIR = PROJECT_ROOT / "data"
ROUTES_PATH = DATA_DIR / "routes.json"
LOCATION_HIERARCHY_PATH = DATA_DIR / "location_hierarchy.json"

# ── Distance ───────────────────────────────────────────────────────────
EARTH_RADIUS_MILES = 3959
FEET_PER_MILE = 5280

# ── Facet options ──────────────────────────────────────────────────────
ROUTE_TYPES = ["Boulder", "Sport", "Trad", "Alpine"]
DIFFICULTY_TIERS = ["Beginner", "Intermediate", "Advanced", "Expert"]

ANY_RATING = "Any rating"
RATING_OPTIONS = [ANY_RATING, "2+ stars", "3+ stars", "4+ stars"]

# Length buckets on route.length_ft: label -> (min inclusive, max exclusive)
LENGTH_BUCKETS: dict[str, tuple[float | None, float | None]] = {
    "short": (None, 100.0),
    "medium": (100.0, 300.0),
    "long": (300.0, None),
}
LENGTH_LABELS: dict[str, str] = {
    "short": "Short (<100ft)",
    "medium": "Medium (100-300ft)",
    "long": "Long (300ft+)",
}

# Location keys are "region|area|crag" or "region|area|all"
LOCATION_KEY_SEPARATOR = "|"
ALL_CRAGS = "all"

# ── Listing ────────────────────────────────────────────────────────────
ROUTES_PER_PAGE = 20
MAX_PAGES_SHOWN = 5
NEARBY_ROUTES_LIMIT = 2

# ── Map markers ────────────────────────────────────────────────────────
MARKER_COLORS: dict[str, str] = {
    "boulder": "#ff6b6b",
    "sport":   "#4dabf7",
    "trad":    "#51cf66",
    "alpine":  "#9775fa",
    "tr":      "#ffd43b",
}
DEFAULT_MARKER_COLOR = "#868e96"

# ── Client geolocation policy (published to the front end) ────────────
GEOLOCATION_ENABLE_HIGH_ACCURACY = False
GEOLOCATION_TIMEOUT_MS = 10_000
GEOLOCATION_MAX_AGE_MS = 300_000  # 5 minutes
