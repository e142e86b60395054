#!/usr/bin/env python3
"""Report inconsistencies between the route collection and location hierarchy.

The filter engine never checks referential integrity, so this script is the
place to catch routes whose region/area/crag path is not offered in the
location picker, hierarchy crags that have no routes, and routes that cannot
appear on the map.

Usage:
    python scripts/check_data.py [--strict]

With --strict, exits 1 when any route is unreachable from the picker.
"""

from __future__ import annotations

import logging
import sys
from collections import Counter
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


def main() -> None:
    from onsight.ingest.routes_data import load_location_hierarchy, load_routes
    from onsight.query.grades import GRADE_TABLE

    strict = "--strict" in sys.argv[1:]
    routes = load_routes()
    hierarchy = load_location_hierarchy()

    known_paths = set(hierarchy.iter_crags())
    route_paths = Counter((r.region, r.area, r.crag) for r in routes)

    orphaned = [r for r in routes if (r.region, r.area, r.crag) not in known_paths]
    for r in orphaned:
        logger.warning(
            "Route %s (%s) is at %s > %s > %s, which the hierarchy does not list",
            r.id, r.name, r.region, r.area, r.crag,
        )

    for path in sorted(known_paths - set(route_paths)):
        logger.info("Crag %s has no routes", " > ".join(path))

    no_coords = [r for r in routes if not r.has_coordinates]
    for r in no_coords:
        logger.info("Route %s (%s) has no coordinates; it sorts last by distance", r.id, r.name)

    untiered = [
        r for r in routes
        if r.type in GRADE_TABLE
        and not any(r.grade in grades for grades in GRADE_TABLE[r.type].values())
    ]
    for r in untiered:
        logger.info("Route %s (%s) grade %s matches no difficulty tier", r.id, r.name, r.grade)

    unknown_types = sorted({r.type for r in routes if r.type not in GRADE_TABLE})
    if unknown_types:
        logger.info("Route types without a grade table: %s", ", ".join(unknown_types))

    print(
        f"Done. {len(routes)} routes checked: {len(orphaned)} outside the hierarchy, "
        f"{len(no_coords)} without coordinates, {len(untiered)} outside every difficulty tier."
    )
    if strict and orphaned:
        sys.exit(1)


if __name__ == "__main__":
    main()
