"""Difficulty tier lookup and grade badge classification.

Two independent rules live here:

* ``grades_for_tier`` is the closed, enumerated table used by the difficulty
  filter. A grade matches a tier only if it is listed verbatim, so grades past
  the end of the table (5.15a, V13) never match any tier.
* ``grade_badge_difficulty`` is the numeric-threshold heuristic used for the
  coloured grade badge. It is not required to agree with the table.
"""

from __future__ import annotations

import re

_YDS_TIERS: dict[str, frozenset[str]] = {
    "beginner": frozenset({"5.6", "5.7", "5.8", "5.9"}),
    "intermediate": frozenset({"5.10a", "5.10b", "5.10c", "5.10d"}),
    "advanced": frozenset({"5.11a", "5.11b", "5.11c", "5.11d"}),
    "expert": frozenset({
        "5.12a", "5.12b", "5.12c", "5.12d",
        "5.13a", "5.13b", "5.13c", "5.13d",
        "5.14a", "5.14b", "5.14c", "5.14d",
    }),
}

_V_SCALE_TIERS: dict[str, frozenset[str]] = {
    "beginner": frozenset({"V0", "V1", "V2"}),
    "intermediate": frozenset({"V3", "V4", "V5"}),
    "advanced": frozenset({"V6", "V7", "V8"}),
    "expert": frozenset({"V9", "V10", "V11", "V12"}),
}

GRADE_TABLE: dict[str, dict[str, frozenset[str]]] = {
    "Sport": _YDS_TIERS,
    "Trad": _YDS_TIERS,
    "Alpine": _YDS_TIERS,
    "Boulder": _V_SCALE_TIERS,
}

_TIER_DESCRIPTIONS = {
    "beginner": "5.6-5.9 for Sport/Trad | V0-V2 for Boulder",
    "intermediate": "5.10a-5.10d for Sport/Trad | V3-V5 for Boulder",
    "advanced": "5.11a-5.11d for Sport/Trad | V6-V8 for Boulder",
    "expert": "5.12+ for Sport/Trad | V9+ for Boulder",
}

_LEADING_NUMBER = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)")
_LEADING_INT = re.compile(r"^\s*[+-]?\d+")


def grades_for_tier(tier: str, route_type: str) -> frozenset[str]:
    """Return the grades a route of *route_type* must have to match *tier*.

    Tier names are case-insensitive; route types are not. Unknown tiers or
    types yield an empty set.
    """
    table = GRADE_TABLE.get(route_type)
    if table is None:
        return frozenset()
    return table.get(tier.lower(), frozenset())


def tier_description(tier: str) -> str:
    return _TIER_DESCRIPTIONS.get(tier.lower(), "")


def grade_badge_difficulty(grade: str) -> str:
    """Classify a grade for its badge: beginner/intermediate/advanced/expert.

    YDS grades compare the number after ``5.`` against 10/11/12; V-scale
    grades compare the integer after ``V`` against 2/5/8. A grade whose
    number cannot be read fails every threshold and lands in ``expert``.
    Anything in neither notation is ``intermediate``.
    """
    if grade.startswith("5."):
        match = _LEADING_NUMBER.match(grade[2:])
        if match is None:
            return "expert"
        numeric = float(match.group(0))
        if numeric < 10:
            return "beginner"
        if numeric < 11:
            return "intermediate"
        if numeric < 12:
            return "advanced"
        return "expert"

    if grade.startswith("V"):
        match = _LEADING_INT.match(grade[1:])
        if match is None:
            return "expert"
        v_grade = int(match.group(0))
        if v_grade <= 2:
            return "beginner"
        if v_grade <= 5:
            return "intermediate"
        if v_grade <= 8:
            return "advanced"
        return "expert"

    return "intermediate"
