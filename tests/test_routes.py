"""Tests for the OnSight route finder.

Unit tests for grading, filtering, distance ranking, selection helpers,
pagination and data loading. Everything runs on small in-memory fixtures.
"""

from __future__ import annotations

import itertools
import json

import pytest

from onsight.config import ANY_RATING, EARTH_RADIUS_MILES
from onsight.ingest.routes_data import (
    find_route,
    load_location_hierarchy,
    load_routes,
    parse_location_hierarchy,
)
from onsight.models import FilterChip, FilterState, LocationHierarchy, Route, UserLocation
from onsight.query.distance import (
    calculate_distance,
    format_distance,
    nearby_routes,
    rank_by_distance,
)
from onsight.query.filters import (
    count_matches,
    filter_routes,
    matches_lengths,
    min_stars_for_rating,
    parse_location_key,
)
from onsight.query.grades import grade_badge_difficulty, grades_for_tier, tier_description
from onsight.query.pagination import ELLIPSIS, page_numbers, paginate
from onsight.query.selection import (
    active_chips,
    active_facet_counts,
    clear_filters,
    has_active_filters,
    location_options,
    remove_filter,
    toggle_value,
)


def _route(id, **kwargs) -> Route:
    defaults = dict(
        name=f"Route {id}",
        type="Sport",
        grade="5.9",
        region="Yosemite",
        area="Valley",
        crag="Swan Slab",
        pitches=1,
        length_ft=80,
        stars=3.0,
        review_count=10,
        lat=37.74,
        lng=-119.60,
    )
    defaults.update(kwargs)
    return Route(id=id, **defaults)


ROUTES = [
    _route(1, name="The Nose", type="Trad", grade="5.14a", crag="El Capitan",
           pitches=31, length_ft=2900, stars=4.9),
    _route(2, name="Snake Dike", type="Trad", grade="5.7", crag="Half Dome",
           pitches=8, length_ft=800, stars=4.6),
    _route(3, name="Swan Slab Aid", type="Sport", grade="5.9", length_ft=60, stars=2.4),
    _route(4, name="Cathedral SE Buttress", type="Alpine", grade="5.6", area="Tuolumne",
           crag="Cathedral Peak", length_ft=700, stars=3.0),
    _route(5, name="Iron Man Traverse", type="Boulder", grade="V4", region="Eastern Sierra",
           area="Bishop", crag="Buttermilks", length_ft=15, stars=4.2, lat=37.33, lng=-118.58),
    _route(6, name="Evilution", type="Boulder", grade="V13", region="Eastern Sierra",
           area="Bishop", crag="Buttermilks", length_ft=40, stars=4.8, lat=37.33, lng=-118.58),
    _route(7, name="Gorgeous Gorge", type="Sport", grade="5.15a", region="Eastern Sierra",
           area="Bishop", crag="Owens River Gorge", length_ft=110, stars=2.0, lat=None, lng=None),
    _route(8, name="Illusion Dweller", type="Trad", grade="5.10b", region="Joshua Tree",
           area="Hidden Valley", crag="Echo Cove", length_ft=100, stars=4.4, lat=34.03, lng=-116.16),
    _route(9, name="Black Wall Direct", type="Sport", grade="5.12b", region="Lake Tahoe",
           area="Donner Summit", crag="Black Wall", pitches=3, length_ft=300, stars=2.99,
           lat=39.32, lng=-120.33),
]

HIERARCHY = LocationHierarchy(regions={
    "Yosemite": {
        "Valley": ["El Capitan", "Half Dome", "Swan Slab"],
        "Tuolumne": ["Cathedral Peak", "Lembert Dome"],
    },
    "Eastern Sierra": {"Bishop": ["Buttermilks", "Owens River Gorge"]},
})


def _ids(routes) -> list:
    return [r.id for r in routes]


# ═══════════════════════════════════════════════════════════════════════
# Grade table
# ═══════════════════════════════════════════════════════════════════════


class TestGradesForTier:
    def test_yds_tiers_shared_by_roped_types(self):
        for route_type in ("Sport", "Trad", "Alpine"):
            assert grades_for_tier("Beginner", route_type) == {"5.6", "5.7", "5.8", "5.9"}

    def test_intermediate_yds(self):
        assert grades_for_tier("Intermediate", "Trad") == {"5.10a", "5.10b", "5.10c", "5.10d"}

    def test_expert_yds_ends_at_5_14d(self):
        expert = grades_for_tier("Expert", "Sport")
        assert "5.12a" in expert
        assert "5.14d" in expert
        assert "5.15a" not in expert
        assert len(expert) == 12

    def test_boulder_uses_v_scale(self):
        assert grades_for_tier("Advanced", "Boulder") == {"V6", "V7", "V8"}
        assert "V12" in grades_for_tier("Expert", "Boulder")
        assert "V13" not in grades_for_tier("Expert", "Boulder")

    def test_tier_case_insensitive(self):
        assert grades_for_tier("beginner", "Sport") == grades_for_tier("BEGINNER", "Sport")

    def test_unknown_tier_or_type_is_empty(self):
        assert grades_for_tier("Legendary", "Sport") == frozenset()
        assert grades_for_tier("Expert", "TR") == frozenset()

    def test_tier_description(self):
        assert "V0-V2" in tier_description("Beginner")
        assert tier_description("Legendary") == ""


class TestGradeBadge:
    @pytest.mark.parametrize("grade,expected", [
        ("5.6", "beginner"),
        ("5.9+", "beginner"),
        ("5.10a", "intermediate"),
        ("5.11d", "advanced"),
        ("5.12a", "expert"),
        ("5.15a", "expert"),
        ("V0", "beginner"),
        ("V2", "beginner"),
        ("V5", "intermediate"),
        ("V8", "advanced"),
        ("V13", "expert"),
    ])
    def test_thresholds(self, grade, expected):
        assert grade_badge_difficulty(grade) == expected

    def test_unknown_notation_is_intermediate(self):
        assert grade_badge_difficulty("WI4") == "intermediate"
        assert grade_badge_difficulty("") == "intermediate"

    def test_unreadable_number_is_expert(self):
        assert grade_badge_difficulty("5.?") == "expert"
        assert grade_badge_difficulty("V-easy") == "expert"

    def test_badge_and_filter_tables_are_independent(self):
        # Badge calls 5.15a expert, but no filter tier lists it
        assert grade_badge_difficulty("5.15a") == "expert"
        assert not any(
            "5.15a" in grades_for_tier(tier, "Sport")
            for tier in ("Beginner", "Intermediate", "Advanced", "Expert")
        )


# ═══════════════════════════════════════════════════════════════════════
# Filter engine
# ═══════════════════════════════════════════════════════════════════════


class TestFilterIdentity:
    def test_empty_filters_return_everything(self):
        assert filter_routes(ROUTES, FilterState(), "") == ROUTES

    def test_whitespace_search_is_no_search(self):
        assert filter_routes(ROUTES, FilterState(), "   ") == ROUTES

    def test_returns_new_list(self):
        result = filter_routes(ROUTES, FilterState())
        assert result is not ROUTES

    def test_input_not_mutated(self):
        routes = list(ROUTES)
        filter_routes(routes, FilterState(types=["Boulder"]), "evil")
        assert routes == ROUTES


class TestSearch:
    def test_name_case_insensitive(self):
        assert _ids(filter_routes(ROUTES, FilterState(), "NOSE")) == [1]

    def test_matches_area_crag_region_and_type(self):
        assert _ids(filter_routes(ROUTES, FilterState(), "tuolumne")) == [4]
        assert _ids(filter_routes(ROUTES, FilterState(), "buttermilks")) == [5, 6]
        assert _ids(filter_routes(ROUTES, FilterState(), "joshua")) == [8]
        assert _ids(filter_routes(ROUTES, FilterState(), "boulder")) == [5, 6]

    def test_no_match(self):
        assert filter_routes(ROUTES, FilterState(), "zzz") == []


class TestLocationFilter:
    def test_area_all_ignores_crag(self):
        result = filter_routes(ROUTES, FilterState(locations=["Yosemite|Valley|all"]))
        assert _ids(result) == [1, 2, 3]
        assert all(r.region == "Yosemite" and r.area == "Valley" for r in result)

    def test_specific_crag(self):
        result = filter_routes(ROUTES, FilterState(locations=["Yosemite|Valley|Half Dome"]))
        assert _ids(result) == [2]

    def test_or_across_keys(self):
        filters = FilterState(locations=["Yosemite|Tuolumne|all", "Joshua Tree|Hidden Valley|Echo Cove"])
        assert _ids(filter_routes(ROUTES, filters)) == [4, 8]

    def test_malformed_key_matches_nothing(self):
        assert filter_routes(ROUTES, FilterState(locations=["Yosemite|Valley"])) == []
        assert filter_routes(ROUTES, FilterState(locations=[""])) == []

    def test_parse_location_key(self):
        assert parse_location_key("a|b|c") == ("a", "b", "c")
        assert parse_location_key("a|b|c|d") == ("a", "b", "c")
        assert parse_location_key("a|b") is None


class TestTypeFilter:
    def test_only_selected_types(self):
        result = filter_routes(ROUTES, FilterState(types=["Boulder", "Alpine"]))
        assert all(r.type in {"Boulder", "Alpine"} for r in result)
        assert _ids(result) == [4, 5, 6]

    def test_type_is_case_sensitive(self):
        assert filter_routes(ROUTES, FilterState(types=["boulder"])) == []


class TestDifficultyFilter:
    def test_exact_membership_not_range(self):
        # 5.15a is harder than any listed grade but is not in the Expert list
        result = filter_routes(ROUTES, FilterState(difficulties=["Expert"]))
        assert 7 not in _ids(result)
        assert _ids(result) == [1, 9]

    def test_v13_matches_no_tier(self):
        result = filter_routes(ROUTES, FilterState(difficulties=["Beginner", "Intermediate", "Advanced", "Expert"]))
        assert 6 not in _ids(result)

    def test_tier_uses_route_type_table(self):
        result = filter_routes(ROUTES, FilterState(difficulties=["intermediate"]))
        assert _ids(result) == [5, 8]

    def test_unknown_tier_contributes_nothing(self):
        result = filter_routes(ROUTES, FilterState(difficulties=["Legendary", "Beginner"]))
        assert _ids(result) == [2, 3, 4]


class TestLengthFilter:
    def test_bucket_boundaries(self):
        assert matches_lengths(_route(1, length_ft=99), ["short"])
        assert not matches_lengths(_route(1, length_ft=100), ["short"])
        assert matches_lengths(_route(1, length_ft=100), ["medium"])
        assert matches_lengths(_route(1, length_ft=299), ["medium"])
        assert not matches_lengths(_route(1, length_ft=300), ["medium"])
        assert matches_lengths(_route(1, length_ft=300), ["long"])

    def test_or_across_buckets(self):
        result = filter_routes(ROUTES, FilterState(lengths=["short", "long"]))
        assert _ids(result) == [1, 2, 3, 4, 5, 6, 9]

    def test_pitch_labels_not_recognised(self):
        assert filter_routes(ROUTES, FilterState(lengths=["1 pitch", "6+ pitches"])) == []


class TestRatingFilter:
    def test_min_stars_inclusive(self):
        result = filter_routes(ROUTES, FilterState(rating="3+ stars"))
        assert all(r.stars >= 3 for r in result)
        assert 4 in _ids(result)  # exactly 3.0
        assert 9 not in _ids(result)  # 2.99

    def test_any_rating_is_no_constraint(self):
        assert filter_routes(ROUTES, FilterState(rating=ANY_RATING)) == ROUTES

    def test_unreadable_rating_matches_nothing(self):
        assert filter_routes(ROUTES, FilterState(rating="lots of stars")) == []

    def test_min_stars_for_rating(self):
        assert min_stars_for_rating("4+ stars") == 4
        assert min_stars_for_rating("2+") == 2
        assert min_stars_for_rating("stars") is None


class TestFacetComposition:
    FACETS = [
        FilterState(locations=["Yosemite|Valley|all", "Eastern Sierra|Bishop|all"]),
        FilterState(types=["Trad", "Sport", "Boulder"]),
        FilterState(difficulties=["Beginner", "Intermediate", "Expert"]),
        FilterState(lengths=["short", "long"]),
        FilterState(rating="2+ stars"),
    ]

    def test_combined_equals_intersection(self):
        combined = FilterState(
            locations=self.FACETS[0].locations,
            types=self.FACETS[1].types,
            difficulties=self.FACETS[2].difficulties,
            lengths=self.FACETS[3].lengths,
            rating=self.FACETS[4].rating,
        )
        expected = set(_ids(filter_routes(ROUTES, combined, "a")))
        individual = [set(_ids(filter_routes(ROUTES, f, "a"))) for f in self.FACETS]
        assert expected == set.intersection(*individual)

    def test_application_order_does_not_matter(self):
        results = set()
        for order in itertools.permutations(self.FACETS):
            routes = filter_routes(ROUTES, FilterState(), "a")
            for facet in order:
                routes = filter_routes(routes, facet)
            results.add(frozenset(_ids(routes)))
        assert len(results) == 1

    def test_count_matches(self):
        assert count_matches(ROUTES, FilterState(types=["Boulder"])) == 2
        assert count_matches(ROUTES, FilterState(), "nose") == 1


# ═══════════════════════════════════════════════════════════════════════
# Distance
# ═══════════════════════════════════════════════════════════════════════


class TestCalculateDistance:
    def test_same_point(self):
        assert calculate_distance(37.0, -119.0, 37.0, -119.0) == 0.0

    def test_one_degree_latitude(self):
        # One degree of arc on a 3959 mile sphere
        dist = calculate_distance(37.0, -119.0, 38.0, -119.0)
        assert abs(dist - EARTH_RADIUS_MILES * 3.141592653589793 / 180) < 1e-6

    def test_symmetry(self):
        d1 = calculate_distance(37.0, -119.0, 34.0, -116.0)
        d2 = calculate_distance(34.0, -116.0, 37.0, -119.0)
        assert abs(d1 - d2) < 1e-9

    def test_antipodal_points(self):
        # Half the circumference; rounding must not break the square roots
        dist = calculate_distance(0.08, 0.0, -0.08, 180.0)
        assert dist == pytest.approx(3.141592653589793 * EARTH_RADIUS_MILES, rel=1e-6)

    def test_antipodal_route_ranks(self):
        ranked = rank_by_distance([_route("far", lat=-0.08, lng=180.0)], UserLocation(0.08, 0.0))
        assert ranked[0].distance == pytest.approx(3.141592653589793 * EARTH_RADIUS_MILES, rel=1e-6)

    def test_known_distance(self):
        # Yosemite Valley to Bishop: roughly 75 miles as the crow flies
        dist = calculate_distance(37.7456, -119.5936, 37.3614, -118.3997)
        assert 65 < dist < 80


class TestRankByDistance:
    def test_no_origin_is_identity(self):
        assert rank_by_distance(ROUTES, None) is ROUTES
        assert all(r.distance is None for r in ROUTES)

    def test_incomplete_origin_is_identity(self):
        assert rank_by_distance(ROUTES, UserLocation(37.0, None)) is ROUTES

    def test_sorted_ascending(self):
        near = _route("a", lat=37.0, lng=-119.0)
        far = _route("b", lat=38.0, lng=-120.0)
        ranked = rank_by_distance([far, near], UserLocation(37.0, -119.0))
        assert _ids(ranked) == ["a", "b"]
        assert ranked[0].distance == pytest.approx(0.0)
        assert ranked[1].distance > 0

    def test_missing_coordinates_sort_last(self):
        ranked = rank_by_distance(ROUTES, UserLocation(37.74, -119.60))
        assert ranked[-1].id == 7
        assert ranked[-1].distance is None
        distances = [r.distance for r in ranked[:-1]]
        assert distances == sorted(distances)

    def test_input_routes_untouched(self):
        rank_by_distance(ROUTES, UserLocation(37.74, -119.60))
        assert all(r.distance is None for r in ROUTES)

    def test_zero_coordinate_origin_is_valid(self):
        ranked = rank_by_distance([_route(1, lat=1.0, lng=1.0)], UserLocation(0.0, 0.0))
        assert ranked[0].distance > 0

    def test_ties_keep_input_order(self):
        a = _route("a", lat=37.0, lng=-119.0)
        b = _route("b", lat=37.0, lng=-119.0)
        ranked = rank_by_distance([b, a], UserLocation(36.0, -119.0))
        assert _ids(ranked) == ["b", "a"]


class TestNearbyRoutes:
    def test_excludes_self_and_unlocated(self):
        nose = ROUTES[0]
        nearby = nearby_routes(nose, ROUTES)
        assert len(nearby) == 2
        assert nose.id not in _ids(nearby)
        assert 7 not in _ids(nearby)
        assert nearby[0].distance <= nearby[1].distance

    def test_route_without_coordinates(self):
        assert nearby_routes(ROUTES[6], ROUTES) == []


class TestFormatDistance:
    def test_under_a_mile_in_feet(self):
        assert format_distance(0.5) == "2640 ft"
        assert format_distance(0.0) == "0 ft"

    def test_one_decimal_under_ten(self):
        assert format_distance(5.25) == "5.3 mi"
        assert format_distance(1.0) == "1.0 mi"

    def test_whole_miles_from_ten(self):
        assert format_distance(15) == "15 mi"
        assert format_distance(10.5) == "11 mi"


# ═══════════════════════════════════════════════════════════════════════
# Selection helpers
# ═══════════════════════════════════════════════════════════════════════


class TestChips:
    def test_no_chips_for_empty_state(self):
        assert active_chips(FilterState()) == []

    def test_labels_and_order(self):
        filters = FilterState(
            locations=["Yosemite|Valley|all"],
            types=["Trad"],
            difficulties=["beginner"],
            lengths=["medium", "odd"],
            rating="3+",
        )
        assert active_chips(filters) == [
            FilterChip("locations", "Yosemite|Valley|all", "Yosemite|Valley|all"),
            FilterChip("types", "Trad", "Trad"),
            FilterChip("difficulties", "beginner", "Beginner"),
            FilterChip("lengths", "medium", "Medium (100-300ft)"),
            FilterChip("lengths", "odd", "odd"),
            FilterChip("rating", "3+", "3+ stars"),
        ]


class TestEditFilters:
    def test_remove_value(self):
        filters = FilterState(types=["Trad", "Sport"])
        assert remove_filter(filters, "types", "Trad").types == ("Sport",)

    def test_remove_rating_resets_sentinel(self):
        assert remove_filter(FilterState(rating="4+ stars"), "rating", "4+ stars").rating == ANY_RATING

    def test_unknown_facet_raises(self):
        with pytest.raises(ValueError, match="Unknown filter facet"):
            remove_filter(FilterState(), "colour", "red")

    def test_toggle_adds_then_removes(self):
        once = toggle_value(FilterState(), "difficulties", "Expert")
        assert once.difficulties == ("Expert",)
        assert toggle_value(once, "difficulties", "Expert") == FilterState()

    def test_toggle_rating_sets_value(self):
        assert toggle_value(FilterState(), "rating", "2+ stars").rating == "2+ stars"

    def test_counts_and_clear(self):
        filters = FilterState(types=["Trad", "Sport"], rating="2+ stars")
        counts = active_facet_counts(filters)
        assert counts["types"] == 2
        assert counts["rating"] == 1
        assert counts["locations"] == 0
        assert has_active_filters(filters)
        assert not has_active_filters(clear_filters())

    def test_filter_state_accepts_lists(self):
        assert FilterState(types=["Trad"]) == FilterState(types=("Trad",))


class TestLocationOptions:
    def test_rows_and_counts(self):
        options = location_options(HIERARCHY, ROUTES)
        by_label = {(o.level, o.label): o for o in options}
        assert by_label[("region", "Yosemite")].route_count == 4
        assert by_label[("area", "Valley")].route_count == 3
        assert by_label[("area-all", "All routes in Valley")].key == "Yosemite|Valley|all"
        assert by_label[("crag", "Half Dome")].key == "Yosemite|Valley|Half Dome"
        assert by_label[("crag", "Lembert Dome")].route_count == 0

    def test_keys_select_their_routes(self):
        for opt in location_options(HIERARCHY, ROUTES):
            if opt.key is None:
                continue
            assert count_matches(ROUTES, FilterState(locations=[opt.key])) == opt.route_count

    def test_region_order_follows_hierarchy(self):
        regions = [o.label for o in location_options(HIERARCHY, ROUTES) if o.level == "region"]
        assert regions == ["Yosemite", "Eastern Sierra"]

    def test_region_without_areas(self):
        options = location_options(LocationHierarchy(regions={"Empty": {}}), ROUTES)
        assert [(o.level, o.label, o.route_count) for o in options] == [("region", "Empty", 0)]

    def test_area_rows_follow_hierarchy_areas(self):
        options = location_options(HIERARCHY, ROUTES)
        for region in HIERARCHY.regions:
            areas = [o.label for o in options if o.level == "area" and o.region == region]
            assert areas == list(HIERARCHY.areas(region))


# ═══════════════════════════════════════════════════════════════════════
# Pagination
# ═══════════════════════════════════════════════════════════════════════


class TestPaginate:
    def test_middle_and_last_page(self):
        items = list(range(45))
        page = paginate(items, 2, 20)
        assert page.items == list(range(20, 40))
        assert page.total_pages == 3
        assert page.has_previous and page.has_next
        last = paginate(items, 3, 20)
        assert last.items == list(range(40, 45))
        assert not last.has_next

    def test_out_of_range_clamped(self):
        assert paginate(list(range(45)), 99, 20).page == 3
        assert paginate(list(range(45)), 0, 20).page == 1

    def test_empty(self):
        page = paginate([], 1, 20)
        assert page.items == []
        assert page.page == 1
        assert page.total_pages == 0

    def test_bad_page_size(self):
        with pytest.raises(ValueError):
            paginate([1, 2], 1, 0)


class TestPageNumbers:
    def test_short_list_shows_all(self):
        assert page_numbers(1, 3) == [1, 2, 3]
        assert page_numbers(2, 5) == [1, 2, 3, 4, 5]

    def test_first_page(self):
        assert page_numbers(1, 10) == [1, 2, ELLIPSIS, 10]

    def test_middle_page(self):
        assert page_numbers(5, 10) == [1, ELLIPSIS, 4, 5, 6, ELLIPSIS, 10]

    def test_last_page(self):
        assert page_numbers(10, 10) == [1, ELLIPSIS, 9, 10]

    def test_no_ellipsis_next_to_edges(self):
        assert page_numbers(3, 6) == [1, 2, 3, 4, ELLIPSIS, 6]


# ═══════════════════════════════════════════════════════════════════════
# Data loading
# ═══════════════════════════════════════════════════════════════════════


class TestLoadRoutes:
    def _write(self, tmp_path, data):
        path = tmp_path / "routes.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    def test_camel_case_fields(self, tmp_path):
        path = self._write(tmp_path, [{
            "id": 1, "name": "A", "type": "Sport", "grade": " 5.9 ", "region": "R",
            "area": "A", "crag": "C", "pitches": 2, "lengthFt": 120, "stars": 3.5,
            "reviewCount": 7, "lat": 37.0, "lng": -119.0, "approachTime": "5 mins",
            "features": ["Crimpy"],
        }])
        route = load_routes(path)[0]
        assert route.grade == "5.9"
        assert route.length_ft == 120.0
        assert route.review_count == 7
        assert route.approach_time == "5 mins"
        assert route.features == ("Crimpy",)
        assert route.distance is None

    def test_wrapped_list_and_missing_coordinates(self, tmp_path):
        path = self._write(tmp_path, {"routes": [{
            "id": "x", "name": "A", "type": "Boulder", "grade": "V1",
            "region": "R", "area": "A", "crag": "C",
        }]})
        route = load_routes(path)[0]
        assert route.lat is None and route.lng is None
        assert not route.has_coordinates
        assert route.pitches == 1

    def test_missing_required_field(self, tmp_path):
        path = self._write(tmp_path, [{"id": 1, "name": "A", "type": "Sport"}])
        with pytest.raises(ValueError, match="missing required field"):
            load_routes(path)

    def test_non_numeric_measure(self, tmp_path):
        path = self._write(tmp_path, [{
            "id": 1, "name": "A", "type": "Sport", "grade": "5.9", "region": "R",
            "area": "A", "crag": "C", "lengthFt": "tall",
        }])
        with pytest.raises(ValueError, match="malformed"):
            load_routes(path)

    def test_bundled_dataset(self):
        routes = load_routes()
        assert routes
        assert len({str(r.id) for r in routes}) == len(routes)

    def test_find_route_compares_as_strings(self):
        assert find_route(ROUTES, "3").name == "Swan Slab Aid"
        assert find_route(ROUTES, 999) is None


class TestLoadHierarchy:
    def test_parse(self):
        hierarchy = parse_location_hierarchy({
            "regions": {"R": {"areas": {"A": {"crags": ["C1", "C2"]}}}},
        })
        assert hierarchy.regions == {"R": {"A": ["C1", "C2"]}}
        assert list(hierarchy.iter_crags()) == [("R", "A", "C1"), ("R", "A", "C2")]
        assert hierarchy.areas("missing") == {}

    def test_bundled_hierarchy(self):
        hierarchy = load_location_hierarchy()
        assert "Yosemite" in hierarchy.regions
