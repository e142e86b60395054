"""CLI entry point for the OnSight route finder."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from onsight.config import ANY_RATING, ROUTES_PER_PAGE
from onsight.ingest.routes_data import find_route, load_location_hierarchy, load_routes
from onsight.models import FilterState, UserLocation
from onsight.output.cli_formatter import (
    print_location_tree,
    print_no_results,
    print_page_strip,
    print_route_detail,
    print_route_table,
    print_search_header,
)
from onsight.query.distance import nearby_routes, rank_by_distance
from onsight.query.filters import filter_routes
from onsight.query.pagination import page_numbers, paginate
from onsight.query.selection import active_chips, location_options

app = typer.Typer(help="OnSight: search and filter climbing routes.")
console = Console()


def _setup_logging(verbose: bool) -> None:
    level = logging.INFO if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _fail(message: str) -> None:
    console.print(f"[red]Error:[/red] {escape(message)}")
    raise typer.Exit(1)


def _guarded(verbose: bool, fn, *args):
    """Run *fn*, turning any failure into an error message and exit code 1."""
    try:
        return fn(*args)
    except (OSError, ValueError) as e:
        _fail(str(e))
    except Exception as e:
        console.print(f"[red]Unexpected error:[/red] {escape(str(e))}")
        if verbose:
            console.print_exception()
        raise typer.Exit(1)


def _parse_origin(lat: Optional[float], lng: Optional[float]) -> Optional[UserLocation]:
    """Both or neither of --lat/--lng must be given."""
    if lat is None and lng is None:
        return None
    if lat is None or lng is None:
        _fail("--lat and --lng must be given together.")
    return UserLocation(lat=lat, lng=lng)


@app.command()
def search(
    query: str = typer.Option("", "--search", "-s", help="Text to match in name, area, crag, region or type"),
    location: list[str] = typer.Option([], "--location", "-l", help="Location key 'region|area|crag' or 'region|area|all' (repeatable)"),
    route_type: list[str] = typer.Option([], "--type", "-t", help="Route type: Boulder, Sport, Trad, Alpine (repeatable)"),
    difficulty: list[str] = typer.Option([], "--difficulty", "-d", help="Beginner, Intermediate, Advanced or Expert (repeatable)"),
    length: list[str] = typer.Option([], "--length", help="Length bucket: short, medium, long (repeatable)"),
    rating: str = typer.Option(ANY_RATING, "--rating", "-r", help="Minimum rating, e.g. '3+ stars'"),
    lat: Optional[float] = typer.Option(None, "--lat", help="Your latitude, to sort by distance"),
    lng: Optional[float] = typer.Option(None, "--lng", help="Your longitude, to sort by distance"),
    page: int = typer.Option(1, "--page", "-p", min=1, help="Result page"),
    per_page: int = typer.Option(ROUTES_PER_PAGE, "--per-page", min=1, help="Routes per page"),
    routes_file: Optional[Path] = typer.Option(None, "--routes-file", help="Route collection JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """Find routes matching a search and filters."""
    _setup_logging(verbose)
    origin = _parse_origin(lat, lng)

    routes = _guarded(verbose, load_routes, routes_file)

    filters = FilterState(
        locations=location,
        types=route_type,
        difficulties=difficulty,
        lengths=length,
        rating=rating,
    )
    matched = _guarded(verbose, filter_routes, routes, filters, query)
    matched = _guarded(verbose, rank_by_distance, matched, origin)

    print_search_header(len(matched), len(active_chips(filters)), query)
    if not matched:
        print_no_results(query)
        return

    result_page = paginate(matched, page, per_page)
    print_route_table(result_page, show_distance=origin is not None)
    print_page_strip(result_page, page_numbers(result_page.page, result_page.total_pages))


@app.command()
def show(
    route_id: str = typer.Argument(..., help="Route id"),
    routes_file: Optional[Path] = typer.Option(None, "--routes-file", help="Route collection JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """Show one route with the routes closest to it."""
    _setup_logging(verbose)
    routes = _guarded(verbose, load_routes, routes_file)

    route = find_route(routes, route_id)
    if route is None:
        _fail(f"No route with id '{route_id}'.")

    print_route_detail(route, _guarded(verbose, nearby_routes, route, routes))


@app.command()
def locations(
    routes_file: Optional[Path] = typer.Option(None, "--routes-file", help="Route collection JSON"),
    hierarchy_file: Optional[Path] = typer.Option(None, "--hierarchy-file", help="Location hierarchy JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """List selectable locations with route counts."""
    _setup_logging(verbose)
    routes = _guarded(verbose, load_routes, routes_file)
    hierarchy = _guarded(verbose, load_location_hierarchy, hierarchy_file)
    options = _guarded(verbose, location_options, hierarchy, routes)
    print_location_tree(options)


if __name__ == "__main__":
    app()
