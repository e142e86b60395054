"""Rich CLI output for route lists and route details."""

from __future__ import annotations

import math
from typing import Sequence, Union

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from onsight.models import LocationOption, Page, Route
from onsight.query.distance import format_distance
from onsight.query.grades import grade_badge_difficulty

console = Console()

_BADGE_STYLES = {
    "beginner": "green",
    "intermediate": "yellow",
    "advanced": "dark_orange",
    "expert": "red",
}

_TYPE_EMOJI = {
    "Boulder": "🪨",
    "Sport": "🧗",
    "Trad": "⛰️",
    "Alpine": "🏔️",
}


# ── Small renderers ───────────────────────────────────────────────────

def render_stars(stars: float) -> str:
    """Five-slot star bar, e.g. 3.7 -> ★★★☆☆."""
    full = max(0, min(5, math.floor(stars)))
    return "★" * full + "☆" * (5 - full)


def type_emoji(route_type: str) -> str:
    return _TYPE_EMOJI.get(route_type, "🧗")


def _grade_badge(grade: str) -> str:
    style = _BADGE_STYLES[grade_badge_difficulty(grade)]
    return f"[bold {style}]{grade}[/bold {style}]"


def _length_text(route: Route) -> str:
    if route.pitches > 1:
        return f"{route.pitches} pitches • {route.length_ft:.0f} ft"
    return f"{route.length_ft:.0f} ft"


def _distance_text(route: Route) -> str:
    return format_distance(route.distance) if route.distance is not None else ""


# ── Output functions ──────────────────────────────────────────────────

def print_search_header(total: int, n_chips: int, search_query: str) -> None:
    """Print a summary panel for a search."""
    lines = [f"Results:  {total} routes found"]
    if search_query.strip():
        lines.insert(0, f"Search:   {search_query}")
    if n_chips:
        lines.append(f"Filters:  {n_chips} active")
    console.print(Panel("\n".join(lines), title="OnSight", border_style="blue"))


def print_route_table(page: Page, show_distance: bool = False) -> None:
    """Print one page of routes as a table."""
    table = Table(show_lines=False, header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Route")
    table.add_column("Grade")
    table.add_column("Type")
    table.add_column("Location")
    table.add_column("Length", justify="right")
    table.add_column("Rating")
    if show_distance:
        table.add_column("Distance", justify="right")

    offset = (page.page - 1) * page.per_page
    for i, route in enumerate(page.items, offset + 1):
        row = [
            str(i),
            f"[bold]{route.name}[/bold]",
            _grade_badge(route.grade),
            f"{type_emoji(route.type)} {route.type}",
            f"{route.area} > {route.crag}",
            _length_text(route),
            f"{route.stars:.1f} [yellow]{render_stars(route.stars)}[/yellow] ({route.review_count})",
        ]
        if show_distance:
            row.append(_distance_text(route))
        table.add_row(*row)

    console.print(table)


def print_page_strip(page: Page, numbers: Sequence[Union[int, str]]) -> None:
    """Print ``← 1 … 4 [5] 6 … 10 →`` style navigation."""
    if page.total_pages <= 1:
        return
    parts = ["←" if page.has_previous else "[dim]←[/dim]"]
    for n in numbers:
        parts.append(f"[reverse]{n}[/reverse]" if n == page.page else str(n))
    parts.append("→" if page.has_next else "[dim]→[/dim]")
    console.print("  ".join(parts), justify="center")


def print_route_detail(route: Route, nearby: Sequence[Route] = ()) -> None:
    """Print a full route panel with nearby routes."""
    parts: list[str] = [
        f"{_grade_badge(route.grade)}  {type_emoji(route.type)} {route.type} - {route.style or 'Various'}",
        f"{route.pitches} pitch{'es' if route.pitches > 1 else ''} • {route.length_ft:.0f} ft",
        f"{route.region} > {route.area} > {route.crag}",
    ]
    if route.has_coordinates:
        parts.append(f"[dim]{route.lat}, {route.lng}[/dim]")
    parts.append(f"Approach time: {route.approach_time or '15 mins'}")
    parts.append(
        f"[yellow]{render_stars(route.stars)}[/yellow] {route.stars:.1f}"
        f"  ({route.review_count} reviews)"
    )
    parts.append("")
    parts.append(route.description or "No description available.")

    if route.type in ("Trad", "Alpine"):
        parts.append("")
        parts.append("[bold]Protection[/bold]")
        parts.append(route.protection or "Standard trad rack recommended.")

    if nearby:
        parts.append("")
        parts.append("[bold]Nearby routes[/bold]")
        for other in nearby:
            parts.append(
                f"  {_grade_badge(other.grade)} {other.name}"
                f"  [dim]{other.crag} · {_distance_text(other)}[/dim]"
            )

    console.print(Panel("\n".join(parts), title=f"[bold]{route.name}[/bold]", border_style="green"))


def print_location_tree(options: Sequence[LocationOption]) -> None:
    """Print the region > area > crag tree with route counts and keys."""
    root = Tree("[bold]Locations[/bold]")
    region_node = area_node = None
    for opt in options:
        label = f"{opt.label} [dim]({opt.route_count})[/dim]"
        if opt.level == "region":
            region_node = root.add(f"[bold]{label}[/bold]")
        elif opt.level == "area":
            area_node = region_node.add(label)
        else:
            area_node.add(f"{label}  [cyan]{opt.key}[/cyan]")
    console.print(root)


def print_no_results(search_query: str) -> None:
    """Print a message when no routes matched."""
    hint = f" for '{search_query}'" if search_query.strip() else ""
    console.print(
        Panel(
            f"No routes found{hint}.\n"
            "Try removing a filter or broadening your search.",
            title="No Results",
            border_style="red",
        )
    )
