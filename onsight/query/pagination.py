"""Result paging for route lists."""

from __future__ import annotations

import math
from typing import Sequence, Union

from onsight.config import MAX_PAGES_SHOWN, ROUTES_PER_PAGE
from onsight.models import Page

ELLIPSIS = "..."


def paginate(items: Sequence, page: int = 1, per_page: int = ROUTES_PER_PAGE) -> Page:
    """Slice *items* into the requested page, clamping *page* into range."""
    if per_page < 1:
        raise ValueError(f"per_page must be positive, got {per_page}")
    total_pages = math.ceil(len(items) / per_page)
    page = max(1, min(page, total_pages)) if total_pages else 1
    start = (page - 1) * per_page
    return Page(
        items=list(items[start:start + per_page]),
        page=page,
        per_page=per_page,
        total_items=len(items),
        total_pages=total_pages,
    )


def page_numbers(current: int, total: int, max_shown: int = MAX_PAGES_SHOWN) -> list[Union[int, str]]:
    """Page links to show, e.g. ``[1, "...", 4, 5, 6, "...", 10]``.

    Short lists show every page. Longer ones keep the first and last pages
    plus a window of one page either side of *current*.
    """
    if total <= max_shown:
        return list(range(1, total + 1))

    pages: list[Union[int, str]] = [1]
    start = max(2, current - 1)
    end = min(total - 1, current + 1)
    if start > 2:
        pages.append(ELLIPSIS)
    pages.extend(range(start, end + 1))
    if end < total - 1:
        pages.append(ELLIPSIS)
    pages.append(total)
    return pages
