"""
Howl Backend — Page Number Pagination
=======================================

What:  Turns (total item count, requested page) into a clamped page window.
Why:   List endpoints accept any `page` the client sends; out-of-range values
       are clamped rather than rejected, and the response carries links to
       the neighbouring pages.
How:   Pure arithmetic. `paginate` never touches the database; the caller
       runs `LIMIT page.limit OFFSET page.offset` itself.

Example (25 items, 10 per page):
    paginate(25, 1)  → page 1, offset 0,  links {nextPage, lastPage}
    paginate(25, 3)  → page 3, offset 20, links {prevPage, firstPage}
    paginate(25, 99) → page 3 (clamped)
    paginate(0, 5)   → page 1, last_page 0, no links
"""

import math
from typing import Any, Dict

from pydantic import BaseModel, Field

DEFAULT_PAGE_SIZE = 10


class Page(BaseModel):
    """Clamped page window plus the metadata list responses expose."""

    page: int = Field(ge=1, description="Clamped page number")
    last_page: int = Field(ge=0, description="Total number of pages (0 when empty)")
    page_size: int = Field(ge=1, description="Items per page")
    total_count: int = Field(ge=0, description="Total number of items")
    offset: int = Field(ge=0, description="Rows to skip before this page")
    links: Dict[str, str] = Field(default_factory=dict, description="Neighbouring page links")

    @property
    def limit(self) -> int:
        return self.page_size


def coerce_page(value: Any) -> int:
    """
    Interpret a raw `page` query value.

    Integers pass through; numeric strings are parsed; anything else
    (missing, empty, "abc", "2.5") becomes page 1.
    """
    if isinstance(value, bool):
        return 1
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return 1


def page_link(base_path: str, page: int) -> str:
    return f"{base_path}?page={page}"


def paginate(
    total_count: int,
    requested_page: Any = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
    base_path: str = "",
) -> Page:
    """
    Compute the page window for `requested_page`.

    Args:
        total_count:    Number of items in the whole collection (>= 0)
        requested_page: Raw page value from the client (any type)
        page_size:      Items per page
        base_path:      Path the navigation links point at, e.g. "/businesses"

    Returns:
        Page with `page` in [1, max(1, last_page)].
    """
    if page_size < 1:
        raise ValueError("page_size must be at least 1")
    total_count = max(int(total_count), 0)

    last_page = math.ceil(total_count / page_size)
    page = coerce_page(requested_page)
    page = min(page, max(last_page, 1))
    page = max(page, 1)

    links: Dict[str, str] = {}
    if page < last_page:
        links["nextPage"] = page_link(base_path, page + 1)
        links["lastPage"] = page_link(base_path, last_page)
    if page > 1:
        links["prevPage"] = page_link(base_path, page - 1)
        links["firstPage"] = page_link(base_path, 1)

    return Page(
        page=page,
        last_page=last_page,
        page_size=page_size,
        total_count=total_count,
        offset=(page - 1) * page_size,
        links=links,
    )
