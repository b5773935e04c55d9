"""
Howl Backend — Business Response Schemas
==========================================

What:  The paginated envelope returned by GET /businesses.
Why:   Clients read camelCase keys (pageNumber, totalPages, ...). The model
       keeps snake_case attributes and serializes through aliases.

Example:
    {
        "businesses": [{"id": 1, "name": "Block 15", ...}],
        "pageNumber": 1,
        "totalPages": 3,
        "pageSize": 10,
        "totalCount": 25,
        "links": {"nextPage": "/businesses?page=2", "lastPage": "/businesses?page=3"}
    }

Business records themselves are passed through as plain dicts of column
values; the write side is governed by BUSINESS_SCHEMA, not by Pydantic.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, Field


class BusinessListResponse(BaseModel):
    businesses: List[Dict[str, Any]] = Field(description="Businesses on this page, ordered by id")
    page_number: int = Field(alias="pageNumber", description="Clamped page number")
    total_pages: int = Field(alias="totalPages", description="Number of pages (0 when empty)")
    page_size: int = Field(alias="pageSize", description="Businesses per page")
    total_count: int = Field(alias="totalCount", description="Total number of businesses")
    links: Dict[str, str] = Field(description="Links to neighbouring pages")

    model_config = {"populate_by_name": True}
