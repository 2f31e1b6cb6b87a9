"""
Schemas shared by the admin queue endpoints.

``ListQuery`` carries the filter/search/page coordinates of a queue
request and ``Page`` is the envelope every queue returns.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, Field


ALL_STATUSES = "All"


class ListQuery(BaseModel):
    """Filter, search and page coordinates for an admin queue."""

    status_filter: str = Field(ALL_STATUSES, description="A queue status, or 'All'")
    search_term: str = Field("", description="Case-insensitive free text search")
    page: int = Field(1, description="1-based page number; values below 1 are clamped")
    page_size: int = Field(10, description="Number of items per page")


class Page(BaseModel):
    """A slice of a filtered queue."""

    items: List[Dict[str, Any]]
    total_items: int
    total_pages: int
    page: int
    page_size: int


class MessageResponse(BaseModel):
    message: str
