"""
Pydantic schemas for keyed content blocks.

A content block is a piece of site copy (top bar text, about section,
policy page...) addressed by a human-assigned slug.  Besides the
common fields, callers may attach extra top-level values (for example
``value`` for a one-line announcement); these are stored and returned
as given.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class ContentBlockRead(BaseModel):
    """Schema for reading a content block."""

    model_config = ConfigDict(extra="allow")

    slug: str
    title: Optional[str] = None
    body: Optional[str] = None
    is_active: bool = True
    metadata: Dict[str, Any] = Field(default_factory=dict)
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
