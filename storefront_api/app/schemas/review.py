"""
Pydantic schemas for product reviews.

Customers submit reviews for products; every review starts as
``Pending`` and is approved or rejected once by a moderator.  These
schemas define the payloads and response shapes used in the API.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class ReviewStatus(str, Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class ReviewCreate(BaseModel):
    """Schema for submitting a review.

    ``rating`` is taken as sent: type, range and emptiness checks are left
    to the service so that every caller gets the same validation errors.
    """

    product_id: str = Field(..., description="Identifier of the reviewed product")
    rating: Any = Field(..., description="Rating from 1 to 5")
    title: Optional[str] = Field(None, description="Optional headline")
    comment: str = Field(..., description="Review text")
    images: List[str] = Field(default_factory=list, description="Image URLs")


class ReviewStatusUpdate(BaseModel):
    """Schema for a moderation decision."""

    status: str = Field(..., description="'Approved' or 'Rejected'")


class ReviewRead(BaseModel):
    """Schema for reading a review."""

    id: str
    author_id: Optional[str]
    product_id: str
    rating: int
    title: Optional[str] = None
    comment: str
    images: List[str] = []
    status: ReviewStatus
    moderated_by: Optional[str] = None
    created_at: str
    updated_at: Optional[str] = None


class ReviewAdminRead(ReviewRead):
    """Review decorated with product and author display fields."""

    product: Dict[str, Any] = {}
    author: Dict[str, Any] = {}


class ReviewPage(BaseModel):
    items: List[ReviewAdminRead]
    total_items: int
    total_pages: int
    page: int
    page_size: int
