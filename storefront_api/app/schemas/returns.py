"""
Pydantic schemas for return and replacement requests.

Customers ask to return items of an order either for a refund or for
a replacement.  Both kinds share one collection; the admin dashboard
shows them as two queues.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class ReturnType(str, Enum):
    REFUND = "refund"
    REPLACE = "replace"


class ReturnStatus(str, Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    PICKED_UP = "Picked Up"
    REFUNDED = "Refunded"
    COMPLETED = "Completed"
    REJECTED = "Rejected"


class ReturnCreate(BaseModel):
    """Schema for submitting a return or replacement request."""

    order_id: str = Field(..., description="Order the items belong to")
    type: ReturnType = Field(..., description="'refund' or 'replace'")
    reason: str = Field(..., description="Short reason chosen by the customer")
    comments: Optional[str] = Field(None, description="Free text from the customer")
    items: List[Dict[str, Any]] = Field(default_factory=list, description="Returned order lines")


class ReturnStatusUpdate(BaseModel):
    status: str


class ReturnRead(BaseModel):
    id: str
    order_id: str
    user_id: Optional[str]
    user_name: Optional[str] = None
    type: ReturnType
    status: ReturnStatus
    reason: str
    comments: Optional[str] = None
    items: List[Dict[str, Any]] = []
    request_date: str
    handled_by: Optional[str] = None
    updated_at: Optional[str] = None


class ReturnPage(BaseModel):
    items: List[ReturnRead]
    total_items: int
    total_pages: int
    page: int
    page_size: int
