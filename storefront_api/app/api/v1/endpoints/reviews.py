"""
API endpoints for product reviews.

Signed-in customers submit reviews; the storefront lists approved
reviews per product.  Administrators work the moderation queue:
filter and search it, approve or reject pending reviews and delete
reviews outright.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, status

from storefront_api.app.api.deps import get_list_query, get_review_service
from storefront_api.app.core.security import ROLE_ADMIN, get_current_user, require_roles
from storefront_api.app.schemas.common import ListQuery, MessageResponse
from storefront_api.app.schemas.review import (
    ReviewCreate,
    ReviewPage,
    ReviewRead,
    ReviewStatusUpdate,
)
from storefront_api.app.services.review_service import ReviewService


router = APIRouter()


@router.post(
    "/reviews",
    response_model=ReviewRead,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a review",
)
async def create_review(
    data: ReviewCreate,
    service: ReviewService = Depends(get_review_service),
    current_user: dict = Depends(get_current_user),
) -> Dict[str, Any]:
    """Create a new review for a product.

    The review starts in ``Pending`` state and is not shown on the
    storefront until a moderator approves it.
    """
    return await service.submit(data.model_dump(), author_id=current_user.get("user_id"))


@router.get(
    "/reviews/product/{product_id}",
    response_model=List[ReviewRead],
    summary="Approved reviews of a product",
)
async def list_product_reviews(
    product_id: str,
    service: ReviewService = Depends(get_review_service),
) -> List[Dict[str, Any]]:
    return await service.list_for_product(product_id)


@router.get(
    "/reviews/admin",
    response_model=ReviewPage,
    summary="Moderation queue",
)
async def list_reviews_for_moderation(
    query: ListQuery = Depends(get_list_query),
    service: ReviewService = Depends(get_review_service),
    current_user: dict = Depends(require_roles(ROLE_ADMIN)),
):
    """List reviews for moderation, newest first, one page at a time.

    ``search`` matches product name, customer name, title or comment.
    """
    return await service.list_for_moderation(query)


@router.get(
    "/reviews/{review_id}",
    response_model=ReviewRead,
    summary="Get a single review",
)
async def get_review(
    review_id: str,
    service: ReviewService = Depends(get_review_service),
    current_user: dict = Depends(require_roles(ROLE_ADMIN)),
) -> Dict[str, Any]:
    return await service.get(review_id)


@router.put(
    "/reviews/{review_id}/status",
    response_model=ReviewRead,
    summary="Approve or reject a review",
)
async def update_review_status(
    review_id: str,
    data: ReviewStatusUpdate,
    service: ReviewService = Depends(get_review_service),
    current_user: dict = Depends(require_roles(ROLE_ADMIN)),
) -> Dict[str, Any]:
    """Apply a moderation decision.

    Returns 404 for an unknown review and 409 when the review was
    already approved or rejected.
    """
    return await service.set_status(review_id, data.status, principal=current_user)


@router.delete(
    "/reviews/{review_id}",
    response_model=MessageResponse,
    summary="Delete a review",
)
async def delete_review(
    review_id: str,
    service: ReviewService = Depends(get_review_service),
    current_user: dict = Depends(require_roles(ROLE_ADMIN)),
) -> MessageResponse:
    """Permanently delete a review, whatever its status."""
    await service.delete(review_id, principal=current_user)
    return MessageResponse(message="Review deleted")
