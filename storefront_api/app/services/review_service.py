"""
Business logic for product reviews.

This service manages customer reviews: submission, the public listing
for a product page, the admin moderation queue, moderation decisions
and deletion.  Reviews are stored in the ``reviews`` collection and
reference their product and author by id only.

Lifecycle: a review is created ``Pending`` and a moderator moves it
once to ``Approved`` or ``Rejected``.  Decided reviews cannot be
re-opened; a moderator may still delete any review.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from ..core.db import DocumentStore
from ..core.errors import NotFoundError, ValidationError
from ..schemas.common import ListQuery, Page
from ..schemas.review import ReviewStatus
from .audit_service import AuditService
from .lifecycle import REVIEW_TRANSITIONS, assert_transition, parse_status
from .list_query import paginate
from .lookup_service import DisplayLookup


REVIEW_COLLECTION = "reviews"
MAX_COMMENT_LENGTH = 2000
MAX_IMAGES = 10
SEARCH_FIELDS = ("product.name", "author.name", "title", "comment")

logger = logging.getLogger(__name__)


class ReviewService:
    """Service for submitting and moderating product reviews."""

    def __init__(
        self,
        store: DocumentStore,
        lookup: Optional[DisplayLookup] = None,
        audit: Optional[AuditService] = None,
    ) -> None:
        self.store = store
        self.lookup = lookup or DisplayLookup(store)
        self.audit = audit or AuditService(store)

    async def submit(self, data: Mapping[str, Any], author_id: Optional[str]) -> Dict[str, Any]:
        """Create a new review in ``Pending`` state.

        Validates the rating range (1..5), the required comment and the
        image list before anything is written.
        """
        product_id = data.get("product_id")
        if not isinstance(product_id, str) or not product_id.strip():
            raise ValidationError("product_id is required", field="product_id")

        rating = data.get("rating")
        if isinstance(rating, bool) or not isinstance(rating, int) or not 1 <= rating <= 5:
            raise ValidationError("Rating must be an integer between 1 and 5", field="rating")

        comment = data.get("comment")
        if not isinstance(comment, str) or not comment.strip():
            raise ValidationError("Comment is required", field="comment")
        comment = comment.strip()
        if len(comment) > MAX_COMMENT_LENGTH:
            raise ValidationError(f"Comment must be {MAX_COMMENT_LENGTH} characters or fewer", field="comment")

        title = data.get("title")
        if title is not None:
            if not isinstance(title, str):
                raise ValidationError("title must be a string", field="title")
            title = title.strip() or None

        images = data.get("images") or []
        if not isinstance(images, list) or not all(isinstance(url, str) and url.strip() for url in images):
            raise ValidationError("images must be a list of URLs", field="images")
        if len(images) > MAX_IMAGES:
            raise ValidationError(f"At most {MAX_IMAGES} images are allowed", field="images")

        review = self.store.insert(
            REVIEW_COLLECTION,
            {
                "author_id": str(author_id) if author_id is not None else None,
                "product_id": product_id.strip(),
                "rating": rating,
                "title": title,
                "comment": comment,
                "images": [url.strip() for url in images],
                "status": ReviewStatus.PENDING.value,
                "moderated_by": None,
            },
        )
        logger.info("User %s submitted review %s for product %s", author_id, review["id"], review["product_id"])
        return review

    async def get(self, review_id: str) -> Dict[str, Any]:
        review = self.store.get(REVIEW_COLLECTION, review_id)
        if review is None:
            raise NotFoundError(f"Review {review_id} not found", field="id")
        return review

    async def set_status(
        self,
        review_id: str,
        new_status: Any,
        principal: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Apply a moderation decision.

        Raises
        ------
        NotFoundError
            If the review does not exist.
        ValidationError
            If ``new_status`` is not a review status.
        InvalidTransitionError
            If the review was already decided.
        """
        review = await self.get(review_id)
        requested = parse_status(ReviewStatus, new_status)
        current = parse_status(ReviewStatus, review["status"])
        assert_transition(REVIEW_TRANSITIONS, current, requested)

        review["status"] = requested.value
        review["moderated_by"] = principal.get("user_id") if principal else None
        updated = self.store.update(REVIEW_COLLECTION, review_id, review)
        if updated is None:
            raise NotFoundError(f"Review {review_id} not found", field="id")
        logger.info("Review %s moved %s → %s by %s", review_id, current.value, requested.value, review["moderated_by"])
        await self.audit.log(
            principal, "status", "review", review_id, {"from": current.value, "to": requested.value}
        )
        return updated

    async def delete(self, review_id: str, principal: Optional[Dict[str, Any]] = None) -> None:
        """Permanently delete a review, whatever its status."""
        review = await self.get(review_id)
        if not self.store.delete(REVIEW_COLLECTION, review_id):
            raise NotFoundError(f"Review {review_id} not found", field="id")
        logger.info("Review %s (%s) deleted", review_id, review["status"])
        await self.audit.log(principal, "delete", "review", review_id, {"status": review["status"]})

    async def list_for_moderation(self, query: ListQuery) -> Page:
        """Return one page of the moderation queue.

        Reviews are decorated with ``product`` and ``author`` display
        fields before filtering so that searches match product and
        customer names.
        """
        reviews = self.store.find(REVIEW_COLLECTION)
        products = self.lookup.products(r["product_id"] for r in reviews)
        authors = self.lookup.users(r["author_id"] for r in reviews)
        decorated = [
            {
                **r,
                "product": products.get(r["product_id"], {"id": r["product_id"]}),
                "author": authors.get(r["author_id"], {"id": r["author_id"]}),
            }
            for r in reviews
        ]
        return paginate(
            decorated,
            query,
            statuses=[s.value for s in ReviewStatus],
            search_fields=SEARCH_FIELDS,
            timestamp_field="created_at",
        )

    async def list_for_product(self, product_id: str) -> List[Dict[str, Any]]:
        """Approved reviews of one product, newest first."""
        reviews = self.store.find(REVIEW_COLLECTION, product_id=product_id, status=ReviewStatus.APPROVED.value)
        reviews.reverse()
        return sorted(reviews, key=lambda r: r["created_at"], reverse=True)
