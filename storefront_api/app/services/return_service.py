"""
Business logic for return and replacement requests.

Requests are stored in the ``returns`` collection with a readable
``RET-`` identifier.  Refund and replacement requests follow the same
status lifecycle until pickup, then finish as ``Refunded`` or
``Completed`` respectively.  The admin queues are served by the
shared list engine.
"""

import logging
from typing import Any, Dict, Mapping, Optional

from ..core.db import DocumentStore, new_id, utcnow
from ..core.errors import InvalidTransitionError, NotFoundError, ValidationError
from ..schemas.common import ListQuery, Page
from ..schemas.returns import ReturnStatus, ReturnType
from .audit_service import AuditService
from .lifecycle import RETURN_TRANSITIONS, assert_transition, parse_status
from .list_query import paginate


RETURN_COLLECTION = "returns"
SEARCH_FIELDS = ("id", "order_id", "user_name")

# Terminal status reached after pickup, per request type.
FINAL_STATUS = {
    ReturnType.REFUND: ReturnStatus.REFUNDED,
    ReturnType.REPLACE: ReturnStatus.COMPLETED,
}

logger = logging.getLogger(__name__)


class ReturnService:
    """Service for return/replacement requests."""

    def __init__(self, store: DocumentStore, audit: Optional[AuditService] = None) -> None:
        self.store = store
        self.audit = audit or AuditService(store)

    async def submit(self, data: Mapping[str, Any], principal: Dict[str, Any]) -> Dict[str, Any]:
        """Record a new request in ``Pending`` state."""
        order_id = data.get("order_id")
        if not isinstance(order_id, str) or not order_id.strip():
            raise ValidationError("order_id is required", field="order_id")
        reason = data.get("reason")
        if not isinstance(reason, str) or not reason.strip():
            raise ValidationError("reason is required", field="reason")
        try:
            request_type = ReturnType(data.get("type"))
        except ValueError:
            raise ValidationError("type must be 'refund' or 'replace'", field="type") from None
        comments = data.get("comments")
        if comments is not None and not isinstance(comments, str):
            raise ValidationError("comments must be a string", field="comments")
        items = data.get("items") or []
        if not isinstance(items, list) or not all(isinstance(i, Mapping) for i in items):
            raise ValidationError("items must be a list of objects", field="items")

        user_id = principal.get("user_id")
        request = self.store.insert(
            RETURN_COLLECTION,
            {
                "id": f"RET-{new_id()[:8].upper()}",
                "order_id": order_id.strip(),
                "user_id": str(user_id) if user_id is not None else None,
                "user_name": principal.get("name"),
                "type": request_type.value,
                "status": ReturnStatus.PENDING.value,
                "reason": reason.strip(),
                "comments": comments,
                "items": [dict(i) for i in items],
                "request_date": utcnow(),
                "handled_by": None,
            },
        )
        logger.info("Return request %s (%s) opened for order %s", request["id"], request["type"], request["order_id"])
        return request

    async def get(self, request_id: str) -> Dict[str, Any]:
        request = self.store.get(RETURN_COLLECTION, request_id)
        if request is None:
            raise NotFoundError(f"Return request {request_id} not found", field="id")
        return request

    async def set_status(
        self,
        request_id: str,
        new_status: Any,
        principal: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        request = await self.get(request_id)
        requested = parse_status(ReturnStatus, new_status)
        current = parse_status(ReturnStatus, request["status"])
        assert_transition(RETURN_TRANSITIONS, current, requested)
        request_type = ReturnType(request["type"])
        if current == ReturnStatus.PICKED_UP and requested != FINAL_STATUS[request_type]:
            raise InvalidTransitionError(current.value, requested.value)

        request["status"] = requested.value
        request["handled_by"] = principal.get("user_id") if principal else None
        updated = self.store.update(RETURN_COLLECTION, request_id, request)
        if updated is None:
            raise NotFoundError(f"Return request {request_id} not found", field="id")
        logger.info("Return request %s moved %s → %s", request_id, current.value, requested.value)
        await self.audit.log(
            principal, "status", "return", request_id, {"from": current.value, "to": requested.value}
        )
        return updated

    async def list_queue(self, query: ListQuery, request_type: Optional[ReturnType] = None) -> Page:
        """One page of the returns queue, optionally limited to one type."""
        filters = {"type": request_type.value} if request_type else {}
        requests = self.store.find(RETURN_COLLECTION, **filters)
        return paginate(
            requests,
            query,
            statuses=[s.value for s in ReturnStatus],
            search_fields=SEARCH_FIELDS,
            timestamp_field="request_date",
        )
