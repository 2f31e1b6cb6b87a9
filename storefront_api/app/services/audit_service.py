"""
Audit service for recording and querying admin actions.

Content upserts and deletes, section updates and moderation decisions
are written to the ``audit_logs`` collection together with the acting
principal.  Only administrators should have access to read audit logs.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from ..core.db import DocumentStore
from ..core.errors import StoreError


AUDIT_COLLECTION = "audit_logs"

logger = logging.getLogger(__name__)


class AuditService:
    """Service class for writing and retrieving audit logs."""

    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    async def log(
        self,
        principal: Optional[Dict[str, Any]],
        action: str,
        object_type: str,
        object_id: Optional[str] = None,
        details: Optional[dict] = None,
    ) -> None:
        """Insert a new audit record.

        Parameters
        ----------
        principal : Optional[dict]
            The acting principal, or ``None`` for system actions.
        action : str
            Short description of the action (e.g. "upsert", "delete",
            "status").
        object_type : str
            Type of object affected (e.g. "content", "section", "review").
        object_id : Optional[str]
            Identifier (id or slug) of the affected object.
        details : Optional[dict]
            Additional structured data about the action.

        A failing audit write is logged and does not fail the action
        being audited.
        """
        record = {
            "user_id": principal.get("user_id") if principal else None,
            "action": action,
            "object_type": object_type,
            "object_id": object_id,
            "details": details,
        }
        try:
            self.store.insert(AUDIT_COLLECTION, record)
        except StoreError as exc:
            logger.warning("Could not write audit record %s %s %s: %s", action, object_type, object_id, exc)

    async def list_logs(
        self,
        object_type: Optional[str] = None,
        action: Optional[str] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> List[Dict[str, Any]]:
        """Retrieve audit records, newest first, with optional filters."""
        filters: Dict[str, Any] = {}
        if object_type:
            filters["object_type"] = object_type
        if action:
            filters["action"] = action
        logs = self.store.find(AUDIT_COLLECTION, **filters)
        logs.reverse()
        return logs[offset:offset + limit]
