"""
Audit log endpoints for API v1.

Administrators can read the trail of content edits, section updates
and moderation decisions, newest first, optionally filtered by object
type and action.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query

from storefront_api.app.api.deps import get_audit_service
from storefront_api.app.core.security import ROLE_ADMIN, require_roles
from storefront_api.app.services.audit_service import AuditService

router = APIRouter()


@router.get("/logs", response_model=List[Dict[str, Any]])
async def list_audit_logs(
    object_type: Optional[str] = Query(None, description="Filter by object type (content, section, review, return)"),
    action: Optional[str] = Query(None, description="Filter by action (upsert, update, delete, status)"),
    limit: int = Query(100, ge=1, le=500, description="Maximum number of logs to return"),
    offset: int = Query(0, ge=0, description="Number of logs to skip"),
    service: AuditService = Depends(get_audit_service),
    current_user: dict = Depends(require_roles(ROLE_ADMIN)),
) -> List[Dict[str, Any]]:
    return await service.list_logs(object_type=object_type, action=action, limit=limit, offset=offset)
