"""
API endpoints for return and replacement requests.

Customers open requests against their orders.  Administrators see two
queues over the same data: all returns, and replacements only.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, status

from storefront_api.app.api.deps import get_list_query, get_return_service
from storefront_api.app.core.security import ROLE_ADMIN, get_current_user, require_roles
from storefront_api.app.schemas.common import ListQuery
from storefront_api.app.schemas.returns import (
    ReturnCreate,
    ReturnPage,
    ReturnRead,
    ReturnStatusUpdate,
    ReturnType,
)
from storefront_api.app.services.return_service import ReturnService


router = APIRouter()


@router.post("/", response_model=ReturnRead, status_code=status.HTTP_201_CREATED)
async def create_return(
    data: ReturnCreate,
    service: ReturnService = Depends(get_return_service),
    current_user: dict = Depends(get_current_user),
) -> Dict[str, Any]:
    """Open a return or replacement request for the current user."""
    return await service.submit(data.model_dump(mode="json"), current_user)


@router.get("/admin", response_model=ReturnPage)
async def list_returns(
    type: Optional[ReturnType] = Query(None, description="Limit to 'refund' or 'replace'"),
    query: ListQuery = Depends(get_list_query),
    service: ReturnService = Depends(get_return_service),
    current_user: dict = Depends(require_roles(ROLE_ADMIN)),
):
    """Returns queue, newest request first."""
    return await service.list_queue(query, request_type=type)


@router.get("/admin/replacements", response_model=ReturnPage)
async def list_replacements(
    query: ListQuery = Depends(get_list_query),
    service: ReturnService = Depends(get_return_service),
    current_user: dict = Depends(require_roles(ROLE_ADMIN)),
):
    """Replacement requests only."""
    return await service.list_queue(query, request_type=ReturnType.REPLACE)


@router.get("/{request_id}", response_model=ReturnRead)
async def get_return(
    request_id: str,
    service: ReturnService = Depends(get_return_service),
    current_user: dict = Depends(require_roles(ROLE_ADMIN)),
) -> Dict[str, Any]:
    return await service.get(request_id)


@router.put("/{request_id}/status", response_model=ReturnRead)
async def update_return_status(
    request_id: str,
    data: ReturnStatusUpdate,
    service: ReturnService = Depends(get_return_service),
    current_user: dict = Depends(require_roles(ROLE_ADMIN)),
) -> Dict[str, Any]:
    return await service.set_status(request_id, data.status, principal=current_user)
