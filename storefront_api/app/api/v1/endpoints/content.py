"""
Website content endpoints for API v1.

These routes expose the keyed content store: blocks of site copy
addressed by slug.  Reading a block is public (the storefront renders
it); listing, writing and deleting blocks is reserved to
administrators.  An unknown slug reads as an empty object.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends

from storefront_api.app.api.deps import get_content_service
from storefront_api.app.core.security import ROLE_ADMIN, require_roles
from storefront_api.app.schemas.common import MessageResponse
from storefront_api.app.schemas.content import ContentBlockRead
from storefront_api.app.services.content_service import ContentService


router = APIRouter()


@router.get("/", response_model=List[ContentBlockRead])
async def list_content(
    service: ContentService = Depends(get_content_service),
    current_user: dict = Depends(require_roles(ROLE_ADMIN)),
) -> List[Dict[str, Any]]:
    """List all content blocks (admin only)."""
    return await service.list()


@router.get("/{slug}", response_model=Dict[str, Any])
async def get_content(
    slug: str,
    service: ContentService = Depends(get_content_service),
) -> Dict[str, Any]:
    """Return the block stored under ``slug``, or ``{}`` if none exists."""
    block = await service.get(slug)
    return block or {}


@router.put("/{slug}", response_model=ContentBlockRead)
async def put_content(
    slug: str,
    body: Dict[str, Any] = Body(...),
    service: ContentService = Depends(get_content_service),
    current_user: dict = Depends(require_roles(ROLE_ADMIN)),
) -> Dict[str, Any]:
    """Create or replace the block stored under ``slug``.

    The body may contain ``title``, ``body``, ``is_active``,
    ``metadata`` and any additional top-level values.
    """
    return await service.put(slug, body, principal=current_user)


@router.delete("/{slug}", response_model=MessageResponse)
async def delete_content(
    slug: str,
    service: ContentService = Depends(get_content_service),
    current_user: dict = Depends(require_roles(ROLE_ADMIN)),
) -> MessageResponse:
    """Delete the block stored under ``slug``; unknown slugs succeed too."""
    await service.delete(slug, principal=current_user)
    return MessageResponse(message=f"Content with slug {slug} deleted successfully")
