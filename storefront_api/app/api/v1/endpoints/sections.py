"""
Homepage section endpoints for API v1.

The health benefits panel is a singleton: there is exactly one of it,
it is read by the storefront and edited by administrators through
partial updates.  A section that was never saved (or is switched off,
for the public read) is returned as an empty object.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from storefront_api.app.api.deps import get_health_benefits_section
from storefront_api.app.core.security import ROLE_ADMIN, require_roles
from storefront_api.app.schemas.section import SectionRead, SectionUpdate
from storefront_api.app.services.section_service import SectionService


router = APIRouter()


@router.get("/health-benefits", response_model=Dict[str, Any])
async def get_health_benefits(
    service: SectionService = Depends(get_health_benefits_section),
) -> Dict[str, Any]:
    """Return the active health benefits section, or ``{}``."""
    return await service.get() or {}


@router.get("/health-benefits/admin", response_model=Dict[str, Any])
async def get_health_benefits_admin(
    service: SectionService = Depends(get_health_benefits_section),
    current_user: dict = Depends(require_roles(ROLE_ADMIN)),
) -> Dict[str, Any]:
    """Return the section even when it is switched off (admin only)."""
    return await service.get(include_inactive=True) or {}


@router.put("/health-benefits", response_model=SectionRead)
async def update_health_benefits(
    data: SectionUpdate,
    service: SectionService = Depends(get_health_benefits_section),
    current_user: dict = Depends(require_roles(ROLE_ADMIN)),
) -> Dict[str, Any]:
    """Merge a partial update into the section.

    Only fields present in the body are changed.  ``items`` replaces the
    stored list; ids sent with items are ignored and reassigned.
    """
    return await service.update(data.model_dump(exclude_unset=True), principal=current_user)
