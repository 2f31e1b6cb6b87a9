"""
Service information endpoint for API v1.

``GET /info/health`` is a liveness probe for load balancers; it does
not touch the database.
"""

from typing import Dict

from fastapi import APIRouter

from storefront_api.app.core.config import settings

router = APIRouter()


@router.get("/health", response_model=Dict[str, str])
async def health() -> Dict[str, str]:
    return {"status": "ok", "version": settings.api_version}
