"""
Top-level router for version 1 of the API.

This router aggregates the domain routers (site content, homepage
sections, reviews, returns) under a unified prefix.  When new domains
are introduced, update this file to include their routers.
"""

from fastapi import APIRouter

from .endpoints import audit, content, info, returns, reviews, sections

router = APIRouter()

router.include_router(content.router, prefix="/content", tags=["content"])
router.include_router(sections.router, prefix="/sections", tags=["sections"])
# The reviews router spells out "/reviews" in its own paths so that the
# static "/reviews/admin" route is matched before "/reviews/{review_id}".
router.include_router(reviews.router, tags=["reviews"])
router.include_router(returns.router, prefix="/returns", tags=["returns"])
router.include_router(audit.router, prefix="/audit", tags=["audit"])
router.include_router(info.router, prefix="/info", tags=["info"])
