"""
FastAPI dependencies that build request-scoped services.

Each request gets services bound to a fresh :class:`DocumentStore`;
tests can swap the store by overriding :func:`get_store`.
"""

from fastapi import Depends, Query

from ..core.config import settings
from ..core.db import DocumentStore, get_store
from ..schemas.common import ALL_STATUSES, ListQuery
from ..services.audit_service import AuditService
from ..services.content_service import ContentService
from ..services.return_service import ReturnService
from ..services.review_service import ReviewService
from ..services.section_service import HEALTH_BENEFITS, SectionService


def get_audit_service(store: DocumentStore = Depends(get_store)) -> AuditService:
    return AuditService(store)


def get_content_service(store: DocumentStore = Depends(get_store)) -> ContentService:
    return ContentService(store)


def get_health_benefits_section(store: DocumentStore = Depends(get_store)) -> SectionService:
    return SectionService(store, name=HEALTH_BENEFITS)


def get_review_service(store: DocumentStore = Depends(get_store)) -> ReviewService:
    return ReviewService(store)


def get_return_service(store: DocumentStore = Depends(get_store)) -> ReturnService:
    return ReturnService(store)


def get_list_query(
    status_filter: str = Query(ALL_STATUSES, alias="status", description="A queue status, or 'All'"),
    search: str = Query("", description="Case-insensitive free text search"),
    page: int = Query(1, description="1-based page; values below 1 are clamped"),
    page_size: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
) -> ListQuery:
    """Query parameters shared by every admin queue."""
    return ListQuery(status_filter=status_filter, search_term=search, page=page, page_size=page_size)
