"""
Service layer for keyed content blocks.

Content blocks are stored in the ``content_blocks`` collection with
their slug as the natural key.  ``put`` is an upsert: pushing the same
default site copy twice leaves the store in the same state, so deploy
jobs never need to check whether a slug exists first.  Reads of an
unknown slug return ``None``; deleting an unknown slug is a no-op.
"""

import logging
import re
from typing import Any, Dict, List, Mapping, Optional

from ..core.db import RESERVED_FIELDS, DocumentStore
from ..core.errors import ValidationError
from .audit_service import AuditService


CONTENT_COLLECTION = "content_blocks"

SLUG_PATTERN = re.compile(r"^[A-Za-z0-9_.-]{1,128}$")

logger = logging.getLogger(__name__)


def validate_slug(slug: str) -> str:
    if not isinstance(slug, str) or not SLUG_PATTERN.match(slug):
        raise ValidationError(
            "Slug must be 1-128 characters of letters, digits, '_', '-' or '.'",
            field="slug",
        )
    return slug


class ContentService:
    """Get/put/list/delete content blocks by slug."""

    def __init__(self, store: DocumentStore, audit: Optional[AuditService] = None) -> None:
        self.store = store
        self.audit = audit or AuditService(store)

    async def get(self, slug: str) -> Optional[Dict[str, Any]]:
        """Return the block stored under ``slug`` or ``None``."""
        return self.store.get_by_key(CONTENT_COLLECTION, slug)

    async def list(self) -> List[Dict[str, Any]]:
        """Return all blocks in insertion order."""
        return self.store.find(CONTENT_COLLECTION)

    async def put(
        self,
        slug: str,
        fields: Mapping[str, Any],
        principal: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Create or replace the block stored under ``slug``.

        Unset fields take their defaults (``is_active`` true, empty
        ``metadata``, no ``title``/``body``).  An existing block has all
        of its mutable fields replaced.  A ``slug`` inside ``fields`` is
        ignored; the path key wins.
        """
        validate_slug(slug)
        document = self._build_document(slug, fields)
        stored = self.store.upsert_by_key(CONTENT_COLLECTION, slug, document)
        logger.info("Content block %s saved", slug)
        await self.audit.log(principal, "upsert", "content", slug, {"fields": sorted(fields.keys())})
        return stored

    async def delete(self, slug: str, principal: Optional[Dict[str, Any]] = None) -> bool:
        """Delete the block stored under ``slug``.

        Returns ``True`` if a block was removed.  An unknown slug is not
        an error.
        """
        removed = self.store.delete_by_key(CONTENT_COLLECTION, slug)
        if removed:
            logger.info("Content block %s deleted", slug)
            await self.audit.log(principal, "delete", "content", slug)
        return removed

    @staticmethod
    def _build_document(slug: str, fields: Mapping[str, Any]) -> Dict[str, Any]:
        if not isinstance(fields, Mapping):
            raise ValidationError("Content fields must be an object")
        for name in ("title", "body"):
            value = fields.get(name)
            if value is not None and not isinstance(value, str):
                raise ValidationError(f"{name} must be a string", field=name)
        is_active = fields.get("is_active")
        if is_active is None:
            is_active = True
        elif not isinstance(is_active, bool):
            raise ValidationError("is_active must be a boolean", field="is_active")
        metadata = fields.get("metadata")
        if metadata is None:
            metadata = {}
        elif not isinstance(metadata, Mapping):
            raise ValidationError("metadata must be an object", field="metadata")

        document: Dict[str, Any] = {
            k: v
            for k, v in fields.items()
            if k not in RESERVED_FIELDS and k not in ("slug", "title", "body", "is_active", "metadata")
        }
        document.update(
            slug=slug,
            title=fields.get("title"),
            body=fields.get("body"),
            is_active=is_active,
            metadata=dict(metadata),
        )
        return document
