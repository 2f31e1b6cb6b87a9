"""
Service layer for singleton homepage sections.

Each section lives in its own collection and is written under one
constant key, so the unique ``(collection, key)`` index guarantees a
single row even when two admins save the section for the first time
at once.  The service never picks "the first row it finds": if a
collection holds more than one candidate, the data is corrupt and the
operation fails with :class:`IntegrityError`.

Updates are merges at the top level and replacements below it: fields
missing from the patch stay as stored, while a supplied ``items`` list
replaces the stored list wholesale.  Item identity belongs to the
store; any ``id``/``_id`` a client sends back is dropped and fresh ids
are assigned on every save.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from pydantic import ValidationError as PydanticValidationError

from ..core.db import DocumentStore, new_id
from ..core.errors import IntegrityError, ValidationError
from ..schemas.section import SectionItem
from .audit_service import AuditService


SINGLETON_KEY = "singleton"
SECTION_FIELDS = ("title", "subtitle", "items", "is_active")
ITEM_IDENTITY_FIELDS = ("id", "_id")
HEALTH_BENEFITS = "health_benefits"

logger = logging.getLogger(__name__)


def sanitize_items(items: Any) -> List[Dict[str, Any]]:
    """Validate raw ``items`` and strip client-side identities.

    Raises :class:`ValidationError` naming the first malformed entry.
    """
    if not isinstance(items, list):
        raise ValidationError("items must be a list", field="items")
    cleaned: List[Dict[str, Any]] = []
    for index, raw in enumerate(items):
        if not isinstance(raw, Mapping):
            raise ValidationError("Each item must be an object", field=f"items[{index}]")
        data = {k: v for k, v in raw.items() if k not in ITEM_IDENTITY_FIELDS}
        try:
            item = SectionItem.model_validate(data)
        except PydanticValidationError as exc:
            reason = exc.errors()[0]
            loc = ".".join(str(part) for part in reason["loc"])
            raise ValidationError(f"{loc}: {reason['msg']}", field=f"items[{index}]") from exc
        cleaned.append(item.model_dump())
    return cleaned


class SectionService:
    """Reconciler for one singleton section.

    Parameters
    ----------
    store : DocumentStore
        Backing store.
    name : str
        Section name; the section is stored in the ``sections.<name>``
        collection under a constant key.
    """

    def __init__(
        self,
        store: DocumentStore,
        name: str = HEALTH_BENEFITS,
        audit: Optional[AuditService] = None,
    ) -> None:
        self.store = store
        self.name = name
        self.collection = f"sections.{name}"
        self.audit = audit or AuditService(store)

    async def get(self, include_inactive: bool = False) -> Optional[Dict[str, Any]]:
        """Return the section, or ``None`` if it was never saved.

        An inactive section is only returned when ``include_inactive``
        is set (the admin editor needs it, the storefront does not).
        """
        section = self._load()
        if section is None:
            return None
        if not include_inactive and not section.get("is_active", True):
            return None
        return section

    async def update(
        self,
        patch: Mapping[str, Any],
        principal: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Merge ``patch`` into the section and persist it.

        Returns the stored section including the item ids assigned by
        this save.
        """
        changes = self._validate_patch(patch)
        existing = self._load()

        document: Dict[str, Any] = {"title": "", "subtitle": "", "is_active": True, "items": []}
        if existing is not None:
            for field in SECTION_FIELDS:
                if field in existing:
                    document[field] = existing[field]
        document.update(changes)

        if existing is None:
            stored = self.store.upsert_by_key(self.collection, SINGLETON_KEY, document)
            logger.info("Section %s created", self.name)
        else:
            stored = self.store.update(self.collection, existing["id"], document)
            if stored is None:
                # Row vanished between read and write; fall back to the keyed upsert.
                stored = self.store.upsert_by_key(self.collection, SINGLETON_KEY, document)
            logger.info("Section %s updated (%s)", self.name, ", ".join(sorted(changes)) or "no changes")

        await self.audit.log(principal, "update", "section", self.name, {"fields": sorted(changes)})
        return stored

    def _load(self) -> Optional[Dict[str, Any]]:
        candidates = self.store.find(self.collection)
        if len(candidates) > 1:
            logger.error(
                "Section %s has %d rows; expected at most one (ids: %s)",
                self.name,
                len(candidates),
                ", ".join(c["id"] for c in candidates),
            )
            raise IntegrityError(f"Section {self.name} has {len(candidates)} stored rows")
        return candidates[0] if candidates else None

    @staticmethod
    def _validate_patch(patch: Mapping[str, Any]) -> Dict[str, Any]:
        if not isinstance(patch, Mapping):
            raise ValidationError("Section update must be an object")
        changes: Dict[str, Any] = {}
        for field in ("title", "subtitle"):
            if field in patch:
                value = patch[field]
                if value is None:
                    value = ""
                if not isinstance(value, str):
                    raise ValidationError(f"{field} must be a string", field=field)
                changes[field] = value
        if "is_active" in patch:
            if not isinstance(patch["is_active"], bool):
                raise ValidationError("is_active must be a boolean", field="is_active")
            changes["is_active"] = patch["is_active"]
        if "items" in patch:
            changes["items"] = [{"id": new_id(), **item} for item in sanitize_items(patch["items"])]
        return changes
