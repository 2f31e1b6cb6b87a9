"""
Display lookups for decorating admin listings.

The product catalog and the user directory are owned elsewhere; this
module only reads the small set of display fields (name, image) that
the moderation queue shows next to each review.  Unknown ids resolve
to a stub carrying just the id.
"""

from typing import Any, Dict, Iterable

from ..core.db import DocumentStore


PRODUCT_COLLECTION = "products"
USER_COLLECTION = "users"


class DisplayLookup:
    """Batch lookups of product and user display fields."""

    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    def products(self, ids: Iterable[str]) -> Dict[str, Dict[str, Any]]:
        return self._lookup(PRODUCT_COLLECTION, ids, ("name", "image"))

    def users(self, ids: Iterable[str]) -> Dict[str, Dict[str, Any]]:
        return self._lookup(USER_COLLECTION, ids, ("name",))

    def _lookup(self, collection: str, ids: Iterable[str], fields: tuple) -> Dict[str, Dict[str, Any]]:
        wanted = {i for i in ids if i is not None}
        if not wanted:
            return {}
        found = {doc["id"]: doc for doc in self.store.find(collection) if doc["id"] in wanted}
        result: Dict[str, Dict[str, Any]] = {}
        for ref in wanted:
            doc = found.get(ref, {})
            result[ref] = {"id": ref, **{f: doc.get(f) for f in fields}}
        return result
