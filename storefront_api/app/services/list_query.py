"""
Shared filtering, search and pagination for admin queues.

Every admin list view (review moderation, returns, replacements)
runs its records through :func:`paginate` so they all agree on how a
status filter, a free-text search and page boundaries behave:

* a record matches when the status filter is ``"All"`` or equals the
  record's status, and the search term is empty or a case-insensitive
  substring of one of the searchable fields;
* matches are sorted newest first *before* slicing so page boundaries
  stay stable;
* ``page`` is 1-based, values below 1 are clamped, pages past the end
  are empty.
"""

import math
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from ..core.errors import ValidationError
from ..schemas.common import ALL_STATUSES, ListQuery, Page


def resolve_field(record: Mapping[str, Any], path: str) -> Any:
    """Read a possibly dotted ``path`` (``"product.name"``) from a record."""
    value: Any = record
    for part in path.split("."):
        if not isinstance(value, Mapping):
            return None
        value = value.get(part)
    return value


def matches(
    record: Mapping[str, Any],
    query: ListQuery,
    search_fields: Sequence[str],
    status_field: str = "status",
) -> bool:
    if query.status_filter != ALL_STATUSES and record.get(status_field) != query.status_filter:
        return False
    term = query.search_term.strip().lower()
    if not term:
        return True
    for path in search_fields:
        value = resolve_field(record, path)
        if value is not None and term in str(value).lower():
            return True
    return False


def paginate(
    records: Iterable[Dict[str, Any]],
    query: ListQuery,
    *,
    statuses: Iterable[str],
    search_fields: Sequence[str],
    timestamp_field: str = "created_at",
    status_field: str = "status",
) -> Page:
    """Filter, sort and slice ``records`` according to ``query``.

    Parameters
    ----------
    records : iterable of dict
        Candidate records, in any order.
    query : ListQuery
        Status filter, search term and page coordinates.
    statuses : iterable of str
        The closed set of statuses valid for this queue; ``"All"`` is
        always accepted in addition.
    search_fields : sequence of str
        Field paths searched by ``query.search_term``.
    timestamp_field : str
        Field holding the ISO creation/request timestamp used for
        newest-first ordering.

    Raises
    ------
    ValidationError
        If the status filter is not in ``statuses`` or the page size is
        not positive.
    """
    allowed = set(statuses)
    if query.status_filter != ALL_STATUSES and query.status_filter not in allowed:
        raise ValidationError(
            f"Unknown status filter {query.status_filter!r}; expected 'All' or one of {sorted(allowed)}",
            field="status_filter",
        )
    if query.page_size < 1:
        raise ValidationError("page_size must be at least 1", field="page_size")

    found = [r for r in records if matches(r, query, search_fields, status_field)]
    # Reversed first so that records sharing a timestamp keep newest-inserted first.
    found = sorted(reversed(found), key=lambda r: _sort_key(r, timestamp_field), reverse=True)

    page = max(query.page, 1)
    total_items = len(found)
    total_pages = math.ceil(total_items / query.page_size)
    start = (page - 1) * query.page_size
    items: List[Dict[str, Any]] = found[start:start + query.page_size]
    return Page(
        items=items,
        total_items=total_items,
        total_pages=total_pages,
        page=page,
        page_size=query.page_size,
    )


def _sort_key(record: Mapping[str, Any], field: str) -> str:
    value: Optional[Any] = resolve_field(record, field)
    return "" if value is None else str(value)
