"""
Endpoint subpackage for API v1.

Each module defines an APIRouter for one domain (content, sections,
reviews, returns).  The routers are aggregated in ``router.py``.
"""
