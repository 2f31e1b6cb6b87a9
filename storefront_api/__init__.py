"""
Top-level package for the Storefront Content API.

All functionality lives in submodules under ``app``.
"""

__all__ = []
