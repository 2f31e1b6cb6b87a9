"""
Application package initializer.

The API is split into ``core`` (configuration, logging, storage,
security, errors), ``services`` (business logic), ``schemas``
(request and response models) and ``api`` (versioned routers).
"""

from .main import app  # noqa: F401
