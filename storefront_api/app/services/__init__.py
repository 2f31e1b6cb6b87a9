"""
Service layer.

Each service encapsulates the business logic of one domain and works
against a :class:`~storefront_api.app.core.db.DocumentStore`, so API
handlers never touch storage directly.
"""
