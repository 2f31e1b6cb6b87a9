"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables so the service runs without a separate
settings backend.  Defaults are provided for all fields.  In a
production deployment you should override these via environment
variables or a dedicated configuration service.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Storefront Content API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    # Optional path of a log file; console logging is always enabled.
    log_file: str = os.getenv("LOG_FILE", "")
    secret_key: str = os.getenv("SECRET_KEY", "change_me")
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24)))

    # Optional static token for administrator API access.  Requests
    # carrying this token in the Authorization header are treated as the
    # site administrator without decoding a JWT.
    super_admin_static_token: str = os.getenv("SUPER_ADMIN_TOKEN", "")

    # Comma‑separated list of tokens for trusted services (e.g. the
    # deployment job that pushes default site copy).  Clients presenting
    # one of these tokens are authenticated with ``bot_role``.
    bot_tokens: str = os.getenv("BOT_TOKENS", "")
    bot_role: str = os.getenv("BOT_ROLE", "admin")

    # Path to the SQLite file backing the document store.  Relative paths
    # are resolved against the project root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "storefront.db")

    # Admin queue pagination.
    default_page_size: int = int(os.getenv("DEFAULT_PAGE_SIZE", "10"))
    max_page_size: int = int(os.getenv("MAX_PAGE_SIZE", "100"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
