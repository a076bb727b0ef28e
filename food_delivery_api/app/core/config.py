"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts without any configuration; in a deployment you should
at least override ``SECRET_KEY``.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Food Delivery API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Signing material for identity tokens.  The token subject is the
    # caller identity recorded as ``owner`` on clients and items.
    secret_key: str = os.getenv("SECRET_KEY", "change_me")
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24)))
    algorithm: str = os.getenv("ALGORITHM", "HS256")

    # Path to the SQLite file holding the entity stores and the id
    # counter.  Relative paths are resolved against the package root by
    # the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "food_delivery.db")

    # Upper bound for a single serialized record, in bytes.
    max_record_size: int = int(os.getenv("MAX_RECORD_SIZE", "1024"))


# Environment variables must be set before this module is imported.
settings = Settings()
