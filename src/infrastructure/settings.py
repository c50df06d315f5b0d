"""Application settings loaded from environment variables via Pydantic."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class AppSettings(BaseSettings):
    """Central configuration for the password hashing service.

    Hash defaults only shape newly created hashes; stored hashes always
    carry their own parameters.
    """

    model_config = {"env_prefix": "PASSHASH_", "case_sensitive": False}

    # Argon2 defaults
    argon2_time_cost: int = 2
    argon2_memory_cost: int = 19456  # KiB
    argon2_parallelism: int = 1
    argon2_hash_len: int = Field(default=32, ge=4)
    argon2_salt_len: int = Field(default=16, ge=16)

    # Bcrypt defaults
    bcrypt_work_factor: int = 12

    # Logging
    log_level: str = "INFO"

    # CORS
    cors_origins: str = "*"


def get_settings() -> AppSettings:
    """Return the application settings singleton."""
    return AppSettings()
