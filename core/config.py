"""
core/config.py -- POS backend settings, read once from the environment.

This is the only module that reads environment variables; everything else
calls get_settings(). Variable names are the upper-cased field names
(database_url -> DATABASE_URL), an optional .env file in the working
directory is honoured, and list fields take JSON
(ALLOWED_HOSTS='["pos.example.org"]').

get_settings() is wrapped in lru_cache, so the first call fixes the
configuration for the life of the process.

SECRET_KEY policy (validate_secret_key below): with DEBUG=true a random key
is generated and a warning logged; otherwise startup fails until one is set.

Layer rule: core/ is the kernel. This module may not import from api/, auth/,
catalog/, or sales/.
"""

import logging
import secrets
from functools import lru_cache
from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger("pos.config")

_DEFAULT_DB_URL = f"sqlite:///{Path(__file__).resolve().parent.parent / 'pos.db'}"


class Settings(BaseSettings):
    """Runtime configuration for the POS API and CLI.

    Every field has a default, so a bare Settings() works in tests and
    local development; only SECRET_KEY is mandatory outside DEBUG.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ------------------------------------------------------------------
    # Core
    # ------------------------------------------------------------------

    debug: bool = False
    # "" means unset; validate_secret_key replaces it or fails.
    secret_key: str = ""
    database_url: str = _DEFAULT_DB_URL

    # ------------------------------------------------------------------
    # Auth
    # ------------------------------------------------------------------

    secure_cookies: bool = False
    token_expire_seconds: int = 8 * 3600
    # bcrypt cost factor (log2 of the work rounds).
    bcrypt_rounds: int = Field(default=10, ge=4, le=16)

    # ------------------------------------------------------------------
    # Rate limits (slowapi syntax, per client IP)
    # ------------------------------------------------------------------

    login_rate_limit: str = "10/minute"
    register_rate_limit: str = "5/minute"

    # ------------------------------------------------------------------
    # HTTP
    # ------------------------------------------------------------------

    allowed_hosts: list[str] = ["localhost", "127.0.0.1", "*.localhost"]
    cors_origins: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    @model_validator(mode="after")
    def validate_secret_key(self) -> "Settings":
        """Fill in or reject SECRET_KEY.

        DEBUG=true with no key: generate one and warn. JWTs issued before a
        restart then stop validating.
        DEBUG=false with no key: raise, so a misconfigured deployment never
        signs tokens with a guessable secret.
        Any key under 32 characters is rejected.
        """
        if not self.secret_key:
            if not self.debug:
                raise ValueError(
                    "SECRET_KEY is required when DEBUG is off. "
                    "Export SECRET_KEY (32+ characters) or add it to .env; "
                    "use DEBUG=true for local development."
                )
            self.secret_key = secrets.token_hex(32)
            logger.warning("SECRET_KEY not set; generated a temporary key (DEBUG=true). Sessions end on restart.")
        if len(self.secret_key) < 32:
            raise ValueError("SECRET_KEY must be at least 32 characters long.")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide Settings, building it on first use.

    Tests that need different values construct Settings(...) directly or
    call get_settings.cache_clear().
    """
    return Settings()
