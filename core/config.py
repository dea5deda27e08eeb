"""
core/config.py -- Centralized application configuration via pydantic-settings.

All environment variable reads for Furnishare happen here. No module should
call os.getenv() or os.environ.get() directly -- construct Settings or call
get_settings() instead.

Design patterns used:
  Singleton via lru_cache: get_settings() instantiates Settings once at first
      call and returns the cached instance on every subsequent call. asgi.py
      and main.py use it; tests build Settings(...) explicitly and hand it to
      api.main.create_app().

  BaseSettings (pydantic-settings): Reads values from environment variables
      and an optional .env file automatically. Field names map to env var names
      (e.g. jwt_secret -> JWT_SECRET). Type coercion and validation are built in.

  @model_validator(mode="after"): Cross-field validation of the signing
      secret. Startup fails closed: there is no hardcoded fallback secret.

Security notes:
  [S1] JWT_SECRET shorter than 32 chars is rejected outright. HS256 signing
       relies on key entropy -- a short key weakens every issued token.

  [S2] In production mode (DEBUG not set or false), a missing JWT_SECRET is a
       hard startup failure. With DEBUG=true a random per-process key is
       generated and a warning is logged; tokens do not survive a restart.

Layer rule: core/ is the kernel. This module may not import from api/, web/,
auth/, or catalog/.
"""

import json
import logging
import secrets
from functools import lru_cache
from typing import Annotated

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

logger = logging.getLogger("furnishare.config")

DEFAULT_DB_URL = "sqlite:///furnishare.db"


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file.

    Every field except jwt_secret has a usable default. Tests pass values as
    keyword arguments, which take priority over the environment.
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
    env: str = "development"  # "development" | "production"
    log_level: str = "INFO"

    # ------------------------------------------------------------------
    # Auth
    # ------------------------------------------------------------------

    # Empty string is the sentinel for "not configured". The model_validator
    # below either generates a dev key or raises, so callers never see "".
    jwt_secret: str = ""
    token_ttl_seconds: int = Field(default=24 * 60 * 60, gt=0)
    # bcrypt work factor. Bounded so a misconfiguration cannot make a single
    # login monopolise a worker thread for seconds.
    bcrypt_rounds: int = Field(default=12, ge=4, le=16)

    # ------------------------------------------------------------------
    # Storage
    # ------------------------------------------------------------------

    # SQLite by default; PostgreSQL is a URL change, e.g.
    # postgresql+psycopg://user:pw@host:5432/furnishare
    database_url: str = DEFAULT_DB_URL
    seed_sample_data: bool = True

    # ------------------------------------------------------------------
    # HTTP
    # ------------------------------------------------------------------

    host: str = "127.0.0.1"
    port: int = 8080
    # CORS_ORIGINS may be "http://a,http://b" or a JSON list.
    cors_origins: Annotated[list[str], NoDecode] = ["http://localhost:3000", "http://localhost"]
    serve_static: bool = False
    static_dir: str = "static"

    # ------------------------------------------------------------------
    # Validators
    # ------------------------------------------------------------------

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_cors_origins(cls, value):
        if not isinstance(value, str):
            return value
        value = value.strip()
        if value.startswith("["):
            return json.loads(value)
        return [origin.strip() for origin in value.split(",") if origin.strip()]

    @model_validator(mode="after")
    def validate_jwt_secret(self) -> "Settings":
        """Enforce the signing-secret policy [S1][S2]."""
        if not self.jwt_secret:
            if self.debug:
                self.jwt_secret = secrets.token_hex(32)
                logger.warning("Using auto-generated JWT_SECRET. Sessions will not persist across restarts.")
            else:
                raise ValueError(
                    "JWT_SECRET is required in production mode. "
                    "Set JWT_SECRET in your environment or .env file. "
                    "To run in development mode, set DEBUG=true."
                )
        if len(self.jwt_secret) < 32:
            raise ValueError("JWT_SECRET must be at least 32 characters.")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return the application Settings singleton.

    In tests: call get_settings.cache_clear() between test cases if you need
    to inject different environment variables.
    """
    return Settings()
