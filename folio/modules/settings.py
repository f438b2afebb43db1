"""
Process Settings

Immutable configuration loaded once at startup and shared by every request.
"""
import os
import logging
import secrets
from dataclasses import dataclass, field
from datetime import timedelta
from functools import lru_cache
from typing import List
from dotenv import load_dotenv

logger = logging.getLogger("folio.settings")

DEFAULT_DATABASE_URL = "postgresql://localhost:5432/folio"


@dataclass(frozen=True)
class Settings:
    """Configuration values; never mutated after construction."""
    database_url: str
    jwt_secret: str
    jwt_algorithm: str = "HS256"
    token_ttl: timedelta = timedelta(hours=24)
    bcrypt_rounds: int = 10
    cors_origins: List[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables (and a .env file if present)."""
        load_dotenv()

        jwt_secret = os.getenv("JWT_SECRET")
        if not jwt_secret:
            # In PROD, this must be set explicitly.
            logger.warning("JWT_SECRET not set. Generating a temporary one; issued tokens die with the process.")
            jwt_secret = secrets.token_urlsafe(32)

        try:
            ttl_hours = float(os.getenv("TOKEN_TTL_HOURS", "24"))
            rounds = int(os.getenv("BCRYPT_ROUNDS", "10"))
        except ValueError as e:
            raise ValueError(f"Invalid numeric setting: {e}")

        origins = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

        return cls(
            database_url=os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL),
            jwt_secret=jwt_secret,
            token_ttl=timedelta(hours=ttl_hours),
            bcrypt_rounds=rounds,
            cors_origins=origins or ["*"],
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""
    return Settings.from_env()
