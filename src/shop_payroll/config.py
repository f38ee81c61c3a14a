"""Configuration management for shop payroll."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv


@dataclass(frozen=True)
class AppSettings:
    """Application settings loaded from environment."""

    database_url: str
    host: str
    port: int
    debug: bool
    log_level: str
    jwt_secret: str
    jwt_expiry_minutes: int
    admin_email: str
    admin_password: str
    upload_dir: str
    cors_origins: tuple[str, ...]

    @classmethod
    def from_env(cls) -> AppSettings:
        """Load settings from environment variables."""
        load_dotenv()

        origins = os.getenv("CORS_ORIGINS", "http://localhost:5173")

        return cls(
            database_url=os.getenv(
                "DATABASE_URL",
                "sqlite+aiosqlite:///./shop_payroll.db",
            ),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            jwt_secret=os.getenv("JWT_SECRET", "default-secret-key"),
            jwt_expiry_minutes=int(os.getenv("JWT_EXPIRY_MINUTES", "1440")),
            admin_email=os.getenv("ADMIN_EMAIL", "admin@example.com"),
            admin_password=os.getenv("ADMIN_PASSWORD", "admin"),
            upload_dir=os.getenv("UPLOAD_DIR", "uploads"),
            cors_origins=tuple(o.strip() for o in origins.split(",") if o.strip()),
        )


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Get cached settings instance."""
    return AppSettings.from_env()
