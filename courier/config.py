"""
Courier Records Configuration
"""
import os
from functools import lru_cache
from typing import List

from dotenv import load_dotenv

# Load .env file
load_dotenv()


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Application settings loaded from environment variables"""

    def __init__(self):
        # Database
        self.database_url: str = os.getenv("DATABASE_URL", "sqlite:///./logistics.db")
        self.db_echo: bool = _env_bool("DB_ECHO")

        # Auth
        self.jwt_secret: str = os.getenv("JWT_SECRET", "courier-records-secret-change-in-production")
        self.jwt_algorithm: str = os.getenv("JWT_ALGORITHM", "HS256")
        self.access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24)))
        self.bcrypt_rounds: int = int(os.getenv("BCRYPT_ROUNDS", "10"))

        # Upload
        self.max_upload_mb: int = int(os.getenv("MAX_UPLOAD_MB", "10"))

        # App
        self.app_env: str = os.getenv("APP_ENV", "development")
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO")
        self.cors_origins: List[str] = [
            origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()
        ]

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
