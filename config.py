# config.py
import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _get_int(key: str, default: int) -> int:
    value = os.getenv(key)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"Environment variable {key} must be an integer, got {value!r}")


def _get_list(key: str, default: str) -> list:
    raw = os.getenv(key, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


class Settings:
    """Configuration from environment variables"""

    def __init__(self):
        self.environment = os.getenv("ENVIRONMENT", "development")
        self.database_url = os.getenv("DATABASE_URL", "sqlite:///./campus_marketplace.db")

        self.jwt_secret = os.getenv("JWT_SECRET", "replace_with_a_strong_secret")
        self.jwt_algorithm = "HS256"
        self.jwt_expire_minutes = _get_int("JWT_EXPIRE_MINUTES", 60 * 24 * 7)

        self.upload_dir = os.getenv("UPLOAD_DIR", "uploads")
        self.max_upload_bytes = _get_int("MAX_UPLOAD_BYTES", 10 * 1000 * 1000)

        self.cors_origins = _get_list("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000")
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


settings = Settings()
