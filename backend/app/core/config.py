from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
from pydantic import field_validator
from typing import Annotated, Any, ClassVar
import json
from pathlib import Path
import os


class Settings(BaseSettings):
    model_config = SettingsConfigDict(extra="ignore", case_sensitive=True)

    API_PREFIX: str = "/api"

    # Database URL
    # Use an absolute path so running the app from different directories
    # (e.g., repo root or backend/) always resolves the same DB file.
    BASE_DIR: ClassVar[Path] = Path(__file__).resolve().parents[2]
    SQLALCHEMY_DATABASE_URL: str = f"sqlite:///{BASE_DIR / 'silverconnect.db'}"
    # Create missing tables on startup (local/dev). Production uses Alembic.
    AUTO_CREATE_SCHEMA: bool = True

    # Pool sizing for non-SQLite engines
    DB_POOL_SIZE: int = 6
    DB_MAX_OVERFLOW: int = 6
    DB_POOL_RECYCLE: int = 300
    DB_POOL_TIMEOUT: float = 5.0

    # CORS origins
    # Comma-separated or JSON list in the environment
    CORS_ORIGINS: Annotated[list[str], NoDecode] = ["http://localhost:3000", "http://localhost:5173"]

    LOG_LEVEL: str = "INFO"

    # Password hashing cost
    BCRYPT_ROUNDS: int = 11

    # Status given to a listing created by promoting an account to helper.
    # False leaves it Pending until an admin approves it.
    AUTO_APPROVE_ON_PROMOTION: bool = False

    # Defaults copied into listings generated by a promotion
    DEFAULT_SERVICE_CATEGORY: str = "Unassigned Service"
    DEFAULT_HELPER_PRICE: str = "$20/hr"
    DEFAULT_HELPER_EXPERIENCE: str = "1 Year"
    DEFAULT_HELPER_LOCATION: str = "Global"
    DEFAULT_HELPER_BIO: str = "Helper profile generated by Admin promotion."
    DEFAULT_HELPER_DESCRIPTION: str = "Generic description, please update."
    AVATAR_PLACEHOLDER_URL: str = "https://i.pravatar.cc/150?u={name}"

    # Uploads
    MAX_UPLOAD_BYTES: int = 5 * 1024 * 1024

    # SMTP email settings
    EMAIL_ENABLED: bool = False
    SMTP_HOST: str = "localhost"
    SMTP_PORT: int = 25
    SMTP_USERNAME: str = ""
    SMTP_PASSWORD: str = ""
    SMTP_FROM: str = "no-reply@localhost"

    # R2 / S3-compatible storage configuration (Cloudflare R2)
    R2_ACCOUNT_ID: str = ""
    R2_ACCESS_KEY_ID: str = ""
    R2_SECRET_ACCESS_KEY: str = ""
    R2_BUCKET: str = ""
    # Example: https://<account_id>.r2.cloudflarestorage.com or EU endpoint
    R2_S3_ENDPOINT: str = ""
    # Public custom domain for reads (e.g., https://media.example.com)
    R2_PUBLIC_BASE_URL: str = ""

    @field_validator("CORS_ORIGINS", mode="before")
    def split_origins(cls, v: Any) -> list[str]:
        """Parse comma-separated or JSON list of origins from environment."""
        if isinstance(v, str):
            try:
                parsed = json.loads(v)
                if isinstance(parsed, list):
                    return parsed
            except json.JSONDecodeError:
                pass
            return [s.strip() for s in v.split(",") if s.strip()]
        return v

    @field_validator("LOG_LEVEL", mode="before")
    def upper_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().upper()
        return v

    def placeholder_avatar(self, name: str | None) -> str:
        return self.AVATAR_PLACEHOLDER_URL.format(name=name or "")


def load_settings() -> "Settings":
    return Settings(_env_file=os.getenv("ENV_FILE", str(Path(__file__).resolve().parents[3] / ".env")))


settings = load_settings()
