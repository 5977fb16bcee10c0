"""Application configuration."""

import os
from pathlib import Path

from fastapi import Request
from pydantic import BaseModel, Field

DEFAULT_DATA_DIR = Path(__file__).parent.parent / "data"

# Fixed transfer policy
MAX_DOWNLOADS = 3
EXPIRY_DAYS = 7
DEFAULT_STATUS = "pending"


def _env_list(name: str, default: str) -> list[str]:
    raw = os.environ.get(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


class Settings(BaseModel):
    data_dir: Path = Field(
        default_factory=lambda: Path(os.environ.get("DATA_DIR", str(DEFAULT_DATA_DIR)))
    )
    database_url: str | None = Field(default_factory=lambda: os.environ.get("DATABASE_URL"))
    max_file_size: int = Field(
        default_factory=lambda: int(os.environ.get("MAX_FILE_SIZE", 10 * 1024 * 1024))
    )
    upload_max_attempts: int = Field(
        default_factory=lambda: int(os.environ.get("UPLOAD_MAX_ATTEMPTS", 3))
    )
    upload_retry_delay: float = Field(
        default_factory=lambda: float(os.environ.get("UPLOAD_RETRY_DELAY", 1.0))
    )
    log_level: str = Field(default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO"))
    cors_origins: list[str] = Field(default_factory=lambda: _env_list("CORS_ORIGINS", "*"))

    @property
    def files_dir(self) -> Path:
        return self.data_dir / "files"

    @property
    def sqlalchemy_url(self) -> str:
        return self.database_url or f"sqlite:///{self.data_dir}/sendvault.db"


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
