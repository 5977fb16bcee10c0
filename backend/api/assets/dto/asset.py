"""Asset Data Transfer Objects."""

from datetime import datetime

from pydantic import BaseModel


class Asset(BaseModel):
    id: str
    original_filename: str
    filepath: str
    size: int
    mime_type: str | None = None
    created_at: datetime | None = None
