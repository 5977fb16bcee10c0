"""Transfer Data Transfer Objects."""

from datetime import datetime

from pydantic import BaseModel

from api.assets.dto.asset import Asset


class NewFileEntry(BaseModel):
    asset_id: str
    title: str
    size: int
    file_type: str


class FileEntry(BaseModel):
    key: str
    title: str | None = None
    size: int | None = None
    file_type: str | None = None
    asset: Asset | None = None


class TransferRecord(BaseModel):
    id: str
    shareable_id: str
    password: str
    sender_email: str
    receiver_email: str
    transfer_name: str
    message: str = ""
    files: list[FileEntry]
    file_count: int
    total_size: int
    status: str
    download_count: int = 0
    is_downloaded: bool = False
    transfer_date: datetime
    expires_at: datetime
    last_downloaded_at: datetime | None = None
