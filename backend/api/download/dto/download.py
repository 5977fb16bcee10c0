"""Download Data Transfer Objects."""

from dataclasses import dataclass
from datetime import datetime

from api.transfers.dto.camel import CamelModel
from api.transfers.dto.transfer import TransferRecord


class DownloadRequest(CamelModel):
    password: str | None = None


class FileInfo(CamelModel):
    title: str | None = None
    size: int
    formatted_size: str
    mime_type: str
    original_filename: str | None = None


class TransferInfo(CamelModel):
    success: bool = True
    id: str
    transfer_name: str
    sender_email: str
    receiver_email: str
    file_count: int
    total_size: int
    formatted_size: str
    transfer_date: datetime
    expires_at: datetime
    download_count: int
    files: list[FileInfo]
    requires_password: bool = True
    download_url: str


@dataclass
class DownloadResult:
    archive: bytes
    filename: str
    transfer: TransferRecord
