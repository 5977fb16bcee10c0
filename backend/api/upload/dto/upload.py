"""Upload Data Transfer Objects."""

from pydantic import BaseModel

from api.transfers.dto.camel import CamelModel


class UploadForm(BaseModel):
    password: str = ""
    sender_email: str = ""
    receiver_email: str = ""
    transfer_name: str = ""
    message: str = ""


class IncomingFile(BaseModel):
    filename: str
    content_type: str | None = None
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


class UploadDetails(CamelModel):
    file_count: int
    total_size: int
    formatted_size: str
    expires_in: str
    transfer_name: str
    download_url: str


class UploadResponse(CamelModel):
    success: bool = True
    message: str = "Secure file transfer created successfully"
    document_id: str
    shareable_id: str
    details: UploadDetails
