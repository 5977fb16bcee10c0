"""Upload controller: creates a password-protected transfer from a multipart form."""

from fastapi import APIRouter, Depends, File, Form, UploadFile

from api.assets.repositories.assets_repository import safe_filename
from api.upload.dto.upload import IncomingFile, UploadDetails, UploadForm, UploadResponse
from api.upload.services import upload_service
from config import EXPIRY_DAYS, Settings, get_settings
from formatting import format_bytes
from store import AssetStore, get_store

router = APIRouter(tags=["Upload"])


@router.post("/secure-file", response_model=UploadResponse)
async def create_secure_file(
    password: str = Form(""),
    sender_email: str = Form("", alias="senderEmail"),
    receiver_email: str = Form("", alias="receiverEmail"),
    transfer_name: str = Form("", alias="transferName"),
    message: str = Form(""),
    files: list[UploadFile] | None = File(None),
    store: AssetStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    form = UploadForm(
        password=password,
        sender_email=sender_email,
        receiver_email=receiver_email,
        transfer_name=transfer_name,
        message=message,
    )
    uploads = files or []

    # Reject on the form and the declared sizes before any file body is read
    upload_service.validate_form(form)
    upload_service.validate_file_sizes(
        [(safe_filename(f.filename or "file"), f.size) for f in uploads],
        settings.max_file_size,
    )

    # One byte past the limit is enough for create_transfer to reject the file
    incoming = [
        IncomingFile(
            filename=safe_filename(f.filename or "file"),
            content_type=f.content_type,
            data=await f.read(settings.max_file_size + 1),
        )
        for f in uploads
    ]

    record = await upload_service.create_transfer(store, settings, form, incoming)

    return UploadResponse(
        document_id=record.id,
        shareable_id=record.shareable_id,
        details=UploadDetails(
            file_count=record.file_count,
            total_size=record.total_size,
            formatted_size=format_bytes(record.total_size),
            expires_in=f"{EXPIRY_DAYS} days",
            transfer_name=record.transfer_name,
            download_url=f"/download/{record.shareable_id}",
        ),
    )
