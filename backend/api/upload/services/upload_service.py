"""Upload service: validates a transfer, stores its files and creates the record."""

import asyncio
import logging
import re
from datetime import datetime, timedelta, timezone

from sqlalchemy.exc import SQLAlchemyError

from api.assets.dto.asset import Asset
from api.assets.repositories.assets_repository import safe_filename
from api.transfers.dto.transfer import NewFileEntry, TransferRecord
from api.upload.dto.upload import IncomingFile, UploadForm
from config import EXPIRY_DAYS, Settings
from errors import StoreUnavailable, ValidationError
from store import AssetStore

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

REQUIRED_FIELDS = {
    "password": "password",
    "sender_email": "senderEmail",
    "receiver_email": "receiverEmail",
    "transfer_name": "transferName",
}


def validate_form(form: UploadForm) -> None:
    """Check the text fields: required values first, then the two emails."""
    missing = [name for field, name in REQUIRED_FIELDS.items() if not getattr(form, field)]
    if missing:
        raise ValidationError(
            "Missing required fields", f"Please provide: {', '.join(missing)}"
        )

    if form.sender_email.lower() == form.receiver_email.lower():
        raise ValidationError(
            "Invalid email addresses", "Sender and receiver emails cannot be the same"
        )

    if not EMAIL_RE.match(form.sender_email):
        raise ValidationError(
            "Invalid sender email", "Please provide a valid sender email address"
        )

    if not EMAIL_RE.match(form.receiver_email):
        raise ValidationError(
            "Invalid receiver email", "Please provide a valid receiver email address"
        )


def validate_file_sizes(files: list[tuple[str, int | None]], max_file_size: int) -> None:
    """Check ``(filename, size)`` pairs. An unknown size is not rejected here."""
    if not files:
        raise ValidationError(
            "No files uploaded", "Please select at least one file to upload"
        )

    oversized = [name for name, size in files if size is not None and size > max_file_size]
    if oversized:
        limit_mb = max_file_size // (1024 * 1024)
        raise ValidationError(
            "File size limit exceeded",
            f"The following files exceed {limit_mb}MB: {', '.join(oversized)}",
        )


def validate_upload(form: UploadForm, files: list[IncomingFile], max_file_size: int) -> None:
    """Raise ValidationError for the first problem found, in a fixed order."""
    validate_form(form)
    validate_file_sizes([(f.filename, f.size) for f in files], max_file_size)


async def upload_with_retry(
    store: AssetStore,
    file: IncomingFile,
    max_attempts: int = 3,
    base_delay: float = 1.0,
) -> Asset:
    """Store one file, retrying with a linearly growing delay between attempts."""
    last_error: Exception | None = None

    for attempt in range(1, max_attempts + 1):
        try:
            return store.assets.create(
                file.data,
                filename=file.filename,
                mime_type=file.content_type or "application/octet-stream",
            )
        except (OSError, SQLAlchemyError) as e:
            last_error = e
            logger.warning("Attempt %d failed for %s: %s", attempt, file.filename, e)
            if attempt < max_attempts:
                await asyncio.sleep(base_delay * attempt)

    raise StoreUnavailable(
        "Failed to create secure file transfer",
        f"Failed to upload {file.filename} after {max_attempts} attempts: {last_error}",
    )


async def create_transfer(
    store: AssetStore,
    settings: Settings,
    form: UploadForm,
    files: list[IncomingFile],
    now: datetime | None = None,
) -> TransferRecord:
    """Validate, upload every file, then create the transfer record.

    Nothing is written to the store if validation fails. If a file cannot be
    uploaded or the record cannot be written, the assets already stored for
    this request are removed.
    """
    validate_upload(form, files, settings.max_file_size)

    logger.info("Starting upload of %d files", len(files))
    uploaded: list[Asset] = []
    try:
        for file in files:
            logger.info("Uploading: %s (%.2f MB)", file.filename, file.size / (1024 * 1024))
            uploaded.append(
                await upload_with_retry(
                    store,
                    file,
                    max_attempts=settings.upload_max_attempts,
                    base_delay=settings.upload_retry_delay,
                )
            )

        entries = [
            NewFileEntry(
                asset_id=asset.id,
                title=safe_filename(file.filename),
                size=file.size,
                file_type=file.content_type or "unknown",
            )
            for asset, file in zip(uploaded, files)
        ]

        now = now or datetime.now(timezone.utc)
        record = store.transfers.create(
            password=form.password,
            sender_email=form.sender_email,
            receiver_email=form.receiver_email,
            transfer_name=form.transfer_name,
            message=form.message or "",
            files=entries,
            transfer_date=now,
            expires_at=now + timedelta(days=EXPIRY_DAYS),
        )
    except Exception:
        logger.warning("Transfer not created, removing %d stored files", len(uploaded))
        for asset in uploaded:
            store.assets.delete(asset.id)
        raise

    logger.info("Transfer %s created with %d files", record.id, record.file_count)
    return record
