"""Download service: authorizes a link, builds the archive and spends one download."""

import logging
from datetime import datetime, timezone
from urllib.parse import quote

from api.download.dto.download import DownloadResult, FileInfo, TransferInfo
from api.download.services import archive_service, policies
from errors import QuotaExceeded, TransferError
from formatting import format_bytes
from store import AssetStore

logger = logging.getLogger(__name__)

DEFAULT_ARCHIVE_NAME = "secure-files"

# Characters encodeURIComponent leaves alone
_URI_COMPONENT_SAFE = "-_.!~*'()"


def archive_filename(transfer_name: str) -> str:
    return f"{quote(transfer_name or DEFAULT_ARCHIVE_NAME, safe=_URI_COMPONENT_SAFE)}.zip"


def get_transfer_info(store: AssetStore, link_id: str, now: datetime | None = None) -> TransferInfo:
    """Read-only view of a transfer. No password needed, nothing is changed."""
    now = now or datetime.now(timezone.utc)
    record = policies.authorize_info(store.transfers.get_by_link(link_id), now)

    files = []
    for entry in record.files:
        asset = entry.asset
        size = (asset.size if asset else 0) or entry.size or 0
        files.append(
            FileInfo(
                title=entry.title,
                size=size,
                formatted_size=format_bytes(size),
                mime_type=(asset.mime_type if asset else None) or "application/octet-stream",
                original_filename=asset.original_filename if asset else None,
            )
        )
    total_size = sum(f.size for f in files)

    return TransferInfo(
        id=record.id,
        transfer_name=record.transfer_name,
        sender_email=record.sender_email,
        receiver_email=record.receiver_email,
        file_count=record.file_count or len(files),
        total_size=total_size,
        formatted_size=format_bytes(total_size),
        transfer_date=record.transfer_date,
        expires_at=record.expires_at,
        download_count=record.download_count,
        files=files,
        download_url=f"/download/{link_id}",
    )


def download_transfer(
    store: AssetStore, link_id: str, password: str, now: datetime | None = None
) -> DownloadResult:
    """Authorize, zip every file, then take one download from the quota.

    The counter is updated before the archive is handed back, so bytes are
    only returned for a download that has been counted. The update is a
    conditional increment in the store; if a concurrent request used the last
    download first, this call fails with QuotaExceeded and the archive is
    dropped.
    """
    now = now or datetime.now(timezone.utc)
    try:
        record = policies.authorize_download(
            store.transfers.get_by_link(link_id), password, now
        )
    except TransferError as e:
        logger.warning("Download of %s rejected: %s", link_id, e)
        raise

    archive = archive_service.build_archive(store, record.files)

    updated = store.transfers.record_download(record.id, now)
    if updated is None:
        logger.warning("Download quota for %s used up by a concurrent request", record.id)
        raise QuotaExceeded()

    logger.info(
        "Transfer %s downloaded (%d/%d files, count now %d)",
        record.id,
        len(record.files),
        record.file_count,
        updated.download_count,
    )
    return DownloadResult(
        archive=archive,
        filename=archive_filename(record.transfer_name),
        transfer=updated,
    )
