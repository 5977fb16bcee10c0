"""Authorization gates for the two read paths.

The download path and the info path check different things in a different
order and are kept as two separate policies:

    download: exists -> password -> not expired -> quota left
    info:     exists -> not expired -> quota left

The first failing gate raises and the rest are skipped.
"""

import secrets
from datetime import datetime

from api.transfers.dto.transfer import TransferRecord
from config import MAX_DOWNLOADS
from errors import Expired, NotFound, QuotaExceeded, Unauthorized


def require_exists(record: TransferRecord | None) -> TransferRecord:
    if record is None:
        raise NotFound()
    return record


def require_password(record: TransferRecord, password: str) -> None:
    # Plaintext secret, exact match
    if not secrets.compare_digest(record.password.encode(), password.encode()):
        raise Unauthorized()


def require_not_expired(record: TransferRecord, now: datetime) -> None:
    if not now < record.expires_at:
        raise Expired()


def require_quota(record: TransferRecord) -> None:
    if record.download_count >= MAX_DOWNLOADS:
        raise QuotaExceeded()


def authorize_download(
    record: TransferRecord | None, password: str, now: datetime
) -> TransferRecord:
    record = require_exists(record)
    require_password(record, password)
    require_not_expired(record, now)
    require_quota(record)
    return record


def authorize_info(record: TransferRecord | None, now: datetime) -> TransferRecord:
    record = require_exists(record)
    require_not_expired(record, now)
    require_quota(record)
    return record
