from datetime import datetime, timedelta, timezone

import pytest

from api.download.services import policies
from api.transfers.dto.transfer import TransferRecord
from errors import Expired, NotFound, QuotaExceeded, Unauthorized

NOW = datetime(2026, 1, 10, 12, 0, tzinfo=timezone.utc)


def _record(expires_at=NOW + timedelta(days=1), download_count=0, password="s3cret"):
    return TransferRecord(
        id="abc",
        shareable_id="YWJj",
        password=password,
        sender_email="alice@example.com",
        receiver_email="bob@example.com",
        transfer_name="reports",
        files=[],
        file_count=1,
        total_size=1,
        status="pending",
        download_count=download_count,
        transfer_date=expires_at - timedelta(days=7),
        expires_at=expires_at,
    )


def test_download_policy_passes_valid_request():
    record = _record()
    assert policies.authorize_download(record, "s3cret", NOW) is record


@pytest.mark.parametrize(
    "record, password, error",
    [
        (None, "s3cret", NotFound),
        (_record(), "S3cret", Unauthorized),
        (_record(expires_at=NOW - timedelta(seconds=1)), "wrong", Unauthorized),
        (_record(expires_at=NOW - timedelta(seconds=1)), "s3cret", Expired),
        (_record(expires_at=NOW - timedelta(seconds=1), download_count=3), "s3cret", Expired),
        (_record(download_count=3), "s3cret", QuotaExceeded),
    ],
)
def test_download_policy_gate_order(record, password, error):
    with pytest.raises(error):
        policies.authorize_download(record, password, NOW)


def test_expiry_is_exclusive():
    with pytest.raises(Expired):
        policies.authorize_download(_record(expires_at=NOW), "s3cret", NOW)


@pytest.mark.parametrize(
    "record, error",
    [
        (None, NotFound),
        (_record(expires_at=NOW - timedelta(days=1), download_count=3), Expired),
        (_record(download_count=3), QuotaExceeded),
    ],
)
def test_info_policy_gate_order(record, error):
    with pytest.raises(error):
        policies.authorize_info(record, NOW)


def test_info_policy_never_checks_password():
    record = _record(password="anything")
    assert policies.authorize_info(record, NOW) is record
