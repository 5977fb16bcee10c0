import pytest

from api.download.services import download_service
from errors import QuotaExceeded


def test_download_fails_when_quota_is_spent_after_a_stale_read(store, make_transfer, monkeypatch):
    record = make_transfer(download_count=3)
    # Another request took the last download after this one read the record
    stale = record.model_copy(update={"download_count": 2, "is_downloaded": False})
    monkeypatch.setattr(store.transfers, "get_by_link", lambda link_id: stale)

    with pytest.raises(QuotaExceeded):
        download_service.download_transfer(store, record.id, "s3cret")

    assert store.transfers.get(record.id).download_count == 3


def test_download_counts_before_returning(store, make_transfer):
    record = make_transfer(download_count=2)

    result = download_service.download_transfer(store, record.shareable_id, "s3cret")

    assert result.transfer.download_count == 3
    assert result.transfer.is_downloaded is True
    assert store.transfers.get(record.id).download_count == 3
