from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from api.transfers.dto.transfer import NewFileEntry
from config import Settings
from main import create_app


@pytest.fixture
def settings(tmp_path):
    return Settings(
        data_dir=tmp_path, database_url=None, upload_retry_delay=0, log_level="DEBUG"
    )


@pytest.fixture
def app(settings):
    app = create_app(settings)
    yield app
    app.state.store.dispose()


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def store(app):
    return app.state.store


@pytest.fixture
def make_transfer(store):
    """Create a transfer straight in the store, bypassing the upload endpoint."""

    def _make(
        files=(("report.pdf", b"%PDF-1.4 fake", "application/pdf"),),
        password="s3cret",
        transfer_name="reports",
        transfer_date=None,
        download_count=0,
    ):
        transfer_date = transfer_date or datetime.now(timezone.utc)
        entries = []
        for title, data, mime_type in files:
            asset = store.assets.create(data, filename=title or "upload.bin", mime_type=mime_type)
            entries.append(
                NewFileEntry(
                    asset_id=asset.id,
                    title=title or "",
                    size=len(data),
                    file_type=mime_type or "unknown",
                )
            )
        record = store.transfers.create(
            password=password,
            sender_email="alice@example.com",
            receiver_email="bob@example.com",
            transfer_name=transfer_name,
            files=entries,
            transfer_date=transfer_date,
            expires_at=transfer_date + timedelta(days=7),
        )
        for _ in range(download_count):
            store.transfers.record_download(record.id, datetime.now(timezone.utc))
        return store.transfers.get(record.id)

    return _make


@pytest.fixture
def upload_form():
    return {
        "password": "s3cret",
        "senderEmail": "alice@example.com",
        "receiverEmail": "bob@example.com",
        "transferName": "Quarterly numbers",
        "message": "Here you go",
    }
