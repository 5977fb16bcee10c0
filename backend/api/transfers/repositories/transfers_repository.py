"""Transfers repository: data access layer for transfer records."""

import secrets
import uuid
from datetime import datetime, timezone

from sqlalchemy import case, or_, update
from sqlalchemy.orm import sessionmaker

from api.assets.repositories.assets_repository import asset_to_dto
from api.transfers.dto.transfer import FileEntry, NewFileEntry, TransferRecord
from api.transfers.links import derive_shareable_id
from api.transfers.orm.transfer_model import TransferFileModel, TransferModel
from config import DEFAULT_STATUS, MAX_DOWNLOADS


def _as_utc(value: datetime | None) -> datetime | None:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _file_to_dto(model: TransferFileModel) -> FileEntry:
    return FileEntry(
        key=model.key,
        title=model.title,
        size=model.size,
        file_type=model.file_type,
        asset=asset_to_dto(model.asset) if model.asset else None,
    )


def _model_to_dto(model: TransferModel) -> TransferRecord:
    return TransferRecord(
        id=model.id,
        shareable_id=model.shareable_id,
        password=model.password,
        sender_email=model.sender_email,
        receiver_email=model.receiver_email,
        transfer_name=model.transfer_name,
        message=model.message or "",
        files=[_file_to_dto(f) for f in model.files],
        file_count=model.file_count or 0,
        total_size=model.total_size or 0,
        status=model.status,
        download_count=model.download_count or 0,
        is_downloaded=bool(model.is_downloaded),
        transfer_date=_as_utc(model.transfer_date),
        expires_at=_as_utc(model.expires_at),
        last_downloaded_at=_as_utc(model.last_downloaded_at),
    )


class TransfersRepository:
    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def _generate_ids(self) -> tuple[str, str]:
        while True:
            transfer_id = secrets.token_hex(16)
            shareable_id = derive_shareable_id(transfer_id)
            if not self.link_exists(transfer_id) and not self.link_exists(shareable_id):
                return transfer_id, shareable_id

    def link_exists(self, link_id: str) -> bool:
        with self._session_factory() as session:
            return (
                session.query(TransferModel.id)
                .filter(or_(TransferModel.id == link_id, TransferModel.shareable_id == link_id))
                .first()
                is not None
            )

    def create(
        self,
        password: str,
        sender_email: str,
        receiver_email: str,
        transfer_name: str,
        files: list[NewFileEntry],
        transfer_date: datetime,
        expires_at: datetime,
        message: str = "",
    ) -> TransferRecord:
        """Insert the record and its whole manifest in one transaction."""
        transfer_id, shareable_id = self._generate_ids()
        with self._session_factory() as session:
            model = TransferModel(
                id=transfer_id,
                shareable_id=shareable_id,
                password=password,
                sender_email=sender_email,
                receiver_email=receiver_email,
                transfer_name=transfer_name,
                message=message,
                file_count=len(files),
                total_size=sum(f.size for f in files),
                status=DEFAULT_STATUS,
                download_count=0,
                is_downloaded=False,
                transfer_date=transfer_date,
                expires_at=expires_at,
                files=[
                    TransferFileModel(
                        position=position,
                        key=uuid.uuid4().hex,
                        asset_id=f.asset_id,
                        title=f.title,
                        size=f.size,
                        file_type=f.file_type,
                    )
                    for position, f in enumerate(files)
                ],
            )
            session.add(model)
            session.commit()
            session.refresh(model)
            return _model_to_dto(model)

    def get(self, transfer_id: str) -> TransferRecord | None:
        with self._session_factory() as session:
            model = session.get(TransferModel, transfer_id)
            return _model_to_dto(model) if model else None

    def get_by_link(self, link_id: str) -> TransferRecord | None:
        """Resolve either the record id or its shareable id."""
        with self._session_factory() as session:
            model = (
                session.query(TransferModel)
                .filter(or_(TransferModel.id == link_id, TransferModel.shareable_id == link_id))
                .first()
            )
            return _model_to_dto(model) if model else None

    def record_download(self, transfer_id: str, now: datetime) -> TransferRecord | None:
        """Atomically take one download from the quota.

        Returns the updated record, or None when the counter had already
        reached MAX_DOWNLOADS (or the record is gone).
        """
        stmt = (
            update(TransferModel)
            .where(
                TransferModel.id == transfer_id,
                TransferModel.download_count < MAX_DOWNLOADS,
            )
            .values(
                download_count=TransferModel.download_count + 1,
                is_downloaded=case(
                    (TransferModel.download_count + 1 >= MAX_DOWNLOADS, True),
                    else_=TransferModel.is_downloaded,
                ),
                last_downloaded_at=now,
            )
            .execution_options(synchronize_session=False)
        )
        with self._session_factory() as session:
            result = session.execute(stmt)
            session.commit()
            if result.rowcount == 0:
                return None
            model = session.get(TransferModel, transfer_id)
            return _model_to_dto(model) if model else None
