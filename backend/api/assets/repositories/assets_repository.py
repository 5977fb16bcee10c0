"""Assets repository: blob bytes on disk, metadata in the database."""

import secrets
import shutil
from datetime import timezone
from pathlib import Path, PurePosixPath

from sqlalchemy.orm import sessionmaker

from api.assets.dto.asset import Asset
from api.assets.orm.asset_model import AssetModel


def asset_to_dto(model: AssetModel) -> Asset:
    created_at = model.created_at
    if created_at is not None and created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    return Asset(
        id=model.id,
        original_filename=model.original_filename,
        filepath=model.filepath,
        size=model.size or 0,
        mime_type=model.mime_type,
        created_at=created_at,
    )


def safe_filename(filename: str) -> str:
    """Last path component of a client-supplied name, never empty or a dot entry."""
    name = PurePosixPath(filename.replace("\\", "/")).name
    if name in ("", ".", ".."):
        return "file"
    return name


class AssetsRepository:
    def __init__(self, session_factory: sessionmaker, files_dir: Path):
        self._session_factory = session_factory
        self._files_dir = files_dir

    def _generate_id(self) -> str:
        while True:
            asset_id = f"file-{secrets.token_hex(12)}"
            if not self.exists(asset_id):
                return asset_id

    def exists(self, asset_id: str) -> bool:
        with self._session_factory() as session:
            return session.get(AssetModel, asset_id) is not None

    def create(self, data: bytes, filename: str, mime_type: str | None = None) -> Asset:
        """Write the blob, then record it. The blob is removed if the insert fails."""
        asset_id = self._generate_id()
        asset_dir = self._files_dir / asset_id
        asset_dir.mkdir(parents=True, exist_ok=True)
        final_path = asset_dir / safe_filename(filename)
        final_path.write_bytes(data)

        try:
            with self._session_factory() as session:
                model = AssetModel(
                    id=asset_id,
                    original_filename=filename,
                    filepath=str(final_path),
                    size=len(data),
                    mime_type=mime_type,
                )
                session.add(model)
                session.commit()
                session.refresh(model)
                return asset_to_dto(model)
        except Exception:
            shutil.rmtree(asset_dir, ignore_errors=True)
            raise

    def get(self, asset_id: str) -> Asset | None:
        with self._session_factory() as session:
            model = session.get(AssetModel, asset_id)
            return asset_to_dto(model) if model else None

    def read_bytes(self, asset_id: str) -> bytes:
        asset = self.get(asset_id)
        if asset is None:
            raise LookupError(f"Asset {asset_id} not found")
        return Path(asset.filepath).read_bytes()

    def delete(self, asset_id: str) -> bool:
        with self._session_factory() as session:
            model = session.get(AssetModel, asset_id)
            if not model:
                return False
            filepath = Path(model.filepath)
            session.delete(model)
            session.commit()

        if filepath.parent.exists():
            shutil.rmtree(filepath.parent, ignore_errors=True)
        return True
