"""Archive service: bundles a transfer's files into one zip."""

import io
import logging
import zipfile
from pathlib import PurePosixPath

from api.assets.repositories.assets_repository import safe_filename
from api.transfers.dto.transfer import FileEntry
from errors import AssetFetchFailed
from store import AssetStore

logger = logging.getLogger(__name__)

MIME_EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
    "image/svg+xml": ".svg",
    "application/pdf": ".pdf",
    "text/plain": ".txt",
    "text/csv": ".csv",
    "text/html": ".html",
    "application/msword": ".doc",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": ".docx",
    "application/vnd.ms-excel": ".xls",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet": ".xlsx",
    "application/vnd.ms-powerpoint": ".ppt",
    "application/vnd.openxmlformats-officedocument.presentationml.presentation": ".pptx",
    "application/zip": ".zip",
    "application/x-rar-compressed": ".rar",
    "application/x-7z-compressed": ".7z",
    "audio/mpeg": ".mp3",
    "audio/wav": ".wav",
    "video/mp4": ".mp4",
    "video/mpeg": ".mpeg",
    "application/json": ".json",
    "application/xml": ".xml",
}


def extension_for_mime(mime_type: str | None) -> str:
    if not mime_type:
        return ""
    return MIME_EXTENSIONS.get(mime_type.lower(), "")


def entry_name(entry: FileEntry) -> str:
    """Name of the file inside the archive.

    Base name of the title, else of the asset's original filename, else
    ``file``. The extension for the asset's MIME type is appended unless
    already present.
    """
    asset = entry.asset
    name = safe_filename(entry.title or (asset.original_filename if asset else None) or "file")

    ext = extension_for_mime(asset.mime_type if asset else None)
    if ext and not name.endswith(ext):
        name += ext
    return name


def _unique_name(name: str, used: set[str]) -> str:
    if name not in used:
        return name
    path = PurePosixPath(name)
    stem, suffix = (path.stem, path.suffix) if path.suffix else (name, "")
    n = 1
    while f"{stem} ({n}){suffix}" in used:
        n += 1
    return f"{stem} ({n}){suffix}"


def fetch_entry_bytes(store: AssetStore, entry: FileEntry) -> bytes:
    label = entry.title or "Unknown file"
    if entry.asset is None:
        logger.error("File entry %s has no asset reference", entry.key)
        raise AssetFetchFailed(details=f"Failed to download file: {label}")
    try:
        return store.assets.read_bytes(entry.asset.id)
    except (LookupError, OSError) as e:
        logger.error("Failed to read asset %s: %s", entry.asset.id, e)
        raise AssetFetchFailed(details=f"Failed to download file: {label}") from e


def build_archive(store: AssetStore, files: list[FileEntry]) -> bytes:
    """Zip every manifest entry in order. Any failed fetch aborts the whole archive."""
    buffer = io.BytesIO()
    used: set[str] = set()

    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for entry in files:
            data = fetch_entry_bytes(store, entry)
            name = _unique_name(entry_name(entry), used)
            used.add(name)
            zf.writestr(name, data)

    return buffer.getvalue()
