"""Download controller: transfer info and password-protected zip downloads."""

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from api.download.dto.download import DownloadRequest, TransferInfo
from api.download.services import download_service
from errors import ValidationError
from store import AssetStore, get_store

router = APIRouter(prefix="/download", tags=["Download"])

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}


def _require_id(transfer_id: str) -> str:
    if not transfer_id.strip():
        raise ValidationError("Document ID is required")
    return transfer_id


@router.get("/{transfer_id}/info", response_model=TransferInfo)
async def transfer_info(transfer_id: str, store: AssetStore = Depends(get_store)):
    return download_service.get_transfer_info(store, _require_id(transfer_id))


@router.post("/{transfer_id}")
async def download_transfer(
    transfer_id: str,
    data: DownloadRequest | None = None,
    store: AssetStore = Depends(get_store),
):
    """Return every file of the transfer as one zip archive."""
    transfer_id = _require_id(transfer_id)
    if data is None or not data.password:
        raise ValidationError("Password is required")

    result = download_service.download_transfer(store, transfer_id, data.password)

    return Response(
        content=result.archive,
        media_type="application/zip",
        headers={
            "Content-Disposition": f'attachment; filename="{result.filename}"',
            "Content-Length": str(len(result.archive)),
            **NO_CACHE_HEADERS,
        },
    )
