"""Central ORM module: imports all models for Alembic metadata discovery."""

from api.assets.orm import AssetModel
from api.transfers.orm import TransferFileModel, TransferModel

__all__ = [
    "AssetModel",
    "TransferFileModel",
    "TransferModel",
]
