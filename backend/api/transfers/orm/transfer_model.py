"""Transfer ORM models."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from api.assets.orm.asset_model import AssetModel
from database import Base


class TransferModel(Base):
    __tablename__ = "transfers"

    id = Column(String, primary_key=True)
    shareable_id = Column(String, unique=True, nullable=False, index=True)
    password = Column(String, nullable=False)
    sender_email = Column(String, nullable=False)
    receiver_email = Column(String, nullable=False)
    transfer_name = Column(String, nullable=False)
    message = Column(Text, nullable=False, default="")
    file_count = Column(Integer, nullable=False, default=0)
    total_size = Column(Integer, nullable=False, default=0)
    status = Column(String, nullable=False, default="pending")
    download_count = Column(Integer, nullable=False, default=0)
    is_downloaded = Column(Boolean, nullable=False, default=False)
    transfer_date = Column(DateTime(timezone=True), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    last_downloaded_at = Column(DateTime(timezone=True), nullable=True)

    files = relationship(
        "TransferFileModel",
        order_by="TransferFileModel.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )


class TransferFileModel(Base):
    __tablename__ = "transfer_files"

    id = Column(Integer, primary_key=True, autoincrement=True)
    transfer_id = Column(
        String, ForeignKey("transfers.id", ondelete="CASCADE"), nullable=False, index=True
    )
    position = Column(Integer, nullable=False)
    key = Column(String, nullable=False)
    asset_id = Column(String, ForeignKey("assets.id", ondelete="SET NULL"), nullable=True)
    title = Column(String, nullable=True)
    size = Column(Integer, nullable=True)
    file_type = Column(String, nullable=True)

    asset = relationship(AssetModel, lazy="joined")
