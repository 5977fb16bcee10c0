"""Asset ORM model."""

from sqlalchemy import Column, DateTime, Integer, String, func

from database import Base


class AssetModel(Base):
    __tablename__ = "assets"

    id = Column(String, primary_key=True)
    original_filename = Column(String, nullable=False)
    filepath = Column(String, nullable=False)
    size = Column(Integer, default=0)
    mime_type = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), default=func.now())
