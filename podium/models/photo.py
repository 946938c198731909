"""
Photo model - image paths shared to the explore feed
"""

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.sql import func

from podium.db.base import Base


class Photo(Base):
    """Photo model - matches photos table"""
    __tablename__ = "photos"

    id = Column(Integer, primary_key=True, autoincrement=True)
    account_id = Column(Integer, ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False)
    # Path only; file storage lives outside this service
    image_path = Column(String(255), nullable=False)
    uploaded_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        Index("idx_photos_account_id", "account_id"),
        Index("idx_photos_uploaded_at", "uploaded_at"),
    )

    def __repr__(self):
        return f"<Photo(id={self.id}, account_id={self.account_id}, image_path={self.image_path})>"

    def to_dict(self):
        return {
            "id": self.id,
            "account_id": self.account_id,
            "image_path": self.image_path,
            "uploaded_at": self.uploaded_at.isoformat() if self.uploaded_at else None
        }
