"""
Special bet model - admin-authored proposition bets
"""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Text
from sqlalchemy.sql import func

from podium.db.base import Base


class SpecialBet(Base):
    """Special bet model - matches special_bets table"""
    __tablename__ = "special_bets"

    id = Column(Integer, primary_key=True, autoincrement=True)
    description = Column(Text, nullable=False)
    odds = Column(Integer, nullable=False)
    created_by = Column(Integer, ForeignKey("accounts.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<SpecialBet(id={self.id}, odds={self.odds})>"

    def to_dict(self):
        return {
            "id": self.id,
            "description": self.description,
            "odds": self.odds,
            "created_by": self.created_by,
            "created_at": self.created_at.isoformat() if self.created_at else None
        }
