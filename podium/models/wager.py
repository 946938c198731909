"""
Wager model - one row of the betting ledger
"""

from typing import Optional

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Index, Integer, Numeric, String, Text
from sqlalchemy.sql import func

from podium.db.base import Base
from podium.models.enums import WagerTarget

# Wire value of ``target`` for special-bet wagers
SPECIAL_TARGET = 0


class Wager(Base):
    """Wager model - matches wagers table"""
    __tablename__ = "wagers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    target_type = Column(String(16), nullable=False, default=WagerTarget.EVENT.value)
    # References survive only while the catalog row does; predicted_outcome is the snapshot
    event_id = Column(Integer, ForeignKey("events.id", ondelete="SET NULL"), nullable=True)
    special_bet_id = Column(Integer, ForeignKey("special_bets.id", ondelete="SET NULL"), nullable=True)
    predicted_outcome = Column(Text, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    # Never written: there is no settlement path
    result = Column(String(32), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        CheckConstraint('amount > 0', name='chk_wager_amount_positive'),
        Index('idx_wagers_account_id', 'account_id'),
    )

    @property
    def target(self) -> Optional[int]:
        """Event id for event wagers, 0 for special wagers, None once the event is deleted"""
        if self.target_type == WagerTarget.SPECIAL.value:
            return SPECIAL_TARGET
        return self.event_id

    def __repr__(self):
        return f"<Wager(id={self.id}, account_id={self.account_id}, target={self.target}, amount={self.amount})>"

    def to_dict(self):
        return {
            "id": self.id,
            "account_id": self.account_id,
            "target": self.target,
            "target_type": self.target_type,
            "event_id": self.event_id,
            "special_bet_id": self.special_bet_id,
            "predicted_outcome": self.predicted_outcome,
            "amount": str(self.amount),
            "result": self.result,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "username": getattr(self, 'username', None),  # Joined from accounts by list queries
            "event_title": getattr(self, 'event_title', None)  # Joined from events by list queries
        }
