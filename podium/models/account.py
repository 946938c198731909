"""
Account model - identity, role and virtual betting balance
"""

from sqlalchemy import Column, DateTime, Integer, Numeric, String, Text
from sqlalchemy.sql import func

from podium.db.base import Base
from podium.models.enums import AccountRole


class Account(Base):
    """Account model - matches accounts table"""
    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(64), nullable=False, unique=True)
    password_hash = Column(Text, nullable=False)
    display_name = Column(String(128), nullable=True)
    role = Column(String(16), nullable=False, default=AccountRole.USER.value)
    flag = Column(String(255), nullable=True)
    total_points = Column(Integer, nullable=False, default=0)
    gold_medals = Column(Integer, nullable=False, default=0)
    # No CHECK >= 0: admin adjustments may take a balance negative
    balance = Column(Numeric(12, 2), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    @property
    def name(self) -> str:
        """Name shown to other users"""
        return self.display_name or self.username

    @property
    def is_admin(self) -> bool:
        return self.role == AccountRole.ADMIN.value

    def __repr__(self):
        return f"<Account(id={self.id}, username={self.username}, balance={self.balance})>"

    def to_dict(self):
        return {
            "id": self.id,
            "username": self.username,
            "display_name": self.display_name,
            "role": self.role,
            "flag": self.flag,
            "total_points": self.total_points,
            "gold_medals": self.gold_medals,
            "balance": str(self.balance),
            "created_at": self.created_at.isoformat() if self.created_at else None
        }
