"""
Audit log model for admin actions
"""

from sqlalchemy import JSON, Column, DateTime, Integer, String
from sqlalchemy.sql import func

from podium.db.base import Base


class AuditLog(Base):
    """Audit log model - matches audit_logs table"""
    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    admin_id = Column(Integer, nullable=True)
    actor = Column(String(128), nullable=True)  # Admin username at the time of the action
    action = Column(String(128), nullable=False)
    details = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<AuditLog(id={self.id}, admin_id={self.admin_id}, action={self.action})>"

    def to_dict(self):
        return {
            "id": self.id,
            "admin_id": self.admin_id,
            "actor": self.actor,
            "action": self.action,
            "details": self.details,
            "created_at": self.created_at.isoformat() if self.created_at else None
        }
