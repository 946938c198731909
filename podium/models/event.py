"""
Event model - a scheduled event with up to four participant slots
"""

from sqlalchemy import JSON, Column, Date, DateTime, Index, Integer, String, Text, Time
from sqlalchemy.sql import func

from podium.db.base import Base

MAX_PARTICIPANTS = 4


class Event(Base):
    """Event model - matches events table"""
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    event_date = Column(Date, nullable=False)
    event_time = Column(Time, nullable=False)
    # Ordered account ids; slot N prices at moneyline_N
    participant_ids = Column(JSON, nullable=False, default=list)
    moneyline_1 = Column(Integer, nullable=True)
    moneyline_2 = Column(Integer, nullable=True)
    moneyline_3 = Column(Integer, nullable=True)
    moneyline_4 = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        Index('idx_events_event_date', 'event_date'),
    )

    @property
    def moneylines(self) -> list:
        return [self.moneyline_1, self.moneyline_2, self.moneyline_3, self.moneyline_4]

    def __repr__(self):
        return f"<Event(id={self.id}, title={self.title}, date={self.event_date})>"

    def to_dict(self, participant_names: list = None):
        """Convert event to dictionary for API responses"""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "date": self.event_date.isoformat() if self.event_date else None,
            "time": self.event_time.strftime("%H:%M") if self.event_time else None,
            "participant_ids": list(self.participant_ids or []),
            "participants": participant_names if participant_names is not None else [],
            "moneyline_1": self.moneyline_1,
            "moneyline_2": self.moneyline_2,
            "moneyline_3": self.moneyline_3,
            "moneyline_4": self.moneyline_4,
        }
