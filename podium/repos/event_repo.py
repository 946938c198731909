"""
Event repository for the event catalog
"""

from datetime import date, time
from typing import Dict, List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from podium.models.event import Event
from podium.repos.account_repo import get_accounts_by_ids


async def create_event(
    session: AsyncSession,
    title: str,
    event_date: date,
    event_time: time,
    description: Optional[str] = None,
    participant_ids: Optional[List[int]] = None,
    moneylines: Optional[List[Optional[int]]] = None
) -> Event:
    """
    Create a new event and flush it. Caller commits.

    Args:
        session: Database session
        title: Event title
        event_date: Calendar date of the event
        event_time: Start time
        description: Optional description
        participant_ids: Ordered participant account ids (max 4)
        moneylines: Up to four moneylines, aligned with participant slots

    Returns:
        Created Event instance
    """
    event = Event(
        title=title,
        description=description,
        event_date=event_date,
        event_time=event_time,
        participant_ids=list(participant_ids or [])
    )
    _apply_moneylines(event, moneylines)
    session.add(event)
    await session.flush()
    return event


async def get_event_by_id(session: AsyncSession, event_id: int) -> Optional[Event]:
    """
    Get event by ID.

    Args:
        session: Database session
        event_id: Event ID

    Returns:
        Event instance or None if not found
    """
    result = await session.execute(
        select(Event).where(Event.id == event_id)
    )
    return result.scalar_one_or_none()


async def get_events(session: AsyncSession, limit: int = 500, offset: int = 0) -> List[Event]:
    """All events in schedule order."""
    result = await session.execute(
        select(Event)
        .order_by(Event.event_date.asc(), Event.event_time.asc())
        .limit(limit)
        .offset(offset)
    )
    return result.scalars().all()


async def get_events_on(session: AsyncSession, day: date) -> List[Event]:
    """Events scheduled on a single day."""
    result = await session.execute(
        select(Event)
        .where(Event.event_date == day)
        .order_by(Event.event_time.asc())
    )
    return result.scalars().all()


async def get_events_between(session: AsyncSession, start: date, end: date) -> List[Event]:
    """Events with start <= date <= end, ordered by date then time."""
    result = await session.execute(
        select(Event)
        .where(Event.event_date >= start, Event.event_date <= end)
        .order_by(Event.event_date.asc(), Event.event_time.asc())
    )
    return result.scalars().all()


async def update_event(
    session: AsyncSession,
    event_id: int,
    title: str,
    event_date: date,
    event_time: time,
    description: Optional[str] = None,
    participant_ids: Optional[List[int]] = None,
    moneylines: Optional[List[Optional[int]]] = None
) -> Optional[Event]:
    """
    Replace an event's editable fields and flush. Caller commits.

    Returns:
        Updated Event instance or None if not found
    """
    event = await get_event_by_id(session, event_id)
    if not event:
        return None

    event.title = title
    event.description = description
    event.event_date = event_date
    event.event_time = event_time
    event.participant_ids = list(participant_ids or [])
    _apply_moneylines(event, moneylines)

    await session.flush()
    return event


async def delete_event(session: AsyncSession, event_id: int) -> bool:
    """
    Delete an event. Wagers on it are left in place. Caller commits.

    Returns:
        True if a row was deleted
    """
    result = await session.execute(
        delete(Event).where(Event.id == event_id)
    )
    return result.rowcount > 0


async def resolve_participant_names(session: AsyncSession, events: List[Event]) -> Dict[int, List[str]]:
    """
    Map each event id to its participants' display names, in slot order.

    A participant whose account no longer exists is shown by its raw id.
    """
    wanted = {pid for event in events for pid in (event.participant_ids or [])}
    accounts = await get_accounts_by_ids(session, wanted)

    names = {}
    for event in events:
        names[event.id] = [
            accounts[int(pid)].name if int(pid) in accounts else str(pid)
            for pid in (event.participant_ids or [])
        ]
    return names


def _apply_moneylines(event: Event, moneylines: Optional[List[Optional[int]]]) -> None:
    values = list(moneylines or [])
    values += [None] * (4 - len(values))
    event.moneyline_1, event.moneyline_2, event.moneyline_3, event.moneyline_4 = values[:4]
