"""
Event and special-bet catalog administration, schedule windows and
leaderboard totals.

Catalog deletes never touch wagers: the wager keeps its text snapshot and
its nullable reference is cleared by the foreign key.
"""

import logging
from datetime import date, datetime, time, timedelta
from typing import Iterable, List, Optional, Tuple

import pytz
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from podium.core.config import settings
from podium.core.errors import InternalError, NotFoundError, ValidationError
from podium.models.account import Account
from podium.models.event import MAX_PARTICIPANTS, Event
from podium.models.special_bet import SpecialBet
from podium.repos import account_repo, event_repo, special_bet_repo
from podium.repos.audit_log_repo import stage_audit_log

# Configure logging
logger = logging.getLogger(__name__)


def local_today(tz_name: Optional[str] = None) -> date:
    """Today's date in the configured timezone."""
    tz = pytz.timezone(tz_name or settings.timezone)
    return datetime.now(tz).date()


def betting_window(today: Optional[date] = None) -> Tuple[date, date]:
    """Inclusive (start, end) dates of events open for betting."""
    start = today or local_today()
    return start, start + timedelta(days=settings.betting_window_days)


async def upcoming_events(session: AsyncSession, today: Optional[date] = None) -> List[Event]:
    start, end = betting_window(today)
    return await event_repo.get_events_between(session, start, end)


async def _check_event_fields(
    session: AsyncSession,
    title: str,
    participant_ids: Optional[List[int]],
    moneylines: Optional[List[Optional[int]]]
) -> List[int]:
    if not (title or "").strip():
        raise ValidationError("Event title is required")

    ids = [int(pid) for pid in (participant_ids or [])]
    if len(ids) > MAX_PARTICIPANTS:
        raise ValidationError(f"An event has at most {MAX_PARTICIPANTS} participants")
    if len(set(ids)) != len(ids):
        raise ValidationError("Duplicate participant")
    if len(moneylines or []) > MAX_PARTICIPANTS:
        raise ValidationError(f"An event has at most {MAX_PARTICIPANTS} moneylines")

    accounts = await account_repo.get_accounts_by_ids(session, ids)
    missing = [pid for pid in ids if pid not in accounts]
    if missing:
        raise ValidationError(f"Unknown participant id(s): {missing}")
    return ids


async def create_event(
    session: AsyncSession,
    admin: Account,
    title: str,
    event_date: date,
    event_time: time,
    description: Optional[str] = None,
    participant_ids: Optional[List[int]] = None,
    moneylines: Optional[List[Optional[int]]] = None
) -> Event:
    """
    Create an event after checking its participants exist.

    Raises:
        ValidationError: empty title, too many or unknown participants
    """
    ids = await _check_event_fields(session, title, participant_ids, moneylines)
    try:
        event = await event_repo.create_event(
            session,
            title=title.strip(),
            event_date=event_date,
            event_time=event_time,
            description=description,
            participant_ids=ids,
            moneylines=moneylines
        )
        stage_audit_log(
            session,
            admin_id=admin.id,
            actor=admin.username,
            action="create_event",
            details={"event_id": event.id, "title": event.title, "participant_ids": ids}
        )
        await session.commit()
        await session.refresh(event)
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error(f"Error creating event: {e}")
        raise InternalError() from e

    logger.info(f"Admin {admin.username} created event {event.id} ({event.title})")
    return event


async def update_event(
    session: AsyncSession,
    admin: Account,
    event_id: int,
    title: str,
    event_date: date,
    event_time: time,
    description: Optional[str] = None,
    participant_ids: Optional[List[int]] = None,
    moneylines: Optional[List[Optional[int]]] = None
) -> Event:
    """
    Replace an event's fields. Existing wagers keep their predicted outcome text.

    Raises:
        NotFoundError: no such event
        ValidationError: as for create_event
    """
    if not await event_repo.get_event_by_id(session, event_id):
        raise NotFoundError("Event not found")

    ids = await _check_event_fields(session, title, participant_ids, moneylines)
    try:
        event = await event_repo.update_event(
            session,
            event_id,
            title=title.strip(),
            event_date=event_date,
            event_time=event_time,
            description=description,
            participant_ids=ids,
            moneylines=moneylines
        )
        stage_audit_log(
            session,
            admin_id=admin.id,
            actor=admin.username,
            action="update_event",
            details={"event_id": event_id, "title": event.title, "participant_ids": ids}
        )
        await session.commit()
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error(f"Error updating event {event_id}: {e}")
        raise InternalError() from e

    logger.info(f"Admin {admin.username} updated event {event_id}")
    return event


async def delete_event(session: AsyncSession, admin: Account, event_id: int) -> None:
    """
    Delete an event. Wagers on it are kept with their event reference cleared.

    Raises:
        NotFoundError: no such event
    """
    event = await event_repo.get_event_by_id(session, event_id)
    if not event:
        raise NotFoundError("Event not found")
    title = event.title

    try:
        await event_repo.delete_event(session, event_id)
        stage_audit_log(
            session,
            admin_id=admin.id,
            actor=admin.username,
            action="delete_event",
            details={"event_id": event_id, "title": title}
        )
        await session.commit()
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error(f"Error deleting event {event_id}: {e}")
        raise InternalError() from e

    logger.warning(f"Admin {admin.username} deleted event {event_id} ({title})")


async def create_special_bet(session: AsyncSession, admin: Account, description: str, odds: int) -> SpecialBet:
    """
    Publish a special bet.

    Raises:
        ValidationError: empty description or zero odds
    """
    if not (description or "").strip():
        raise ValidationError("Special bet description is required")
    if odds is None or int(odds) == 0:
        raise ValidationError("Special bet odds must be non-zero")

    try:
        special_bet = await special_bet_repo.create_special_bet(
            session,
            description=description.strip(),
            odds=int(odds),
            created_by=admin.id
        )
        stage_audit_log(
            session,
            admin_id=admin.id,
            actor=admin.username,
            action="create_special_bet",
            details={"special_bet_id": special_bet.id, "description": special_bet.description, "odds": special_bet.odds}
        )
        await session.commit()
        await session.refresh(special_bet)
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error(f"Error creating special bet: {e}")
        raise InternalError() from e

    logger.info(f"Admin {admin.username} created special bet {special_bet.id}")
    return special_bet


async def delete_special_bet(session: AsyncSession, admin: Account, special_bet_id: int) -> None:
    """
    Delete a special bet. Wagers on it keep the description they were placed with.

    Raises:
        NotFoundError: no such special bet
    """
    special_bet = await special_bet_repo.get_special_bet_by_id(session, special_bet_id)
    if not special_bet:
        raise NotFoundError("Special bet not found")
    description = special_bet.description

    try:
        await special_bet_repo.delete_special_bet(session, special_bet_id)
        stage_audit_log(
            session,
            admin_id=admin.id,
            actor=admin.username,
            action="delete_special_bet",
            details={"special_bet_id": special_bet_id, "description": description}
        )
        await session.commit()
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error(f"Error deleting special bet {special_bet_id}: {e}")
        raise InternalError() from e

    logger.warning(f"Admin {admin.username} deleted special bet {special_bet_id}")


async def apply_totals(session: AsyncSession, admin: Account, entries: Iterable[dict]) -> int:
    """
    Add point and gold-medal deltas per account.

    Entries without an account id are skipped, as are ids with no account.

    Returns:
        Number of accounts updated
    """
    applied = []
    try:
        for entry in entries:
            account_id = entry.get("account_id")
            if account_id is None:
                continue
            points = int(entry.get("points") or 0)
            gold_medals = int(entry.get("gold_medals") or 0)
            if await account_repo.apply_totals_delta(session, account_id, points=points, gold_medals=gold_medals):
                applied.append({"account_id": account_id, "points": points, "gold_medals": gold_medals})

        stage_audit_log(
            session,
            admin_id=admin.id,
            actor=admin.username,
            action="apply_totals",
            details={"entries": applied}
        )
        await session.commit()
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error(f"Error applying totals: {e}")
        raise InternalError() from e

    logger.info(f"Admin {admin.username} applied totals to {len(applied)} account(s)")
    return len(applied)
