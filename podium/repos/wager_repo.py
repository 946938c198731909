"""
Wager repository for the betting ledger

Inserts and deletes here do not commit: ledger writes are always part of
a larger unit of work owned by the ledger service.
"""

from decimal import Decimal
from typing import List, Optional

from sqlalchemy import delete, desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from podium.models.account import Account
from podium.models.enums import WagerTarget
from podium.models.event import Event
from podium.models.wager import Wager


async def add_wager(
    session: AsyncSession,
    account_id: int,
    predicted_outcome: str,
    amount: Decimal,
    target_type: str = WagerTarget.EVENT.value,
    event_id: Optional[int] = None,
    special_bet_id: Optional[int] = None
) -> Wager:
    """
    Stage a new ledger row and flush it.

    Args:
        session: Database session
        account_id: Placing account
        predicted_outcome: Participant name or special-bet description (snapshot)
        amount: Positive wager amount
        target_type: 'event' or 'special'
        event_id: Event reference for event wagers
        special_bet_id: Special bet reference for special wagers

    Returns:
        The flushed (uncommitted) Wager instance
    """
    wager = Wager(
        account_id=account_id,
        target_type=target_type,
        event_id=event_id,
        special_bet_id=special_bet_id,
        predicted_outcome=predicted_outcome,
        amount=amount
    )
    session.add(wager)
    await session.flush()
    return wager


async def get_wager_by_id(session: AsyncSession, wager_id: int) -> Optional[Wager]:
    result = await session.execute(
        select(Wager).where(Wager.id == wager_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def get_wagers_for_account(
    session: AsyncSession,
    account_id: int,
    limit: int = 100,
    offset: int = 0
) -> List[Wager]:
    """
    Get an account's wagers, newest first.

    Args:
        session: Database session
        account_id: Account ID
        limit: Maximum number of wagers to return
        offset: Number of wagers to skip

    Returns:
        List of Wager instances
    """
    result = await session.execute(
        select(Wager)
        .where(Wager.account_id == account_id)
        .order_by(desc(Wager.id))
        .limit(limit)
        .offset(offset)
        .execution_options(populate_existing=True)
    )
    return result.scalars().all()


async def get_all_wagers(session: AsyncSession, limit: int = 1000, offset: int = 0) -> List[Wager]:
    """
    Get every wager with the placing username and event title attached.
    Rows are re-read from the store, since catalog deletes null references in SQL.

    Event titles are only present while the event still exists.
    """
    result = await session.execute(
        select(Wager, Account.username, Event.title)
        .outerjoin(Account, Wager.account_id == Account.id)
        .outerjoin(Event, Wager.event_id == Event.id)
        .order_by(Wager.id)
        .limit(limit)
        .offset(offset)
        .execution_options(populate_existing=True)
    )

    wagers = []
    for wager, username, event_title in result.all():
        wager.username = username
        wager.event_title = event_title
        wagers.append(wager)
    return wagers


async def remove_wager(session: AsyncSession, wager_id: int) -> bool:
    """
    Delete a ledger row. The balance is not touched. Caller commits.

    Returns:
        True if a row was deleted
    """
    result = await session.execute(
        delete(Wager).where(Wager.id == wager_id)
    )
    return result.rowcount > 0
