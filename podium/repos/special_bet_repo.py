"""
Special bet repository
"""

from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from podium.models.special_bet import SpecialBet


async def create_special_bet(
    session: AsyncSession,
    description: str,
    odds: int,
    created_by: Optional[int] = None
) -> SpecialBet:
    """
    Create a new special bet and flush it. Caller commits.

    Args:
        session: Database session
        description: Free-text proposition
        odds: Signed odds value
        created_by: Creating admin's account id

    Returns:
        Created SpecialBet instance
    """
    special_bet = SpecialBet(
        description=description,
        odds=odds,
        created_by=created_by
    )
    session.add(special_bet)
    await session.flush()
    return special_bet


async def get_special_bet_by_id(session: AsyncSession, special_bet_id: int) -> Optional[SpecialBet]:
    result = await session.execute(
        select(SpecialBet).where(SpecialBet.id == special_bet_id)
    )
    return result.scalar_one_or_none()


async def get_special_bets(session: AsyncSession) -> List[SpecialBet]:
    result = await session.execute(
        select(SpecialBet).order_by(SpecialBet.id)
    )
    return result.scalars().all()


async def delete_special_bet(session: AsyncSession, special_bet_id: int) -> bool:
    """
    Delete a special bet. Wagers keep their description snapshot. Caller commits.

    Returns:
        True if a row was deleted
    """
    result = await session.execute(
        delete(SpecialBet).where(SpecialBet.id == special_bet_id)
    )
    return result.rowcount > 0
