"""
Schedule, today's events and leaderboard
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from podium.core.auth import get_current_user
from podium.db.session import get_db
from podium.models.account import Account
from podium.repos.account_repo import get_leaderboard
from podium.repos.event_repo import get_events, get_events_on, resolve_participant_names
from podium.services.catalog import local_today

router = APIRouter()


async def _with_names(session: AsyncSession, events) -> list:
    names = await resolve_participant_names(session, events)
    return [event.to_dict(names[event.id]) for event in events]


@router.get("/schedule")
async def schedule(
    current_user: Account = Depends(get_current_user),
    session: AsyncSession = Depends(get_db)
):
    """Every event in date/time order with participant names."""
    return await _with_names(session, await get_events(session))


@router.get("/events/today")
async def events_today(
    current_user: Account = Depends(get_current_user),
    session: AsyncSession = Depends(get_db)
):
    return await _with_names(session, await get_events_on(session, local_today()))


@router.get("/leaderboard")
async def leaderboard(
    limit: int = Query(100, ge=1, le=500),
    current_user: Account = Depends(get_current_user),
    session: AsyncSession = Depends(get_db)
):
    """Accounts ranked by total points, then gold medals."""
    accounts = await get_leaderboard(session, limit=limit)
    return [
        {
            "rank": rank,
            "id": a.id,
            "name": a.name,
            "flag": a.flag,
            "total_points": a.total_points,
            "gold_medals": a.gold_medals
        }
        for rank, a in enumerate(accounts, start=1)
    ]
