"""
Betting endpoints: catalogs open for betting, wager placement, own ledger
"""

from typing import Optional, Union

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from podium.core.auth import get_current_user
from podium.core.errors import ValidationError
from podium.db.session import get_db
from podium.models.account import Account
from podium.repos.event_repo import resolve_participant_names
from podium.repos.special_bet_repo import get_special_bets
from podium.services import ledger
from podium.services.catalog import upcoming_events

router = APIRouter(prefix="/betting")

# Amounts arrive as JSON numbers or strings; the ledger parses them
Amount = Optional[Union[int, float, str]]


class WagerRequest(BaseModel):
    """Event wager request model"""
    event_id: Optional[int] = None
    predicted_outcome: Optional[str] = None
    amount: Amount = None


class SpecialWagerRequest(BaseModel):
    """Special bet wager request model"""
    special_bet_id: Optional[int] = None
    amount: Amount = None


@router.get("/events")
async def betting_events(
    current_user: Account = Depends(get_current_user),
    session: AsyncSession = Depends(get_db)
):
    """Events from today through the betting window, with moneylines and participant names."""
    events = await upcoming_events(session)
    names = await resolve_participant_names(session, events)
    return [event.to_dict(names[event.id]) for event in events]


@router.get("/special-bets")
async def special_bets(
    current_user: Account = Depends(get_current_user),
    session: AsyncSession = Depends(get_db)
):
    return [special_bet.to_dict() for special_bet in await get_special_bets(session)]


@router.get("/balance")
async def balance(
    current_user: Account = Depends(get_current_user),
    session: AsyncSession = Depends(get_db)
):
    return {"account_id": current_user.id, "balance": str(await ledger.get_balance(session, current_user.id))}


@router.post("/wagers")
async def place_wager(
    payload: WagerRequest,
    current_user: Account = Depends(get_current_user),
    session: AsyncSession = Depends(get_db)
):
    """
    Place a wager on an event participant.

    400 on missing fields, bad amount, unknown participant or insufficient
    funds; 404 if the event does not exist.
    """
    if payload.event_id is None or not payload.predicted_outcome or payload.amount is None:
        raise ValidationError("Missing required fields")

    wager = await ledger.place_wager(
        session,
        account_id=current_user.id,
        event_id=payload.event_id,
        predicted_outcome=payload.predicted_outcome,
        amount=payload.amount
    )
    new_balance = await ledger.get_balance(session, current_user.id)
    return {"ok": True, "wager": wager.to_dict(), "balance": str(new_balance)}


@router.post("/special-wagers")
async def place_special_wager(
    payload: SpecialWagerRequest,
    current_user: Account = Depends(get_current_user),
    session: AsyncSession = Depends(get_db)
):
    """Place a wager on a special bet."""
    if payload.special_bet_id is None or payload.amount is None:
        raise ValidationError("Missing required fields")

    wager = await ledger.place_special_wager(
        session,
        account_id=current_user.id,
        special_bet_id=payload.special_bet_id,
        amount=payload.amount
    )
    new_balance = await ledger.get_balance(session, current_user.id)
    return {"ok": True, "wager": wager.to_dict(), "balance": str(new_balance)}


@router.get("/wagers")
async def my_wagers(
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    current_user: Account = Depends(get_current_user),
    session: AsyncSession = Depends(get_db)
):
    """The caller's own wagers, newest first."""
    wagers = await ledger.list_wagers_for_account(session, current_user.id, limit=limit, offset=offset)
    return [wager.to_dict() for wager in wagers]
