"""
Admin API endpoints: accounts, balance adjustment, ledger, catalog, audit log
"""

from datetime import date, time
from typing import List, Optional, Union

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from podium.core.auth import get_current_admin
from podium.core.errors import NotFoundError
from podium.db.session import get_db
from podium.models.account import Account
from podium.models.event import MAX_PARTICIPANTS
from podium.repos.account_repo import get_accounts
from podium.repos.audit_log_repo import get_audit_logs
from podium.repos.event_repo import get_events, resolve_participant_names
from podium.repos.wager_repo import get_wager_by_id
from podium.services import catalog, ledger

router = APIRouter(prefix="/admin")

Amount = Optional[Union[int, float, str]]


class AdjustRequest(BaseModel):
    """Balance adjustment request model"""
    delta: Amount = None
    reason: Optional[str] = Field(None, max_length=500)


class WagerAdjustRequest(AdjustRequest):
    """Adjustment made against a wager, e.g. crediting winnings"""
    account_id: Optional[int] = None


class EventRequest(BaseModel):
    """Event create/update request model"""
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    event_date: date
    event_time: time
    participant_ids: List[int] = Field(default_factory=list, max_length=MAX_PARTICIPANTS)
    moneylines: List[Optional[int]] = Field(default_factory=list, max_length=MAX_PARTICIPANTS)


class SpecialBetRequest(BaseModel):
    """Special bet request model"""
    description: Optional[str] = None
    odds: Optional[int] = None


class TotalsEntry(BaseModel):
    account_id: Optional[int] = None
    points: int = 0
    gold_medals: int = 0


class TotalsRequest(BaseModel):
    """Points / gold medal deltas per account"""
    entries: List[TotalsEntry]


@router.get("/accounts")
async def list_accounts(
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    current_admin: Account = Depends(get_current_admin),
    session: AsyncSession = Depends(get_db)
):
    """All accounts with balances."""
    return [account.to_dict() for account in await get_accounts(session, limit=limit, offset=offset)]


@router.get("/accounts/{account_id}/balance")
async def account_balance(
    account_id: int,
    current_admin: Account = Depends(get_current_admin),
    session: AsyncSession = Depends(get_db)
):
    return {"account_id": account_id, "balance": str(await ledger.get_balance(session, account_id))}


@router.post("/accounts/{account_id}/adjust")
async def adjust_account(
    account_id: int,
    payload: AdjustRequest,
    current_admin: Account = Depends(get_current_admin),
    session: AsyncSession = Depends(get_db)
):
    """
    Apply a signed delta to an account balance.

    Unchecked: the balance may go negative. Audit-logged.
    """
    new_balance = await ledger.adjust_balance(
        session,
        account_id,
        payload.delta,
        admin=current_admin,
        reason=payload.reason
    )
    return {"ok": True, "account_id": account_id, "balance": str(new_balance)}


@router.get("/wagers")
async def list_wagers(
    limit: int = Query(1000, ge=1, le=5000),
    offset: int = Query(0, ge=0),
    current_admin: Account = Depends(get_current_admin),
    session: AsyncSession = Depends(get_db)
):
    """Every ledger row."""
    return [wager.to_dict() for wager in await ledger.list_wagers(session, limit=limit, offset=offset)]


@router.delete("/wagers/{wager_id}")
async def delete_wager(
    wager_id: int,
    current_admin: Account = Depends(get_current_admin),
    session: AsyncSession = Depends(get_db)
):
    """Remove a ledger row. The stake is not refunded."""
    await ledger.delete_wager(session, wager_id, admin=current_admin)
    return {"ok": True}


@router.post("/wagers/{wager_id}/adjust")
async def adjust_for_wager(
    wager_id: int,
    payload: WagerAdjustRequest,
    current_admin: Account = Depends(get_current_admin),
    session: AsyncSession = Depends(get_db)
):
    """
    Adjust a balance with reference to a wager. The wager row is not changed.

    Without an explicit account_id the wager's own account is adjusted.
    """
    account_id = payload.account_id
    if account_id is None:
        wager = await get_wager_by_id(session, wager_id)
        if wager is None:
            raise NotFoundError("Wager not found")
        account_id = wager.account_id

    new_balance = await ledger.adjust_balance(
        session,
        account_id,
        payload.delta,
        admin=current_admin,
        wager_id=wager_id,
        reason=payload.reason
    )
    return {"ok": True, "account_id": account_id, "wager_id": wager_id, "balance": str(new_balance)}


@router.post("/totals")
async def apply_totals(
    payload: TotalsRequest,
    current_admin: Account = Depends(get_current_admin),
    session: AsyncSession = Depends(get_db)
):
    """Add points and gold medals to accounts."""
    updated = await catalog.apply_totals(session, current_admin, [entry.model_dump() for entry in payload.entries])
    return {"ok": True, "updated": updated}


@router.get("/events")
async def list_events(
    current_admin: Account = Depends(get_current_admin),
    session: AsyncSession = Depends(get_db)
):
    events = await get_events(session)
    names = await resolve_participant_names(session, events)
    return [event.to_dict(names[event.id]) for event in events]


@router.post("/events")
async def create_event(
    payload: EventRequest,
    current_admin: Account = Depends(get_current_admin),
    session: AsyncSession = Depends(get_db)
):
    event = await catalog.create_event(
        session,
        current_admin,
        title=payload.title,
        event_date=payload.event_date,
        event_time=payload.event_time,
        description=payload.description,
        participant_ids=payload.participant_ids,
        moneylines=payload.moneylines
    )
    return {"ok": True, "event": event.to_dict()}


@router.put("/events/{event_id}")
async def update_event(
    event_id: int,
    payload: EventRequest,
    current_admin: Account = Depends(get_current_admin),
    session: AsyncSession = Depends(get_db)
):
    event = await catalog.update_event(
        session,
        current_admin,
        event_id,
        title=payload.title,
        event_date=payload.event_date,
        event_time=payload.event_time,
        description=payload.description,
        participant_ids=payload.participant_ids,
        moneylines=payload.moneylines
    )
    return {"ok": True, "event": event.to_dict()}


@router.delete("/events/{event_id}")
async def delete_event(
    event_id: int,
    current_admin: Account = Depends(get_current_admin),
    session: AsyncSession = Depends(get_db)
):
    """Delete an event. Wagers on it remain in the ledger."""
    await catalog.delete_event(session, current_admin, event_id)
    return {"ok": True}


@router.post("/special-bets")
async def create_special_bet(
    payload: SpecialBetRequest,
    current_admin: Account = Depends(get_current_admin),
    session: AsyncSession = Depends(get_db)
):
    special_bet = await catalog.create_special_bet(session, current_admin, payload.description, payload.odds)
    return {"ok": True, "special_bet": special_bet.to_dict()}


@router.delete("/special-bets/{special_bet_id}")
async def delete_special_bet(
    special_bet_id: int,
    current_admin: Account = Depends(get_current_admin),
    session: AsyncSession = Depends(get_db)
):
    await catalog.delete_special_bet(session, current_admin, special_bet_id)
    return {"ok": True}


@router.get("/audit-logs")
async def list_audit_logs(
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    action: Optional[str] = None,
    current_admin: Account = Depends(get_current_admin),
    session: AsyncSession = Depends(get_db)
):
    logs = await get_audit_logs(session, limit=limit, offset=offset, action=action)
    return [log.to_dict() for log in logs]
