"""
Profile and user directory endpoints
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from podium.core.auth import get_current_user
from podium.db.session import get_db
from podium.models.account import Account
from podium.repos.account_repo import get_accounts, update_profile

router = APIRouter()


class ProfileUpdate(BaseModel):
    """Self-service profile fields. Balance, role and totals are admin-only."""
    display_name: Optional[str] = Field(None, min_length=1, max_length=128)
    flag: Optional[str] = Field(None, max_length=255)


@router.get("/profile")
async def get_profile(current_user: Account = Depends(get_current_user)):
    """Own profile including balance, points and gold medals."""
    return current_user.to_dict()


@router.put("/profile")
async def put_profile(
    payload: ProfileUpdate,
    current_user: Account = Depends(get_current_user),
    session: AsyncSession = Depends(get_db)
):
    account = await update_profile(
        session,
        current_user.id,
        display_name=payload.display_name,
        flag=payload.flag
    )
    if not account:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Account not found")
    return {"ok": True, "profile": account.to_dict()}


@router.get("/users")
async def list_users(
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    current_user: Account = Depends(get_current_user),
    session: AsyncSession = Depends(get_db)
):
    """Public directory used to pick event participants."""
    accounts = await get_accounts(session, limit=limit, offset=offset)
    return [
        {"id": a.id, "username": a.username, "name": a.name, "flag": a.flag}
        for a in accounts
    ]
