"""
Authentication API endpoints
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from podium.core.auth import get_current_user, get_password_hash, issue_tokens, verify_password, verify_token
from podium.core.config import settings
from podium.db.session import get_db
from podium.models.account import Account
from podium.models.enums import AccountRole
from podium.repos.account_repo import create_account, get_account_by_id, get_account_by_username

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth")


class SignupRequest(BaseModel):
    """Signup request model"""
    username: str = Field(..., min_length=3, max_length=64)
    password: str = Field(..., min_length=6, max_length=72)
    display_name: Optional[str] = Field(None, max_length=128)
    admin_code: Optional[str] = None


class LoginRequest(BaseModel):
    """Login request model"""
    username: str
    password: str


class TokenResponse(BaseModel):
    """Token response model"""
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int


class RefreshTokenRequest(BaseModel):
    """Refresh token request model"""
    refresh_token: str


@router.post("/signup", response_model=TokenResponse)
async def signup(
    signup_data: SignupRequest,
    session: AsyncSession = Depends(get_db)
):
    """
    Create an account with the starting balance and return JWT tokens.

    Presenting the configured admin code grants the admin role.
    """
    if await get_account_by_username(session, signup_data.username):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username already registered"
        )

    role = AccountRole.USER.value
    if signup_data.admin_code is not None:
        if not settings.admin_signup_code or signup_data.admin_code != settings.admin_signup_code:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Invalid admin code"
            )
        role = AccountRole.ADMIN.value

    account = await create_account(
        session,
        username=signup_data.username,
        password_hash=get_password_hash(signup_data.password),
        display_name=signup_data.display_name,
        role=role
    )
    logger.info(f"New {role} account {account.id} ({account.username})")

    return TokenResponse(**issue_tokens(account))


@router.post("/login", response_model=TokenResponse)
async def login(
    login_data: LoginRequest,
    session: AsyncSession = Depends(get_db)
):
    """Login with username/password."""
    account = await get_account_by_username(session, login_data.username)
    if not account or not verify_password(login_data.password, account.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials"
        )

    return TokenResponse(**issue_tokens(account))


@router.post("/refresh", response_model=TokenResponse)
async def refresh_token(
    token_data: RefreshTokenRequest,
    session: AsyncSession = Depends(get_db)
):
    """Exchange a refresh token for a new token pair."""
    payload = verify_token(token_data.refresh_token, "refresh")
    account_id = payload.get("sub")

    account = await get_account_by_id(session, int(account_id)) if account_id and account_id.isdigit() else None
    if not account:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid refresh token"
        )

    return TokenResponse(**issue_tokens(account))


@router.get("/me")
async def get_current_user_info(current_user: Account = Depends(get_current_user)):
    """Get current account information."""
    return current_user.to_dict()
