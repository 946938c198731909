"""
Account repository with async CRUD and balance operations
"""

from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from sqlalchemy import desc, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from podium.core.config import settings
from podium.models.account import Account
from podium.models.enums import AccountRole


async def create_account(
    session: AsyncSession,
    username: str,
    password_hash: str,
    display_name: Optional[str] = None,
    role: str = AccountRole.USER.value,
    balance: Optional[Decimal] = None
) -> Account:
    """
    Create a new account.

    Args:
        session: Database session
        username: Username (must be unique)
        password_hash: bcrypt hash of the password
        display_name: Name shown to other users (optional)
        role: Account role (default: user)
        balance: Opening balance (default: settings.starting_balance)

    Returns:
        Created Account instance
    """
    account = Account(
        username=username,
        password_hash=password_hash,
        display_name=display_name,
        role=role,
        balance=settings.starting_balance if balance is None else balance,
        total_points=0,
        gold_medals=0
    )
    session.add(account)
    await session.commit()
    await session.refresh(account)
    return account


async def get_account_by_id(session: AsyncSession, account_id: int) -> Optional[Account]:
    """
    Get account by ID.

    Args:
        session: Database session
        account_id: Account ID

    Returns:
        Account instance or None if not found
    """
    result = await session.execute(
        select(Account).where(Account.id == account_id)
    )
    return result.scalar_one_or_none()


async def get_account_by_username(session: AsyncSession, username: str) -> Optional[Account]:
    """
    Get account by username.

    Args:
        session: Database session
        username: Username

    Returns:
        Account instance or None if not found
    """
    result = await session.execute(
        select(Account).where(Account.username == username)
    )
    return result.scalar_one_or_none()


async def get_accounts(
    session: AsyncSession,
    limit: int = 100,
    offset: int = 0
) -> List[Account]:
    """Get accounts in creation order."""
    result = await session.execute(
        select(Account).order_by(Account.id).limit(limit).offset(offset)
    )
    return result.scalars().all()


async def get_accounts_by_ids(session: AsyncSession, account_ids: Iterable[int]) -> Dict[int, Account]:
    """
    Load several accounts at once.

    Returns:
        Mapping of account id to Account; ids with no account are absent
    """
    ids = {int(i) for i in account_ids}
    if not ids:
        return {}
    result = await session.execute(
        select(Account).where(Account.id.in_(ids))
    )
    return {account.id: account for account in result.scalars().all()}


async def get_leaderboard(session: AsyncSession, limit: int = 100) -> List[Account]:
    """Accounts ordered by total points, then gold medals."""
    result = await session.execute(
        select(Account)
        .order_by(desc(Account.total_points), desc(Account.gold_medals), Account.id)
        .limit(limit)
    )
    return result.scalars().all()


async def update_profile(
    session: AsyncSession,
    account_id: int,
    display_name: Optional[str] = None,
    flag: Optional[str] = None
) -> Optional[Account]:
    """
    Update self-service profile fields. Balance and role are never touched here.

    Returns:
        Updated Account instance or None if not found
    """
    account = await get_account_by_id(session, account_id)
    if not account:
        return None

    if display_name is not None:
        account.display_name = display_name
    if flag is not None:
        account.flag = flag

    await session.commit()
    await session.refresh(account)
    return account


async def apply_totals_delta(
    session: AsyncSession,
    account_id: int,
    points: int = 0,
    gold_medals: int = 0
) -> bool:
    """
    Add point / gold-medal deltas to an account. Caller commits.

    Returns:
        True if a row was updated
    """
    result = await session.execute(
        update(Account)
        .where(Account.id == account_id)
        .values(
            total_points=Account.total_points + points,
            gold_medals=Account.gold_medals + gold_medals
        )
    )
    return result.rowcount > 0


def _rounded(expression):
    # SQLite stores NUMERIC as a binary float; keep stored balances at whole cents
    return func.round(expression, 2, type_=Account.balance.type)


async def debit_balance_if_sufficient(session: AsyncSession, account_id: int, amount: Decimal) -> bool:
    """
    Debit ``amount`` only if the balance covers it, as one conditional UPDATE.

    Check and debit happen in a single statement so two concurrent
    placements cannot both pass a stale balance read. Caller commits.

    Returns:
        True if the balance was debited, False if funds were insufficient
    """
    result = await session.execute(
        update(Account)
        .where(Account.id == account_id, Account.balance >= amount)
        .values(balance=_rounded(Account.balance - amount))
        .execution_options(synchronize_session=False)
    )
    return result.rowcount == 1


async def add_to_balance(session: AsyncSession, account_id: int, delta: Decimal) -> bool:
    """
    Unconditionally add a signed delta to the balance. No floor. Caller commits.

    Returns:
        True if a row was updated
    """
    result = await session.execute(
        update(Account)
        .where(Account.id == account_id)
        .values(balance=_rounded(Account.balance + delta))
        .execution_options(synchronize_session=False)
    )
    return result.rowcount > 0


async def get_balance(session: AsyncSession, account_id: int) -> Optional[Decimal]:
    """Read the current balance straight from the store."""
    result = await session.execute(
        select(Account.balance).where(Account.id == account_id)
    )
    return result.scalar_one_or_none()
