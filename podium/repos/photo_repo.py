"""
Photo repository for the explore feed
"""

from typing import List, Optional, Tuple

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from podium.models.account import Account
from podium.models.photo import Photo

FEED_PAGE_SIZE = 20


async def add_photo(session: AsyncSession, account_id: int, image_path: str) -> Photo:
    """
    Record a photo path for an account.

    Args:
        session: Database session
        account_id: Owning account
        image_path: Path or URL of the already-stored image

    Returns:
        Created Photo instance
    """
    photo = Photo(account_id=account_id, image_path=image_path)
    session.add(photo)
    await session.commit()
    await session.refresh(photo)
    return photo


async def get_photo_paths_for_account(session: AsyncSession, account_id: int) -> List[str]:
    """An account's own photo paths, oldest first."""
    result = await session.execute(
        select(Photo.image_path)
        .where(Photo.account_id == account_id)
        .order_by(Photo.uploaded_at.asc(), Photo.id.asc())
    )
    return list(result.scalars().all())


async def get_feed(
    session: AsyncSession,
    exclude_account_id: int,
    limit: int = FEED_PAGE_SIZE,
    offset: int = 0
) -> List[Tuple[Photo, Optional[Account]]]:
    """
    Other accounts' photos, newest first, with their owner.

    Returns:
        (Photo, Account) pairs
    """
    result = await session.execute(
        select(Photo, Account)
        .outerjoin(Account, Photo.account_id == Account.id)
        .where(Photo.account_id != exclude_account_id)
        .order_by(desc(Photo.uploaded_at), desc(Photo.id))
        .limit(limit)
        .offset(offset)
    )
    return result.all()
