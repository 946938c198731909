"""
Photo feed endpoints. Only image paths are stored; uploads are handled elsewhere.
"""

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from podium.core.auth import get_current_user
from podium.db.session import get_db
from podium.models.account import Account
from podium.repos.photo_repo import FEED_PAGE_SIZE, add_photo, get_feed, get_photo_paths_for_account

router = APIRouter()


class PhotoCreate(BaseModel):
    image_path: str = Field(..., min_length=1, max_length=255)


@router.post("/photos")
async def create_photo(
    payload: PhotoCreate,
    current_user: Account = Depends(get_current_user),
    session: AsyncSession = Depends(get_db)
):
    photo = await add_photo(session, current_user.id, payload.image_path.strip())
    return {"ok": True, "photo": photo.to_dict()}


@router.get("/photos")
async def list_own_photos(
    current_user: Account = Depends(get_current_user),
    session: AsyncSession = Depends(get_db)
):
    """The caller's own photo paths."""
    return await get_photo_paths_for_account(session, current_user.id)


@router.get("/explore/photos")
async def explore_photos(
    offset: int = Query(0, ge=0),
    current_user: Account = Depends(get_current_user),
    session: AsyncSession = Depends(get_db)
):
    """
    Everyone else's photos, newest first, one page at a time.

    ``has_more`` is true when a full page came back.
    """
    rows = await get_feed(session, current_user.id, limit=FEED_PAGE_SIZE, offset=offset)
    photos = [
        {
            "image_path": photo.image_path,
            "user_flag": account.flag if account else None,
            "username": account.name if account else None,
            "uploaded_at": photo.uploaded_at.isoformat() if photo.uploaded_at else None
        }
        for photo, account in rows
    ]
    return {"photos": photos, "has_more": len(photos) == FEED_PAGE_SIZE}
