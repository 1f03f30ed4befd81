"""User profile endpoints."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from skillmatch.api.deps import failure_boundary, parse_id
from skillmatch.core.exceptions import NotFoundError
from skillmatch.db.session import get_db
from skillmatch.queries import profiles as profile_queries
from skillmatch.queries import users as user_queries
from skillmatch.schemas.profile import (
    ProfileRecord,
    ProfileResponse,
    ProfileUpdate,
    ProfileUpdateResponse,
    ProfileWithUser,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/{user_id}/profile", response_model=ProfileResponse)
async def get_user_profile(user_id: str, db: AsyncSession = Depends(get_db)):
    """User fields joined with their profile; profile fields are null if none exists."""
    uid = parse_id(user_id)

    with failure_boundary("Failed to get user profile"):
        row = await profile_queries.get_profile_with_user(db, uid)

    if row is None:
        raise NotFoundError("User not found")

    return ProfileResponse(
        message="Profile retrieved successfully",
        profile=ProfileWithUser.model_validate(dict(row)),
    )


@router.put("/{user_id}/profile", response_model=ProfileUpdateResponse)
async def update_user_profile(
    user_id: str,
    profile_data: Optional[ProfileUpdate] = None,
    db: AsyncSession = Depends(get_db),
):
    """Replace the user's profile with the submitted state; no body clears every field."""
    uid = parse_id(user_id)
    if profile_data is None:
        profile_data = ProfileUpdate()

    with failure_boundary("Failed to update user profile"):
        user = await user_queries.find_by_id(db, uid)
        if user is None:
            raise NotFoundError("User not found")

        profile = await profile_queries.upsert_profile(db, uid, profile_data)

    logger.info(f"Profile upserted for user {uid}")
    return ProfileUpdateResponse(
        message="Profile updated successfully",
        profile=ProfileRecord.model_validate(profile),
    )
