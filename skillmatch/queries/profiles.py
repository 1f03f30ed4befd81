"""Profile queries."""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.engine import RowMapping
from sqlalchemy.ext.asyncio import AsyncSession

from skillmatch.db.session import session_insert
from skillmatch.models.profile import Profile
from skillmatch.models.user import User
from skillmatch.schemas.profile import ProfileUpdate

PROFILE_FIELDS = tuple(ProfileUpdate.model_fields)


async def upsert_profile(session: AsyncSession, user_id: int, fields: ProfileUpdate) -> Profile:
    """
    Insert the profile or replace it in place, keyed by user_id.

    Every field in ``fields`` overwrites the stored value, including None.
    """
    values = {name: getattr(fields, name) for name in PROFILE_FIELDS}
    insert = session_insert(session)
    stmt = insert(Profile).values(user_id=user_id, **values)
    stmt = stmt.on_conflict_do_update(
        index_elements=[Profile.user_id],
        set_={
            **{name: getattr(stmt.excluded, name) for name in PROFILE_FIELDS},
            "updated_at": func.now(),
        },
    ).returning(Profile)

    result = await session.scalars(stmt, execution_options={"populate_existing": True})
    return result.one()


async def get_profile(session: AsyncSession, user_id: int) -> Optional[Profile]:
    result = await session.execute(select(Profile).where(Profile.user_id == user_id))
    return result.scalar_one_or_none()


async def get_profile_with_user(session: AsyncSession, user_id: int) -> Optional[RowMapping]:
    """
    User columns left-joined with the profile.

    A user without a profile still yields a row with null profile fields;
    None only when the user does not exist.
    """
    stmt = (
        select(
            User.id,
            User.email,
            User.first_name,
            User.last_name,
            User.is_verified,
            User.created_at,
            *(getattr(Profile, name) for name in PROFILE_FIELDS),
            Profile.updated_at,
        )
        .outerjoin(Profile, Profile.user_id == User.id)
        .where(User.id == user_id)
    )
    result = await session.execute(stmt)
    return result.mappings().first()
