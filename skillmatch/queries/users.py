"""User queries: registration and email verification."""

from datetime import datetime
from typing import Optional

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from skillmatch.core.security import utcnow
from skillmatch.models.user import User


async def create_user(
    session: AsyncSession,
    email: str,
    password_hash: str,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
) -> User:
    """
    Insert a new user.

    Raises:
        sqlalchemy.exc.IntegrityError: If the email is already registered.
    """
    stmt = (
        insert(User)
        .values(
            email=email,
            password_hash=password_hash,
            first_name=first_name,
            last_name=last_name,
        )
        .returning(User)
    )
    result = await session.scalars(stmt)
    return result.one()


async def find_by_email(session: AsyncSession, email: str) -> Optional[User]:
    result = await session.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def find_by_id(session: AsyncSession, user_id: int) -> Optional[User]:
    result = await session.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def set_verification_token(
    session: AsyncSession, email: str, token: str, expires_at: datetime
) -> Optional[User]:
    """Overwrite token and expiry for the user with this email; None if no such user."""
    stmt = (
        update(User)
        .where(User.email == email)
        .values(verification_token=token, verification_expires=expires_at, updated_at=func.now())
        .returning(User)
        .execution_options(synchronize_session=False, populate_existing=True)
    )
    result = await session.scalars(stmt)
    return result.one_or_none()


async def find_by_verification_token(session: AsyncSession, token: str) -> Optional[User]:
    """
    Look up a user by an unexpired verification token.

    An expired token and an unknown token both return None, so callers
    cannot tell the two apart.
    """
    stmt = select(User).where(
        User.verification_token == token,
        User.verification_expires > utcnow(),
    )
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def update_verification(
    session: AsyncSession,
    user_id: int,
    is_verified: bool,
    token: Optional[str] = None,
) -> Optional[User]:
    """Set the verified flag and replace the token; a None token also clears its expiry."""
    values = {
        "is_verified": is_verified,
        "verification_token": token,
        "updated_at": func.now(),
    }
    if token is None:
        values["verification_expires"] = None

    stmt = (
        update(User)
        .where(User.id == user_id)
        .values(**values)
        .returning(User)
        .execution_options(synchronize_session=False, populate_existing=True)
    )
    result = await session.scalars(stmt)
    return result.one_or_none()


async def delete_user(session: AsyncSession, user_id: int) -> bool:
    """Delete a user and, by cascade, everything they own."""
    result = await session.execute(delete(User).where(User.id == user_id))
    return result.rowcount > 0
