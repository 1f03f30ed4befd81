"""Connection queries."""

from typing import List, Optional

from sqlalchemy import func, or_, select, update
from sqlalchemy.engine import RowMapping
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from skillmatch.db.session import session_insert
from skillmatch.models.connection import Connection
from skillmatch.models.user import User


async def send_request(
    session: AsyncSession, requester_id: int, recipient_id: int
) -> Optional[Connection]:
    """
    Create a pending request.

    Returns None, without raising, if the (requester, recipient) pair exists.
    """
    insert = session_insert(session)
    stmt = (
        insert(Connection)
        .values(requester_id=requester_id, recipient_id=recipient_id)
        .on_conflict_do_nothing(index_elements=[Connection.requester_id, Connection.recipient_id])
        .returning(Connection)
    )
    result = await session.scalars(stmt)
    return result.one_or_none()


async def find_connection(session: AsyncSession, connection_id: int) -> Optional[Connection]:
    result = await session.execute(select(Connection).where(Connection.id == connection_id))
    return result.scalar_one_or_none()


async def update_connection_status(
    session: AsyncSession, connection_id: int, status: str
) -> Optional[Connection]:
    """
    Resolve a pending request to accepted or rejected.

    Only pending rows match, so a resolved request never moves again.
    Returns None if the row is missing or already resolved.
    """
    stmt = (
        update(Connection)
        .where(Connection.id == connection_id, Connection.status == "pending")
        .values(status=status, updated_at=func.now())
        .returning(Connection)
        .execution_options(synchronize_session=False, populate_existing=True)
    )
    result = await session.scalars(stmt)
    return result.one_or_none()


async def get_user_connections(session: AsyncSession, user_id: int) -> List[RowMapping]:
    requester = aliased(User)
    recipient = aliased(User)
    stmt = (
        select(
            *Connection.__table__.columns,
            requester.first_name.label("requester_first_name"),
            requester.last_name.label("requester_last_name"),
            recipient.first_name.label("recipient_first_name"),
            recipient.last_name.label("recipient_last_name"),
        )
        .join(requester, Connection.requester_id == requester.id)
        .join(recipient, Connection.recipient_id == recipient.id)
        .where(or_(Connection.requester_id == user_id, Connection.recipient_id == user_id))
        .order_by(Connection.created_at.desc(), Connection.id.desc())
    )
    result = await session.execute(stmt)
    return list(result.mappings().all())
