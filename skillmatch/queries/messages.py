"""Message queries."""

from typing import Optional, Sequence

from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from skillmatch.models.message import Message


async def send_message(
    session: AsyncSession, sender_id: int, recipient_id: int, content: str
) -> Message:
    stmt = (
        insert(Message)
        .values(sender_id=sender_id, recipient_id=recipient_id, content=content)
        .returning(Message)
    )
    result = await session.scalars(stmt)
    return result.one()


async def get_messages_for_user(
    session: AsyncSession, user_id: int, unread_only: bool = False
) -> Sequence[Message]:
    """Inbox of ``user_id``, newest first."""
    stmt = select(Message).where(Message.recipient_id == user_id)
    if unread_only:
        stmt = stmt.where(Message.is_read.is_(False))
    stmt = stmt.order_by(Message.created_at.desc(), Message.id.desc())
    result = await session.scalars(stmt)
    return result.all()


async def mark_as_read(
    session: AsyncSession, message_id: int, recipient_id: int
) -> Optional[Message]:
    """Only the recipient can mark a message read; None if no such message for them."""
    stmt = (
        update(Message)
        .where(Message.id == message_id, Message.recipient_id == recipient_id)
        .values(is_read=True)
        .returning(Message)
        .execution_options(synchronize_session=False, populate_existing=True)
    )
    result = await session.scalars(stmt)
    return result.one_or_none()
