"""Direct message endpoints."""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from skillmatch.api.deps import failure_boundary, parse_id
from skillmatch.core.exceptions import NotFoundError, ValidationError
from skillmatch.db.session import get_db
from skillmatch.queries import messages as message_queries
from skillmatch.queries import users as user_queries
from skillmatch.schemas.message import (
    MarkReadRequest,
    MessageCreate,
    MessageEnvelope,
    MessageListResponse,
    MessageResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/messages", response_model=MessageEnvelope, status_code=status.HTTP_201_CREATED)
async def send_message(request: MessageCreate, db: AsyncSession = Depends(get_db)):
    if request.sender_id is None or request.recipient_id is None:
        raise ValidationError("senderId and recipientId are required")
    if not request.content or not request.content.strip():
        raise ValidationError("Message content is required")

    with failure_boundary("Failed to send message"):
        for uid in (request.sender_id, request.recipient_id):
            if await user_queries.find_by_id(db, uid) is None:
                raise NotFoundError("User not found")

        message = await message_queries.send_message(
            db, request.sender_id, request.recipient_id, request.content
        )

    return MessageEnvelope(message="Message sent", data=MessageResponse.model_validate(message))


@router.get("/users/{user_id}/messages", response_model=MessageListResponse)
async def list_messages(
    user_id: str,
    unread_only: bool = Query(False, alias="unreadOnly"),
    db: AsyncSession = Depends(get_db),
):
    uid = parse_id(user_id)

    with failure_boundary("Failed to get messages"):
        messages = await message_queries.get_messages_for_user(db, uid, unread_only)

    return MessageListResponse(
        message="Messages retrieved successfully",
        messages=[MessageResponse.model_validate(m) for m in messages],
    )


@router.patch("/messages/{message_id}/read", response_model=MessageEnvelope)
async def mark_message_read(message_id: str, request: MarkReadRequest, db: AsyncSession = Depends(get_db)):
    mid = parse_id(message_id, "message ID")
    if request.recipient_id is None:
        raise ValidationError("recipientId is required")

    with failure_boundary("Failed to update message"):
        message = await message_queries.mark_as_read(db, mid, request.recipient_id)

    if message is None:
        raise NotFoundError("Message not found")

    return MessageEnvelope(message="Message marked as read", data=MessageResponse.model_validate(message))
