"""Connection (networking request) endpoints."""

import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from skillmatch.api.deps import failure_boundary, parse_id
from skillmatch.core.exceptions import ConflictError, NotFoundError, ValidationError
from skillmatch.db.session import get_db
from skillmatch.queries import connections as connection_queries
from skillmatch.queries import users as user_queries
from skillmatch.schemas.connection import (
    ConnectionCreate,
    ConnectionDetail,
    ConnectionEnvelope,
    ConnectionListResponse,
    ConnectionResponse,
    ConnectionStatusUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/connections", response_model=ConnectionEnvelope, status_code=status.HTTP_201_CREATED)
async def send_connection_request(
    request: ConnectionCreate,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    """Create a pending request; repeating an existing request is a no-op."""
    if request.requester_id is None or request.recipient_id is None:
        raise ValidationError("requesterId and recipientId are required")
    if request.requester_id == request.recipient_id:
        raise ValidationError("Cannot send a connection request to yourself")

    with failure_boundary("Failed to send connection request"):
        for uid in (request.requester_id, request.recipient_id):
            if await user_queries.find_by_id(db, uid) is None:
                raise NotFoundError("User not found")

        connection = await connection_queries.send_request(
            db, request.requester_id, request.recipient_id
        )

    if connection is None:
        response.status_code = status.HTTP_200_OK
        return ConnectionEnvelope(message="Connection request already exists")

    logger.info(f"Connection request {connection.id}: {request.requester_id} -> {request.recipient_id}")
    return ConnectionEnvelope(
        message="Connection request sent",
        connection=ConnectionResponse.model_validate(connection),
    )


@router.patch("/connections/{connection_id}", response_model=ConnectionEnvelope)
async def update_connection_status(
    connection_id: str,
    request: ConnectionStatusUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Accept or reject a pending request. Resolved requests never change again."""
    cid = parse_id(connection_id, "connection ID")
    if request.status is None:
        raise ValidationError("status is required")

    with failure_boundary("Failed to update connection"):
        connection = await connection_queries.update_connection_status(db, cid, request.status)
        if connection is None:
            existing = await connection_queries.find_connection(db, cid)
            if existing is None:
                raise NotFoundError("Connection not found")
            raise ConflictError(f"Connection request already {existing.status}")

    return ConnectionEnvelope(
        message=f"Connection {request.status}",
        connection=ConnectionResponse.model_validate(connection),
    )


@router.get("/users/{user_id}/connections", response_model=ConnectionListResponse)
async def list_user_connections(user_id: str, db: AsyncSession = Depends(get_db)):
    uid = parse_id(user_id)

    with failure_boundary("Failed to get connections"):
        rows = await connection_queries.get_user_connections(db, uid)

    return ConnectionListResponse(
        message="Connections retrieved successfully",
        connections=[ConnectionDetail.model_validate(dict(row)) for row in rows],
    )
