"""Connection (networking) schemas."""

from datetime import datetime
from typing import List, Literal, Optional

from skillmatch.schemas.common import CamelModel, Envelope

ConnectionStatus = Literal["pending", "accepted", "rejected"]


class ConnectionCreate(CamelModel):
    requester_id: Optional[int] = None
    recipient_id: Optional[int] = None


class ConnectionStatusUpdate(CamelModel):
    status: Optional[Literal["accepted", "rejected"]] = None


class ConnectionResponse(CamelModel):
    id: int
    requester_id: int
    recipient_id: int
    status: ConnectionStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ConnectionDetail(ConnectionResponse):
    requester_first_name: Optional[str] = None
    requester_last_name: Optional[str] = None
    recipient_first_name: Optional[str] = None
    recipient_last_name: Optional[str] = None


class ConnectionEnvelope(Envelope):
    connection: Optional[ConnectionResponse] = None


class ConnectionListResponse(Envelope):
    connections: List[ConnectionDetail]
