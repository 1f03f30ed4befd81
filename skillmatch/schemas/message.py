"""Direct message schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from skillmatch.schemas.common import CamelModel, Envelope


class MessageCreate(CamelModel):
    sender_id: Optional[int] = None
    recipient_id: Optional[int] = None
    content: Optional[str] = Field(None, max_length=10000)


class MarkReadRequest(CamelModel):
    recipient_id: Optional[int] = None


class MessageResponse(CamelModel):
    id: int
    sender_id: int
    recipient_id: int
    content: str
    is_read: bool
    created_at: Optional[datetime] = None


class MessageEnvelope(Envelope):
    data: MessageResponse


class MessageListResponse(Envelope):
    messages: List[MessageResponse]
