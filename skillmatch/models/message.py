"""Direct message model (append-only)."""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, Text, false

from skillmatch.db.base import Base


class Message(Base):
    __tablename__ = "messages"

    sender_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    recipient_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    is_read = Column(Boolean, default=False, server_default=false(), nullable=False)
