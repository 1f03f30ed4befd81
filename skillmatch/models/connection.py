"""Connection (networking request) model."""

from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, String, UniqueConstraint

from skillmatch.db.base import Base, UpdatedAtMixin

CONNECTION_STATUSES = ("pending", "accepted", "rejected")


class Connection(UpdatedAtMixin, Base):
    """
    Directed request from requester to recipient.

    Created pending, resolved once to accepted or rejected. The store only
    guarantees one row per ordered pair; the no-backward-transition rule is
    applied by the query layer.
    """

    __tablename__ = "connections"
    __table_args__ = (
        UniqueConstraint("requester_id", "recipient_id", name="uq_connections_pair"),
        CheckConstraint(
            f"status IN ({', '.join(repr(status) for status in CONNECTION_STATUSES)})",
            name="ck_connections_status",
        ),
    )

    requester_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    recipient_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(String(20), default="pending", server_default="pending", nullable=False)
