"""User model."""

from sqlalchemy import Boolean, Column, DateTime, String, false
from sqlalchemy.orm import relationship

from skillmatch.db.base import Base, UpdatedAtMixin


class User(UpdatedAtMixin, Base):
    """Registered account; owns every other row through cascading foreign keys."""

    __tablename__ = "users"

    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    first_name = Column(String(100))
    last_name = Column(String(100))
    is_verified = Column(Boolean, default=False, server_default=false(), nullable=False)
    verification_token = Column(String(255), index=True)
    verification_expires = Column(DateTime)

    # Relationships
    profile = relationship("Profile", back_populates="user", uselist=False, passive_deletes=True)
    projects = relationship("Project", back_populates="user", passive_deletes=True)

    def __repr__(self):
        return f"<User {self.email}>"
