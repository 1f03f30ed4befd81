"""User profile model."""

from sqlalchemy import Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from skillmatch.db.base import Base, StringList, UpdatedAtMixin


class Profile(UpdatedAtMixin, Base):
    """One-to-one extension of User, written only through upsert."""

    __tablename__ = "user_profiles"

    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    bio = Column(Text)
    skills = Column(StringList)  # ["Python", "React", ...], order preserved
    experience_level = Column(String(50))
    location = Column(String(255))
    website = Column(String(255))
    github_url = Column(String(255))
    linkedin_url = Column(String(255))
    avatar_url = Column(String(255))

    user = relationship("User", back_populates="profile")

    def __repr__(self):
        return f"<Profile user={self.user_id}>"
