"""Project model."""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, Text, false
from sqlalchemy.orm import relationship

from skillmatch.db.base import Base, StringList, UpdatedAtMixin


class Project(UpdatedAtMixin, Base):
    """Portfolio project owned by a user."""

    __tablename__ = "projects"

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text)
    technologies = Column(StringList)
    github_url = Column(String(255))
    live_url = Column(String(255))
    image_url = Column(String(255))
    is_featured = Column(Boolean, default=False, server_default=false(), nullable=False)

    user = relationship("User", back_populates="projects")

    def __repr__(self):
        return f"<Project {self.title}>"
