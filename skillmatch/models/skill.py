"""Skill reference data and the user/skill join."""

from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, String, UniqueConstraint

from skillmatch.db.base import Base

PROFICIENCY_LEVELS = ("beginner", "intermediate", "advanced", "expert")


class Skill(Base):
    """Seeded at migration time; unique by name."""

    __tablename__ = "skills"

    name = Column(String(100), unique=True, nullable=False)
    category = Column(String(50))

    def __repr__(self):
        return f"<Skill {self.name}>"


class UserSkill(Base):
    """Many-to-many join of User and Skill with a proficiency level."""

    __tablename__ = "user_skills"
    __table_args__ = (
        UniqueConstraint("user_id", "skill_id", name="uq_user_skills_user_skill"),
        CheckConstraint(
            f"proficiency_level IN ({', '.join(repr(level) for level in PROFICIENCY_LEVELS)})",
            name="ck_user_skills_proficiency_level",
        ),
    )

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    skill_id = Column(Integer, ForeignKey("skills.id", ondelete="CASCADE"), nullable=False)
    proficiency_level = Column(String(20), default="beginner", server_default="beginner", nullable=False)
