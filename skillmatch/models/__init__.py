"""Database models."""

# Import all models in dependency order so every table is registered on Base.metadata

# Base models (no foreign keys)
from skillmatch.models.user import User
from skillmatch.models.skill import Skill

# Models with foreign keys to users
from skillmatch.models.profile import Profile
from skillmatch.models.project import Project
from skillmatch.models.connection import Connection
from skillmatch.models.message import Message

# Models with foreign keys to users and skills
from skillmatch.models.skill import UserSkill

# Export all models
__all__ = [
    "User",
    "Skill",
    "Profile",
    "Project",
    "Connection",
    "Message",
    "UserSkill",
]
