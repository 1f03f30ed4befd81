"""
User profile schemas.

``ProfileUpdate`` is also the query-layer input for upserts: every field is
optional, and an omitted field is stored as null rather than preserved.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from skillmatch.schemas.common import CamelModel, Envelope


class ProfileUpdate(CamelModel):
    """Full desired state of a profile."""

    bio: Optional[str] = None
    skills: Optional[List[str]] = Field(None, description="Ordered list of skill names")
    experience_level: Optional[str] = Field(None, max_length=50)
    location: Optional[str] = Field(None, max_length=255)
    website: Optional[str] = Field(None, max_length=255)
    github_url: Optional[str] = Field(None, max_length=255)
    linkedin_url: Optional[str] = Field(None, max_length=255)
    avatar_url: Optional[str] = Field(None, max_length=255)


class ProfileRecord(ProfileUpdate):
    """A stored user_profiles row."""

    id: int
    user_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProfileWithUser(ProfileUpdate):
    """User joined with their (possibly missing) profile."""

    id: int
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    is_verified: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProfileResponse(Envelope):
    profile: ProfileWithUser


class ProfileUpdateResponse(Envelope):
    profile: ProfileRecord
