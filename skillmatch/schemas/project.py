"""Project schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from skillmatch.schemas.common import CamelModel, Envelope


class ProjectCreate(CamelModel):
    title: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    technologies: Optional[List[str]] = None
    github_url: Optional[str] = Field(None, max_length=255)
    live_url: Optional[str] = Field(None, max_length=255)
    image_url: Optional[str] = Field(None, max_length=255)
    is_featured: bool = False


class ProjectResponse(ProjectCreate):
    id: int
    user_id: int
    title: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class FeaturedProjectResponse(ProjectResponse):
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class ProjectEnvelope(Envelope):
    project: ProjectResponse


class ProjectListResponse(Envelope):
    projects: List[ProjectResponse]


class FeaturedProjectListResponse(Envelope):
    projects: List[FeaturedProjectResponse]
