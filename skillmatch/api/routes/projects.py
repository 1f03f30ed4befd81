"""Project endpoints."""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from skillmatch.api.deps import failure_boundary, parse_id
from skillmatch.core.exceptions import NotFoundError, ValidationError
from skillmatch.db.session import get_db
from skillmatch.queries import projects as project_queries
from skillmatch.queries import users as user_queries
from skillmatch.schemas.project import (
    FeaturedProjectListResponse,
    FeaturedProjectResponse,
    ProjectCreate,
    ProjectEnvelope,
    ProjectListResponse,
    ProjectResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/projects/featured", response_model=FeaturedProjectListResponse)
async def list_featured_projects(
    limit: int = Query(10, ge=1, le=50),
    db: AsyncSession = Depends(get_db),
):
    with failure_boundary("Failed to get featured projects"):
        rows = await project_queries.get_featured_projects(db, limit)

    return FeaturedProjectListResponse(
        message="Featured projects retrieved successfully",
        projects=[FeaturedProjectResponse.model_validate(dict(row)) for row in rows],
    )


@router.get("/users/{user_id}/projects", response_model=ProjectListResponse)
async def list_user_projects(user_id: str, db: AsyncSession = Depends(get_db)):
    uid = parse_id(user_id)

    with failure_boundary("Failed to get user projects"):
        projects = await project_queries.get_user_projects(db, uid)

    return ProjectListResponse(
        message="Projects retrieved successfully",
        projects=[ProjectResponse.model_validate(project) for project in projects],
    )


@router.post(
    "/users/{user_id}/projects",
    response_model=ProjectEnvelope,
    status_code=status.HTTP_201_CREATED,
)
async def create_project(user_id: str, request: ProjectCreate, db: AsyncSession = Depends(get_db)):
    uid = parse_id(user_id)
    if not request.title or not request.title.strip():
        raise ValidationError("Project title is required")

    with failure_boundary("Failed to create project"):
        if await user_queries.find_by_id(db, uid) is None:
            raise NotFoundError("User not found")
        project = await project_queries.create_project(db, uid, request)

    logger.info(f"Project {project.id} created for user {uid}")
    return ProjectEnvelope(
        message="Project created successfully",
        project=ProjectResponse.model_validate(project),
    )
