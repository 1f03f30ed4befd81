"""Project queries."""

from typing import List, Sequence

from sqlalchemy import insert, select
from sqlalchemy.engine import RowMapping
from sqlalchemy.ext.asyncio import AsyncSession

from skillmatch.models.project import Project
from skillmatch.models.user import User
from skillmatch.schemas.project import ProjectCreate

PROJECT_FIELDS = tuple(ProjectCreate.model_fields)


async def create_project(session: AsyncSession, user_id: int, data: ProjectCreate) -> Project:
    values = {name: getattr(data, name) for name in PROJECT_FIELDS}
    stmt = insert(Project).values(user_id=user_id, **values).returning(Project)
    result = await session.scalars(stmt)
    return result.one()


async def get_user_projects(session: AsyncSession, user_id: int) -> Sequence[Project]:
    stmt = (
        select(Project)
        .where(Project.user_id == user_id)
        .order_by(Project.created_at.desc(), Project.id.desc())
    )
    result = await session.scalars(stmt)
    return result.all()


async def get_featured_projects(session: AsyncSession, limit: int = 10) -> List[RowMapping]:
    """Featured projects with their owner's name, newest first."""
    stmt = (
        select(
            *Project.__table__.columns,
            User.first_name,
            User.last_name,
        )
        .join(User, Project.user_id == User.id)
        .where(Project.is_featured.is_(True))
        .order_by(Project.created_at.desc(), Project.id.desc())
        .limit(limit)
    )
    result = await session.execute(stmt)
    return list(result.mappings().all())
