"""Skill queries."""

from typing import List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.engine import RowMapping
from sqlalchemy.ext.asyncio import AsyncSession

from skillmatch.db.session import session_insert
from skillmatch.models.skill import Skill, UserSkill


async def get_all_skills(session: AsyncSession) -> Sequence[Skill]:
    result = await session.scalars(select(Skill).order_by(Skill.name))
    return result.all()


async def get_skills_by_category(session: AsyncSession, category: str) -> Sequence[Skill]:
    result = await session.scalars(
        select(Skill).where(Skill.category == category).order_by(Skill.name)
    )
    return result.all()


async def find_skill_by_id(session: AsyncSession, skill_id: int) -> Optional[Skill]:
    return await session.get(Skill, skill_id)


async def add_user_skill(
    session: AsyncSession,
    user_id: int,
    skill_id: int,
    proficiency_level: str = "beginner",
) -> UserSkill:
    """Attach a skill to a user; re-adding the same skill updates the proficiency."""
    insert = session_insert(session)
    stmt = insert(UserSkill).values(
        user_id=user_id, skill_id=skill_id, proficiency_level=proficiency_level
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=[UserSkill.user_id, UserSkill.skill_id],
        set_={"proficiency_level": stmt.excluded.proficiency_level},
    ).returning(UserSkill)

    result = await session.scalars(stmt, execution_options={"populate_existing": True})
    return result.one()


async def get_user_skills(session: AsyncSession, user_id: int) -> List[RowMapping]:
    stmt = (
        select(Skill.id, Skill.name, Skill.category, UserSkill.proficiency_level)
        .join(UserSkill, UserSkill.skill_id == Skill.id)
        .where(UserSkill.user_id == user_id)
        .order_by(Skill.name)
    )
    result = await session.execute(stmt)
    return list(result.mappings().all())
