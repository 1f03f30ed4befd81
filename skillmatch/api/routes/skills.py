"""Skill catalogue and user skill endpoints."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from skillmatch.api.deps import failure_boundary, parse_id
from skillmatch.core.exceptions import NotFoundError, ValidationError
from skillmatch.db.session import get_db
from skillmatch.queries import skills as skill_queries
from skillmatch.queries import users as user_queries
from skillmatch.schemas.skill import (
    SkillListResponse,
    SkillResponse,
    UserSkillCreate,
    UserSkillEnvelope,
    UserSkillListResponse,
    UserSkillResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/skills", response_model=SkillListResponse)
async def list_skills(
    category: Optional[str] = Query(None, description="Filter by category, e.g. 'Frontend'"),
    db: AsyncSession = Depends(get_db),
):
    with failure_boundary("Failed to get skills"):
        if category:
            skills = await skill_queries.get_skills_by_category(db, category)
        else:
            skills = await skill_queries.get_all_skills(db)

    return SkillListResponse(
        message="Skills retrieved successfully",
        skills=[SkillResponse.model_validate(skill) for skill in skills],
    )


@router.get("/users/{user_id}/skills", response_model=UserSkillListResponse)
async def list_user_skills(user_id: str, db: AsyncSession = Depends(get_db)):
    uid = parse_id(user_id)

    with failure_boundary("Failed to get user skills"):
        rows = await skill_queries.get_user_skills(db, uid)

    return UserSkillListResponse(
        message="User skills retrieved successfully",
        skills=[UserSkillResponse.model_validate(dict(row)) for row in rows],
    )


@router.post("/users/{user_id}/skills", response_model=UserSkillEnvelope)
async def add_user_skill(user_id: str, request: UserSkillCreate, db: AsyncSession = Depends(get_db)):
    """Attach a skill; posting an existing skill again updates its proficiency."""
    uid = parse_id(user_id)
    if request.skill_id is None:
        raise ValidationError("skillId is required")

    with failure_boundary("Failed to add user skill"):
        if await user_queries.find_by_id(db, uid) is None:
            raise NotFoundError("User not found")
        skill = await skill_queries.find_skill_by_id(db, request.skill_id)
        if skill is None:
            raise NotFoundError("Skill not found")

        user_skill = await skill_queries.add_user_skill(
            db, uid, skill.id, request.proficiency_level
        )

    return UserSkillEnvelope(
        message="Skill saved successfully",
        skill=UserSkillResponse(
            id=skill.id,
            name=skill.name,
            category=skill.category,
            proficiency_level=user_skill.proficiency_level,
        ),
    )
