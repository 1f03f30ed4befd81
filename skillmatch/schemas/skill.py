"""Skill schemas."""

from typing import List, Literal, Optional

from skillmatch.schemas.common import CamelModel, Envelope

ProficiencyLevel = Literal["beginner", "intermediate", "advanced", "expert"]


class SkillResponse(CamelModel):
    id: int
    name: str
    category: Optional[str] = None


class UserSkillCreate(CamelModel):
    skill_id: Optional[int] = None
    proficiency_level: ProficiencyLevel = "beginner"


class UserSkillResponse(SkillResponse):
    proficiency_level: ProficiencyLevel


class SkillListResponse(Envelope):
    skills: List[SkillResponse]


class UserSkillListResponse(Envelope):
    skills: List[UserSkillResponse]


class UserSkillEnvelope(Envelope):
    skill: UserSkillResponse
