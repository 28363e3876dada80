"""
Schémas Pydantic pour la banque d'objectifs et les objectifs assignés aux élèves.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, field_validator


class GoalTemplateCreate(BaseModel):
    target_area: str
    category: str
    goal_text: str
    description: Optional[str] = None

    @field_validator("target_area", "category", "goal_text")
    @classmethod
    def not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le champ ne peut pas être vide.")
        return v.strip()


class GoalTemplateResponse(BaseModel):
    id: uuid.UUID
    target_area: str
    category: str
    goal_text: str
    description: Optional[str]

    model_config = {"from_attributes": True}


class StudentGoalResponse(BaseModel):
    id: uuid.UUID
    goal_id: uuid.UUID
    is_active: bool
    goal: GoalTemplateResponse
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class StudentGoalsAssign(BaseModel):
    """Corps de requête pour assigner des objectifs à un élève."""
    goal_ids: List[uuid.UUID]

    @field_validator("goal_ids")
    @classmethod
    def not_empty(cls, v: List[uuid.UUID]) -> List[uuid.UUID]:
        if not v:
            raise ValueError("La liste d'objectifs ne peut pas être vide.")
        return v
