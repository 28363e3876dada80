"""
Schémas Pydantic pour les élèves.

Note : on importe datetime en tant que module (dt) pour éviter le conflit de nommage
entre les champs de type date et le type `datetime.date` dans Pydantic v2.
"""

import uuid
import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, field_validator

from fluentflow.schemas.goal import StudentGoalResponse
from fluentflow.schemas.teacher import ClassroomSummary, TeacherSummary


class StudentCreate(BaseModel):
    """Schéma de création d'un élève (POST /students)."""
    name: str
    date_of_birth: dt.date
    grade: str
    classroom_id: Optional[uuid.UUID] = None
    teacher_id: Optional[uuid.UUID] = None
    guardians: List[str] = []
    iep_dates: List[dt.date] = []
    notes: Optional[str] = None

    @field_validator("name", "grade")
    @classmethod
    def not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le champ ne peut pas être vide.")
        return v.strip()

    @field_validator("date_of_birth")
    @classmethod
    def not_in_future(cls, v: dt.date) -> dt.date:
        if v > dt.date.today():
            raise ValueError("La date de naissance ne peut pas être dans le futur.")
        return v


class StudentUpdate(BaseModel):
    """Schéma de mise à jour partielle d'un élève (PATCH /students/{id})."""
    name: Optional[str] = None
    date_of_birth: Optional[dt.date] = None
    grade: Optional[str] = None
    classroom_id: Optional[uuid.UUID] = None
    teacher_id: Optional[uuid.UUID] = None
    guardians: Optional[List[str]] = None
    iep_dates: Optional[List[dt.date]] = None
    notes: Optional[str] = None

    @field_validator("name", "grade", "date_of_birth", "guardians", "iep_dates")
    @classmethod
    def not_null(cls, v):
        # Colonnes NOT NULL : un null explicite est refusé, un champ absent est ignoré
        if v is None:
            raise ValueError("Ce champ ne peut pas être nul.")
        return v

    @field_validator("name", "grade")
    @classmethod
    def not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le champ ne peut pas être vide.")
        return v.strip()

    @field_validator("date_of_birth")
    @classmethod
    def not_in_future(cls, v: dt.date) -> dt.date:
        if v > dt.date.today():
            raise ValueError("La date de naissance ne peut pas être dans le futur.")
        return v


class StudentSummary(BaseModel):
    id: uuid.UUID
    name: str

    model_config = {"from_attributes": True}


class StudentResponse(BaseModel):
    """Schéma de réponse pour un élève, avec enseignant, classe et objectifs actifs."""
    id: uuid.UUID
    name: str
    date_of_birth: dt.date
    grade: str
    guardians: List[str]
    iep_dates: List[dt.date]
    notes: Optional[str]
    is_active: bool
    classroom_id: Optional[uuid.UUID]
    teacher_id: Optional[uuid.UUID]
    teacher: Optional[TeacherSummary] = None
    classroom: Optional[ClassroomSummary] = None
    goals: List[StudentGoalResponse] = []
    created_at: Optional[dt.datetime] = None

    model_config = {"from_attributes": True}
