"""
Schémas Pydantic pour les enseignants et les classes.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, field_validator


class TeacherCreate(BaseModel):
    name: str
    email: Optional[EmailStr] = None
    classroom: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le nom de l'enseignant ne peut pas être vide.")
        return v.strip()


class TeacherSummary(BaseModel):
    id: uuid.UUID
    name: str

    model_config = {"from_attributes": True}


class TeacherResponse(BaseModel):
    id: uuid.UUID
    name: str
    email: Optional[str]
    classroom: Optional[str]
    created_at: datetime

    model_config = {"from_attributes": True}


class ClassroomCreate(BaseModel):
    name: str
    grade: Optional[str] = None
    teacher_id: Optional[uuid.UUID] = None

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le nom de la classe ne peut pas être vide.")
        return v.strip()


class ClassroomSummary(BaseModel):
    id: uuid.UUID
    name: str
    grade: Optional[str]

    model_config = {"from_attributes": True}


class ClassroomResponse(BaseModel):
    id: uuid.UUID
    name: str
    grade: Optional[str]
    teacher: Optional[TeacherSummary] = None
    nb_students: int
    created_at: datetime
