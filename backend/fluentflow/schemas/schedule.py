"""
Schémas Pydantic pour le planning, la grille hebdomadaire et les jours fériés.

Note : on importe datetime en tant que module (dt) pour éviter le conflit de nommage
entre le champ `date` et le type `datetime.date` dans Pydantic v2.
"""

import re
import uuid
import datetime as dt
from typing import Dict, List, Optional

from pydantic import BaseModel, field_validator, model_validator

from fluentflow.schemas.student import StudentSummary
from fluentflow.schemas.teacher import ClassroomSummary, TeacherSummary

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")
EVENT_STATUSES = {"Upcoming", "Seen", "Missed"}
SESSION_TYPES = {"Individual", "Group"}


def _check_time(v: Optional[str]) -> Optional[str]:
    if v is not None and not TIME_PATTERN.match(v):
        raise ValueError("Heure invalide, format attendu HH:MM.")
    return v


class ScheduleEventCreate(BaseModel):
    date: dt.date
    start_time: str
    end_time: Optional[str] = None  # déduit (début + 30 min) si absent
    location: Optional[str] = None
    student_ids: List[uuid.UUID] = []
    teacher_id: Optional[uuid.UUID] = None
    classroom_id: Optional[uuid.UUID] = None
    session_type: str = "Individual"
    recurrence_rule: Optional[str] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def valid_time(cls, v: Optional[str]) -> Optional[str]:
        return _check_time(v)

    @field_validator("session_type")
    @classmethod
    def valid_session_type(cls, v: str) -> str:
        if v not in SESSION_TYPES:
            raise ValueError(f"Type de séance invalide. Valeurs acceptées : {SESSION_TYPES}")
        return v

    @model_validator(mode="after")
    def end_after_start(self):
        if self.end_time is not None and self.end_time <= self.start_time:
            raise ValueError("L'heure de fin doit être postérieure à l'heure de début.")
        return self


class ScheduleEventUpdate(BaseModel):
    date: Optional[dt.date] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    location: Optional[str] = None
    student_ids: Optional[List[uuid.UUID]] = None
    status: Optional[str] = None
    recurrence_rule: Optional[str] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def valid_time(cls, v: Optional[str]) -> Optional[str]:
        return _check_time(v)

    @field_validator("status")
    @classmethod
    def valid_status(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and v not in EVENT_STATUSES:
            raise ValueError(f"Statut invalide. Valeurs acceptées : {EVENT_STATUSES}")
        return v


class ScheduleEventResponse(BaseModel):
    id: uuid.UUID
    date: dt.date
    start_time: str
    end_time: str
    location: str
    student_ids: List[uuid.UUID]
    students: List[StudentSummary] = []
    teacher: Optional[TeacherSummary] = None
    classroom: Optional[ClassroomSummary] = None
    session_type: str
    status: str
    recurrence_rule: Optional[str]


class HolidayCreate(BaseModel):
    name: str
    date: dt.date

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le nom du jour férié ne peut pas être vide.")
        return v.strip()


class HolidayResponse(BaseModel):
    id: uuid.UUID
    name: str
    date: dt.date

    model_config = {"from_attributes": True}


class GridDay(BaseModel):
    date: dt.date
    label: str                      # Mon, Tue, ...
    holiday: Optional[str] = None   # nom du jour férié s'il y en a un


class GridCell(BaseModel):
    date: dt.date
    events: List[ScheduleEventResponse] = []


class GridRow(BaseModel):
    time: str
    cells: List[GridCell]


class WeekGridResponse(BaseModel):
    week_start: dt.date
    days: List[GridDay]
    rows: List[GridRow]
    status_counts: Dict[str, int]
