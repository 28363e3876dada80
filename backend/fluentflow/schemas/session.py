"""
Schémas Pydantic pour la documentation des séances, les mesures par objectif et les notes.

Note : on importe datetime en tant que module (dt) pour éviter le conflit de nommage
entre le champ `date` et le type `datetime.date` dans Pydantic v2.
"""

import uuid
import datetime as dt
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

PromptLevel = Literal["none", "min", "mod", "max"]
Engagement = Literal["poor", "fair", "good", "excellent"]


class GoalDataInput(BaseModel):
    """Mesures saisies pour un objectif pendant la séance."""
    goal_id: uuid.UUID
    accuracy: int = Field(ge=0, le=100)
    trials: int = Field(ge=1)
    prompt_level: PromptLevel = "min"
    prompt_types: str = ""
    activity: str
    utterance: Optional[str] = None
    observations: Optional[str] = None

    @field_validator("activity")
    @classmethod
    def activity_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("L'activité est obligatoire.")
        return v.strip()


class SessionContext(BaseModel):
    """Champs communs au formulaire de séance, utilisés pour rédiger les notes."""
    date: dt.date
    student_id: uuid.UUID
    duration: int = Field(default=30, ge=5, le=120)  # minutes
    location: str = "Speech Room"
    engagement: Engagement = "good"
    goal_data: List[GoalDataInput]

    @field_validator("goal_data")
    @classmethod
    def at_least_one_goal(cls, v: List[GoalDataInput]) -> List[GoalDataInput]:
        if not v:
            raise ValueError("Au moins un objectif doit être renseigné.")
        return v

    @field_validator("location")
    @classmethod
    def location_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le lieu est obligatoire.")
        return v.strip()


class SessionSave(SessionContext):
    """
    Corps de POST /sessions.
    Si `event_id` est fourni, la séance liée à ce créneau est mise à jour (upsert).
    Si `notes` est absent, les notes sont générées côté serveur.
    """
    event_id: Optional[uuid.UUID] = None
    notes: Optional[Dict[uuid.UUID, str]] = None


class NoteGenerateRequest(SessionContext):
    """Corps de POST /notes/generate (aperçu, rien n'est enregistré)."""


class NoteGenerateResponse(BaseModel):
    notes: Dict[uuid.UUID, str]
    skipped_goal_ids: List[uuid.UUID] = []


class SessionGoalDataResponse(BaseModel):
    id: uuid.UUID
    student_id: uuid.UUID
    student_name: str
    student_goal_id: uuid.UUID
    goal_id: uuid.UUID
    target_area: str
    category: str
    accuracy: int
    trials: int
    prompt_level: str
    prompt_types: str
    activity: str
    utterance: Optional[str]
    observations: Optional[str]


class NoteResponse(BaseModel):
    id: uuid.UUID
    student_id: uuid.UUID
    student_name: str
    content: str


class SessionResponse(BaseModel):
    id: uuid.UUID
    date: dt.date
    event_id: Optional[uuid.UUID]
    student_ids: List[uuid.UUID]
    goal_data: List[SessionGoalDataResponse] = []
    notes: List[NoteResponse] = []
    created_at: Optional[dt.datetime] = None


class SessionSaveResult(BaseModel):
    """Résultat d'enregistrement : la séance et les objectifs ignorés (non assignés à l'élève)."""
    session: SessionResponse
    skipped_goal_ids: List[uuid.UUID] = []
