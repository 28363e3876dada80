"""
Modèles SQLAlchemy pour les séances réalisées, leurs mesures par objectif et les notes.
Nommé TherapySession pour éviter la confusion avec sqlalchemy.orm.Session.
"""

import uuid
from sqlalchemy import (
    JSON,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    Uuid,
    func,
)
from sqlalchemy.orm import relationship

from fluentflow.database import Base


class TherapySession(Base):
    __tablename__ = "sessions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    date = Column(Date, nullable=False)
    event_id = Column(Uuid, ForeignKey("schedule_events.id", ondelete="SET NULL"), unique=True, nullable=True)
    student_ids = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    goal_data = relationship("SessionGoalData", lazy="selectin", cascade="all, delete-orphan")
    notes = relationship("Note", lazy="selectin", cascade="all, delete-orphan")


class SessionGoalData(Base):
    """Mesures d'une séance pour un objectif d'un élève."""
    __tablename__ = "session_goal_data"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    session_id = Column(Uuid, ForeignKey("sessions.id", ondelete="CASCADE"), nullable=False)
    student_goal_id = Column(Uuid, ForeignKey("student_goals.id", ondelete="CASCADE"), nullable=False)
    student_id = Column(Uuid, ForeignKey("students.id", ondelete="CASCADE"), nullable=False)
    accuracy = Column(Integer, nullable=False)
    trials = Column(Integer, nullable=False)
    prompt_level = Column(String(10), nullable=False)  # none, min, mod, max
    prompt_types = Column(String(255), nullable=False, default="")
    activity = Column(Text, nullable=False)
    utterance = Column(Text, nullable=True)
    observations = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    student_goal = relationship("StudentGoal", lazy="joined")
    student = relationship("Student", lazy="joined")

    __table_args__ = (
        UniqueConstraint("session_id", "student_goal_id", "student_id", name="uq_session_goal_data"),
        CheckConstraint("accuracy >= 0 AND accuracy <= 100", name="ck_session_goal_data_accuracy"),
        CheckConstraint("trials >= 1", name="ck_session_goal_data_trials"),
    )


class Note(Base):
    """Note d'évolution générée pour un élève à l'issue d'une séance."""
    __tablename__ = "notes"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    session_id = Column(Uuid, ForeignKey("sessions.id", ondelete="CASCADE"), nullable=False)
    student_id = Column(Uuid, ForeignKey("students.id", ondelete="CASCADE"), nullable=False)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    student = relationship("Student", lazy="joined")

    __table_args__ = (
        UniqueConstraint("session_id", "student_id", name="uq_notes_session_student"),
    )
