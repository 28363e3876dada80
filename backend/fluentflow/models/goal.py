"""
Modèles SQLAlchemy pour la banque d'objectifs et leurs assignations aux élèves.
"""

import uuid
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, String, Text, Uuid, func, text
from sqlalchemy.orm import relationship

from fluentflow.database import Base


class GoalTemplate(Base):
    """Objectif thérapeutique réutilisable (domaine ciblé, catégorie, formulation)."""
    __tablename__ = "goal_templates"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    target_area = Column(String(100), nullable=False)   # Articulation, Phonology, ...
    category = Column(String(100), nullable=False)      # Initial /s/, Fronting, ...
    goal_text = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class StudentGoal(Base):
    """Association élève ↔ objectif. Une seule assignation active par couple."""
    __tablename__ = "student_goals"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    student_id = Column(Uuid, ForeignKey("students.id", ondelete="CASCADE"), nullable=False)
    goal_id = Column(Uuid, ForeignKey("goal_templates.id", ondelete="CASCADE"), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, server_default=func.now())

    goal = relationship("GoalTemplate", lazy="joined")

    __table_args__ = (
        Index(
            "uq_student_goals_active",
            "student_id",
            "goal_id",
            unique=True,
            postgresql_where=text("is_active"),
            sqlite_where=text("is_active = 1"),
        ),
    )
