"""
Modèle SQLAlchemy pour la table students.
Suppression logique uniquement (is_active = False) : l'historique des séances est conservé.
"""

import uuid
from sqlalchemy import JSON, Boolean, Column, Date, DateTime, ForeignKey, String, Text, Uuid, func
from sqlalchemy.orm import relationship

from fluentflow.database import Base


class Student(Base):
    __tablename__ = "students"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(200), nullable=False)
    date_of_birth = Column(Date, nullable=False)
    grade = Column(String(20), nullable=False)
    guardians = Column(JSON, nullable=False, default=list)   # ["Sarah Thompson", ...]
    iep_dates = Column(JSON, nullable=False, default=list)   # ["2024-03-01", ...]
    notes = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    classroom_id = Column(Uuid, ForeignKey("classrooms.id", ondelete="SET NULL"), nullable=True)
    teacher_id = Column(Uuid, ForeignKey("teachers.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    teacher = relationship("Teacher", lazy="joined")
    classroom = relationship("Classroom", lazy="joined")
    goals = relationship(
        "StudentGoal",
        primaryjoin="and_(StudentGoal.student_id == Student.id, StudentGoal.is_active == True)",
        viewonly=True,
        lazy="selectin",
    )
