"""
Modèles SQLAlchemy pour les enseignants et les classes.
Les enseignants ne sont pas des utilisateurs : ce sont les titulaires
des classes d'où viennent les élèves suivis.
"""

import uuid
from sqlalchemy import Column, DateTime, ForeignKey, String, Uuid, func
from sqlalchemy.orm import relationship

from fluentflow.database import Base


class Teacher(Base):
    __tablename__ = "teachers"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(200), nullable=False)
    email = Column(String(255), nullable=True)
    classroom = Column(String(100), nullable=True)  # libellé de salle, ex. "Room 101"
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class Classroom(Base):
    __tablename__ = "classrooms"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(200), nullable=False)
    grade = Column(String(20), nullable=True)
    teacher_id = Column(Uuid, ForeignKey("teachers.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    teacher = relationship("Teacher", lazy="joined")
