"""
Modèles SQLAlchemy pour le planning hebdomadaire et les jours fériés.
"""

import uuid
from sqlalchemy import JSON, Column, Date, DateTime, ForeignKey, String, Uuid, func
from sqlalchemy.orm import relationship

from fluentflow.database import Base


class ScheduleEvent(Base):
    __tablename__ = "schedule_events"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    date = Column(Date, nullable=False)
    start_time = Column(String(5), nullable=False)   # "HH:MM"
    end_time = Column(String(5), nullable=False)
    location = Column(String(100), nullable=False, default="Speech Room")
    student_ids = Column(JSON, nullable=False, default=list)
    teacher_id = Column(Uuid, ForeignKey("teachers.id", ondelete="SET NULL"), nullable=True)
    classroom_id = Column(Uuid, ForeignKey("classrooms.id", ondelete="SET NULL"), nullable=True)
    session_type = Column(String(20), nullable=False, default="Individual")  # Individual, Group
    status = Column(String(20), nullable=False, default="Upcoming")          # Upcoming, Seen, Missed
    recurrence_rule = Column(String(255), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    teacher = relationship("Teacher", lazy="joined")
    classroom = relationship("Classroom", lazy="joined")


class Holiday(Base):
    __tablename__ = "holidays"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False)
    date = Column(Date, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
