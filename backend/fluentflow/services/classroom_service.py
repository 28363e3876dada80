"""
Service métier pour les classes.
"""

import logging
from typing import List

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from fluentflow.models.student import Student
from fluentflow.models.teacher import Classroom, Teacher
from fluentflow.schemas.teacher import ClassroomCreate, ClassroomResponse, TeacherSummary

logger = logging.getLogger(__name__)


def create_classroom(db: Session, data: ClassroomCreate) -> ClassroomResponse:
    """
    Crée une classe, rattachée ou non à un enseignant.
    Lève une ValueError si l'enseignant indiqué n'existe pas.
    """
    if data.teacher_id is not None and db.get(Teacher, data.teacher_id) is None:
        raise ValueError("Enseignant introuvable.")

    classroom = Classroom(name=data.name, grade=data.grade, teacher_id=data.teacher_id)
    db.add(classroom)
    db.commit()
    db.refresh(classroom)
    logger.info("Classe créée : %s (%s)", classroom.name, classroom.id)
    return _to_response(db, classroom)


def get_classrooms(db: Session) -> List[ClassroomResponse]:
    """Retourne toutes les classes, triées par nom."""
    classrooms = db.execute(
        select(Classroom).order_by(Classroom.name)
    ).scalars().all()
    return [_to_response(db, c) for c in classrooms]


def _to_response(db: Session, classroom: Classroom) -> ClassroomResponse:
    """Construit le schéma de réponse avec le nombre d'élèves actifs."""
    nb_students = db.execute(
        select(func.count())
        .select_from(Student)
        .where(Student.classroom_id == classroom.id, Student.is_active.is_(True))
    ).scalar() or 0

    teacher = None
    if classroom.teacher is not None:
        teacher = TeacherSummary(id=classroom.teacher.id, name=classroom.teacher.name)

    return ClassroomResponse(
        id=classroom.id,
        name=classroom.name,
        grade=classroom.grade,
        teacher=teacher,
        nb_students=nb_students,
        created_at=classroom.created_at,
    )
