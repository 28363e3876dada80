"""
Service métier pour les élèves et leurs objectifs assignés.
"""

import uuid
import logging
from typing import List, Optional

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from fluentflow.models.goal import GoalTemplate, StudentGoal
from fluentflow.models.student import Student
from fluentflow.models.teacher import Classroom, Teacher
from fluentflow.schemas.goal import StudentGoalsAssign
from fluentflow.schemas.student import StudentCreate, StudentUpdate

logger = logging.getLogger(__name__)


def list_students(db: Session, search: Optional[str] = None) -> List[Student]:
    """
    Retourne les élèves actifs triés par nom.
    `search` filtre sur le nom ou le niveau (sous-chaîne, insensible à la casse).
    """
    query = select(Student).where(Student.is_active.is_(True))
    if search:
        pattern = f"%{search.strip()}%"
        query = query.where(or_(Student.name.ilike(pattern), Student.grade.ilike(pattern)))
    return db.execute(query.order_by(Student.name)).scalars().all()


def get_student(db: Session, student_id: uuid.UUID) -> Optional[Student]:
    """Retourne un élève (actif ou non) par son ID, ou None."""
    return db.get(Student, student_id)


def create_student(db: Session, data: StudentCreate) -> Student:
    """Crée un élève actif. Lève une ValueError si la classe ou l'enseignant est introuvable."""
    _check_references(db, data.classroom_id, data.teacher_id)
    student = Student(
        name=data.name,
        date_of_birth=data.date_of_birth,
        grade=data.grade,
        classroom_id=data.classroom_id,
        teacher_id=data.teacher_id,
        guardians=list(data.guardians),
        iep_dates=[d.isoformat() for d in data.iep_dates],
        notes=data.notes,
        is_active=True,
    )
    db.add(student)
    db.commit()
    db.refresh(student)
    logger.info("Élève créé : %s (%s)", student.name, student.id)
    return student


def update_student(db: Session, student_id: uuid.UUID, data: StudentUpdate) -> Optional[Student]:
    """
    Met à jour les champs fournis. Les champs absents ne sont pas modifiés.
    Lève une ValueError si la classe ou l'enseignant indiqué est introuvable.
    """
    student = db.get(Student, student_id)
    if student is None:
        return None

    update_data = data.model_dump(exclude_unset=True)
    _check_references(db, update_data.get("classroom_id"), update_data.get("teacher_id"))
    if update_data.get("iep_dates") is not None:
        update_data["iep_dates"] = [d.isoformat() for d in update_data["iep_dates"]]
    for field, value in update_data.items():
        setattr(student, field, value)

    db.commit()
    db.refresh(student)
    return student


def deactivate_student(db: Session, student_id: uuid.UUID) -> Optional[Student]:
    """
    Suppression logique : is_active passe à False.
    Les séances, mesures et notes de l'élève sont conservées.
    """
    student = db.get(Student, student_id)
    if student is None:
        return None

    student.is_active = False
    db.commit()
    db.refresh(student)
    logger.info("Élève désactivé : %s", student.id)
    return student


def list_student_goals(db: Session, student_id: uuid.UUID) -> List[StudentGoal]:
    """Objectifs actifs d'un élève, triés par domaine puis catégorie."""
    return db.execute(
        select(StudentGoal)
        .join(GoalTemplate, GoalTemplate.id == StudentGoal.goal_id)
        .where(StudentGoal.student_id == student_id, StudentGoal.is_active.is_(True))
        .order_by(GoalTemplate.target_area, GoalTemplate.category)
    ).scalars().all()


def assign_goals(db: Session, student_id: uuid.UUID, data: StudentGoalsAssign) -> List[StudentGoal]:
    """
    Assigne des objectifs de la banque à un élève.
    - objectif déjà actif : ignoré (pas de doublon)
    - assignation inactive existante : réactivée
    - sinon : nouvelle assignation
    """
    student = db.get(Student, student_id)
    if student is None:
        raise ValueError("Élève introuvable.")

    known_goals = set(db.execute(
        select(GoalTemplate.id).where(GoalTemplate.id.in_(data.goal_ids))
    ).scalars().all())
    missing = [gid for gid in data.goal_ids if gid not in known_goals]
    if missing:
        raise ValueError(f"Objectif introuvable : {missing[0]}")

    existing = db.execute(
        select(StudentGoal).where(
            StudentGoal.student_id == student_id,
            StudentGoal.goal_id.in_(data.goal_ids),
        )
    ).scalars().all()
    by_goal = {}
    for link in existing:
        # Une assignation active prime sur les anciennes inactives
        if link.goal_id not in by_goal or link.is_active:
            by_goal[link.goal_id] = link

    seen = set()
    for goal_id in data.goal_ids:
        if goal_id in seen:
            continue
        seen.add(goal_id)

        link = by_goal.get(goal_id)
        if link is None:
            db.add(StudentGoal(student_id=student_id, goal_id=goal_id, is_active=True))
        elif not link.is_active:
            link.is_active = True

    db.commit()
    return list_student_goals(db, student_id)


def deactivate_goal(db: Session, student_id: uuid.UUID, goal_id: uuid.UUID) -> bool:
    """Retire un objectif actif d'un élève. Retourne False si aucune assignation active."""
    link = db.execute(
        select(StudentGoal).where(
            StudentGoal.student_id == student_id,
            StudentGoal.goal_id == goal_id,
            StudentGoal.is_active.is_(True),
        )
    ).scalar()
    if link is None:
        return False

    link.is_active = False
    db.commit()
    return True


def _check_references(db: Session, classroom_id: Optional[uuid.UUID], teacher_id: Optional[uuid.UUID]) -> None:
    if classroom_id is not None and db.get(Classroom, classroom_id) is None:
        raise ValueError("Classe introuvable.")
    if teacher_id is not None and db.get(Teacher, teacher_id) is None:
        raise ValueError("Enseignant introuvable.")
