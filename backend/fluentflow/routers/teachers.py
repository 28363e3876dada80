"""
Router pour les enseignants.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.orm import Session

from fluentflow.database import get_db
from fluentflow.dependencies import get_current_user
from fluentflow.models.teacher import Teacher
from fluentflow.schemas.teacher import TeacherCreate, TeacherResponse

router = APIRouter(
    prefix="/api/v1/teachers",
    tags=["Enseignants"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=List[TeacherResponse], summary="Lister les enseignants")
def list_teachers(db: Session = Depends(get_db)):
    """Retourne tous les enseignants triés par nom."""
    return db.execute(select(Teacher).order_by(Teacher.name)).scalars().all()


@router.post("", response_model=TeacherResponse, status_code=201, summary="Créer un enseignant")
def create_teacher(data: TeacherCreate, db: Session = Depends(get_db)):
    teacher = Teacher(name=data.name, email=data.email, classroom=data.classroom)
    db.add(teacher)
    db.commit()
    db.refresh(teacher)
    return teacher
