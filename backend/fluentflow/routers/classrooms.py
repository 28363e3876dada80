"""
Router pour les classes.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from fluentflow.database import get_db
from fluentflow.dependencies import get_current_user
from fluentflow.schemas.teacher import ClassroomCreate, ClassroomResponse
from fluentflow.services import classroom_service

router = APIRouter(
    prefix="/api/v1/classrooms",
    tags=["Classes"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=List[ClassroomResponse], summary="Lister les classes")
def list_classrooms(db: Session = Depends(get_db)):
    """Retourne les classes triées par nom, avec leur enseignant et leur nombre d'élèves actifs."""
    return classroom_service.get_classrooms(db)


@router.post("", response_model=ClassroomResponse, status_code=201, summary="Créer une classe")
def create_classroom(data: ClassroomCreate, db: Session = Depends(get_db)):
    try:
        return classroom_service.create_classroom(db, data)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
