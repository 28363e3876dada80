"""
Router pour les élèves.
GET    /api/v1/students                      : élèves actifs (recherche optionnelle)
POST   /api/v1/students                      : création
GET    /api/v1/students/{id}                 : détail
PATCH  /api/v1/students/{id}                 : mise à jour partielle
DELETE /api/v1/students/{id}                 : suppression logique (is_active = False)
GET    /api/v1/students/{id}/goals           : objectifs actifs
POST   /api/v1/students/{id}/goals           : assignation d'objectifs
DELETE /api/v1/students/{id}/goals/{goal_id} : retrait d'un objectif
"""

import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from fluentflow.database import get_db
from fluentflow.dependencies import get_current_user
from fluentflow.schemas.goal import StudentGoalResponse, StudentGoalsAssign
from fluentflow.schemas.student import StudentCreate, StudentResponse, StudentUpdate
from fluentflow.services import student_service

router = APIRouter(
    prefix="/api/v1/students",
    tags=["Élèves"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=List[StudentResponse], summary="Lister les élèves actifs")
def list_students(
    search: Optional[str] = Query(None, description="Filtre sur le nom ou le niveau"),
    db: Session = Depends(get_db),
):
    """Retourne les élèves actifs triés par nom. Les élèves désactivés sont exclus."""
    return student_service.list_students(db, search)


@router.post("", response_model=StudentResponse, status_code=201, summary="Créer un élève")
def create_student(data: StudentCreate, db: Session = Depends(get_db)):
    try:
        return student_service.create_student(db, data)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{student_id}", response_model=StudentResponse, summary="Détail d'un élève")
def get_student(student_id: uuid.UUID, db: Session = Depends(get_db)):
    student = student_service.get_student(db, student_id)
    if student is None:
        raise HTTPException(status_code=404, detail="Élève introuvable.")
    return student


@router.patch("/{student_id}", response_model=StudentResponse, summary="Modifier un élève")
def update_student(student_id: uuid.UUID, data: StudentUpdate, db: Session = Depends(get_db)):
    """Met à jour les champs fournis d'un élève. Les champs absents ne sont pas modifiés."""
    try:
        student = student_service.update_student(db, student_id, data)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    if student is None:
        raise HTTPException(status_code=404, detail="Élève introuvable.")
    return student


@router.delete("/{student_id}", response_model=StudentResponse, summary="Désactiver un élève")
def delete_student(student_id: uuid.UUID, db: Session = Depends(get_db)):
    """
    Suppression logique : l'élève n'apparaît plus dans les listes,
    mais ses séances et notes sont conservées pour l'historique.
    """
    student = student_service.deactivate_student(db, student_id)
    if student is None:
        raise HTTPException(status_code=404, detail="Élève introuvable.")
    return student


# --- Objectifs de l'élève ---

@router.get("/{student_id}/goals", response_model=List[StudentGoalResponse], summary="Objectifs actifs")
def list_student_goals(student_id: uuid.UUID, db: Session = Depends(get_db)):
    if student_service.get_student(db, student_id) is None:
        raise HTTPException(status_code=404, detail="Élève introuvable.")
    return student_service.list_student_goals(db, student_id)


@router.post("/{student_id}/goals", response_model=List[StudentGoalResponse], summary="Assigner des objectifs")
def assign_goals(student_id: uuid.UUID, data: StudentGoalsAssign, db: Session = Depends(get_db)):
    """Assigne des objectifs de la banque. Les objectifs déjà actifs sont ignorés."""
    try:
        return student_service.assign_goals(db, student_id, data)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{student_id}/goals/{goal_id}", status_code=204, summary="Retirer un objectif")
def remove_goal(student_id: uuid.UUID, goal_id: uuid.UUID, db: Session = Depends(get_db)):
    """Désactive l'assignation ; les mesures déjà enregistrées sont conservées."""
    success = student_service.deactivate_goal(db, student_id, goal_id)
    if not success:
        raise HTTPException(status_code=404, detail="Objectif actif introuvable pour cet élève.")
