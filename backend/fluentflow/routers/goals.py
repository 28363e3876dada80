"""
Router pour la banque d'objectifs.
"""

import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from fluentflow.database import get_db
from fluentflow.dependencies import get_current_user
from fluentflow.schemas.goal import GoalTemplateCreate, GoalTemplateResponse
from fluentflow.services import goal_service

router = APIRouter(
    prefix="/api/v1/goals",
    tags=["Objectifs"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=List[GoalTemplateResponse], summary="Lister les objectifs")
def list_goals(
    target_area: Optional[str] = Query(None, description="Domaine exact (ex. Articulation)"),
    search: Optional[str] = Query(None, description="Recherche libre"),
    db: Session = Depends(get_db),
):
    """Retourne les objectifs triés par domaine puis catégorie."""
    return goal_service.get_goals(db, target_area, search)


@router.get("/target-areas", response_model=List[str], summary="Lister les domaines")
def list_target_areas(db: Session = Depends(get_db)):
    return goal_service.get_target_areas(db)


@router.post("", response_model=GoalTemplateResponse, status_code=201, summary="Créer un objectif")
def create_goal(data: GoalTemplateCreate, db: Session = Depends(get_db)):
    return goal_service.create_goal(db, data)


@router.get("/{goal_id}", response_model=GoalTemplateResponse, summary="Détail d'un objectif")
def get_goal(goal_id: uuid.UUID, db: Session = Depends(get_db)):
    goal = goal_service.get_goal(db, goal_id)
    if goal is None:
        raise HTTPException(status_code=404, detail="Objectif introuvable.")
    return goal
