"""
Router pour le planning des séances.
GET    /api/v1/schedule           : créneaux (optionnellement limités à une semaine)
GET    /api/v1/schedule/grid      : grille lundi–vendredi × créneaux de 30 minutes
POST   /api/v1/schedule           : création d'un créneau
GET    /api/v1/schedule/{id}      : détail
PATCH  /api/v1/schedule/{id}      : mise à jour (statut Seen / Missed, déplacement)
DELETE /api/v1/schedule/{id}      : suppression
"""

import uuid
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from fluentflow.database import get_db
from fluentflow.dependencies import get_current_user
from fluentflow.schemas.schedule import (
    ScheduleEventCreate,
    ScheduleEventResponse,
    ScheduleEventUpdate,
    WeekGridResponse,
)
from fluentflow.services import schedule_service

router = APIRouter(
    prefix="/api/v1/schedule",
    tags=["Planning"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=List[ScheduleEventResponse], summary="Lister les créneaux")
def list_events(
    week_start: Optional[date] = Query(None, description="Un jour de la semaine à afficher"),
    db: Session = Depends(get_db),
):
    """Retourne les créneaux triés par date puis heure, avec le nom des élèves."""
    return schedule_service.get_events(db, week_start)


@router.get("/grid", response_model=WeekGridResponse, summary="Grille hebdomadaire")
def get_week_grid(
    week_start: Optional[date] = Query(None, description="Un jour de la semaine (défaut : aujourd'hui)"),
    db: Session = Depends(get_db),
):
    return schedule_service.get_week_grid(db, week_start or date.today())


@router.post("", response_model=ScheduleEventResponse, status_code=201, summary="Créer un créneau")
def create_event(data: ScheduleEventCreate, db: Session = Depends(get_db)):
    """Crée un créneau au statut Upcoming. Sans heure de fin, il dure 30 minutes."""
    try:
        return schedule_service.create_event(db, data)
    except ValueError as e:
        msg = str(e)
        if "introuvable" in msg:
            raise HTTPException(status_code=404, detail=msg)
        raise HTTPException(status_code=400, detail=msg)


@router.get("/{event_id}", response_model=ScheduleEventResponse, summary="Détail d'un créneau")
def get_event(event_id: uuid.UUID, db: Session = Depends(get_db)):
    event = schedule_service.get_event(db, event_id)
    if event is None:
        raise HTTPException(status_code=404, detail="Créneau introuvable.")
    return event


@router.patch("/{event_id}", response_model=ScheduleEventResponse, summary="Modifier un créneau")
def update_event(event_id: uuid.UUID, data: ScheduleEventUpdate, db: Session = Depends(get_db)):
    try:
        event = schedule_service.update_event(db, event_id, data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if event is None:
        raise HTTPException(status_code=404, detail="Créneau introuvable.")
    return event


@router.delete("/{event_id}", status_code=204, summary="Supprimer un créneau")
def delete_event(event_id: uuid.UUID, db: Session = Depends(get_db)):
    success = schedule_service.delete_event(db, event_id)
    if not success:
        raise HTTPException(status_code=404, detail="Créneau introuvable.")
