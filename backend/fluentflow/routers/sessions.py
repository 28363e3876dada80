"""
Router pour la documentation des séances.
GET  /api/v1/sessions       : historique des séances (filtre élève, période, recherche libre)
POST /api/v1/sessions       : enregistrement (création ou mise à jour via event_id)
GET  /api/v1/sessions/{id}  : détail
"""

import uuid
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from fluentflow.database import get_db
from fluentflow.dependencies import get_current_user
from fluentflow.schemas.report import DateRange
from fluentflow.schemas.session import SessionResponse, SessionSave, SessionSaveResult
from fluentflow.services import report_service, session_service

router = APIRouter(
    prefix="/api/v1/sessions",
    tags=["Séances"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=List[SessionResponse], summary="Lister les séances")
def list_sessions(
    student_id: Optional[uuid.UUID] = Query(None),
    search: Optional[str] = Query(None, description="Notes, élève, activité ou domaine"),
    start: Optional[date] = Query(None, description="Début de période (inclus)"),
    end: Optional[date] = Query(None, description="Fin de période (incluse)"),
    date_range: Optional[DateRange] = Query(None, alias="range", description="Période glissante"),
    db: Session = Depends(get_db),
):
    """Retourne les séances de la plus récente à la plus ancienne, avec mesures et notes."""
    start, end = report_service.resolve_period(start, end, date_range)
    return session_service.get_sessions(db, student_id, search, start, end)


@router.post("", response_model=SessionSaveResult, status_code=201, summary="Enregistrer une séance")
def save_session(data: SessionSave, db: Session = Depends(get_db)):
    """
    Enregistre une séance avec ses mesures par objectif et la note de l'élève.

    - Avec `event_id` : la séance de ce créneau est créée ou mise à jour
    - Sans `notes` : la note est rédigée automatiquement à partir des mesures
    - Les objectifs non assignés à l'élève sont ignorés et listés dans `skipped_goal_ids`
    """
    try:
        return session_service.save_session(db, data)
    except ValueError as e:
        msg = str(e)
        if "introuvable" in msg:
            raise HTTPException(status_code=404, detail=msg)
        raise HTTPException(status_code=409, detail=msg)


@router.get("/{session_id}", response_model=SessionResponse, summary="Détail d'une séance")
def get_session(session_id: uuid.UUID, db: Session = Depends(get_db)):
    session = session_service.get_session(db, session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Séance introuvable.")
    return session
