"""
Router des rapports de progression.
"""

import uuid
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from fluentflow.database import get_db
from fluentflow.dependencies import get_current_user
from fluentflow.schemas.report import (
    DateRange,
    ReportOverviewResponse,
    StudentProgressResponse,
    TierSuggestionResponse,
)
from fluentflow.services import report_service

router = APIRouter(
    prefix="/api/v1/reports",
    tags=["Rapports"],
    dependencies=[Depends(get_current_user)],
)


@router.get("/tier", response_model=TierSuggestionResponse, summary="Suggestion de palier")
def get_tier(
    accuracy: float = Query(..., ge=0, le=100),
    trials: int = Query(..., ge=0),
    sessions: int = Query(..., ge=0),
):
    """Advance / Refine / Maintain selon la précision, le nombre d'essais et de séances."""
    return TierSuggestionResponse(
        accuracy=accuracy,
        trials=trials,
        sessions=sessions,
        tier=report_service.suggest_tier(accuracy, trials, sessions),
    )


@router.get("/overview", response_model=ReportOverviewResponse, summary="Vue d'ensemble")
def get_overview(
    start: Optional[date] = Query(None, description="Début de période (inclus)"),
    end: Optional[date] = Query(None, description="Fin de période (incluse)"),
    date_range: Optional[DateRange] = Query(None, alias="range", description="Période glissante"),
    db: Session = Depends(get_db),
):
    """Compteurs du tableau de bord et agrégats, limités à la période demandée."""
    start, end = report_service.resolve_period(start, end, date_range)
    return report_service.get_overview(db, start, end)


@router.get("/students/{student_id}", response_model=StudentProgressResponse, summary="Progression d'un élève")
def get_student_progress(
    student_id: uuid.UUID,
    start: Optional[date] = Query(None),
    end: Optional[date] = Query(None),
    date_range: Optional[DateRange] = Query(None, alias="range"),
    db: Session = Depends(get_db),
):
    start, end = report_service.resolve_period(start, end, date_range)
    progress = report_service.get_student_progress(db, student_id, start, end)
    if progress is None:
        raise HTTPException(status_code=404, detail="Élève introuvable.")
    return progress
