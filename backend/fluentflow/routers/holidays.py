"""
Router pour les jours fériés (affichés dans la grille du planning).
"""

import uuid
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from fluentflow.database import get_db
from fluentflow.dependencies import get_current_user
from fluentflow.schemas.schedule import HolidayCreate, HolidayResponse
from fluentflow.services import schedule_service

router = APIRouter(
    prefix="/api/v1/holidays",
    tags=["Jours fériés"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=List[HolidayResponse], summary="Lister les jours fériés")
def list_holidays(
    start: Optional[date] = Query(None),
    end: Optional[date] = Query(None),
    db: Session = Depends(get_db),
):
    return schedule_service.get_holidays(db, start, end)


@router.post("", response_model=HolidayResponse, status_code=201, summary="Ajouter un jour férié")
def create_holiday(data: HolidayCreate, db: Session = Depends(get_db)):
    return schedule_service.create_holiday(db, data)


@router.delete("/{holiday_id}", status_code=204, summary="Supprimer un jour férié")
def delete_holiday(holiday_id: uuid.UUID, db: Session = Depends(get_db)):
    success = schedule_service.delete_holiday(db, holiday_id)
    if not success:
        raise HTTPException(status_code=404, detail="Jour férié introuvable.")
