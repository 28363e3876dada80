"""
Router de rédaction des notes d'évolution (aperçu avant enregistrement de la séance).
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from fluentflow.database import get_db
from fluentflow.dependencies import get_current_user
from fluentflow.schemas.session import NoteGenerateRequest, NoteGenerateResponse
from fluentflow.services import session_service

router = APIRouter(
    prefix="/api/v1/notes",
    tags=["Notes"],
    dependencies=[Depends(get_current_user)],
)


@router.post("/generate", response_model=NoteGenerateResponse, summary="Rédiger les notes d'une séance")
def generate_notes(data: NoteGenerateRequest, db: Session = Depends(get_db)):
    """Retourne une note par objectif, indexée par goal_id. Rien n'est enregistré."""
    try:
        return session_service.generate_notes(db, data)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
