"""
Service métier pour la documentation des séances.

Enregistrement d'une séance (POST /sessions) :
1. Créer la séance, ou la retrouver via son créneau (`event_id`) pour la mettre à jour
2. Pour chaque objectif saisi, retrouver l'assignation active de l'élève
   puis créer ou mettre à jour la mesure (séance × assignation × élève)
3. Créer ou mettre à jour la note de l'élève pour cette séance
4. Commit unique : un échec annule tout l'enregistrement
"""

import uuid
import logging
from datetime import date
from typing import Dict, List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from fluentflow.models.goal import GoalTemplate, StudentGoal
from fluentflow.models.schedule import ScheduleEvent
from fluentflow.models.session import Note, SessionGoalData, TherapySession
from fluentflow.models.student import Student
from fluentflow.schemas.session import (
    NoteGenerateRequest,
    NoteGenerateResponse,
    NoteResponse,
    SessionGoalDataResponse,
    SessionResponse,
    SessionSave,
    SessionSaveResult,
)
from fluentflow.services.note_generator import generate_paragraph_note

logger = logging.getLogger(__name__)

NOTE_SEPARATOR = "\n\n"


def save_session(db: Session, data: SessionSave) -> SessionSaveResult:
    """
    Crée ou met à jour une séance avec ses mesures et sa note.

    Les objectifs non assignés (ou plus assignés) à l'élève sont ignorés :
    ils sont journalisés et renvoyés dans `skipped_goal_ids`.
    Lève une ValueError si l'élève ou le créneau est introuvable.
    """
    student = db.get(Student, data.student_id)
    if student is None:
        raise ValueError("Élève introuvable.")

    session = _get_or_create_session(db, data)

    skipped: List[uuid.UUID] = []
    recorded: List[Tuple[StudentGoal, object]] = []
    for goal_data in data.goal_data:
        student_goal = db.execute(
            select(StudentGoal).where(
                StudentGoal.student_id == data.student_id,
                StudentGoal.goal_id == goal_data.goal_id,
                StudentGoal.is_active.is_(True),
            )
        ).scalar()

        if student_goal is None:
            logger.warning(
                "Séance %s : objectif %s non assigné à l'élève %s, mesure ignorée",
                session.id, goal_data.goal_id, data.student_id,
            )
            skipped.append(goal_data.goal_id)
            continue

        _upsert_goal_data(db, session.id, student_goal.id, data.student_id, goal_data)
        recorded.append((student_goal, goal_data))

    if data.notes:
        contents = [text.strip() for text in data.notes.values() if text and text.strip()]
    else:
        contents = [
            generate_paragraph_note(student.name, data, goal_data, student_goal.goal)
            for student_goal, goal_data in recorded
        ]
    if contents:
        _upsert_note(db, session.id, data.student_id, NOTE_SEPARATOR.join(contents))

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValueError("Conflit lors de l'enregistrement de la séance.")
    db.refresh(session)

    logger.info(
        "Séance enregistrée : %s (élève %s) : %d mesure(s), %d ignorée(s)",
        session.id, data.student_id, len(recorded), len(skipped),
    )
    return SessionSaveResult(session=_to_response(session), skipped_goal_ids=skipped)


def get_sessions(
    db: Session,
    student_id: Optional[uuid.UUID] = None,
    search: Optional[str] = None,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> List[SessionResponse]:
    """
    Retourne les séances, de la plus récente à la plus ancienne.
    - `student_id` : séances auxquelles l'élève a participé
    - `search` : sous-chaîne dans les notes, le nom de l'élève, l'activité ou le domaine
    - `start` / `end` : bornes de date incluses
    """
    query = select(TherapySession)
    if start is not None:
        query = query.where(TherapySession.date >= start)
    if end is not None:
        query = query.where(TherapySession.date <= end)
    sessions = db.execute(
        query.order_by(TherapySession.date.desc(), TherapySession.created_at.desc())
    ).scalars().all()

    responses = [_to_response(s) for s in sessions]
    if student_id is not None:
        responses = [r for r in responses if student_id in r.student_ids]
    if search:
        responses = [r for r in responses if _matches(r, search.lower())]
    return responses


def get_session(db: Session, session_id: uuid.UUID) -> Optional[SessionResponse]:
    session = db.get(TherapySession, session_id)
    if session is None:
        return None
    return _to_response(session)


def generate_notes(db: Session, data: NoteGenerateRequest) -> NoteGenerateResponse:
    """
    Rédige une note par objectif saisi, sans rien enregistrer.
    Les objectifs absents de la banque sont renvoyés dans `skipped_goal_ids`.
    """
    student = db.get(Student, data.student_id)
    if student is None:
        raise ValueError("Élève introuvable.")

    notes: Dict[uuid.UUID, str] = {}
    skipped: List[uuid.UUID] = []
    for goal_data in data.goal_data:
        goal = db.get(GoalTemplate, goal_data.goal_id)
        if goal is None:
            skipped.append(goal_data.goal_id)
            continue
        notes[goal_data.goal_id] = generate_paragraph_note(student.name, data, goal_data, goal)

    return NoteGenerateResponse(notes=notes, skipped_goal_ids=skipped)


def _get_or_create_session(db: Session, data: SessionSave) -> TherapySession:
    """Séance liée au créneau si `event_id` est fourni (upsert), nouvelle séance sinon."""
    student_ids = [str(data.student_id)]

    if data.event_id is not None:
        if db.get(ScheduleEvent, data.event_id) is None:
            raise ValueError("Créneau introuvable.")

        session = db.execute(
            select(TherapySession).where(TherapySession.event_id == data.event_id)
        ).scalar()
        if session is not None:
            session.date = data.date
            # Séance de groupe : chaque élève enregistré s'ajoute aux participants
            if str(data.student_id) not in (session.student_ids or []):
                session.student_ids = [*(session.student_ids or []), str(data.student_id)]
            return session

    session = TherapySession(
        id=uuid.uuid4(),
        event_id=data.event_id,
        date=data.date,
        student_ids=student_ids,
    )
    db.add(session)
    db.flush()  # Obtenir l'ID avant les mesures
    return session


def _upsert_goal_data(
    db: Session,
    session_id: uuid.UUID,
    student_goal_id: uuid.UUID,
    student_id: uuid.UUID,
    goal_data,
) -> SessionGoalData:
    values = {
        "accuracy": goal_data.accuracy,
        "trials": goal_data.trials,
        "prompt_level": goal_data.prompt_level,
        "prompt_types": goal_data.prompt_types or "",
        "activity": goal_data.activity,
        "utterance": goal_data.utterance,
        "observations": goal_data.observations,
    }

    row = db.execute(
        select(SessionGoalData).where(
            SessionGoalData.session_id == session_id,
            SessionGoalData.student_goal_id == student_goal_id,
            SessionGoalData.student_id == student_id,
        )
    ).scalar()

    if row is None:
        row = SessionGoalData(
            session_id=session_id,
            student_goal_id=student_goal_id,
            student_id=student_id,
            **values,
        )
        db.add(row)
        db.flush()
    else:
        for field, value in values.items():
            setattr(row, field, value)
    return row


def _upsert_note(db: Session, session_id: uuid.UUID, student_id: uuid.UUID, content: str) -> Note:
    note = db.execute(
        select(Note).where(Note.session_id == session_id, Note.student_id == student_id)
    ).scalar()

    if note is None:
        note = Note(session_id=session_id, student_id=student_id, content=content)
        db.add(note)
    else:
        note.content = content
    return note


def _matches(session: SessionResponse, needle: str) -> bool:
    for note in session.notes:
        if needle in note.content.lower() or needle in note.student_name.lower():
            return True
    for data in session.goal_data:
        if needle in data.activity.lower() or needle in data.target_area.lower():
            return True
    return False


def _to_response(session: TherapySession) -> SessionResponse:
    """Construit la réponse avec les mesures (objectif, élève) et les notes."""
    goal_data = [
        SessionGoalDataResponse(
            id=row.id,
            student_id=row.student_id,
            student_name=row.student.name,
            student_goal_id=row.student_goal_id,
            goal_id=row.student_goal.goal_id,
            target_area=row.student_goal.goal.target_area,
            category=row.student_goal.goal.category,
            accuracy=row.accuracy,
            trials=row.trials,
            prompt_level=row.prompt_level,
            prompt_types=row.prompt_types or "",
            activity=row.activity,
            utterance=row.utterance,
            observations=row.observations,
        )
        for row in session.goal_data
    ]
    notes = [
        NoteResponse(
            id=note.id,
            student_id=note.student_id,
            student_name=note.student.name,
            content=note.content,
        )
        for note in session.notes
    ]
    return SessionResponse(
        id=session.id,
        date=session.date,
        event_id=session.event_id,
        student_ids=[uuid.UUID(str(sid)) for sid in session.student_ids or []],
        goal_data=goal_data,
        notes=notes,
        created_at=session.created_at,
    )
