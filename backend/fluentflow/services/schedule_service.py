"""
Service métier pour le planning des séances et les jours fériés.
"""

import uuid
import logging
from datetime import date, timedelta
from typing import Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from fluentflow.config import settings
from fluentflow.models.schedule import Holiday, ScheduleEvent
from fluentflow.models.student import Student
from fluentflow.models.teacher import Classroom, Teacher
from fluentflow.schemas.schedule import (
    HolidayCreate,
    ScheduleEventCreate,
    ScheduleEventResponse,
    ScheduleEventUpdate,
    WeekGridResponse,
)
from fluentflow.schemas.student import StudentSummary
from fluentflow.schemas.teacher import ClassroomSummary, TeacherSummary
from fluentflow.services.schedule_grid import build_week_grid, slot_end_time, week_monday

logger = logging.getLogger(__name__)

# Colonnes NOT NULL : un null explicite dans un PATCH est ignoré
REQUIRED_EVENT_FIELDS = {"date", "start_time", "end_time", "location", "status"}


def get_events(db: Session, week_start: Optional[date] = None) -> List[ScheduleEventResponse]:
    """
    Retourne les créneaux triés par date puis heure de début.
    Si `week_start` est fourni, seuls les 7 jours de la semaine (à partir du lundi) sont retournés.
    """
    query = select(ScheduleEvent)
    if week_start is not None:
        monday = week_monday(week_start)
        query = query.where(
            ScheduleEvent.date >= monday,
            ScheduleEvent.date < monday + timedelta(days=7),
        )
    events = db.execute(
        query.order_by(ScheduleEvent.date, ScheduleEvent.start_time)
    ).scalars().all()
    return _to_responses(db, events)


def get_event(db: Session, event_id: uuid.UUID) -> Optional[ScheduleEventResponse]:
    event = db.get(ScheduleEvent, event_id)
    if event is None:
        return None
    return _to_responses(db, [event])[0]


def create_event(db: Session, data: ScheduleEventCreate) -> ScheduleEventResponse:
    """
    Crée un créneau au statut Upcoming.
    Sans heure de fin, le créneau dure 30 minutes.
    Lève une ValueError si l'enseignant ou la classe est introuvable.
    """
    if data.teacher_id is not None and db.get(Teacher, data.teacher_id) is None:
        raise ValueError("Enseignant introuvable.")
    if data.classroom_id is not None and db.get(Classroom, data.classroom_id) is None:
        raise ValueError("Classe introuvable.")

    end_time = data.end_time or slot_end_time(data.start_time)
    if end_time <= data.start_time:
        raise ValueError("Le créneau doit se terminer le jour même.")

    event = ScheduleEvent(
        date=data.date,
        start_time=data.start_time,
        end_time=end_time,
        location=data.location or settings.DEFAULT_LOCATION,
        student_ids=[str(sid) for sid in data.student_ids],
        teacher_id=data.teacher_id,
        classroom_id=data.classroom_id,
        session_type=data.session_type,
        status="Upcoming",
        recurrence_rule=data.recurrence_rule,
    )
    db.add(event)
    db.commit()
    db.refresh(event)
    logger.info("Créneau créé : %s %s-%s (%s)", event.date, event.start_time, event.end_time, event.id)
    return _to_responses(db, [event])[0]


def update_event(db: Session, event_id: uuid.UUID, data: ScheduleEventUpdate) -> Optional[ScheduleEventResponse]:
    """Met à jour les champs fournis (statut Seen/Missed, déplacement, participants)."""
    event = db.get(ScheduleEvent, event_id)
    if event is None:
        return None

    update_data = data.model_dump(exclude_unset=True)
    if update_data.get("student_ids") is not None:
        update_data["student_ids"] = [str(sid) for sid in update_data["student_ids"]]
    for field, value in update_data.items():
        if value is None and field in REQUIRED_EVENT_FIELDS:
            continue
        setattr(event, field, value)

    if event.end_time <= event.start_time:
        db.rollback()
        raise ValueError("L'heure de fin doit être postérieure à l'heure de début.")

    db.commit()
    db.refresh(event)
    return _to_responses(db, [event])[0]


def delete_event(db: Session, event_id: uuid.UUID) -> bool:
    event = db.get(ScheduleEvent, event_id)
    if event is None:
        return False
    db.delete(event)
    db.commit()
    return True


def get_week_grid(db: Session, week_start: date) -> WeekGridResponse:
    """Grille lundi–vendredi de la semaine contenant `week_start`, jours fériés inclus."""
    monday = week_monday(week_start)
    events = get_events(db, monday)
    holidays = get_holidays(db, monday, monday + timedelta(days=6))
    return build_week_grid(events, monday, holidays)


# --- Jours fériés ---

def get_holidays(db: Session, start: Optional[date] = None, end: Optional[date] = None) -> List[Holiday]:
    """Jours fériés triés par date, bornes incluses."""
    query = select(Holiday)
    if start is not None:
        query = query.where(Holiday.date >= start)
    if end is not None:
        query = query.where(Holiday.date <= end)
    return db.execute(query.order_by(Holiday.date)).scalars().all()


def create_holiday(db: Session, data: HolidayCreate) -> Holiday:
    holiday = Holiday(name=data.name, date=data.date)
    db.add(holiday)
    db.commit()
    db.refresh(holiday)
    return holiday


def delete_holiday(db: Session, holiday_id: uuid.UUID) -> bool:
    holiday = db.get(Holiday, holiday_id)
    if holiday is None:
        return False
    db.delete(holiday)
    db.commit()
    return True


def _parse_student_ids(raw: Iterable) -> List[uuid.UUID]:
    """Convertit la liste JSON stockée en UUID ; les valeurs illisibles sont ignorées."""
    ids = []
    for value in raw or []:
        try:
            ids.append(uuid.UUID(str(value)))
        except ValueError:
            logger.warning("student_id illisible ignoré : %r", value)
    return ids


def _to_responses(db: Session, events: List[ScheduleEvent]) -> List[ScheduleEventResponse]:
    """Construit les réponses en résolvant les noms d'élèves en une seule requête."""
    parsed = {event.id: _parse_student_ids(event.student_ids) for event in events}
    all_ids = {sid for ids in parsed.values() for sid in ids}

    names = {}
    if all_ids:
        rows = db.execute(
            select(Student.id, Student.name).where(Student.id.in_(all_ids))
        ).all()
        names = {row[0]: row[1] for row in rows}

    responses = []
    for event in events:
        student_ids = parsed[event.id]
        responses.append(ScheduleEventResponse(
            id=event.id,
            date=event.date,
            start_time=event.start_time,
            end_time=event.end_time,
            location=event.location,
            student_ids=student_ids,
            students=[StudentSummary(id=sid, name=names[sid]) for sid in student_ids if sid in names],
            teacher=TeacherSummary(id=event.teacher.id, name=event.teacher.name) if event.teacher else None,
            classroom=(
                ClassroomSummary(id=event.classroom.id, name=event.classroom.name, grade=event.classroom.grade)
                if event.classroom else None
            ),
            session_type=event.session_type,
            status=event.status,
            recurrence_rule=event.recurrence_rule,
        ))
    return responses
